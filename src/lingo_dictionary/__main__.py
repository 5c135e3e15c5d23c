from __future__ import annotations

import sys

from lingo_dictionary.cli import main

sys.exit(main())
