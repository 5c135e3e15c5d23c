"""Integration test fixtures.

Sessions are opened with ``open_manager`` against a SQLite file under
``tmp_path`` and an API mocked with respx.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from lingo_dictionary.config import Settings

if TYPE_CHECKING:
    from pathlib import Path

API = "https://dictionary.test/api"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        api={"url": API},
        store={"db_path": str(tmp_path / "data" / "store.db")},
        dictionary={"language": "Luganda"},
    )


@pytest.fixture()
def offline_settings(tmp_path: Path) -> Settings:
    return Settings(
        store={"db_path": str(tmp_path / "store.db")},
        dictionary={"language": "Luganda", "use_remote_dictionary": False},
    )
