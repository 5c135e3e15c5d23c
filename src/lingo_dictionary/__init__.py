"""Local-first spelling dictionary with versioned remote sync and fuzzy corrections."""

from __future__ import annotations

from lingo_dictionary.manager import DictionaryManager, open_manager

__all__ = ["DictionaryManager", "open_manager"]
