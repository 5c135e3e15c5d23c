from __future__ import annotations

from lingo_dictionary.models.dictionary import (
    APIDictionary,
    GlobalSuggestion,
    PersistedDictionary,
    SuggestedWord,
    WrongWordSuggestion,
)

__all__ = [
    # wire / bundled payloads
    "APIDictionary",
    "SuggestedWord",
    # persisted record
    "GlobalSuggestion",
    "PersistedDictionary",
    # results
    "WrongWordSuggestion",
]
