"""Shared fixtures: sample dictionary payloads and records."""

from __future__ import annotations

import pytest

from lingo_dictionary.models.dictionary import (
    APIDictionary,
    GlobalSuggestion,
    PersistedDictionary,
)


@pytest.fixture()
def api_dictionary() -> APIDictionary:
    return APIDictionary(id=1, words=["mu", "ne"], language="Luganda")


@pytest.fixture()
def sample_record() -> PersistedDictionary:
    return PersistedDictionary(
        id=3,
        words=["mu", "ne", "kati"],
        language="Luganda",
        local_words=["webale"],
        global_suggestions=[
            GlobalSuggestion(word="ssebo", synced=True),
            GlobalSuggestion(word="nnyo", synced=False),
        ],
    )
