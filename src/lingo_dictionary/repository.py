"""Dictionary repository: persisted record <-> runtime view.

The runtime view is never patched in place. Every mutation builds a new
record from the stored one, writes it, and re-reads it, so the membership
set and the similarity index are always derived from what is durably
stored.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from lingo_dictionary.index import SimilarityIndex
from lingo_dictionary.models.dictionary import GlobalSuggestion, PersistedDictionary

if TYPE_CHECKING:
    from lingo_dictionary.models.dictionary import APIDictionary
    from lingo_dictionary.store import StoreProtocol

log = structlog.get_logger()

RecordChange = Callable[[PersistedDictionary | None], PersistedDictionary | None]


@dataclass(frozen=True)
class Dictionary:
    """Persisted record plus the in-memory lookup structures derived from it."""

    record: PersistedDictionary

    # words ∪ local_words ∪ global_suggestions[*].word
    indexed_words: frozenset[str]

    spell_checker: SimilarityIndex

    @property
    def id(self) -> int:
        return self.record.id

    @property
    def language(self) -> str:
        return self.record.language

    @property
    def words(self) -> list[str]:
        return self.record.words

    @property
    def local_words(self) -> list[str]:
        return self.record.local_words

    @property
    def global_suggestions(self) -> list[GlobalSuggestion]:
        return self.record.global_suggestions


def vocabulary(record: PersistedDictionary) -> list[str]:
    """Union of every word the record knows about, first occurrence order."""
    words = [
        *record.words,
        *record.local_words,
        *(suggestion.word for suggestion in record.global_suggestions),
    ]
    return list(dict.fromkeys(words))


def build_dictionary(record: PersistedDictionary) -> Dictionary:
    words = vocabulary(record)
    return Dictionary(
        record=record,
        indexed_words=frozenset(words),
        spell_checker=SimilarityIndex(words),
    )


# ----------------------------------------------------------------------
# Record transformations. Each one owns a single field of the record.
# ----------------------------------------------------------------------


def merge_api_dictionary(
    current: PersistedDictionary | None, fetched: APIDictionary
) -> PersistedDictionary:
    """Lay a fetched version over the stored record, keeping user state."""
    if current is None:
        return PersistedDictionary(id=fetched.id, words=fetched.words, language=fetched.language)
    return current.model_copy(
        update={"id": fetched.id, "words": fetched.words, "language": fetched.language}
    )


def with_local_word(record: PersistedDictionary, word: str) -> PersistedDictionary:
    if word in record.local_words:
        return record
    return record.model_copy(update={"local_words": [*record.local_words, word]})


def with_global_suggestion(record: PersistedDictionary, word: str) -> PersistedDictionary:
    suggestions = [*record.global_suggestions, GlobalSuggestion(word=word, synced=False)]
    return record.model_copy(update={"global_suggestions": suggestions})


def with_synced_suggestions(
    record: PersistedDictionary, words: Iterable[str]
) -> PersistedDictionary:
    """Mark every suggestion whose word was confirmed as synced.

    Matching is by word, so all unsynced entries sharing a confirmed word
    flip together. Already-synced entries are never reset.
    """
    confirmed = set(words)
    suggestions = [
        GlobalSuggestion(word=s.word, synced=s.synced or s.word in confirmed)
        for s in record.global_suggestions
    ]
    return record.model_copy(update={"global_suggestions": suggestions})


def without_local_words(record: PersistedDictionary) -> PersistedDictionary:
    return record.model_copy(update={"local_words": []})


class DictionaryRepository:
    """Loads and saves the single persisted dictionary record."""

    def __init__(self, store: StoreProtocol, storage_key: str) -> None:
        self._store = store
        self._storage_key = storage_key
        self._write_lock = asyncio.Lock()

    async def load_record(self) -> PersistedDictionary | None:
        raw = await self._store.get(self._storage_key)
        if raw is None:
            return None
        try:
            return PersistedDictionary.model_validate_json(raw)
        except ValidationError:
            # No schema migration exists; an unreadable record is treated as
            # absent and replaced by the next successful fetch.
            log.warning("dictionary_record_invalid", key=self._storage_key, exc_info=True)
            return None

    async def load(self) -> Dictionary | None:
        """Read the stored record and rebuild its runtime view. ``None`` if absent."""
        record = await self.load_record()
        if record is None:
            return None
        return build_dictionary(record)

    async def save(self, record: PersistedDictionary) -> Dictionary | None:
        """Write ``record`` and return the view re-read from the store."""
        await self._store.set(self._storage_key, record.to_json())
        return await self.load()

    async def update(self, change: RecordChange) -> Dictionary | None:
        """Serialized read-modify-write of the stored record.

        ``change`` receives the currently stored record (or ``None``) and
        returns the record to save, or ``None`` to leave the store untouched.
        """
        async with self._write_lock:
            current = await self.load_record()
            updated = change(current)
            if updated is None:
                return None if current is None else build_dictionary(current)
            return await self.save(updated)
