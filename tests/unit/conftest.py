"""Unit-specific fixtures (no I/O beyond in-memory SQLite)."""

from __future__ import annotations

import asyncio

import aiosqlite
import pytest

from lingo_dictionary.errors import LingoError
from lingo_dictionary.manager import DictionaryManager
from lingo_dictionary.models.dictionary import APIDictionary, SuggestedWord
from lingo_dictionary.repository import DictionaryRepository
from lingo_dictionary.store import SqliteStore
from lingo_dictionary.sync import SyncCoordinator

STORAGE_KEY = "lingoDictionary"


class FakeSource:
    """In-memory DictionarySource that records calls and can be made to fail or block."""

    def __init__(self, dictionary: APIDictionary) -> None:
        self.dictionary = dictionary
        self.latest_id = dictionary.id
        self.accepted: set[str] | None = None  # None accepts every submitted word
        self.fetch_error: LingoError | None = None
        self.check_error: LingoError | None = None
        self.suggest_error: LingoError | None = None
        self.gate: asyncio.Event | None = None
        self.fetch_calls = 0
        self.checked_ids: list[int] = []
        self.submitted: list[list[str]] = []

    async def fetch_latest(self, language: str) -> APIDictionary:
        self.fetch_calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.dictionary

    async def is_latest(self, dictionary_id: int) -> bool:
        self.checked_ids.append(dictionary_id)
        if self.check_error is not None:
            raise self.check_error
        return dictionary_id == self.latest_id

    async def suggest_words(self, language: str, words: list[str]) -> list[SuggestedWord]:
        self.submitted.append(list(words))
        if self.suggest_error is not None:
            raise self.suggest_error
        return [
            SuggestedWord(word=word)
            for word in words
            if self.accepted is None or word in self.accepted
        ]


@pytest.fixture()
async def store():
    """In-memory SQLite store for unit tests."""
    async with aiosqlite.connect(":memory:") as db:
        s = SqliteStore(db)
        await s.init_db()
        yield s


@pytest.fixture()
def repository(store: SqliteStore) -> DictionaryRepository:
    return DictionaryRepository(store, STORAGE_KEY)


@pytest.fixture()
def source(api_dictionary: APIDictionary) -> FakeSource:
    return FakeSource(api_dictionary)


@pytest.fixture()
def coordinator(repository: DictionaryRepository, source: FakeSource) -> SyncCoordinator:
    return SyncCoordinator(repository, source, "Luganda")


@pytest.fixture()
def manager(repository: DictionaryRepository, coordinator: SyncCoordinator) -> DictionaryManager:
    return DictionaryManager(repository, coordinator)
