"""Unit tests for lingo_dictionary.manager."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from lingo_dictionary.errors import ErrorCode, LingoError
from lingo_dictionary.models.dictionary import GlobalSuggestion, PersistedDictionary

if TYPE_CHECKING:
    from conftest import FakeSource

    from lingo_dictionary.manager import DictionaryManager
    from lingo_dictionary.repository import DictionaryRepository


@pytest.fixture()
async def seeded(repository: DictionaryRepository, source: FakeSource) -> PersistedDictionary:
    """A stored, up-to-date record with ``words == ["mu"]``."""
    record = PersistedDictionary(id=1, words=["mu"], language="Luganda")
    await repository.save(record)
    source.latest_id = 1
    return record


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestStart:
    async def test_no_dictionary_before_start(self, manager: DictionaryManager) -> None:
        assert manager.has_dictionary() is False
        assert manager.dictionary is None

    async def test_start_downloads_when_store_is_empty(
        self, manager: DictionaryManager, source: FakeSource
    ) -> None:
        await manager.start()
        assert manager.has_dictionary() is False

        await manager.wait_for_sync()

        assert manager.has_dictionary() is True
        assert source.fetch_calls == 1
        assert await manager.check_spellings(["mu", "xx"]) == ["xx"]

    async def test_start_loads_stored_dictionary(
        self, manager: DictionaryManager, seeded: PersistedDictionary
    ) -> None:
        await manager.start()
        assert manager.has_dictionary() is True
        assert manager.dictionary is not None
        assert manager.dictionary.record == seeded
        await manager.wait_for_sync()

    async def test_dictionary_updating_tracks_refresh(
        self, manager: DictionaryManager, source: FakeSource
    ) -> None:
        source.gate = asyncio.Event()
        await manager.start()
        assert manager.dictionary_updating is True

        await asyncio.sleep(0)
        assert manager.dictionary_updating is True

        source.gate.set()
        await manager.wait_for_sync()
        assert manager.dictionary_updating is False

    async def test_transport_failure_leaves_no_dictionary(
        self, manager: DictionaryManager, source: FakeSource
    ) -> None:
        source.fetch_error = LingoError(ErrorCode.API_UNAVAILABLE, "timeout", recoverable=True)
        await manager.start()
        await manager.wait_for_sync()

        assert manager.has_dictionary() is False
        assert manager.dictionary_updating is False

    async def test_wait_for_sync_raises_configuration_errors(
        self, manager: DictionaryManager, source: FakeSource
    ) -> None:
        source.fetch_error = LingoError(
            ErrorCode.LANGUAGE_NOT_AVAILABLE, "Requested language not available.", recoverable=False
        )
        await manager.start()

        with pytest.raises(LingoError):
            await manager.wait_for_sync()
        assert manager.dictionary_updating is False

    async def test_aclose_logs_configuration_errors(
        self, manager: DictionaryManager, source: FakeSource
    ) -> None:
        source.fetch_error = LingoError(
            ErrorCode.LANGUAGE_NOT_AVAILABLE, "Requested language not available.", recoverable=False
        )
        await manager.start()
        await manager.aclose()  # does not raise


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestQueries:
    async def test_check_spellings_keeps_input_order(
        self, manager: DictionaryManager, seeded: PersistedDictionary
    ) -> None:
        await manager.start()
        await manager.add_word_local("ne")
        assert await manager.check_spellings(["zz", "mu", "aa", "ne", "zz"]) == ["zz", "aa", "zz"]
        await manager.wait_for_sync()

    async def test_suggest_corrections(
        self, manager: DictionaryManager, repository: DictionaryRepository, source: FakeSource
    ) -> None:
        await repository.save(PersistedDictionary(id=1, words=["the", "ten", "tea"], language="en"))
        await manager.start()

        result = manager.suggest_corrections("teh")

        assert result.wrong == "teh"
        assert result.suggestions
        assert set(result.suggestions) <= {"the", "ten", "tea"}
        await manager.wait_for_sync()

    async def test_suggestions_include_local_words(
        self, manager: DictionaryManager, seeded: PersistedDictionary
    ) -> None:
        await manager.start()
        await manager.add_word_local("webale")
        assert "webale" in manager.suggest_corrections("webal").suggestions
        await manager.wait_for_sync()


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


class TestMutations:
    async def test_add_word_local(
        self, manager: DictionaryManager, seeded: PersistedDictionary
    ) -> None:
        await manager.start()
        await manager.add_word_local("ne")

        assert manager.dictionary is not None
        assert manager.dictionary.local_words == ["ne"]
        assert await manager.check_spellings(["ne"]) == []
        await manager.wait_for_sync()

    async def test_add_word_local_is_idempotent(
        self,
        manager: DictionaryManager,
        repository: DictionaryRepository,
        seeded: PersistedDictionary,
    ) -> None:
        await manager.start()
        await manager.add_word_local("ne")
        await manager.add_word_local("ne")

        record = await repository.load_record()
        assert record is not None
        assert record.local_words == ["ne"]
        await manager.wait_for_sync()

    async def test_add_word_global_appends_unsynced_entry(
        self, manager: DictionaryManager, seeded: PersistedDictionary
    ) -> None:
        await manager.start()
        await manager.wait_for_sync()
        await manager.add_word_global("kati")
        await manager.add_word_global("mu")

        assert manager.dictionary is not None
        assert manager.dictionary.global_suggestions == [
            GlobalSuggestion(word="kati", synced=False),
            GlobalSuggestion(word="mu", synced=False),
        ]
        assert await manager.check_spellings(["kati"]) == []

    async def test_pushed_suggestion_marked_synced_on_next_start(
        self,
        manager: DictionaryManager,
        repository: DictionaryRepository,
        source: FakeSource,
        seeded: PersistedDictionary,
    ) -> None:
        await manager.start()
        await manager.wait_for_sync()
        await manager.add_word_global("kati")
        await manager.add_word_global("kati")
        assert source.submitted == []

        await manager.start()
        await manager.wait_for_sync()

        assert source.submitted == [["kati", "kati"]]
        assert manager.dictionary is not None
        assert [s.synced for s in manager.dictionary.global_suggestions] == [True, True]

    async def test_clear_local_dictionary(
        self, manager: DictionaryManager, seeded: PersistedDictionary
    ) -> None:
        await manager.start()
        await manager.wait_for_sync()
        await manager.add_word_local("ne")
        await manager.add_word_global("kati")

        await manager.clear_local_dictionary()

        assert manager.dictionary is not None
        assert manager.dictionary.local_words == []
        assert manager.dictionary.words == ["mu"]
        assert manager.dictionary.global_suggestions == [
            GlobalSuggestion(word="kati", synced=False)
        ]
        assert await manager.check_spellings(["ne"]) == ["ne"]

    async def test_mutation_without_dictionary_is_noop(
        self, manager: DictionaryManager, repository: DictionaryRepository
    ) -> None:
        await manager.add_word_local("ne")
        await manager.add_word_global("kati")
        await manager.clear_local_dictionary()

        assert manager.has_dictionary() is False
        assert await repository.load_record() is None

    async def test_retry_dictionary_download(
        self, manager: DictionaryManager, source: FakeSource, seeded: PersistedDictionary
    ) -> None:
        await manager.start()
        await manager.wait_for_sync()
        assert source.fetch_calls == 0

        await manager.retry_dictionary_download()

        assert source.fetch_calls == 1
        assert manager.dictionary is not None
        assert manager.dictionary.words == ["mu", "ne"]

    async def test_retry_twice_in_succession_fetches_once(
        self, manager: DictionaryManager, source: FakeSource, seeded: PersistedDictionary
    ) -> None:
        await manager.start()
        await manager.wait_for_sync()
        source.gate = asyncio.Event()

        first = asyncio.create_task(manager.retry_dictionary_download())
        second = asyncio.create_task(manager.retry_dictionary_download())
        await asyncio.sleep(0)
        assert manager.dictionary_updating is True
        source.gate.set()
        await asyncio.gather(first, second)

        assert source.fetch_calls == 1
        assert manager.dictionary_updating is False
