"""Dictionary manager: the single entry point for spell-check consumers.

The manager is the session object. It holds the current runtime view and
the sync coordinator, and ``start()`` hydrates the view from the store and
schedules the freshness check and the suggestion push as two independent
tasks.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import aiosqlite
import structlog

from lingo_dictionary.client import build_http_client
from lingo_dictionary.index import DEFAULT_MIN_SCORE
from lingo_dictionary.models.dictionary import WrongWordSuggestion
from lingo_dictionary.repository import (
    DictionaryRepository,
    with_global_suggestion,
    with_local_word,
    without_local_words,
)
from lingo_dictionary.sources import build_source
from lingo_dictionary.store import SqliteStore
from lingo_dictionary.sync import SyncCoordinator

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable, Coroutine, Iterable
    from typing import Any

    from lingo_dictionary.config import Settings
    from lingo_dictionary.models.dictionary import PersistedDictionary
    from lingo_dictionary.repository import Dictionary

log = structlog.get_logger()


class DictionaryManager:
    def __init__(
        self,
        repository: DictionaryRepository,
        coordinator: SyncCoordinator,
        min_similarity_score: float = DEFAULT_MIN_SCORE,
    ) -> None:
        self._repository = repository
        self._coordinator = coordinator
        self._min_similarity_score = min_similarity_score
        self._dictionary: Dictionary | None = None
        self._refresh_task: asyncio.Task[None] | None = None
        self._tasks: list[asyncio.Task[None]] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Load the stored dictionary and kick off the startup sync tasks."""
        self._dictionary = await self._repository.load()
        log.info(
            "dictionary_loaded",
            present=self._dictionary is not None,
            dictionary_id=self._dictionary.id if self._dictionary else None,
        )
        self._refresh_task = self._schedule(self._coordinator.refresh)
        self._schedule(self._coordinator.push_suggestions)

    async def wait_for_sync(self) -> None:
        """Wait for scheduled sync tasks, re-raising the first non-recoverable error."""
        tasks, self._tasks = self._tasks, []
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result

    async def aclose(self) -> None:
        """Let in-flight sync tasks finish. Their errors are logged, not raised."""
        tasks, self._tasks = self._tasks, []
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                log.error("sync_task_failed", exc_info=result)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def dictionary(self) -> Dictionary | None:
        return self._dictionary

    @property
    def dictionary_updating(self) -> bool:
        """True while a version check or download is pending or in flight."""
        if self._coordinator.syncing:
            return True
        return self._refresh_task is not None and not self._refresh_task.done()

    def has_dictionary(self) -> bool:
        return self._dictionary is not None

    async def check_spellings(self, words: Iterable[str]) -> list[str]:
        """Return the words that are not in the dictionary, in input order.

        Callers must check ``has_dictionary()`` first.
        """
        indexed = self._dictionary.indexed_words  # type: ignore[union-attr]
        return [word for word in words if word not in indexed]

    def suggest_corrections(self, word: str) -> WrongWordSuggestion:
        """Closest known words to ``word``. Callers must check ``has_dictionary()`` first."""
        spell_checker = self._dictionary.spell_checker  # type: ignore[union-attr]
        return WrongWordSuggestion(
            wrong=word,
            suggestions=spell_checker.suggest(word, self._min_similarity_score),
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_word_local(self, word: str) -> None:
        await self._mutate("add_word_local", lambda record: with_local_word(record, word))

    async def add_word_global(self, word: str) -> None:
        await self._mutate("add_word_global", lambda record: with_global_suggestion(record, word))

    async def clear_local_dictionary(self) -> None:
        await self._mutate("clear_local_dictionary", without_local_words)

    async def retry_dictionary_download(self) -> None:
        self._publish(await self._coordinator.retry())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _schedule(
        self, sync: Callable[[], Coroutine[Any, Any, Dictionary | None]]
    ) -> asyncio.Task[None]:
        async def run() -> None:
            self._publish(await sync())

        task = asyncio.create_task(run())
        self._tasks.append(task)
        return task

    def _publish(self, dictionary: Dictionary | None) -> None:
        if dictionary is not None:
            self._dictionary = dictionary

    async def _mutate(
        self,
        operation: str,
        change: Callable[[PersistedDictionary], PersistedDictionary],
    ) -> None:
        if self._dictionary is None:
            log.debug("dictionary_mutation_skipped", operation=operation, reason="no_dictionary")
            return
        self._publish(
            await self._repository.update(
                lambda current: None if current is None else change(current)
            )
        )


@asynccontextmanager
async def open_manager(settings: Settings) -> AsyncIterator[DictionaryManager]:
    """Wire store, repository, HTTP client and sync coordinator into a started manager."""
    db_path = settings.store.db_path
    if db_path != ":memory:":
        db_path = str(Path(db_path).expanduser())
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async with aiosqlite.connect(db_path) as db, build_http_client(settings.api) as client:
        store = SqliteStore(db)
        await store.init_db()

        repository = DictionaryRepository(store, settings.dictionary.storage_key)
        coordinator = SyncCoordinator(
            repository,
            build_source(settings, client),
            settings.dictionary.language,
        )
        manager = DictionaryManager(
            repository,
            coordinator,
            min_similarity_score=settings.dictionary.min_similarity_score,
        )
        await manager.start()
        try:
            yield manager
        finally:
            await manager.aclose()
