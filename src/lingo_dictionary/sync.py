"""Sync coordinator: freshness check, version fetch, suggestion push.

One boolean guards the fetch path (``refresh`` and ``retry``) so that at
most one version download is in flight. The suggestion push is independent
and unguarded; it only touches ``synced`` flags while the fetch only
replaces ``id``/``words``/``language``, and both write through the
repository's serialized ``update``.

Recoverable ``LingoError``s (transport failures) are logged and swallowed,
leaving the stored record as it was. Non-recoverable ones (a bundled
dictionary asked for a language it lacks) propagate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from lingo_dictionary.errors import LingoError
from lingo_dictionary.repository import merge_api_dictionary, with_synced_suggestions

if TYPE_CHECKING:
    from lingo_dictionary.repository import Dictionary, DictionaryRepository
    from lingo_dictionary.sources import DictionarySource

log = structlog.get_logger()


class SyncCoordinator:
    def __init__(
        self,
        repository: DictionaryRepository,
        source: DictionarySource,
        language: str,
    ) -> None:
        self._repository = repository
        self._source = source
        self._language = language
        self._syncing = False

    @property
    def syncing(self) -> bool:
        return self._syncing

    async def refresh(self) -> Dictionary | None:
        """Check freshness and download a new version if the stored one is stale.

        Returns the rebuilt view when a new version was saved, else ``None``.
        No-op while another fetch is in flight.
        """
        if self._syncing:
            log.debug("dictionary_sync_skipped", reason="in_flight")
            return None

        self._syncing = True
        try:
            if await self._is_fresh():
                log.info("dictionary_up_to_date")
                return None
            return await self._download()
        finally:
            self._syncing = False

    async def retry(self) -> Dictionary | None:
        """Download the latest version unconditionally, respecting the in-flight guard."""
        if self._syncing:
            log.debug("dictionary_retry_skipped", reason="in_flight")
            return None

        self._syncing = True
        try:
            return await self._download()
        finally:
            self._syncing = False

    async def push_suggestions(self) -> Dictionary | None:
        """Submit unsynced global suggestions and record which ones were accepted."""
        record = await self._repository.load_record()
        if record is None:
            return None

        pending = [s.word for s in record.global_suggestions if not s.synced]
        if not pending:
            return None

        try:
            accepted = await self._source.suggest_words(self._language, pending)
        except LingoError as exc:
            if not exc.recoverable:
                raise
            log.warning("suggestion_push_failed", code=exc.code, count=len(pending), exc_info=True)
            return None

        words = [item.word for item in accepted]
        log.info("suggestions_synced", submitted=len(pending), accepted=len(words))
        if not words:
            return None
        return await self._repository.update(
            lambda current: None if current is None else with_synced_suggestions(current, words)
        )

    async def _is_fresh(self) -> bool:
        record = await self._repository.load_record()
        if record is None:
            return False
        try:
            return await self._source.is_latest(record.id)
        except LingoError as exc:
            if not exc.recoverable:
                raise
            # An unanswered freshness check counts as stale; the download
            # attempt that follows fails the same way if the API is down.
            log.warning(
                "freshness_check_failed", dictionary_id=record.id, code=exc.code, exc_info=True
            )
            return False

    async def _download(self) -> Dictionary | None:
        try:
            fetched = await self._source.fetch_latest(self._language)
        except LingoError as exc:
            if not exc.recoverable:
                raise
            log.warning(
                "dictionary_fetch_failed", language=self._language, code=exc.code, exc_info=True
            )
            return None

        log.info(
            "dictionary_downloaded",
            dictionary_id=fetched.id,
            language=fetched.language,
            word_count=len(fetched.words),
        )
        return await self._repository.update(lambda current: merge_api_dictionary(current, fetched))
