"""Offline dictionary shipped inside the package.

Stands in for the API when ``dictionary.use_remote_dictionary`` is off.
Asking it for a language it does not carry is a configuration error and is
raised as non-recoverable, so it is never mistaken for a transport hiccup.
"""

from __future__ import annotations

from importlib import resources
from typing import TYPE_CHECKING

import structlog

from lingo_dictionary.errors import ErrorCode, LingoError
from lingo_dictionary.models.dictionary import APIDictionary

if TYPE_CHECKING:
    from lingo_dictionary.models.dictionary import SuggestedWord

log = structlog.get_logger()


def load_bundled_dictionary() -> APIDictionary:
    raw = resources.files("lingo_dictionary").joinpath("data", "bundled_dictionary.json")
    return APIDictionary.model_validate_json(raw.read_text(encoding="utf-8"))


class BundledDictionary:
    """DictionarySource backed by a fixed, packaged dictionary version."""

    def __init__(self, dictionary: APIDictionary | None = None) -> None:
        self._dictionary = dictionary or load_bundled_dictionary()

    async def fetch_latest(self, language: str) -> APIDictionary:
        if language != self._dictionary.language:
            raise LingoError(
                ErrorCode.LANGUAGE_NOT_AVAILABLE,
                f"Requested language ({language}) not available.",
                recoverable=False,
            )
        return self._dictionary.model_copy(deep=True)

    async def is_latest(self, dictionary_id: int) -> bool:
        return dictionary_id == self._dictionary.id

    async def suggest_words(self, language: str, words: list[str]) -> list[SuggestedWord]:
        # Nothing can confirm a suggestion offline; entries stay unsynced.
        log.debug("bundled_suggestions_skipped", language=language, count=len(words))
        return []

