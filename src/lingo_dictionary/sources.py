"""Where dictionary versions come from: the API or the packaged bundle."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from lingo_dictionary.bundled import BundledDictionary
from lingo_dictionary.client import DictionaryAPI

if TYPE_CHECKING:
    import httpx

    from lingo_dictionary.config import Settings
    from lingo_dictionary.models.dictionary import APIDictionary, SuggestedWord


class DictionarySource(Protocol):
    async def fetch_latest(self, language: str) -> APIDictionary: ...

    async def is_latest(self, dictionary_id: int) -> bool: ...

    async def suggest_words(self, language: str, words: list[str]) -> list[SuggestedWord]: ...


def build_source(settings: Settings, client: httpx.AsyncClient) -> DictionarySource:
    if settings.dictionary.use_remote_dictionary:
        return DictionaryAPI(client)
    return BundledDictionary()
