"""HTTP client for the dictionary API.

Every endpoint answers with a ``{"data": ...}`` envelope. Failures of any
kind are raised as recoverable ``LingoError``s; deciding whether to swallow
them is left to the sync coordinator.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from lingo_dictionary.errors import ErrorCode, LingoError
from lingo_dictionary.models.dictionary import APIDictionary, SuggestedWord

if TYPE_CHECKING:
    from lingo_dictionary.config import ApiSettings

log = structlog.get_logger()


class _LatestVersion(BaseModel):
    is_latest: bool


_SUGGESTED_WORDS = TypeAdapter(list[SuggestedWord])


def build_http_client(settings: ApiSettings) -> httpx.AsyncClient:
    """Create the shared AsyncClient for the dictionary API."""
    return httpx.AsyncClient(
        base_url=settings.url,
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"Accept": "application/json"},
    )


class DictionaryAPI:
    """Remote dictionary authority implementing DictionarySource."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_latest(self, language: str) -> APIDictionary:
        data = await self._request("GET", f"/languages/{language}/dictionaries/versions/latest")
        return self._parse(APIDictionary.model_validate, data)

    async def is_latest(self, dictionary_id: int) -> bool:
        data = await self._request("GET", f"/dictionaries/versions/{dictionary_id}/is_latest")
        return self._parse(_LatestVersion.model_validate, data).is_latest

    async def suggest_words(self, language: str, words: list[str]) -> list[SuggestedWord]:
        data = await self._request(
            "POST", f"/languages/{language}/suggestions", json={"words": words}
        )
        return self._parse(_SUGGESTED_WORDS.validate_python, data)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise LingoError(
                ErrorCode.API_UNAVAILABLE,
                f"{method} {path} failed: {exc}",
                recoverable=True,
            ) from exc

        if response.is_error:
            raise LingoError(
                ErrorCode.API_ERROR,
                f"{method} {path} returned HTTP {response.status_code}",
                recoverable=True,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise LingoError(
                ErrorCode.INVALID_RESPONSE,
                f"{method} {path} returned a non-JSON body",
                recoverable=True,
            ) from exc

        if not isinstance(body, dict) or "data" not in body:
            raise LingoError(
                ErrorCode.INVALID_RESPONSE,
                f"{method} {path} response has no 'data' envelope",
                recoverable=True,
            )

        log.debug("api_request_complete", method=method, path=path, status=response.status_code)
        return body["data"]

    @staticmethod
    def _parse(validate: Any, data: Any) -> Any:
        try:
            return validate(data)
        except ValidationError as exc:
            raise LingoError(
                ErrorCode.INVALID_RESPONSE,
                f"Unexpected response payload: {exc.error_count()} validation error(s)",
                recoverable=True,
            ) from exc
