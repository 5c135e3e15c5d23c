from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class APIDictionary(BaseModel):
    """Dictionary version as served by the API or the bundled fallback."""

    id: int
    words: list[str]
    language: str


class GlobalSuggestion(BaseModel):
    """A word proposed for the shared dictionary, kept until the API confirms it."""

    word: str
    synced: bool = False


class PersistedDictionary(APIDictionary):
    """The record written to the store.

    Serialized with camelCase aliases (``localWords``, ``globalSuggestions``).
    """

    model_config = ConfigDict(populate_by_name=True)

    local_words: list[str] = Field(default_factory=list, alias="localWords")
    global_suggestions: list[GlobalSuggestion] = Field(
        default_factory=list, alias="globalSuggestions"
    )

    @field_validator("local_words")
    @classmethod
    def deduplicate_local_words(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class SuggestedWord(BaseModel):
    """Single element of the suggestion endpoint response."""

    word: str


class WrongWordSuggestion(BaseModel):
    wrong: str
    suggestions: list[str]
