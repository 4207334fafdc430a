"""Domain model for hymn records.

A :class:`Document` is the normalized record handed to the search core.
It is immutable: the index built from a collection of documents stays
valid only as long as the documents themselves do not change.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Document(BaseModel):
    """Value object for a single hymn.

    Text fields default to ``""`` and ``None`` is coerced to ``""`` so that
    partially populated source records never break indexing.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    number: str = ""
    title: str = ""
    lyrics: str = ""
    author: str = ""
    tune: str = ""
    scripture: str = ""
    meter: str = ""
    topics: list[str] = Field(default_factory=list)

    @field_validator("id", "number", "title", "lyrics", "author", "tune", "scripture", "meter", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("topics", mode="before")
    @classmethod
    def _coerce_topics(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value if item is not None]
        return [str(value)]
