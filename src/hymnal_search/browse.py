"""Browse ordering for hymn listings."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from hymnal_search.domain.model import Document
from hymnal_search.search.engine import leading_int


class SortMode(str, Enum):
    """How a listing is ordered after search."""

    RELEVANCE = "relevance"
    NUMBER = "number"
    ALPHA = "alpha"


def hymn_number(document: Document) -> int:
    """Leading integer of the label; missing or non-numeric labels count as 0."""

    value = leading_int(document.number)
    return value if value is not None else 0


def sort_documents(documents: Sequence[Document], mode: SortMode | str = SortMode.RELEVANCE) -> list[Document]:
    """Return a new, stably sorted list of the same document references."""

    mode = SortMode(mode)
    if mode is SortMode.NUMBER:
        return sorted(documents, key=hymn_number)
    if mode is SortMode.ALPHA:
        return sorted(documents, key=lambda doc: ((doc.title or "").strip().lower(), hymn_number(doc)))
    return list(documents)
