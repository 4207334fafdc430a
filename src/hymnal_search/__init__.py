"""Hymn collection search: normalization, indexing and ranking."""

from hymnal_search.domain.model import Document
from hymnal_search.search import build_index, interpret_query, search


__version__ = "0.1.0"

__all__ = ["Document", "build_index", "interpret_query", "search"]
