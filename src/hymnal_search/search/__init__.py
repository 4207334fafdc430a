"""Hymn indexing and ranking core.

- analyzers: normalization, phrase cleaning and tokenization
- models: immutable index structures
- indexer: index construction
- phrase: quoted phrase extraction and containment
- query: query interpretation and prefix expansion
- stats: idf and damped term-frequency helpers
- engine: gating, scoring and deterministic ranking
"""

from hymnal_search.search.engine import DEFAULT_WEIGHTS, RankedDocument, ScoringWeights, rank, search
from hymnal_search.search.indexer import build_index
from hymnal_search.search.models import SearchIndex
from hymnal_search.search.query import ParsedQuery, interpret_query


__all__ = [
    "DEFAULT_WEIGHTS",
    "ParsedQuery",
    "RankedDocument",
    "ScoringWeights",
    "SearchIndex",
    "build_index",
    "interpret_query",
    "rank",
    "search",
]
