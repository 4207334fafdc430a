"""Field-weighted tf-idf ranking for hymn collections."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
import logging
import re
from types import MappingProxyType

from hymnal_search.domain.model import Document
from hymnal_search.search.analyzers import normalize
from hymnal_search.search.models import WEIGHTED_FIELDS, DocumentPostings, SearchIndex
from hymnal_search.search.phrase import matches_phrase, phrase_locations
from hymnal_search.search.query import MAX_PREFIX_EXPANSIONS, ParsedQuery, expand_prefix, interpret_query
from hymnal_search.search.stats import calculate_idf, field_term_weight


logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")

DEFAULT_FIELD_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "title": 3.5,
        "lyrics": 1.0,
        "author": 1.4,
        "tune": 1.4,
        "scripture": 0.8,
        "meter": 0.6,
    }
)


@dataclass(frozen=True)
class ScoringWeights:
    """Field weights and flat bonuses used by :func:`score_document`."""

    fields: Mapping[str, float] = field(default_factory=lambda: DEFAULT_FIELD_WEIGHTS)
    phrase_title: float = 12.0
    phrase_lyrics: float = 6.0
    exact_number: float = 1000.0

    def field_weight(self, field_name: str) -> float:
        return self.fields.get(field_name, 0.0)


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True)
class RankedDocument:
    """A document that passed every gate, with its score."""

    document: Document
    score: float
    position: int


@dataclass(frozen=True)
class _PreparedQuery:
    parsed: ParsedQuery
    expansions: tuple[str, ...]


def _prepare(index: SearchIndex, parsed: ParsedQuery, max_prefix_expansions: int) -> _PreparedQuery:
    expansions = expand_prefix(index.vocabulary, parsed.prefix, max_prefix_expansions)
    return _PreparedQuery(parsed, tuple(expansions))


def passes_gates(postings: DocumentPostings, prepared: _PreparedQuery) -> bool:
    """Apply the phrase, default-phrase and strict-term gates in order."""

    parsed = prepared.parsed
    for phrase in parsed.phrases:
        if not matches_phrase(postings, phrase):
            return False

    if parsed.default_phrase is not None:
        return matches_phrase(postings, parsed.default_phrase)

    prefix = parsed.prefix
    if prefix is None:
        return True
    if not postings.has_all(parsed.required_terms):
        return False
    if prepared.expansions:
        return postings.has_any(prepared.expansions)
    return prefix in postings.terms


def scoring_terms(postings: DocumentPostings, prepared: _PreparedQuery) -> tuple[str, ...]:
    """Terms scored for one document.

    In strict mode the trailing prefix stands for the expansion terms this
    document actually contains (or the prefix itself when nothing expands).
    """

    parsed = prepared.parsed
    if parsed.prefix is None:
        return parsed.distinct_terms
    if prepared.expansions:
        matched = [term for term in prepared.expansions if term in postings.terms]
    else:
        matched = [parsed.prefix]
    return tuple(dict.fromkeys((*parsed.required_terms, *matched)))


def score_document(
    index: SearchIndex,
    postings: DocumentPostings,
    parsed: ParsedQuery,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
    terms: tuple[str, ...] | None = None,
) -> float:
    """Return the additive relevance score of a gate-passing document.

    ``terms`` defaults to the distinct residual terms of ``parsed``.
    """

    score = 0.0

    phrases = list(parsed.phrases)
    if parsed.default_phrase is not None:
        phrases.append(parsed.default_phrase)
    for phrase in phrases:
        in_title, in_lyrics = phrase_locations(postings, phrase)
        if in_title:
            score += weights.phrase_title
        if in_lyrics:
            score += weights.phrase_lyrics

    if terms is None:
        terms = parsed.distinct_terms
    for term in terms:
        idf = calculate_idf(index.df(term), index.doc_count)
        field_sum = sum(
            field_term_weight(postings.frequency(field_name, term), weights.field_weight(field_name))
            for field_name in WEIGHTED_FIELDS
        )
        score += idf * field_sum

    if postings.number and postings.number in parsed.number_tokens:
        score += weights.exact_number

    return score


def leading_int(label: str | None) -> int | None:
    """Parse the leading integer of a hymn label (``"12a"`` -> 12)."""

    match = _LEADING_INT.match(label or "")
    return int(match.group(1)) if match else None


def number_sort_key(number: str | None) -> tuple[int, int]:
    """Ascending by leading integer; labels without one sort last."""

    value = leading_int(number)
    if value is None:
        return (1, 0)
    return (0, value)


def ranking_key(entry: RankedDocument) -> tuple[float, tuple[int, int], str]:
    """Descending score, then numeric label, then case-insensitive title."""

    return (-entry.score, number_sort_key(entry.document.number), (entry.document.title or "").lower())


def rank(
    index: SearchIndex,
    documents: Sequence[Document],
    raw_query: str | None,
    *,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
    max_prefix_expansions: int = MAX_PREFIX_EXPANSIONS,
) -> list[RankedDocument]:
    """Return scored matches for ``raw_query`` in deterministic order.

    An empty query matches nothing here; :func:`search` handles the
    unfiltered listing.
    """

    parsed = interpret_query(raw_query)
    if parsed.is_empty:
        return []

    total = min(len(documents), len(index.postings))
    if total != len(documents) or total != len(index.postings):
        logger.debug(
            "Index/document length mismatch: %d postings, %d documents", len(index.postings), len(documents)
        )

    if parsed.is_pure_number:
        position = index.position_for_number(normalize(parsed.residual))
        if position is not None and position < total:
            logger.debug("Exact number match for %r at position %d", parsed.residual, position)
            return [RankedDocument(documents[position], weights.exact_number, position)]

    prepared = _prepare(index, parsed, max_prefix_expansions)
    logger.debug(
        "Query %r: mode=%s phrases=%d terms=%s expansions=%d",
        parsed.raw,
        "phrase" if parsed.is_multi_word else "strict",
        len(parsed.phrases),
        parsed.terms,
        len(prepared.expansions),
    )

    ranked: list[RankedDocument] = []
    for position in range(total):
        postings = index.postings[position]
        if not passes_gates(postings, prepared):
            continue
        score = score_document(index, postings, parsed, weights, scoring_terms(postings, prepared))
        # Zero-score documents are dropped even when every gate passed.
        if score <= 0:
            continue
        ranked.append(RankedDocument(documents[position], score, position))

    ranked.sort(key=ranking_key)
    return ranked


def search(
    index: SearchIndex,
    documents: Sequence[Document],
    raw_query: str | None,
    *,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
    max_prefix_expansions: int = MAX_PREFIX_EXPANSIONS,
) -> list[Document]:
    """Return the documents matching ``raw_query``, best first.

    A blank query returns every document in its original order. The result
    holds references into ``documents``; nothing is copied or synthesized.
    """

    if not (raw_query or "").strip():
        return list(documents)
    ranked = rank(index, documents, raw_query, weights=weights, max_prefix_expansions=max_prefix_expansions)
    return [entry.document for entry in ranked]
