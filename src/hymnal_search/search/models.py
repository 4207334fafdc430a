"""Search data models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType


# Fields whose terms are counted per document, in scoring order.
WEIGHTED_FIELDS: tuple[str, ...] = ("title", "lyrics", "author", "tune", "scripture", "meter")

_EMPTY: Mapping[str, int] = MappingProxyType({})


@dataclass(frozen=True)
class DocumentPostings:
    """Per-document index record.

    ``title_text``/``lyrics_text`` are normalized, untokenized strings used for
    literal containment checks; ``field_frequencies`` maps each weighted field
    to its term counts; ``terms`` is the union of terms over all fields.
    """

    doc_id: str
    number: str
    title_text: str
    lyrics_text: str
    field_frequencies: Mapping[str, Mapping[str, int]]
    terms: frozenset[str]

    def frequency(self, field: str, term: str) -> int:
        return self.field_frequencies.get(field, _EMPTY).get(term, 0)

    def has_all(self, terms: tuple[str, ...] | list[str]) -> bool:
        return all(term in self.terms for term in terms)

    def has_any(self, terms: tuple[str, ...] | list[str]) -> bool:
        return any(term in self.terms for term in terms)


@dataclass(frozen=True)
class SearchIndex:
    """Immutable index over one snapshot of a document collection.

    ``postings`` is aligned with the document sequence the index was built
    from. ``vocabulary`` keeps first-seen order so prefix expansion is
    reproducible.
    """

    doc_count: int
    postings: tuple[DocumentPostings, ...]
    document_frequency: Mapping[str, int]
    vocabulary: tuple[str, ...]
    number_lookup: Mapping[str, int]

    @classmethod
    def empty(cls) -> SearchIndex:
        return cls(0, (), MappingProxyType({}), (), MappingProxyType({}))

    def df(self, term: str) -> int:
        return self.document_frequency.get(term, 0)

    def position_for_number(self, number: str) -> int | None:
        """Return the position of the first document labelled ``number``."""

        return self.number_lookup.get(number)
