"""Index construction for hymn collections.

The index is built in a single pass over the documents and is never
patched afterwards: when the collection changes, build a new one.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
import logging
from types import MappingProxyType

from hymnal_search.domain.model import Document
from hymnal_search.search.analyzers import normalize, tokenize
from hymnal_search.search.models import WEIGHTED_FIELDS, DocumentPostings, SearchIndex


logger = logging.getLogger(__name__)


def build_postings(document: Document) -> DocumentPostings:
    """Tokenize each weighted field of ``document`` independently."""

    field_frequencies: dict[str, MappingProxyType[str, int]] = {}
    terms: set[str] = set()
    for field_name in WEIGHTED_FIELDS:
        counts = Counter(tokenize(getattr(document, field_name, "") or ""))
        field_frequencies[field_name] = MappingProxyType(dict(counts))
        terms.update(counts)

    return DocumentPostings(
        doc_id=document.id,
        number=normalize(document.number),
        title_text=normalize(document.title),
        lyrics_text=normalize(document.lyrics),
        field_frequencies=MappingProxyType(field_frequencies),
        terms=frozenset(terms),
    )


def _ordered_terms(entry: DocumentPostings) -> dict[str, None]:
    ordered: dict[str, None] = {}
    for field_name in WEIGHTED_FIELDS:
        for term in entry.field_frequencies[field_name]:
            ordered.setdefault(term, None)
    return ordered


def build_index(documents: Sequence[Document]) -> SearchIndex:
    """Build an immutable :class:`SearchIndex` for ``documents``.

    Document frequency is counted once per document per term, regardless of
    how often or in which field the term occurs. Cost is linear in the
    number of tokens in the corpus.
    """

    postings: list[DocumentPostings] = []
    document_frequency: Counter[str] = Counter()
    vocabulary: dict[str, None] = {}
    number_lookup: dict[str, int] = {}

    for position, document in enumerate(documents):
        entry = build_postings(document)
        postings.append(entry)
        # Vocabulary order: field order, then first occurrence within the field.
        for term in _ordered_terms(entry):
            document_frequency[term] += 1
            vocabulary.setdefault(term, None)
        if entry.number and entry.number not in number_lookup:
            number_lookup[entry.number] = position

    index = SearchIndex(
        doc_count=len(postings),
        postings=tuple(postings),
        document_frequency=MappingProxyType(dict(document_frequency)),
        vocabulary=tuple(vocabulary),
        number_lookup=MappingProxyType(number_lookup),
    )
    logger.info("Built search index: %d documents, %d terms", index.doc_count, len(index.vocabulary))
    return index
