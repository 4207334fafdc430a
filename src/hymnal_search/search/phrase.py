"""Literal phrase handling for hymn queries.

Phrases are matched by plain substring containment against the normalized
title and lyrics of a document. There is no positional proximity scoring:
two words far apart in different stanzas never count as a phrase match.
"""

from __future__ import annotations

import re

from hymnal_search.search.analyzers import phrase_text
from hymnal_search.search.models import DocumentPostings


# An unterminated quote does not match and stays in the residual text.
_QUOTED = re.compile(r'"([^"]+)"')


def extract_quoted_phrases(raw: str) -> tuple[list[str], str]:
    """Split ``raw`` into normalized quoted phrases and the residual text.

    Returns:
        ``(phrases, residual)`` where phrases keep their order of appearance
        (empty ones dropped) and ``residual`` is ``raw`` with every quoted
        span replaced by a space, trimmed.
    """

    phrases = [cleaned for cleaned in (phrase_text(m.group(1)) for m in _QUOTED.finditer(raw)) if cleaned]
    residual = _QUOTED.sub(" ", raw).strip()
    return phrases, residual


def contains(haystack: str, needle: str) -> bool:
    return bool(haystack) and bool(needle) and needle in haystack


def phrase_locations(postings: DocumentPostings, phrase: str) -> tuple[bool, bool]:
    """Return ``(in_title, in_lyrics)`` for ``phrase``."""

    return contains(postings.title_text, phrase), contains(postings.lyrics_text, phrase)


def matches_phrase(postings: DocumentPostings, phrase: str) -> bool:
    in_title, in_lyrics = phrase_locations(postings, phrase)
    return in_title or in_lyrics
