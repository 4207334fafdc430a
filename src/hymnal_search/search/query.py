"""Query interpretation for hymn search.

A raw query is split into quoted phrases and residual text, then one of two
modes is chosen for the residual:

- phrase mode: the cleaned residual has two or more words and must occur
  verbatim in the title or lyrics;
- strict mode: a single word (or nothing). Earlier tokens are required
  verbatim and the last token is treated as a prefix still being typed.

A residual made only of digits additionally enables the exact-number
lookup, which the engine resolves against the index.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import re

from hymnal_search.search.analyzers import normalize, phrase_text, tokenize
from hymnal_search.search.phrase import extract_quoted_phrases


MAX_PREFIX_EXPANSIONS = 50

_PURE_NUMBER = re.compile(r"^[0-9]+$")
_NUMBER_TOKEN = re.compile(r"\b[0-9]+\b")


@dataclass(frozen=True)
class ParsedQuery:
    """Immutable interpretation of a raw query string."""

    raw: str
    phrases: tuple[str, ...]
    residual: str
    default_phrase: str | None
    terms: tuple[str, ...]
    number_tokens: tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.raw.strip()

    @property
    def is_pure_number(self) -> bool:
        return bool(_PURE_NUMBER.match(self.residual))

    @property
    def is_multi_word(self) -> bool:
        return self.default_phrase is not None

    @property
    def distinct_terms(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(self.terms))

    @property
    def required_terms(self) -> tuple[str, ...]:
        """Terms that must appear verbatim in strict mode."""

        if self.is_multi_word or not self.terms:
            return ()
        return self.terms[:-1]

    @property
    def prefix(self) -> str | None:
        """Trailing live-typing prefix in strict mode."""

        if self.is_multi_word or not self.terms:
            return None
        return self.terms[-1]


def interpret_query(raw: str | None) -> ParsedQuery:
    """Parse ``raw`` into a :class:`ParsedQuery`. Never raises."""

    text = (raw or "").strip()
    phrases, residual = extract_quoted_phrases(text)
    cleaned = phrase_text(residual)
    default_phrase = cleaned if " " in cleaned else None
    return ParsedQuery(
        raw=text,
        phrases=tuple(phrases),
        residual=residual,
        default_phrase=default_phrase,
        terms=tuple(tokenize(residual)),
        number_tokens=tuple(normalize(token) for token in _NUMBER_TOKEN.findall(residual)),
    )


def expand_prefix(vocabulary: Iterable[str], prefix: str | None, limit: int = MAX_PREFIX_EXPANSIONS) -> list[str]:
    """Return up to ``limit`` vocabulary terms starting with ``prefix``.

    Vocabulary order is preserved. Prefixes shorter than two characters
    expand to nothing.
    """

    if not prefix or len(prefix) < 2 or limit <= 0:
        return []
    wanted = prefix.lower()
    expansions: list[str] = []
    for term in vocabulary:
        if term.startswith(wanted):
            expansions.append(term)
            if len(expansions) >= limit:
                break
    return expansions
