"""Text normalization and tokenization for hymn search.

Hymn text arrives with mixed case, accented letters and irregular line
breaks. Everything that is compared during search goes through
:func:`normalize` first, then either :func:`phrase_text` (for literal
substring checks) or :func:`tokenize` (for term statistics).

Tokenization follows a composable tokenizer/filter design: a regex tokenizer
emits tokens and a chain of filters drops the ones that carry no
discriminative value.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol
import unicodedata


_WHITESPACE = re.compile(r"\s+")
_NON_PHRASE_CHARS = re.compile(r"[^a-z0-9 ]+")


@dataclass
class Token:
    """Represents a token emitted by the tokenizer."""

    text: str
    position: int
    start_char: int
    end_char: int


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class RegexTokenizer:
    """Regex-based tokenizer; by default emits maximal ASCII letter/digit runs."""

    def __init__(self, pattern: str = r"[a-z0-9]+") -> None:
        self.pattern = re.compile(pattern)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self.pattern.finditer(text)):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


class MinLengthFilter:
    """Drops tokens shorter than ``min_length`` characters."""

    def __init__(self, min_length: int = 2) -> None:
        self.min_length = min_length

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if len(token.text) >= self.min_length:
                yield token


# Function words plus interjections that occur in nearly every hymn.
HYMN_STOPWORDS: frozenset[str] = frozenset(
    {
        "a",
        "an",
        "and",
        "are",
        "as",
        "at",
        "be",
        "but",
        "by",
        "for",
        "from",
        "had",
        "has",
        "have",
        "he",
        "her",
        "hers",
        "him",
        "his",
        "i",
        "in",
        "is",
        "it",
        "its",
        "me",
        "my",
        "mine",
        "no",
        "not",
        "of",
        "on",
        "or",
        "our",
        "ours",
        "she",
        "that",
        "the",
        "their",
        "them",
        "there",
        "they",
        "this",
        "to",
        "us",
        "was",
        "were",
        "what",
        "when",
        "where",
        "which",
        "who",
        "whom",
        "why",
        "with",
        "you",
        "your",
        "yours",
        "o",
        "oh",
        "hallelujah",
        "amen",
    }
)


class StopFilter:
    """Removes stopwords from the stream."""

    def __init__(self, stopwords: Iterable[str] | None = None) -> None:
        vocab = stopwords if stopwords is not None else HYMN_STOPWORDS
        self.stopwords = frozenset(word.lower() for word in vocab)

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text not in self.stopwords:
                yield token


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        return list(stream)


def normalize(text: str | None) -> str:
    """Lowercase, fold diacritics, collapse whitespace and trim.

    Diacritics are removed via canonical decomposition (NFD) followed by
    dropping combining marks, so ``"Café"`` and ``"cafe"`` compare equal.
    ``None`` and empty input yield ``""``.
    """

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", str(text).lower())
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _WHITESPACE.sub(" ", folded).strip()


def phrase_text(text: str | None) -> str:
    """Stricter normalization used for literal phrase comparison.

    Keeps only ASCII letters, digits and single spaces; punctuation turns
    into a word break.
    """

    cleaned = _NON_PHRASE_CHARS.sub(" ", normalize(text))
    return _WHITESPACE.sub(" ", cleaned).strip()


_HYMN_ANALYZER = AnalyzerPipeline(RegexTokenizer(), [MinLengthFilter(2), StopFilter()])


def tokenize(text: str | None) -> list[str]:
    """Return the ordered term list for ``text``, duplicates included."""

    normalized = normalize(text)
    if not normalized:
        return []
    return [token.text for token in _HYMN_ANALYZER(normalized)]
