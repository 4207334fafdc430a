"""Statistical helpers for tf-idf style scoring.

The functions here stay independent of the index layout so they can be
unit tested in isolation.
"""

from __future__ import annotations

import math


def calculate_idf(doc_freq: int, total_docs: int) -> float:
    """Return ``ln(1 + N / (df + 1))``.

    Always non-negative; terms missing from the corpus (``df == 0``) get the
    largest value, and an empty corpus yields ``0.0``.
    """

    if total_docs <= 0:
        return 0.0
    return math.log1p(total_docs / (max(doc_freq, 0) + 1))


def field_term_weight(tf: int, field_weight: float) -> float:
    """Return the damped contribution ``weight * sqrt(tf)`` of one field.

    Nine occurrences weigh three times one occurrence, not nine times.
    """

    if tf <= 0:
        return 0.0
    return field_weight * math.sqrt(tf)
