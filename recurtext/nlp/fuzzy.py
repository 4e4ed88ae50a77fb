"""Fuzzy word matching with a length-adaptive threshold, ranked by rapidfuzz."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import Any

from rapidfuzz import process
from rapidfuzz import utils as rf_utils

DEFAULT_THRESHOLD = 0.8

SHORT_WORD_LENGTH = 4
LONG_WORD_LENGTH = 8
_LENGTH_ADJUSTMENT_CAP = 12
_TINY_WORD_THRESHOLD = 0.7


def similarity(a: str, b: str) -> float:
    """Score two words in ``[0, 1]``, ignoring case.

    The score is the better of the position-wise character match ratio and
    the multiset character overlap ratio, both relative to the longer word.
    The first tolerates substitutions, the second transpositions and
    dropped letters.
    """
    if not a or not b:
        return 0.0
    a, b = a.lower(), b.lower()
    longest = max(len(a), len(b))
    positional = sum(1 for x, y in zip(a, b, strict=False) if x == y)
    overlap = sum((Counter(a) & Counter(b)).values())
    return max(positional, overlap) / longest


def adjusted_threshold(a: str, b: str, threshold: float = DEFAULT_THRESHOLD) -> float:
    """Required similarity for this pair of words."""
    if min(len(a), len(b)) < 3:
        threshold = min(threshold, _TINY_WORD_THRESHOLD)
    longest = max(len(a), len(b))
    if longest <= SHORT_WORD_LENGTH:
        return threshold - 0.1
    if longest >= LONG_WORD_LENGTH:
        return threshold - 0.05 - (min(longest, _LENGTH_ADJUSTMENT_CAP) - LONG_WORD_LENGTH) * 0.01
    return threshold


def _length_compatible(a: str, b: str) -> bool:
    return abs(len(a) - len(b)) / max(len(a), len(b)) <= 0.5


def similar(a: str, b: str, threshold: float = DEFAULT_THRESHOLD) -> bool:
    """Whether *a* and *b* are close enough to be the same word."""
    if not a or not b or not _length_compatible(a, b):
        return False
    return similarity(a, b) >= adjusted_threshold(a, b, threshold)


def _scorer(s1: str, s2: str, **_kwargs: Any) -> float:
    # rapidfuzz passes score_cutoff and friends; scores are on its 0..100 scale
    return similarity(s1, s2) * 100


def find_best_match(
    word: str,
    candidates: Sequence[str],
    *,
    threshold: float = DEFAULT_THRESHOLD,
) -> str | None:
    """Return the best-scoring candidate accepted by its own threshold.

    The candidate is returned with its original casing. Returns ``None``
    when no candidate qualifies.
    """
    if not word or not candidates:
        return None

    ranked = process.extract(
        word,
        candidates,
        scorer=_scorer,
        processor=rf_utils.default_process,
        limit=None,
    )
    for candidate, _score, _index in ranked:
        if similar(word, str(candidate), threshold):
            return str(candidate)
    return None
