"""Split multi-clause phrases on conjunctions without breaking idioms apart.

Phrases such as "first and last" or "monday through friday" are lifted
out of the text into an arena before splitting. The text becomes a token
stream of literal runs and :class:`PhraseRef` handles into that arena, so
the splitter never sees the conjunctions inside a protected phrase.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum
from typing import NamedTuple

from recurtext.nlp.vocabulary import (
    CLOCK_TIME,
    CONJUNCTIONS,
    DAY_WORD,
    MONTH_WORD,
    NUMERIC_ORDINAL,
    ORDINAL_WORD,
    PROTECTED_PHRASES,
    RANGE_TERMS,
    UNIT_FREQUENCIES,
    alternation,
)

logger = logging.getLogger(__name__)


class PhraseKind(StrEnum):
    STATIC = "static_phrase"
    ORDINAL_COMBINATION = "ordinal_combination"
    DAY_RANGE = "day_range"
    MONTH_RANGE = "month_range"
    SPECIAL_FREQUENCY = "special_frequency"
    WEEKEND_REFERENCE = "weekend_reference"
    TIME_LIST = "time_list"


@dataclass(frozen=True, slots=True)
class ProtectedPhrase:
    """A span lifted out of the text; ``handle`` is its index in the arena."""

    text: str
    kind: PhraseKind
    handle: int


class PhraseRef(NamedTuple):
    handle: int


Token = str | PhraseRef


@dataclass(frozen=True, slots=True)
class SplitResult:
    """Ordered sub-phrases plus the arena used to restore them."""

    segments: tuple[str, ...]
    phrases: tuple[ProtectedPhrase, ...]


_ORDINAL = rf"(?:{ORDINAL_WORD}|{NUMERIC_ORDINAL})"
_RANGE = alternation(RANGE_TERMS)

_DETECTORS: tuple[tuple[PhraseKind, re.Pattern[str]], ...] = (
    (PhraseKind.STATIC, re.compile(rf"\b(?:{alternation(PROTECTED_PHRASES)})\b", re.IGNORECASE)),
    (
        PhraseKind.ORDINAL_COMBINATION,
        re.compile(rf"\b{_ORDINAL}(?:\s+and\s+{_ORDINAL})+\b", re.IGNORECASE),
    ),
    (
        PhraseKind.DAY_RANGE,
        re.compile(rf"\b(?:{DAY_WORD})\s+(?:{_RANGE})\s+(?:{DAY_WORD})\b", re.IGNORECASE),
    ),
    (
        PhraseKind.MONTH_RANGE,
        re.compile(rf"\b(?:{MONTH_WORD})\s+(?:{_RANGE})\s+(?:{MONTH_WORD})\b", re.IGNORECASE),
    ),
    (
        PhraseKind.SPECIAL_FREQUENCY,
        re.compile(rf"\bevery\s+other\s+(?:{alternation(UNIT_FREQUENCIES)})\b", re.IGNORECASE),
    ),
    (
        PhraseKind.WEEKEND_REFERENCE,
        re.compile(
            r"\b(?:saturday|sat)\s+and\s+(?:sunday|sun)\b|\bevery\s+(?:other\s+)?weekend\b",
            re.IGNORECASE,
        ),
    ),
    (
        PhraseKind.TIME_LIST,
        re.compile(
            rf"\bat\s+{CLOCK_TIME}(?:\s*(?:,|and)\s*(?:at\s+)?{CLOCK_TIME})*"
            rf"\s+and\s+(?:at\s+)?{CLOCK_TIME}",
            re.IGNORECASE,
        ),
    ),
)

_COMMA_RE = re.compile(r",")
_CONJUNCTION_RE = re.compile(rf";|\b(?:{alternation(CONJUNCTIONS)})\b", re.IGNORECASE)


def _find_spans(text: str) -> list[tuple[int, int, PhraseKind]]:
    """Non-overlapping protected spans, longer spans winning, in text order."""
    found = [
        (match.start(), match.end(), kind)
        for kind, pattern in _DETECTORS
        for match in pattern.finditer(text)
    ]
    found.sort(key=lambda span: (span[0] - span[1], span[0]))

    accepted: list[tuple[int, int, PhraseKind]] = []
    for start, end, kind in found:
        if all(end <= s or start >= e for s, e, _ in accepted):
            accepted.append((start, end, kind))
    return sorted(accepted)


def protect_phrases(text: str) -> tuple[list[Token], tuple[ProtectedPhrase, ...]]:
    """Turn *text* into a token stream with protected phrases replaced by handles."""
    tokens: list[Token] = []
    phrases: list[ProtectedPhrase] = []
    position = 0
    for start, end, kind in _find_spans(text):
        if start > position:
            tokens.append(text[position:start])
        phrase = ProtectedPhrase(text=text[start:end], kind=kind, handle=len(phrases))
        phrases.append(phrase)
        tokens.append(PhraseRef(phrase.handle))
        position = end
    if position < len(text):
        tokens.append(text[position:])
    return tokens, tuple(phrases)


def _split_tokens(tokens: list[Token], pattern: re.Pattern[str]) -> list[list[Token]]:
    groups: list[list[Token]] = [[]]
    for token in tokens:
        if isinstance(token, PhraseRef):
            groups[-1].append(token)
            continue
        first, *rest = pattern.split(token)
        groups[-1].append(first)
        groups.extend([piece] for piece in rest)
    return groups


def _restore(group: list[Token], phrases: tuple[ProtectedPhrase, ...]) -> str:
    text = "".join(
        phrases[token.handle].text if isinstance(token, PhraseRef) else token for token in group
    )
    return " ".join(text.split())


def split(text: str) -> SplitResult:
    """Split *text* on commas, then on conjunctions, keeping protected phrases whole.

    Empty segments are dropped. A text that is a single protected phrase
    yields exactly that phrase.
    """
    tokens, phrases = protect_phrases(text)
    segments: list[str] = []
    for comma_group in _split_tokens(tokens, _COMMA_RE):
        for group in _split_tokens(comma_group, _CONJUNCTION_RE):
            segment = _restore(group, phrases)
            if segment:
                segments.append(segment)

    logger.debug("Split %r into %r (%d protected)", text, segments, len(phrases))
    return SplitResult(segments=tuple(segments), phrases=phrases)
