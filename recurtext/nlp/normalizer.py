"""Text normalization: misspelling correction, synonyms, casing and whitespace."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from recurtext.nlp.fuzzy import DEFAULT_THRESHOLD, find_best_match
from recurtext.nlp.vocabulary import (
    CONJUNCTIONS,
    DAY_ABBREVIATIONS,
    DAY_NAME_VARIANTS,
    DAY_NAMES,
    END_DATE_TERMS,
    LOOKALIKE_WORDS,
    MONTH_ABBREVIATIONS,
    MONTH_NAME_VARIANTS,
    MONTH_NAMES,
    NUMBER_WORDS,
    ORDINAL_WORDS,
    TERM_SYNONYMS,
    UNIT_FREQUENCIES,
    alternation,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NormalizeOptions:
    """Switches for the normalization steps."""

    correct_misspellings: bool = True
    apply_synonyms: bool = True
    preserve_ordinal_suffixes: bool = False
    fuzzy_threshold: float = DEFAULT_THRESHOLD


_VARIANTS: dict[str, str] = {**DAY_NAME_VARIANTS, **MONTH_NAME_VARIANTS}

_FUZZY_CANDIDATES: tuple[str, ...] = (*DAY_NAMES, *MONTH_NAMES)

# Words the fuzzy pass leaves alone even when they resemble a day or month
_KNOWN_WORDS: frozenset[str] = frozenset(
    {
        *DAY_NAMES,
        *DAY_ABBREVIATIONS,
        *MONTH_NAMES,
        *MONTH_ABBREVIATIONS,
        *LOOKALIKE_WORDS,
        *NUMBER_WORDS,
        *(part for word in ORDINAL_WORDS for part in word.split("-")),
        *(part for term in END_DATE_TERMS for part in term.split()),
        *CONJUNCTIONS,
        *UNIT_FREQUENCIES,
        *(f"{unit}s" for unit in UNIT_FREQUENCIES),
        *(part for key in TERM_SYNONYMS for part in re.split(r"[\s-]+", key)),
        *(part for value in TERM_SYNONYMS.values() for part in value.split()),
        "every",
        "the",
        "of",
        "on",
        "in",
        "at",
        "for",
        "from",
        "starting",
        "times",
        "occurrences",
        "during",
        "beginning",
        "morning",
        "evening",
        "night",
        "noon",
        "midnight",
        "next",
    }
)

_WORD_RE = re.compile(r"\b[A-Za-z]+\b")
_SYNONYM_RE = re.compile(rf"\b(?:{alternation(TERM_SYNONYMS)})\b", re.IGNORECASE)
_ORDINAL_SUFFIX_RE = re.compile(r"\b(\d+)(?:st|nd|rd|th)\b", re.IGNORECASE)


def _match_case(original: str, replacement: str) -> str:
    """Carry the capitalization of *original* over to *replacement*."""
    if len(original) > 1 and original.isupper():
        return replacement.upper()
    if original[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def _correct_word(match: re.Match[str], threshold: float) -> str:
    word = match.group()
    lowered = word.lower()
    if lowered in _VARIANTS:
        return _match_case(word, _VARIANTS[lowered])
    if len(word) < 3 or lowered in _KNOWN_WORDS:
        return word
    corrected = find_best_match(lowered, _FUZZY_CANDIDATES, threshold=threshold)
    if corrected is None:
        return word
    logger.debug("Fuzzy corrected %r -> %r", word, corrected)
    return _match_case(word, corrected)


def correct_misspellings(text: str, threshold: float = DEFAULT_THRESHOLD) -> str:
    """Fix misspelled day and month names, keeping each word's capitalization.

    Known variants ("tues", "feburary") are looked up directly; other words
    of three or more letters are fuzzy-matched against full day and month
    names.
    """
    return _WORD_RE.sub(lambda m: _correct_word(m, threshold), text)


def _synonym(match: re.Match[str]) -> str:
    phrase = re.sub(r"[\s-]+", " ", match.group().lower())
    canonical = TERM_SYNONYMS.get(phrase) or TERM_SYNONYMS.get(phrase.replace(" ", "-"))
    if canonical is None:
        return match.group()
    return _match_case(match.group(), canonical)


def apply_synonyms(text: str) -> str:
    """Replace alternative terms with their canonical phrase."""
    return _SYNONYM_RE.sub(_synonym, text)


def normalize(text: str, options: NormalizeOptions | None = None) -> str:
    """Normalize a recurrence phrase for pattern matching.

    Correction and synonym substitution run before lowercasing so that
    corrected words keep the writer's capitalization in between.
    """
    opts = options or NormalizeOptions()
    if opts.correct_misspellings:
        text = correct_misspellings(text, opts.fuzzy_threshold)
    if opts.apply_synonyms:
        text = apply_synonyms(text)
    text = " ".join(text.lower().split())
    if not opts.preserve_ordinal_suffixes:
        text = _ORDINAL_SUFFIX_RE.sub(r"\1", text)
    return text
