"""Phrase-search interface that pattern matchers query."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from functools import cached_property
from typing import Protocol


class PhraseDocument(Protocol):
    """Read-only view of one sub-phrase.

    Matchers depend only on this interface, so a richer tagging engine can
    be swapped in through ``RecurrenceParser(document_factory=...)``.
    """

    @property
    def text(self) -> str: ...

    @property
    def tokens(self) -> tuple[str, ...]: ...

    def has(self, phrase: str) -> bool: ...

    def find(self, pattern: str | re.Pattern[str]) -> re.Match[str] | None: ...

    def finditer(self, pattern: str | re.Pattern[str]) -> Iterator[re.Match[str]]: ...

    def without(self, start: int, end: int) -> PhraseDocument: ...


DocumentFactory = Callable[[str], PhraseDocument]

_TOKEN_RE = re.compile(r"[a-z0-9]+(?:[-'][a-z0-9]+)*", re.IGNORECASE)


def _compile(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern, re.IGNORECASE)


class TextDocument:
    """Regex-backed :class:`PhraseDocument` over plain text."""

    def __init__(self, text: str) -> None:
        self._text = " ".join(text.split())

    def __repr__(self) -> str:
        return f"TextDocument({self._text!r})"

    @property
    def text(self) -> str:
        return self._text

    @cached_property
    def tokens(self) -> tuple[str, ...]:
        return tuple(_TOKEN_RE.findall(self._text.lower()))

    def has(self, phrase: str) -> bool:
        """Whether *phrase* occurs as whole words, ignoring case and spacing."""
        words = phrase.split()
        if not words:
            return False
        pattern = r"\s+".join(re.escape(word) for word in words)
        return re.search(rf"(?<!\w){pattern}(?!\w)", self._text, re.IGNORECASE) is not None

    def find(self, pattern: str | re.Pattern[str]) -> re.Match[str] | None:
        return _compile(pattern).search(self._text)

    def finditer(self, pattern: str | re.Pattern[str]) -> Iterator[re.Match[str]]:
        return _compile(pattern).finditer(self._text)

    def without(self, start: int, end: int) -> TextDocument:
        """Copy of the document with ``text[start:end]`` cut out."""
        return TextDocument(self._text[:start] + " " + self._text[end:])
