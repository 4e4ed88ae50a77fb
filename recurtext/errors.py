"""Exceptions raised while recognizing and combining recurrence patterns."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class RecurtextError(Exception):
    """Base exception for recurrence parsing errors."""


class PropertyConflictError(RecurtextError):
    """Two fragments set incompatible values for the same field."""

    def __init__(self, field: str, existing: Any, incoming: Any) -> None:
        self.field = field
        self.existing = existing
        self.incoming = incoming
        super().__init__(f"Conflicting values for {field}: {existing!r} vs {incoming!r}")


class PatternCombinationError(RecurtextError):
    """Fragments could not be merged into one descriptor."""

    def __init__(
        self,
        message: str,
        spans: Sequence[str],
        conflict: PropertyConflictError | None = None,
    ) -> None:
        self.message = message
        self.spans = tuple(spans)
        self.conflict = conflict
        joined = ", ".join(repr(s) for s in self.spans)
        super().__init__(f"{message} (patterns: {joined})" if joined else message)


class ConfigurationError(RecurtextError):
    """Invalid parser configuration."""
