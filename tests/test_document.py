"""Tests for the regex-backed phrase document."""

import re

from recurtext.nlp.document import TextDocument


class TestTextDocument:
    def test_collapses_whitespace(self) -> None:
        assert TextDocument("  every   monday ").text == "every monday"

    def test_tokens(self) -> None:
        doc = TextDocument("Every Monday, at 9am; twenty-first")
        assert doc.tokens == ("every", "monday", "at", "9am", "twenty-first")

    def test_has_whole_words(self) -> None:
        doc = TextDocument("every other Monday")
        assert doc.has("every other")
        assert doc.has("monday")
        assert not doc.has("mon")
        assert not doc.has("")

    def test_find_ignores_case(self) -> None:
        found = TextDocument("Every Monday").find(r"\bmonday\b")
        assert found is not None
        assert found.group() == "Monday"

    def test_find_compiled_pattern(self) -> None:
        doc = TextDocument("the 1st and 15th")
        assert doc.find(re.compile(r"\d+th")) is not None
        assert doc.find(re.compile(r"\d+rd")) is None

    def test_finditer(self) -> None:
        doc = TextDocument("monday and friday")
        assert [m.group() for m in doc.finditer(r"\b\w+day\b")] == ["monday", "friday"]

    def test_without(self) -> None:
        doc = TextDocument("every monday until december")
        trimmed = doc.without(13, len(doc.text))
        assert trimmed.text == "every monday"
        assert doc.text == "every monday until december"
