"""Tests for lq_dc.toolkit.strings."""

from __future__ import annotations

import pytest

from lq_dc.toolkit.strings import ensure_string, format_template, is_blank, safe_substring


class TestEnsureString:
    def test_none_uses_default(self) -> None:
        assert ensure_string(None) == ""
        assert ensure_string(None, "n/a") == "n/a"

    def test_converts(self) -> None:
        assert ensure_string(42) == "42"
        assert ensure_string("x") == "x"


class TestSafeSubstring:
    def test_start_and_length(self) -> None:
        assert safe_substring("abcdef", 1, 3) == "bcd"

    def test_no_length(self) -> None:
        assert safe_substring("abcdef", 2) == "cdef"

    @pytest.mark.parametrize(
        ("start", "length", "expected"),
        [(-3, 2, "ab"), ("x", 2, "ab"), (1, -1, ""), (10, 2, "")],
    )
    def test_bad_bounds(self, start, length, expected) -> None:
        assert safe_substring("abcdef", start, length) == expected

    def test_none_text(self) -> None:
        assert safe_substring(None, 0, 3) == ""


class TestIsBlank:
    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_blank(self, value) -> None:
        assert is_blank(value) is True

    def test_not_blank(self) -> None:
        assert is_blank(" a ") is False
        assert is_blank(0) is False


class TestFormatTemplate:
    def test_replaces_placeholders(self) -> None:
        assert format_template("Hello {name}, you are {age}", {"name": "Ada", "age": 36}) == "Hello Ada, you are 36"

    def test_missing_and_none_are_kept(self) -> None:
        assert format_template("{a}-{b}-{c}", {"a": 1, "b": None}) == "1-{b}-{c}"

    def test_non_mapping_values(self) -> None:
        assert format_template("{a}", None) == "{a}"

    def test_none_template(self) -> None:
        assert format_template(None, {"a": 1}) == ""
