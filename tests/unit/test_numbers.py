"""Tests for lq_dc.toolkit.numbers."""

from __future__ import annotations

import math

import pytest

from lq_dc.toolkit.numbers import clamp, ensure_number, format_number, round_half_up


class TestEnsureNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(5, 5), (2.5, 2.5), ("3", 3), (" 3.5 ", 3.5), ("", 0), (True, 1), (False, 0)],
    )
    def test_coerces(self, value, expected) -> None:
        assert ensure_number(value) == expected

    @pytest.mark.parametrize("value", [None, "abc", math.nan, "nan", [1], object()])
    def test_default(self, value) -> None:
        assert ensure_number(value, -1) == -1


class TestClamp:
    def test_bounds(self) -> None:
        assert clamp(15, 0, 10) == 10
        assert clamp(-5, 0, 10) == 0
        assert clamp(5, 0, 10) == 5

    def test_coerces_strings(self) -> None:
        assert clamp("15", "0", "10") == 10


class TestRoundHalfUp:
    def test_half_rounds_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1

    def test_negative_half_rounds_away_from_zero(self) -> None:
        assert round_half_up(-2.5) == -3

    def test_decimal_representation(self) -> None:
        assert round_half_up(1.005, 2) == 1.01
        assert round_half_up(1.2345, 3) == 1.235

    def test_zero_precision_returns_int(self) -> None:
        assert isinstance(round_half_up(2.4), int)

    def test_bad_precision_is_zero(self) -> None:
        assert round_half_up(2.6, "abc") == 3
        assert round_half_up(2.6, -2) == 3

    def test_infinity_passes_through(self) -> None:
        assert round_half_up(math.inf, 2) == math.inf


class TestFormatNumber:
    def test_default(self) -> None:
        assert format_number(1234567.891) == "1,234,567.89"

    def test_precision_and_separator(self) -> None:
        assert format_number(1234.5, 1, " ") == "1 234.5"

    def test_unparsable_is_zero(self) -> None:
        assert format_number("abc", 2) == "0.00"

    def test_small_number(self) -> None:
        assert format_number(12, 0) == "12"
