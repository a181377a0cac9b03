"""Tests for the tolerant boolean, number and percentage parsers."""
from __future__ import annotations

import math

import pytest

from gigtriage.normalize import to_bool, to_int, to_number, to_percent


@pytest.mark.parametrize("value", [True, "Yes", "yes", " TRUE ", "true", "Verified", "1"])
def test_to_bool_truthy(value) -> None:
    assert to_bool(value) is True


@pytest.mark.parametrize("value", [False, "No", "no", "", None, "maybe", "false"])
def test_to_bool_falsy(value) -> None:
    assert to_bool(value) is False


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("$15,000", 15000.0),
        ("381K", 381000.0),
        ("$1.2M", 1_200_000.0),
        ("$48K+", 48000.0),
        ("4.9 of 5", 4.9),
        (12, 12.0),
        (4.75, 4.75),
        (" 1 250 ", 1250.0),
    ],
)
def test_to_number_parses_currency_and_shorthand(value, expected) -> None:
    assert to_number(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", [None, "", "   ", "n/a", True, math.nan, math.inf])
def test_to_number_not_provided(value) -> None:
    assert to_number(value) is None


def test_to_int_truncates() -> None:
    assert to_int("1,024") == 1024
    assert to_int("") is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [("55%", 0.55), (0.55, 0.55), ("0.55", 0.55), (55, 0.55), ("55", 0.55), (1, 1.0), ("100 %", 1.0)],
)
def test_to_percent_accepts_every_representation(value, expected) -> None:
    assert to_percent(value) == pytest.approx(expected)


def test_to_percent_clamps_to_unit_range() -> None:
    assert to_percent("150%") == 1.0
    assert to_percent(-5) == 0.0


@pytest.mark.parametrize("value", [None, "", "  ", "%", "abc"])
def test_to_percent_blank_is_not_zero(value) -> None:
    assert to_percent(value) is None


def test_to_percent_zero_is_a_value() -> None:
    assert to_percent("0%") == 0.0
    assert to_percent(0) == 0.0
