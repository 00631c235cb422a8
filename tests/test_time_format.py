import math
from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from domain import FormatError
from services import to_decimal, to_hhmm


def test_to_decimal():
    assert to_decimal("08:00") == 8
    assert to_decimal("07:30") == 7.5
    assert to_decimal(" 16:00 ") == 16
    assert to_decimal("00:01") == pytest.approx(1 / 60)


def test_to_hhmm():
    assert to_hhmm(7.5) == "07:30"
    assert to_hhmm(0) == "00:00"
    assert to_hhmm(8) == "08:00"
    assert to_hhmm(123.25) == "123:15"


def test_to_hhmm_carries_minutes():
    assert to_hhmm(7.999) == "08:00"
    assert to_hhmm(23.9999) == "24:00"


@pytest.mark.parametrize("text", ["00:00", "07:15", "08:30", "12:45", "40:00"])
def test_quarter_hours_round_trip_exactly(text):
    assert to_hhmm(to_decimal(text)) == text


@pytest.mark.parametrize("value", [1 / 3, 7.123456, 2 / 7, 9.9917])
def test_round_trip_within_one_minute(value):
    assert abs(to_decimal(to_hhmm(value)) - value) <= 1 / 60


@pytest.mark.parametrize("text", ["25:99", "08:60", "-1:00", "08:-5", "8", "08:00:00", "ab:cd", "", "08.30"])
def test_to_decimal_rejects_malformed(text):
    with pytest.raises(FormatError):
        to_decimal(text)


def test_to_decimal_rejects_non_text():
    with pytest.raises(FormatError):
        to_decimal(8)


@pytest.mark.parametrize("value", [-1, -0.01, math.nan, math.inf, -math.inf, "7.5", None, True])
def test_to_hhmm_rejects_invalid(value):
    with pytest.raises(FormatError):
        to_hhmm(value)


def test_format_error_is_value_error():
    assert issubclass(FormatError, ValueError)


@pytest.mark.parametrize("text", ["07:20", "00:01", "13:59", "02:10"])
def test_repeating_fraction_minutes_round_trip(text):
    value = to_decimal(text)
    assert to_hhmm(value) == text
    assert abs(to_decimal(to_hhmm(value)) - value) <= 1 / 60


def test_to_hhmm_accepts_other_real_numbers():
    assert to_hhmm(np.int64(8)) == "08:00"
    assert to_hhmm(np.float64(7.5)) == "07:30"
    assert to_hhmm(Decimal("7.5")) == "07:30"
    assert to_hhmm(Fraction(15, 2)) == "07:30"


@pytest.mark.parametrize("value", [Decimal("-1"), Decimal("NaN"), np.float64("inf")])
def test_to_hhmm_rejects_invalid_other_numbers(value):
    with pytest.raises(FormatError):
        to_hhmm(value)


@pytest.mark.parametrize("text", ["٠٨:٣٠", "０８:００"])
def test_to_decimal_rejects_non_ascii_digits(text):
    with pytest.raises(FormatError):
        to_decimal(text)
