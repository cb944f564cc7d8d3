"""Tests for bignum module."""
import pytest

from bigidle.bignum import BigCounter
from bigidle.errors import ParseError


def test_zero_and_one():
    assert BigCounter.zero().value == 0
    assert BigCounter.one().value == 1
    assert BigCounter() == BigCounter.zero()


def test_negative_rejected():
    with pytest.raises(ValueError, match="negative"):
        BigCounter(-1)


def test_non_int_rejected():
    with pytest.raises(ValueError):
        BigCounter(1.5)
    with pytest.raises(ValueError):
        BigCounter(True)


def test_from_decimal():
    assert BigCounter.from_decimal("0").value == 0
    assert BigCounter.from_decimal("12345").value == 12345
    assert BigCounter.from_decimal("007").value == 7


@pytest.mark.parametrize("text", ["", "-5", "+5", "1.5", "1e3", " 12", "12 ", "1_000", "abc", "٣"])
def test_from_decimal_rejects_non_digits(text):
    with pytest.raises(ParseError):
        BigCounter.from_decimal(text)


def test_from_decimal_rejects_non_string():
    with pytest.raises(ParseError):
        BigCounter.from_decimal(None)
    with pytest.raises(ParseError):
        BigCounter.from_decimal(42)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        BigCounter.from_decimal("x")


def test_add():
    assert BigCounter(2).add(BigCounter(3)) == BigCounter(5)
    assert BigCounter(2) + BigCounter(3) == BigCounter(5)


def test_add_past_64_bits():
    big = BigCounter(2**64 - 1)
    assert (big + BigCounter.one()).value == 2**64


def test_scale():
    assert BigCounter(21).scale(2) == BigCounter(42)
    assert BigCounter(21) * 2 == BigCounter(42)
    assert 2 * BigCounter(21) == BigCounter(42)


def test_scale_requires_positive_int():
    with pytest.raises(ValueError):
        BigCounter(5).scale(0)
    with pytest.raises(ValueError):
        BigCounter(5).scale(-2)
    with pytest.raises(ValueError):
        BigCounter(5).scale(2.0)


def test_repeated_doubling_is_exact():
    n = BigCounter.one()
    for _ in range(200):
        n = n.scale(2)
    assert n.value == 2**200
    assert n.to_decimal_string() == str(2**200)


def test_decimal_string_round_trip():
    text = "98765432109876543210987654321098765432109876543210"
    assert BigCounter.from_decimal(text).to_decimal_string() == text
    assert str(BigCounter.from_decimal(text)) == text


def test_round_trip_beyond_int_str_digit_limit():
    # Well past CPython's default 4300-digit conversion cap
    text = "7" + "0123456789" * 1000
    n = BigCounter.from_decimal(text)
    assert n.digit_count() == len(text)
    assert n.to_decimal_string() == text


def test_chunk_boundary_keeps_inner_zeros():
    n = BigCounter(10**2500 + 1)
    digits = n.to_decimal_string()
    assert len(digits) == 2501
    assert digits == "1" + "0" * 2499 + "1"


def test_ordering():
    assert BigCounter(1) < BigCounter(2)
    assert max(BigCounter(3), BigCounter(10)) == BigCounter(10)


def test_digit_count():
    assert BigCounter(0).digit_count() == 1
    assert BigCounter(999).digit_count() == 3
    assert BigCounter(1000).digit_count() == 4
