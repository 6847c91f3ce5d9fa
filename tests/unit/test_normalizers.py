import datetime as dt
from decimal import Decimal

import pytest

from app.domain.errors import InvalidDateError, ValidationError
from app.domain.normalizers import (
    normalize_batch,
    normalize_date,
    normalize_integer,
    normalize_money,
    normalize_optional_text,
    normalize_required_text,
)

GARBAGE = ["", "   ", "abc", "12,5,3x", "NaN", "Infinity", "-inf", "1e400", "$12", None, [], {}, float("nan"), float("inf"), True]


def test_integer_parses_locale_and_prefix():
    assert normalize_integer(7) == 7
    assert normalize_integer("12") == 12
    assert normalize_integer("12,7") == 12
    assert normalize_integer("12.7") == 12
    assert normalize_integer(" 3 latas") == 3
    assert normalize_integer(4.9) == 4
    assert normalize_integer(Decimal("8.2")) == 8


def test_integer_negative_becomes_zero():
    assert normalize_integer(-4) == 0
    assert normalize_integer("-2") == 0


def test_integer_beyond_int64_becomes_zero():
    assert normalize_integer("99999999999999999999") == 0
    assert normalize_integer(2**63) == 0
    assert normalize_integer(Decimal("1e30")) == 0
    assert normalize_integer(1e20) == 0
    assert normalize_integer(2**63 - 1) == 2**63 - 1


@pytest.mark.parametrize("raw", GARBAGE)
def test_integer_is_total(raw):
    assert isinstance(normalize_integer(raw), int)


def test_money_is_exact_decimal():
    assert normalize_money("12,50") == Decimal("12.50")
    assert str(normalize_money("12,5")) == "12.50"
    assert str(normalize_money(0.1)) == "0.10"
    assert str(normalize_money(19.99)) == "19.99"
    assert normalize_money(3) == Decimal("3.00")
    assert str(normalize_money("2.675")) == "2.68"


@pytest.mark.parametrize("raw", GARBAGE + ["-5", "1e30"])
def test_money_is_total(raw):
    value = normalize_money(raw)
    assert isinstance(value, Decimal)
    assert value.is_finite()
    assert value >= 0


def test_money_garbage_is_zero():
    assert normalize_money("abc") == Decimal("0")
    assert str(normalize_money("")) == "0.00"


def test_date_accepts_iso_date():
    assert normalize_date("2026-05-15") == dt.datetime(2026, 5, 15, tzinfo=dt.timezone.utc)


def test_date_accepts_iso_datetime_with_z():
    assert normalize_date("2026-05-15T10:00:00Z") == dt.datetime(2026, 5, 15, 10, tzinfo=dt.timezone.utc)


def test_date_accepts_objects_and_epoch_millis():
    d = dt.datetime(2026, 5, 15, tzinfo=dt.timezone.utc)
    assert normalize_date(d) == d
    assert normalize_date(dt.date(2026, 5, 15)) == d
    assert normalize_date(int(d.timestamp() * 1000)) == d


@pytest.mark.parametrize("raw", ["not-a-date", "", "2026-02-30", None, True, float("nan"), {}])
def test_date_rejects_garbage(raw):
    with pytest.raises(InvalidDateError):
        normalize_date(raw)


def test_invalid_date_is_a_validation_error():
    assert issubclass(InvalidDateError, ValidationError)


def test_optional_text():
    assert normalize_optional_text("  Rojo ") == "Rojo"
    assert normalize_optional_text("   ") is None
    assert normalize_optional_text(None) is None


def test_batch_null_and_empty_are_same_key():
    assert normalize_batch("") is normalize_batch(None) is None


def test_required_text():
    assert normalize_required_text(" ESM ", "code") == "ESM"
    with pytest.raises(ValidationError, match="name is required"):
        normalize_required_text("  ", "name")
