from decimal import Decimal

import pytest

from app.application.commands import build_changes, build_new_product
from app.domain.errors import InvalidDateError, ValidationError

BASE = {
    "code": " ESM-1 ",
    "name": "Esmalte",
    "brand": "Sherwin",
    "category": "Esmalte",
    "presentation": "1 gal",
    "expiry_date": "2026-05-15",
    "quantity": "4",
    "unit_price": "12,50",
}


def test_new_product_fills_defaults():
    fields = build_new_product(BASE)
    assert fields["code"] == "ESM-1"
    assert fields["batch"] is None
    assert fields["subtype"] is None and fields["color"] is None and fields["location"] is None
    assert fields["quantity"] == 4
    assert fields["unit_price"] == Decimal("12.50")
    assert fields["currency"] == "USD"
    assert fields["comment"] == ""
    assert "entry_date" not in fields


def test_new_product_missing_required():
    payload = {k: v for k, v in BASE.items() if k not in ("brand", "unit_price")}
    with pytest.raises(ValidationError, match="brand, unit_price"):
        build_new_product(payload)


def test_new_product_blank_required_text():
    with pytest.raises(ValidationError):
        build_new_product({**BASE, "name": "   "})


def test_new_product_bad_date():
    with pytest.raises(InvalidDateError):
        build_new_product({**BASE, "expiry_date": "mañana"})


def test_changes_only_touch_present_fields():
    changes = build_changes({"batch": "", "quantity": "x", "color": " Azul "})
    assert changes == {"batch": None, "quantity": 0, "color": "Azul"}


def test_changes_null_entry_date_is_no_change():
    assert build_changes({"entry_date": None}) == {}


def test_changes_null_currency_falls_back_to_usd():
    assert build_changes({"currency": None, "comment": None}) == {"currency": "USD", "comment": ""}
