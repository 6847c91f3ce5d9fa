# app/application/commands.py
"""Turn validated request payloads into strict product fields for the store."""
from __future__ import annotations

from typing import Any, Callable, Dict, Mapping

from app.domain.errors import ValidationError
from app.domain.normalizers import (
    normalize_batch,
    normalize_date,
    normalize_integer,
    normalize_money,
    normalize_optional_text,
    normalize_required_text,
)

REQUIRED_FIELDS = (
    "code", "name", "brand", "category", "presentation",
    "expiry_date", "quantity", "unit_price",
)

_REQUIRED_TEXT = ("code", "name", "brand", "category", "presentation")
_OPTIONAL_TEXT = ("subtype", "color", "location")

_CONVERTERS: Dict[str, Callable[[Any], Any]] = {
    **{name: (lambda v, _n=name: normalize_required_text(v, _n)) for name in _REQUIRED_TEXT},
    **{name: normalize_optional_text for name in _OPTIONAL_TEXT},
    "batch": normalize_batch,
    "expiry_date": normalize_date,
    "entry_date": normalize_date,
    "quantity": normalize_integer,
    "unit_price": normalize_money,
    "currency": lambda v: normalize_optional_text(v) or "USD",
    "comment": lambda v: "" if v is None else str(v),
}


def build_changes(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Normalize only the fields present in `payload`; absent means no change."""
    changes: Dict[str, Any] = {}
    for name, convert in _CONVERTERS.items():
        if name not in payload:
            continue
        if name == "entry_date" and payload[name] is None:
            continue
        changes[name] = convert(payload[name])
    return changes


def build_new_product(payload: Mapping[str, Any]) -> Dict[str, Any]:
    missing = [name for name in REQUIRED_FIELDS if name not in payload]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    fields = build_changes(payload)
    fields.setdefault("batch", None)
    for name in _OPTIONAL_TEXT:
        fields.setdefault(name, None)
    fields.setdefault("currency", "USD")
    fields.setdefault("comment", "")
    return fields
