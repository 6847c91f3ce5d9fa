# app/domain/normalizers.py
"""
Converters from loosely-typed request values to strict product fields.

Numeric converters are total: bad quantity/price input becomes zero so a
messy spreadsheet row can still be ingested. Dates are the exception and
raise InvalidDateError.
"""
from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from .errors import InvalidDateError, ValidationError

CENTS = Decimal("0.01")
ZERO_MONEY = Decimal("0.00")

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
# quantities are stored as BSON int64
MAX_QUANTITY = 2**63 - 1


def _decimal_text(raw: Any) -> str:
    # "12,50" -> "12.50"; only the first comma is treated as a separator
    return str(raw if raw is not None else "").replace(",", ".", 1).strip()


def normalize_integer(raw: Any) -> int:
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        n = raw
    elif isinstance(raw, float):
        if not math.isfinite(raw):
            return 0
        n = int(raw)
    elif isinstance(raw, Decimal):
        if not raw.is_finite():
            return 0
        n = int(raw)
    else:
        m = _INT_PREFIX.match(_decimal_text(raw))
        if not m:
            return 0
        n = int(m.group(1))
    if n < 0 or n > MAX_QUANTITY:
        return 0
    return n


def normalize_money(raw: Any) -> Decimal:
    if raw is None or isinstance(raw, bool):
        return ZERO_MONEY
    if isinstance(raw, Decimal):
        value = raw
    else:
        text = _decimal_text(raw)
        if not text:
            return ZERO_MONEY
        try:
            value = Decimal(text)
        except InvalidOperation:
            return ZERO_MONEY
    if not value.is_finite() or value < 0:
        return ZERO_MONEY
    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # more digits than the decimal context can hold
        return ZERO_MONEY


def normalize_date(raw: Any) -> datetime:
    """Accepts '2026-05-15', ISO datetimes, date/datetime objects or epoch milliseconds."""
    if isinstance(raw, datetime):
        return raw.replace(tzinfo=timezone.utc) if raw.tzinfo is None else raw.astimezone(timezone.utc)
    if isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day, tzinfo=timezone.utc)
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidDateError(raw) from e
    if isinstance(raw, str) and raw.strip():
        s = raw.strip()
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(s)
        except ValueError as e:
            raise InvalidDateError(raw) from e
        return normalize_date(parsed)
    raise InvalidDateError(raw)


def normalize_optional_text(raw: Any) -> str | None:
    if raw is None:
        return None
    return str(raw).strip() or None


# null and "" are the same batch key
normalize_batch = normalize_optional_text


def normalize_required_text(raw: Any, field: str) -> str:
    text = normalize_optional_text(raw)
    if text is None:
        raise ValidationError(f"{field} is required")
    return text
