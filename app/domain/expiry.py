# app/domain/expiry.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone

from .errors import ValidationError
from .models import EnrichedProduct, ExpiryStatus, Product

EXPIRING_SOON_DAYS = 10


@dataclass(frozen=True)
class ExpiryInfo:
    days_left: int
    status: ExpiryStatus


def _utc_day(value: datetime) -> date:
    # naive datetimes are stored as UTC
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


def classify(days_left: int) -> ExpiryStatus:
    if days_left <= 0:
        return ExpiryStatus.VENCIDO
    if days_left <= EXPIRING_SOON_DAYS:
        return ExpiryStatus.POR_VENCER
    return ExpiryStatus.OK


def compute_status(expiry_date: datetime, now: datetime) -> ExpiryInfo:
    """
    Days left until expiry, counted in whole calendar days (UTC).

    Expiry is date-only: for a midnight expiry this equals
    ceil((expiry - now) / 1 day). Expiring today counts as VENCIDO.
    """
    days_left = (_utc_day(expiry_date) - _utc_day(now)).days
    return ExpiryInfo(days_left=days_left, status=classify(days_left))


def enrich(product: Product, now: datetime) -> EnrichedProduct:
    info = compute_status(product.expiry_date, now)
    return EnrichedProduct(
        **product.model_dump(),
        days_left=info.days_left,
        status=info.status,
    )


_STATUS_QUERY = {
    "ok": ExpiryStatus.OK,
    "por-vencer": ExpiryStatus.POR_VENCER,
    "vencido": ExpiryStatus.VENCIDO,
}
ALL_STATUSES = "todos"


def parse_status_query(raw: str | None) -> ExpiryStatus | None:
    """'ok' | 'por-vencer' | 'vencido' -> status; '', None or 'todos' -> no filter."""
    key = (raw or "").strip().lower()
    if not key or key == ALL_STATUSES:
        return None
    try:
        return _STATUS_QUERY[key]
    except KeyError:
        raise ValidationError(
            f"Invalid status {raw!r}; expected one of: ok, por-vencer, vencido, todos"
        ) from None
