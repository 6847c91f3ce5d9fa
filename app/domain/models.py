# app/domain/models.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ExpiryStatus(str, Enum):
    OK = "OK"
    POR_VENCER = "POR_VENCER"
    VENCIDO = "VENCIDO"


class Product(BaseModel):
    """Stored paint product. Field names are snake_case, the wire uses camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    code: str
    batch: str | None = None
    name: str
    brand: str
    category: str
    subtype: str | None = None
    presentation: str
    color: str | None = None
    expiry_date: datetime
    entry_date: datetime
    location: str | None = None
    quantity: int = Field(0, ge=0)
    unit_price: Decimal = Decimal("0.00")
    currency: str = "USD"
    comment: str = ""
    created_at: datetime
    updated_at: datetime


class EnrichedProduct(Product):
    days_left: int
    status: ExpiryStatus
