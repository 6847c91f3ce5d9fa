# app/presentation/schemas.py
from __future__ import annotations
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# quantity/unitPrice may come as 12, 12.5, "12,50" ...
LooseNumber = Union[int, float, str]
# '2026-05-15', ISO datetime or epoch milliseconds
LooseDate = Union[str, int, float]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── PRODUCTS ─────────────────────────────────────────────────────
class ProductCreateRequest(_CamelModel):
    code: str = Field(..., description="Manufacturer/SKU code")
    batch: Optional[str] = Field(None, description="Lot; null and '' mean no batch")
    name: str
    brand: str
    category: str
    subtype: Optional[str] = None
    presentation: str = Field(..., description="e.g. 1 gal, 5 gal")
    color: Optional[str] = None
    expiry_date: LooseDate
    entry_date: Optional[LooseDate] = None
    location: Optional[str] = None
    quantity: Optional[LooseNumber]
    unit_price: Optional[LooseNumber]
    currency: Optional[str] = None
    comment: Optional[str] = None


class ProductUpdateRequest(_CamelModel):
    """Every field optional; only the keys present in the body are changed."""
    code: Optional[str] = None
    batch: Optional[str] = None
    name: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    subtype: Optional[str] = None
    presentation: Optional[str] = None
    color: Optional[str] = None
    expiry_date: Optional[LooseDate] = None
    entry_date: Optional[LooseDate] = None
    location: Optional[str] = None
    quantity: Optional[LooseNumber] = None
    unit_price: Optional[LooseNumber] = None
    currency: Optional[str] = None
    comment: Optional[str] = None


class DeleteResponse(BaseModel):
    ok: bool = True
