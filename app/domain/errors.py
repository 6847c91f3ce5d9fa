# app/domain/errors.py
from __future__ import annotations


class InventoryError(Exception):
    """Base error for the inventory domain."""


class ValidationError(InventoryError):
    """Client input that cannot be turned into a product field."""


class InvalidDateError(ValidationError):
    def __init__(self, raw: object):
        super().__init__(f"Invalid date: {raw!r}")
        self.raw = raw


class ConflictError(InventoryError):
    """A product with the same (code, batch) already exists."""

    def __init__(self, code: str, batch: str | None):
        label = f"{code}+{batch}" if batch else code
        super().__init__(f"Duplicate code+batch: {label}")
        self.code = code
        self.batch = batch


class NotFoundError(InventoryError):
    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class RenderFault(InventoryError):
    """The proforma PDF could not be composed."""


class StoreFault(InventoryError):
    """Any record-store failure that is not a conflict or a missing id."""
