# app/domain/ports.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .models import Product


class ProductRepoPort(ABC):
    """
    Record store for products.

    Implementations raise ConflictError on a (code, batch) uniqueness
    violation, NotFoundError for unknown ids and StoreFault for anything else.
    """

    @abstractmethod
    async def ensure_indexes(self) -> None: ...

    @abstractmethod
    async def ping(self) -> bool: ...

    @abstractmethod
    async def close(self) -> None: ...

    @abstractmethod
    async def find_all(self, brand: Optional[str] = None) -> List[Product]:
        """Newest first (created_at desc). `brand` matches case-insensitively."""

    @abstractmethod
    async def find_by_id(self, product_id: str) -> Optional[Product]: ...

    @abstractmethod
    async def find_by_code_batch(
        self, code: str, batch: Optional[str], exclude_id: Optional[str] = None
    ) -> Optional[Product]: ...

    @abstractmethod
    async def create(self, fields: Dict[str, Any]) -> Product: ...

    @abstractmethod
    async def update(self, product_id: str, fields: Dict[str, Any]) -> Product: ...

    @abstractmethod
    async def delete(self, product_id: str) -> None: ...
