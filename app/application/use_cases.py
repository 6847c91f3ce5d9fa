# app/application/use_cases.py
from __future__ import annotations

import logging
import datetime as dt
from typing import Any, Callable, List, Mapping, Optional

from app.domain.errors import ConflictError, NotFoundError
from app.domain.expiry import enrich
from app.domain.models import EnrichedProduct, ExpiryStatus, Product
from app.domain.ports import ProductRepoPort

from .commands import build_changes, build_new_product

logger = logging.getLogger("inventory.products")

Clock = Callable[[], dt.datetime]


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class InventoryUseCase:
    """CRUD over the product store plus expiry enrichment on every read."""

    def __init__(self, repo: ProductRepoPort, clock: Clock = utc_now):
        self.repo = repo
        self.clock = clock

    async def list_products(self, status: Optional[ExpiryStatus] = None) -> List[EnrichedProduct]:
        now = self.clock()
        items = [enrich(p, now) for p in await self.repo.find_all()]
        if status is not None:
            items = [p for p in items if p.status == status]
        return items

    async def get(self, product_id: str) -> EnrichedProduct:
        product = await self.repo.find_by_id(product_id)
        if product is None:
            raise NotFoundError(product_id)
        return enrich(product, self.clock())

    async def create(self, payload: Mapping[str, Any]) -> Product:
        fields = build_new_product(payload)

        # advisory; the unique index decides on commit
        if await self.repo.find_by_code_batch(fields["code"], fields["batch"]):
            raise ConflictError(fields["code"], fields["batch"])

        created = await self.repo.create(fields)
        logger.info("created product id=%s code=%s batch=%s", created.id, created.code, created.batch)
        return created

    async def update(self, product_id: str, payload: Mapping[str, Any]) -> Product:
        changes = build_changes(payload)

        current = await self.repo.find_by_id(product_id)
        if current is None:
            raise NotFoundError(product_id)

        code = changes.get("code", current.code)
        batch = changes["batch"] if "batch" in changes else current.batch
        key_changed = (code, batch) != (current.code, current.batch)
        if key_changed and await self.repo.find_by_code_batch(code, batch, exclude_id=product_id):
            raise ConflictError(code, batch)

        if not changes:
            return current
        try:
            updated = await self.repo.update(product_id, changes)
        except ConflictError as e:
            raise ConflictError(code, batch) from e
        logger.info("updated product id=%s fields=%s", product_id, sorted(changes))
        return updated

    async def delete(self, product_id: str) -> None:
        await self.repo.delete(product_id)
        logger.info("deleted product id=%s", product_id)
