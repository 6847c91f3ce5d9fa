# app/infra/repo/mongo_repo.py
from __future__ import annotations

import os
import re
import uuid
import logging
import contextlib
import datetime as dt
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional

from bson.decimal128 import Decimal128
from bson.errors import InvalidDocument
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.domain.errors import ConflictError, NotFoundError, StoreFault
from app.domain.models import Product
from app.domain.ports import ProductRepoPort

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
DB_NAME   = os.getenv("MONGO_DB", "paint_inventory")
COLL_NAME = os.getenv("MONGO_COLL", "products")

logger = logging.getLogger("inventory.repo")


def to_document(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Product fields -> BSON-friendly dict (Decimal is stored as Decimal128)."""
    doc = dict(fields)
    if isinstance(doc.get("unit_price"), Decimal):
        doc["unit_price"] = Decimal128(doc["unit_price"])
    return doc


def from_document(doc: Dict[str, Any]) -> Product:
    data = {k: v for k, v in doc.items() if k != "_id"}
    price = data.get("unit_price")
    if isinstance(price, Decimal128):
        data["unit_price"] = price.to_decimal()
    return Product(id=str(doc["_id"]), **data)


@contextlib.contextmanager
def _store_errors(code: str | None = None, batch: str | None = None) -> Iterator[None]:
    try:
        yield
    except DuplicateKeyError as e:
        raise ConflictError(code or "?", batch) from e
    except PyMongoError as e:
        logger.exception("mongo operation failed")
        raise StoreFault(str(e)) from e
    except (InvalidDocument, OverflowError) as e:
        logger.exception("document could not be encoded")
        raise StoreFault(str(e)) from e


class MongoProductRepo(ProductRepoPort):
    """
    Async repository for the `products` collection.

    Uniqueness of (code, batch) is enforced by a compound unique index;
    `batch` is always written (None when empty) so "no batch" is one key.
    """

    def __init__(self, client: Optional[AsyncIOMotorClient] = None) -> None:
        self.client = client or AsyncIOMotorClient(MONGO_URI, tz_aware=True)
        self.db = self.client[DB_NAME]
        self.coll: AsyncIOMotorCollection = self.db[COLL_NAME]

    # ──────────────────────────────────────────────────────────────
    #  Lifecycle
    # ──────────────────────────────────────────────────────────────
    async def ensure_indexes(self) -> None:
        with _store_errors():
            await self.coll.create_index(
                [("code", ASCENDING), ("batch", ASCENDING)],
                unique=True, name="code_batch_unique",
            )

        # secondary indexes are only for speed
        for keys in ([("brand", ASCENDING)], [("created_at", DESCENDING)]):
            try:
                await self.coll.create_index(keys)
            except PyMongoError as e:
                logger.warning("create_index %s failed: %s", keys, e)

    async def ping(self) -> bool:
        with _store_errors():
            res = await self.db.command("ping")
        return bool(res.get("ok"))

    async def close(self) -> None:
        self.client.close()

    # ──────────────────────────────────────────────────────────────
    #  Reads
    # ──────────────────────────────────────────────────────────────
    async def find_all(self, brand: Optional[str] = None) -> List[Product]:
        query: Dict[str, Any] = {}
        if brand is not None:
            rx = re.compile(f"^{re.escape(brand.strip())}$", re.IGNORECASE)
            query["brand"] = {"$regex": rx}
        with _store_errors():
            cursor = self.coll.find(query).sort("created_at", DESCENDING)
            return [from_document(doc) async for doc in cursor]

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        with _store_errors():
            doc = await self.coll.find_one({"_id": product_id})
        return from_document(doc) if doc else None

    async def find_by_code_batch(
        self, code: str, batch: Optional[str], exclude_id: Optional[str] = None
    ) -> Optional[Product]:
        query: Dict[str, Any] = {"code": code, "batch": batch}
        if exclude_id:
            query["_id"] = {"$ne": exclude_id}
        with _store_errors():
            doc = await self.coll.find_one(query)
        return from_document(doc) if doc else None

    # ──────────────────────────────────────────────────────────────
    #  Writes
    # ──────────────────────────────────────────────────────────────
    async def create(self, fields: Dict[str, Any]) -> Product:
        now = dt.datetime.now(dt.timezone.utc)
        doc = to_document(fields)
        doc["_id"] = str(uuid.uuid4())
        doc.setdefault("entry_date", now)
        doc["created_at"] = now
        doc["updated_at"] = now
        with _store_errors(fields.get("code"), fields.get("batch")):
            await self.coll.insert_one(doc)
        return from_document(doc)

    async def update(self, product_id: str, fields: Dict[str, Any]) -> Product:
        changes = to_document(fields)
        changes["updated_at"] = dt.datetime.now(dt.timezone.utc)
        with _store_errors(fields.get("code"), fields.get("batch")):
            doc = await self.coll.find_one_and_update(
                {"_id": product_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        if doc is None:
            raise NotFoundError(product_id)
        return from_document(doc)

    async def delete(self, product_id: str) -> None:
        with _store_errors():
            res = await self.coll.delete_one({"_id": product_id})
        if res.deleted_count == 0:
            raise NotFoundError(product_id)
