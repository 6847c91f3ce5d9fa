import datetime as dt
import uuid

import pytest
from fastapi.testclient import TestClient

from app.container import get_product_repo
from app.domain.errors import ConflictError, NotFoundError
from app.domain.models import Product
from app.domain.ports import ProductRepoPort
from main import app


class InMemoryProductRepo(ProductRepoPort):
    """Dict-backed store with the same (code, batch) uniqueness as the Mongo index."""

    def __init__(self):
        self.rows = {}
        self.closed = False

    async def ensure_indexes(self):
        return None

    async def ping(self):
        return True

    async def close(self):
        self.closed = True

    def _clash(self, code, batch, exclude_id=None):
        for p in self.rows.values():
            if p.code == code and p.batch == batch and p.id != exclude_id:
                return p
        return None

    async def find_all(self, brand=None):
        items = list(self.rows.values())
        if brand is not None:
            items = [p for p in items if p.brand.lower() == brand.strip().lower()]
        return sorted(items, key=lambda p: p.created_at, reverse=True)

    async def find_by_id(self, product_id):
        return self.rows.get(product_id)

    async def find_by_code_batch(self, code, batch, exclude_id=None):
        return self._clash(code, batch, exclude_id)

    async def create(self, fields):
        if self._clash(fields["code"], fields["batch"]):
            raise ConflictError(fields["code"], fields["batch"])
        now = dt.datetime.now(dt.timezone.utc) + dt.timedelta(microseconds=len(self.rows))
        data = {"entry_date": now, **fields}
        p = Product(id=str(uuid.uuid4()), created_at=now, updated_at=now, **data)
        self.rows[p.id] = p
        return p

    async def update(self, product_id, fields):
        current = self.rows.get(product_id)
        if current is None:
            raise NotFoundError(product_id)
        merged = current.model_copy(update={**fields, "updated_at": dt.datetime.now(dt.timezone.utc)})
        if self._clash(merged.code, merged.batch, exclude_id=product_id):
            raise ConflictError(merged.code, merged.batch)
        self.rows[product_id] = merged
        return merged

    async def delete(self, product_id):
        if self.rows.pop(product_id, None) is None:
            raise NotFoundError(product_id)


@pytest.fixture
def repo():
    return InMemoryProductRepo()


@pytest.fixture
def client(repo):
    app.dependency_overrides[get_product_repo] = lambda: repo
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _utc_day_plus(n: int) -> str:
    return (dt.datetime.now(dt.timezone.utc).date() + dt.timedelta(days=n)).isoformat()


@pytest.fixture
def days_from_today():
    return _utc_day_plus


@pytest.fixture
def product_payload():
    def make(**overrides):
        payload = {
            "code": "ESM-100",
            "batch": "L1",
            "name": "Esmalte Blanco",
            "brand": "Sherwin",
            "category": "Esmalte",
            "presentation": "1 gal",
            "expiryDate": _utc_day_plus(60),
            "quantity": 3,
            "unitPrice": "12,50",
        }
        payload.update(overrides)
        return payload
    return make
