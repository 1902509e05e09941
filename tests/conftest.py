"""Shared fixtures: in-memory stand-ins for the product API and fallback catalog."""

import asyncio
import copy

import pytest
from fastapi.testclient import TestClient

from app.main import app
from bazar.errors import GatewayUnreachable, NotFound
from bazar.fallback import synthesize_stock
from bazar.session import Session

ADMIN = Session(user_email="admin@example.com", role="admin")


def run(coro):
    return asyncio.run(coro)


class FakeGateway:
    """Mimics ProductGateway over a dict; ``down`` makes every call unreachable."""

    def __init__(self, records=None, categories=None, down=False):
        self.records = {str(r.get("id", r.get("_id"))): dict(r) for r in (records or [])}
        self.categories = list(categories or [])
        self.down = down
        self.calls = []
        self._next = 100

    def _check(self, name, *args):
        self.calls.append((name,) + args)
        if self.down:
            raise GatewayUnreachable("connection refused")

    async def list(self):
        self._check("list")
        return [copy.deepcopy(r) for r in self.records.values()]

    async def create(self, draft):
        self._check("create", dict(draft))
        self._next += 1
        record = {**draft, "id": str(self._next), "createdAt": "2026-01-01T00:00:00+00:00"}
        self.records[record["id"]] = record
        return dict(record)

    async def update(self, product_id, draft):
        self._check("update", product_id, dict(draft))
        if product_id not in self.records:
            raise NotFound(product_id)
        self.records[product_id] = {**self.records[product_id], **draft}
        return dict(self.records[product_id])

    async def delete(self, product_id):
        self._check("delete", product_id)
        if product_id not in self.records:
            raise NotFound(product_id)
        del self.records[product_id]

    async def list_categories(self):
        self._check("list_categories")
        return list(self.categories)


class FakeFallback:
    def __init__(self, records=None, down=False):
        self.records = list(records or [])
        self.down = down
        self.calls = 0

    async def list(self):
        self.calls += 1
        if self.down:
            raise GatewayUnreachable("fallback offline")
        return [synthesize_stock(dict(r)) for r in self.records]

    async def list_categories(self):
        if self.down:
            raise GatewayUnreachable("fallback offline")
        return [{"id": "clothing", "name": "clothing"}]


VALID_DRAFT = {
    "name": "Shirt",
    "price": 20,
    "stock": 5,
    "categoryId": "c1",
    "image": "https://example.com/shirt.jpg",
    "description": "Cotton shirt",
}

FAKESTORE_RECORDS = [
    {"id": 1, "title": "Backpack", "price": 109.95, "category": "bags", "image": "https://example.com/1.jpg"},
    {"id": 2, "title": "Slim Fit T-Shirt", "price": 22.3, "category": "clothing", "image": "https://example.com/2.jpg"},
]


@pytest.fixture
def client():
    c = TestClient(app)
    c.post("/reset")
    return c


@pytest.fixture
def valid_draft():
    return dict(VALID_DRAFT)
