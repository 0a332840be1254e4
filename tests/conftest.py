"""
Shared fixtures.

Unit and HTTP tests never open a real connection: repository functions are
replaced with async fakes and `get_db` is overridden with a sentinel handle.
"""

from __future__ import annotations

from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from core.db import get_db
from main import app


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run the PostgreSQL-backed tests; a missing TEST_DATABASE_URL fails instead of skipping.",
    )


class FakeDatabase:
    """Stands in for core.db.Database; fakes never touch it."""


class Calls:
    """Records which fake repository functions ran, and with what."""

    def __init__(self) -> None:
        self.log: list[tuple[str, dict[str, Any]]] = []

    def names(self) -> list[str]:
        return [name for name, _ in self.log]


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def calls() -> Calls:
    return Calls()


@pytest.fixture
def sample_feed() -> list[dict[str, Any]]:
    return [
        {
            "id": 1,
            "title": "Wireless Mouse",
            "price": 150,
            "description": "2.4GHz mouse",
            "category": "electronics",
            "image": "https://example.com/1.jpg",
            "sold": True,
            "dateOfSale": "2024-03-05T10:00:00+05:30",
        },
        {
            "id": 2,
            "title": "Hardcover Atlas",
            "price": 950.5,
            "description": "World atlas",
            "category": "books",
            "image": "https://example.com/2.jpg",
            "sold": False,
            "dateOfSale": "2024-03-20T18:30:00+05:30",
        },
    ]


@pytest.fixture
def analytics_rows(monkeypatch: pytest.MonkeyPatch, calls: Calls) -> dict[str, Any]:
    """
    Replace analytics repository queries with fakes returning `rows[...]`.
    Tests may mutate the returned dict before calling the service.
    """
    from analytics import repository

    rows: dict[str, Any] = {
        "statistics": {
            "total_sale_amount": 1100.0,
            "total_items": 2,
            "total_sold_items": 1,
            "total_unsold_items": 1,
        },
        "buckets": [{"bucket": 9, "item_count": 1}, {"bucket": 1, "item_count": 1}],
        "categories": [
            {"category": "Electronics", "item_count": 1},
            {"category": "Books", "item_count": 1},
        ],
    }

    def fake(name: str, key: str):
        async def _query(db: Any, *, month: int) -> Any:
            calls.log.append((name, {"month": month}))
            value = rows[key]
            if isinstance(value, BaseException):
                raise value
            return value

        return _query

    monkeypatch.setattr(repository, "sales_statistics", fake("sales_statistics", "statistics"))
    monkeypatch.setattr(repository, "price_bucket_counts", fake("price_bucket_counts", "buckets"))
    monkeypatch.setattr(repository, "category_counts", fake("category_counts", "categories"))
    return rows


@pytest_asyncio.fixture
async def client(fake_db: FakeDatabase):
    # ASGITransport does not run the lifespan, so no pool is opened.
    app.dependency_overrides[get_db] = lambda: fake_db
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as http_client:
            yield http_client
    finally:
        app.dependency_overrides.clear()
