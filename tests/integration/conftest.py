"""
Fixtures for tests against a real PostgreSQL.

Set TEST_DATABASE_URL (e.g. postgresql://postgres@127.0.0.1:5432/postgres).
Without it these tests skip, unless pytest runs with --run-integration (as CI
does), in which case they fail.
Each test gets its own schema, dropped afterwards.
"""

from __future__ import annotations

import uuid

import asyncpg
import pytest
import pytest_asyncio

from core.db import Database
from ingestion import repository as ingestion_repository
from ingestion.schemas import ProductTransaction

from .settings import resolve_database_url


@pytest_asyncio.fixture
async def db(request: pytest.FixtureRequest):
    url = resolve_database_url(request.config)
    schema = f"test_{uuid.uuid4().hex[:12]}"

    admin = await asyncpg.connect(url)
    try:
        await admin.execute(f'CREATE SCHEMA "{schema}"')
    finally:
        await admin.close()

    database = await Database.connect(url, server_settings={"search_path": schema})
    try:
        await ingestion_repository.create_schema(database)
        yield database
    finally:
        await database.close()
        admin = await asyncpg.connect(url)
        try:
            await admin.execute(f'DROP SCHEMA "{schema}" CASCADE')
        finally:
            await admin.close()


@pytest.fixture
def seed(db):
    async def _seed(*records: dict) -> None:
        products = [ProductTransaction.model_validate(r) for r in records]
        await ingestion_repository.upsert_products(db, products)

    return _seed

