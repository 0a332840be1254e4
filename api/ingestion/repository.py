"""
Ingestion persistence.
This module owns the `products` table: its schema and its writes.
"""

from __future__ import annotations

import asyncpg

from core.db import Database

from .schemas import ProductTransaction

# Arbitrary, stable key for pg_advisory_xact_lock; serializes concurrent seeds.
SEED_LOCK_KEY = 727_001

PRODUCTS_SCHEMA = """
CREATE TABLE IF NOT EXISTS products (
  id bigint PRIMARY KEY,
  title text NOT NULL DEFAULT '',
  price double precision NOT NULL DEFAULT 0,
  description text NOT NULL DEFAULT '',
  category text,
  image text,
  sold boolean NOT NULL DEFAULT false,
  date_of_sale timestamptz,
  sale_month smallint CHECK (sale_month BETWEEN 1 AND 12),
  updated_at timestamptz NOT NULL DEFAULT now()
);

CREATE INDEX IF NOT EXISTS products_sale_month_idx ON products (sale_month);
"""

UPSERT_PRODUCT = """
INSERT INTO products (id, title, price, description, category, image, sold, date_of_sale, sale_month)
VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
ON CONFLICT (id) DO UPDATE
SET title = EXCLUDED.title,
    price = EXCLUDED.price,
    description = EXCLUDED.description,
    category = EXCLUDED.category,
    image = EXCLUDED.image,
    sold = EXCLUDED.sold,
    date_of_sale = EXCLUDED.date_of_sale,
    sale_month = EXCLUDED.sale_month,
    updated_at = now()
"""


async def ensure_schema(conn: asyncpg.Connection) -> None:
    """
    Create the `products` table and its month index if absent.
    """
    await conn.execute(PRODUCTS_SCHEMA)


async def upsert_products(db: Database, products: list[ProductTransaction]) -> int:
    """
    Create the schema if needed and upsert every product by id, all in one
    transaction. Either every record is stored or none is.

    Returns the number of records written.
    """
    async with db.transaction() as conn:
        await conn.execute("SELECT pg_advisory_xact_lock($1)", SEED_LOCK_KEY)
        await ensure_schema(conn)
        if products:
            await conn.executemany(UPSERT_PRODUCT, [p.as_row() for p in products])
    return len(products)


async def count_products(db: Database) -> int:
    row = await db.fetch_one("SELECT count(*) AS n FROM products")
    return int((row or {}).get("n", 0))


async def create_schema(db: Database) -> None:
    """
    Standalone schema bootstrap (app startup), so an unseeded store answers
    aggregate queries with empty results instead of errors.
    """
    async with db.transaction() as conn:
        await conn.execute("SELECT pg_advisory_xact_lock($1)", SEED_LOCK_KEY)
        await ensure_schema(conn)
