"""
Ingestion "service layer".

This file contains logic that is independent of FastAPI's routing layer:
- Download the transaction feed
- Validate feed records
- Hand them to the repository for one atomic upsert
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from core import feed
from core.db import STORE_ERRORS, Database
from core.errors import IngestionFailure

from . import repository
from .schemas import ProductTransaction

DEFAULT_FEED_URL = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
DEFAULT_FEED_TIMEOUT_S = 30.0

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestReport:
    fetched: int
    stored: int
    total: int


def feed_url() -> str:
    return os.environ.get("FEED_URL", DEFAULT_FEED_URL).strip() or DEFAULT_FEED_URL


def feed_timeout_s() -> float:
    """
    Read FEED_TIMEOUT_S from env. Non-numeric or non-positive values fall back
    to the default so the request can never wait forever.
    """
    raw = os.environ.get("FEED_TIMEOUT_S", "").strip()
    if not raw:
        return DEFAULT_FEED_TIMEOUT_S
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_FEED_TIMEOUT_S
    return value if value > 0 else DEFAULT_FEED_TIMEOUT_S


def parse_transactions(items: list[dict[str, Any]]) -> list[ProductTransaction]:
    """
    Validate raw feed items. One malformed record rejects the whole feed.
    """
    products: list[ProductTransaction] = []
    for i, item in enumerate(items):
        try:
            products.append(ProductTransaction.model_validate(item))
        except ValidationError as e:
            raise IngestionFailure(f"Feed item {i} is malformed: {e.error_count()} error(s).") from e
    return products


async def seed_products(
    db: Database,
    *,
    url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> IngestReport:
    """
    Fetch the feed and upsert every record into `products`.

    Nothing is written unless the whole feed was fetched and validated.
    """
    url = url or feed_url()
    try:
        items = await feed.fetch_transactions(url, timeout_s=feed_timeout_s(), transport=transport)
    except feed.FeedError as e:
        raise IngestionFailure(str(e)) from e

    products = parse_transactions(items)

    try:
        stored = await repository.upsert_products(db, products)
        total = await repository.count_products(db)
    except STORE_ERRORS as e:
        raise IngestionFailure(f"Store write failed: {e}") from e

    logger.info("ingestion_complete url=%s fetched=%s stored=%s total=%s", url, len(items), stored, total)
    return IngestReport(fetched=len(items), stored=stored, total=total)
