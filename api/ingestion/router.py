"""
FastAPI router for ingestion endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.db import Database, get_db

from . import service

router = APIRouter()


@router.get("/initialize-database")
async def initialize_database(db: Database = Depends(get_db)) -> dict:
    """
    Seed the store from the transaction feed. Safe to call again: records are
    upserted by id, so an unchanged feed leaves the record count unchanged.
    """
    report = await service.seed_products(db)
    return {
        "message": "Database initialized with seed data",
        "fetched": report.fetched,
        "stored": report.stored,
        "total": report.total,
    }
