"""
Analytics API endpoints.

`month` is taken as a raw path string so that non-numeric input is reported
as an invalid month (400) rather than a request validation error.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.db import Database, get_db

from . import service

router = APIRouter()


@router.get("/statistics/{month}")
async def statistics(month: str, db: Database = Depends(get_db)) -> dict:
    return await service.summary_statistics(db, month)


@router.get("/bar-chart/{month}")
async def bar_chart(month: str, db: Database = Depends(get_db)) -> list:
    return await service.price_histogram(db, month)


@router.get("/pie-chart/{month}")
async def pie_chart(month: str, db: Database = Depends(get_db)) -> list:
    return await service.category_breakdown(db, month)


@router.get("/combined-data/{month}")
async def combined_data(month: str, db: Database = Depends(get_db)) -> dict:
    return await service.combined_data(db, month)
