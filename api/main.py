from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from analytics import router as analytics_router
from core.db import Database
from core.errors import install_exception_handlers
from core.log import configure_logging
from ingestion import repository as ingestion_repository
from ingestion import router as ingestion_router

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Open the DB pool once per process; queries work before the first seed.
    db = await Database.connect()
    await ingestion_repository.create_schema(db)
    app.state.db = db
    try:
        yield
    finally:
        app.state.db = None
        await db.close()


configure_logging()

app = FastAPI(title="product-stats-api", lifespan=lifespan)

# Allow local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_exception_handlers(app)

app.include_router(ingestion_router.router, tags=["ingestion"])
app.include_router(analytics_router.router, tags=["analytics"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "product-stats api"}


def run() -> None:
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "3000")),
    )


if __name__ == "__main__":
    run()
