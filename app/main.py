from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI


def _validate_env() -> None:
    """
    Validate all required environment variables at startup.

    Runs before any service or database connection is initialised.
    Raises RuntimeError listing every missing or invalid variable so the
    operator can fix all problems in one restart cycle.
    """

    from db.config import load_env_files

    load_env_files()

    errors: list[str] = []

    # --- Database URL ---------------------------------------------------
    database_urls = [
        os.getenv(name, "").strip()
        for name in ("DATABASE_URL", "CLOUD_DATABASE_URL", "LOCAL_DATABASE_URL")
    ]
    if not any(database_urls):
        errors.append(
            "No database URL configured. Set DATABASE_URL, CLOUD_DATABASE_URL, "
            "or LOCAL_DATABASE_URL."
        )

    # --- Numeric settings -----------------------------------------------
    for name in (
        "CAMPAIGN_IMPORT_MAX_DISPLAY_ERRORS",
        "CAMPAIGN_IMPORT_PREVIEW_ROWS",
        "CAMPAIGN_IMPORT_MAX_UPLOAD_BYTES",
        "DB_POOL_SIZE",
        "DB_MAX_OVERFLOW",
        "DB_POOL_RECYCLE",
    ):
        raw_value = os.getenv(name)
        if raw_value is not None and not raw_value.strip().isdigit():
            errors.append(f"{name}={raw_value!r} is not a non-negative integer.")

    raw_cpl_alert = os.getenv("DASHBOARD_DEFAULT_CPL_ALERT")
    if raw_cpl_alert is not None:
        try:
            float(raw_cpl_alert)
        except ValueError:
            errors.append(f"DASHBOARD_DEFAULT_CPL_ALERT={raw_cpl_alert!r} is not a number.")

    if errors:
        raise RuntimeError(
            "Startup validation failed: missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def _check_db() -> None:
    """Run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    from sqlalchemy import text
    from sqlalchemy.exc import SQLAlchemyError

    from db.session import get_engine

    try:
        async with get_engine().connect() as connection:
            await connection.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as exc:
        raise RuntimeError("Database unavailable.") from exc


async def _check_schema() -> None:
    """
    Compare Base.metadata table names against the live DB schema.

    Every table registered on Base.metadata must exist in the database.
    Does NOT auto-migrate.
    """
    from sqlalchemy import inspect as sa_inspect

    import db.models  # noqa: F401  registers all ORM models on Base.metadata
    from db.base import Base
    from db.session import get_engine

    async with get_engine().connect() as connection:
        actual: set[str] = set(
            await connection.run_sync(lambda sync_conn: sa_inspect(sync_conn).get_table_names())
        )
    expected: set[str] = set(Base.metadata.tables.keys())
    missing = expected - actual

    if missing:
        logging.getLogger(__name__).critical(
            "Schema mismatch: %d table(s) defined in ORM metadata are absent from "
            "the database: %s. Run 'alembic upgrade head' and restart.",
            len(missing),
            ", ".join(sorted(missing)),
        )
        raise RuntimeError(
            f"Schema mismatch: {len(missing)} table(s) missing from the database "
            f"({', '.join(sorted(missing))}). Run migrations and restart."
        )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Validate DB connectivity and schema on boot; release the pool on exit."""
    from db.session import dispose_engine

    await _check_db()
    logging.getLogger(__name__).info("Database connectivity confirmed")
    await _check_schema()
    logging.getLogger(__name__).info("Database schema validated")
    try:
        yield
    finally:
        await dispose_engine()
        logging.getLogger(__name__).info("Database engine disposed")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="Campaign Dashboard API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import (
        campaign_import_router,
        campaigns_router,
        dashboard_settings_router,
        upload_history_router,
    )

    application.include_router(campaign_import_router)
    application.include_router(campaigns_router)
    application.include_router(upload_history_router)
    application.include_router(dashboard_settings_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
