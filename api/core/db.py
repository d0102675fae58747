"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`). Every helper borrows a connection
for exactly one round-trip; nothing here opens a transaction.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

asyncpg constraint errors are re-raised as `core.errors` store errors so
callers never import asyncpg.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import errors, settings

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")

_pool: asyncpg.Pool | None = None


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=settings.pool_min_size(),
        max_size=settings.pool_max_size(),
        command_timeout=settings.command_timeout_s(),
    )
    logger.info(
        "db_pool_opened min_size=%s max_size=%s",
        settings.pool_min_size(),
        settings.pool_max_size(),
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None
    logger.info("db_pool_closed")


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


async def apply_schema() -> None:
    """
    Create tables if they do not exist yet. Idempotent; not a migration tool.
    """
    sql = SCHEMA_PATH.read_text(encoding="utf-8")
    await execute(sql)
    logger.info("db_schema_applied path=%s", SCHEMA_PATH.name)


@contextmanager
def translate_errors() -> Iterator[None]:
    """
    Map asyncpg failures onto the application's store errors.
    """
    try:
        yield
    except asyncpg.UniqueViolationError as exc:
        raise errors.UniqueConstraintViolation(_detail_message(exc, "Duplicate entry")) from exc
    except asyncpg.ForeignKeyViolationError as exc:
        raise errors.ForeignKeyViolation(_detail_message(exc, errors.ForeignKeyViolation.default_message)) from exc
    except asyncpg.CheckViolationError as exc:
        raise errors.CheckConstraintViolation(_detail_message(exc, errors.CheckConstraintViolation.default_message)) from exc
    except asyncpg.PostgresError as exc:
        raise errors.StoreError("Database error") from exc


def _detail_message(exc: asyncpg.PostgresError, fallback: str) -> str:
    # Constraint name is enough for logs; row values stay out of messages.
    constraint = getattr(exc, "constraint_name", None)
    return f"{fallback} ({constraint})" if constraint else fallback


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    with translate_errors():
        row = await pool().fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    with translate_errors():
        rows = await pool().fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def fetch_val(sql: str, *args: Any) -> Any:
    """
    Run a query and return the first column of the first row.
    """
    with translate_errors():
        return await pool().fetchval(sql, *args)


async def execute(sql: str, *args: Any) -> str:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). Returns the status tag.
    """
    with translate_errors():
        return await pool().execute(sql, *args)
