"""
Environment-driven settings.

Every value has a working default except DATABASE_URL. Malformed values fall
back to the default instead of failing startup.
"""

from __future__ import annotations

import os


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN_SIZE", 1))


def pool_max_size() -> int:
    return max(pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 10))


def command_timeout_s() -> float:
    return float(max(1, _env_int("DB_COMMAND_TIMEOUT", 30)))


def apply_schema_on_startup() -> bool:
    return _env_bool("DB_APPLY_SCHEMA", True)


def cors_origins() -> list[str]:
    return _env_list("CORS_ORIGINS", ["*"])


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def log_format() -> str:
    # "text" for local runs, "json" for log shippers.
    return _env_str("LOG_FORMAT", "text").lower()
