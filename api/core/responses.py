"""
Response envelope helpers.

Every route answers with:
    {"status": "success"|"error", "message"?, "data"?, "results"?, "pagination"?}
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value


def success(data: Any = None, *, message: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"status": "success"}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = _dump(data)
    return body


def listing(items: list[Any], *, pagination: dict[str, Any] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {
        "status": "success",
        "results": len(items),
        "data": _dump(items),
    }
    if pagination is not None:
        body["pagination"] = pagination
    return body


def error(message: str, *, errors: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"status": "error", "message": message}
    if errors:
        body["errors"] = errors
    return body
