"""
User persistence (raw SQL).

Emails are stored lowercased; lookups compare on lower(email) so rows
written before normalization still match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core import db
from core.filters import Predicate, contains
from core.pagination import Page
from core.repository import Table


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@dataclass(frozen=True)
class UserFilters:
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


users = Table(
    name="users",
    alias="u",
    columns=("id", "email", "first_name", "last_name", "created_at", "updated_at"),
    order_by="u.last_name, u.first_name, u.id",
    predicates=(
        Predicate("email", "u.email ILIKE {}", contains),
        Predicate("first_name", "u.first_name ILIKE {}", contains),
        Predicate("last_name", "u.last_name ILIKE {}", contains),
    ),
    updatable={"email": "email", "first_name": "first_name", "last_name": "last_name"},
)


async def create_user(*, email: str, first_name: str, last_name: str) -> dict[str, Any]:
    return await users.insert({"email": normalize_email(email), "first_name": first_name, "last_name": last_name})


async def get_user_by_id(user_id: int) -> dict[str, Any] | None:
    return await users.find_by_id(user_id)


async def get_user_by_email(email: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {users.select_list}
        FROM users u
        WHERE lower(u.email) = lower($1)
        """,
        normalize_email(email),
    )


async def count_users(filters: UserFilters | None = None) -> int:
    return await users.count(filters)


async def list_users(filters: UserFilters | None = None, page: Page | None = None) -> list[dict[str, Any]]:
    return await users.find_all(filters, page)


async def update_user(user_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    if fields.get("email") is not None:
        fields = {**fields, "email": normalize_email(fields["email"])}
    return await users.update(user_id, fields)


async def delete_user(user_id: int) -> bool:
    return await users.delete(user_id)
