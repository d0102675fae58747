"""
Interval persistence (raw SQL).

List/count reads go through `intervals.source(filters)`: a `goal_id` filter
switches the FROM clause to a join on `interval_goals`, and the user/date
predicates are still applied to the joined interval rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from core import db
from core.filters import Predicate, SqlBuilder
from core.pagination import Page
from core.repository import Join, Source, Table


@dataclass(frozen=True)
class IntervalFilters:
    user_id: int | None = None
    goal_id: int | None = None
    start_date: date | None = None
    end_date: date | None = None


intervals = Table(
    name="intervals",
    alias="i",
    columns=("id", "start_date", "end_date", "user_id", "created_at", "updated_at"),
    order_by="i.start_date DESC, i.id DESC",
    predicates=(
        Predicate("user_id", "i.user_id = {}"),
        Predicate("start_date", "i.start_date >= {}"),
        Predicate("end_date", "i.end_date <= {}"),
    ),
    joins=(
        Join(
            sql="JOIN interval_goals ig ON ig.interval_id = i.id",
            predicate=Predicate("goal_id", "ig.goal_id = {}"),
        ),
    ),
    updatable={"start_date": "start_date", "end_date": "end_date", "user_id": "user_id"},
)


def interval_source(filters: IntervalFilters | None = None) -> Source:
    return intervals.source(filters)


async def create_interval(*, start_date: date, end_date: date, user_id: int) -> dict[str, Any]:
    return await intervals.insert({"start_date": start_date, "end_date": end_date, "user_id": user_id})


async def get_interval_by_id(interval_id: int) -> dict[str, Any] | None:
    return await intervals.find_by_id(interval_id)


async def count_intervals(filters: IntervalFilters | None = None) -> int:
    return await intervals.count(filters)


async def list_intervals(
    filters: IntervalFilters | None = None,
    page: Page | None = None,
) -> list[dict[str, Any]]:
    return await intervals.find_all(filters, page)


async def update_interval(interval_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    return await intervals.update(interval_id, fields)


async def delete_interval(interval_id: int) -> bool:
    return await intervals.delete(interval_id)


async def list_intervals_by_user_id(user_id: int, page: Page | None = None) -> list[dict[str, Any]]:
    return await intervals.find_all(IntervalFilters(user_id=user_id), page)


async def count_intervals_by_user_id(user_id: int) -> int:
    return await intervals.count(IntervalFilters(user_id=user_id))


async def list_active_intervals(on_date: date, *, user_id: int | None = None) -> list[dict[str, Any]]:
    """
    Intervals whose [start_date, end_date] range contains `on_date`.
    """
    builder = SqlBuilder().where("{} BETWEEN i.start_date AND i.end_date", on_date)
    if user_id is not None:
        builder.where("i.user_id = {}", user_id)
    return await db.fetch_all(
        f"""
        SELECT {intervals.select_list}
        FROM intervals i
        {builder.where_clause()}
        ORDER BY {intervals.order_by}
        """,
        *builder.args,
    )


async def count_interval_goals(interval_id: int) -> int:
    total = await db.fetch_val(
        """
        SELECT count(*)
        FROM interval_goals
        WHERE interval_id = $1
        """,
        interval_id,
    )
    return int(total or 0)


async def list_interval_goals(interval_id: int, page: Page | None = None) -> list[dict[str, Any]]:
    builder = SqlBuilder().where("ig.interval_id = {}", interval_id)
    return await db.fetch_all(
        f"""
        SELECT g.id, g.name, g.description, g.created_at, g.updated_at,
               ig.id AS interval_goal_id
        FROM goals g
        JOIN interval_goals ig ON ig.goal_id = g.id
        {builder.where_clause()}
        ORDER BY g.name, g.id
        {builder.page_clause(page or Page())}
        """,
        *builder.args,
    )
