"""
Goal persistence (raw SQL).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core import db
from core.filters import Predicate, SqlBuilder, contains
from core.pagination import Page
from core.repository import Table


@dataclass(frozen=True)
class GoalFilters:
    name: str | None = None


goals = Table(
    name="goals",
    alias="g",
    columns=("id", "name", "description", "created_at", "updated_at"),
    order_by="g.name, g.id",
    predicates=(Predicate("name", "g.name ILIKE {}", contains),),
    updatable={"name": "name", "description": "description"},
)


async def create_goal(*, name: str, description: str | None = None) -> dict[str, Any]:
    return await goals.insert({"name": name, "description": description})


async def get_goal_by_id(goal_id: int) -> dict[str, Any] | None:
    return await goals.find_by_id(goal_id)


async def count_goals(filters: GoalFilters | None = None) -> int:
    return await goals.count(filters)


async def list_goals(filters: GoalFilters | None = None, page: Page | None = None) -> list[dict[str, Any]]:
    return await goals.find_all(filters, page)


async def update_goal(goal_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    return await goals.update(goal_id, fields)


async def delete_goal(goal_id: int) -> bool:
    return await goals.delete(goal_id)


async def list_goals_by_interval_id(interval_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {goals.select_list}
        FROM goals g
        JOIN interval_goals ig ON ig.goal_id = g.id
        WHERE ig.interval_id = $1
        ORDER BY g.name, g.id
        """,
        interval_id,
    )


async def list_goals_by_user_id(user_id: int, page: Page | None = None) -> list[dict[str, Any]]:
    """
    Goals reachable through any interval the user owns. A goal linked to
    several of the user's intervals is returned once.
    """
    builder = SqlBuilder().where("i.user_id = {}", user_id)
    return await db.fetch_all(
        f"""
        SELECT DISTINCT {goals.select_list}
        FROM goals g
        JOIN interval_goals ig ON ig.goal_id = g.id
        JOIN intervals i ON i.id = ig.interval_id
        {builder.where_clause()}
        ORDER BY g.name, g.id
        {builder.page_clause(page or Page())}
        """,
        *builder.args,
    )


async def count_goals_by_user_id(user_id: int) -> int:
    total = await db.fetch_val(
        """
        SELECT count(DISTINCT g.id)
        FROM goals g
        JOIN interval_goals ig ON ig.goal_id = g.id
        JOIN intervals i ON i.id = ig.interval_id
        WHERE i.user_id = $1
        """,
        user_id,
    )
    return int(total or 0)
