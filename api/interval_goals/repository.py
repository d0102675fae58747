"""
Interval <-> goal association persistence (raw SQL).

The (interval_id, goal_id) pair is unique. `associate` is a single upsert,
so repeating it returns the same row instead of failing or duplicating.
Existence of either side is not checked here: an orphan reference surfaces
as `errors.ForeignKeyViolation` from the store.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from core import db
from core.filters import SqlBuilder

ASSOCIATION_COLUMNS = "id, interval_id, goal_id, created_at"


async def associate(interval_id: int, goal_id: int) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO interval_goals (interval_id, goal_id)
        VALUES ($1, $2)
        ON CONFLICT (interval_id, goal_id) DO UPDATE
        SET created_at = now()
        RETURNING {ASSOCIATION_COLUMNS}
        """,
        interval_id,
        goal_id,
    )
    if row is None:
        raise RuntimeError("Failed to associate goal with interval.")
    return row


async def dissociate(interval_id: int, goal_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM interval_goals
        WHERE interval_id = $1
          AND goal_id = $2
        RETURNING id
        """,
        interval_id,
        goal_id,
    )
    return row is not None


async def exists(interval_id: int, goal_id: int) -> bool:
    row = await db.fetch_one(
        """
        SELECT 1 AS ok
        FROM interval_goals
        WHERE interval_id = $1
          AND goal_id = $2
        LIMIT 1
        """,
        interval_id,
        goal_id,
    )
    return row is not None


async def get_association_by_id(association_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {ASSOCIATION_COLUMNS}
        FROM interval_goals
        WHERE id = $1
        """,
        association_id,
    )


async def list_by_interval_id(interval_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT ig.id, ig.interval_id, ig.goal_id, ig.created_at,
               g.name AS goal_name, g.description AS goal_description
        FROM interval_goals ig
        JOIN goals g ON g.id = ig.goal_id
        WHERE ig.interval_id = $1
        ORDER BY g.name, ig.id
        """,
        interval_id,
    )


async def list_by_goal_id(goal_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT ig.id, ig.interval_id, ig.goal_id, ig.created_at,
               i.start_date, i.end_date, i.user_id
        FROM interval_goals ig
        JOIN intervals i ON i.id = ig.interval_id
        WHERE ig.goal_id = $1
        ORDER BY i.start_date DESC, ig.id
        """,
        goal_id,
    )


async def delete_by_interval_id(interval_id: int) -> int:
    rows = await db.fetch_all(
        """
        DELETE FROM interval_goals
        WHERE interval_id = $1
        RETURNING id
        """,
        interval_id,
    )
    return len(rows)


async def delete_by_goal_id(goal_id: int) -> int:
    rows = await db.fetch_all(
        """
        DELETE FROM interval_goals
        WHERE goal_id = $1
        RETURNING id
        """,
        goal_id,
    )
    return len(rows)


async def get_goal_stats_by_user(
    user_id: int,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[dict[str, Any]]:
    """
    Per goal, the number of distinct intervals of `user_id` linking to it.
    With a date range, only intervals overlapping the range are counted.
    """
    builder = SqlBuilder().where("i.user_id = {}", user_id)
    if start_date is not None:
        builder.where("i.end_date >= {}", start_date)
    if end_date is not None:
        builder.where("i.start_date <= {}", end_date)
    return await db.fetch_all(
        f"""
        SELECT g.id, g.name, count(DISTINCT ig.interval_id) AS interval_count
        FROM goals g
        JOIN interval_goals ig ON ig.goal_id = g.id
        JOIN intervals i ON i.id = ig.interval_id
        {builder.where_clause()}
        GROUP BY g.id, g.name
        ORDER BY interval_count DESC, g.name
        """,
        *builder.args,
    )
