"""
Goal handlers.
"""

from __future__ import annotations

import logging
from typing import Any

from core import errors
from core.pagination import Page, pagination_meta
from interval_goals import repository as association_repository
from interval_goals.schemas import GoalAssociationResponse
from intervals import repository as interval_repository

from . import repository, schemas

logger = logging.getLogger(__name__)

GOAL_NOT_FOUND = "Goal not found."


def _to_goal_response(row: dict) -> schemas.GoalResponse:
    return schemas.GoalResponse.model_validate(row)


async def require_goal(goal_id: int) -> dict:
    row = await repository.get_goal_by_id(goal_id)
    if row is None:
        raise errors.NotFoundError(GOAL_NOT_FOUND)
    return row


async def create_goal(payload: schemas.GoalCreate) -> schemas.GoalResponse:
    row = await repository.create_goal(name=payload.name, description=payload.description)
    logger.info("goal_created goal_id=%s", row["id"])
    return _to_goal_response(row)


async def list_goals(
    filters: repository.GoalFilters,
    page: Page,
) -> tuple[list[schemas.GoalResponse], dict[str, Any]]:
    total = await repository.count_goals(filters)
    rows = await repository.list_goals(filters, page)
    return [_to_goal_response(r) for r in rows], pagination_meta(total, page)


async def get_goal(goal_id: int) -> schemas.GoalResponse:
    return _to_goal_response(await require_goal(goal_id))


async def update_goal(goal_id: int, payload: schemas.GoalUpdate) -> schemas.GoalResponse:
    fields = payload.model_dump(exclude_unset=True)
    if not fields:
        raise errors.ValidationError("No fields to update.")

    await require_goal(goal_id)
    row = await repository.update_goal(goal_id, fields)
    if row is None:
        raise errors.NotFoundError(GOAL_NOT_FOUND)
    return _to_goal_response(row)


async def delete_goal(goal_id: int) -> None:
    """
    Association rows go first, then the goal. Two separate round-trips, no
    transaction: a failure in between leaves the goal without links.
    """
    await require_goal(goal_id)
    unlinked = await association_repository.delete_by_goal_id(goal_id)
    deleted = await repository.delete_goal(goal_id)
    if not deleted:
        raise errors.NotFoundError(GOAL_NOT_FOUND)
    logger.info("goal_deleted goal_id=%s unlinked_intervals=%s", goal_id, unlinked)


async def list_goals_for_interval(interval_id: int) -> list[schemas.GoalResponse]:
    if await interval_repository.get_interval_by_id(interval_id) is None:
        raise errors.NotFoundError("Interval not found.")
    rows = await repository.list_goals_by_interval_id(interval_id)
    return [_to_goal_response(r) for r in rows]


async def list_goal_intervals(goal_id: int) -> list[GoalAssociationResponse]:
    await require_goal(goal_id)
    rows = await association_repository.list_by_goal_id(goal_id)
    return [GoalAssociationResponse.model_validate(r) for r in rows]
