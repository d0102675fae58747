"""
Interval handlers, including goal association management.

Creating an interval with `goalIds` is a sequence of independent writes:
the interval insert, then one association upsert per goal. A failing goal
(e.g. it does not exist) is logged and reported in `associations`; the
interval and the other links are kept and the request still succeeds.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from core import errors
from core.pagination import Page, pagination_meta
from goals import repository as goal_repository
from goals.schemas import GoalResponse, IntervalGoalResponse
from interval_goals import repository as association_repository
from interval_goals.schemas import AssociationResponse, AssociationResult
from users import repository as user_repository

from . import repository, schemas

logger = logging.getLogger(__name__)

INTERVAL_NOT_FOUND = "Interval not found."
USER_NOT_FOUND = "User not found."
GOAL_NOT_FOUND = "Goal not found."


async def require_interval(interval_id: int) -> dict:
    row = await repository.get_interval_by_id(interval_id)
    if row is None:
        raise errors.NotFoundError(INTERVAL_NOT_FOUND)
    return row


async def _require_user(user_id: int) -> None:
    if await user_repository.get_user_by_id(user_id) is None:
        raise errors.NotFoundError(USER_NOT_FOUND)


async def _require_goal(goal_id: int) -> None:
    if await goal_repository.get_goal_by_id(goal_id) is None:
        raise errors.NotFoundError(GOAL_NOT_FOUND)


async def _with_goals(row: dict) -> schemas.IntervalDetailResponse:
    goals = await goal_repository.list_goals_by_interval_id(int(row["id"]))
    return schemas.IntervalDetailResponse(
        **schemas.IntervalResponse.model_validate(row).model_dump(),
        goals=[GoalResponse.model_validate(g) for g in goals],
    )


def _unique(ids: list[int]) -> list[int]:
    seen: set[int] = set()
    ordered = []
    for value in ids:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


async def associate_goals(interval_id: int, goal_ids: list[int]) -> list[AssociationResult]:
    results: list[AssociationResult] = []
    for goal_id in _unique(goal_ids):
        try:
            row = await association_repository.associate(interval_id, goal_id)
        except errors.StoreError as exc:
            logger.warning(
                "goal_association_failed interval_id=%s goal_id=%s error=%s",
                interval_id,
                goal_id,
                exc.message,
            )
            results.append(
                AssociationResult(goal_id=goal_id, associated=False, error=type(exc).default_message)
            )
            continue
        results.append(AssociationResult(goal_id=goal_id, associated=True, interval_goal_id=int(row["id"])))
    return results


async def create_interval(payload: schemas.IntervalCreate) -> schemas.IntervalCreatedResponse:
    await _require_user(payload.user_id)

    row = await repository.create_interval(
        start_date=payload.start_date,
        end_date=payload.end_date,
        user_id=payload.user_id,
    )
    interval_id = int(row["id"])
    logger.info("interval_created interval_id=%s user_id=%s", interval_id, payload.user_id)

    associations = await associate_goals(interval_id, payload.goal_ids or [])

    detail = await _with_goals(row)
    return schemas.IntervalCreatedResponse(**detail.model_dump(), associations=associations)


async def list_intervals(
    filters: repository.IntervalFilters,
    page: Page,
) -> tuple[list[schemas.IntervalResponse], dict[str, Any]]:
    total = await repository.count_intervals(filters)
    rows = await repository.list_intervals(filters, page)
    return [schemas.IntervalResponse.model_validate(r) for r in rows], pagination_meta(total, page)


async def list_active_intervals(on_date: date, *, user_id: int | None = None) -> list[schemas.IntervalResponse]:
    rows = await repository.list_active_intervals(on_date, user_id=user_id)
    return [schemas.IntervalResponse.model_validate(r) for r in rows]


async def list_intervals_for_user(
    user_id: int,
    page: Page,
) -> tuple[list[schemas.IntervalResponse], dict[str, Any]]:
    await _require_user(user_id)
    total = await repository.count_intervals_by_user_id(user_id)
    rows = await repository.list_intervals_by_user_id(user_id, page)
    return [schemas.IntervalResponse.model_validate(r) for r in rows], pagination_meta(total, page)


async def get_interval(interval_id: int) -> schemas.IntervalDetailResponse:
    return await _with_goals(await require_interval(interval_id))


async def update_interval(interval_id: int, payload: schemas.IntervalUpdate) -> schemas.IntervalResponse:
    fields = payload.model_dump(exclude_unset=True)
    if not fields:
        raise errors.ValidationError("No fields to update.")

    existing = await require_interval(interval_id)

    start = fields.get("start_date", existing["start_date"])
    end = fields.get("end_date", existing["end_date"])
    if end <= start:
        raise errors.ValidationError(
            "Validation error",
            errors=[{"field": "endDate", "location": "body", "message": schemas.END_BEFORE_START}],
        )

    new_user_id = fields.get("user_id")
    if new_user_id is not None and new_user_id != existing["user_id"]:
        await _require_user(new_user_id)

    row = await repository.update_interval(interval_id, fields)
    if row is None:
        raise errors.NotFoundError(INTERVAL_NOT_FOUND)
    return schemas.IntervalResponse.model_validate(row)


async def delete_interval(interval_id: int) -> None:
    """
    Association rows go first, then the interval. Two separate round-trips,
    no transaction.
    """
    await require_interval(interval_id)
    unlinked = await association_repository.delete_by_interval_id(interval_id)
    deleted = await repository.delete_interval(interval_id)
    if not deleted:
        raise errors.NotFoundError(INTERVAL_NOT_FOUND)
    logger.info("interval_deleted interval_id=%s unlinked_goals=%s", interval_id, unlinked)


async def add_goal(interval_id: int, goal_id: int) -> AssociationResponse:
    await require_interval(interval_id)
    await _require_goal(goal_id)
    row = await association_repository.associate(interval_id, goal_id)
    return AssociationResponse.model_validate(row)


async def remove_goal(interval_id: int, goal_id: int) -> None:
    await require_interval(interval_id)
    await _require_goal(goal_id)
    if not await association_repository.dissociate(interval_id, goal_id):
        raise errors.NotFoundError("Association not found.")


async def list_goals(
    interval_id: int,
    page: Page,
) -> tuple[list[IntervalGoalResponse], dict[str, Any]]:
    await require_interval(interval_id)
    total = await repository.count_interval_goals(interval_id)
    rows = await repository.list_interval_goals(interval_id, page)
    return [IntervalGoalResponse.model_validate(r) for r in rows], pagination_meta(total, page)
