"""
User handlers.

Emails are compared and stored lowercased. Uniqueness is checked before
writing for a friendly 409; the unique index on lower(email) is the real
guard when two requests race.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from core import errors
from core.pagination import Page, pagination_meta
from goals import repository as goal_repository
from goals.schemas import GoalResponse
from interval_goals import repository as association_repository
from interval_goals.schemas import GoalStatResponse
from intervals import repository as interval_repository
from intervals.schemas import IntervalResponse

from . import repository, schemas

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email is already registered."
USER_NOT_FOUND = "User not found."


def _to_user_response(row: dict) -> schemas.UserResponse:
    return schemas.UserResponse.model_validate(row)


async def require_user(user_id: int) -> dict:
    row = await repository.get_user_by_id(user_id)
    if row is None:
        raise errors.NotFoundError(USER_NOT_FOUND)
    return row


async def create_user(payload: schemas.UserCreate) -> schemas.UserResponse:
    email = repository.normalize_email(payload.email)
    if await repository.get_user_by_email(email) is not None:
        raise errors.ConflictError(EMAIL_TAKEN)

    try:
        row = await repository.create_user(
            email=email,
            first_name=payload.first_name,
            last_name=payload.last_name,
        )
    except errors.UniqueConstraintViolation as exc:
        # Lost the race against a concurrent insert of the same email.
        raise errors.ConflictError(EMAIL_TAKEN) from exc

    logger.info("user_created user_id=%s", row["id"])
    return _to_user_response(row)


async def list_users(
    filters: repository.UserFilters,
    page: Page,
) -> tuple[list[schemas.UserResponse], dict[str, Any]]:
    total = await repository.count_users(filters)
    rows = await repository.list_users(filters, page)
    return [_to_user_response(r) for r in rows], pagination_meta(total, page)


async def get_user(user_id: int) -> schemas.UserResponse:
    return _to_user_response(await require_user(user_id))


async def update_user(user_id: int, payload: schemas.UserUpdate) -> schemas.UserResponse:
    fields = payload.model_dump(exclude_unset=True)
    if not fields:
        raise errors.ValidationError("No fields to update.")

    existing = await require_user(user_id)

    if fields.get("email") is not None:
        fields["email"] = repository.normalize_email(fields["email"])
    new_email = fields.get("email")
    if new_email is not None and new_email != repository.normalize_email(existing["email"]):
        if await repository.get_user_by_email(new_email) is not None:
            raise errors.ConflictError(EMAIL_TAKEN)

    try:
        row = await repository.update_user(user_id, fields)
    except errors.UniqueConstraintViolation as exc:
        raise errors.ConflictError(EMAIL_TAKEN) from exc

    if row is None:
        # Deleted between the existence check and the update.
        raise errors.NotFoundError(USER_NOT_FOUND)
    return _to_user_response(row)


async def delete_user(user_id: int) -> None:
    """
    Intervals are not deleted along with their owner; a user who still owns
    intervals cannot be deleted (ForeignKeyViolation -> 409).
    """
    await require_user(user_id)
    deleted = await repository.delete_user(user_id)
    if not deleted:
        raise errors.NotFoundError(USER_NOT_FOUND)
    logger.info("user_deleted user_id=%s", user_id)


async def list_user_intervals(
    user_id: int,
    page: Page,
) -> tuple[list[IntervalResponse], dict[str, Any]]:
    await require_user(user_id)
    total = await interval_repository.count_intervals_by_user_id(user_id)
    rows = await interval_repository.list_intervals_by_user_id(user_id, page)
    return [IntervalResponse.model_validate(r) for r in rows], pagination_meta(total, page)


async def list_user_goals(
    user_id: int,
    page: Page,
) -> tuple[list[GoalResponse], dict[str, Any]]:
    await require_user(user_id)
    total = await goal_repository.count_goals_by_user_id(user_id)
    rows = await goal_repository.list_goals_by_user_id(user_id, page)
    return [GoalResponse.model_validate(r) for r in rows], pagination_meta(total, page)


async def goal_stats(
    user_id: int,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[GoalStatResponse]:
    if start_date is not None and end_date is not None and end_date < start_date:
        raise errors.ValidationError("endDate must not be before startDate.")
    await require_user(user_id)
    rows = await association_repository.get_goal_stats_by_user(
        user_id,
        start_date=start_date,
        end_date=end_date,
    )
    return [GoalStatResponse.model_validate(r) for r in rows]
