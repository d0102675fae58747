"""
User API endpoints.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Path, Query, status

from core import responses
from core.pagination import DEFAULT_LIMIT, MAX_LIMIT, MAX_PAGE, Page
from core.schemas import MAX_ID

from . import repository, schemas, service

router = APIRouter(prefix="/api/users")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(payload: schemas.UserCreate) -> dict:
    user = await service.create_user(payload)
    return responses.success(user, message="User created successfully.")


@router.get("")
async def list_users(
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    email: str | None = Query(default=None, max_length=320),
    first_name: str | None = Query(default=None, alias="firstName", max_length=50),
    last_name: str | None = Query(default=None, alias="lastName", max_length=50),
) -> dict:
    filters = repository.UserFilters(email=email, first_name=first_name, last_name=last_name)
    users, pagination = await service.list_users(filters, Page.from_request(page, limit))
    return responses.listing(users, pagination=pagination)


@router.get("/{user_id}")
async def get_user(user_id: int = Path(..., gt=0, le=MAX_ID)) -> dict:
    return responses.success(await service.get_user(user_id))


@router.put("/{user_id}")
async def update_user(payload: schemas.UserUpdate, user_id: int = Path(..., gt=0, le=MAX_ID)) -> dict:
    user = await service.update_user(user_id, payload)
    return responses.success(user, message="User updated successfully.")


@router.delete("/{user_id}")
async def delete_user(user_id: int = Path(..., gt=0, le=MAX_ID)) -> dict:
    await service.delete_user(user_id)
    return responses.success(message="User deleted successfully.")


@router.get("/{user_id}/intervals")
async def list_user_intervals(
    user_id: int = Path(..., gt=0, le=MAX_ID),
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> dict:
    intervals, pagination = await service.list_user_intervals(user_id, Page.from_request(page, limit))
    return responses.listing(intervals, pagination=pagination)


@router.get("/{user_id}/goals")
async def list_user_goals(
    user_id: int = Path(..., gt=0, le=MAX_ID),
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> dict:
    goals, pagination = await service.list_user_goals(user_id, Page.from_request(page, limit))
    return responses.listing(goals, pagination=pagination)


@router.get("/{user_id}/goal-stats")
async def get_goal_stats(
    user_id: int = Path(..., gt=0, le=MAX_ID),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
) -> dict:
    stats = await service.goal_stats(user_id, start_date=start_date, end_date=end_date)
    return responses.listing(stats)
