"""
Interval API endpoints, including /api/intervals/{id}/goals association
management.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Path, Query, status

from core import responses
from core.pagination import DEFAULT_LIMIT, MAX_LIMIT, MAX_PAGE, Page
from core.schemas import MAX_ID
from interval_goals.schemas import AssociateRequest

from . import repository, schemas, service

router = APIRouter(prefix="/api/intervals")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_interval(payload: schemas.IntervalCreate) -> dict:
    interval = await service.create_interval(payload)
    return responses.success(interval, message="Interval created successfully.")


@router.get("")
async def list_intervals(
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    user_id: int | None = Query(default=None, alias="userId", gt=0, le=MAX_ID),
    goal_id: int | None = Query(default=None, alias="goalId", gt=0, le=MAX_ID),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
) -> dict:
    filters = repository.IntervalFilters(
        user_id=user_id,
        goal_id=goal_id,
        start_date=start_date,
        end_date=end_date,
    )
    intervals, pagination = await service.list_intervals(filters, Page.from_request(page, limit))
    return responses.listing(intervals, pagination=pagination)


@router.get("/active")
async def list_active_intervals(
    on_date: date = Query(..., alias="date"),
    user_id: int | None = Query(default=None, alias="userId", gt=0, le=MAX_ID),
) -> dict:
    return responses.listing(await service.list_active_intervals(on_date, user_id=user_id))


@router.get("/user/{user_id}")
async def list_intervals_for_user(
    user_id: int = Path(..., gt=0, le=MAX_ID),
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> dict:
    intervals, pagination = await service.list_intervals_for_user(user_id, Page.from_request(page, limit))
    return responses.listing(intervals, pagination=pagination)


@router.get("/{interval_id}")
async def get_interval(interval_id: int = Path(..., gt=0, le=MAX_ID)) -> dict:
    return responses.success(await service.get_interval(interval_id))


@router.put("/{interval_id}")
async def update_interval(payload: schemas.IntervalUpdate, interval_id: int = Path(..., gt=0, le=MAX_ID)) -> dict:
    interval = await service.update_interval(interval_id, payload)
    return responses.success(interval, message="Interval updated successfully.")


@router.delete("/{interval_id}")
async def delete_interval(interval_id: int = Path(..., gt=0, le=MAX_ID)) -> dict:
    await service.delete_interval(interval_id)
    return responses.success(message="Interval deleted successfully.")


@router.post("/{interval_id}/goals", status_code=status.HTTP_201_CREATED)
async def add_goal(payload: AssociateRequest, interval_id: int = Path(..., gt=0, le=MAX_ID)) -> dict:
    association = await service.add_goal(interval_id, payload.goal_id)
    return responses.success(association, message="Goal associated successfully.")


@router.delete("/{interval_id}/goals/{goal_id}")
async def remove_goal(
    interval_id: int = Path(..., gt=0, le=MAX_ID),
    goal_id: int = Path(..., gt=0, le=MAX_ID),
) -> dict:
    await service.remove_goal(interval_id, goal_id)
    return responses.success(message="Goal dissociated successfully.")


@router.get("/{interval_id}/goals")
async def list_goals(
    interval_id: int = Path(..., gt=0, le=MAX_ID),
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> dict:
    goals, pagination = await service.list_goals(interval_id, Page.from_request(page, limit))
    return responses.listing(goals, pagination=pagination)
