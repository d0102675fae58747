"""
Goal API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Path, Query, status

from core import responses
from core.pagination import DEFAULT_LIMIT, MAX_LIMIT, MAX_PAGE, Page
from core.schemas import MAX_ID

from . import repository, schemas, service

router = APIRouter(prefix="/api/goals")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_goal(payload: schemas.GoalCreate) -> dict:
    goal = await service.create_goal(payload)
    return responses.success(goal, message="Goal created successfully.")


@router.get("")
async def list_goals(
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    name: str | None = Query(default=None, max_length=100),
) -> dict:
    goals, pagination = await service.list_goals(
        repository.GoalFilters(name=name),
        Page.from_request(page, limit),
    )
    return responses.listing(goals, pagination=pagination)


@router.get("/interval/{interval_id}")
async def list_goals_for_interval(interval_id: int = Path(..., gt=0, le=MAX_ID)) -> dict:
    return responses.listing(await service.list_goals_for_interval(interval_id))


@router.get("/{goal_id}")
async def get_goal(goal_id: int = Path(..., gt=0, le=MAX_ID)) -> dict:
    return responses.success(await service.get_goal(goal_id))


@router.put("/{goal_id}")
async def update_goal(payload: schemas.GoalUpdate, goal_id: int = Path(..., gt=0, le=MAX_ID)) -> dict:
    goal = await service.update_goal(goal_id, payload)
    return responses.success(goal, message="Goal updated successfully.")


@router.delete("/{goal_id}")
async def delete_goal(goal_id: int = Path(..., gt=0, le=MAX_ID)) -> dict:
    await service.delete_goal(goal_id)
    return responses.success(message="Goal deleted successfully.")


@router.get("/{goal_id}/intervals")
async def list_goal_intervals(goal_id: int = Path(..., gt=0, le=MAX_ID)) -> dict:
    return responses.listing(await service.list_goal_intervals(goal_id))
