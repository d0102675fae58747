"""
Association API schemas.
"""

from __future__ import annotations

from datetime import date, datetime

from core.schemas import ApiModel, Id


class AssociateRequest(ApiModel):
    goal_id: Id


class AssociationResponse(ApiModel):
    id: int
    interval_id: int
    goal_id: int
    created_at: datetime | None = None


class GoalAssociationResponse(AssociationResponse):
    start_date: date
    end_date: date
    user_id: int


class AssociationResult(ApiModel):
    """
    Outcome of linking one requested goal while creating an interval.
    """

    goal_id: int
    associated: bool
    interval_goal_id: int | None = None
    error: str | None = None


class GoalStatResponse(ApiModel):
    id: int
    name: str
    interval_count: int
