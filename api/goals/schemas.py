"""
Goal API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from core.schemas import ApiModel, reject_null


class GoalCreate(ApiModel):
    name: str = Field(..., min_length=2, max_length=100)
    description: str | None = Field(default=None, max_length=500)


class GoalUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=2, max_length=100)
    # null clears the description.
    description: str | None = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        return reject_null(value)


class GoalResponse(ApiModel):
    id: int
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class IntervalGoalResponse(GoalResponse):
    """
    A goal as seen from one interval, carrying the association row id.
    """

    interval_goal_id: int
