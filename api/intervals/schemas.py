"""
Interval API schemas (request/response models).
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import Field, field_validator, model_validator

from core.schemas import ApiModel, Id, reject_null
from goals.schemas import GoalResponse
from interval_goals.schemas import AssociationResult

END_BEFORE_START = "endDate must be after startDate"


class IntervalCreate(ApiModel):
    start_date: date
    end_date: date
    user_id: Id
    goal_ids: list[Id] | None = None

    @model_validator(mode="after")
    def check_date_order(self):
        if self.end_date <= self.start_date:
            raise ValueError(END_BEFORE_START)
        return self


class IntervalUpdate(ApiModel):
    start_date: date | None = None
    end_date: date | None = None
    user_id: Id | None = None

    @field_validator("start_date", "end_date", "user_id")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

    @model_validator(mode="after")
    def check_date_order(self):
        if self.start_date is not None and self.end_date is not None and self.end_date <= self.start_date:
            raise ValueError(END_BEFORE_START)
        return self


class IntervalResponse(ApiModel):
    id: int
    start_date: date
    end_date: date
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class IntervalDetailResponse(IntervalResponse):
    goals: list[GoalResponse] = Field(default_factory=list)


class IntervalCreatedResponse(IntervalDetailResponse):
    associations: list[AssociationResult] = Field(default_factory=list)
