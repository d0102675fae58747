"""
Base pydantic model for request/response schemas.

Python code uses snake_case; the wire format is camelCase (`firstName`,
`startDate`, ...). Both spellings are accepted on input.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Ids are bigint columns.
MAX_ID = 2**63 - 1

Id = Annotated[int, Field(gt=0, le=MAX_ID)]


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def reject_null(value: Any) -> Any:
    """
    For partial updates: a field may be omitted, but not sent as null.
    """
    if value is None:
        raise ValueError("must not be null")
    return value
