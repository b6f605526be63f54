"""Task-related Pydantic schemas."""

from __future__ import annotations

import re
from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

_ISO_DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")

TASK_READ_EXAMPLE = {
    "id": "3f0c1c56-8d7a-4b8e-9f43-6f1e2a7d9b10",
    "description": "buy milk",
    "due": "2021-06-30",
}


class TaskPayload(BaseModel):
    """Body accepted when creating or replacing a task.

    ``id`` and ``owner`` are never read from the body.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "description": "buy milk",
                "due": "2021-06-30",
            }
        },
    )

    description: str = Field(min_length=1)
    due: str | None = Field(default=None, description="Calendar date in YYYY-MM-DD form.")

    @field_validator("due")
    @classmethod
    def _ensure_calendar_date(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if not _ISO_DATE_PATTERN.match(value):
            raise ValueError("due must be a date in YYYY-MM-DD form")
        date.fromisoformat(value)
        return value


class TaskCreated(BaseModel):
    """Identifier assigned to a freshly created task."""

    id: UUID


class TaskRead(BaseModel):
    """Public representation of a task."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": TASK_READ_EXAMPLE},
    )

    id: UUID
    description: str
    due: str | None = None


__all__ = [
    "TaskCreated",
    "TaskPayload",
    "TaskRead",
]
