"""Domain service layer package."""

from __future__ import annotations

from .todo import ToDoService
from .validation import (
    validate_credentials,
    validate_ownership,
    validate_task_body,
    validate_user_body,
)

__all__ = [
    "ToDoService",
    "validate_credentials",
    "validate_ownership",
    "validate_task_body",
    "validate_user_body",
]
