"""Pydantic schemas for public interfaces."""

from __future__ import annotations

from .system import ErrorResponse, HealthCheckResponse
from .task import TaskCreated, TaskPayload, TaskRead
from .user import UserPayload, UserRegistered

__all__ = [
    "ErrorResponse",
    "HealthCheckResponse",
    "TaskCreated",
    "TaskPayload",
    "TaskRead",
    "UserPayload",
    "UserRegistered",
]
