"""User registration endpoint."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...deps import RawBodyDependency, ToDoServiceDependency
from ...schemas import UserPayload, UserRegistered

router = APIRouter(tags=["users"])


@router.post(
    "/user",
    response_model=UserRegistered,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": UserPayload.model_json_schema()}},
        }
    },
)
def register_user(
    service: ToDoServiceDependency,
    body: RawBodyDependency,
) -> UserRegistered:
    user = service.register_user(body)
    return UserRegistered.model_validate(user)
