"""Users — list and create endpoints.

Invariants:
    - GET /api/users always 200 on success, [] when empty
    - POST /api/users checks presence → sanitize → shape → persist,
      name before email at every stage
    - Duplicate email → 409; any other create-path persistence error → 400
      with the underlying message; list-path persistence error → 500
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.core.domain_types import UserId
from userhub.core.errors import (
    DatabaseError, ResourceNotFoundError, WriteRejectedError,
)
from userhub.core.validation import validate_user_input
from userhub.infrastructure.database import get_db
from userhub.infrastructure.user_repository import UserRepository
from userhub.schemas.user import UserCreate, UserResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


@router.get("", response_model=list[UserResponse])
async def list_users(repo: UserRepository = Depends(get_user_repository)):
    """All users in insertion order."""
    users = await repo.list()
    return [UserResponse.model_validate(u) for u in users]


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate | None = None,
    repo: UserRepository = Depends(get_user_repository),
):
    """Validate, sanitize and persist a new user."""
    body = body or UserCreate()
    name, email = validate_user_input(body.name, body.email)
    try:
        user = await repo.create(name, email)
    except DatabaseError as e:
        raise WriteRejectedError(e.message) from e
    logger.info("User created", extra={"user_id": user.id})
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int, repo: UserRepository = Depends(get_user_repository),
):
    user = await repo.get(UserId(user_id))
    if user is None:
        raise ResourceNotFoundError("User", user_id)
    return UserResponse.model_validate(user)
