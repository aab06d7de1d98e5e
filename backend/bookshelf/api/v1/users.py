"""User CRUD endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.api.deps import get_current_user_id, get_db, require_owner
from bookshelf.api.schemas.common import MessageResponse
from bookshelf.api.schemas.users import (
    UserCreate,
    UserListResponse,
    UserRead,
    UserResponse,
    UserUpdate,
)
from bookshelf.core.errors import BadRequestError, NotFoundError, db_error_message
from bookshelf.core.logging import get_logger
from bookshelf.db.models.user import User
from bookshelf.repositories import users as user_repository

logger = get_logger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


async def _get_user_or_404(db: AsyncSession, user_id: int) -> User:
    user = await user_repository.get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError("user not found")
    return user


@router.get("", response_model=UserListResponse, dependencies=[Depends(get_current_user_id)])
async def list_users(db: AsyncSession = Depends(get_db)) -> UserListResponse:
    """List every user."""
    try:
        users = await user_repository.list_users(db)
    except SQLAlchemyError as exc:
        raise BadRequestError("bad request", error=db_error_message(exc)) from exc

    return UserListResponse(
        message="success get all users",
        users=[UserRead.model_validate(u) for u in users],
    )


@router.get("/{id}", response_model=UserResponse)
async def get_user(
    user_id: int = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Fetch one user. Callers may only read their own record."""
    user = await _get_user_or_404(db, user_id)
    return UserResponse(message="success get user", user=UserRead.model_validate(user))


@router.post("", response_model=UserResponse)
async def create_user(payload: UserCreate, db: AsyncSession = Depends(get_db)) -> UserResponse:
    """Register a new user. Public: no token needed."""
    try:
        user = await user_repository.create_user(
            db,
            name=payload.name,
            email=payload.email,
            password=payload.password,
        )
    except SQLAlchemyError as exc:
        logger.info("user_create_failed", email=payload.email, error=db_error_message(exc))
        raise BadRequestError("bad request", error=db_error_message(exc)) from exc

    logger.info("user_created", user_id=user.id)
    return UserResponse(
        message="success create new user, please login to get token",
        user=UserRead.model_validate(user),
    )


@router.put("/{id}", response_model=UserResponse)
async def update_user(
    payload: UserUpdate,
    user_id: int = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Apply the fields present in the body to the stored user."""
    user = await _get_user_or_404(db, user_id)
    try:
        user = await user_repository.update_user(db, user, **payload.model_dump(exclude_unset=True))
    except SQLAlchemyError as exc:
        raise BadRequestError("Failed to update user", error=db_error_message(exc)) from exc

    logger.info("user_updated", user_id=user.id)
    return UserResponse(message="Success Update data", user=UserRead.model_validate(user))


@router.delete("/{id}", response_model=MessageResponse)
async def delete_user(
    user_id: int = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    user = await _get_user_or_404(db, user_id)
    try:
        await user_repository.delete_user(db, user)
    except SQLAlchemyError as exc:
        raise BadRequestError("error delete user", error=db_error_message(exc)) from exc

    logger.info("user_deleted", user_id=user_id)
    return MessageResponse(message="success delete data")
