"""Authentication endpoint: exchange email/password for an access token."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.api.deps import get_db
from bookshelf.api.schemas.auth import LoginRequest, LoginResponse
from bookshelf.core.errors import UnauthorizedError
from bookshelf.core.logging import get_logger
from bookshelf.core.security import create_access_token
from bookshelf.repositories import users as user_repository

logger = get_logger(__name__)

router = APIRouter(prefix="/users", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)) -> LoginResponse:
    """Authenticate a user and issue an access token."""
    user = await user_repository.authenticate_user(
        db,
        email=payload.email,
        password=payload.password,
    )
    if user is None:
        logger.info("login_failed", email=payload.email)
        raise UnauthorizedError("email or password does not match")

    logger.info("login_succeeded", user_id=user.id)
    return LoginResponse(user_id=user.id, token=create_access_token(user.id))
