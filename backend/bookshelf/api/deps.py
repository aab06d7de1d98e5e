"""Shared dependencies for API routes."""

from __future__ import annotations

from fastapi import Depends, Path, status
from fastapi.security import APIKeyHeader, APIKeyQuery

from bookshelf.core.config import settings
from bookshelf.core.errors import ApiError, BadRequestError, ForbiddenError, UnauthorizedError
from bookshelf.core.logging import get_logger
from bookshelf.core.security import decode_access_token
from bookshelf.db.session import get_db  # noqa: F401  re-exported for routers

logger = get_logger(__name__)

# Raw token or "Bearer <token>" in the Authorization header, else ?token=
header_scheme = APIKeyHeader(name="Authorization", auto_error=False)
query_scheme = APIKeyQuery(name="token", auto_error=False)


# ids are INTEGER primary keys
MAX_ID = 2**31 - 1


def path_id(id: str = Path(..., description="Numeric resource id")) -> int:
    """Parse the `{id}` path segment; anything outside 1..MAX_ID is rejected."""
    try:
        value = int(id)
    except ValueError:
        raise BadRequestError("invalid id") from None
    if not 1 <= value <= MAX_ID:
        raise BadRequestError("invalid id")
    return value


def extract_token(authorization: str | None, query_token: str | None) -> str | None:
    """Pick the token from the header (with or without a Bearer prefix) or the query."""
    raw = (authorization or "").strip()
    scheme, _, credentials = raw.partition(" ")
    if scheme.lower() == "bearer":
        raw = credentials.strip()
    if not raw:
        raw = (query_token or "").strip()
    return raw or None


async def get_current_user_id(
    authorization: str | None = Depends(header_scheme),
    query_token: str | None = Depends(query_scheme),
) -> int | None:
    """
    Resolve the caller's user id from their access token.

    Returns None without looking at the request when authentication is
    disabled.
    """
    if not settings.AUTH_ENABLED:
        return None

    token = extract_token(authorization, query_token)
    if token is None:
        raise UnauthorizedError("need authorization token")

    claims = decode_access_token(token)
    if claims is None:
        raise UnauthorizedError("invalid authorization token")

    user_id = claims.get("user_id")
    if isinstance(user_id, bool) or not isinstance(user_id, (int, float)):
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Token does not match user ID",
        )
    return int(user_id)


async def require_owner(
    current_user_id: int | None = Depends(get_current_user_id),
    resource_id: int = Depends(path_id),
) -> int:
    """Only the user named in the path may act on it. Returns the path id."""
    if current_user_id is not None and current_user_id != resource_id:
        logger.info("access_denied", user_id=current_user_id, target_id=resource_id)
        raise ForbiddenError()
    return resource_id
