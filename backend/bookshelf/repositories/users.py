"""
User repository containing all data-access operations for the users table.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.core.security import hash_password, verify_password
from bookshelf.db.models.user import User

MUTABLE_FIELDS = {"name", "email", "password"}


def _normalize_email(email: str) -> str:
    return email.lower().strip()


async def create_user(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
) -> User:
    """Create a new user with a hashed password."""
    user = User(
        name=name.strip(),
        email=_normalize_email(email),
        password=hash_password(password),
    )
    db.add(user)
    await db.flush()
    return user


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    """Fetch a user by primary key."""
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Fetch a user by email address (case-insensitive)."""
    stmt = select(User).where(User.email == _normalize_email(email))
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def authenticate_user(
    db: AsyncSession,
    *,
    email: str,
    password: str,
) -> User | None:
    """Validate credentials and return the user on success."""
    user = await get_user_by_email(db, email)
    if user is None:
        return None
    if not verify_password(password, user.password):
        return None
    return user


async def list_users(db: AsyncSession) -> list[User]:
    """Return every user ordered by id."""
    result = await db.execute(select(User).order_by(User.id))
    return list(result.scalars().all())


async def update_user(db: AsyncSession, user: User, **fields: object) -> User:
    """Apply the given fields onto `user` and flush."""
    for key, value in fields.items():
        if key not in MUTABLE_FIELDS or value is None:
            continue

        if key == "email" and isinstance(value, str):
            value = _normalize_email(value)
        if key == "name" and isinstance(value, str):
            value = value.strip()
        if key == "password" and isinstance(value, str):
            value = hash_password(value)

        setattr(user, key, value)

    await db.flush()
    return user


async def delete_user(db: AsyncSession, user: User) -> None:
    """Hard-delete a user."""
    await db.delete(user)
    await db.flush()
