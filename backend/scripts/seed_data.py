"""
Seed a demo user and a few books for development.
Run: python -m scripts.seed_data  (from backend/)
"""

import asyncio

from bookshelf.core.logging import get_logger, setup_logging
from bookshelf.db.session import async_session, create_tables
from bookshelf.repositories.books import create_book
from bookshelf.repositories.users import create_user, get_user_by_email

logger = get_logger("seed")

SEED_USERS = [
    {
        "name": "Demo Admin",
        "email": "admin@bookshelf.local",
        "password": "admin123",  # Change in production!
    },
]

SEED_BOOKS = [
    {"title": "The Pragmatic Programmer", "author": "Andrew Hunt, David Thomas", "publisher": "Addison-Wesley"},
    {"title": "Fluent Python", "author": "Luciano Ramalho", "publisher": "O'Reilly Media"},
    {"title": "Designing Data-Intensive Applications", "author": "Martin Kleppmann", "publisher": "O'Reilly Media"},
]


async def seed():
    """Insert seed users (skipping existing emails) and books."""
    await create_tables()
    async with async_session() as session:
        for data in SEED_USERS:
            if await get_user_by_email(session, data["email"]) is not None:
                logger.info("Seed user exists", email=data["email"])
                continue
            user = await create_user(db=session, **data)
            logger.info("Created user", email=user.email, user_id=user.id)
        for data in SEED_BOOKS:
            book = await create_book(db=session, **data)
            logger.info("Created book", title=book.title, book_id=book.id)
        await session.commit()
    logger.info("Seeding done", users=len(SEED_USERS), books=len(SEED_BOOKS))


if __name__ == "__main__":
    setup_logging("INFO")
    asyncio.run(seed())
