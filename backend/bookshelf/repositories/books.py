"""
Book repository: data-access operations for the books table.

Same rules as the user repository: AsyncSession in, flush but never commit.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.db.models.book import Book

MUTABLE_FIELDS = {"title", "author", "publisher"}


async def create_book(
    db: AsyncSession,
    *,
    title: str,
    author: str,
    publisher: str,
) -> Book:
    book = Book(title=title, author=author, publisher=publisher)
    db.add(book)
    await db.flush()
    return book


async def get_book_by_id(db: AsyncSession, book_id: int) -> Book | None:
    return await db.get(Book, book_id)


async def list_books(db: AsyncSession) -> list[Book]:
    result = await db.execute(select(Book).order_by(Book.id))
    return list(result.scalars().all())


async def update_book(db: AsyncSession, book: Book, **fields: object) -> Book:
    """Apply the given fields onto `book` and flush."""
    for key, value in fields.items():
        if key not in MUTABLE_FIELDS or value is None:
            continue
        setattr(book, key, value)

    await db.flush()
    return book


async def delete_book(db: AsyncSession, book: Book) -> None:
    await db.delete(book)
    await db.flush()
