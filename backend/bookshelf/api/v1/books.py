"""Book CRUD endpoints. Every route needs a valid access token."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.api.deps import get_current_user_id, get_db, path_id
from bookshelf.api.schemas.books import (
    BookCreate,
    BookListResponse,
    BookRead,
    BookResponse,
    BookUpdate,
)
from bookshelf.api.schemas.common import MessageResponse
from bookshelf.core.errors import BadRequestError, NotFoundError, db_error_message
from bookshelf.core.logging import get_logger
from bookshelf.db.models.book import Book
from bookshelf.repositories import books as book_repository

logger = get_logger(__name__)

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    dependencies=[Depends(get_current_user_id)],
)


async def _get_book_or_404(db: AsyncSession, book_id: int) -> Book:
    book = await book_repository.get_book_by_id(db, book_id)
    if book is None:
        raise NotFoundError("book not found")
    return book


@router.get("", response_model=BookListResponse)
async def list_books(db: AsyncSession = Depends(get_db)) -> BookListResponse:
    try:
        books = await book_repository.list_books(db)
    except SQLAlchemyError as exc:
        raise BadRequestError("bad request", error=db_error_message(exc)) from exc

    return BookListResponse(
        message="success get all books",
        books=[BookRead.model_validate(b) for b in books],
    )


@router.get("/{id}", response_model=BookResponse)
async def get_book(
    book_id: int = Depends(path_id),
    db: AsyncSession = Depends(get_db),
) -> BookResponse:
    book = await _get_book_or_404(db, book_id)
    return BookResponse(message="success get book", book=BookRead.model_validate(book))


@router.post("", response_model=BookResponse)
async def create_book(payload: BookCreate, db: AsyncSession = Depends(get_db)) -> BookResponse:
    try:
        book = await book_repository.create_book(db, **payload.model_dump())
    except SQLAlchemyError as exc:
        raise BadRequestError("bad request", error=db_error_message(exc)) from exc

    logger.info("book_created", book_id=book.id)
    return BookResponse(message="success create new book", book=BookRead.model_validate(book))


@router.put("/{id}", response_model=BookResponse)
async def update_book(
    payload: BookUpdate,
    book_id: int = Depends(path_id),
    db: AsyncSession = Depends(get_db),
) -> BookResponse:
    """Apply the fields present in the body to the stored book."""
    book = await _get_book_or_404(db, book_id)
    try:
        book = await book_repository.update_book(db, book, **payload.model_dump(exclude_unset=True))
    except SQLAlchemyError as exc:
        raise BadRequestError("Failed to update book", error=db_error_message(exc)) from exc

    logger.info("book_updated", book_id=book.id)
    return BookResponse(message="Success Update data", book=BookRead.model_validate(book))


@router.delete("/{id}", response_model=MessageResponse)
async def delete_book(
    book_id: int = Depends(path_id),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    book = await _get_book_or_404(db, book_id)
    try:
        await book_repository.delete_book(db, book)
    except SQLAlchemyError as exc:
        raise BadRequestError("error delete book", error=db_error_message(exc)) from exc

    logger.info("book_deleted", book_id=book_id)
    return MessageResponse(message="success delete data")
