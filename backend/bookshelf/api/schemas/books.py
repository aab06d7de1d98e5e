"""Book request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BookCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., max_length=255)
    publisher: str = Field(..., max_length=255)


class BookUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    author: str | None = Field(None, max_length=255)
    publisher: str | None = Field(None, max_length=255)


class BookRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: str
    publisher: str
    created_at: datetime
    updated_at: datetime


class BookResponse(BaseModel):
    message: str
    book: BookRead


class BookListResponse(BaseModel):
    message: str
    books: list[BookRead]
