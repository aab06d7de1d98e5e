"""
Models package — re-exports Base and all models.

Import models here so Alembic's `target_metadata = Base.metadata`
picks up every table automatically.

When adding a new model:
    1. Create `bookshelf/db/models/<table_name>.py`
    2. Import it here
"""

from bookshelf.db.models.base import Base
from bookshelf.db.models.book import Book
from bookshelf.db.models.user import User

__all__ = [
    "Base",
    "Book",
    "User",
]
