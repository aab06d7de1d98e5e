"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookshelf.api.v1 import auth, books, users
from bookshelf.core.config import settings
from bookshelf.core.errors import register_exception_handlers
from bookshelf.core.logging import get_logger, setup_logging
from bookshelf.core.middleware import AccessLogMiddleware, RemoveTrailingSlashMiddleware
from bookshelf.db.session import create_tables


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks."""
    setup_logging(settings.LOG_LEVEL or ("DEBUG" if settings.APP_ENV == "development" else "INFO"))
    logger = get_logger("startup")
    if settings.AUTO_CREATE_TABLES:
        await create_tables()
        logger.info("Tables ready")
    logger.info("Application starting", env=settings.APP_ENV, auth_enabled=settings.AUTH_ENABLED)
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Bookshelf API",
    description="Users and books CRUD with token authentication",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(AccessLogMiddleware)
# Added last so it runs first, ahead of routing
app.add_middleware(RemoveTrailingSlashMiddleware)

register_exception_handlers(app)

# login is registered before the /users/{id} routes
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(books.router)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Public health-check endpoint."""
    return {"status": "ok", "env": settings.APP_ENV}
