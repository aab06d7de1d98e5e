"""
ASGI middleware: trailing-slash stripping and access logging.
"""

from __future__ import annotations

import time
from urllib.parse import parse_qsl, urlencode

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from bookshelf.core.logging import get_logger

logger = get_logger("http")

# query parameters never written to the access log
REDACTED_PARAMS = {"token"}


def loggable_uri(path: str, query_string: bytes) -> str:
    """`path?query` with credential parameters masked."""
    if not query_string:
        return path
    pairs = parse_qsl(query_string.decode("latin-1"), keep_blank_values=True)
    masked = [(k, "***" if k in REDACTED_PARAMS else v) for k, v in pairs]
    return f"{path}?{urlencode(masked, safe='*')}"


class RemoveTrailingSlashMiddleware:
    """Rewrite `/users/` to `/users` before routing. `/` is left alone."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            path: str = scope["path"]
            if len(path) > 1 and path.endswith("/"):
                scope = dict(scope)
                scope["path"] = path.rstrip("/") or "/"
                raw_path = scope.get("raw_path")
                if raw_path:
                    scope["raw_path"] = raw_path.rstrip(b"/") or b"/"
        await self.app(scope, receive, send)


class AccessLogMiddleware:
    """One `http_request` event per request: method, uri, status, duration."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            logger.info(
                "http_request",
                method=scope["method"],
                uri=loggable_uri(scope["path"], scope.get("query_string", b"")),
                status=status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
