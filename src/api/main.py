"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import bookmarks
from core.auth import ApiTokenMiddleware
from core.config import get_settings
from db.session import dispose_engine
from services.exceptions import BookmarkNotFoundError, BookmarkValidationError

app_settings = get_settings()

logging.basicConfig(
    level=app_settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - release the connection pool on shutdown."""
    yield
    await dispose_engine()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


def error_body(message: str) -> dict[str, dict[str, str]]:
    """Shape a client error the way every 400/404 response is shaped."""
    return {"error": {"message": message}}


app = FastAPI(
    title="Bookmarks API",
    description="Token-protected CRUD for sanitized, rated bookmarks.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(BookmarkValidationError)
async def bookmark_validation_exception_handler(
    _request: Request, exc: BookmarkValidationError,
) -> JSONResponse:
    """Return the validation message with a 400."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(exc.message),
    )


@app.exception_handler(BookmarkNotFoundError)
async def bookmark_not_found_exception_handler(
    _request: Request, exc: BookmarkNotFoundError,
) -> JSONResponse:
    """Return a uniform 404 for unknown bookmark IDs."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_body(exc.message),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed requests (bad JSON, non-integer IDs) in the common error shape."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = (first.get("loc") or ("request",))[-1]
        message = f"{field}: {first.get('msg', 'invalid')}"
    else:
        message = "Invalid request"
    logger.error("Malformed request to %s: %s", request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(message),
    )


# Middleware added last runs first: CORS answers preflights, then the token
# check, then security headers on whatever the app returns.
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(ApiTokenMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(bookmarks.router)
