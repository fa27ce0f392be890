"""Static bearer-token authentication applied to every request."""
import logging
import secrets

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from core.config import get_settings

logger = logging.getLogger(__name__)

UNAUTHORIZED_BODY = {"error": "Unauthorized request"}


def is_authorized(authorization: str | None, api_token: str) -> bool:
    """
    Check an Authorization header against the configured API token.

    The header must equal `Bearer <api_token>` exactly. A missing header, any
    other scheme, or an unconfigured token is rejected.
    """
    if not authorization or not api_token:
        return False
    return secrets.compare_digest(
        authorization.encode("utf-8"),
        f"Bearer {api_token}".encode(),
    )


class ApiTokenMiddleware(BaseHTTPMiddleware):
    """Reject any request that does not carry the configured bearer token."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Short-circuit with 401 unless the request is authorized."""
        api_token = get_settings().api_token
        if not is_authorized(request.headers.get("Authorization"), api_token):
            logger.error("Unauthorized request to path: %s", request.url.path)
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content=UNAUTHORIZED_BODY,
            )
        return await call_next(request)
