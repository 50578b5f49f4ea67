import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from r2h_redirect.const import STATUS_TEXTS
from r2h_redirect.responses import error_response

logger = logging.getLogger(__name__)


class ErrorResponseMiddleware(BaseHTTPMiddleware):
    """Middleware that turns unexpected exceptions into a plain text 500 response."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(f"Unhandled error while processing {request.url}: {e}")
            return error_response(500, STATUS_TEXTS[500])
