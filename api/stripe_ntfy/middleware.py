"""Request size limit middleware."""

import logging

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from stripe_ntfy.errors import BodyTooLarge

logger = logging.getLogger(__name__)


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Reject requests that announce a body larger than 64 KiB.

    Only the Content-Length header is checked here; chunked bodies are
    bounded while the webhook route streams them.
    """

    MAX_BODY_SIZE = 65536

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path == "/health":
            return await call_next(request)

        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.MAX_BODY_SIZE:
            logger.warning("Rejected request with Content-Length %s", content_length)
            return JSONResponse(
                status_code=BodyTooLarge.status_code,
                content={
                    "error": {
                        "code": BodyTooLarge.status_code,
                        "message": f"Request body too large. Max size is {self.MAX_BODY_SIZE} bytes.",
                    }
                },
            )

        return await call_next(request)
