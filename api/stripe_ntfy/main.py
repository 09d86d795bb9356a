import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from stripe_ntfy import __version__
from stripe_ntfy.channels.dispatcher import NtfyDispatcher
from stripe_ntfy.config import Settings
from stripe_ntfy.errors import RelayError
from stripe_ntfy.middleware import RequestSizeLimitMiddleware
from stripe_ntfy.routers import webhooks
from stripe_ntfy.verification import Verifier, verify_stripe_event

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings,
    dispatcher: Optional[NtfyDispatcher] = None,
    verifier: Verifier = verify_stripe_event,
) -> FastAPI:
    """
    Build the relay application.

    Settings are passed in rather than read from a global so tests can wire
    the app to fixtures. *dispatcher* and *verifier* default to the real ntfy
    client and Stripe signature check.
    """
    app = FastAPI(
        title="stripe-ntfy",
        description="Relay Stripe webhook events to ntfy push notifications.",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.settings = settings
    app.state.dispatcher = dispatcher or NtfyDispatcher(settings.ntfy, timeout=settings.ntfy_timeout)
    app.state.verifier = verifier

    app.add_middleware(RequestSizeLimitMiddleware)

    # --- Exception Handlers ---

    @app.exception_handler(RelayError)
    async def relay_exception_handler(request: Request, exc: RelayError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": {"code": exc.status_code, "message": exc.message}},
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": {"code": exc.status_code, "message": exc.detail}},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": {"code": 500, "message": "Internal server error"}},
        )

    # --- Routes ---

    app.include_router(webhooks.router)

    @app.get("/health", summary="Health check")
    async def health_ping():
        return {"status": "ok", "version": __version__}

    return app
