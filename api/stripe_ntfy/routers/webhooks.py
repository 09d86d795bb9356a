import logging

from fastapi import APIRouter, Depends, Request, Response

from stripe_ntfy.channels.dispatcher import NtfyDispatcher
from stripe_ntfy.errors import BodyTooLarge, DispatchError, MissingSignature, VerificationFailed
from stripe_ntfy.notifications.builder import build_notification
from stripe_ntfy.verification import Verifier

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhooks"])

MAX_BODY_BYTES = 65536
SIGNATURE_HEADER = "Stripe-Signature"


def get_dispatcher(request: Request) -> NtfyDispatcher:
    return request.app.state.dispatcher


def get_verifier(request: Request) -> Verifier:
    return request.app.state.verifier


def get_webhook_secret(request: Request) -> str:
    return request.app.state.settings.stripe_webhook_secret


async def read_limited_body(request: Request, limit: int = MAX_BODY_BYTES) -> bytes:
    """Read the request body, failing as soon as it grows past *limit* bytes."""
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise BodyTooLarge(f"Request body exceeds {limit} bytes")
    return bytes(body)


@router.post("/", status_code=204, summary="Receive a Stripe webhook")
async def receive_stripe_webhook(
    request: Request,
    dispatcher: NtfyDispatcher = Depends(get_dispatcher),
    verify: Verifier = Depends(get_verifier),
    secret: str = Depends(get_webhook_secret),
):
    try:
        payload = await read_limited_body(request)
    except BodyTooLarge as e:
        logger.warning("Error reading request body: %s", e)
        raise

    signature = request.headers.get(SIGNATURE_HEADER, "")
    if not signature:
        logger.warning("Received request with no %s header", SIGNATURE_HEADER)
        raise MissingSignature()

    try:
        event = verify(payload, signature, secret)
    except VerificationFailed as e:
        logger.warning("Error verifying webhook signature: %s", e)
        raise

    logger.info("Received event type: %s", event.type)
    notification = build_notification(event.type, event.data)

    try:
        await dispatcher.dispatch(event.live_mode, notification)
    except DispatchError as e:
        logger.error("Failed to forward %s event to ntfy: %s", event.type, e)
        raise

    return Response(status_code=204)
