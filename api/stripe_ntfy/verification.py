"""Stripe webhook signature verification."""

from dataclasses import dataclass
from typing import Any, Callable

import stripe
from pydantic import BaseModel, ValidationError

from stripe_ntfy.errors import VerificationFailed


@dataclass(frozen=True)
class InboundEvent:
    """A verified Stripe event, reduced to what the relay needs."""
    type: str
    live_mode: bool
    data: Any  # decoded JSON of event.data.object


Verifier = Callable[[bytes, str, str], InboundEvent]


class _EventData(BaseModel):
    object: Any


class _EventEnvelope(BaseModel):
    type: str
    livemode: bool
    data: _EventData


def verify_stripe_event(
    payload: bytes,
    signature: str,
    secret: str,
    tolerance: int = stripe.Webhook.DEFAULT_TOLERANCE,
) -> InboundEvent:
    """
    Check the Stripe-Signature header against the raw body, then decode it.

    The HMAC and timestamp tolerance checks are done by the stripe library.
    The body is only parsed once the signature is known to be good. The API
    version of the payload is deliberately not checked: only a handful of
    stable fields are read.
    """
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise VerificationFailed("Payload is not valid UTF-8") from e

    try:
        stripe.WebhookSignature.verify_header(text, signature, secret, tolerance)
    except stripe.SignatureVerificationError as e:
        raise VerificationFailed(f"Invalid signature: {e.user_message or e}") from e

    try:
        envelope = _EventEnvelope.model_validate_json(text)
    except ValidationError as e:
        raise VerificationFailed(f"Malformed event payload: {e.error_count()} error(s)") from e

    return InboundEvent(
        type=envelope.type,
        live_mode=envelope.livemode,
        data=envelope.data.object,
    )
