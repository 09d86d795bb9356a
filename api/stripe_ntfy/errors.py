"""Error taxonomy for the relay.

Every inbound failure maps to the HTTP status returned to Stripe. Stripe only
looks at the status code and redelivers on its own schedule, so nothing here
is retried locally.
"""

from typing import Optional


class RelayError(Exception):
    """Base class for errors that terminate a webhook request."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class BodyTooLarge(RelayError):
    status_code = 503
    message = "Request body too large"


class MissingSignature(RelayError):
    status_code = 401
    message = "Missing Stripe-Signature header"


class VerificationFailed(RelayError):
    status_code = 401
    message = "Webhook signature verification failed"


class FieldParseFailure(Exception):
    """An event object could not be decoded into its expected shape.

    Recovered inside the notification builder; never reaches the responder.
    """

    def __init__(self, event_type: str, object_name: str, reason: str):
        super().__init__(f"{object_name} in {event_type} could not be parsed: {reason}")
        self.event_type = event_type
        self.object_name = object_name
        self.reason = reason


class DispatchError(RelayError):
    """Forwarding the notification to the push endpoint failed."""

    status_code = 500
    message = "Failed to forward event to push endpoint"


class PushStatusError(DispatchError):
    """The push endpoint answered with something other than 200 OK."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"ntfy returned unexpected status code {status_code}: {body}")
        # status_code on the class is the inbound response code; keep the
        # upstream one separately.
        self.upstream_status = status_code
        self.body = body


class PushTransportError(DispatchError):
    """The push endpoint could not be reached (connection, timeout, TLS)."""

    def __init__(self, reason: str):
        super().__init__(f"ntfy request failed: {reason}")
        self.reason = reason
