"""
Turn a Stripe event into a notification.

Each supported event type is an entry in ``EVENT_HANDLERS``: the title, the
object shape to decode ``data.object`` into, and a renderer producing the
message body and dashboard link. Lookup is by exact event type; anything not
in the table gets a generic "unknown event" notification.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationError

from stripe_ntfy.errors import FieldParseFailure
from stripe_ntfy.notifications import Notification
from stripe_ntfy.notifications.currency import format_amount
from stripe_ntfy.notifications.models import (
    Charge,
    Dispute,
    EarlyFraudWarning,
    PaymentIntent,
    Subscription,
    object_id,
)

logger = logging.getLogger(__name__)

DASHBOARD_URL = "https://dashboard.stripe.com"
UNKNOWN_EVENT_TITLE = "❓ Unknown Stripe Event"

Rendered = tuple[str, Optional[str]]


@dataclass(frozen=True)
class EventHandler:
    title: str
    object_name: str  # used in the placeholder body when parsing fails
    model: type[BaseModel]
    render: Callable[[Any], Rendered]

    def parse(self, event_type: str, data: Any) -> Any:
        try:
            if isinstance(data, (bytes, str)):
                return self.model.model_validate_json(data)
            return self.model.model_validate(data)
        except ValidationError as e:
            raise FieldParseFailure(event_type, self.object_name, str(e)) from e


def dashboard_url(section: str, object_id: str) -> str:
    return f"{DASHBOARD_URL}/{section}/{object_id}"


# --- Renderers ---


def _payment_succeeded(intent: PaymentIntent) -> Rendered:
    amount = format_amount(intent.currency, intent.amount)
    return f"Received {amount}", dashboard_url("payments", intent.id)


def _fraud_warning_amount(warning: EarlyFraudWarning) -> str:
    # The warning itself carries no amount; it is only known when the payment
    # intent or the charge was expanded.
    for source in (warning.payment_intent, warning.charge):
        if isinstance(source, (PaymentIntent, Charge)) and source.currency and source.amount is not None:
            return format_amount(source.currency, source.amount)
    return "an unknown amount"


def _early_fraud_warning(warning: EarlyFraudWarning) -> Rendered:
    status = "actionable" if warning.actionable else "inactionable"
    body = f"For {_fraud_warning_amount(warning)} ({status})"
    return body, dashboard_url("payments", object_id(warning.charge))


def _dispute_created(dispute: Dispute) -> Rendered:
    amount = format_amount(dispute.currency, dispute.amount)
    return f"For {amount}", dashboard_url("payments", object_id(dispute.charge))


def _subscription_details(sub: Subscription) -> str:
    """Return " ({amount}/{interval})" for the first recurring item, or ""."""
    if sub.items is None or not sub.items.data:
        return ""
    item = sub.items.data[0]
    price = item.price
    if price is None or price.recurring is None:
        return ""
    quantity = 1 if item.quantity is None else item.quantity
    amount = format_amount(price.currency, (price.unit_amount or 0) * quantity)
    return f" ({amount}/{price.recurring.interval})"


def _subscription_created(sub: Subscription) -> Rendered:
    body = f"For customer `{object_id(sub.customer)}`{_subscription_details(sub)}"
    return body, dashboard_url("subscriptions", sub.id)


def _subscription_deleted(sub: Subscription) -> Rendered:
    body = f"Canceled for customer `{object_id(sub.customer)}`{_subscription_details(sub)}"
    return body, dashboard_url("subscriptions", sub.id)


EVENT_HANDLERS: dict[str, EventHandler] = {
    "payment_intent.succeeded": EventHandler(
        title="💰 Payment Succeeded",
        object_name="Payment intent",
        model=PaymentIntent,
        render=_payment_succeeded,
    ),
    "radar.early_fraud_warning.created": EventHandler(
        title="⚠️ Early Fraud Warning",
        object_name="Radar warning",
        model=EarlyFraudWarning,
        render=_early_fraud_warning,
    ),
    "charge.dispute.created": EventHandler(
        title="💀 New Dispute",
        object_name="Dispute",
        model=Dispute,
        render=_dispute_created,
    ),
    "customer.subscription.created": EventHandler(
        title="🎉 New Subscription",
        object_name="Subscription",
        model=Subscription,
        render=_subscription_created,
    ),
    "customer.subscription.deleted": EventHandler(
        title="😥 Subscription canceled",
        object_name="Subscription",
        model=Subscription,
        render=_subscription_deleted,
    ),
}


def build_notification(event_type: str, data: Any) -> Notification:
    """
    Build the notification for one event.

    Never raises for bad event data: an object that doesn't decode keeps its
    type's title, gets a "<object> could not be parsed" body and no link.
    """
    handler = EVENT_HANDLERS.get(event_type)
    if handler is None:
        return Notification(title=UNKNOWN_EVENT_TITLE, body=f"Type: `{event_type}`")

    try:
        obj = handler.parse(event_type, data)
    except FieldParseFailure as e:
        logger.error("Error parsing %s for %s: %s", e.object_name.lower(), event_type, e.reason)
        return Notification(title=handler.title, body=f"{handler.object_name} could not be parsed")

    body, click_url = handler.render(obj)
    return Notification(title=handler.title, body=body, click_url=click_url)
