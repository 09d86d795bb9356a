"""
Minimal shapes of the Stripe objects carried in ``event.data.object``.

Only the fields the notifications read are declared; everything else Stripe
sends is ignored. Expandable references (charge, customer, payment_intent)
arrive either as an ID string or as the expanded object.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field


class StripeObject(BaseModel):
    model_config = {"extra": "ignore"}


class Customer(StripeObject):
    id: str


class Charge(StripeObject):
    id: str
    amount: Optional[int] = None
    currency: Optional[str] = None


class PaymentIntent(StripeObject):
    id: str
    amount: int
    currency: str


class EarlyFraudWarning(StripeObject):
    id: str
    actionable: bool
    charge: Union[str, Charge]
    payment_intent: Optional[Union[str, PaymentIntent]] = None


class Dispute(StripeObject):
    id: str
    amount: int
    currency: str
    charge: Union[str, Charge]


class Recurring(StripeObject):
    interval: str


class Price(StripeObject):
    currency: str
    unit_amount: Optional[int] = None
    recurring: Optional[Recurring] = None


class SubscriptionItem(StripeObject):
    quantity: Optional[int] = None
    price: Optional[Price] = None


class SubscriptionItemList(StripeObject):
    data: list[SubscriptionItem] = Field(default_factory=list)


class Subscription(StripeObject):
    id: str
    customer: Union[str, Customer]
    items: Optional[SubscriptionItemList] = None


def object_id(ref: Union[str, Customer, Charge, PaymentIntent]) -> str:
    """Return the ID of an expandable reference."""
    if isinstance(ref, str):
        return ref
    return ref.id
