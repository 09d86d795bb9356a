"""Human-readable notifications built from Stripe events."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Notification:
    title: str
    body: str
    click_url: Optional[str] = None  # None means no deep link
