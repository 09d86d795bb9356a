"""Shared test fixtures for the stripe-ntfy test suite."""

from __future__ import annotations

import hashlib
import hmac
import json
import time

import httpx
import pytest

WEBHOOK_SECRET = "whsec_test_secret"
NTFY_URL = "https://ntfy.example.com/stripe"


def sign(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Build a Stripe-Signature header the way Stripe does."""
    ts = int(time.time()) if timestamp is None else timestamp
    signed = f"{ts}.".encode() + payload
    mac = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={mac}"


def stripe_event(event_type: str, obj, livemode: bool = True) -> bytes:
    return json.dumps(
        {
            "id": "evt_test",
            "object": "event",
            "type": event_type,
            "livemode": livemode,
            "api_version": "2024-06-20",
            "data": {"object": obj},
        }
    ).encode()


class FakeNtfy:
    """Records requests sent to ntfy and answers with a canned response."""

    def __init__(self, status_code: int = 200, text: str = "{}"):
        self.status_code = status_code
        self.text = text
        self.error: Exception | None = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.text)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings():
    from stripe_ntfy.config import Settings

    return Settings(ntfy_url=NTFY_URL, stripe_webhook_secret=WEBHOOK_SECRET)


@pytest.fixture
def ntfy() -> FakeNtfy:
    return FakeNtfy()


@pytest.fixture
def test_client(settings, ntfy):
    """Provide a TestClient whose dispatcher talks to the fake ntfy."""
    from fastapi.testclient import TestClient

    from stripe_ntfy.channels.dispatcher import NtfyDispatcher
    from stripe_ntfy.main import create_app

    dispatcher = NtfyDispatcher(settings.ntfy, transport=ntfy.transport)
    app = create_app(settings, dispatcher=dispatcher)
    return TestClient(app, raise_server_exceptions=False)
