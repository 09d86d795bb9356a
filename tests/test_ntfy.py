"""Tests for the ntfy request formatting and auth selection."""

import base64

from stripe_ntfy.channels import NtfyConfig
from stripe_ntfy.channels.ntfy import STRIPE_ICON_URL, authorization_header, format_ntfy
from stripe_ntfy.notifications import Notification

URL = "https://ntfy.example.com/stripe"


class TestAuthorizationHeader:
    def test_token_only(self):
        assert authorization_header(NtfyConfig(url=URL, token="tk_abc")) == "Bearer tk_abc"

    def test_basic_only(self):
        header = authorization_header(NtfyConfig(url=URL, username="user", password="pass"))
        assert header == "Basic " + base64.b64encode(b"user:pass").decode()
        assert header == "Basic dXNlcjpwYXNz"

    def test_neither(self):
        assert authorization_header(NtfyConfig(url=URL)) is None

    def test_token_wins_over_basic(self):
        config = NtfyConfig(url=URL, username="user", password="pass", token="tk_abc")
        assert authorization_header(config) == "Bearer tk_abc"

    def test_username_without_password_is_unauthenticated(self):
        assert authorization_header(NtfyConfig(url=URL, username="user")) is None
        assert authorization_header(NtfyConfig(url=URL, password="pass")) is None


class TestFormatNtfy:
    def test_headers(self):
        n = Notification(title="💰 Payment Succeeded", body="Received $10.50", click_url="https://x/payments/pi_1")
        payload = format_ntfy(NtfyConfig(url=URL), True, n)
        assert payload.method == "POST"
        assert payload.url == URL
        assert payload.body == "Received $10.50"
        assert payload.headers == {
            "Content-Type": "text/plain",
            "Markdown": "yes",
            "Title": "💰 Payment Succeeded",
            "Icon": STRIPE_ICON_URL,
            "Click": "https://x/payments/pi_1",
        }

    def test_no_click_header_without_url(self):
        n = Notification(title="❓ Unknown Stripe Event", body="Type: `invoice.paid`")
        payload = format_ntfy(NtfyConfig(url=URL), True, n)
        assert "Click" not in payload.headers

    def test_test_mode_suffix(self):
        n = Notification(title="t", body="Received $1.00")
        assert format_ntfy(NtfyConfig(url=URL), False, n).body == "Received $1.00 [test mode]"
        assert format_ntfy(NtfyConfig(url=URL), True, n).body == "Received $1.00"

    def test_suffix_not_accumulated(self):
        n = Notification(title="t", body="b")
        config = NtfyConfig(url=URL)
        format_ntfy(config, False, n)
        assert format_ntfy(config, False, n).body == "b [test mode]"

    def test_authorization_attached(self):
        n = Notification(title="t", body="b")
        payload = format_ntfy(NtfyConfig(url=URL, token="tk"), True, n)
        assert payload.headers["Authorization"] == "Bearer tk"
