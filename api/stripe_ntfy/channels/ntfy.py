"""Ntfy channel adapter."""

import base64
from typing import Optional

from stripe_ntfy.channels import ChannelPayload, NtfyConfig
from stripe_ntfy.notifications import Notification

STRIPE_ICON_URL = (
    "https://play-lh.googleusercontent.com/"
    "2PS6w7uBztfuMys5fgodNkTwTOE6bLVB2cJYbu5GHlARAK36FzO5bUfMDP9cEJk__cE"
)
TEST_MODE_SUFFIX = " [test mode]"


def authorization_header(config: NtfyConfig) -> Optional[str]:
    """
    Resolve the Authorization header for the configured credentials.

    An access token takes precedence over a username/password pair. Basic
    auth is only used when both halves are present.
    """
    if config.token:
        return f"Bearer {config.token}"
    if config.username and config.password:
        creds = f"{config.username}:{config.password}".encode("utf-8")
        return f"Basic {base64.b64encode(creds).decode('ascii')}"
    return None


def format_ntfy(config: NtfyConfig, live_mode: bool, notification: Notification) -> ChannelPayload:
    """
    Format a notification for ntfy.

    Events from Stripe test mode get a " [test mode]" marker appended to the
    message so they can't be mistaken for real money.
    """
    body = notification.body
    if not live_mode:
        body += TEST_MODE_SUFFIX

    headers = {
        "Content-Type": "text/plain",
        "Markdown": "yes",
        "Title": notification.title,
        "Icon": STRIPE_ICON_URL,
    }
    if notification.click_url:
        headers["Click"] = notification.click_url

    auth = authorization_header(config)
    if auth:
        headers["Authorization"] = auth

    return ChannelPayload(
        method="POST",
        url=config.url,
        headers=headers,
        body=body,
    )
