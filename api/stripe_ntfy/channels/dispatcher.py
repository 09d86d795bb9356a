"""Deliver notifications to the ntfy push endpoint."""

import logging
from typing import Optional

import httpx

from stripe_ntfy.channels import ChannelPayload, NtfyConfig
from stripe_ntfy.channels.ntfy import format_ntfy
from stripe_ntfy.errors import PushStatusError, PushTransportError
from stripe_ntfy.notifications import Notification

logger = logging.getLogger(__name__)


class NtfyDispatcher:
    """
    Sends one notification per call, synchronously from the caller's view.

    There is no retry or queueing: a failure is raised to the webhook
    receiver, which answers Stripe with a 500 so Stripe redelivers.
    """

    def __init__(
        self,
        config: NtfyConfig,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.timeout = timeout
        self._transport = transport

    async def dispatch(self, live_mode: bool, notification: Notification) -> None:
        payload = format_ntfy(self.config, live_mode, notification)
        await self._send(payload)
        logger.info("Forwarded notification %r to ntfy", notification.title)

    async def _send(self, payload: ChannelPayload) -> None:
        # Titles carry emoji, so header values go out as raw UTF-8 bytes,
        # which ntfy decodes.
        headers = {k: v.encode("utf-8") for k, v in payload.headers.items()}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(
                    method=payload.method,
                    url=payload.url,
                    headers=headers,
                    content=payload.body.encode("utf-8"),
                )
        except httpx.HTTPError as e:
            logger.error("Failed to reach ntfy at %s: %s", payload.url, e)
            raise PushTransportError(str(e) or type(e).__name__) from e

        if response.status_code != httpx.codes.OK:
            logger.error(
                "ntfy returned status %d: %s", response.status_code, response.text[:500]
            )
            raise PushStatusError(response.status_code, response.text)
