"""Base types for the push channel."""

from dataclasses import dataclass


@dataclass
class ChannelPayload:
    """Represents the HTTP request sent to the push endpoint."""
    method: str
    url: str
    headers: dict[str, str]
    body: str  # plain text


@dataclass(frozen=True)
class NtfyConfig:
    """Where and how to publish notifications.

    Built once from settings at startup and never mutated.
    """
    url: str
    username: str = ""
    password: str = ""
    token: str = ""
