import sys
from typing import Optional
from urllib.parse import urlparse

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings

from stripe_ntfy.channels import NtfyConfig

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    # ntfy topic URL, e.g. https://ntfy.sh/my-stripe-events
    ntfy_url: str
    ntfy_username: str = ""
    ntfy_password: str = ""
    ntfy_token: str = ""
    ntfy_timeout: float = 10.0

    stripe_webhook_secret: str

    listen_addr: str = "127.0.0.1:3000"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore", "frozen": True}

    @field_validator("ntfy_url", "stripe_webhook_secret")
    @classmethod
    def _required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("environment variable is not set")
        return v

    @field_validator("ntfy_url")
    @classmethod
    def _http_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https"):
            raise ValueError("must use http or https protocol")
        if not parsed.netloc:
            raise ValueError("is not a valid URL")
        return v

    @field_validator("listen_addr")
    @classmethod
    def _host_port(cls, v: str) -> str:
        try:
            _split_listen_addr(v)
        except ValueError:
            raise ValueError(f"must be host:port, got {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def _level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @property
    def ntfy(self) -> NtfyConfig:
        return NtfyConfig(
            url=self.ntfy_url,
            username=self.ntfy_username,
            password=self.ntfy_password,
            token=self.ntfy_token,
        )

    @property
    def listen_host(self) -> str:
        return _split_listen_addr(self.listen_addr)[0]

    @property
    def listen_port(self) -> int:
        return _split_listen_addr(self.listen_addr)[1]


def _split_listen_addr(addr: str) -> tuple[str, int]:
    host, _, port = addr.rpartition(":")
    host = host.strip("[]") or "0.0.0.0"
    return host, int(port)


def load_settings(**overrides) -> Settings:
    """Read settings once at startup, exiting with a diagnostic when invalid."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        for err in exc.errors():
            name = str(err["loc"][0]).upper() if err["loc"] else "CONFIGURATION"
            reason = _describe(err)
            print(f"FATAL: {name} {reason}. Refusing to start.", file=sys.stderr)
        sys.exit(1)


def _describe(err: dict) -> str:
    if err["type"] == "missing":
        return "environment variable is not set"
    cause: Optional[Exception] = err.get("ctx", {}).get("error")
    if isinstance(cause, ValueError):
        return str(cause)
    return err["msg"]
