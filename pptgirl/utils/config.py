"""Environment-driven configuration for the context store client."""

import os
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_ACONTEXT_BASE_URL = "https://api.acontext.app/api/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0


class AcontextSettings(BaseModel):
    """Connection settings for the Acontext context store."""

    api_key: str | None = None
    base_url: str = DEFAULT_ACONTEXT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "AcontextSettings":
        """Build settings from ACONTEXT_* environment variables.

        Raises:
            ValueError: If ACONTEXT_TIMEOUT_SECONDS is not a number
        """
        timeout_raw = os.getenv("ACONTEXT_TIMEOUT_SECONDS")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            raise ValueError(
                f"ACONTEXT_TIMEOUT_SECONDS must be a number, got {timeout_raw!r}"
            ) from None
        return cls(
            api_key=os.getenv("ACONTEXT_API_KEY") or None,
            base_url=os.getenv("ACONTEXT_BASE_URL") or DEFAULT_ACONTEXT_BASE_URL,
            timeout_seconds=timeout,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


def is_localhost_url(url: str | None) -> bool:
    """Check if URL is a localhost address."""
    if not url:
        return False
    try:
        hostname = urlparse(url).hostname or ""
    except ValueError:
        return False
    return hostname in ("localhost", "127.0.0.1", "::1") or hostname.startswith("127.")
