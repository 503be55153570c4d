"""Utility functions for pptgirl."""

from .config import AcontextSettings, is_localhost_url
from .log import configure_logging

__all__ = [
    "AcontextSettings",
    "configure_logging",
    "is_localhost_url",
]
