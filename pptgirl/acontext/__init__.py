"""Acontext context store integration."""

from .client import AcontextClient, get_acontext_client, parse_message, reset_acontext_client

__all__ = [
    "AcontextClient",
    "get_acontext_client",
    "parse_message",
    "reset_acontext_client",
]
