"""Error types and user-facing error formatting."""

import re
import traceback
from typing import Any

import httpx
from pydantic import BaseModel


class ErrorCodes:
    """Common error codes."""

    CONFIG_MISSING = "CONFIG_MISSING"
    AUTH_REQUIRED = "AUTH_REQUIRED"
    INVALID_REQUEST = "INVALID_REQUEST"
    LLM_ERROR = "LLM_ERROR"
    TIMEOUT = "TIMEOUT"
    RATE_LIMIT = "RATE_LIMIT"
    NETWORK_ERROR = "NETWORK_ERROR"
    CONTEXT_STORE_ERROR = "CONTEXT_STORE_ERROR"
    CHAT_ERROR = "CHAT_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ChatError(BaseModel):
    """Standardized error payload returned to clients."""

    code: str
    message: str
    details: Any | None = None


class ContextStoreError(Exception):
    """Raised when the context store rejects a request."""

    def __init__(self, message: str, status_code: int | None = None, session_id: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.session_id = session_id


_OPENAI_KEY_RE = re.compile(r"sk-[a-zA-Z0-9]{32,}")
_LONG_TOKEN_RE = re.compile(r"[a-zA-Z0-9]{32,}")


def mask_sensitive_info(message: str) -> str:
    """Mask API keys and other long opaque tokens in an error message."""
    message = _OPENAI_KEY_RE.sub("sk-***", message)
    return _LONG_TOKEN_RE.sub(
        lambda m: m.group(0)[:8] + "***" if len(m.group(0)) > 32 else m.group(0),
        message,
    )


def mask_token(token: str | None, visible_prefix: int = 6, visible_suffix: int = 4) -> str:
    """Mask a token, keeping only its first and last few characters.

    Example: "sk-1234567890abcdef" -> "sk-123...cdef"
    """
    if not token:
        return "***"
    if len(token) <= visible_prefix + visible_suffix:
        return "*" * min(len(token), 8)
    return f"{token[:visible_prefix]}...{token[len(token) - visible_suffix:]}"


def format_error_response(error: Any, include_details: bool = False) -> ChatError:
    """Map an exception (or error payload) to a ChatError for API responses."""
    if isinstance(error, ChatError):
        return error

    if isinstance(error, BaseException):
        details = None
        if include_details:
            details = "".join(traceback.format_exception(type(error), error, error.__traceback__))

        if isinstance(error, ContextStoreError):
            code = ErrorCodes.CONTEXT_STORE_ERROR
        elif isinstance(error, httpx.TimeoutException):
            code = ErrorCodes.TIMEOUT
        elif isinstance(error, httpx.TransportError):
            code = ErrorCodes.NETWORK_ERROR
        else:
            code = ErrorCodes.CHAT_ERROR
        return ChatError(code=code, message=mask_sensitive_info(str(error)), details=details)

    if isinstance(error, dict) and "code" in error:
        return ChatError.model_validate(
            {"code": error["code"], "message": error.get("message", ""), "details": error.get("details")}
        )

    return ChatError(
        code=ErrorCodes.UNKNOWN_ERROR,
        message="An unexpected error occurred",
        details=str(error) if include_details else None,
    )
