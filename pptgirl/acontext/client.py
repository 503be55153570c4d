"""HTTP client for the Acontext context store.

Implements the MessageStore capability used by the compaction wrappers:

- GET {base_url}/session/{session_id}/token_counts
- GET {base_url}/session/{session_id}/messages?format=openai[&edit_strategies=...]
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from ..context.types import CompactionStrategy, Message, TokenCounts
from ..errors import ContextStoreError, mask_token
from ..utils.config import AcontextSettings, is_localhost_url

logger = logging.getLogger(__name__)

_strategies_adapter = TypeAdapter(list[CompactionStrategy])

MESSAGE_FORMAT = "openai"


class AcontextClient:
    """Async client for Acontext session endpoints.

    If ``http_client`` is given it is reused for every request and the caller
    owns its lifecycle; otherwise a client is opened per request.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        settings = AcontextSettings.from_env()
        self.api_key = api_key or settings.api_key
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.timeout_seconds
        self._http_client = http_client

        if not self.api_key:
            raise ValueError(
                "api_key is required. Pass AcontextClient(api_key='...') "
                "or set the ACONTEXT_API_KEY environment variable."
            )

        if is_localhost_url(self.base_url):
            logger.debug("Using local Acontext store at %s", self.base_url)

    def __repr__(self) -> str:
        return f"AcontextClient(base_url={self.base_url!r}, api_key={mask_token(self.api_key)!r})"

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _session_url(self, session_id: str, path: str) -> str:
        return f"{self.base_url}/session/{quote(session_id, safe='')}/{path}"

    async def _get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.get(url, params=params, headers=self._get_headers())
        async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout)) as client:
            return await client.get(url, params=params, headers=self._get_headers())

    async def get_token_counts(self, session_id: str) -> TokenCounts | None:
        """Get token counts for a session.

        Returns None when usage is unavailable, including when the request
        fails: callers treat missing usage as "do not compact".
        """
        if not session_id:
            return None

        try:
            response = await self._get(self._session_url(session_id, "token_counts"))
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Failed to get token counts for session %s: %s", session_id, e)
            return None

        if not data or not isinstance(data, dict):
            logger.debug("No token counts available for session %s", session_id)
            return None

        total = data.get("total_tokens") or 0
        try:
            token_counts = TokenCounts(total_tokens=total)
        except ValidationError as e:
            logger.warning("Malformed token counts for session %s: %s", session_id, e)
            return None

        logger.debug("Token counts for session %s: total_tokens=%s", session_id, total)
        return token_counts

    async def get_messages(
        self,
        session_id: str,
        strategies: list[CompactionStrategy] | None = None,
    ) -> list[Message]:
        """Load a session's messages, optionally edited by ``strategies``.

        Edits are applied on the fly by the store and do not modify storage.

        Raises:
            ContextStoreError: If the store responds with an error status
            httpx.HTTPError: On transport failures
        """
        if not session_id:
            return []

        params: dict[str, Any] = {"format": MESSAGE_FORMAT}
        if strategies:
            params["edit_strategies"] = json.dumps(
                _strategies_adapter.dump_python(strategies, mode="json")
            )
            logger.debug(
                "Applying edit strategies for session %s: %s",
                session_id,
                [s.type for s in strategies],
            )

        response = await self._get(self._session_url(session_id, "messages"), params=params)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ContextStoreError(
                f"Failed to load messages for session {session_id}: "
                f"HTTP {e.response.status_code}",
                status_code=e.response.status_code,
                session_id=session_id,
            ) from e

        data = response.json()
        items = (data.get("items") if isinstance(data, dict) else None) or []
        messages = [parse_message(item, index) for index, item in enumerate(items)]

        logger.debug(
            "Loaded %d messages for session %s (strategies=%d)",
            len(messages),
            session_id,
            len(strategies or []),
        )
        return messages


def parse_message(item: dict[str, Any], index: int = 0) -> Message:
    """Convert a raw store item (OpenAI format) into a Message."""
    if not isinstance(item, dict):
        raise ContextStoreError(f"Malformed message at index {index}: expected an object")

    raw_tool_calls = item.get("tool_calls")
    tool_calls = None
    if raw_tool_calls:
        if not isinstance(raw_tool_calls, list):
            raw_tool_calls = [raw_tool_calls]
        tool_calls = [_parse_tool_call(tc, index) for tc in raw_tool_calls]

    created_at = item.get("created_at")
    data = {
        **item,
        "role": item.get("role") or "user",
        "tool_calls": tool_calls,
        "id": item.get("id") or f"acontext-{index}",
        "created_at": str(created_at) if created_at is not None else None,
    }
    try:
        return Message.model_validate(data)
    except ValidationError as e:
        raise ContextStoreError(f"Malformed message at index {index}: {e}") from e


def _parse_tool_call(raw: Any, index: int) -> dict[str, Any]:
    raw = raw if isinstance(raw, dict) else {}
    function = raw.get("function") if isinstance(raw.get("function"), dict) else {}
    arguments = function.get("arguments")
    return {
        "id": raw.get("id") if isinstance(raw.get("id"), str) else f"toolcall-{index}",
        "type": raw.get("type") or "function",
        "function": {
            "name": function.get("name") if isinstance(function.get("name"), str) else "unknown",
            "arguments": arguments if isinstance(arguments, str) else json.dumps(arguments or {}),
        },
    }


_cached_client: AcontextClient | None = None


def get_acontext_client() -> AcontextClient | None:
    """Get (or lazily create) the shared Acontext client.

    Returns None when ACONTEXT_API_KEY is not configured, so callers can
    skip the integration.
    """
    global _cached_client

    settings = AcontextSettings.from_env()
    if not settings.is_configured:
        logger.debug("Acontext API key not configured, skipping integration")
        return None

    if _cached_client is None:
        logger.debug(
            "Initializing Acontext client: base_url=%s api_key=%s",
            settings.base_url,
            mask_token(settings.api_key),
        )
        _cached_client = AcontextClient(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
        )
    return _cached_client


def reset_acontext_client() -> None:
    """Drop the cached shared client."""
    global _cached_client
    _cached_client = None
