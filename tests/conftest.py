"""Shared pytest configuration and fixtures."""

from unittest.mock import AsyncMock

import pytest

from pptgirl.acontext.client import reset_acontext_client
from pptgirl.context.types import Message, TokenCounts, ToolCall, ToolCallFunction


def make_tool_call(index: int) -> ToolCall:
    return ToolCall(
        id=f"call_{index}",
        function=ToolCallFunction(name="generate_slide", arguments='{"page": %d}' % index),
    )


def make_messages(tool_results: int = 0, tool_calls: int = 0) -> list[Message]:
    """Build a history with the given number of tool results and tool calls.

    Tool calls are spread over assistant messages, two per message.
    """
    messages = [Message(role="system", content="You are PPT Girl."), Message(role="user", content="hi")]
    remaining = tool_calls
    index = 0
    while remaining > 0:
        batch = min(2, remaining)
        messages.append(
            Message(
                role="assistant",
                content="",
                tool_calls=[make_tool_call(index + i) for i in range(batch)],
            )
        )
        index += batch
        remaining -= batch
    for i in range(tool_results):
        messages.append(Message(role="tool", content="ok", tool_call_id=f"call_{i}"))
    return messages


@pytest.fixture
def mock_store():
    """Mock MessageStore with AsyncMock methods.

    Tests set ``get_token_counts`` / ``get_messages`` return values or side effects.
    """
    store = AsyncMock()
    store.get_token_counts = AsyncMock(return_value=TokenCounts(total_tokens=1000))
    store.get_messages = AsyncMock(return_value=make_messages())
    return store


@pytest.fixture(autouse=True)
def clean_acontext_env(monkeypatch):
    """Isolate tests from ACONTEXT_* variables and the cached shared client."""
    for name in ("ACONTEXT_API_KEY", "ACONTEXT_BASE_URL", "ACONTEXT_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    reset_acontext_client()
    yield
    reset_acontext_client()
