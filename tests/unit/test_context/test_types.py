"""Unit tests for pptgirl.context.types module."""

import pytest
from pydantic import TypeAdapter, ValidationError

from pptgirl.context.types import (
    CompactionConfig,
    CompactionStrategy,
    Message,
    RemoveToolCallParamsStrategy,
    RemoveToolResultStrategy,
    TokenCounts,
    TokenLimitStrategy,
)

strategy_adapter = TypeAdapter(CompactionStrategy)


class TestTokenCounts:
    def test_defaults_to_zero(self):
        assert TokenCounts().total_tokens == 0

    def test_rejects_negative(self):
        with pytest.raises(ValidationError):
            TokenCounts(total_tokens=-1)


class TestMessage:
    def test_tool_call_count_absent(self):
        assert Message(role="user", content="hi").tool_call_count == 0

    def test_tool_call_count(self):
        msg = Message.model_validate(
            {
                "role": "assistant",
                "tool_calls": [
                    {"id": "a", "function": {"name": "f", "arguments": "{}"}},
                    {"id": "b", "function": {"name": "g", "arguments": "{}"}},
                ],
            }
        )
        assert msg.tool_call_count == 2

    def test_rejects_unknown_role(self):
        with pytest.raises(ValidationError):
            Message(role="narrator", content="...")

    def test_keeps_extra_fields(self):
        msg = Message.model_validate({"role": "user", "content": "hi", "meta": {"k": 1}})
        assert msg.model_dump()["meta"] == {"k": 1}


class TestStrategies:
    def test_token_limit_wire_shape(self):
        strategy = TokenLimitStrategy(params={"limit_tokens": 70000})
        assert strategy.model_dump() == {"type": "token_limit", "params": {"limit_tokens": 70000}}

    def test_remove_tool_result_wire_shape(self):
        strategy = RemoveToolResultStrategy(
            params={"keep_recent_n_tool_results": 3, "tool_result_placeholder": "Done"}
        )
        assert strategy.model_dump() == {
            "type": "remove_tool_result",
            "params": {"keep_recent_n_tool_results": 3, "tool_result_placeholder": "Done"},
        }

    def test_token_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            TokenLimitStrategy(params={"limit_tokens": 0})

    def test_discriminated_union_parses_by_type(self):
        parsed = strategy_adapter.validate_python(
            {"type": "remove_tool_call_params", "params": {"keep_recent_n_tool_calls": 5}}
        )
        assert isinstance(parsed, RemoveToolCallParamsStrategy)
        assert parsed.params.keep_recent_n_tool_calls == 5

    def test_unknown_strategy_type_rejected(self):
        with pytest.raises(ValidationError):
            strategy_adapter.validate_python({"type": "summarize", "params": {}})


class TestCompactionConfig:
    def test_is_immutable(self):
        config = CompactionConfig()
        with pytest.raises(ValidationError):
            config.token_limit_threshold = 1
