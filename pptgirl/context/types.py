"""Types for the context-budget compaction policy.

Strategy models mirror the edit-strategy payloads understood by the
context store, so they can be sent over the wire with ``model_dump()``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class TokenCounts(BaseModel):
    """Token usage of a whole session, as reported by the context store."""

    total_tokens: int = Field(default=0, ge=0)


class ToolCallFunction(BaseModel):
    """Function information within a tool call."""

    name: str = "unknown"
    arguments: str = "{}"  # JSON string


class ToolCall(BaseModel):
    """A tool call recorded on an assistant message (OpenAI format)."""

    id: str
    type: str = "function"
    function: ToolCallFunction = Field(default_factory=ToolCallFunction)


class Message(BaseModel):
    """A conversation message as returned by the context store.

    Only ``role`` and ``tool_calls`` matter to the compaction policy; the
    remaining fields are carried through untouched for callers.
    """

    model_config = ConfigDict(extra="allow")

    role: Literal["user", "assistant", "system", "tool"]
    content: Any = None
    tool_calls: list[ToolCall] | None = None
    tool_call_id: str | None = None
    id: str | None = None
    created_at: str | None = None

    @property
    def tool_call_count(self) -> int:
        return len(self.tool_calls) if self.tool_calls else 0


# -- Strategies ----------------------------------------------------------------


class TokenLimitParams(BaseModel):
    limit_tokens: int = Field(gt=0)


class TokenLimitStrategy(BaseModel):
    """Truncate history until the reported total is at most ``limit_tokens``."""

    type: Literal["token_limit"] = "token_limit"
    params: TokenLimitParams


class RemoveToolResultParams(BaseModel):
    keep_recent_n_tool_results: int = Field(ge=0)
    tool_result_placeholder: str = "Done"


class RemoveToolResultStrategy(BaseModel):
    """Replace older tool-result bodies with a placeholder."""

    type: Literal["remove_tool_result"] = "remove_tool_result"
    params: RemoveToolResultParams


class RemoveToolCallParamsParams(BaseModel):
    keep_recent_n_tool_calls: int = Field(ge=0)


class RemoveToolCallParamsStrategy(BaseModel):
    """Strip arguments from older tool invocations."""

    type: Literal["remove_tool_call_params"] = "remove_tool_call_params"
    params: RemoveToolCallParamsParams


CompactionStrategy = Annotated[
    TokenLimitStrategy | RemoveToolResultStrategy | RemoveToolCallParamsStrategy,
    Field(discriminator="type"),
]


# -- Config / results ------------------------------------------------------------


class CompactionConfig(BaseModel):
    """Thresholds for the compaction policy."""

    model_config = ConfigDict(frozen=True)

    token_limit_threshold: int = 80000
    token_limit_target: int = 70000
    tool_result_threshold: int = 5
    tool_call_threshold: int = 10


class CompactionResult(BaseModel):
    """Result from compact_on_demand."""

    messages: list[Message]
    token_counts: TokenCounts | None = None
    strategies_applied: list[str] = Field(default_factory=list)
