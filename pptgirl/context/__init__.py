"""Context module - token-budget compaction of conversation histories."""

from .compaction import (
    AUTOMATIC_CONFIG,
    MANUAL_CONFIG,
    TOOL_RESULT_PLACEHOLDER,
    compact_on_demand,
    count_tool_usage,
    determine_strategies,
    load_with_automatic_compaction,
)
from .store import MessageStore
from .types import (
    CompactionConfig,
    CompactionResult,
    CompactionStrategy,
    Message,
    RemoveToolCallParamsStrategy,
    RemoveToolResultStrategy,
    TokenCounts,
    TokenLimitStrategy,
    ToolCall,
    ToolCallFunction,
)

__all__ = [
    "AUTOMATIC_CONFIG",
    "MANUAL_CONFIG",
    "TOOL_RESULT_PLACEHOLDER",
    "CompactionConfig",
    "CompactionResult",
    "CompactionStrategy",
    "Message",
    "MessageStore",
    "RemoveToolCallParamsStrategy",
    "RemoveToolResultStrategy",
    "TokenCounts",
    "TokenLimitStrategy",
    "ToolCall",
    "ToolCallFunction",
    "compact_on_demand",
    "count_tool_usage",
    "determine_strategies",
    "load_with_automatic_compaction",
]
