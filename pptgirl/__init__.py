__version__ = "0.1.0"

from .acontext import AcontextClient, get_acontext_client
from .context import (
    AUTOMATIC_CONFIG,
    MANUAL_CONFIG,
    CompactionConfig,
    CompactionResult,
    CompactionStrategy,
    Message,
    MessageStore,
    RemoveToolCallParamsStrategy,
    RemoveToolResultStrategy,
    TokenCounts,
    TokenLimitStrategy,
    ToolCall,
    compact_on_demand,
    determine_strategies,
    load_with_automatic_compaction,
)
from .errors import ChatError, ContextStoreError, ErrorCodes, format_error_response
from .utils import AcontextSettings, configure_logging

__all__ = [
    "AUTOMATIC_CONFIG",
    "MANUAL_CONFIG",
    "AcontextClient",
    "AcontextSettings",
    "ChatError",
    "CompactionConfig",
    "CompactionResult",
    "CompactionStrategy",
    "ContextStoreError",
    "ErrorCodes",
    "Message",
    "MessageStore",
    "RemoveToolCallParamsStrategy",
    "RemoveToolResultStrategy",
    "TokenCounts",
    "TokenLimitStrategy",
    "ToolCall",
    "compact_on_demand",
    "configure_logging",
    "determine_strategies",
    "format_error_response",
    "get_acontext_client",
    "load_with_automatic_compaction",
]
