"""Context-budget compaction policy.

Decides which single edit strategy (if any) to request from the context
store for a conversation, and loads the edited history:

- Automatic mode runs every time a session is loaded for the model.
- Manual mode runs on an explicit "compress" request, with lower token
  thresholds so users can reclaim headroom before automatic mode kicks in.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .store import MessageStore
from .types import (
    CompactionConfig,
    CompactionResult,
    CompactionStrategy,
    Message,
    RemoveToolCallParamsParams,
    RemoveToolCallParamsStrategy,
    RemoveToolResultParams,
    RemoveToolResultStrategy,
    TokenCounts,
    TokenLimitParams,
    TokenLimitStrategy,
)

logger = logging.getLogger(__name__)

# -- Constants ----------------------------------------------------------------

TOOL_RESULT_PLACEHOLDER = "Done"
MIN_KEEP_RECENT = 3

AUTOMATIC_CONFIG = CompactionConfig()
MANUAL_CONFIG = CompactionConfig(token_limit_threshold=70000, token_limit_target=60000)

# -- Decision -----------------------------------------------------------------


def count_tool_usage(messages: Sequence[Message]) -> tuple[int, int]:
    """Return ``(tool_call_count, tool_result_count)`` for a message history."""
    tool_call_count = 0
    tool_result_count = 0
    for msg in messages:
        tool_call_count += msg.tool_call_count
        if msg.role == "tool":
            tool_result_count += 1
    return tool_call_count, tool_result_count


def determine_strategies(
    token_counts: TokenCounts | None,
    messages: Sequence[Message],
    config: CompactionConfig = AUTOMATIC_CONFIG,
) -> list[CompactionStrategy]:
    """Pick the single most relevant compaction strategy for a conversation.

    Rules are evaluated in order and the first match wins:

    1. Unknown usage (no counts, or zero tokens) -> nothing
    2. Tokens above ``token_limit_threshold`` -> token_limit
    3. Tool results above ``tool_result_threshold`` -> remove_tool_result
    4. Tool calls above ``tool_call_threshold`` -> remove_tool_call_params
    5. Otherwise -> nothing

    At most one strategy is returned, so a single pass never stacks edits.
    """
    if token_counts is None or token_counts.total_tokens == 0:
        return []

    tool_call_count, tool_result_count = count_tool_usage(messages)

    logger.debug(
        "Analyzing context: total_tokens=%d threshold=%d tool_calls=%d tool_results=%d",
        token_counts.total_tokens,
        config.token_limit_threshold,
        tool_call_count,
        tool_result_count,
    )

    if token_counts.total_tokens > config.token_limit_threshold:
        logger.debug("Selecting token_limit strategy: limit_tokens=%d", config.token_limit_target)
        return [TokenLimitStrategy(params=TokenLimitParams(limit_tokens=config.token_limit_target))]

    if tool_result_count > config.tool_result_threshold:
        keep = max(MIN_KEEP_RECENT, config.tool_result_threshold // 2)
        logger.debug("Selecting remove_tool_result strategy: keep_recent=%d", keep)
        return [
            RemoveToolResultStrategy(
                params=RemoveToolResultParams(
                    keep_recent_n_tool_results=keep,
                    tool_result_placeholder=TOOL_RESULT_PLACEHOLDER,
                )
            )
        ]

    if tool_call_count > config.tool_call_threshold:
        keep = max(MIN_KEEP_RECENT, config.tool_call_threshold // 2)
        logger.debug("Selecting remove_tool_call_params strategy: keep_recent=%d", keep)
        return [
            RemoveToolCallParamsStrategy(
                params=RemoveToolCallParamsParams(keep_recent_n_tool_calls=keep)
            )
        ]

    return []


# -- Orchestration ------------------------------------------------------------


async def load_with_automatic_compaction(store: MessageStore, session_id: str) -> list[Message]:
    """Load a session's messages for the model, compacting them if needed.

    1. Fetch token counts
    2. Fetch the unedited history for analysis
    3. If a strategy applies, re-fetch the history with it applied

    Store errors propagate to the caller.
    """
    token_counts = await store.get_token_counts(session_id)
    messages = await store.get_messages(session_id)

    strategies = determine_strategies(token_counts, messages, AUTOMATIC_CONFIG)
    if not strategies:
        return messages

    logger.info(
        "Auto-applying context strategies for session %s: %s (total_tokens=%s)",
        session_id,
        [s.type for s in strategies],
        token_counts.total_tokens if token_counts else None,
    )
    return await store.get_messages(session_id, strategies=strategies)


async def compact_on_demand(store: MessageStore, session_id: str) -> CompactionResult:
    """Compact a session's context on user request using ``MANUAL_CONFIG``.

    Token counts are re-fetched from the store after edits are applied; if
    the refresh yields nothing, the counts fetched before compaction are
    reported instead.
    """
    token_counts = await store.get_token_counts(session_id)
    messages = await store.get_messages(session_id)

    strategies = determine_strategies(token_counts, messages, MANUAL_CONFIG)
    if not strategies:
        return CompactionResult(messages=messages, token_counts=token_counts)

    applied = [s.type for s in strategies]
    logger.info(
        "Manually compressing context for session %s: %s (total_tokens=%s)",
        session_id,
        applied,
        token_counts.total_tokens if token_counts else None,
    )

    compressed = await store.get_messages(session_id, strategies=strategies)
    refreshed = await store.get_token_counts(session_id)

    return CompactionResult(
        messages=compressed,
        token_counts=refreshed if refreshed is not None else token_counts,
        strategies_applied=applied,
    )
