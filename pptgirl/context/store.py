"""Message store capability consumed by the compaction wrappers."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .types import CompactionStrategy, Message, TokenCounts


@runtime_checkable
class MessageStore(Protocol):
    """Store that holds conversation messages and applies compaction edits.

    The store, not the caller, performs the edit semantics: "keep recent N"
    refers to the N most recently created items.
    """

    async def get_token_counts(self, session_id: str) -> TokenCounts | None:
        """Return token usage for a session, or None when it is unavailable."""
        ...

    async def get_messages(
        self,
        session_id: str,
        strategies: list[CompactionStrategy] | None = None,
    ) -> list[Message]:
        """Return the session history, edited by ``strategies`` when given."""
        ...
