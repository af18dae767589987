"""Key-value store for chatbot conversation histories."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


class ConversationStore(Protocol):
    """Store interface for conversation message lists."""

    def get(self, key: str) -> list[dict[str, str]] | None:
        """Return the stored messages if present and not expired."""

    def set(self, key: str, messages: list[dict[str, str]], ttl_seconds: int) -> None:
        """Store messages with a TTL in seconds."""

    def delete(self, key: str) -> None:
        """Remove a conversation."""

    def clear(self) -> None:
        """Remove every conversation."""


@dataclass
class _Entry:
    messages: list[dict[str, str]]
    expires_at: datetime


@dataclass
class InMemoryConversationStore(ConversationStore):
    """Process-local conversation store with TTL expiry."""

    _entries: dict[str, _Entry]

    def __init__(self) -> None:
        self._entries = {}

    def get(self, key: str) -> list[dict[str, str]] | None:
        """Return stored messages if they haven't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return list(entry.messages)

    def set(self, key: str, messages: list[dict[str, str]], ttl_seconds: int) -> None:
        """Store messages and refresh the expiry."""
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        self._entries[key] = _Entry(messages=list(messages), expires_at=expires_at)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
