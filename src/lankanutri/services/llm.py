"""Chat-completion capability shared by the diet planner and the chatbot."""

from dataclasses import dataclass, field
from typing import Protocol

from lankanutri.errors import ServiceUnavailableError


@dataclass(frozen=True)
class ChatCompletion:
    """Text returned by a chat-completion provider."""

    content: str
    model: str
    usage: dict[str, object] | None = field(default=None)


class ChatCompletionProvider(Protocol):
    """Interface for LLM chat completion endpoints."""

    model: str

    @property
    def is_available(self) -> bool:
        """Return true when the provider is configured."""

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> ChatCompletion:
        """Return the assistant reply for a message history."""


@dataclass
class UnavailableChatProvider:
    """Provider variant used when no credential is configured."""

    hint: str
    model: str = ""

    @property
    def is_available(self) -> bool:
        return False

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> ChatCompletion:
        raise ServiceUnavailableError(self.hint)
