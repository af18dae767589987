"""LankaNutri Advisor chatbot backed by a chat-completion provider."""

import logging
import secrets
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from lankanutri.errors import (
    ServiceUnavailableError,
    UpstreamServiceError,
    ValidationError,
)
from lankanutri.services.conversations import ConversationStore
from lankanutri.services.llm import ChatCompletionProvider

_logger = logging.getLogger(__name__)

DEFAULT_CONVERSATION_ID = "default"

GREETING = (
    "Hello! I'm LankaNutri Advisor \U0001f37d️\n\n"
    "I help you understand nutrition in Sri Lankan foods, create meal plans, "
    "and build healthier habits.\n\n"
    "How can I support your diet today?"
)

SYSTEM_PROMPT = """You are "LankaNutri Advisor", an AI nutrition assistant \
specialised in Sri Lankan dietary patterns, traditional meals and culturally \
grounded nutrition science. Guide users toward healthier eating with foods \
commonly eaten in Sri Lanka.

What you do:
1. Give approximate nutrition information for Sri Lankan foods: rice (white, \
red, basmati), parippu, pol sambol, mallum, fish and chicken curries, hoppers, \
string hoppers, pittu, kottu, kos, del, yams, sambols and short eats.
2. Suggest meal plans for weight management, diabetes (low-GI), heart health \
(low salt, low fat), students and active users.
3. When users describe a meal, summarise it, estimate calories, point out \
strengths and weaknesses (excess carbs, oil, sugar) and suggest local \
improvements.
4. Share daily habits: portion control, hydration, the balanced plate method, \
meal timing and practical substitutions such as red rice for white rice or a \
boiled egg with brown bread instead of maalu paan.

How you speak:
- Friendly, encouraging and non-judgemental, in simple language.
- Follow the user if they switch to Sinhala or Tamil vocabulary.
- Use headings, bullet points and short sentences.

Limits:
- Never diagnose. Recommend a doctor for serious medical conditions.
- Always call calorie counts approximate.
- Avoid extreme diets, fasting regimens and unsafe restrictions.
"""


def cap_history(messages: list[dict[str, str]], limit: int) -> list[dict[str, str]]:
    """Keep the system prompt and the most recent ``limit - 1`` messages."""
    if len(messages) <= limit:
        return messages
    return [messages[0], *messages[-(limit - 1) :]]


def _new_conversation_id() -> str:
    return f"conv_{int(time.time() * 1000)}_{secrets.token_hex(5)}"


@dataclass(frozen=True)
class ChatReply:
    """Assistant reply for a conversation."""

    message: str
    conversation_id: str


@dataclass
class ChatService:
    """Maintain bounded conversation histories and relay them to the provider."""

    provider: ChatCompletionProvider
    store: ConversationStore
    history_limit: int = 20
    ttl_seconds: int = 86400
    temperature: float = 0.7
    max_tokens: int = 1024
    id_factory: Callable[[], str] = field(default=_new_conversation_id)

    def start_conversation(self) -> ChatReply:
        """Create a conversation seeded with the system prompt."""
        if not self.provider.is_available:
            raise _unavailable(self.provider)
        conversation_id = self.id_factory()
        self.store.set(
            conversation_id,
            [{"role": "system", "content": SYSTEM_PROMPT}],
            ttl_seconds=self.ttl_seconds,
        )
        return ChatReply(message=GREETING, conversation_id=conversation_id)

    async def chat(self, message: str, conversation_id: str | None) -> ChatReply:
        """Append the user message, ask the provider and store the reply."""
        text = (message or "").strip()
        if not text:
            raise ValidationError("Message is required", field="message")
        if not self.provider.is_available:
            raise _unavailable(self.provider)

        key = conversation_id or DEFAULT_CONVERSATION_ID
        messages = self.store.get(key) or []
        if not messages:
            messages.append({"role": "system", "content": SYSTEM_PROMPT})
        messages.append({"role": "user", "content": text})

        completion = await self.provider.complete(
            messages, temperature=self.temperature, max_tokens=self.max_tokens
        )
        if not completion.content:
            raise UpstreamServiceError("No response from AI")

        messages.append({"role": "assistant", "content": completion.content})
        self.store.set(
            key, cap_history(messages, self.history_limit), ttl_seconds=self.ttl_seconds
        )
        _logger.info("Chat reply stored: conversation=%s", key)
        return ChatReply(message=completion.content, conversation_id=key)

    def clear(self, conversation_id: str | None) -> str:
        """Clear one conversation, or all of them when no id is given."""
        if conversation_id:
            self.store.delete(conversation_id)
            return "Conversation cleared successfully"
        self.store.clear()
        return "All conversations cleared successfully"


def _unavailable(provider: ChatCompletionProvider) -> ServiceUnavailableError:
    hint = getattr(provider, "hint", None) or "Chatbot service is not available."
    return ServiceUnavailableError(hint)
