"""Groq chat completions provider for the chatbot."""

import logging
from dataclasses import dataclass

from groq import APIConnectionError, APIStatusError, AsyncGroq

from lankanutri.errors import UpstreamServiceError
from lankanutri.services.llm import ChatCompletion, ChatCompletionProvider

_logger = logging.getLogger(__name__)


@dataclass
class GroqChatProvider(ChatCompletionProvider):
    """Chat completion provider backed by the Groq API."""

    client: AsyncGroq
    model: str

    @classmethod
    def create(cls, api_key: str, model: str) -> "GroqChatProvider":
        """Create a Groq chat provider."""
        return cls(client=AsyncGroq(api_key=api_key), model=model)

    @property
    def is_available(self) -> bool:
        return True

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> ChatCompletion:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except APIStatusError as exc:
            _logger.warning("Groq request failed: status=%s", exc.status_code)
            raise UpstreamServiceError(
                "Chatbot service request failed",
                upstream_status=exc.status_code,
                detail=exc.message,
            ) from exc
        except APIConnectionError as exc:
            _logger.warning("Groq connection failed: %s", exc)
            raise UpstreamServiceError(
                "Chatbot service is unreachable", detail=str(exc)
            ) from exc
        content = response.choices[0].message.content if response.choices else None
        return ChatCompletion(
            content=content or "",
            model=response.model,
            usage=response.usage.model_dump() if response.usage else None,
        )
