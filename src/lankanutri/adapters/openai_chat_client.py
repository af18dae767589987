"""OpenAI chat completions provider."""

import logging
from dataclasses import dataclass

from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from lankanutri.errors import UpstreamServiceError
from lankanutri.services.llm import ChatCompletion, ChatCompletionProvider

_logger = logging.getLogger(__name__)


@dataclass
class OpenAIChatProvider(ChatCompletionProvider):
    """Chat completion provider backed by the OpenAI API."""

    client: AsyncOpenAI
    model: str

    @classmethod
    def create(cls, api_key: str, model: str) -> "OpenAIChatProvider":
        """Create an OpenAI chat provider."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model)

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
            _logger.warning("OpenAI request failed: status=%s", exc.status_code)
            raise UpstreamServiceError(
                "AI service request failed",
                upstream_status=exc.status_code,
                detail=exc.message,
            ) from exc
        except APIConnectionError as exc:
            _logger.warning("OpenAI connection failed: %s", exc)
            raise UpstreamServiceError(
                "AI service is unreachable", detail=str(exc)
            ) from exc
        content = response.choices[0].message.content if response.choices else None
        return ChatCompletion(
            content=content or "",
            model=response.model,
            usage=response.usage.model_dump() if response.usage else None,
        )
