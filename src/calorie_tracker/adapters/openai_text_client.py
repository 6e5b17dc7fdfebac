"""OpenAI Responses API client for plain-text generation."""

from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from calorie_tracker.domain.coaching import ChatMessage
from calorie_tracker.domain.errors import ExternalServiceError
from calorie_tracker.services.coaching import TextGenerationClient


@dataclass
class OpenAITextClient(TextGenerationClient):
    """Text generation backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, timeout: float = 60.0) -> "OpenAITextClient":
        """Create an OpenAI text client."""
        return cls(client=AsyncOpenAI(api_key=api_key, timeout=timeout))

    async def generate(
        self,
        *,
        model: str,
        instructions: str | None,
        messages: list[ChatMessage],
        store: bool,
    ) -> str:
        """Send the conversation and return the reply text."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user" if message.role == "user" else "assistant",
                    "content": message.content,
                }
                for message in messages
            ],
            "store": store,
        }
        if instructions:
            request_payload["instructions"] = instructions

        try:
            response = await self.client.responses.create(**request_payload)
        except OpenAIError as exc:
            raise ExternalServiceError("OpenAI request failed") from exc
        output_text = response.output_text
        if not output_text:
            raise ExternalServiceError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
