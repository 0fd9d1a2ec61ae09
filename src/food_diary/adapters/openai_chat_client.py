"""OpenAI Responses API client for the coach chat."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from food_diary.services.coach import ChatClient


@dataclass
class OpenAIChatClient(ChatClient):
    """Chat client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    async def generate(
        self, *, model: str, store: bool, instructions: str, message: str
    ) -> str | None:
        """Send one user message with system instructions."""
        response = await self.client.responses.create(
            model=model,
            instructions=instructions,
            input=message,
            store=store,
        )
        return response.output_text or None
