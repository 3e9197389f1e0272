"""OpenAI Responses API client for meal photo analysis."""

import logging
from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from macro_lens.domain.errors import UpstreamFailure
from macro_lens.services.analysis import VisionClient

logger = logging.getLogger(__name__)


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIVisionClient":
        """Create an OpenAI vision client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def describe(  # noqa: PLR0913
        self,
        *,
        model: str,
        temperature: float,
        top_p: float,
        image_data_url: str,
        prompt: str,
    ) -> str:
        """Send the prompt and image and return the free-text reply."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {"type": "input_image", "image_url": image_data_url},
                    ],
                }
            ],
            "temperature": temperature,
            "top_p": top_p,
            "store": False,
        }
        try:
            response = await self.client.responses.create(**request_payload)
        except OpenAIError as exc:
            logger.exception("OpenAI request failed")
            raise UpstreamFailure("vision model call", str(exc)) from exc
        output_text = response.output_text
        if not output_text:
            raise UpstreamFailure("vision model call", "empty response")
        return output_text
