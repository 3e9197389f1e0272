"""Meal photo analysis through a vision-language model."""

import asyncio
import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from macro_lens.domain.analysis import MealAnalysis
from macro_lens.services.extraction import extract_json_candidate
from macro_lens.services.normalization import normalize_analysis
from macro_lens.services.parsing import parse_candidate
from macro_lens.services.prompts import build_analysis_prompt

logger = logging.getLogger(__name__)

JPEG_MIME_TYPE = "image/jpeg"


class VisionClient(Protocol):
    """Interface for a model that answers a prompt about an image."""

    async def describe(  # noqa: PLR0913
        self,
        *,
        model: str,
        temperature: float,
        top_p: float,
        image_data_url: str,
        prompt: str,
    ) -> str:
        """Return the model's raw text reply."""


class ImageProcessor(Protocol):
    """Interface for transcoding uploads to a standard raster format."""

    def to_jpeg(self, image_bytes: bytes) -> bytes:
        """Return JPEG bytes for an arbitrary image upload."""


@dataclass
class AnalysisService:
    """Service that turns a meal photo into a normalized ``MealAnalysis``."""

    client: VisionClient
    image_processor: ImageProcessor
    model: str
    temperature: float
    top_p: float

    async def analyze(self, image_bytes: bytes) -> MealAnalysis:
        """Analyze a meal photo.

        Raises ``ImageRejected``, ``UpstreamFailure``, ``MalformedResponse`` or
        ``NoFoodDetected``.
        """
        jpeg_bytes = await asyncio.to_thread(self.image_processor.to_jpeg, image_bytes)
        raw = await self.client.describe(
            model=self.model,
            temperature=self.temperature,
            top_p=self.top_p,
            image_data_url=_to_data_url(jpeg_bytes),
            prompt=build_analysis_prompt(),
        )
        logger.debug("Raw model reply: %s", raw)
        return analyze_reply(raw)


def analyze_reply(raw: str) -> MealAnalysis:
    """Run extraction, decoding and normalization over a raw model reply."""
    candidate = extract_json_candidate(raw)
    logger.debug("Cleaned model reply: %s", candidate)
    return normalize_analysis(parse_candidate(candidate))


def _to_data_url(jpeg_bytes: bytes) -> str:
    """Convert JPEG bytes to a base64 data URL for image input."""
    encoded = base64.b64encode(jpeg_bytes).decode("utf-8")
    return f"data:{JPEG_MIME_TYPE};base64,{encoded}"
