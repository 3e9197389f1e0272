"""Decoding of extracted model replies."""

import json
import logging

from macro_lens.domain.errors import MalformedResponse

logger = logging.getLogger(__name__)


def parse_candidate(candidate: str) -> dict[str, object]:
    """Decode a JSON object, raising ``MalformedResponse`` on failure."""
    try:
        decoded = json.loads(candidate)
    except (ValueError, RecursionError) as exc:
        logger.warning("Failed to decode model reply: %s", exc)
        raise MalformedResponse(candidate) from exc
    if not isinstance(decoded, dict):
        logger.warning(
            "Model reply decoded to %s, not an object", type(decoded).__name__
        )
        raise MalformedResponse(candidate)
    return decoded
