"""Text cleanup that isolates a JSON object from a free-form model reply.

Each step is a pure ``str -> str`` function. ``extract_json_candidate`` runs
them in order and never raises; the result may still be invalid JSON, or
empty.
"""

import re
from collections.abc import Callable

from macro_lens.services.prompts import PROMPT_ECHO_MARKER

_FENCE_OPENER = re.compile(r"```json", re.IGNORECASE)
_FENCE = "```"
_PROMPT_ECHO = re.compile(
    r"^\s*" + re.escape(PROMPT_ECHO_MARKER) + r".*",
    re.IGNORECASE | re.DOTALL | re.MULTILINE,
)
_LINE_BREAKS = re.compile(r"[\r\n]+")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers."""
    return _FENCE_OPENER.sub("", text).replace(_FENCE, "")


def truncate_prompt_echo(text: str) -> str:
    """Drop everything from a line that restates the instruction heading."""
    return _PROMPT_ECHO.sub("", text)


def collapse_line_breaks(text: str) -> str:
    """Replace every run of line breaks with a single space."""
    return _LINE_BREAKS.sub(" ", text)


def drop_before_first_brace(text: str) -> str:
    """Discard any prose preceding the first opening brace."""
    first = text.find("{")
    if first > 0:
        return text[first:]
    return text


def drop_after_last_brace(text: str) -> str:
    """Discard any prose following the last closing brace."""
    last = text.rfind("}")
    if last != -1:
        return text[: last + 1]
    return text


EXTRACTION_STEPS: tuple[Callable[[str], str], ...] = (
    strip_code_fences,
    truncate_prompt_echo,
    collapse_line_breaks,
    drop_before_first_brace,
    drop_after_last_brace,
    str.strip,
)


def extract_json_candidate(raw: str) -> str:
    """Return the substring of ``raw`` most likely to be the JSON payload."""
    text = raw
    for step in EXTRACTION_STEPS:
        text = step(text)
    return text
