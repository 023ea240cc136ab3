"""Normalize provider-specific LLM responses to plain text.

Providers answer in different shapes. In order of precedence:

(a) ``content`` is a sequence of typed blocks; the first ``type == "text"``
    block supplies the text (Anthropic messages)
(b) ``content`` is already a string (OpenAI chat message)
(c) a ``text`` field
(d) a bare string

A response may satisfy several shapes at once (e.g. both ``content`` blocks
and ``text``); the structural form wins. Malformed responses yield a fixed
fallback instead of raising.
"""

from collections.abc import Mapping, Sequence
from typing import Any

COMMIT_SUMMARY_FALLBACK = "Failed to generate summary"
DAILY_SUMMARY_FALLBACK = "Failed to generate daily summary"

_MISSING = object()


def _field(obj: Any, name: str) -> Any:
    """Read a key from a mapping or an attribute from an SDK object."""
    if isinstance(obj, Mapping):
        return obj.get(name, _MISSING)
    return getattr(obj, name, _MISSING)


def _first_text_block(blocks: Sequence[Any]) -> str | None:
    for block in blocks:
        if _field(block, "type") != "text":
            continue
        text = _field(block, "text")
        if isinstance(text, str):
            return text
    return None


def extract_text(raw: Any, fallback: str = COMMIT_SUMMARY_FALLBACK) -> str:
    """Extract the response text from a raw LLM response. Never raises."""
    if raw is None:
        return fallback
    if isinstance(raw, str):
        return raw

    content = _field(raw, "content")
    if isinstance(content, Sequence) and not isinstance(content, str | bytes):
        text = _first_text_block(content)
        return text if text is not None else fallback
    if isinstance(content, str) and content:
        return content

    text = _field(raw, "text")
    if isinstance(text, str):
        return text

    return fallback
