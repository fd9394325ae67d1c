"""Recover a JSON value from free-text language model output.

Each strategy is a pure ``str -> value | None`` function; ``recover_json``
tries them in order and the first non-None result wins.
"""

import json
import re
from collections.abc import Callable, Sequence
from typing import Any

from billsplit.runtime.logging import get_logger

logger = get_logger(__name__)

RecoveryStrategy = Callable[[str], Any | None]

# Greedy: first opening brace to the last closing brace
OBJECT_SPAN = re.compile(r"\{[\s\S]*\}")
ARRAY_SPAN = re.compile(r"\[[\s\S]*\]")

RESPONSE_MARKERS = ("```json", "```", "JSON:", "Response:", "Result:")


def _loads(candidate: str, source: str) -> Any | None:
    # Deeply nested replies exhaust the recursion limit instead of failing to decode
    try:
        return json.loads(candidate)
    except (ValueError, RecursionError):
        logger.debug("JSON parse failed for %s: %.200s", source, candidate)
        return None


def object_span(text: str) -> Any | None:
    """Parse the first ``{...}`` span."""
    match = OBJECT_SPAN.search(text)
    if not match:
        return None
    return _loads(match.group(0), "object span")


def array_span(text: str) -> Any | None:
    """Parse the first ``[...]`` span."""
    match = ARRAY_SPAN.search(text)
    if not match:
        return None
    return _loads(match.group(0), "array span")


def after_marker(text: str) -> Any | None:
    """Parse the ``{...}`` span that follows a code fence or label marker."""
    for marker in RESPONSE_MARKERS:
        marker_idx = text.find(marker)
        if marker_idx == -1:
            continue
        remainder = text[marker_idx + len(marker) :].strip()
        match = OBJECT_SPAN.search(remainder)
        if not match:
            continue
        parsed = _loads(match.group(0), f"text after {marker!r}")
        if parsed is not None:
            return parsed
    return None


def whole_text(text: str) -> Any | None:
    """Parse the entire reply as one JSON document."""
    return _loads(text, "entire text")


DEFAULT_STRATEGIES: tuple[RecoveryStrategy, ...] = (object_span, array_span, after_marker, whole_text)


def recover_json(text: Any, strategies: Sequence[RecoveryStrategy] = DEFAULT_STRATEGIES) -> Any | None:
    """Return the first value any strategy recovers from ``text``, else None."""
    if not text or not isinstance(text, str):
        return None
    for strategy in strategies:
        value = strategy(text)
        if value is not None:
            return value
    return None
