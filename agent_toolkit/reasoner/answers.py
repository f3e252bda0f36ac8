"""Helpers for locating the "final answer" marker in free text."""
from __future__ import annotations

import re
from typing import Optional

FINAL_ANSWER_MARKER = "final answer"
FINAL_ANSWER_PATTERN = re.compile(FINAL_ANSWER_MARKER, re.IGNORECASE)


def has_final_answer(text: str) -> bool:
    return bool(FINAL_ANSWER_PATTERN.search(text))


def answer_after_marker(text: str) -> Optional[str]:
    """Text after the first ``:`` following the marker, or None if either is missing."""
    marker_index = text.lower().find(FINAL_ANSWER_MARKER)
    if marker_index == -1:
        return None
    colon_index = text.find(":", marker_index)
    if colon_index == -1:
        return None
    return text[colon_index + 1:].strip()


def strip_final_answer_prefix(text: str) -> str:
    """Drop a leading final-answer marker (and its colon when present)."""
    marker_index = text.lower().find(FINAL_ANSWER_MARKER)
    if marker_index == -1:
        return text.strip()
    colon_index = text.find(":", marker_index)
    if colon_index == -1:
        return text[marker_index + len(FINAL_ANSWER_MARKER):].strip()
    return text[colon_index + 1:].strip()
