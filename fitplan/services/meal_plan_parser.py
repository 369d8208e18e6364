"""Lenient splitting of free-text meal plans into per-day entries."""
from __future__ import annotations

import re
from typing import List

DAY_MARKER = re.compile(r"(?=\bDay\s*\d+\b)", re.IGNORECASE)


def split_meal_plan(text: str | None) -> List[str]:
    """
    Split a generated meal plan into one string per day.

    Lines are the primary separator. When the model put everything on one
    line, the text is cut before each ``Day N`` marker instead. Empty segments
    are dropped and nothing is ever rejected: text with neither newlines nor
    markers comes back as a single segment.
    """
    if not text or not text.strip():
        return []

    segments = [line.strip() for line in text.splitlines() if line.strip()]
    if len(segments) == 1:
        segments = [part.strip() for part in DAY_MARKER.split(segments[0]) if part.strip()]
    return segments or [text.strip()]
