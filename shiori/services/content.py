"""Helpers for post body text."""

import math
import re

WORDS_PER_MINUTE = 200

HTML_TAG_PATTERN = re.compile(r"<[^>]*>?")


def calculate_reading_time(content: str) -> int:
    """Estimate reading time in whole minutes, never less than one."""
    text = HTML_TAG_PATTERN.sub("", content or "")
    words = len(text.split())
    return math.ceil(words / WORDS_PER_MINUTE) or 1
