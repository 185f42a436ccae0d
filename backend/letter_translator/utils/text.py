"""Text utilities for logs and diagnostics."""

import re
from typing import Optional


def safe_truncate(text: str, max_chars: int, suffix: str = "...") -> str:
    """Truncate text, preferring to break at whitespace or punctuation.

    Looks back up to 20 characters for a break point so log previews do not
    end mid-word.
    """
    if not text or len(text) <= max_chars:
        return text

    truncated = text[:max_chars]
    break_chars = {" ", "\n", "\t", ",", ".", "!", "?", ";", ":", "-", "።", "।"}
    for i in range(len(truncated) - 1, max(len(truncated) - 21, 0), -1):
        if truncated[i] in break_chars:
            truncated = truncated[: i + 1].rstrip()
            break

    return truncated + suffix


def preview_text(text: Optional[str], max_length: int = 500) -> str:
    """Single-paragraph preview of untrusted text for log lines.

    Removes control characters, collapses whitespace and truncates.
    """
    if not text:
        return ""
    text = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", text)
    text = re.sub(r"\s+", " ", text).strip()
    return safe_truncate(text, max_length)
