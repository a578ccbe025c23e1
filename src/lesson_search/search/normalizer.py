"""Markdown-to-search-text normalization.

Lesson bodies arrive as raw markdown. Before they are appended to an entry's
searchable text, code is dropped entirely (identifiers inside code blocks make
noisy matches), markup punctuation is blanked out and whitespace is collapsed.
"""

from __future__ import annotations

import re


# Fenced blocks first so their backticks are not mistaken for inline spans
FENCED_CODE_PATTERN = re.compile(r"```[\s\S]*?```")
INLINE_CODE_PATTERN = re.compile(r"`[^`]+`")
HEADING_MARKER_PATTERN = re.compile(r"#{1,6}\s")
MARKUP_CHARS_PATTERN = re.compile(r"[*_~\[\]()#>|!]")
WHITESPACE_RUN_PATTERN = re.compile(r"\s{2,}")


def normalize(raw_text: str) -> str:
    """Strip markdown syntax and return lowercase, whitespace-collapsed text.

    Args:
        raw_text: Raw markdown as loaded from the lesson file.

    Returns:
        Normalized text; empty string for empty or whitespace-only input.
    """
    if not raw_text or not raw_text.strip():
        return ""

    text = FENCED_CODE_PATTERN.sub(" ", raw_text)
    text = INLINE_CODE_PATTERN.sub(" ", text)
    text = HEADING_MARKER_PATTERN.sub(" ", text)
    text = MARKUP_CHARS_PATTERN.sub(" ", text)
    text = WHITESPACE_RUN_PATTERN.sub(" ", text)
    return text.strip().lower()
