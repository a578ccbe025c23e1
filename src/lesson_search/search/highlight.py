"""Match highlighting and result excerpts.

Highlighting is a pure text transform: every case-insensitive occurrence of
every query term is wrapped in a marker. Terms are applied one after another
in query order, so when two terms overlap the later substitution runs over
text already wrapped by the earlier one and may nest markers. Callers get the
marked text as is.
"""

from __future__ import annotations

import re
from typing import Literal

from lesson_search.search.query import parse_terms


HighlightStyle = Literal["html", "plain"]

DEFAULT_EXCERPT_BEFORE = 30
DEFAULT_EXCERPT_AFTER = 100


def _wrap(style: HighlightStyle) -> str:
    return r"<mark>\g<0></mark>" if style == "html" else r"[[\g<0>]]"


def highlight(text: str, query_string: str, *, style: HighlightStyle = "html") -> str:
    """Wrap query-term occurrences in ``text``.

    Args:
        text: Fragment to highlight (a title or an excerpt).
        query_string: Raw query; tokenized the same way the ranking does.
        style: "html" for <mark>term</mark> or "plain" for [[term]].

    Returns:
        Text with every occurrence of every term wrapped; unchanged when no
        term occurs.
    """
    if not text:
        return text or ""

    replacement = _wrap(style)
    result = text
    for term in parse_terms(query_string):
        pattern = re.compile(re.escape(term), re.IGNORECASE)
        result = pattern.sub(replacement, result)
    return result


def build_excerpt(
    content_text: str | None,
    query_string: str,
    *,
    before: int = DEFAULT_EXCERPT_BEFORE,
    after: int = DEFAULT_EXCERPT_AFTER,
    style: HighlightStyle = "html",
) -> str | None:
    """Cut a highlighted window of body text around the first query word.

    The window starts ``before`` characters ahead of the first occurrence of
    the query's first word and ends ``after`` characters past its start.

    Returns:
        Highlighted excerpt, or None when there is no body text or the first
        word does not occur in it.
    """
    terms = parse_terms(query_string)
    if not content_text or not terms:
        return None

    position = content_text.find(terms[0])
    if position == -1:
        return None

    window = content_text[max(0, position - before) : position + after].strip()
    if not window:
        return None
    return highlight(window, query_string, style=style)
