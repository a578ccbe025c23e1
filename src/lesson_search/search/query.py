"""Weighted substring ranking over the corpus index.

Each query term scores an entry once: the title weight if it occurs in the
chapter title or subtitle, otherwise the body weight if it occurs anywhere in
the searchable text. Matching is plain substring containment, so partial
words count. Scores are not normalized by document length; the corpus is
small enough that flat additive scoring ranks well.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from lesson_search.domain.model import Entry


DEFAULT_MAX_RESULTS = 12
DEFAULT_MIN_QUERY_LENGTH = 2
TITLE_WEIGHT = 10
BODY_WEIGHT = 1


@dataclass(slots=True, frozen=True)
class ScoredEntry:
    """An entry paired with its query score."""

    entry: Entry
    score: int


def parse_terms(query_string: str) -> list[str]:
    """Lowercase the query and split it on whitespace into non-empty terms."""
    return (query_string or "").lower().split()


def is_degenerate(query_string: str, min_query_length: int = DEFAULT_MIN_QUERY_LENGTH) -> bool:
    """True when the trimmed query is too short to search."""
    return len((query_string or "").strip()) < min_query_length


def score_entry(entry: Entry, terms: Iterable[str], *, title_weight: int = TITLE_WEIGHT, body_weight: int = BODY_WEIGHT) -> int:
    title_composite = entry.title_composite
    search_text = entry.search_text
    score = 0
    for term in terms:
        if term in title_composite:
            score += title_weight
        elif term in search_text:
            score += body_weight
    return score


def score_entries(
    entries: Iterable[Entry],
    query_string: str,
    *,
    max_results: int = DEFAULT_MAX_RESULTS,
    min_query_length: int = DEFAULT_MIN_QUERY_LENGTH,
    title_weight: int = TITLE_WEIGHT,
    body_weight: int = BODY_WEIGHT,
) -> list[ScoredEntry]:
    """Score, filter, sort and cap entries for a query.

    Args:
        entries: Index entries, typically a CorpusIndex.
        query_string: Raw query text as typed.
        max_results: Maximum number of results returned.
        min_query_length: Trimmed queries shorter than this return nothing.
        title_weight: Score for a term found in the title composite.
        body_weight: Score for a term found only in the search text.

    Returns:
        Matches sorted by score descending, then corpus order ascending.
    """
    if is_degenerate(query_string, min_query_length):
        return []

    terms = parse_terms(query_string)
    scored: list[ScoredEntry] = []
    for entry in entries:
        score = score_entry(entry, terms, title_weight=title_weight, body_weight=body_weight)
        if score > 0:
            scored.append(ScoredEntry(entry=entry, score=score))

    scored.sort(key=lambda item: (-item.score, item.entry.corpus_order))
    return scored[:max_results]


def query(
    entries: Iterable[Entry],
    query_string: str,
    *,
    max_results: int = DEFAULT_MAX_RESULTS,
    min_query_length: int = DEFAULT_MIN_QUERY_LENGTH,
    title_weight: int = TITLE_WEIGHT,
    body_weight: int = BODY_WEIGHT,
) -> list[Entry]:
    """Return the ranked entries matching ``query_string``."""
    scored = score_entries(
        entries,
        query_string,
        max_results=max_results,
        min_query_length=min_query_length,
        title_weight=title_weight,
        body_weight=body_weight,
    )
    return [item.entry for item in scored]
