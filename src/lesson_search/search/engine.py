"""Search engine session object.

One SearchEngine is constructed per application session and passed to every
consumer that needs it: the lesson loader pushes bodies through ``enrich``,
the query field feeds ``dispatch(QueryChanged(...))`` and keyboard handlers
feed the remaining navigation events. Tests build as many independent engines
as they like. Index and navigation state are per engine; the Prometheus
instruments are process-wide, so the index gauges follow the last engine that
built or enriched an index.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from lesson_search.config import Settings
from lesson_search.domain.corpus import Corpus, LessonSearchError
from lesson_search.domain.model import DocumentKey, Entry
from lesson_search.domain.navigation import (
    Activate,
    Close,
    Effect,
    MoveDown,
    MoveUp,
    NavigationEvent,
    NavigationState,
    Open,
    QueryChanged,
    Toggle,
    transition,
)
from lesson_search.domain.search import ResultView
from lesson_search.observability.metrics import SEARCH_LATENCY, SEARCH_QUERIES, track_latency
from lesson_search.search.highlight import build_excerpt, highlight
from lesson_search.search.index import CorpusIndex
from lesson_search.search.query import ScoredEntry, is_degenerate, score_entries


logger = logging.getLogger(__name__)


class EngineNotInitializedError(LessonSearchError, RuntimeError):
    """Raised when enrichment is attempted before init()."""


class SearchEngine:
    """Owns the corpus index and the result navigation state."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self._index: CorpusIndex | None = None
        self._state = NavigationState()

    # --- lifecycle ---

    def init(self, corpus: Corpus | Mapping[str, Any]) -> CorpusIndex:
        """Build the index for a corpus and reset navigation.

        Raises:
            CorpusStructureError: If the corpus tree is malformed. The previous
                index, if any, is kept.
        """
        index = CorpusIndex.build(corpus, search_text_limit=self.settings.search_text_limit)
        self._index = index
        self._state = NavigationState()
        return index

    def reset(self) -> None:
        """Drop the index and all navigation state."""
        self._index = None
        self._state = NavigationState()

    @property
    def is_ready(self) -> bool:
        return self._index is not None

    @property
    def index(self) -> CorpusIndex:
        if self._index is None:
            raise EngineNotInitializedError("Search engine has no corpus; call init() first")
        return self._index

    @property
    def state(self) -> NavigationState:
        return self._state

    # --- enrichment ---

    def enrich(self, key: DocumentKey, raw_text: str) -> bool:
        return self.index.enrich(key, raw_text)

    def enrich_locator(self, locator: str, raw_text: str) -> bool:
        return self.index.enrich_locator(locator, raw_text)

    # --- querying ---

    def score(self, query_string: str) -> list[ScoredEntry]:
        """Ranked entries with their scores; empty before init()."""
        if self._index is None:
            return []

        with track_latency(SEARCH_LATENCY):
            scored = score_entries(
                self._index,
                query_string,
                max_results=self.settings.max_results,
                min_query_length=self.settings.min_query_length,
                title_weight=self.settings.title_weight,
                body_weight=self.settings.body_weight,
            )

        if is_degenerate(query_string, self.settings.min_query_length):
            SEARCH_QUERIES.labels(outcome="degenerate").inc()
        else:
            SEARCH_QUERIES.labels(outcome="hit" if scored else "empty").inc()
            logger.debug("Query matched %d entries", len(scored), extra={"query": query_string, "matches": len(scored)})
        return scored

    def query(self, query_string: str) -> list[Entry]:
        return [item.entry for item in self.score(query_string)]

    def search(self, query_string: str) -> list[ResultView]:
        """Ranked results ready for rendering, with highlighted titles and excerpt."""
        return [self._to_view(item, query_string) for item in self.score(query_string)]

    def highlight(self, text: str, query_string: str) -> str:
        return highlight(text, query_string, style=self.settings.highlight_style)

    def _to_view(self, item: ScoredEntry, query_string: str) -> ResultView:
        entry = item.entry
        excerpt = build_excerpt(
            entry.content_text,
            query_string,
            before=self.settings.excerpt_before,
            after=self.settings.excerpt_after,
            style=self.settings.highlight_style,
        )
        return ResultView(
            document_key=entry.document_key,
            subject_title=entry.subject_title,
            chapter_title=entry.chapter_title,
            subtitle=entry.subtitle,
            part_number=entry.part_number,
            highlighted_subject=self.highlight(entry.subject_title, query_string),
            highlighted_chapter=self.highlight(entry.chapter_title, query_string),
            highlighted_subtitle=self.highlight(entry.subtitle, query_string),
            excerpt=excerpt,
            score=item.score,
        )

    # --- navigation ---

    def dispatch(self, event: NavigationEvent) -> list[Effect]:
        """Feed one input event through the navigation state machine."""
        self._state, effects = transition(
            self._state,
            event,
            self.search,
            min_query_length=self.settings.min_query_length,
        )
        return effects

    def set_query(self, text: str) -> list[Effect]:
        return self.dispatch(QueryChanged(text=text))

    def open(self) -> list[Effect]:
        return self.dispatch(Open())

    def close(self) -> list[Effect]:
        return self.dispatch(Close())

    def toggle(self) -> list[Effect]:
        return self.dispatch(Toggle())

    def move_up(self) -> list[Effect]:
        return self.dispatch(MoveUp())

    def move_down(self) -> list[Effect]:
        return self.dispatch(MoveDown())

    def activate(self) -> list[Effect]:
        return self.dispatch(Activate())
