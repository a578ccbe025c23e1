"""In-memory corpus index.

Built once per corpus load from the subject/chapter/part tree, then enriched
in place as lesson bodies are loaded. Entries are kept in traversal order and
additionally keyed by DocumentKey and by locator for O(1) enrichment lookups.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import logging
from typing import Any

from lesson_search.domain.corpus import Corpus, CorpusStructureError
from lesson_search.domain.model import DEFAULT_SEARCH_TEXT_LIMIT, DocumentKey, Entry
from lesson_search.observability.metrics import ENRICH_REQUESTS, INDEX_ENRICHED_COUNT, INDEX_ENTRY_COUNT
from lesson_search.search.normalizer import normalize


logger = logging.getLogger(__name__)


class CorpusIndex:
    """Ordered, enrichable collection of lesson entries."""

    def __init__(self, entries: list[Entry] | None = None) -> None:
        self._entries: list[Entry] = []
        self._by_key: dict[DocumentKey, Entry] = {}
        self._by_locator: dict[str, Entry] = {}
        self._enriched_count = 0
        for entry in entries or []:
            self._add(entry)

    @classmethod
    def build(
        cls,
        corpus: Corpus | Mapping[str, Any],
        *,
        search_text_limit: int = DEFAULT_SEARCH_TEXT_LIMIT,
    ) -> CorpusIndex:
        """Build a title-only index from the corpus tree.

        Args:
            corpus: Validated Corpus, or a raw mapping that is validated first.
            search_text_limit: Maximum length of each entry's search text.

        Returns:
            Index whose entries carry corpus_order 0..n-1 in traversal order.

        Raises:
            CorpusStructureError: If the tree is missing a required field or
                two parts share the same subject/chapter/part number.
        """
        if not isinstance(corpus, Corpus):
            corpus = Corpus.from_mapping(corpus)

        index = cls()
        for order, (subject, chapter, part) in enumerate(corpus.iter_parts()):
            entry = Entry.create(
                subject_id=subject.id,
                subject_title=subject.title,
                chapter_id=chapter.id,
                chapter_title=chapter.title,
                part_number=part.number,
                subtitle=part.subtitle,
                locator=part.locator,
                corpus_order=order,
                search_text_limit=search_text_limit,
            )
            index._add(entry)

        INDEX_ENTRY_COUNT.set(len(index))
        INDEX_ENRICHED_COUNT.set(0)
        logger.info("Built corpus index", extra={"entries": len(index), "subjects": len(corpus.subjects)})
        return index

    def _add(self, entry: Entry) -> None:
        if entry.document_key in self._by_key:
            raise CorpusStructureError(f"Duplicate lesson part in corpus: {entry.document_key}")
        if self._entries and entry.corpus_order <= self._entries[-1].corpus_order:
            raise CorpusStructureError(
                f"Entry {entry.document_key} has corpus_order {entry.corpus_order}, "
                f"expected more than {self._entries[-1].corpus_order}"
            )
        self._entries.append(entry)
        self._by_key[entry.document_key] = entry
        # Two parts may share a file; the first one in corpus order owns it
        self._by_locator.setdefault(entry.locator, entry)
        if entry.is_enriched:
            self._enriched_count += 1

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    @property
    def enriched_count(self) -> int:
        return self._enriched_count

    def get(self, key: DocumentKey) -> Entry | None:
        return self._by_key.get(key)

    def get_by_locator(self, locator: str) -> Entry | None:
        return self._by_locator.get(locator)

    def enrich(self, key: DocumentKey, raw_text: str) -> bool:
        """Attach a lesson body to the entry for ``key``.

        Unknown keys are ignored: the document may belong to a corpus that has
        since been replaced. The first successful enrichment wins.

        Returns:
            True if the entry's searchable text changed.
        """
        return self._enrich_entry(self._by_key.get(key), raw_text, ref=key)

    def enrich_locator(self, locator: str, raw_text: str) -> bool:
        """Same as enrich(), keyed by the part's content file."""
        return self._enrich_entry(self._by_locator.get(locator), raw_text, ref=locator)

    def _enrich_entry(self, entry: Entry | None, raw_text: str, *, ref: object) -> bool:
        if entry is None:
            ENRICH_REQUESTS.labels(outcome="unknown").inc()
            logger.debug("Ignoring enrichment for unknown document %s", ref)
            return False

        if entry.is_enriched:
            ENRICH_REQUESTS.labels(outcome="duplicate").inc()
            return False

        if not entry.enrich(normalize(raw_text)):
            ENRICH_REQUESTS.labels(outcome="empty").inc()
            return False

        ENRICH_REQUESTS.labels(outcome="enriched").inc()
        self._enriched_count += 1
        INDEX_ENRICHED_COUNT.set(self._enriched_count)
        logger.debug("Enriched %s (%d chars)", entry.document_key, len(entry.content_text or ""))
        return True
