"""Domain model - index entries and their identity.

- DocumentKey is a value object: immutable, compared by value
- SearchableText is a value object holding the enrichable fields together
- Entry is an entity: identity is its DocumentKey, and its searchable text
  changes exactly once, when the lesson body is first loaded

Entry never mutates ``content_text`` and ``search_text`` separately. Both live
in one frozen SearchableText that enrichment swaps in with a single attribute
assignment, so a reader sees either the title-only pair or the enriched pair.
"""

from typing import Self

from pydantic import Field
from pydantic.dataclasses import dataclass


DEFAULT_SEARCH_TEXT_LIMIT = 4000


@dataclass(frozen=True)
class DocumentKey:
    """Composite identity of a lesson part."""

    subject_id: str = Field(min_length=1)
    chapter_id: str = Field(min_length=1)
    part_number: int = Field(ge=0)

    def __str__(self) -> str:
        return f"{self.subject_id}/{self.chapter_id}/part{self.part_number}"

    def __hash__(self) -> int:
        return hash((self.subject_id, self.chapter_id, self.part_number))


@dataclass(frozen=True)
class SearchableText:
    """Normalized body text plus the derived lowercase search string."""

    search_text: str
    content_text: str | None = None

    @property
    def is_enriched(self) -> bool:
        return self.content_text is not None


@dataclass
class Entry:
    """One indexed lesson part.

    Titles, locator and ordering are fixed at build time. Only ``searchable``
    is ever reassigned, and only from title-only to enriched.
    """

    document_key: DocumentKey
    subject_title: str
    chapter_title: str
    subtitle: str
    locator: str
    corpus_order: int = Field(ge=0)
    searchable: SearchableText | None = None
    search_text_limit: int = Field(default=DEFAULT_SEARCH_TEXT_LIMIT, ge=1)

    def __post_init__(self) -> None:
        if self.searchable is None:
            self.searchable = SearchableText(search_text=self.title_text[: self.search_text_limit])

    def __eq__(self, other: object) -> bool:
        """Entries are equal if they have the same DocumentKey (identity)."""
        if not isinstance(other, Entry):
            return False
        return self.document_key == other.document_key

    def __hash__(self) -> int:
        return hash(self.document_key)

    @classmethod
    def create(
        cls,
        *,
        subject_id: str,
        subject_title: str,
        chapter_id: str,
        chapter_title: str,
        part_number: int,
        subtitle: str,
        locator: str,
        corpus_order: int,
        search_text_limit: int = DEFAULT_SEARCH_TEXT_LIMIT,
    ) -> Self:
        """Factory method to create a title-only entry from corpus primitives."""
        key = DocumentKey(subject_id=subject_id, chapter_id=chapter_id, part_number=part_number)
        return cls(
            document_key=key,
            subject_title=subject_title,
            chapter_title=chapter_title,
            subtitle=subtitle,
            locator=locator,
            corpus_order=corpus_order,
            search_text_limit=search_text_limit,
        )

    @property
    def part_number(self) -> int:
        return self.document_key.part_number

    @property
    def title_text(self) -> str:
        """Lowercase subject, chapter and part titles joined by spaces."""
        return f"{self.subject_title} {self.chapter_title} {self.subtitle}".lower()

    @property
    def title_composite(self) -> str:
        """Chapter title and subtitle, the high-weight scoring tier."""
        return f"{self.chapter_title} {self.subtitle}".lower()

    @property
    def content_text(self) -> str | None:
        return self.searchable.content_text

    @property
    def search_text(self) -> str:
        return self.searchable.search_text

    @property
    def is_enriched(self) -> bool:
        return self.searchable.is_enriched

    def enrich(self, content_text: str) -> bool:
        """Attach normalized body text once.

        Returns:
            True if the entry changed, False if it was already enriched or the
            body normalized to nothing.
        """
        if self.is_enriched or not content_text:
            return False
        search_text = f"{self.title_text} {content_text}"[: self.search_text_limit]
        self.searchable = SearchableText(search_text=search_text, content_text=content_text)
        return True
