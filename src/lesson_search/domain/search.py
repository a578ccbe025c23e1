"""Value objects handed to the result renderer.

A ResultView carries everything the host needs to draw one result row and to
navigate when it is picked, with titles and excerpt already highlighted.
"""

from pydantic import BaseModel, ConfigDict

from lesson_search.domain.model import DocumentKey


class ResultView(BaseModel):
    """One rendered search result."""

    model_config = ConfigDict(frozen=True)

    document_key: DocumentKey
    subject_title: str
    chapter_title: str
    subtitle: str
    part_number: int
    highlighted_subject: str
    highlighted_chapter: str
    highlighted_subtitle: str
    excerpt: str | None = None
    score: int = 0
