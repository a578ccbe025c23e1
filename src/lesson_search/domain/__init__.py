"""Domain layer - corpus tree, index entries, result views and navigation.

No I/O lives here; the host loads files and renders effects.
"""

from lesson_search.domain.corpus import Chapter, Corpus, CorpusStructureError, LessonSearchError, Part, Subject
from lesson_search.domain.model import DocumentKey, Entry, SearchableText
from lesson_search.domain.search import ResultView


__all__ = [
    "Chapter",
    "Corpus",
    "CorpusStructureError",
    "DocumentKey",
    "Entry",
    "LessonSearchError",
    "Part",
    "ResultView",
    "SearchableText",
    "Subject",
]
