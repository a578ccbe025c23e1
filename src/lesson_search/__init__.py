"""In-memory search for a subject/chapter/part lesson corpus."""

from lesson_search.config import Settings
from lesson_search.domain.corpus import Corpus, CorpusStructureError, LessonSearchError
from lesson_search.domain.model import DocumentKey, Entry
from lesson_search.search.engine import EngineNotInitializedError, SearchEngine


__all__ = [
    "Corpus",
    "CorpusStructureError",
    "DocumentKey",
    "EngineNotInitializedError",
    "Entry",
    "LessonSearchError",
    "SearchEngine",
    "Settings",
]
