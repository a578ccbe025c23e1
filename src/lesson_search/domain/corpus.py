"""Corpus tree models (subject -> chapter -> part).

The corpus arrives as a ``curriculum.json`` style document. Validation runs
once, when the tree is loaded; a tree that fails here never reaches the index.
Unknown keys (icons, colours, descriptions) are ignored.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class LessonSearchError(Exception):
    """Base error for the lesson search engine."""


class CorpusStructureError(LessonSearchError, ValueError):
    """Raised when the corpus tree is missing a required field."""


class Part(BaseModel):
    """Leaf document of the corpus: one lesson part."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    number: int = Field(alias="num", ge=0)
    subtitle: str = ""
    locator: str = Field(alias="file", min_length=1)


class Chapter(BaseModel):
    """A chapter groups an ordered, non-empty list of parts."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    parts: list[Part] = Field(min_length=1)


class Subject(BaseModel):
    """Top-level grouping of chapters."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    chapters: list[Chapter]


class Corpus(BaseModel):
    """Validated corpus tree in definition order."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    subjects: list[Subject] = Field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Corpus:
        """Validate a raw mapping, converting validation failures to CorpusStructureError."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise CorpusStructureError(f"Invalid corpus structure: {exc}") from exc

    @classmethod
    def from_json_file(cls, path: Path) -> Corpus:
        """Load and validate a corpus from a JSON file.

        Raises:
            FileNotFoundError: If the corpus file doesn't exist
            OSError: If the path exists but cannot be read (e.g. a directory)
            CorpusStructureError: If the file is not UTF-8 JSON or misses required fields
        """
        if not path.exists():
            raise FileNotFoundError(f"Corpus file not found: {path}")

        with path.open(encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise CorpusStructureError(f"Corpus file is not valid JSON: {path}: {exc}") from exc
            except UnicodeDecodeError as exc:
                raise CorpusStructureError(f"Corpus file is not valid UTF-8: {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise CorpusStructureError(f"Corpus root must be an object: {path}")
        return cls.from_mapping(data)

    def iter_parts(self) -> Iterator[tuple[Subject, Chapter, Part]]:
        """Yield every part with its ancestors, in definition order."""
        for subject in self.subjects:
            for chapter in subject.chapters:
                for part in chapter.parts:
                    yield subject, chapter, part

    def part_count(self) -> int:
        return sum(len(chapter.parts) for subject in self.subjects for chapter in subject.chapters)
