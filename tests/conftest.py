"""Shared test fixtures and configuration."""

import json
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from lesson_search.config import Settings
from lesson_search.domain.corpus import Corpus
from lesson_search.search.engine import SearchEngine
from lesson_search.search.index import CorpusIndex


SAMPLE_CORPUS = {
    "subjects": [
        {
            "id": "net",
            "title": "Networking",
            "icon": "🌐",
            "chapters": [
                {
                    "id": "intro",
                    "title": "Intro",
                    "parts": [
                        {"num": 1, "subtitle": "what is a network", "file": "net/intro/part1.md"},
                        {"num": 2, "subtitle": "layers and models", "file": "net/intro/part2.md"},
                    ],
                },
                {
                    "id": "tcp",
                    "title": "TCP Basics",
                    "parts": [
                        {"num": 1, "subtitle": "handshakes", "file": "net/tcp/part1.md"},
                    ],
                },
            ],
        },
        {
            "id": "storage",
            "title": "Storage",
            "chapters": [
                {
                    "id": "routing",
                    "title": "Routing Tables",
                    "parts": [
                        {"num": 1, "subtitle": "ip routing protocols", "file": "storage/routing/part1.md"},
                    ],
                },
            ],
        },
    ]
}

SAMPLE_BODIES = {
    "net/intro/part1.md": "# What is a network\n\nComputers talk to each other.\n",
    "net/intro/part2.md": "## Layers\n\nThe **OSI model** has seven layers.\n\n```python\nprint('layers')\n```\n",
    "net/tcp/part1.md": "# Handshakes\n\nSYN, SYN-ACK, ACK. Use `ss -t` to inspect sockets.\n",
    "storage/routing/part1.md": "# Routing\n\n...packets traverse a network of routers...\n",
}


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def corpus_data() -> dict:
    return SAMPLE_CORPUS


@pytest.fixture
def corpus() -> Corpus:
    return Corpus.from_mapping(SAMPLE_CORPUS)


@pytest.fixture
def index(corpus: Corpus) -> CorpusIndex:
    return CorpusIndex.build(corpus)


@pytest.fixture
def engine(settings: Settings, corpus: Corpus) -> SearchEngine:
    search_engine = SearchEngine(settings)
    search_engine.init(corpus)
    return search_engine


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    """Write the sample corpus and lesson files to a temporary directory."""
    (tmp_path / "curriculum.json").write_text(json.dumps(SAMPLE_CORPUS), encoding="utf-8")
    for locator, body in SAMPLE_BODIES.items():
        path = tmp_path / locator
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
    return tmp_path
