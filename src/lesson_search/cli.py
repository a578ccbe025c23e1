"""Command-line host for the lesson search engine.

Loads a ``curriculum.json`` corpus, pushes every lesson body it can read into
the index and then either answers one query or runs an interactive session
that mirrors the search overlay's keyboard handling.
"""

from __future__ import annotations

import argparse
from collections.abc import Iterable, Sequence
import logging
from pathlib import Path
import sys
from typing import TextIO

import orjson

from lesson_search.config import Settings
from lesson_search.domain.corpus import Corpus, CorpusStructureError
from lesson_search.domain.navigation import (
    Activate,
    Close,
    Closed,
    Effect,
    FocusChanged,
    MoveDown,
    MoveUp,
    NavigationEvent,
    Open,
    Opened,
    QueryChanged,
    RenderResults,
    Selected,
    ShowEmpty,
    ShowHint,
)
from lesson_search.domain.search import ResultView
from lesson_search.observability.logging import configure_logging
from lesson_search.observability.metrics import get_metrics
from lesson_search.search.engine import SearchEngine


logger = logging.getLogger(__name__)

HINT_TEXT = "Type at least {n} characters to search"
EMPTY_TEXT = "No results"

COMMANDS: dict[str, type[NavigationEvent]] = {
    "/down": MoveDown,
    "/up": MoveUp,
    "/enter": Activate,
    "/open": Open,
    "/close": Close,
}


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lesson-search",
        description="Search a subject/chapter/part lesson corpus",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: LESSON_SEARCH_LOG_LEVEL or info)")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines (stderr)")
    parser.add_argument(
        "--metrics-file",
        type=Path,
        help="Write Prometheus text exposition here when the command finishes (node_exporter textfile format)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p_query = sub.add_parser("query", help="Run a single query and print ranked results")
    p_query.add_argument("corpus", type=Path, help="Path to curriculum.json")
    p_query.add_argument("text", help="Query text")
    p_query.add_argument(
        "--content-root",
        type=Path,
        help="Directory lesson files are relative to (defaults to the corpus file's directory)",
    )
    p_query.add_argument("--json", action="store_true", help="Print results as JSON lines")
    p_query.add_argument("--scores", action="store_true", help="Include ranking scores in text output")

    p_interactive = sub.add_parser("interactive", help="Drive the result list from stdin commands")
    p_interactive.add_argument("corpus", type=Path, help="Path to curriculum.json")
    p_interactive.add_argument(
        "--content-root",
        type=Path,
        help="Directory lesson files are relative to (defaults to the corpus file's directory)",
    )
    return parser


def load_documents(engine: SearchEngine, content_root: Path) -> int:
    """Push every readable lesson body into the index.

    Lessons that fail to load are logged and skipped; their entries stay
    searchable by title.

    Returns:
        Number of entries enriched.
    """
    enriched = 0
    for entry in engine.index:
        path = content_root / entry.locator
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not load lesson %s from %s: %s", entry.document_key, path, exc)
            continue
        if engine.enrich_locator(entry.locator, raw):
            enriched += 1
    logger.info("Indexed %d of %d lesson bodies", enriched, len(engine.index))
    return enriched


def format_result(position: int, result: ResultView, *, scores: bool = False) -> str:
    line = (
        f"{position:>2}. {result.highlighted_chapter} "
        f"| {result.highlighted_subject} · Part {result.part_number}: {result.highlighted_subtitle}"
    )
    if scores:
        line += f" (score={result.score})"
    if result.excerpt:
        line += f"\n      {result.excerpt}"
    return line


def render_effects(effects: Iterable[Effect], out: TextIO, *, min_query_length: int) -> None:
    for effect in effects:
        if isinstance(effect, RenderResults):
            for position, result in enumerate(effect.items, start=1):
                out.write(format_result(position, result) + "\n")
        elif isinstance(effect, ShowHint):
            out.write(HINT_TEXT.format(n=min_query_length) + "\n")
        elif isinstance(effect, ShowEmpty):
            out.write(EMPTY_TEXT + "\n")
        elif isinstance(effect, FocusChanged):
            out.write(f"> focus: {effect.index + 1 if effect.index >= 0 else 'none'}\n")
        elif isinstance(effect, Selected):
            out.write(f"> open lesson {effect.document_key}\n")
        elif isinstance(effect, Opened):
            out.write("> search opened\n")
        elif isinstance(effect, Closed):
            out.write("> search closed\n")


def run_interactive(engine: SearchEngine, lines: Iterable[str], out: TextIO) -> list[str]:
    """Feed stdin-style command lines through the engine.

    ``/down``, ``/up``, ``/enter``, ``/open`` and ``/close`` map to navigation
    events, ``/quit`` stops, anything else replaces the query text.

    Returns:
        String forms of the document keys selected during the session.
    """
    selections: list[str] = []
    render_effects(engine.open(), out, min_query_length=engine.settings.min_query_length)
    for raw_line in lines:
        line = raw_line.rstrip("\n")
        command = line.strip()
        if command == "/quit":
            break
        event = COMMANDS[command]() if command in COMMANDS else QueryChanged(text=line)
        effects = engine.dispatch(event)
        selections.extend(str(effect.document_key) for effect in effects if isinstance(effect, Selected))
        render_effects(effects, out, min_query_length=engine.settings.min_query_length)
    return selections


def _print_query(engine: SearchEngine, text: str, *, as_json: bool, scores: bool) -> None:
    results = engine.search(text)
    if as_json:
        for result in results:
            sys.stdout.write(orjson.dumps(result.model_dump(mode="json")).decode("utf-8") + "\n")
        return

    if not results:
        min_length = engine.settings.min_query_length
        sys.stdout.write((HINT_TEXT.format(n=min_length) if len(text.strip()) < min_length else EMPTY_TEXT) + "\n")
        return
    for position, result in enumerate(results, start=1):
        sys.stdout.write(format_result(position, result, scores=scores) + "\n")


def _write_metrics(path: Path) -> int:
    try:
        path.write_bytes(get_metrics())
    except OSError as exc:
        logger.error("Could not write metrics to %s: %s", path, exc)
        return 1
    logger.debug("Wrote metrics to %s", path)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings()
    except ValueError as exc:
        sys.stderr.write(f"Invalid configuration: {exc}\n")
        return 1

    configure_logging(level=args.log_level or settings.log_level, json_output=args.log_json or settings.log_json)

    try:
        corpus = Corpus.from_json_file(args.corpus)
    except OSError as exc:
        logger.error("Could not read corpus: %s", exc)
        return 1
    except CorpusStructureError as exc:
        logger.error("Invalid corpus: %s", exc)
        return 1

    engine = SearchEngine(settings)
    try:
        engine.init(corpus)
    except CorpusStructureError as exc:
        logger.error("Invalid corpus: %s", exc)
        return 1

    content_root = args.content_root or args.corpus.parent
    load_documents(engine, content_root)

    if args.command == "query":
        _print_query(engine, args.text, as_json=args.json, scores=args.scores)
    else:
        run_interactive(engine, sys.stdin, sys.stdout)

    if args.metrics_file is not None:
        return _write_metrics(args.metrics_file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
