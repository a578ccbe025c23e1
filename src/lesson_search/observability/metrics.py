"""Prometheus metrics for the search engine.

Instruments live in the process-wide default registry. The index gauges
describe whichever index was built or enriched most recently, so with several
SearchEngine instances in one process they reflect the last one touched; the
counters and the latency histogram aggregate across all of them.
"""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import Counter, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


SEARCH_LATENCY = Histogram(
    "lesson_search_query_latency_seconds",
    "Search query latency",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1),
)

SEARCH_QUERIES = Counter(
    "lesson_search_queries_total",
    "Total search queries by outcome",
    ["outcome"],
)

INDEX_ENTRY_COUNT = Gauge(
    "lesson_search_index_entries",
    "Entries in the corpus index",
)

INDEX_ENRICHED_COUNT = Gauge(
    "lesson_search_index_enriched_entries",
    "Entries whose lesson body has been indexed",
)

ENRICH_REQUESTS = Counter(
    "lesson_search_enrich_requests_total",
    "Document text pushes by outcome",
    ["outcome"],
)


@contextmanager
def track_latency(histogram: Histogram) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Prometheus text exposition of the default registry."""
    return generate_latest()

