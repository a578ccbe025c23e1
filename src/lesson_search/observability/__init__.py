"""Observability module for structured logging and Prometheus metrics."""

from lesson_search.observability.logging import JsonFormatter, configure_logging
from lesson_search.observability.metrics import (
    ENRICH_REQUESTS,
    INDEX_ENRICHED_COUNT,
    INDEX_ENTRY_COUNT,
    SEARCH_LATENCY,
    SEARCH_QUERIES,
    get_metrics,
    track_latency,
)


__all__ = [
    "ENRICH_REQUESTS",
    "INDEX_ENRICHED_COUNT",
    "INDEX_ENTRY_COUNT",
    "SEARCH_LATENCY",
    "SEARCH_QUERIES",
    "JsonFormatter",
    "configure_logging",
    "get_metrics",
    "track_latency",
]
