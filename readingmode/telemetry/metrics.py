"""Prometheus metrics for extraction and thumbnail selection."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from prometheus_client import Counter, Histogram, start_http_server

logger = logging.getLogger(__name__)

METRICS_PORT_ENV = "READINGMODE_METRICS_PORT"


@dataclass
class ExtractionEvent:
    outcome: str
    block_count: int
    duration_seconds: float


@dataclass
class ThumbnailEvent:
    source: str
    found: bool


@dataclass
class FeedCleaningEvent:
    strategy: str
    success: bool


class MetricsCollector:
    """Centralised metrics registry for the extraction engine."""

    def __init__(self) -> None:
        self._exporter_started = False

        self._extractions = Counter(
            "readingmode_extractions_total",
            "Article extractions by outcome",
            labelnames=("outcome",),
        )
        self._extraction_duration = Histogram(
            "readingmode_extraction_duration_seconds",
            "Duration of a single article extraction in seconds",
            labelnames=("outcome",),
            buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5),
        )
        self._extraction_blocks = Histogram(
            "readingmode_extraction_blocks",
            "Structured content blocks emitted per extraction",
            buckets=(0, 1, 5, 10, 25, 50, 100, 250),
        )
        self._thumbnails = Counter(
            "readingmode_thumbnail_selections_total",
            "Thumbnail selections by the stage that produced them",
            labelnames=("source",),
        )
        self._feed_cleanings = Counter(
            "readingmode_feed_cleanings_total",
            "Feed item cleanings by strategy and result",
            labelnames=("strategy", "result"),
        )

        self.last_extraction: Optional[ExtractionEvent] = None
        self.last_thumbnail: Optional[ThumbnailEvent] = None
        self.last_feed_cleaning: Optional[FeedCleaningEvent] = None

    def enable_exporter(self, port: int) -> bool:
        """Start the Prometheus HTTP exporter once."""

        if self._exporter_started:
            return True
        start_http_server(port)
        self._exporter_started = True
        logger.info("Prometheus metrics exporter started", extra={"event": "metrics.started", "port": port})
        return True

    def record_extraction(self, *, outcome: str, block_count: int, duration_seconds: float) -> None:
        self.last_extraction = ExtractionEvent(outcome, block_count, duration_seconds)
        self._extractions.labels(outcome=outcome).inc()
        self._extraction_duration.labels(outcome=outcome).observe(duration_seconds)
        if outcome != "parse_error":
            self._extraction_blocks.observe(block_count)

    def record_thumbnail(self, source: Optional[str]) -> None:
        label = source or "none"
        self.last_thumbnail = ThumbnailEvent(label, source is not None)
        self._thumbnails.labels(source=label).inc()

    def record_feed_cleaning(self, *, strategy: str, success: bool) -> None:
        self.last_feed_cleaning = FeedCleaningEvent(strategy, success)
        self._feed_cleanings.labels(strategy=strategy, result="success" if success else "failure").inc()

    def reset(self) -> None:
        """Reset cached inspection state (primarily for tests)."""

        self.last_extraction = None
        self.last_thumbnail = None
        self.last_feed_cleaning = None


metrics = MetricsCollector()


def configure_metrics_from_env() -> None:
    """Start metrics exporter when ``READINGMODE_METRICS_PORT`` is defined."""

    port_value = os.getenv(METRICS_PORT_ENV)
    if not port_value:
        return
    try:
        port = int(port_value)
    except ValueError:
        logger.warning(
            "Invalid %s value; expected integer",
            METRICS_PORT_ENV,
            extra={"event": "metrics.invalid_port", "value": port_value},
        )
        return
    metrics.enable_exporter(port)


__all__ = ["configure_metrics_from_env", "metrics", "MetricsCollector"]
