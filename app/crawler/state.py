"""
Process-wide crawl state with a single-flight guard.
"""

from __future__ import annotations

import threading

from app.domain.dealer_inventory import CrawlStatus, CrawlSummary, DealerOutcome


class CrawlState:
    """
    Tracks whether a crawl is running plus the results of the latest run.

    All access goes through one lock; `try_begin` is the compare-and-set that
    admits at most one crawl at a time.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._in_progress = False
        self._outcomes: list[DealerOutcome] = []
        self._last_summary: CrawlSummary | None = None
        self._last_error: str | None = None

    def try_begin(self) -> bool:
        with self._lock:
            if self._in_progress:
                return False
            self._in_progress = True
            self._outcomes = []
            self._last_error = None
            return True

    def finish(self) -> None:
        with self._lock:
            self._in_progress = False

    def record_outcome(self, outcome: DealerOutcome) -> None:
        with self._lock:
            self._outcomes.append(outcome)

    def record_summary(self, summary: CrawlSummary) -> None:
        with self._lock:
            self._last_summary = summary

    def record_failure(self, message: str) -> None:
        with self._lock:
            self._last_error = message

    @property
    def in_progress(self) -> bool:
        with self._lock:
            return self._in_progress

    @property
    def last_summary(self) -> CrawlSummary | None:
        with self._lock:
            return self._last_summary

    @property
    def last_error(self) -> str | None:
        with self._lock:
            return self._last_error

    def outcomes(self) -> tuple[DealerOutcome, ...]:
        with self._lock:
            return tuple(self._outcomes)

    def snapshot(self) -> CrawlStatus:
        with self._lock:
            return CrawlStatus(
                in_progress=self._in_progress,
                last_summary=self._last_summary,
                outcomes=tuple(self._outcomes),
                last_error=self._last_error,
            )
