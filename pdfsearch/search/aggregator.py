"""
Result aggregation for search runs.

Collects per-file outcomes from worker threads and produces the final,
deterministically ordered result list: documents by path ascending, and
within a document pages ascending with unresolved pages (None) last.
A document path appears at most once.
"""

import threading
from typing import Dict, List, Optional, Tuple

from .models import FileOutcome, OutcomeStatus, PageMatch, SearchResult


def page_sort_key(info: PageMatch) -> Tuple[int, int]:
    """Sort key placing resolved pages in order and unresolved ones last."""
    if info.page_number is None:
        return (1, 0)
    return (0, info.page_number)


class ResultAggregator:
    """
    Append-only, thread-safe collection of outcomes.

    The lock only guards list/dict updates; no I/O happens while it is held.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._results: Dict[str, SearchResult] = {}
        self._without_match = 0
        self._skipped: List[Tuple[str, str]] = []

    def add(self, outcome: FileOutcome) -> None:
        """Record the outcome of one unit of work."""
        with self._lock:
            if outcome.status is OutcomeStatus.MATCHED:
                self._merge(outcome.result)
            elif outcome.status is OutcomeStatus.SKIPPED:
                self._skipped.append((outcome.file_path, outcome.reason or ""))
            else:
                self._without_match += 1

    def _merge(self, result: Optional[SearchResult]) -> None:
        if result is None:
            return

        existing = self._results.get(result.file_path)
        if existing is None:
            self._results[result.file_path] = result
            return

        for keyword in result.keywords:
            if keyword not in existing.keywords:
                existing.keywords.append(keyword)
        existing.page_info.extend(result.page_info)

    @property
    def matched_count(self) -> int:
        with self._lock:
            return len(self._results)

    @property
    def without_match_count(self) -> int:
        with self._lock:
            return self._without_match

    @property
    def skipped(self) -> List[Tuple[str, str]]:
        with self._lock:
            return sorted(self._skipped)

    def results(self) -> List[SearchResult]:
        """
        Return the sorted result list.

        Returns:
            Results ordered by file path, each with pages ascending and
            unresolved pages last.
        """
        with self._lock:
            results = list(self._results.values())

        for result in results:
            result.page_info.sort(key=page_sort_key)

        return sorted(results, key=lambda result: result.file_path)
