"""
Parallel fan-out of per-document search units.

Each discovered document becomes one independent unit of work executed on
a thread pool. Units may finish in any order; progress is published when
a unit starts and outcomes are yielded as units complete. A unit that
raises is turned into a SKIPPED outcome so one bad document never stops
the run. Setting the cancel event makes units that have not started yet
return without doing any work.
"""

import os
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional

from ..core import get_config, get_logger
from ..utils import get_file_size
from .aggregator import ResultAggregator
from .models import FileOutcome
from .progress import ProgressChannel

logger = get_logger(__name__)


SearchUnit = Callable[[Path], FileOutcome]


class SearchScheduler:
    """
    Runs search units across a worker pool.

    Files are dispatched in ascending size order by default so cheap
    documents report progress first; this changes only the order of
    work, never the results.
    """

    def __init__(self, max_workers: int = None, order_by_size: bool = None):
        """
        Initialize the scheduler.

        Args:
            max_workers: Pool size. 0 or None uses the config value,
                         where 0 means one worker per CPU.
            order_by_size: Dispatch small files first. Defaults to config value.
        """
        if not max_workers or order_by_size is None:
            config = get_config()
            max_workers = max_workers or config.search.max_workers
            if order_by_size is None:
                order_by_size = config.search.order_by_size

        self.max_workers = max_workers or os.cpu_count() or 1
        self.order_by_size = order_by_size

    def order_files(self, files: Iterable[Path]) -> List[Path]:
        """
        Order files for dispatch.

        Args:
            files: Discovered document paths.

        Returns:
            Paths sorted by (size, path) when ordering by size, else by path.
        """
        files = [Path(f) for f in files]

        if not self.order_by_size:
            return sorted(files)

        def size_key(path: Path):
            try:
                return (get_file_size(path), str(path))
            except OSError:
                return (0, str(path))

        return sorted(files, key=size_key)

    def run(
        self,
        files: Iterable[Path],
        unit: SearchUnit,
        progress: ProgressChannel = None,
        aggregator: ResultAggregator = None,
        cancel_event: Optional[threading.Event] = None
    ) -> Iterator[FileOutcome]:
        """
        Execute one unit per file and yield outcomes as they complete.

        Returns only after every dispatched unit has finished (or, when the
        consumer stops iterating, after running units have finished and
        pending ones were cancelled).

        Args:
            files: Documents to search.
            unit: Callable searching one document.
            progress: Channel receiving one event per started unit.
            aggregator: Shared collection each outcome is added to.
            cancel_event: When set, units not yet started are dropped.

        Yields:
            FileOutcome per unit that ran, in completion order.
        """
        ordered = self.order_files(files)
        progress = progress or ProgressChannel()
        progress.reset(len(ordered))

        if not ordered:
            return

        def work(path: Path) -> Optional[FileOutcome]:
            if cancel_event is not None and cancel_event.is_set():
                return None

            progress.publish(str(path))

            try:
                outcome = unit(path)
            except Exception as e:
                logger.error(f"Unexpected error searching {path}: {e}")
                outcome = FileOutcome.skipped(str(path), f"unexpected error: {e}")

            if aggregator is not None:
                aggregator.add(outcome)

            return outcome

        workers = min(self.max_workers, len(ordered))
        logger.debug(f"Dispatching {len(ordered)} files to {workers} workers")

        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pdfsearch")
        try:
            futures = [executor.submit(work, path) for path in ordered]

            for future in as_completed(futures):
                outcome = future.result()
                if outcome is not None:
                    yield outcome
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
