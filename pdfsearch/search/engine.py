"""
Keyword search engine over a folder of PDF documents.

Discovers documents, fans the per-document search out over the scheduler,
and returns sorted results. Each unit of work looks up the text cache,
extracts on a miss, matches keywords and, in whole-text mode, resolves
the page of the match. Per-document failures become SKIPPED outcomes;
only query errors reach the caller.
"""

import threading
import time
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

from ..core import get_config, get_logger, ExtractionError, QueryError
from ..extraction import FileScanner, PDFExtractor
from ..utils import get_file_size
from .aggregator import ResultAggregator, page_sort_key
from .matcher import KeywordMatcher
from .models import (
    FileOutcome,
    MatchMode,
    PageMatch,
    ProgressEvent,
    SearchQuery,
    SearchReport,
    SearchResult
)
from .page_locator import ExactPageLocator, HeuristicPageLocator, PageLocatorChain
from .progress import ProgressChannel
from .query_parser import QueryParser
from .scheduler import SearchScheduler
from .text_cache import TextCache

logger = get_logger(__name__)


class SearchEngine:
    """
    Parallel multi-keyword search over PDF folders.

    The engine owns its text cache, so repeated searches through the same
    engine reuse extracted text. Collaborators can be injected for testing.
    """

    def __init__(
        self,
        extractor=None,
        cache: TextCache = None,
        matcher: KeywordMatcher = None,
        scheduler: SearchScheduler = None,
        parser: QueryParser = None,
        match_mode: Union[MatchMode, str] = None,
        exact_page_resolution: bool = None,
        lines_per_page: int = None,
        extensions: List[str] = None,
        max_file_size_mb: float = None
    ):
        """
        Initialize the search engine.

        Args:
            extractor: Text extractor (extract_pages, page_count,
                       page_text). Defaults to PDFExtractor.
            cache: Text cache. Defaults to a TextCache sized from config.
            matcher: Keyword matcher. Defaults to config-sized matcher.
            scheduler: Worker pool scheduler.
            parser: Query parser for raw keyword input.
            match_mode: MatchMode.PAGES or MatchMode.TEXT (or their values).
            exact_page_resolution: Try page-by-page resolution before the
                                   line-density estimate in TEXT mode.
            lines_per_page: Assumed density for the page estimate.
            extensions: Document extensions to discover.
            max_file_size_mb: Larger documents are reported as skipped.
                              0 disables the limit. Defaults to config value.
        """
        self.config = get_config()

        self.extractor = extractor or PDFExtractor()
        self.cache = cache if cache is not None else TextCache()
        self.matcher = matcher or KeywordMatcher()
        self.scheduler = scheduler or SearchScheduler()
        self.parser = parser or QueryParser()

        self.match_mode = MatchMode(match_mode or self.config.search.match_mode)
        self.extensions = extensions or self.config.extraction.supported_extensions
        if max_file_size_mb is None:
            max_file_size_mb = self.config.extraction.max_file_size_mb
        self.max_file_size_mb = max_file_size_mb

        if exact_page_resolution is None:
            exact_page_resolution = self.config.search.exact_page_resolution

        locators = []
        if exact_page_resolution:
            locators.append(ExactPageLocator(self.extractor))
        locators.append(HeuristicPageLocator(lines_per_page or self.config.search.lines_per_page))
        self.page_locator = PageLocatorChain(locators)

    def build_query(self, query: Union[SearchQuery, str], root: Union[str, Path] = None) -> SearchQuery:
        """
        Turn raw input into a validated SearchQuery.

        Raises:
            QueryError: If no usable keyword remains.
        """
        if isinstance(query, SearchQuery):
            return query

        if root is None or not str(root).strip():
            raise QueryError("A folder to search is required", query=query)

        return self.parser.parse(root, query)

    def discover(self, root: Union[str, Path]) -> List[Path]:
        """
        List candidate documents below root; empty when root is unreadable.

        Every file with a matching extension is listed. Oversized documents
        are reported as skipped by search_document instead.
        """
        return FileScanner(root, extensions=self.extensions, max_file_size_mb=0).list_all()

    def run(
        self,
        query: Union[SearchQuery, str],
        root: Union[str, Path] = None,
        progress_callback: Callable[[ProgressEvent], None] = None,
        cancel_event: Optional[threading.Event] = None,
        progress: ProgressChannel = None
    ) -> SearchReport:
        """
        Run a complete search and report per-file outcomes.

        Args:
            query: SearchQuery, or raw keyword text together with root.
            root: Folder to search when query is raw text.
            progress_callback: Called with each ProgressEvent.
            cancel_event: When set, documents not yet started are skipped.
            progress: Channel to publish on, e.g. one with queue subscribers.

        Returns:
            SearchReport with sorted results and outcome counts.

        Raises:
            QueryError: Before any file I/O when the query has no keyword.
        """
        search_query = self.build_query(query, root)
        start_time = time.perf_counter()

        files = self.discover(search_query.root)
        logger.info(
            f"Searching {len(files)} documents in {search_query.root} "
            f"for {search_query.keywords} ({self.match_mode.value} mode)"
        )

        channel = progress or ProgressChannel()
        if progress_callback is not None:
            channel.subscribe(progress_callback)

        aggregator = ResultAggregator()

        try:
            for _ in self.scheduler.run(
                files,
                lambda path: self.search_document(path, search_query.keywords),
                progress=channel,
                aggregator=aggregator,
                cancel_event=cancel_event
            ):
                pass
        finally:
            # A caller-owned channel outlives the run
            if progress_callback is not None:
                channel.unsubscribe(progress_callback)

        skipped = aggregator.skipped
        report = SearchReport(
            query=search_query.text or " ".join(search_query.keywords),
            results=aggregator.results(),
            files_total=len(files),
            files_matched=aggregator.matched_count,
            files_without_match=aggregator.without_match_count,
            files_skipped=len(skipped),
            skipped=skipped
        )
        report.cancelled = (
            cancel_event is not None and cancel_event.is_set()
            and report.files_processed < report.files_total
        )
        report.execution_time_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            f"Search complete: {report.files_matched} matched, "
            f"{report.files_without_match} without match, {report.files_skipped} skipped "
            f"of {report.files_total} in {report.execution_time_ms:.0f}ms"
            + (" (cancelled)" if report.cancelled else "")
        )

        return report

    def search(
        self,
        query: Union[SearchQuery, str],
        root: Union[str, Path] = None,
        progress_callback: Callable[[ProgressEvent], None] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> List[SearchResult]:
        """
        Search a folder and return sorted results.

        See run() for arguments.
        """
        return self.run(query, root, progress_callback, cancel_event).results

    def iter_search(
        self,
        query: Union[SearchQuery, str],
        root: Union[str, Path] = None,
        progress_callback: Callable[[ProgressEvent], None] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> Iterator[SearchResult]:
        """
        Yield results as documents finish, in completion order.

        Stopping iteration early cancels documents that have not started.
        """
        search_query = self.build_query(query, root)
        files = self.discover(search_query.root)

        channel = ProgressChannel()
        if progress_callback is not None:
            channel.subscribe(progress_callback)

        for outcome in self.scheduler.run(
            files,
            lambda path: self.search_document(path, search_query.keywords),
            progress=channel,
            cancel_event=cancel_event
        ):
            if outcome.result is not None:
                outcome.result.page_info.sort(key=page_sort_key)
                yield outcome.result

    def search_document(self, filepath: Union[str, Path], keywords: Sequence[str]) -> FileOutcome:
        """
        Search one document; the scheduler's unit of work.

        Args:
            filepath: Document path.
            keywords: Query keywords in query order.

        Returns:
            MATCHED, NO_MATCH or SKIPPED outcome.
        """
        filepath = Path(filepath)

        try:
            file_size = get_file_size(filepath)
        except OSError as e:
            logger.warning(f"Skipping unreadable file {filepath}: {e}")
            return FileOutcome.skipped(str(filepath), f"cannot read file: {e}")

        if self.max_file_size_mb and file_size > self.max_file_size_mb * 1024 * 1024:
            size_mb = round(file_size / (1024 * 1024), 2)
            logger.warning(f"Skipping large file ({size_mb}MB): {filepath.name}")
            return FileOutcome.skipped(
                str(filepath), f"file too large: {size_mb}MB exceeds {self.max_file_size_mb}MB"
            )

        try:
            if self.match_mode is MatchMode.PAGES:
                result = self._search_pages(filepath, keywords, file_size)
            else:
                result = self._search_text(filepath, keywords, file_size)
        except ExtractionError as e:
            logger.warning(f"Skipping {filepath.name}: {e.message}")
            return FileOutcome.skipped(str(filepath), e.message)

        if result is None:
            return FileOutcome.no_match(str(filepath))

        return FileOutcome.matched(result)

    def _search_pages(self, filepath: Path, keywords: Sequence[str], file_size: int) -> Optional[SearchResult]:
        pages = self._load_pages(filepath)

        # First keyword (in query order) that matches decides the result
        for keyword in keywords:
            contexts = self.matcher.match_pages(pages, keyword)
            if contexts:
                return SearchResult(
                    file_path=str(filepath),
                    file_size=file_size,
                    page_info=[PageMatch(ctx.page_number, ctx.text) for ctx in contexts],
                    keywords=[keyword]
                )

        return None

    def _search_text(self, filepath: Path, keywords: Sequence[str], file_size: int) -> Optional[SearchResult]:
        text, page_count = self._load_text(filepath)

        if len(keywords) > 1:
            context = self.matcher.match_text_multi(text, keywords)
        else:
            context = self.matcher.match_text(text, keywords[0])

        if context is None:
            return None

        page_number = self.page_locator.locate(filepath, context.anchor, text, page_count)

        return SearchResult(
            file_path=str(filepath),
            file_size=file_size,
            page_info=[PageMatch(page_number, context.text)],
            keywords=context.keywords
        )

    def _load_pages(self, filepath: Path) -> List[str]:
        cached = self.cache.get(filepath)
        if isinstance(cached, list):
            return cached

        pages = self.extractor.extract_pages(filepath)
        self.cache.put(filepath, pages)
        return pages

    def _load_text(self, filepath: Path) -> Tuple[str, Optional[int]]:
        """Whole-document text and its page count (None when unknown)."""
        cached = self.cache.get(filepath)
        if isinstance(cached, str):
            return cached, None

        # Pages are kept so the page estimate can be bounded by the document length
        pages = cached if isinstance(cached, list) else self._load_pages(filepath)
        return "\n".join(pages), len(pages)

    def locate_page(self, filepath: Union[str, Path], search_text: str) -> Optional[int]:
        """
        Resolve the page of a text in one document.

        Exact page-by-page lookup is tried first; if it is disabled, fails,
        or finds nothing, the line-density estimate is used.

        Args:
            filepath: Document path.
            search_text: Text to locate.

        Returns:
            1-indexed page number, or None if neither strategy succeeds.
        """
        filepath = Path(filepath)

        try:
            text, page_count = self._load_text(filepath)
        except ExtractionError as e:
            logger.debug(f"No text for page estimate of {filepath.name}: {e.message}")
            text, page_count = None, None

        return self.page_locator.locate(filepath, search_text, text, page_count)


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 3:
        print("Usage: python -m pdfsearch.search.engine <folder> <keywords>")
        sys.exit(1)

    engine = SearchEngine()
    results = engine.search(sys.argv[2], root=sys.argv[1])

    for result in results:
        print(f"{result.file_path} ({result.file_size} bytes)")
        for info in result.page_info:
            print(f"  p.{info.page_number}: {info.matched_text!r}")
