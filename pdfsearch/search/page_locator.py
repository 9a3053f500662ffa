"""
Page number resolution for whole-text matches.

Two strategies share the PageLocator interface:
  - ExactPageLocator re-reads the document page by page and returns the
    first page whose text contains the search text. It costs one page
    extraction per page tried.
  - HeuristicPageLocator estimates the page from the line position of
    the match in already extracted text, assuming a fixed number of
    lines per page. The estimate is approximate: documents whose layout
    differs from the assumed density get a wrong (but in-range) page.
PageLocatorChain tries strategies in order; the first answer wins.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from ..core import get_config, get_logger, ExtractionError
from ..utils import contains_ignore_case

logger = get_logger(__name__)


class PageLocator(ABC):
    """Strategy interface for resolving the page of a match."""

    name = "base"

    @abstractmethod
    def locate(
        self,
        filepath: Union[str, Path],
        search_text: str,
        text: Optional[str] = None,
        page_count: Optional[int] = None
    ) -> Optional[int]:
        """
        Resolve the page containing search_text.

        Args:
            filepath: Document path.
            search_text: Text to locate (a keyword or a matched line).
            text: Whole-document text when already extracted.
            page_count: Number of pages of the document when known.

        Returns:
            1-indexed page number, or None if this strategy has no answer.

        Raises:
            ExtractionError: If the document cannot be read.
        """


class ExactPageLocator(PageLocator):
    """Scans pages in ascending order through the extractor."""

    name = "exact"

    def __init__(self, extractor):
        """
        Args:
            extractor: Object providing page_count(path) and page_text(path, n).
        """
        self.extractor = extractor

    def locate(
        self,
        filepath: Union[str, Path],
        search_text: str,
        text: Optional[str] = None,
        page_count: Optional[int] = None
    ) -> Optional[int]:
        needle = search_text.strip()
        if not needle:
            return None

        total_pages = self.extractor.page_count(filepath)

        for page_num in range(1, total_pages + 1):
            if contains_ignore_case(self.extractor.page_text(filepath, page_num), needle):
                return page_num

        return None


class HeuristicPageLocator(PageLocator):
    """Estimates the page from a line index and an assumed page density."""

    name = "heuristic"

    def __init__(self, lines_per_page: int = None, page_count: int = None):
        """
        Args:
            lines_per_page: Assumed lines per page. Defaults to config value.
            page_count: Upper bound applied to the estimate when known.
        """
        if lines_per_page is None:
            lines_per_page = get_config().search.lines_per_page

        if lines_per_page <= 0:
            raise ValueError("lines_per_page must be positive")

        self.lines_per_page = lines_per_page
        self.page_count = page_count

    def estimate(self, line_index: int, page_count: Optional[int] = None) -> int:
        """
        Map a zero-based line index to a 1-indexed page estimate.

        The estimate is clamped to page_count, or to the count given at
        construction when none is passed.
        """
        page = line_index // self.lines_per_page + 1

        limit = page_count or self.page_count
        if limit:
            page = min(page, limit)

        return page

    def locate(
        self,
        filepath: Union[str, Path],
        search_text: str,
        text: Optional[str] = None,
        page_count: Optional[int] = None
    ) -> Optional[int]:
        needle = search_text.strip().lower()
        if not needle or not text:
            return None

        for line_index, line in enumerate(text.splitlines()):
            if needle in line.lower():
                return self.estimate(line_index, page_count)

        return None


class PageLocatorChain(PageLocator):
    """
    Tries locators in order and returns the first page found.

    An ExtractionError from one strategy is logged and the next
    strategy is tried.
    """

    name = "chain"

    def __init__(self, locators: List[PageLocator]):
        self.locators = list(locators)

    def locate(
        self,
        filepath: Union[str, Path],
        search_text: str,
        text: Optional[str] = None,
        page_count: Optional[int] = None
    ) -> Optional[int]:
        for locator in self.locators:
            try:
                page = locator.locate(filepath, search_text, text, page_count)
            except ExtractionError as e:
                logger.debug(f"{locator.name} page lookup failed for {Path(filepath).name}: {e.message}")
                continue

            if page is not None:
                logger.debug(f"{locator.name} page lookup: {Path(filepath).name} -> page {page}")
                return page

        return None
