"""
Single-document page access for viewers.

Serves the text of one page (clamped to the document's page range),
lists every page containing a text with a short preview, and reads a
whole document under a hard size cap. Errors propagate to the caller.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from ..core import get_config, get_logger, DocumentNotFoundError, ExtractionError
from ..extraction import PDFExtractor
from ..utils import contains_ignore_case, read_document_bytes

logger = get_logger(__name__)


@dataclass
class PageViewerData:
    """Text of one page plus navigation info."""
    file_path: str
    total_pages: int
    current_page: int
    page_content: str


@dataclass
class PageInfo:
    """A page containing the searched text and its first lines."""
    page_number: int
    content: str


class PageViewer:
    """
    Page-level access to a single document.

    Uses the same extractor interface as the search engine.
    """

    def __init__(
        self,
        extractor=None,
        preview_lines: int = None,
        max_document_size_mb: float = None
    ):
        """
        Initialize the viewer.

        Args:
            extractor: Text extractor providing page_count and page_text.
            preview_lines: Lines kept per page in find_pages().
            max_document_size_mb: Cap applied by read_bytes().
        """
        config = get_config()

        self.extractor = extractor or PDFExtractor()
        self.preview_lines = preview_lines or config.viewer.preview_lines
        self.max_document_size_mb = max_document_size_mb or config.viewer.max_document_size_mb

    def _check_exists(self, filepath: Path) -> None:
        if not filepath.is_file():
            raise DocumentNotFoundError(f"Document not found: {filepath}", filepath=str(filepath))

    def get_viewer_data(self, filepath: Union[str, Path], page_number: int = None) -> PageViewerData:
        """
        Get the text of one page.

        Args:
            filepath: Document path.
            page_number: Requested page; clamped to [1, total_pages], default 1.

        Returns:
            PageViewerData for the served page.

        Raises:
            DocumentNotFoundError: If the file does not exist.
            ExtractionError: If the document cannot be read or has no pages.
        """
        filepath = Path(filepath)
        self._check_exists(filepath)

        total_pages = self.extractor.page_count(filepath)
        if total_pages < 1:
            raise ExtractionError("Document has no pages", filepath=str(filepath))

        current_page = min(max(page_number or 1, 1), total_pages)

        return PageViewerData(
            file_path=str(filepath),
            total_pages=total_pages,
            current_page=current_page,
            page_content=self.extractor.page_text(filepath, current_page)
        )

    def find_pages(self, filepath: Union[str, Path], search_text: str) -> List[PageInfo]:
        """
        List every page containing a text, ignoring case.

        Pages whose extraction fails are skipped.

        Args:
            filepath: Document path.
            search_text: Text to look for.

        Returns:
            PageInfo per matching page in ascending order, with the first
            preview_lines lines of the page as content.
        """
        filepath = Path(filepath)
        self._check_exists(filepath)

        if not search_text or not search_text.strip():
            return []

        total_pages = self.extractor.page_count(filepath)
        matching_pages = []

        for page_num in range(1, total_pages + 1):
            try:
                content = self.extractor.page_text(filepath, page_num)
            except ExtractionError as e:
                logger.debug(f"Skipping page {page_num} of {filepath.name}: {e.message}")
                continue

            if contains_ignore_case(content, search_text):
                preview = "\n".join(content.splitlines()[:self.preview_lines])
                matching_pages.append(PageInfo(page_number=page_num, content=preview))

        return matching_pages

    def read_bytes(self, filepath: Union[str, Path]) -> bytes:
        """
        Read the whole document, refusing files above the size cap.

        Raises:
            DocumentNotFoundError: If the file does not exist.
            SizeExceededError: If the file exceeds max_document_size_mb.
        """
        max_size_bytes = int(self.max_document_size_mb * 1024 * 1024)
        return read_document_bytes(filepath, max_size_bytes)
