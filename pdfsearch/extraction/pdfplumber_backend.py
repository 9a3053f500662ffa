"""
pdfplumber-based text extraction backend.

Better handling of complex layouts, tables, and multi-column documents.
Slower than pypdf but more accurate for difficult PDFs.
"""

from pathlib import Path
from typing import List, Union

import pdfplumber

from ..core import get_logger, ExtractionError

logger = get_logger(__name__)


class PDFPlumberBackend:
    """
    PDF text extraction using pdfplumber library.

    Provides more accurate extraction for complex layouts
    at the cost of slower processing.
    """

    name = "pdfplumber"

    def extract(self, filepath: Union[str, Path]) -> List[str]:
        """
        Extract text from all pages of a PDF.

        Args:
            filepath: Path to the PDF file.

        Returns:
            One string per page, in page order; empty pages are kept
            as empty strings.

        Raises:
            ExtractionError: If the document cannot be opened.
        """
        filepath = Path(filepath)
        results = []

        try:
            with pdfplumber.open(filepath) as pdf:
                total_pages = len(pdf.pages)
                logger.debug(f"Processing {total_pages} pages: {filepath.name}")

                for page_num, page in enumerate(pdf.pages, start=1):
                    try:
                        text = page.extract_text() or ""
                    except Exception as e:
                        logger.warning(
                            f"Failed to extract page {page_num} from {filepath.name}: {e}"
                        )
                        text = ""

                    results.append(text)

        except Exception as e:
            raise ExtractionError(
                f"pdfplumber extraction failed: {e}",
                filepath=str(filepath)
            )

        return results

    def extract_page(self, filepath: Union[str, Path], page_num: int) -> str:
        """
        Extract text from a specific page.

        Args:
            filepath: Path to the PDF file.
            page_num: Page number (1-indexed).

        Returns:
            Extracted text from the page.
        """
        filepath = Path(filepath)

        if page_num < 1:
            raise ExtractionError(
                f"Invalid page number: {page_num}",
                filepath=str(filepath)
            )

        try:
            with pdfplumber.open(filepath) as pdf:
                # Convert 1-indexed to 0-indexed
                page = pdf.pages[page_num - 1]
                return page.extract_text() or ""

        except Exception as e:
            raise ExtractionError(
                f"Failed to extract page {page_num}: {e}",
                filepath=str(filepath)
            )

    def page_count(self, filepath: Union[str, Path]) -> int:
        """Count the pages of a PDF."""
        filepath = Path(filepath)

        try:
            with pdfplumber.open(filepath) as pdf:
                return len(pdf.pages)

        except Exception as e:
            raise ExtractionError(
                f"Failed to count pages: {e}",
                filepath=str(filepath)
            )


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python pdfplumber_backend.py <pdf_file>")
        sys.exit(1)

    pdf_path = Path(sys.argv[1])
    if not pdf_path.exists():
        print(f"File not found: {pdf_path}")
        sys.exit(1)

    backend = PDFPlumberBackend()

    try:
        pages = backend.extract(pdf_path)
        print(f"Extracted {len(pages)} pages from {pdf_path.name}")
        print(f"Page count: {backend.page_count(pdf_path)}")
    except ExtractionError as e:
        print(f"Extraction error: {e.message}")
