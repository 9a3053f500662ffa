"""
Tests for the pypdf-based extraction backend.

Tests text extraction, page-level extraction, encryption handling,
and error cases using generated PDF fixtures.
"""

import pytest
from pathlib import Path
from unittest.mock import patch, Mock

from pdfsearch.extraction.pypdf_backend import PyPDFBackend
from pdfsearch.core.exceptions import ExtractionError


@pytest.fixture
def backend():
    """Create a PyPDFBackend instance."""
    return PyPDFBackend()


class TestPyPDFBackend:
    """Tests for PyPDFBackend class."""

    def test_backend_name(self, backend):
        """Test that backend has correct name identifier."""
        assert backend.name == "pypdf"

    def test_extract_returns_one_string_per_page(self, backend, sample_pdf: Path):
        """Test that extract returns page texts in order."""
        pages = backend.extract(sample_pdf)

        assert len(pages) == 3
        assert all(isinstance(text, str) for text in pages)
        assert "invoice" in pages[1].lower()
        assert "invoice" not in pages[0].lower()

    def test_extract_accepts_string_path(self, backend, sample_pdf: Path):
        """Test that extract accepts string path."""
        assert len(backend.extract(str(sample_pdf))) == 3

    def test_extract_keeps_blank_pages(self, backend, pdf_factory):
        """Test that blank pages stay in place as empty strings."""
        pdf = pdf_factory("blank.pdf", [["First"], [], ["Third"]])

        pages = backend.extract(pdf)

        assert len(pages) == 3
        assert pages[1].strip() == ""
        assert "third" in pages[2].lower()

    def test_extract_nonexistent_file_raises(self, backend, temp_dir):
        """Test that extracting nonexistent file raises ExtractionError."""
        with pytest.raises(ExtractionError):
            backend.extract(temp_dir / "nonexistent.pdf")

    def test_extract_invalid_pdf_raises(self, backend, temp_dir):
        """Test that invalid PDF content raises ExtractionError."""
        invalid_pdf = temp_dir / "invalid.pdf"
        invalid_pdf.write_bytes(b"Not a valid PDF")

        with pytest.raises(ExtractionError):
            backend.extract(invalid_pdf)


class TestPyPDFBackendPageAccess:
    """Tests for single-page extraction and page counting."""

    def test_extract_page_returns_page_text(self, backend, sample_pdf):
        """Test that extract_page returns the requested page."""
        text = backend.extract_page(sample_pdf, 2)

        assert "invoice" in text.lower()

    def test_extract_page_invalid_page_raises(self, backend, sample_pdf):
        """Test that out-of-range page number raises."""
        with pytest.raises(ExtractionError):
            backend.extract_page(sample_pdf, 9999)

    def test_extract_page_zero_raises(self, backend, sample_pdf):
        """Test that page numbers are 1-indexed."""
        with pytest.raises(ExtractionError):
            backend.extract_page(sample_pdf, 0)

    def test_page_count(self, backend, sample_pdf):
        """Test counting pages."""
        assert backend.page_count(sample_pdf) == 3

    def test_page_count_nonexistent_file_raises(self, backend, temp_dir):
        """Test that nonexistent file raises ExtractionError."""
        with pytest.raises(ExtractionError):
            backend.page_count(temp_dir / "nonexistent.pdf")


class TestPyPDFBackendEncryption:
    """Tests for encrypted PDF handling."""

    @patch("pdfsearch.extraction.pypdf_backend.PdfReader")
    def test_encrypted_pdf_attempts_empty_password(self, mock_reader_cls, backend, sample_pdf):
        """Test that encrypted PDF is decrypted with empty password."""
        page = Mock()
        page.extract_text.return_value = "Decrypted text"
        mock_reader = Mock()
        mock_reader.is_encrypted = True
        mock_reader.pages = [page]
        mock_reader_cls.return_value = mock_reader

        pages = backend.extract(sample_pdf)

        mock_reader.decrypt.assert_called_once_with("")
        assert pages == ["Decrypted text"]

    @patch("pdfsearch.extraction.pypdf_backend.PdfReader")
    def test_undecryptable_pdf_raises(self, mock_reader_cls, backend, sample_pdf):
        """Test that a PDF needing a password raises ExtractionError."""
        mock_reader = Mock()
        mock_reader.is_encrypted = True
        mock_reader.decrypt.side_effect = Exception("password required")
        mock_reader_cls.return_value = mock_reader

        with pytest.raises(ExtractionError) as exc_info:
            backend.extract(sample_pdf)

        assert "encrypted" in exc_info.value.message.lower()

    @patch("pdfsearch.extraction.pypdf_backend.PdfReader")
    def test_failing_page_becomes_empty(self, mock_reader_cls, backend, sample_pdf):
        """Test that one failing page does not lose the others."""
        good = Mock()
        good.extract_text.return_value = "Good page"
        bad = Mock()
        bad.extract_text.side_effect = Exception("broken font")
        mock_reader = Mock()
        mock_reader.is_encrypted = False
        mock_reader.pages = [good, bad]
        mock_reader_cls.return_value = mock_reader

        pages = backend.extract(sample_pdf)

        assert pages == ["Good page", ""]
