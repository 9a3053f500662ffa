"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, generated PDFs, an in-memory extractor
and config fixtures to ensure tests are isolated and safe.
"""

import json
import threading
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Callable, Dict, Generator, Iterable, List

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from pdfsearch.core.exceptions import ExtractionError  # noqa: E402


def build_pdf(pages: List[List[str]]) -> bytes:
    """
    Build a small valid PDF with one text line per entry.

    Args:
        pages: Lines of text for each page. An empty list gives a blank page.

    Returns:
        PDF file content with a correct xref table.
    """
    page_count = len(pages)
    page_ids = [4 + 2 * i for i in range(page_count)]
    content_ids = [5 + 2 * i for i in range(page_count)]

    objects = {
        1: b"<< /Type /Catalog /Pages 2 0 R >>",
        2: "<< /Type /Pages /Kids [{}] /Count {} >>".format(
            " ".join(f"{pid} 0 R" for pid in page_ids), page_count
        ).encode("latin-1"),
        3: b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>",
    }

    for index, lines in enumerate(pages):
        ops = ["BT", "/F1 12 Tf", "72 720 Td"]
        for line in lines:
            escaped = line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
            ops.append(f"({escaped}) Tj")
            ops.append("0 -16 Td")
        ops.append("ET")
        stream = "\n".join(ops).encode("latin-1")

        objects[page_ids[index]] = (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Contents {content_ids[index]} 0 R "
            f"/Resources << /Font << /F1 3 0 R >> >> >>"
        ).encode("latin-1")
        objects[content_ids[index]] = (
            f"<< /Length {len(stream)} >>\nstream\n".encode("latin-1") + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets = {}
    for number in range(1, len(objects) + 1):
        offsets[number] = len(out)
        out += f"{number} 0 obj\n".encode("latin-1") + objects[number] + b"\nendobj\n"

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode("latin-1")
    out += b"0000000000 65535 f \n"
    for number in range(1, len(objects) + 1):
        out += f"{offsets[number]:010d} 00000 n \n".encode("latin-1")
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode("latin-1")

    return bytes(out)


class FakeExtractor:
    """
    In-memory extractor keyed by file path.

    Records every call so tests can assert on cache behaviour.
    """

    def __init__(self, documents: Dict[str, List[str]] = None, failing: Iterable[str] = ()):
        self.documents = {str(path): list(pages) for path, pages in (documents or {}).items()}
        self.failing = {str(path) for path in failing}
        self.page_lookup_fails = False
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def _record(self, *call) -> None:
        with self._lock:
            self.calls.append(call)

    def _pages(self, path) -> List[str]:
        key = str(path)
        if key in self.failing or key not in self.documents:
            raise ExtractionError("Corrupt document", filepath=key)
        return self.documents[key]

    def count_calls(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    def extract_pages(self, path) -> List[str]:
        self._record("extract_pages", str(path))
        return list(self._pages(path))

    def extract_all(self, path) -> str:
        self._record("extract_all", str(path))
        return "\n".join(self._pages(path))

    def page_count(self, path) -> int:
        self._record("page_count", str(path))
        if self.page_lookup_fails:
            raise ExtractionError("Page lookup unavailable", filepath=str(path))
        return len(self._pages(path))

    def page_text(self, path, page_num: int) -> str:
        self._record("page_text", str(path), page_num)
        if self.page_lookup_fails:
            raise ExtractionError("Page lookup unavailable", filepath=str(path))
        pages = self._pages(path)
        if not 1 <= page_num <= len(pages):
            raise ExtractionError(f"Invalid page {page_num}", filepath=str(path))
        return pages[page_num - 1]


@pytest.fixture(autouse=True)
def project_config():
    """
    Load the repository config for every test.

    Components read defaults from the config singleton, so tests never
    depend on the working directory.
    """
    from pdfsearch.core import config_loader
    config_loader._config_instance = None
    config_loader.get_config(_project_root / "config" / "config.json")
    yield
    config_loader._config_instance = None


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="pdf_search_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_config(temp_dir: Path) -> Generator[Path, None, None]:
    """
    Create a temporary config.json for testing.

    Args:
        temp_dir: Temporary directory fixture.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir()

    logs_dir = temp_dir / "output" / "logs"
    logs_dir.mkdir(parents=True)

    config_data = {
        "paths": {
            "data_directory": str(temp_dir / "data"),
            "logs_directory": str(logs_dir)
        },
        "extraction": {
            "primary_backend": "pypdf",
            "fallback_backend": "pdfplumber",
            "max_file_size_mb": 100,
            "supported_extensions": [".pdf"]
        },
        "cache": {
            "capacity": 5,
            "eviction_policy": "lru"
        },
        "search": {
            "match_mode": "text",
            "max_workers": 2,
            "order_by_size": False,
            "page_window_chars": 10,
            "max_context_chars": 120,
            "lines_per_page": 20
        },
        "viewer": {
            "preview_lines": 3,
            "max_document_size_mb": 1
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1
        }
    }

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f)

    yield config_path


@pytest.fixture
def pdf_factory(temp_dir: Path) -> Callable[..., Path]:
    """
    Write generated PDFs below the temporary directory.

    Returns:
        Function (relative_path, pages) -> absolute path of the new PDF.
    """
    def _make(relative_path: str, pages: List[List[str]]) -> Path:
        path = temp_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_pdf(pages))
        return path

    return _make


@pytest.fixture
def sample_pdf(pdf_factory) -> Path:
    """A three-page PDF where "Invoice" only appears on page 2."""
    return pdf_factory("sample.pdf", [
        ["Annual report", "Introduction to the company"],
        ["Invoice number 42", "Total due 120 EUR"],
        ["Appendix", "Contact details"],
    ])


@pytest.fixture
def sample_pdf_collection(temp_dir: Path, pdf_factory) -> Path:
    """
    Create multiple PDF files in a directory structure.

    Returns:
        Path to the data directory containing PDFs.
    """
    data_dir = temp_dir / "data"

    pdf_factory("data/root_doc.pdf", [["Quarterly invoice summary"]])
    pdf_factory("data/folder1/doc1.pdf", [["Meeting notes"], ["Invoice attached"]])
    pdf_factory("data/folder1/doc2.pdf", [["Holiday schedule"]])
    pdf_factory("data/folder2/doc3.pdf", [["Receipt for payment"]])

    # Non-PDF file (should be ignored)
    (data_dir / "readme.txt").write_text("Not a PDF")

    return data_dir


@pytest.fixture
def fake_extractor() -> Callable[..., FakeExtractor]:
    """
    Factory for in-memory extractors.

    Returns:
        Function (documents, failing=()) -> FakeExtractor.
    """
    return FakeExtractor


@pytest.fixture
def fake_folder(temp_dir: Path):
    """
    Create placeholder files on disk backed by a FakeExtractor.

    Returns:
        Function (documents, failing=()) -> (folder, extractor) where
        documents maps relative paths to page texts.
    """
    def _make(documents: Dict[str, List[str]], failing: Iterable[str] = ()):
        folder = temp_dir / "docs"
        folder.mkdir(exist_ok=True)

        mapping = {}
        for relative_path, pages in documents.items():
            path = folder / relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            # Size grows with content so size ordering is observable
            path.write_bytes(b"%PDF-1.4\n" + "\n".join(pages).encode("utf-8"))
            mapping[str(path)] = pages

        failing_paths = [str(folder / relative_path) for relative_path in failing]
        return folder, FakeExtractor(mapping, failing=failing_paths)

    return _make


@pytest.fixture
def reset_config_singleton():
    """
    Reset the config singleton between tests.

    This ensures each test gets a fresh config instance.
    """
    from pdfsearch.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def reset_logger_singleton():
    """
    Reset the logger initialization flag between tests.
    """
    from pdfsearch.core import logger
    logger._logger_initialized = False
    yield
    logger._logger_initialized = False
