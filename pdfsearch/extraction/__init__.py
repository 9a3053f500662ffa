"""
PDF extraction module for the PDF Keyword Search engine.

Provides file discovery and text extraction with multiple backends
(pypdf and pdfplumber) with automatic fallback support.
"""

from .file_scanner import FileScanner, discover
from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend
from .extractor import PDFExtractor

__all__ = [
    "FileScanner",
    "discover",
    "PyPDFBackend",
    "PDFPlumberBackend",
    "PDFExtractor"
]
