"""
PDF Keyword Search Package.

A modular Python engine that walks a folder of PDF documents, searches their
extracted text for one or more keywords in parallel, and reports per-page
matches with surrounding context while streaming progress to the caller.
"""

__version__ = "1.0.0"
