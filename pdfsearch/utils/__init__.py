"""
Utility module providing shared helper functions.

Contains file operations and text processing utilities used across
the application. Depends only on the core module.
"""

from .file_utils import (
    get_file_size,
    get_file_size_mb,
    get_relative_path,
    read_document_bytes
)
from .text_utils import (
    find_ignore_case,
    contains_ignore_case,
    truncate_text,
    unique_lines
)

__all__ = [
    "get_file_size",
    "get_file_size_mb",
    "get_relative_path",
    "read_document_bytes",
    "find_ignore_case",
    "contains_ignore_case",
    "truncate_text",
    "unique_lines"
]
