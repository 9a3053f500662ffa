"""
File utility functions for the PDF Keyword Search engine.

Provides size lookups used for scheduling, path display helpers,
and the size-capped whole-document read used by viewers.
"""

from pathlib import Path
from typing import Union

from ..core.exceptions import DocumentNotFoundError, SizeExceededError


def get_file_size(filepath: Union[str, Path]) -> int:
    """
    Get file size in bytes.

    Args:
        filepath: Path to the file.

    Returns:
        File size in bytes.
    """
    return Path(filepath).stat().st_size


def get_file_size_mb(filepath: Union[str, Path]) -> float:
    """
    Get file size in megabytes.

    Args:
        filepath: Path to the file.

    Returns:
        File size in MB, rounded to 2 decimal places.
    """
    return round(get_file_size(filepath) / (1024 * 1024), 2)


def get_relative_path(filepath: Union[str, Path], base: Union[str, Path]) -> str:
    """
    Compute relative path from base directory.

    Args:
        filepath: Absolute path to the file.
        base: Base directory to compute relative path from.

    Returns:
        Relative path as string, or absolute path if not relative to base.
    """
    filepath = Path(filepath).resolve()
    base = Path(base).resolve()

    try:
        return str(filepath.relative_to(base))
    except ValueError:
        return str(filepath)


def read_document_bytes(filepath: Union[str, Path], max_size_bytes: int) -> bytes:
    """
    Read a whole document into memory, refusing files above a size cap.

    The size is checked with stat() before any byte is read, so oversized
    files are never loaded.

    Args:
        filepath: Path to the document.
        max_size_bytes: Largest accepted file size.

    Returns:
        Raw file content.

    Raises:
        DocumentNotFoundError: If the file does not exist.
        SizeExceededError: If the file is larger than max_size_bytes.
    """
    filepath = Path(filepath)

    if not filepath.is_file():
        raise DocumentNotFoundError(
            f"Document not found: {filepath}",
            filepath=str(filepath)
        )

    size_bytes = get_file_size(filepath)
    if size_bytes > max_size_bytes:
        raise SizeExceededError(
            f"Document too large ({size_bytes} bytes, limit {max_size_bytes} bytes)",
            filepath=str(filepath),
            size_bytes=size_bytes,
            max_size_bytes=max_size_bytes
        )

    return filepath.read_bytes()


if __name__ == "__main__":
    import tempfile

    with tempfile.NamedTemporaryFile(delete=False, suffix=".pdf") as f:
        f.write(b"%PDF-1.4 test content")
        temp_path = Path(f.name)

    print(f"Test file: {temp_path}")
    print(f"Size: {get_file_size(temp_path)} bytes ({get_file_size_mb(temp_path)} MB)")
    print(f"Relative path: {get_relative_path(temp_path, temp_path.parent.parent)}")
    print(f"Read: {len(read_document_bytes(temp_path, 1024))} bytes")

    try:
        read_document_bytes(temp_path, 4)
    except SizeExceededError as e:
        print(f"Rejected: {e.message}")

    temp_path.unlink()
