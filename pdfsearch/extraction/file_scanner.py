"""
File scanner for recursive PDF discovery.

Walks a folder tree (following directory symlinks, with cycle detection),
keeps files whose extension matches case-insensitively, and never fails:
unreadable directories and files are logged and skipped.
"""

import os
from pathlib import Path
from typing import Iterator, List, Set, Tuple, Union

from ..core import get_config, get_logger
from ..utils import get_file_size_mb

logger = get_logger(__name__)


class FileScanner:
    """
    Recursively discovers PDF files in a directory tree.

    Uses generator-based iteration for memory efficiency when
    processing large collections.
    """

    def __init__(
        self,
        root_directory: Union[str, Path] = None,
        extensions: List[str] = None,
        max_file_size_mb: float = None
    ):
        """
        Initialize the file scanner.

        Args:
            root_directory: Directory to scan. Defaults to config value.
            extensions: List of file extensions to include (e.g., [".pdf"]).
            max_file_size_mb: Skip files larger than this size. 0 disables the limit.
        """
        config = get_config()

        self.root_directory = Path(root_directory or config.paths.data_directory)
        self.extensions = extensions or config.extraction.supported_extensions
        if max_file_size_mb is None:
            max_file_size_mb = config.extraction.max_file_size_mb
        self.max_file_size_mb = max_file_size_mb

        self.extensions = [ext.lower() for ext in self.extensions]

    def scan(self) -> Iterator[Path]:
        """
        Scan directory and yield matching file paths.

        Yields:
            Absolute Path objects for each matching file.

        Logs:
            Progress every 1000 files discovered.
        """
        if not self.root_directory.is_dir():
            logger.error(f"Root directory does not exist: {self.root_directory}")
            return

        root = Path(os.path.abspath(self.root_directory))
        logger.info(f"Scanning directory: {root}")

        file_count = 0
        skipped_size = 0
        skipped_ext = 0
        visited: Set[Tuple[int, int]] = set()

        for dirpath, dirnames, filenames in os.walk(root, onerror=self._on_walk_error, followlinks=True):
            try:
                stat = os.stat(dirpath)
            except OSError as e:
                logger.warning(f"Cannot access directory {dirpath}: {e}")
                dirnames[:] = []
                continue

            key = (stat.st_dev, stat.st_ino)
            if key in visited:
                logger.debug(f"Skipping already visited directory (symlink cycle): {dirpath}")
                dirnames[:] = []
                continue
            visited.add(key)

            dirnames.sort()

            for filename in sorted(filenames):
                filepath = Path(dirpath) / filename

                if filepath.suffix.lower() not in self.extensions:
                    skipped_ext += 1
                    continue

                try:
                    if not filepath.is_file():
                        continue

                    size_mb = get_file_size_mb(filepath)
                    if self.max_file_size_mb and size_mb > self.max_file_size_mb:
                        logger.debug(f"Skipping large file ({size_mb}MB): {filepath.name}")
                        skipped_size += 1
                        continue
                except OSError as e:
                    logger.warning(f"Cannot access file {filepath}: {e}")
                    continue

                file_count += 1

                if file_count % 1000 == 0:
                    logger.info(f"Discovered {file_count} files...")

                yield filepath

        logger.info(
            f"Scan complete: {file_count} files found, "
            f"{skipped_size} skipped (too large), "
            f"{skipped_ext} skipped (wrong extension)"
        )

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.warning(f"Cannot read directory {error.filename}: {error.strerror}")

    def count(self) -> int:
        """
        Count total matching files without loading all paths.

        Returns:
            Number of matching files.
        """
        return sum(1 for _ in self.scan())

    def list_all(self) -> List[Path]:
        """
        Get all matching files as a list.

        Returns:
            List of all matching file paths in traversal order.
        """
        return list(self.scan())


def discover(root_directory: Union[str, Path], extensions: List[str] = None) -> Set[Path]:
    """
    Discover candidate documents below a folder.

    Never raises: an unreadable or missing root yields an empty set.

    Args:
        root_directory: Folder to walk recursively.
        extensions: Extensions to keep, defaults to the configured ones.

    Returns:
        Set of absolute document paths.
    """
    return set(FileScanner(root_directory, extensions=extensions).scan())


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1:
        test_dir = Path(sys.argv[1])
    else:
        test_dir = Path(".")

    scanner = FileScanner(root_directory=test_dir, extensions=[".pdf"])

    print(f"Scanning: {test_dir}")
    print("-" * 50)

    for i, filepath in enumerate(scanner.scan()):
        print(f"  {filepath.name}")
        if i >= 9:
            print("  ... (showing first 10 only)")
            break
