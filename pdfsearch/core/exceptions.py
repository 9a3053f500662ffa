"""
Custom exception hierarchy for the PDF Keyword Search engine.

Provides specific exception types for different failure modes:
configuration errors, malformed queries, extraction failures and
single-document read errors.
"""


class DocumentSearchError(Exception):
    """Base exception for all PDF Keyword Search errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(DocumentSearchError):
    """Raised when configuration is invalid or missing."""
    pass


class QueryError(DocumentSearchError):
    """Raised when a search query has no usable keyword."""

    def __init__(self, message: str, query: str = None, details: dict = None):
        """
        Initialize query error.

        Args:
            message: Error description.
            query: The raw query text that was rejected.
            details: Additional context.
        """
        super().__init__(message, details)
        self.query = query


class ExtractionError(DocumentSearchError):
    """Raised when PDF text extraction fails."""

    def __init__(self, message: str, filepath: str = None, details: dict = None):
        """
        Initialize extraction error.

        Args:
            message: Error description.
            filepath: Path to the problematic PDF file.
            details: Additional context.
        """
        super().__init__(message, details)
        self.filepath = filepath


class DocumentNotFoundError(DocumentSearchError):
    """Raised when a single-document operation targets a missing file."""

    def __init__(self, message: str, filepath: str = None, details: dict = None):
        super().__init__(message, details)
        self.filepath = filepath


class SizeExceededError(DocumentSearchError):
    """Raised when a document is larger than the allowed read size."""

    def __init__(
        self,
        message: str,
        filepath: str = None,
        size_bytes: int = None,
        max_size_bytes: int = None,
        details: dict = None
    ):
        """
        Initialize size error.

        Args:
            message: Error description.
            filepath: Path to the oversized file.
            size_bytes: Actual file size.
            max_size_bytes: Configured limit.
            details: Additional context.
        """
        super().__init__(message, details)
        self.filepath = filepath
        self.size_bytes = size_bytes
        self.max_size_bytes = max_size_bytes


if __name__ == "__main__":
    try:
        raise QueryError("No usable keyword in query", query=" ,; ")
    except DocumentSearchError as e:
        print(f"Caught: {e.__class__.__name__}: {e.message} (query={e.query!r})")

    try:
        raise ExtractionError("Failed to extract text", filepath="/docs/test.pdf")
    except ExtractionError as e:
        print(f"Extraction failed for: {e.filepath}")
