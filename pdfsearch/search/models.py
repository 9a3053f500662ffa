"""
Data models for search functionality.

Defines dataclasses for search queries, per-document results, progress
events and per-file outcomes used throughout the search module.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from ..core import QueryError


class MatchMode(Enum):
    """How document text is extracted and matched."""
    PAGES = "pages"
    TEXT = "text"


@dataclass
class SearchQuery:
    """
    Represents a keyword search over a folder.

    Attributes:
        root: Folder to search recursively.
        keywords: Ordered, de-duplicated, trimmed keywords. Case is kept
                  as typed; case-folding happens at match time.
        text: The raw query text the keywords were parsed from.
    """
    root: Path
    keywords: List[str]
    text: str = ""

    def __post_init__(self):
        self.root = Path(self.root)
        self.keywords = [kw.strip() for kw in self.keywords if kw and kw.strip()]

        if not self.keywords:
            raise QueryError("Query contains no usable keyword", query=self.text)

    @property
    def is_multi_keyword(self) -> bool:
        return len(self.keywords) > 1


@dataclass
class PageMatch:
    """
    One matched location inside a document.

    Attributes:
        page_number: 1-indexed page, or None when it could not be resolved.
        matched_text: Context window around the match.
    """
    page_number: Optional[int]
    matched_text: str


@dataclass
class SearchResult:
    """
    All matches found in one document.

    Attributes:
        file_path: Absolute path to the PDF file.
        file_size: File size in bytes, read once per run.
        page_info: Matched pages in ascending order.
        keywords: Query keywords that matched this document.
    """
    file_path: str
    file_size: int
    page_info: List[PageMatch] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)

    @property
    def filename(self) -> str:
        return Path(self.file_path).name

    @property
    def pages(self) -> List[Optional[int]]:
        return [info.page_number for info in self.page_info]


@dataclass
class MatchContext:
    """
    Context window built around a keyword match.

    Attributes:
        keywords: Keywords found in the scanned text.
        text: The context window, capped and possibly truncated.
        truncated: Whether the cap was hit and the marker appended.
        anchor: Keyword whose first occurrence anchored the window.
        page_number: Page the window was taken from, when known.
    """
    keywords: List[str]
    text: str
    truncated: bool = False
    anchor: str = ""
    page_number: Optional[int] = None


@dataclass(frozen=True)
class ProgressEvent:
    """
    Progress notification emitted when a file starts processing.

    Attributes:
        current: 1-based count of files started so far.
        total: Number of files discovered for the run.
        current_file: Path of the file that just started.
    """
    current: int
    total: int
    current_file: str

    @property
    def percent(self) -> float:
        return (self.current / self.total) * 100 if self.total > 0 else 0.0


class OutcomeStatus(Enum):
    """Result of processing one document."""
    MATCHED = "matched"
    NO_MATCH = "no_match"
    SKIPPED = "skipped"


@dataclass
class FileOutcome:
    """
    Tagged outcome of one unit of work.

    Attributes:
        file_path: Document that was processed.
        status: MATCHED, NO_MATCH or SKIPPED.
        result: The search result when status is MATCHED.
        reason: Why the document was skipped.
    """
    file_path: str
    status: OutcomeStatus
    result: Optional[SearchResult] = None
    reason: Optional[str] = None

    @classmethod
    def matched(cls, result: SearchResult) -> "FileOutcome":
        return cls(file_path=result.file_path, status=OutcomeStatus.MATCHED, result=result)

    @classmethod
    def no_match(cls, file_path: str) -> "FileOutcome":
        return cls(file_path=file_path, status=OutcomeStatus.NO_MATCH)

    @classmethod
    def skipped(cls, file_path: str, reason: str) -> "FileOutcome":
        return cls(file_path=file_path, status=OutcomeStatus.SKIPPED, reason=reason)


@dataclass
class SearchReport:
    """
    Statistics and results of a complete search run.

    Attributes:
        query: The raw query text.
        results: Sorted search results.
        files_total: Documents discovered.
        files_matched: Documents with at least one match.
        files_without_match: Documents searched without a match.
        files_skipped: Documents that could not be searched.
        skipped: (path, reason) for each skipped document.
        cancelled: Whether the run was cancelled before finishing.
        execution_time_ms: Wall time of the run.
    """
    query: str
    results: List[SearchResult] = field(default_factory=list)
    files_total: int = 0
    files_matched: int = 0
    files_without_match: int = 0
    files_skipped: int = 0
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    cancelled: bool = False
    execution_time_ms: float = 0.0

    @property
    def files_processed(self) -> int:
        return self.files_matched + self.files_without_match + self.files_skipped


if __name__ == "__main__":
    query = SearchQuery(root=Path("/data/docs"), keywords=["invoice", "facture"], text="invoice, facture")
    print(f"Query: {query}")

    result = SearchResult(
        file_path="/data/docs/2024/facture.pdf",
        file_size=120_345,
        page_info=[PageMatch(page_number=2, matched_text="... Invoice N°12 ...")],
        keywords=["invoice"]
    )
    print(f"\nResult: {result.filename} pages {result.pages}")

    event = ProgressEvent(current=3, total=12, current_file=result.file_path)
    print(f"\nProgress: {event.current}/{event.total} ({event.percent:.1f}%)")
