"""
Search module for parallel keyword search over PDF folders.

Provides query parsing, the extracted-text cache, keyword matching,
page resolution, the parallel scheduler with progress reporting,
result aggregation and single-document page viewing.
"""

from .models import (
    MatchMode,
    SearchQuery,
    SearchResult,
    PageMatch,
    MatchContext,
    ProgressEvent,
    OutcomeStatus,
    FileOutcome,
    SearchReport
)
from .query_parser import QueryParser
from .text_cache import TextCache, ReadWriteLock
from .matcher import KeywordMatcher
from .page_locator import PageLocator, ExactPageLocator, HeuristicPageLocator, PageLocatorChain
from .progress import ProgressChannel
from .aggregator import ResultAggregator
from .scheduler import SearchScheduler
from .engine import SearchEngine
from .page_viewer import PageViewer, PageViewerData, PageInfo

__all__ = [
    "MatchMode",
    "SearchQuery",
    "SearchResult",
    "PageMatch",
    "MatchContext",
    "ProgressEvent",
    "OutcomeStatus",
    "FileOutcome",
    "SearchReport",
    "QueryParser",
    "TextCache",
    "ReadWriteLock",
    "KeywordMatcher",
    "PageLocator",
    "ExactPageLocator",
    "HeuristicPageLocator",
    "PageLocatorChain",
    "ProgressChannel",
    "ResultAggregator",
    "SearchScheduler",
    "SearchEngine",
    "PageViewer",
    "PageViewerData",
    "PageInfo"
]
