"""
Query parser for keyword search.

Splits raw user input into an ordered set of keywords and rejects
queries that contain no usable keyword before any file is touched.
"""

import re
from pathlib import Path
from typing import List, Union

from ..core import get_logger, QueryError
from .models import SearchQuery

logger = get_logger(__name__)


# Characters that separate keywords in a raw query
KEYWORD_SEPARATORS = " ,;"


class QueryParser:
    """
    Parses raw keyword input into a SearchQuery.

    Keywords are split on spaces, commas and semicolons, trimmed, and
    de-duplicated while keeping their first-seen order.
    """

    def __init__(self, separators: str = KEYWORD_SEPARATORS):
        self.separators = separators
        self._split_pattern = re.compile("[" + re.escape(separators) + "]")

    def split_keywords(self, text: str) -> List[str]:
        """
        Split raw input into keywords.

        Args:
            text: Raw user input, e.g. "invoice, facture;receipt".

        Returns:
            Ordered list of unique, non-empty keywords.
        """
        if not text or not text.strip():
            return []

        keywords = []
        for part in self._split_pattern.split(text):
            keyword = part.strip()
            if keyword and keyword not in keywords:
                keywords.append(keyword)

        return keywords

    def parse(self, root: Union[str, Path], text: str) -> SearchQuery:
        """
        Build a validated SearchQuery.

        Args:
            root: Folder to search.
            text: Raw keyword input.

        Returns:
            SearchQuery with at least one keyword.

        Raises:
            QueryError: If no usable keyword remains after splitting.
        """
        keywords = self.split_keywords(text)

        if not keywords:
            logger.debug(f"Rejected query without keywords: {text!r}")
            raise QueryError("Please enter at least one valid keyword", query=text)

        return SearchQuery(root=Path(root), keywords=keywords, text=text)


if __name__ == "__main__":
    parser = QueryParser()

    test_queries = [
        "invoice",
        "alpha, beta",
        "alpha;beta gamma",
        "  repeated repeated  ",
        " ,; "
    ]

    for q in test_queries:
        print(f"  {q!r} -> {parser.split_keywords(q)}")

    try:
        parser.parse(".", " ,; ")
    except QueryError as e:
        print(f"Rejected: {e.message}")
