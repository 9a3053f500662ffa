"""
Keyword matching and context windowing.

Scans extracted text case-insensitively and builds bounded context
windows around matches. Three modes are provided:
  - whole text, one keyword: first matching line with one line around it
  - whole text, several keywords: every matching line with two lines
    around it, up to a line limit
  - per page: a fixed character window around the first match on
    each page, one window per matching page
Only the first occurrence on a line or page anchors a window.
"""

from typing import List, Optional, Sequence

from ..core import get_config, get_logger
from ..utils import find_ignore_case, truncate_text, unique_lines
from .models import MatchContext

logger = get_logger(__name__)


class KeywordMatcher:
    """
    Builds MatchContext windows from document text.

    All sizes default to the values in the "search" config section.
    """

    def __init__(
        self,
        page_window_chars: int = None,
        line_context: int = None,
        multi_line_context: int = None,
        max_context_lines: int = None,
        max_context_chars: int = None,
        multi_max_context_chars: int = None,
        truncation_marker: str = None
    ):
        """
        Initialize the matcher.

        Args:
            page_window_chars: Characters kept on each side of a per-page match.
            line_context: Lines kept around the match in single-keyword mode.
            multi_line_context: Lines kept around each match in multi-keyword mode.
            max_context_lines: Line limit of a multi-keyword window.
            max_context_chars: Length cap of a single-keyword window.
            multi_max_context_chars: Length cap of a multi-keyword window.
            truncation_marker: Appended when a window is cut at its cap.
        """
        arguments = (
            page_window_chars, line_context, multi_line_context, max_context_lines,
            max_context_chars, multi_max_context_chars, truncation_marker
        )
        search = get_config().search if None in arguments else None

        self.page_window_chars = search.page_window_chars if page_window_chars is None else page_window_chars
        self.line_context = search.line_context if line_context is None else line_context
        self.multi_line_context = search.multi_line_context if multi_line_context is None else multi_line_context
        self.max_context_lines = search.max_context_lines if max_context_lines is None else max_context_lines
        self.max_context_chars = search.max_context_chars if max_context_chars is None else max_context_chars
        self.multi_max_context_chars = (
            search.multi_max_context_chars if multi_max_context_chars is None else multi_max_context_chars
        )
        self.truncation_marker = search.truncation_marker if truncation_marker is None else truncation_marker

    def matched_keywords(self, text: str, keywords: Sequence[str]) -> List[str]:
        """
        Fast containment test of every keyword against the whole text.

        Args:
            text: Document text.
            keywords: Query keywords.

        Returns:
            Keywords present in the text, in query order.
        """
        if not text:
            return []

        lowered = text.lower()
        return [kw for kw in keywords if kw.lower() in lowered]

    def match_text(self, text: str, keyword: str) -> Optional[MatchContext]:
        """
        Build a window around the first line containing a keyword.

        Args:
            text: Whole-document text.
            keyword: Keyword to look for.

        Returns:
            MatchContext, or None if no line contains the keyword.
        """
        if not text or not text.strip():
            return None

        needle = keyword.lower()
        lines = text.splitlines()

        for index, line in enumerate(lines):
            if needle not in line.lower():
                continue

            start = max(index - self.line_context, 0)
            window = unique_lines(lines[start:index + self.line_context + 1])
            context = "\n".join(window).strip()

            return self._capped(context, self.max_context_chars, [keyword], keyword)

        return None

    def match_text_multi(self, text: str, keywords: Sequence[str]) -> Optional[MatchContext]:
        """
        Build one window covering the lines that contain any keyword.

        Documents without any keyword are rejected before lines are scanned.
        Collection stops once the line limit is reached.

        Args:
            text: Whole-document text.
            keywords: Query keywords.

        Returns:
            MatchContext listing every keyword found, or None.
        """
        if not text or not text.strip():
            return None

        found = self.matched_keywords(text, keywords)
        if not found:
            return None

        needles = [(kw, kw.lower()) for kw in found]
        lines = text.splitlines()

        collected: List[int] = []
        seen = set()
        anchor = ""

        for index, line in enumerate(lines):
            if len(collected) >= self.max_context_lines:
                break

            lowered = line.lower()
            hit = next((kw for kw, needle in needles if needle in lowered), None)
            if hit is None:
                continue

            anchor = anchor or hit

            start = max(index - self.multi_line_context, 0)
            end = min(index + self.multi_line_context + 1, len(lines))
            for i in range(start, end):
                if i not in seen:
                    seen.add(i)
                    collected.append(i)

        if not collected:
            return None

        context = "\n".join(lines[i] for i in collected[:self.max_context_lines]).strip()

        return self._capped(context, self.multi_max_context_chars, found, anchor)

    def match_pages(self, pages: Sequence[str], keyword: str) -> List[MatchContext]:
        """
        Build one character window per page containing a keyword.

        Windows are computed on character positions, so multi-byte text is
        never split inside a code point.

        Args:
            pages: Page texts; index 0 is page 1.
            keyword: Keyword to look for.

        Returns:
            MatchContext per matching page, in ascending page order.
        """
        contexts = []

        for page_number, page_text in enumerate(pages, start=1):
            if not page_text or not page_text.strip():
                continue

            index = find_ignore_case(page_text, keyword)
            if index < 0:
                continue

            start = max(index - self.page_window_chars, 0)
            end = min(index + len(keyword) + self.page_window_chars, len(page_text))

            contexts.append(MatchContext(
                keywords=[keyword],
                text=page_text[start:end],
                anchor=keyword,
                page_number=page_number
            ))

        return contexts

    def _capped(self, context: str, cap: int, keywords: List[str], anchor: str) -> MatchContext:
        truncated = len(context) > cap
        text = truncate_text(context, cap, self.truncation_marker, break_on_word=False)

        return MatchContext(keywords=list(keywords), text=text, truncated=truncated, anchor=anchor)


if __name__ == "__main__":
    sample = "\n".join([
        "ACME Corp",
        "Invoice N°2024-12",
        "Total due: 120 EUR",
        "Payment by transfer",
        "Receipt attached"
    ])

    matcher = KeywordMatcher(
        page_window_chars=30, line_context=1, multi_line_context=2,
        max_context_lines=10, max_context_chars=200, multi_max_context_chars=300,
        truncation_marker="..."
    )

    print("=== single ===")
    print(matcher.match_text(sample, "INVOICE"))
    print("\n=== multi ===")
    print(matcher.match_text_multi(sample, ["alpha", "receipt"]))
    print("\n=== pages ===")
    for ctx in matcher.match_pages(["", sample, "nothing here"], "total"):
        print(ctx)
