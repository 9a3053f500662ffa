"""
Text utility functions for the PDF Keyword Search engine.

Provides case-insensitive lookup, truncation with a marker, and
line de-duplication for building match context windows.
"""

import re
from typing import Iterable, List


def find_ignore_case(text: str, needle: str, start: int = 0) -> int:
    """
    Find the character index of needle in text, ignoring case.

    Both strings are lower-cased before comparison. When lower-casing
    changes the length of the text (a few Unicode characters expand),
    a case-insensitive regex is used instead so the returned index
    always refers to a character position in the original text.

    Args:
        text: Haystack.
        needle: String to look for.
        start: Character index to start searching from.

    Returns:
        Character index of the first match, or -1 if absent.
    """
    if not needle:
        return -1

    lowered = text.lower()
    if len(lowered) == len(text):
        return lowered.find(needle.lower(), start)

    match = re.compile(re.escape(needle), re.IGNORECASE).search(text, start)
    return match.start() if match else -1


def contains_ignore_case(text: str, needle: str) -> bool:
    """Return True when needle occurs in text, ignoring case."""
    if not text or not needle:
        return False
    return needle.lower() in text.lower()


def truncate_text(
    text: str,
    max_length: int,
    suffix: str = "...",
    break_on_word: bool = True
) -> str:
    """
    Truncate text to maximum length with ellipsis.

    Args:
        text: Text to truncate.
        max_length: Maximum length including suffix.
        suffix: String to append when truncated.
        break_on_word: Try to cut at the last space of the kept prefix.
                       When False the prefix has a fixed size.

    Returns:
        Truncated text or original if within limit.
    """
    if not text or len(text) <= max_length:
        return text

    truncate_at = max_length - len(suffix)
    if truncate_at <= 0:
        return suffix[:max_length]

    truncated = text[:truncate_at]

    if break_on_word:
        last_space = truncated.rfind(" ")
        if last_space > truncate_at * 0.7:
            truncated = truncated[:last_space]

    return truncated + suffix


def unique_lines(lines: Iterable[str]) -> List[str]:
    """
    Drop repeated lines while keeping first-seen order.

    Args:
        lines: Lines to filter.

    Returns:
        Lines with duplicates removed.
    """
    seen = set()
    result = []

    for line in lines:
        if line in seen:
            continue
        seen.add(line)
        result.append(line)

    return result


if __name__ == "__main__":
    sample = "Facture N°12\nINVOICE total\nMontant dû"

    print("=== find_ignore_case ===")
    print(find_ignore_case(sample, "invoice"))
    print(find_ignore_case("İstanbul invoice", "invoice"))

    print("\n=== truncate_text ===")
    long_text = "Ceci est une phrase assez longue qui sera tronquée."
    print(f"Truncated (30): {truncate_text(long_text, 30)}")
    print(f"Fixed prefix (30): {truncate_text(long_text, 30, break_on_word=False)}")

    print("\n=== unique_lines ===")
    print(unique_lines(["a", "b", "a", "c"]))
