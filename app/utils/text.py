"""Text utility functions."""
import re

_WORD_RE = re.compile(r"\w+")
_HEADING_MARKER = "# "


def count_words(text: str | None) -> int:
    """Count words in text.

    A word is a maximal run of word characters (letters, digits, underscore),
    so apostrophes and hyphens split words: "it's a test-case" has five.
    """
    if not text:
        return 0
    return len(_WORD_RE.findall(text))


def extract_outline(content: str | None) -> list[str]:
    """Extract chapter titles from top-level Markdown headings.

    Only lines that start with "# " once trimmed count as chapters; deeper
    headings ("## ...") are body text. The marker and surrounding whitespace
    are stripped and document order is kept.

    Example:
        "# Chapter 1: Intro\\nbody\\n# Chapter 2: Rise" ->
        ["Chapter 1: Intro", "Chapter 2: Rise"]
    """
    if not content:
        return []

    outline = []
    for line in content.splitlines():
        stripped = line.strip()
        if stripped.startswith(_HEADING_MARKER):
            outline.append(stripped[1:].strip())
    return outline


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """Truncate text to maximum length."""
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix
