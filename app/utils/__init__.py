"""Utility functions."""
from app.utils.text import (
    count_words,
    extract_outline,
    truncate_text,
)

__all__ = [
    "count_words",
    "extract_outline",
    "truncate_text",
]
