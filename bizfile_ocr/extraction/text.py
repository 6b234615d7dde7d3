"""Whitespace normalization for OCR text."""

import re

_MULTI_WHITESPACE = re.compile(r"\s\s+")


def normalize(text: str | None) -> str:
    """Collapse newlines and repeated whitespace into single spaces.

    Args:
        text: Raw text from the OCR result, possibly ``None``.

    Returns:
        Single-spaced, trimmed text, or an empty string for empty input.
    """
    if not text:
        return ""
    return _MULTI_WHITESPACE.sub(" ", text.replace("\n", " ")).strip()
