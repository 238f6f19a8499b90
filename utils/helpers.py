"""
Utility functions and helpers for the scan pipeline.

Text normalisation shared by the query generator, the response analyzer and
the orchestrator.
"""

import math
import uuid
from typing import Iterable, List, Optional


def generate_scan_id() -> str:
    """
    Generate a unique scan identifier.

    Returns:
        str: Unique scan ID in UUID4 format
    """
    return str(uuid.uuid4())


def sanitize_brand_name(brand_name: Optional[str]) -> str:
    """
    Normalise whitespace in a brand name.

    Casing is preserved because brand matching is case-insensitive and the
    original spelling is what gets shown back to the user.

    Args:
        brand_name: Raw brand name string or None

    Returns:
        str: Sanitized brand name, or empty string if None

    Example:
        >>> sanitize_brand_name("  Hello   Fresh ")
        'Hello Fresh'
        >>> sanitize_brand_name(None)
        ''
    """
    if not brand_name:
        return ""
    return " ".join(brand_name.strip().split())


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length with optional suffix.

    Args:
        text: Text to truncate
        max_length: Maximum length of the output (default: 100)
        suffix: Suffix to append when truncating (default: "...")

    Returns:
        str: Truncated text with suffix if needed

    Example:
        >>> truncate_text("This is a very long text", max_length=10)
        'This is...'
        >>> truncate_text("Short", max_length=10)
        'Short'
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix


def title_case(name: str) -> str:
    """Capitalise the first letter of every word, leaving the rest untouched."""
    return " ".join(word[:1].upper() + word[1:] for word in name.split(" "))


def dedupe_names(names: Iterable[str], exclude: Optional[str] = None) -> List[str]:
    """
    Remove duplicate names case-insensitively while preserving order.

    Args:
        names: Names to deduplicate (blank entries are dropped)
        exclude: Optional name that must never appear in the output
                 (the scanned brand itself)

    Returns:
        List of unique names in first-seen order
    """
    seen = set()
    if exclude:
        seen.add(exclude.strip().lower())

    unique = []
    for name in names:
        cleaned = sanitize_brand_name(name)
        key = cleaned.lower()
        if cleaned and key not in seen:
            seen.add(key)
            unique.append(cleaned)
    return unique


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round with halves going up (2.5 -> 3), unlike round() which rounds halves to even.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def percent(part: float, whole: float) -> int:
    """Integer percentage of part in whole, 0 when whole is 0."""
    if not whole:
        return 0
    return int(round_half_up(part / whole * 100))
