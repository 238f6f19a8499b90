"""
Exact brand name matching.

Word-boundary matching that refuses partial-word hits, so a short brand like
"Cal.com" never matches inside "Calendar" or "Calendly". Used as the ground
truth for brand presence when checking LLM answers.
"""

import re
from functools import lru_cache
from typing import Iterable, List, Optional, Pattern, Tuple

DOMAIN_PATTERN = re.compile(
    r"^(.+)\.(com|ai|io|co|org|net|app|dev|xyz|me|so|to|gg)$", re.IGNORECASE
)
SEPARATOR_PATTERN = re.compile(r"[\s\-_.]")
MIN_NORMALIZED_LENGTH = 4


def _camel_parts(name: str) -> List[str]:
    """Split "PayFast" into ["Pay", "Fast"]."""
    return [part for part in re.split(r"(?=[A-Z])", name) if part]


@lru_cache(maxsize=512)
def _build_patterns(name: str) -> Tuple[Pattern, ...]:
    """
    Compile the ordered match patterns for a brand name.

    Domain names match the full domain or the bare base name guarded by
    letter lookarounds. Other names match as whole words, plus camel-case
    variants joined by a space or a hyphen.
    """
    domain_match = DOMAIN_PATTERN.match(name)
    if domain_match:
        base = re.escape(domain_match.group(1))
        return (
            re.compile(rf"\b{re.escape(name)}\b", re.IGNORECASE),
            re.compile(rf"(?<![a-zA-Z]){base}(?![a-zA-Z])", re.IGNORECASE),
        )

    patterns = [re.compile(rf"\b{re.escape(name)}\b", re.IGNORECASE)]
    parts = _camel_parts(name)
    if len(parts) > 1:
        for joiner in (" ", "-"):
            variant = joiner.join(parts)
            patterns.append(re.compile(rf"\b{re.escape(variant)}\b", re.IGNORECASE))
    return tuple(patterns)


@lru_cache(maxsize=512)
def _separator_free_pattern(normalized: str) -> Pattern:
    """Pattern for a separator-free name allowing one separator between any two characters."""
    body = "[\\s\\-_.]?".join(re.escape(char) for char in normalized)
    return re.compile(rf"(?<![a-z0-9]){body}(?![a-z0-9])", re.IGNORECASE)


def _normalized_pattern(name: str) -> Optional[Pattern]:
    """
    The name with its separators made optional ("Hello Fresh" finds
    "HelloFresh" and "hello-fresh").

    Only applies to names of 4+ characters. The hit must not touch another
    letter or digit.
    """
    if DOMAIN_PATTERN.match(name) or len(name) < MIN_NORMALIZED_LENGTH:
        return None

    normalized = SEPARATOR_PATTERN.sub("", name.lower())
    if not normalized:
        return None
    return _separator_free_pattern(normalized)


def _normalized_position(text: str, name: str) -> Optional[int]:
    pattern = _normalized_pattern(name)
    match = pattern.search(text) if pattern else None
    return match.start() if match else None


def find_position(text: str, name: str) -> Optional[int]:
    """
    Find the character offset of the first exact match of `name` in `text`.

    Args:
        text: Text to search (an LLM answer)
        name: Brand or competitor name

    Returns:
        Offset of the earliest match, or None when the name is absent
    """
    if not text or not name or not name.strip():
        return None

    name = name.strip()
    positions = []
    for pattern in _build_patterns(name):
        match = pattern.search(text)
        if match:
            positions.append(match.start())

    normalized = _normalized_position(text, name)
    if normalized is not None:
        positions.append(normalized)

    return min(positions) if positions else None


def is_match(text: str, name: str) -> bool:
    """Return True when `name` appears in `text` as a standalone word or phrase."""
    return find_position(text, name) is not None


def count_matches(text: str, name: str) -> int:
    """
    Count non-overlapping mentions of `name` in `text`, using the same
    variants as `is_match`.

    Overlapping hits from different variants are counted once.
    """
    if not text or not name or not name.strip():
        return 0

    name = name.strip()
    patterns = list(_build_patterns(name))
    normalized = _normalized_pattern(name)
    if normalized is not None:
        patterns.append(normalized)

    spans = sorted(match.span() for pattern in patterns for match in pattern.finditer(text))
    count, end = 0, -1
    for span_start, span_end in spans:
        if span_start >= end:
            count += 1
            end = span_end
    return count


def find_competitors(text: str, competitors: Iterable[str]) -> List[str]:
    """Return the competitors that appear in `text`, in input order."""
    return [name for name in competitors if is_match(text, name)]


def get_brand_variations(name: str) -> List[str]:
    """
    List the spellings a brand name can take.

    Example:
        >>> get_brand_variations("PayFast")[:3]
        ['PayFast', 'payfast', 'PAYFAST']
    """
    name = name.strip()
    if not name:
        return []

    variations = [name, name.lower(), name.upper()]

    domain_match = DOMAIN_PATTERN.match(name)
    if domain_match:
        base = domain_match.group(1)
        variations += [base, base.lower(), base.upper()]

    parts = _camel_parts(name)
    if len(parts) > 1:
        variations += [" ".join(parts), "-".join(parts), "_".join(parts), "".join(parts).lower()]

    words = [word for word in re.split(r"[\s\-_]+", name) if word]
    if len(words) > 1:
        variations += ["".join(words), " ".join(words), "-".join(words)]

    unique = []
    for variation in variations:
        if variation not in unique:
            unique.append(variation)
    return unique


def is_same_brand(first: str, second: str) -> bool:
    """True when two names refer to the same brand ("Cal.com" and "cal", "PayFast" and "Pay Fast")."""
    if not first or not second:
        return False

    def normalize(name: str) -> str:
        name = re.sub(r"\.(com|ai|io|co|org|net|app|dev|xyz|me|so|to|gg)$", "", name.lower())
        return re.sub(r"[\s\-_.']+", "", name)

    return normalize(first) == normalize(second)
