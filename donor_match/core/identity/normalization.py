"""
Donor name normalization.

Normalized names are only ever compared, never displayed. The process
removes everything that varies between sources without changing the donor:
stock codes, honorifics, corporate suffixes, headline wording, punctuation
and whitespace.
"""

from __future__ import annotations

from .tables import (
    CJK_PATTERN,
    NUMERIC_CODE_PATTERN,
    ORG_ALIASES,
    STRIP_PATTERN,
    WHITESPACE_PATTERN,
)


def contains_cjk(value: str) -> bool:
    """Whether the string contains at least one CJK ideograph."""
    return bool(value) and CJK_PATTERN.search(value) is not None


def strip_numeric_codes(value: str) -> str:
    """Remove bracketed numbers such as "(0384)" or "（0384）"."""
    return NUMERIC_CODE_PATTERN.sub("", value)


def strip_phrases(value: str) -> str:
    """Remove every stop phrase, case-insensitively, wherever it occurs."""
    return STRIP_PATTERN.sub("", value)


def normalize_name(name: str) -> str:
    """
    Normalize a donor name for comparison.

    Process:
    1. Trim and lowercase
    2. Remove bracketed stock codes
    3. Remove stop phrases (honorifics, suffixes, headline words, punctuation)
    4. Remove whitespace
    5. Repeat 2-4 until nothing changes

    Removing a phrase can join two fragments into a new stop phrase, so
    the loop is what makes the function idempotent.

    Examples:
        "中國燃氣（0384）" → "中國燃氣"
        "藝人古巨基先生" → "古巨基"
        "HashKey Group" → "haskey"

    Args:
        name: Raw scraped or ledger name

    Returns:
        Normalized name, possibly empty
    """
    if not name:
        return ""

    normalized = name.strip().lower()
    while True:
        previous = normalized
        normalized = strip_numeric_codes(normalized)
        normalized = strip_phrases(normalized)
        normalized = WHITESPACE_PATTERN.sub("", normalized)
        if normalized == previous:
            return normalized


def apply_aliases(name: str) -> str:
    """
    Rewrite known organization aliases to their canonical spelling.

    Example:
        "中國紅十字總會" → "中國紅十字會總會"
    """
    if not name:
        return ""
    for alias, canonical in ORG_ALIASES.items():
        if alias in name:
            name = name.replace(alias, canonical)
    return name


def ledger_key(name: str) -> str:
    """
    Key under which a ledger entry is stored.

    Lighter than normalize_name: the key must stay readable and unique per
    display name, so it only trims, collapses whitespace and lowercases.
    """
    if not name:
        return ""
    return WHITESPACE_PATTERN.sub(" ", name.strip()).lower()
