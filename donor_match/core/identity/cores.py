"""
Core-name extraction for combined multi-donor strings.

Sources often credit several donors in one line:
    "藝人張智霖先生 及 袁詠儀小姐一家"
    "方力申/香港游泳學校/一瀧游泳"
Each atomic name in such a line is a core name.
"""

from __future__ import annotations

from .normalization import strip_numeric_codes, strip_phrases
from .tables import MIN_CORE_LENGTH, SEPARATOR_PATTERN


def split_segments(name: str) -> list[str]:
    """Split a combined name on co-donor separators, dropping empty parts."""
    if not name:
        return []
    return [part for part in SEPARATOR_PATTERN.split(name) if part.strip()]


def clean_segment(segment: str) -> str:
    """Remove stock codes and stop phrases from one segment."""
    return strip_phrases(strip_numeric_codes(segment)).strip()


def extract_core_names(name: str) -> list[str]:
    """
    Extract the core names from a potentially multi-donor string.

    Segments keep their left-to-right order; segments shorter than two
    characters after cleaning are dropped.

    Examples:
        "藝人張智霖先生 及 袁詠儀小姐一家" → ["張智霖", "袁詠儀"]
        "方力申/香港游泳學校/一瀧游泳" → ["方力申", "游泳學校", "一瀧游泳"]
        "東亞銀行" → ["東亞"]

    Args:
        name: Raw donor name

    Returns:
        Ordered list of core names
    """
    cores = []
    for segment in split_segments(name):
        cleaned = clean_segment(segment)
        if len(cleaned) >= MIN_CORE_LENGTH:
            cores.append(cleaned)
    return cores
