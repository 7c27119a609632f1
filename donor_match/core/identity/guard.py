"""
Generic-name guard.

A name that is too short or too common ("中國", "李", "集團") must never be
the only evidence that two donors are the same: "中國燃氣" and "中國宏橋"
share a jurisdiction, not an identity.
"""

from __future__ import annotations

from .normalization import contains_cjk
from .tables import GENERIC_NAMES, MIN_LENGTH_CJK, MIN_LENGTH_LATIN


def min_length(value: str) -> int:
    """Minimum meaningful length: 2 for CJK names, 4 for everything else."""
    return MIN_LENGTH_CJK if contains_cjk(value) else MIN_LENGTH_LATIN


def is_too_generic(name: str) -> bool:
    """
    Check whether a name is too generic to match on its own.

    Examples:
        is_too_generic("中國") → True
        is_too_generic("東亞") → False
        is_too_generic("abc") → True (Latin names need 4 characters)
        is_too_generic("") → True
    """
    normalized = (name or "").strip().lower()
    if len(normalized) < min_length(normalized):
        return True
    return normalized in GENERIC_NAMES
