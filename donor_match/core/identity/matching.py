"""
Donor name matching.

Decides whether a scraped donor name refers to a donor already in the
ledger. Strategies are tried from cheapest and strictest to most permissive,
and the first one that succeeds produces the verdict:

1. Direct (normalized equality or containment)
2. Script conversion, folded to Traditional
3. Script conversion, folded to Simplified
4. Core names (one co-donor shared by both names)
5. Multi-person quorum (two or more co-donors shared)

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache
from typing import Optional

from .cores import extract_core_names
from .guard import is_too_generic
from .models import MatchReason, MatchVerdict
from .normalization import apply_aliases, normalize_name
from .script import OpenCCConverter, ScriptConverter


# Distinct co-donors that must be shared for a quorum match
QUORUM_SIZE = 2

EMPTY_VERDICT = MatchVerdict(matched=False, reason=MatchReason.EMPTY)
NO_MATCH_VERDICT = MatchVerdict(matched=False, reason=MatchReason.NO_MATCH)


def substring_match(name1: str, name2: str) -> bool:
    """
    Check whether two names match by normalized equality or containment.

    The shorter normalized name must not be generic, otherwise "中國" would
    be found inside every Chinese state enterprise.

    Examples:
        substring_match("東亞", "東亞銀行") → True
        substring_match("中國燃氣（0384）", "中國宏橋") → False

    Args:
        name1: First name (raw or normalized)
        name2: Second name (raw or normalized)

    Returns:
        True when the names match
    """
    token1 = normalize_name(name1)
    token2 = normalize_name(name2)

    if not token1 or not token2:
        return False

    if token1 == token2:
        return True

    if len(token1) <= len(token2):
        shorter, longer = token1, token2
    else:
        shorter, longer = token2, token1

    if is_too_generic(shorter):
        return False

    return shorter in longer


def match_cores(
    scraped_cores: list[str], existing_cores: list[str]
) -> Optional[MatchReason]:
    """
    Look for one core name shared by both sides.

    Exact pairs win over containment pairs regardless of their position.
    Neither side of a pair may be generic.

    Returns:
        CORE_EXACT, CORE_SUBSTRING or None
    """
    pairs = [
        (sc.lower(), ec.lower())
        for sc in scraped_cores
        for ec in existing_cores
        if not is_too_generic(sc) and not is_too_generic(ec)
    ]

    for sc, ec in pairs:
        if sc == ec:
            return MatchReason.CORE_EXACT

    for sc, ec in pairs:
        if sc in ec or ec in sc:
            return MatchReason.CORE_SUBSTRING

    return None


def _has_partner(core: str, others: Iterable[str]) -> bool:
    return any(core == other or core in other or other in core for other in others)


def match_quorum(scraped_set: set[str], existing_set: set[str]) -> bool:
    """
    Check whether two groups of co-donors share at least QUORUM_SIZE members.

    A member counts as shared when it equals, contains or is contained in a
    member of the other group. The count must reach the quorum from both
    sides, so one long name swallowing two short ones is not enough.

    Example:
        {"abc", "xyz", "alpha"} vs {"xyz", "abc"} → True
    """
    scraped_set = {core for core in scraped_set if core}
    existing_set = {core for core in existing_set if core}

    scraped_hits = sum(1 for core in scraped_set if _has_partner(core, existing_set))
    if scraped_hits < QUORUM_SIZE:
        return False

    existing_hits = sum(1 for core in existing_set if _has_partner(core, scraped_set))
    return existing_hits >= QUORUM_SIZE


def _is_blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


class EntityMatcher:
    """
    Runs the ordered matching strategies for donor names.

    Usage:
        matcher = EntityMatcher(OpenCCConverter())
        verdict = matcher.match("刘亦菲女士", "劉亦菲")
        if verdict.matched:
            print(f"Matched via {verdict.reason}")
    """

    def __init__(self, converter: ScriptConverter) -> None:
        """
        Initialize the matcher.

        Args:
            converter: Simplified/Traditional converter used by the script
                strategies and for core-name variants
        """
        self.converter = converter

    def match(self, scraped_name: str, existing_name: str) -> MatchVerdict:
        """
        Determine whether a scraped name denotes an existing donor.

        Args:
            scraped_name: Donor name from a scraped source
            existing_name: Display name of a ledger entry

        Returns:
            MatchVerdict with the reason of the first strategy that fired
        """
        if _is_blank(scraped_name) or _is_blank(existing_name):
            return EMPTY_VERDICT

        scraped = apply_aliases(scraped_name)
        existing = apply_aliases(existing_name)

        # Strategy 1: Direct
        if substring_match(scraped, existing):
            return MatchVerdict(matched=True, reason=MatchReason.DIRECT)

        scraped_token = normalize_name(scraped)
        existing_token = normalize_name(existing)

        # Strategy 2: Simplified -> Traditional
        if substring_match(
            self.converter.to_traditional(scraped_token),
            self.converter.to_traditional(existing_token),
        ):
            return MatchVerdict(matched=True, reason=MatchReason.SCRIPT_FORWARD)

        # Strategy 3: Traditional -> Simplified
        if substring_match(
            self.converter.to_simplified(scraped_token),
            self.converter.to_simplified(existing_token),
        ):
            return MatchVerdict(matched=True, reason=MatchReason.SCRIPT_BACKWARD)

        # Strategy 4: Core names
        scraped_cores = extract_core_names(scraped)
        existing_cores = extract_core_names(existing)
        reason = match_cores(
            self._with_traditional(scraped_cores),
            self._with_traditional(existing_cores),
        )
        if reason is not None:
            return MatchVerdict(matched=True, reason=reason)

        # Strategy 5: Multi-person quorum
        if len(scraped_cores) >= QUORUM_SIZE and len(existing_cores) >= QUORUM_SIZE:
            if match_quorum(
                self._core_tokens(scraped_cores), self._core_tokens(existing_cores)
            ):
                return MatchVerdict(matched=True, reason=MatchReason.MULTI_PERSON_QUORUM)

        return NO_MATCH_VERDICT

    def _with_traditional(self, cores: list[str]) -> list[str]:
        """Cores followed by their Traditional forms, without duplicates."""
        variants = list(cores)
        for core in cores:
            traditional = self.converter.to_traditional(core)
            if traditional and traditional not in variants:
                variants.append(traditional)
        return variants

    def _core_tokens(self, cores: list[str]) -> set[str]:
        return {normalize_name(self.converter.to_traditional(core)) for core in cores}


@lru_cache(maxsize=1)
def default_matcher() -> EntityMatcher:
    """Shared matcher using the default OpenCC profiles."""
    return EntityMatcher(OpenCCConverter())


def match_entities(
    scraped_name: str,
    existing_name: str,
    converter: Optional[ScriptConverter] = None,
) -> MatchVerdict:
    """
    Compare a scraped donor name with one existing name.

    Args:
        scraped_name: Donor name from a scraped source
        existing_name: Display name of a ledger entry
        converter: Script converter; OpenCC when omitted

    Returns:
        MatchVerdict
    """
    matcher = EntityMatcher(converter) if converter is not None else default_matcher()
    return matcher.match(scraped_name, existing_name)
