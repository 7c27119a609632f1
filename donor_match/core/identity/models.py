"""
Domain models for donor matching.

These are pure data models with no dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Protocol


class HasEntity(Protocol):
    """Anything carrying a donor display name."""

    entity: str


class MatchReason(str, Enum):
    """Which heuristic produced a verdict."""

    DIRECT = "direct"
    SCRIPT_FORWARD = "script-converted-forward"
    SCRIPT_BACKWARD = "script-converted-backward"
    CORE_EXACT = "core-exact"
    CORE_SUBSTRING = "core-substring"
    MULTI_PERSON_QUORUM = "multi-person-quorum"
    NO_MATCH = "no-match"
    EMPTY = "empty"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class MatchVerdict:
    """
    Result of comparing a scraped name with one existing name.

    Example:
        MatchVerdict(matched=True, reason=MatchReason.DIRECT)
    """
    matched: bool
    reason: MatchReason


@dataclass(frozen=True, slots=True)
class LedgerMatch:
    """Result of scanning the whole ledger for one scraped name."""
    matched: bool
    matched_entity: Optional[str]
    reason: MatchReason


@dataclass
class DonationRecord:
    """
    A donation pledge as produced by a source or held in the ledger.

    Only `entity` takes part in matching; the other fields travel with the
    record to whoever writes it out.
    """
    entity: str
    group: str = ""
    total_value: Optional[float] = None
    cash_value: Optional[float] = None
    goods_value: Optional[float] = None
    capital: str = ""
    industry: str = ""
    type: str = ""
    note: str = ""
    receiver: str = ""
    primary_source: str = ""
    secondary_source: str = ""
    verification_link: str = ""
    date_of_announcement: str = ""


@dataclass(frozen=True, slots=True)
class MatchedRecord:
    """A scraped record that already exists in the ledger."""
    record: Any
    matched_with: str
    match_reason: MatchReason

    @property
    def entity(self) -> str:
        return self.record.entity


@dataclass
class SourceTally:
    """Per-source counters."""
    total_scraped: int = 0
    new_count: int = 0
    matched_count: int = 0


@dataclass
class PartitionResult:
    """Scraped records split into new and already-known donors."""
    new: list[Any] = field(default_factory=list)
    """Records with no counterpart in the ledger"""

    matched: list[MatchedRecord] = field(default_factory=list)
    """Records that matched a ledger entry"""

    tally: SourceTally = field(default_factory=SourceTally)
