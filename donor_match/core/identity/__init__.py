"""
Donor identity matching domain logic.

This module handles:
- Simplified/Traditional script conversion (injectable)
- Name normalization and core-name extraction
- Generic-name guarding
- Ordered matching strategies (direct, script, core, quorum)
- Ledger scanning and batch partitioning

All logic is pure business logic with no I/O dependencies.
"""

from __future__ import annotations

from .cores import extract_core_names
from .guard import is_too_generic
from .matching import EntityMatcher, match_entities, substring_match
from .models import (
    DonationRecord,
    HasEntity,
    LedgerMatch,
    MatchedRecord,
    MatchReason,
    MatchVerdict,
    PartitionResult,
    SourceTally,
)
from .normalization import apply_aliases, ledger_key, normalize_name
from .scanner import LedgerScanner, build_ledger, find_match, partition_records
from .script import CharacterTableConverter, OpenCCConverter, ScriptConverter

__all__ = [
    "CharacterTableConverter",
    "DonationRecord",
    "EntityMatcher",
    "HasEntity",
    "LedgerMatch",
    "LedgerScanner",
    "MatchReason",
    "MatchVerdict",
    "MatchedRecord",
    "OpenCCConverter",
    "PartitionResult",
    "ScriptConverter",
    "SourceTally",
    "apply_aliases",
    "build_ledger",
    "extract_core_names",
    "find_match",
    "is_too_generic",
    "ledger_key",
    "match_entities",
    "normalize_name",
    "partition_records",
    "substring_match",
]
