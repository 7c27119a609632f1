"""
Ledger scanning - pure business logic for deduplicating scraped donations.

Responsibilities:
- Building the ordered ledger mapping from existing records
- Finding the first ledger entry a scraped name matches
- Partitioning a batch of scraped records into new and already-known donors

There are NO I/O dependencies: records and the ledger are passed in.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from .matching import EntityMatcher, default_matcher
from .models import (
    HasEntity,
    LedgerMatch,
    MatchedRecord,
    MatchReason,
    PartitionResult,
)
from .normalization import ledger_key

logger = logging.getLogger(__name__)


def build_ledger(records: Iterable[HasEntity]) -> dict[str, HasEntity]:
    """
    Build the ordered ledger mapping from existing records.

    Records without an entity are skipped. A later record with the same key
    replaces the earlier one but keeps its position.

    Args:
        records: Existing ledger records, in authoritative order

    Returns:
        Dict mapping ledger_key(entity) to record, in insertion order
    """
    ledger: dict[str, HasEntity] = {}
    for record in records:
        entity = getattr(record, "entity", None)
        if not entity or not entity.strip():
            continue
        ledger[ledger_key(entity)] = record
    return ledger


class LedgerScanner:
    """
    Matches scraped donor names against the ledger.

    The ledger is scanned in insertion order and the first match wins.
    When several entries could match, that order decides which one is
    reported.
    """

    def __init__(self, matcher: Optional[EntityMatcher] = None) -> None:
        """
        Initialize the scanner.

        Args:
            matcher: Entity matcher to use; the default OpenCC-backed
                matcher when omitted
        """
        self.matcher = matcher or default_matcher()

    def find_match(
        self, scraped_name: str, ledger: Mapping[str, HasEntity]
    ) -> LedgerMatch:
        """
        Find the first ledger entry matching a scraped name.

        Args:
            scraped_name: Donor name from a scraped source
            ledger: Ordered mapping of ledger key to record

        Returns:
            LedgerMatch naming the matched entity and the reason
        """
        for entry in ledger.values():
            existing_name = entry.entity
            verdict = self.matcher.match(scraped_name, existing_name)
            if verdict.matched:
                return LedgerMatch(
                    matched=True,
                    matched_entity=existing_name,
                    reason=verdict.reason,
                )

        return LedgerMatch(matched=False, matched_entity=None, reason=MatchReason.NO_MATCH)

    def partition(
        self, records: Iterable[Any], ledger: Mapping[str, HasEntity]
    ) -> PartitionResult:
        """
        Split a batch of scraped records into new and already-known donors.

        Args:
            records: Scraped records exposing an `entity` attribute
            ledger: Ordered mapping of ledger key to record

        Returns:
            PartitionResult with both lists and the per-source tally
        """
        result = PartitionResult()

        for record in records:
            result.tally.total_scraped += 1
            match = self.find_match(record.entity, ledger)

            if match.matched:
                result.matched.append(
                    MatchedRecord(
                        record=record,
                        matched_with=match.matched_entity,
                        match_reason=match.reason,
                    )
                )
                result.tally.matched_count += 1
            else:
                result.new.append(record)
                result.tally.new_count += 1

        logger.debug(
            f"Partitioned {result.tally.total_scraped} records: "
            f"{result.tally.new_count} new, {result.tally.matched_count} matched"
        )

        return result


def find_match(
    scraped_name: str,
    ledger: Mapping[str, HasEntity],
    matcher: Optional[EntityMatcher] = None,
) -> LedgerMatch:
    """Find the first ledger entry matching a scraped name."""
    return LedgerScanner(matcher).find_match(scraped_name, ledger)


def partition_records(
    records: Iterable[Any],
    ledger: Mapping[str, HasEntity],
    matcher: Optional[EntityMatcher] = None,
) -> PartitionResult:
    """Split scraped records into new and already-known donors."""
    return LedgerScanner(matcher).partition(records, ledger)
