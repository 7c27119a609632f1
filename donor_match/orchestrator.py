from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional, Protocol, Union

from .config import Settings
from .core.identity import (
    EntityMatcher,
    HasEntity,
    LedgerScanner,
    MatchedRecord,
    PartitionResult,
)

logger = logging.getLogger(__name__)

STATUS_SUCCESS = "Success"
STATUS_ERROR = "Error"

Ledger = Mapping[str, HasEntity]
LedgerSource = Union[Ledger, Callable[[], Ledger]]


class DonationSource(Protocol):
    """A scraper for one donation source."""

    name: str
    source_url: str

    def scrape(self) -> Iterable[HasEntity]:
        """Return the donation records currently published by the source."""
        ...


class ResultWriter(Protocol):
    """Receives the outcome of a run, once, after every source has run."""

    def write(self, new_records: list[Any], source_logs: list["SourceLog"]) -> None:
        ...


@dataclass(slots=True)
class SourceLog:
    source_name: str
    source_url: str
    total_scraped: int = 0
    new_count: int = 0
    matched_count: int = 0
    status: str = STATUS_SUCCESS
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_SUCCESS


@dataclass
class RunReport:
    ledger_size: int = 0
    source_logs: list[SourceLog] = field(default_factory=list)
    new_records: list[Any] = field(default_factory=list)
    matched_records: list[MatchedRecord] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(log.ok for log in self.source_logs)

    @property
    def total_new(self) -> int:
        return sum(log.new_count for log in self.source_logs if log.ok)

    @property
    def total_matched(self) -> int:
        return sum(log.matched_count for log in self.source_logs if log.ok)

    @property
    def success_count(self) -> int:
        return sum(1 for log in self.source_logs if log.ok)

    @property
    def fail_count(self) -> int:
        return sum(1 for log in self.source_logs if not log.ok)


def _read_ledger(ledger: LedgerSource) -> Mapping[str, HasEntity]:
    snapshot = ledger() if callable(ledger) else ledger
    # One read-only view for the whole run
    return MappingProxyType(dict(snapshot))


def _valid_records(source_name: str, records: Iterable[HasEntity]) -> list[HasEntity]:
    valid = []
    for record in records:
        entity = getattr(record, "entity", None)
        if not entity or not str(entity).strip():
            logger.warning("%s: skipping record without entity: %r", source_name, record)
            continue
        valid.append(record)
    return valid


class ScrapeRunner:
    """
    Runs every donation source against one ledger snapshot.

    Sources run one at a time in the given order. The ledger is read once
    before the first source and is not re-read, so every decision in a run
    sees the same ledger. A source that raises is logged and recorded with
    zero counts; the remaining sources still run.
    """

    def __init__(
        self,
        sources: Sequence[DonationSource],
        *,
        scanner: Optional[LedgerScanner] = None,
        writer: Optional[ResultWriter] = None,
        max_logged_matches: int = 15,
    ) -> None:
        self.sources = list(sources)
        self.scanner = scanner or LedgerScanner()
        self.writer = writer
        self.max_logged_matches = max_logged_matches

    @classmethod
    def from_settings(
        cls,
        sources: Sequence[DonationSource],
        settings: Settings,
        *,
        writer: Optional[ResultWriter] = None,
    ) -> "ScrapeRunner":
        scanner = LedgerScanner(EntityMatcher(settings.build_converter()))
        return cls(
            sources,
            scanner=scanner,
            writer=writer,
            max_logged_matches=settings.reporting.max_logged_matches,
        )

    def run(self, ledger: LedgerSource) -> RunReport:
        logger.info("Running %d donation source(s)", len(self.sources))
        snapshot = _read_ledger(ledger)
        logger.info("Ledger snapshot: %d existing entries", len(snapshot))

        report = RunReport(ledger_size=len(snapshot))
        for source in self.sources:
            report.source_logs.append(self._run_source(source, snapshot, report))

        if self.writer is not None:
            self.writer.write(report.new_records, report.source_logs)

        self._log_summary(report)
        return report

    def _run_source(
        self, source: DonationSource, ledger: Mapping[str, HasEntity], report: RunReport
    ) -> SourceLog:
        name = getattr(source, "name", type(source).__name__)
        url = getattr(source, "source_url", "")
        logger.info("Running source: %s", name)

        try:
            records = _valid_records(name, source.scrape())
        except Exception as exc:
            logger.error("%s failed: %s", name, exc, exc_info=True)
            return SourceLog(
                source_name=name,
                source_url=url,
                status=STATUS_ERROR,
                error=str(exc) or type(exc).__name__,
            )

        result = self.scanner.partition(records, ledger)
        self._log_partition(name, result)

        report.new_records.extend(result.new)
        report.matched_records.extend(result.matched)
        return SourceLog(
            source_name=name,
            source_url=url,
            total_scraped=result.tally.total_scraped,
            new_count=result.tally.new_count,
            matched_count=result.tally.matched_count,
        )

    def _log_partition(self, name: str, result: PartitionResult) -> None:
        tally = result.tally
        logger.info(
            "%s: %d total, %d NEW, %d already exist",
            name,
            tally.total_scraped,
            tally.new_count,
            tally.matched_count,
        )
        if not result.matched or self.max_logged_matches == 0:
            return
        shown = result.matched[: self.max_logged_matches]
        if len(shown) < len(result.matched):
            logger.info(
                "%s: matched entries (showing first %d of %d)",
                name,
                len(shown),
                len(result.matched),
            )
        for matched in shown:
            logger.info(
                '  "%s" → "%s" (%s)', matched.entity, matched.matched_with, matched.match_reason
            )

    def _log_summary(self, report: RunReport) -> None:
        for log in report.source_logs:
            if log.ok:
                logger.info(
                    "✓ %s: %d new, %d matched", log.source_name, log.new_count, log.matched_count
                )
            else:
                logger.warning("✗ %s: failed (%s)", log.source_name, log.error)
        logger.info(
            "Total: %d new entries, %d already exist", report.total_new, report.total_matched
        )
        logger.info(
            "Sources: %d succeeded, %d failed", report.success_count, report.fail_count
        )


def run_sources(
    sources: Sequence[DonationSource],
    ledger: LedgerSource,
    *,
    scanner: Optional[LedgerScanner] = None,
    writer: Optional[ResultWriter] = None,
    max_logged_matches: int = 15,
) -> RunReport:
    """Run all sources sequentially against one ledger snapshot."""
    runner = ScrapeRunner(
        sources, scanner=scanner, writer=writer, max_logged_matches=max_logged_matches
    )
    return runner.run(ledger)
