from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..core.identity import EntityMatcher
from .output import failed, passed


@dataclass(frozen=True, slots=True)
class MatchCase:
    scraped: str
    existing: str
    expected: bool


@dataclass(slots=True)
class CheckReport:
    passed: int = 0
    failed: int = 0
    lines: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0


def _parse_case(index: int, raw: Any) -> MatchCase:
    if isinstance(raw, dict):
        try:
            return MatchCase(
                scraped=str(raw["scraped"]),
                existing=str(raw["existing"]),
                expected=bool(raw["expected"]),
            )
        except KeyError as exc:
            raise ValueError(f"Case {index}: missing key {exc}") from exc
    if isinstance(raw, (list, tuple)) and len(raw) == 3:
        scraped, existing, expected = raw
        return MatchCase(scraped=str(scraped), existing=str(existing), expected=bool(expected))
    raise ValueError(f"Case {index}: expected [scraped, existing, expected], got {raw!r}")


def load_cases(path: Path) -> list[MatchCase]:
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or []
    if isinstance(raw, dict):
        raw = raw.get("cases", [])
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a list of cases")
    return [_parse_case(index, item) for index, item in enumerate(raw, start=1)]


def run(
    matcher: EntityMatcher,
    cases: list[MatchCase],
    *,
    symmetric: bool = False,
) -> CheckReport:
    report = CheckReport()
    for case in cases:
        pairs = [(case.scraped, case.existing)]
        if symmetric:
            pairs.append((case.existing, case.scraped))
        for scraped, existing in pairs:
            verdict = matcher.match(scraped, existing)
            label = f'"{scraped}" vs "{existing}"'
            detail = f"expected {case.expected}, got {verdict.matched} ({verdict.reason})"
            if verdict.matched == case.expected:
                report.passed += 1
                report.lines.append(passed(label, detail))
            else:
                report.failed += 1
                report.lines.append(failed(label, detail))
    return report
