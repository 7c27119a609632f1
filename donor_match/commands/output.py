from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class CheckLine:
    label: str
    status: str
    detail: Optional[str] = None

    def render(self) -> str:
        if self.detail:
            return f"{self.label}: {self.status} ({self.detail})"
        return f"{self.label}: {self.status}"


def passed(label: str, detail: Optional[str] = None) -> str:
    return CheckLine(label, "PASS", detail).render()


def failed(label: str, detail: Optional[str] = None) -> str:
    return CheckLine(label, "FAIL", detail).render()


def matched(label: str, detail: Optional[str] = None) -> str:
    return CheckLine(label, "MATCH", detail).render()


def unmatched(label: str, detail: Optional[str] = None) -> str:
    return CheckLine(label, "NO MATCH", detail).render()
