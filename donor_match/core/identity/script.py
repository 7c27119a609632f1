"""
Simplified / Traditional Chinese script conversion.

The matcher only talks to the ScriptConverter protocol, so the conversion
backend can be swapped or stubbed:

- OpenCCConverter: dictionary-based conversion via OpenCC (production)
- CharacterTableConverter: a fixed character table (tests, offline use)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Protocol

from opencc import OpenCC


class ScriptConverter(Protocol):
    """Protocol for Simplified <-> Traditional conversion."""

    def to_traditional(self, value: str) -> str:
        """Convert to Traditional script, leaving unknown characters alone."""
        ...

    def to_simplified(self, value: str) -> str:
        """Convert to Simplified script, leaving unknown characters alone."""
        ...


class OpenCCConverter:
    """
    Script converter backed by OpenCC.

    Defaults to the Hong Kong Traditional variant, which is what most of
    the donation sources publish in.

    Args:
        traditional_profile: OpenCC config for Simplified -> Traditional
        simplified_profile: OpenCC config for Traditional -> Simplified
    """

    def __init__(
        self, traditional_profile: str = "s2hk", simplified_profile: str = "hk2s"
    ) -> None:
        self.traditional_profile = traditional_profile
        self.simplified_profile = simplified_profile
        self._to_traditional = OpenCC(traditional_profile)
        self._to_simplified = OpenCC(simplified_profile)

    def to_traditional(self, value: str) -> str:
        if not value:
            return ""
        return self._to_traditional.convert(value)

    def to_simplified(self, value: str) -> str:
        if not value:
            return ""
        return self._to_simplified.convert(value)


class CharacterTableConverter:
    """
    Character-for-character converter driven by a fixed table.

    Usage:
        converter = CharacterTableConverter.from_pairs([("刘国", "劉國")])
        converter.to_traditional("刘")  # "劉"
    """

    def __init__(self, simplified_to_traditional: Mapping[str, str]) -> None:
        for simplified, traditional in simplified_to_traditional.items():
            if len(simplified) != 1 or len(traditional) != 1:
                raise ValueError(
                    f"Table entries must be single characters: {simplified!r} -> {traditional!r}"
                )
        self._forward = str.maketrans(dict(simplified_to_traditional))
        self._backward = str.maketrans(
            {trad: simp for simp, trad in simplified_to_traditional.items()}
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "CharacterTableConverter":
        """Build a table from (simplified, traditional) strings of equal length."""
        table: dict[str, str] = {}
        for simplified, traditional in pairs:
            if len(simplified) != len(traditional):
                raise ValueError(
                    f"Length mismatch between {simplified!r} and {traditional!r}"
                )
            for simp_char, trad_char in zip(simplified, traditional):
                if simp_char != trad_char:
                    table[simp_char] = trad_char
        return cls(table)

    def to_traditional(self, value: str) -> str:
        if not value:
            return ""
        return value.translate(self._forward)

    def to_simplified(self, value: str) -> str:
        if not value:
            return ""
        return value.translate(self._backward)
