from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .core.identity.script import OpenCCConverter


class MatchingSettings(BaseModel):
    traditional_profile: str = "s2hk"
    simplified_profile: str = "hk2s"

    @field_validator("traditional_profile", "simplified_profile")
    @classmethod
    def _strip_json_suffix(cls, value: str) -> str:
        value = value.strip()
        if value.endswith(".json"):
            value = value[: -len(".json")]
        if not value:
            raise ValueError("OpenCC profile must not be empty")
        return value


class ReportingSettings(BaseModel):
    max_logged_matches: int = Field(default=15, ge=0)


class Settings(BaseModel):
    matching: MatchingSettings = MatchingSettings()
    reporting: ReportingSettings = ReportingSettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})

    def build_converter(self) -> OpenCCConverter:
        return OpenCCConverter(
            traditional_profile=self.matching.traditional_profile,
            simplified_profile=self.matching.simplified_profile,
        )


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        if not explicit_path.exists():
            raise FileNotFoundError(f"Config file not found: {explicit_path}")
        return explicit_path
    cwd = Path.cwd()
    for candidate in (cwd / "donor-match.yaml", cwd / "donor-match.yml"):
        if candidate.exists():
            return candidate
    return None


def load_settings(explicit_path: Optional[Path]) -> Settings:
    config_path = find_config(explicit_path)
    if config_path is None:
        return Settings()
    return Settings.load(config_path)
