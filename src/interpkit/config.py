from __future__ import annotations

"""Configuration utilities for interpkit.

This module defines a hierarchical configuration schema using Pydantic models.
The :class:`Settings` container groups the defaults used by the interpolation
core, the sample generator, the degree optimizer and the denoiser.  Instances
can be populated from environment variables or from YAML/JSON files with
matching nested keys.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

try:  # pragma: no cover - optional dependency
    import yaml  # type: ignore
except Exception:  # pragma: no cover
    yaml = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _normalise_method(value: str) -> str:
    return value.strip().lower().replace(" ", "_").replace("-", "_")


class SectionModel(BaseModel):
    """Base model for configuration subsections that ignores unknown fields."""

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Settings schema
# ---------------------------------------------------------------------------


class InterpolationSettings(SectionModel):
    """Default interpolation method and output resolution."""

    method: str = "cubic_spline"
    points: int = Field(default=200, ge=2)

    @field_validator("method", mode="before")
    @classmethod
    def _coerce_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _normalise_method(value)
        return value


class SamplingSettings(SectionModel):
    """Defaults for function sampling."""

    chebyshev: bool = True
    x_min: float = -1.0
    x_max: float = 1.0
    n: int = Field(default=10, ge=2)


class OptimizerSettings(SectionModel):
    """Parameters controlling the minimum sample-count search."""

    target_error: float = Field(default=1e-3, gt=0)
    min_n: int = Field(default=2, ge=2)
    max_n: int = Field(default=50, ge=2)
    test_points: int = Field(default=1000, ge=2)


class DenoiseSettings(SectionModel):
    """Parameters of the smoothing / outlier repair pipeline."""

    threshold: float = Field(default=3.0, ge=0)
    window_size: int = Field(default=50, ge=1)
    passes: int = Field(default=3, ge=1)
    min_filter_size: int = Field(default=15, ge=1)
    neighborhood: int = Field(default=100, ge=0)
    min_clean_points: int = Field(default=3, ge=2)
    median_width: int = Field(default=5, ge=1)


class SyntheticSettings(SectionModel):
    """Defaults for generated test signals."""

    sample_rate: int = Field(default=44100, gt=0)
    seed: int = 0


class LoggingSettings(SectionModel):
    """Logging verbosity."""

    level: str = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def _coerce_level(cls, value: Any) -> Any:
        if isinstance(value, int):
            return logging.getLevelName(value)
        if isinstance(value, str):
            return value.strip().upper()
        return value


class Settings(BaseSettings):
    """Container for all runtime configuration sections."""

    interpolation: InterpolationSettings = Field(default_factory=InterpolationSettings)
    sampling: SamplingSettings = Field(default_factory=SamplingSettings)
    optimizer: OptimizerSettings = Field(default_factory=OptimizerSettings)
    denoise: DenoiseSettings = Field(default_factory=DenoiseSettings)
    synthetic: SyntheticSettings = Field(default_factory=SyntheticSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="INTERPKIT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``INTERPKIT_*`` environment variables only."""

        return cls()


# ---------------------------------------------------------------------------
# Loading utilities
# ---------------------------------------------------------------------------


def load_settings(path: str | Path) -> Settings:
    """Load settings from a JSON or YAML file."""

    p = Path(path)
    text = p.read_text()
    if p.suffix.lower() in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("PyYAML is required to load YAML files")
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise TypeError("Configuration file must define a mapping")
    return Settings.model_validate(data)
