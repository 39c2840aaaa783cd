"""Stage configuration loaded once per editor and validated up front."""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field, model_validator

from timeline_editor.models import MissingFieldPolicy

ENV_PREFIX = "TIMELINE_EDITOR_"


class TimeRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int = -100
    max: int = 2000

    @model_validator(mode="after")
    def _check_order(self) -> TimeRange:
        if self.max <= self.min:
            raise ValueError(f"range.max ({self.max}) must be greater than range.min ({self.min})")
        return self

    @property
    def span(self) -> int:
        return self.max - self.min


class StageConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    height: int = Field(default=200, gt=0)
    padding: int = Field(default=20, ge=0)
    layer_height: int = Field(default=30, gt=0)
    layer_gutter: int = Field(default=20, ge=0)
    range: TimeRange = Field(default_factory=TimeRange)
    default_length: int = Field(default=100, ge=0)
    missing_field_policy: MissingFieldPolicy = MissingFieldPolicy.UNDEFINED
    form_model: str = Field(default="local.timeline", min_length=1)

    @staticmethod
    def from_env() -> StageConfig:
        defaults = StageConfig()
        return StageConfig(
            height=_env_int("HEIGHT", defaults.height),
            padding=_env_int("PADDING", defaults.padding),
            layer_height=_env_int("LAYER_HEIGHT", defaults.layer_height),
            layer_gutter=_env_int("LAYER_GUTTER", defaults.layer_gutter),
            range=TimeRange(
                min=_env_int("RANGE_MIN", defaults.range.min),
                max=_env_int("RANGE_MAX", defaults.range.max),
            ),
            default_length=_env_int("DEFAULT_LENGTH", defaults.default_length),
            missing_field_policy=_env_policy("MISSING_FIELD_POLICY", defaults.missing_field_policy),
        )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(f"{ENV_PREFIX}{name}", "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_policy(name: str, default: MissingFieldPolicy) -> MissingFieldPolicy:
    raw = os.getenv(f"{ENV_PREFIX}{name}", "").strip().lower()
    if not raw:
        return default
    try:
        return MissingFieldPolicy(raw)
    except ValueError:
        return default
