"""Configuration models for animatr."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from animatr.core.curves.library import NamedCurve, parse_curve_name


class ConfigBase(BaseModel):
    """Base class for file-backed configurations.

    Subclasses must implement default_path() to specify their default location.
    """

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type."""
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from path, or from default_path() when path is None.

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValidationError: If config is invalid
        """
        from animatr.core.config.loader import load_config

        if path is None:
            path = cls.default_path()
        raw = load_config(path)
        return cls.model_validate(raw)


class AnimatedValueConfig(BaseModel):
    """Options for a single eased value.

    `ease` is a curve name or four cubic-bezier control points
    (x1, y1, x2, y2). Custom callables can only be passed in code.

    Example:
        >>> AnimatedValueConfig(start=0, end=300, ease="ease_out").ease
        <NamedCurve.EASE_OUT: 'EASE_OUT'>
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: float = Field(default=0.0, description="Value before playback starts")
    end: float = Field(default=1.0, description="Value when playback completes")
    ease: NamedCurve | tuple[float, float, float, float] = Field(
        default=NamedCurve.LINEAR, description="Curve name or cubic-bezier control points"
    )

    @field_validator("ease", mode="before")
    @classmethod
    def _parse_curve_name(cls, v: Any) -> Any:
        if isinstance(v, str) and not isinstance(v, NamedCurve):
            return parse_curve_name(v)
        return v

    @field_validator("ease")
    @classmethod
    def _validate_control_points(
        cls, v: NamedCurve | tuple[float, float, float, float]
    ) -> NamedCurve | tuple[float, float, float, float]:
        if isinstance(v, tuple):
            x1, _, x2, _ = v
            if not (0.0 <= x1 <= 1.0 and 0.0 <= x2 <= 1.0):
                raise ValueError(f"bezier x values must be in [0, 1], got x1={x1}, x2={x2}")
        return v


class KineticValueConfig(BaseModel):
    """Options for a spring-driven value.

    Stiffness is truncated toward zero to an integer half-cycle count.
    A missing `end` defaults to `start`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: float = Field(default=0.0, description="Initial value")
    end: float | None = Field(default=None, description="Initial target (defaults to start)")
    stiffness: int = Field(default=3, ge=0, description="Half cycles before settling")
    damping: float = Field(default=0.8, ge=0.0, lt=1.0, description="Damping ratio zeta")
    duration: float = Field(
        default=1000.0, gt=0.0, description="Sampling window per retarget, in milliseconds"
    )

    @model_validator(mode="before")
    @classmethod
    def _default_end_to_start(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("end") is None:
            return {**data, "end": data.get("start", 0.0)}
        return data

    @field_validator("stiffness", mode="before")
    @classmethod
    def _truncate_stiffness(cls, v: Any) -> Any:
        if isinstance(v, float):
            if not math.isfinite(v):
                raise ValueError(f"stiffness must be finite, got {v}")
            return math.trunc(v)
        return v


class SchedulerConfig(BaseModel):
    """Frame loop configuration."""

    model_config = ConfigDict(extra="forbid")

    frame_interval_ms: float = Field(
        default=1000.0 / 60.0, gt=0.0, description="Delay between frames (~60 fps)"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON log lines")
    filename: str | None = Field(default=None, description="Log file (stdout when unset)")


class AppConfig(ConfigBase):
    """Application configuration: logging, frame loop, and named value presets."""

    logging: LoggingConfig = LoggingConfig()
    scheduler: SchedulerConfig = SchedulerConfig()
    animations: dict[str, AnimatedValueConfig] = Field(
        default_factory=dict, description="Named AnimatedValue presets"
    )
    kinetics: dict[str, KineticValueConfig] = Field(
        default_factory=dict, description="Named KineticValue presets"
    )

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("animatr.json")
