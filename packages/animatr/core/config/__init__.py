"""Configuration management for animatr."""

from animatr.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from animatr.core.config.models import (
    AnimatedValueConfig,
    AppConfig,
    ConfigBase,
    KineticValueConfig,
    LoggingConfig,
    SchedulerConfig,
)

__all__ = [
    # Loaders
    "load_config",
    "load_app_config",
    "detect_format",
    "configure_logging",
    # Models
    "AppConfig",
    "ConfigBase",
    "AnimatedValueConfig",
    "KineticValueConfig",
    "LoggingConfig",
    "SchedulerConfig",
]
