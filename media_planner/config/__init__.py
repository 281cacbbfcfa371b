"""Configuration management for Media Planner."""

from .schema import (
    PlanConfig,
    GlobalConfig,
    ChannelConfig,
    CalculationMode,
    PacingMode,
)
from .loader import ConfigLoader

__all__ = [
    "PlanConfig",
    "GlobalConfig",
    "ChannelConfig",
    "CalculationMode",
    "PacingMode",
    "ConfigLoader",
]
