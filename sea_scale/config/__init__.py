"""Configuration and constants for the weighing engine."""

from .config import ScaleConfig, DEFAULT_CONFIG
from .constants import PhysicalConstants, ComputationalConstants, ValidationMessages
from .config_builder import ConfigBuilder

__all__ = [
    "ScaleConfig",
    "DEFAULT_CONFIG",
    "PhysicalConstants",
    "ComputationalConstants",
    "ValidationMessages",
    "ConfigBuilder",
]
