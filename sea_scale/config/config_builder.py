# sea_scale/config/config_builder.py
"""Build configuration objects from CLI arguments.

Separates configuration construction from argument parsing (SRP).
"""
from __future__ import annotations

import argparse
import logging

from .config import ScaleConfig

logger = logging.getLogger(__name__)

# CLI destination name -> ScaleConfig field
_CLI_OPTIONS = {
    "az_rms": "t_az_rms",
    "roll_rms": "t_roll_rms",
    "pitch_rms": "t_pitch_rms",
    "az_instant": "t_az_instant",
    "roll_instant": "t_roll_instant",
    "pitch_instant": "t_pitch_instant",
    "alpha": "gravity_filter_alpha",
    "scale_rate": "scale_sample_rate",
    "window": "live_window_duration",
    "uncertainty_k": "uncertainty_k",
}


class ConfigBuilder:
    """Builds configuration objects from parsed CLI arguments.

    Responsibilities:
        - Map CLI arguments to the configuration dataclass
        - Leave defaults untouched for options not given on the command line
        - Report advisory validation warnings
    """

    @staticmethod
    def build_scale_config(args: argparse.Namespace, base: ScaleConfig | None = None) -> ScaleConfig:
        """Build a ScaleConfig from CLI arguments, overriding only what was given."""
        overrides = {}
        for dest, field_name in _CLI_OPTIONS.items():
            value = getattr(args, dest, None)
            if value is not None:
                overrides[field_name] = float(value)
        config = (base or ScaleConfig()).updated(**overrides)
        for warning in config.validate():
            logger.warning("Config: %s", warning)
        return config
