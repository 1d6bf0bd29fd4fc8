# settings.py
"""
User-adjustable galaxy settings.

The Settings object is owned by the Galaxy controller and read at the start
of every tick. Values come from the "galaxy" section of config.json and are
then changed by keyboard controls while the simulation runs.
"""
import logging
from typing import Dict, Any

from colors import COLOR_MODES

# --- Data Contracts ---
#
# class Settings:
#   - particle_count: int >= 0
#   - gravity: float
#   - speed: float, time-scale multiplier
#   - color_mode: str, normally one of COLOR_MODES
#
# Settings.from_config(params: Dict[str, Any]) -> Settings:
#   - Missing keys take their defaults. Values that cannot be converted are
#     logged as warnings and replaced by their defaults. Negative particle
#     counts become 0.

DEFAULT_PARTICLE_COUNT = 500
DEFAULT_GRAVITY = 0.5
DEFAULT_SPEED = 1.0
DEFAULT_COLOR_MODE = "rainbow"


class Settings:
    def __init__(self, particle_count: int = DEFAULT_PARTICLE_COUNT,
                 gravity: float = DEFAULT_GRAVITY,
                 speed: float = DEFAULT_SPEED,
                 color_mode: str = DEFAULT_COLOR_MODE):
        self.particle_count = max(int(particle_count), 0)
        self.gravity = float(gravity)
        self.speed = float(speed)
        self.color_mode = color_mode

    def as_dict(self) -> Dict[str, Any]:
        return {
            "particle_count": self.particle_count,
            "gravity": self.gravity,
            "speed": self.speed,
            "color_mode": self.color_mode,
        }

    @classmethod
    def from_config(cls, params: Dict[str, Any]) -> "Settings":
        def read(key, convert, default):
            value = params.get(key, default)
            try:
                return convert(value)
            except (TypeError, ValueError):
                logging.warning(
                    f"Invalid value {value!r} for setting '{key}'. Using default {default!r}."
                )
                return default

        color_mode = params.get("color_mode", DEFAULT_COLOR_MODE)
        if color_mode not in COLOR_MODES:
            logging.warning(
                f"Unknown color mode {color_mode!r} in config. "
                f"Expected one of {', '.join(COLOR_MODES)}. Using {DEFAULT_COLOR_MODE!r}."
            )
            color_mode = DEFAULT_COLOR_MODE

        settings = cls(
            particle_count=read("particle_count", int, DEFAULT_PARTICLE_COUNT),
            gravity=read("gravity", float, DEFAULT_GRAVITY),
            speed=read("speed", float, DEFAULT_SPEED),
            color_mode=color_mode,
        )
        logging.info(f"Galaxy settings: {settings.as_dict()}")
        return settings
