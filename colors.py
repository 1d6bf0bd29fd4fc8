# colors.py
"""
Palette mapping for particle colors.

A particle carries a hue and a brightness; the active color mode decides
how those become a hue/saturation/lightness/alpha color. The mapping is a
pure function so the renderer can call it as often as it likes.
"""
from typing import NamedTuple

# --- Data Contracts ---
#
# get_color(color_mode: str, hue: float, brightness: float, alpha: float = 1.0) -> HSLA:
#   - Inputs:
#     - color_mode: one of COLOR_MODES. Unknown names map like "default".
#     - hue: degrees, not necessarily within [0, 360).
#     - brightness: lightness percentage used by every mode except "neon".
#     - alpha: opacity in [0, 1].
#   - Outputs: HSLA with saturation and lightness in percent.
#   - Invariants: No side effects. Identical inputs give identical outputs.

COLOR_MODES = ("rainbow", "galaxy", "fire", "ocean", "neon", "default")


class HSLA(NamedTuple):
    hue: float
    saturation: float
    lightness: float
    alpha: float


class RGBA(NamedTuple):
    """An sRGB color with 0-255 channels and an alpha in [0, 1]."""
    r: int
    g: int
    b: int
    alpha: float


def get_color(color_mode: str, hue: float, brightness: float, alpha: float = 1.0) -> HSLA:
    """Maps a particle hue and brightness to a color for the given mode."""
    if color_mode == "galaxy":
        return HSLA(240 + hue * 0.3, 80.0, brightness, alpha)
    if color_mode == "fire":
        return HSLA(hue * 0.2, 100.0, brightness, alpha)
    if color_mode == "ocean":
        return HSLA(180 + hue * 0.5, 70.0, brightness, alpha)
    if color_mode == "neon":
        return HSLA(hue, 100.0, 80.0, alpha)
    # "rainbow", "default" and anything unrecognized
    return HSLA(hue, 100.0, brightness, alpha)


def next_color_mode(color_mode: str) -> str:
    """Returns the mode after `color_mode`, cycling back to the first."""
    try:
        index = COLOR_MODES.index(color_mode)
    except ValueError:
        return COLOR_MODES[0]
    return COLOR_MODES[(index + 1) % len(COLOR_MODES)]
