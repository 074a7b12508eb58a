"""
Hex color utilities for city rendering.

Every function here fails closed: a malformed color string (anything other
than '#' followed by six hex digits) resolves to FALLBACK_COLOR and logs a
warning instead of raising.
"""
import logging
import math
import re
from typing import Tuple

from isometric_city.config.render_config import (
    ColorHashConfig,
    FALLBACK_COLOR,
)

logger = logging.getLogger(__name__)

HEX_COLOR_PATTERN = re.compile(r'^#[0-9A-Fa-f]{6}$')


def is_valid_hex(color) -> bool:
    """Check for a '#rrggbb' string"""
    return isinstance(color, str) and HEX_COLOR_PATTERN.match(color) is not None


def _checked(color, caller: str) -> str:
    if is_valid_hex(color):
        return color
    logger.warning(f"Invalid hex color in {caller}: {color!r}, using {FALLBACK_COLOR}")
    return FALLBACK_COLOR


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """
    Convert a '#rrggbb' string to an RGB tuple.

    Args:
        color: Hex color string

    Returns:
        Tuple of (R, G, B) values (0-255)
    """
    color = _checked(color, 'hex_to_rgb')
    num = int(color[1:], 16)
    return (num >> 16) & 0xFF, (num >> 8) & 0xFF, num & 0xFF


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Format channels as '#rrggbb', clamping each to 0-255"""
    channels = [max(0, min(255, int(c))) for c in (r, g, b)]
    return '#{:02x}{:02x}{:02x}'.format(*channels)


def rgba(color: str, alpha: float) -> Tuple[int, int, int, int]:
    """RGBA tuple for Pillow from a hex color and a 0.0-1.0 opacity"""
    r, g, b = hex_to_rgb(color)
    return r, g, b, int(round(max(0.0, min(1.0, alpha)) * 255))


def _percent_amount(percent: float) -> int:
    # half-up rounding, not banker's rounding
    return int(math.floor(2.55 * percent + 0.5))


def lighten_color(color: str, percent: float) -> str:
    """Add 2.55*percent to every channel, saturating at 255"""
    color = _checked(color, 'lighten_color')
    amount = _percent_amount(percent)
    r, g, b = hex_to_rgb(color)
    return rgb_to_hex(min(255, r + amount), min(255, g + amount), min(255, b + amount))


def darken_color(color: str, percent: float) -> str:
    """Subtract 2.55*percent from every channel, saturating at 0"""
    color = _checked(color, 'darken_color')
    amount = _percent_amount(percent)
    r, g, b = hex_to_rgb(color)
    return rgb_to_hex(max(0, r - amount), max(0, g - amount), max(0, b - amount))


def shade_color(color: str, delta: float) -> str:
    """Lighten for a positive delta, darken for a negative one"""
    if delta >= 0:
        return lighten_color(color, delta)
    return darken_color(color, -delta)


def interpolate_color(color1: str, color2: str, factor: float) -> str:
    """Linear per-channel RGB interpolation, factor 0.0 -> color1, 1.0 -> color2"""
    r1, g1, b1 = hex_to_rgb(color1)
    r2, g2, b2 = hex_to_rgb(color2)

    def mix(a: int, b: int) -> int:
        return int(math.floor(a + (b - a) * factor + 0.5))

    return rgb_to_hex(mix(r1, r2), mix(g1, g2), mix(b1, b2))


def sine_rand(seed: float, multiplier: float) -> float:
    """Fold a hash value through a sine transform into [0, 1]"""
    return math.sin(seed * multiplier) * 0.5 + 0.5


def positional_hash(color_seed: float, x: int, y: int, config: ColorHashConfig) -> float:
    """Deterministic per-cell hash used for building color variance"""
    return (color_seed + x * config.prime_x + y * config.prime_y) % config.modulus


def vary_color(
    color: str,
    variance: float,
    x: int,
    y: int,
    color_seed: float,
    config: ColorHashConfig = ColorHashConfig(),
) -> str:
    """
    Apply deterministic per-cell RGB jitter to a base color.

    Three independent sine transforms of the positional hash give channel
    offsets in +/- variance/2. The same (color_seed, x, y, variance) always
    produces the same color.

    Args:
        color: Base hex color
        variance: Total jitter range per channel
        x, y: Grid coordinates of the cell
        color_seed: Per-session seed
        config: Hash primes and modulus

    Returns:
        Varied hex color, channels clamped to 0-255
    """
    color = _checked(color, 'vary_color')
    hash_value = positional_hash(color_seed, x, y, config)
    offsets = [
        (sine_rand(hash_value, multiplier) - 0.5) * variance
        for multiplier in (0.1, 0.2, 0.3)
    ]
    channels = [
        math.floor(max(0, min(255, channel + offset)))
        for channel, offset in zip(hex_to_rgb(color), offsets)
    ]
    return rgb_to_hex(*channels)
