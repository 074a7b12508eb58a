"""Rendering palettes and tuning constants for the isometric city renderer"""
from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(frozen=True)
class ColorHashConfig:
    """Primes and modulus for the positional color-variance hash"""
    prime_x: int = 73
    prime_y: int = 149
    modulus: int = 1000
    building_variance: int = 20


@dataclass(frozen=True)
class WindowConfig:
    """Procedural window layout and lit/unlit thresholds"""
    size: int = 2
    spacing: int = 8
    prime_x: int = 73
    prime_y: int = 149
    prime_floor: int = 37
    prime_window: int = 19
    modulus: int = 1000
    night_threshold: float = 0.3
    day_threshold: float = 0.8
    lit_color: Tuple[int, int, int, int] = (255, 220, 100, 204)
    unlit_color: Tuple[int, int, int, int] = (50, 50, 80, 153)

    def threshold_for(self, time_of_day: float) -> float:
        """Lit threshold for the given hour (most windows lit at night)"""
        if time_of_day < 6 or time_of_day > 18:
            return self.night_threshold
        return self.day_threshold


@dataclass(frozen=True)
class HeightConfig:
    """Tilt-dependent building foreshortening"""
    base_multiplier: float = 0.4
    tilt_multiplier: float = 0.3


@dataclass(frozen=True)
class LightingConfig:
    """Per-face brightness deltas (percent) for extruded buildings"""
    top_brightness: float = 30
    light_scale: float = 20
    right_min: float = -15
    right_max: float = 15
    left_bias: float = -10
    left_min: float = -25
    left_max: float = 5
    ambient_occlusion_alpha: float = 0.3


@dataclass(frozen=True)
class RenderConfig:
    """Bundle of tuning constants passed explicitly into the renderers"""
    color_hash: ColorHashConfig = field(default_factory=ColorHashConfig)
    windows: WindowConfig = field(default_factory=WindowConfig)
    height: HeightConfig = field(default_factory=HeightConfig)
    lighting: LightingConfig = field(default_factory=LightingConfig)


DEFAULT_RENDER_CONFIG = RenderConfig()


# Neutral color returned by every color utility on malformed input
FALLBACK_COLOR = '#e2e8f0'

CELL_COLORS: Dict[str, str] = {
    'residential': '#8b6f47',  # warm brown
    'commercial': '#5a7d9a',   # blue-gray
    'skyscraper': '#4a5d6d',   # steel
    'park': '#48bb78',
    'road': '#cbd5e0',
    'empty': '#e2e8f0',
}

# Ocean darkest, lake lightest
WATER_COLORS: Dict[str, str] = {
    'ocean': '#1e40af',
    'river': '#2563eb',
    'lake': '#3b82f6',
}

# Sky gradient stops (top, middle, bottom) per time-of-day palette
SKY_PALETTES: Dict[str, Tuple[str, str, str]] = {
    'night': ('#0a1628', '#1a2642', '#2d3e5f'),
    'day': ('#4a6fa5', '#87ceeb', '#b8d8f0'),
    'evening': ('#2d3e5f', '#ff6b35', '#ffb347'),
}

# rotation_x, rotation_y, zoom, offset_x, offset_y
CAMERA_PRESETS: Dict[str, Tuple[float, float, float, float, float]] = {
    'default': (30, 45, 1.0, 0, 0),
    'aerial': (60, 45, 1.2, 0, -50),
    'ground': (15, 45, 1.5, 0, 50),
    'side': (30, 90, 1.1, 0, 0),
}

VISUAL_STYLE = {
    'background_color': (255, 255, 255),
    'grid_line_color': (0, 0, 0, 26),
    'tile_outline_color': (0, 0, 0, 51),
    'building_outline_color': (0, 0, 0, 77),
    'moon_color': (240, 240, 240),
    'sun_color': (253, 184, 19),
    'rain_color': (200, 220, 255, 128),
    'moon_radius': 30,
    'sun_radius': 40,
    'rain_drops': 50,
}
