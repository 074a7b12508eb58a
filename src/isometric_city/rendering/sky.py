"""
Time-of-day sky and weather.

The sky gradient is piecewise by hour band:
- night   [0, 5)   fixed dark palette
- dawn    [5, 7)   night -> day
- day     [7, 17)  fixed bright palette
- dusk    [17, 19) day -> evening
- evening [19, 24) evening -> night over five hours

The sun or moon rides a semicircular arc keyed to the hour. Clouds and rain
use fixed per-index layouts that drift with the animation clock.
"""
import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Tuple

from PIL import Image

from isometric_city.config.render_config import SKY_PALETTES, VISUAL_STYLE
from isometric_city.rendering.color_math import hex_to_rgb, interpolate_color
from isometric_city.rendering.drawing import (
    draw_line,
    fill_circle,
    radial_gradient_ellipse,
    vertical_gradient,
)

logger = logging.getLogger(__name__)

CLOUD_SEED_STEP = 123.456
CLOUD_MARGIN = 200
CLOUD_SPEED = 20
RAIN_SEED_STEP = 234.567
RAIN_MARGIN = 100
RAIN_SPEED = 100
HORIZON_FRACTION = 0.8
ARC_RADIUS_FRACTION = 0.6
SUNRISE_HOUR = 6


class Weather(str, Enum):
    CLEAR = 'clear'
    CLOUDY = 'cloudy'
    RAINY = 'rainy'


@dataclass(frozen=True)
class SkyState:
    """Hour of day, weather and the animation clock"""
    time_of_day: float = 12.0
    weather: Weather = Weather.CLEAR
    animate: bool = True
    animation_clock: float = 0.0

    def advanced(self, step: float) -> 'SkyState':
        return replace(self, animation_clock=self.animation_clock + step)


@dataclass(frozen=True)
class SkyColors:
    top: str
    middle: str
    bottom: str

    def as_tuple(self) -> Tuple[str, str, str]:
        return self.top, self.middle, self.bottom


@dataclass(frozen=True)
class CelestialBody:
    x: float
    y: float
    is_moon: bool
    visible: bool


@dataclass(frozen=True)
class Cloud:
    x: float
    y: float
    size: float
    opacity: float

    def circles(self) -> List[Tuple[float, float, float]]:
        """(cx, cy, radius) of the four puffs making up the cloud"""
        s = self.size
        return [
            (self.x, self.y, s * 0.5),
            (self.x + s * 0.5, self.y, s * 0.6),
            (self.x + s, self.y, s * 0.5),
            (self.x + s * 0.5, self.y - s * 0.3, s * 0.5),
        ]


@dataclass(frozen=True)
class RainDrop:
    x: float
    y: float

    @property
    def end(self) -> Tuple[float, float]:
        return self.x - 2, self.y + 10


def _blend(start: str, end: str, progress: float) -> SkyColors:
    first, second = SKY_PALETTES[start], SKY_PALETTES[end]
    return SkyColors(*(interpolate_color(a, b, progress) for a, b in zip(first, second)))


def sky_colors(time_of_day: float) -> SkyColors:
    """Gradient stops for an hour of the day"""
    t = time_of_day % 24

    if t < 5:
        return SkyColors(*SKY_PALETTES['night'])
    if t < 7:
        return _blend('night', 'day', (t - 5) / 2)
    if t < 17:
        return SkyColors(*SKY_PALETTES['day'])
    if t < 19:
        return _blend('day', 'evening', (t - 17) / 2)
    return _blend('evening', 'night', (t - 19) / 5)


def is_night(time_of_day: float) -> bool:
    t = time_of_day % 24
    return t < 6 or t > 20


def celestial_body(time_of_day: float, width: int, height: int) -> CelestialBody:
    """Sun or moon position on its arc and whether it clears the horizon"""
    t = time_of_day % 24
    moon = is_night(t)

    # Sun rises at 6 and sets at 18, the moon rises at 18 and sets at 6
    rise = SUNRISE_HOUR + 12 if moon else SUNRISE_HOUR
    progress = ((t - rise) % 24) / 12
    angle = math.pi * progress
    radius = width * ARC_RADIUS_FRACTION

    x = width / 2 - math.cos(angle) * radius
    y = height - math.sin(angle) * radius

    return CelestialBody(x=x, y=y, is_moon=moon, visible=y < height * HORIZON_FRACTION)


def cloud_layout(sky: SkyState, width: int, height: int) -> List[Cloud]:
    """Clouds for cloudy or rainy weather, empty when clear"""
    weather = Weather(sky.weather)
    if weather == Weather.CLEAR:
        return []

    count = 8 if weather == Weather.RAINY else 5
    opacity = 0.8 if weather == Weather.RAINY else 0.6
    drift = sky.animation_clock * CLOUD_SPEED if sky.animate else 0

    clouds = []
    for i in range(count):
        seed = i * CLOUD_SEED_STEP
        x = ((seed * 50 + drift) % (width + CLOUD_MARGIN)) - CLOUD_MARGIN / 2
        y = (seed * 30) % (height * 0.4)
        size = 40 + (seed * 20) % 40
        clouds.append(Cloud(x=x, y=y, size=size, opacity=opacity))
    return clouds


def rain_layout(sky: SkyState, width: int, height: int) -> List[RainDrop]:
    """Rain drops for rainy weather, empty otherwise"""
    if Weather(sky.weather) != Weather.RAINY:
        return []

    fall = sky.animation_clock * RAIN_SPEED if sky.animate else 0
    drops = []
    for i in range(VISUAL_STYLE['rain_drops']):
        seed = i * RAIN_SEED_STEP
        x = (seed * 100) % width
        y = ((seed * 150 + fall) % (height + RAIN_MARGIN)) - RAIN_MARGIN / 2
        drops.append(RainDrop(x=x, y=y))
    return drops


class SkyRenderer:
    """Draws the sky backdrop onto an RGBA surface"""

    def draw(self, image: Image.Image, sky: SkyState):
        width, height = image.size
        colors = sky_colors(sky.time_of_day)
        backdrop = vertical_gradient(width, height, [
            (0.0, hex_to_rgb(colors.top)),
            (0.5, hex_to_rgb(colors.middle)),
            (1.0, hex_to_rgb(colors.bottom)),
        ])
        image.alpha_composite(backdrop)

        self.draw_celestial_body(image, celestial_body(sky.time_of_day, width, height))

        for cloud in cloud_layout(sky, width, height):
            self.draw_cloud(image, cloud)

        drops = rain_layout(sky, width, height)
        for drop in drops:
            draw_line(image, (drop.x, drop.y), drop.end, VISUAL_STYLE['rain_color'])

        logger.debug(f"Sky at {sky.time_of_day:.2f}h ({Weather(sky.weather).value}), {len(drops)} rain drops")

    def draw_celestial_body(self, image: Image.Image, body: CelestialBody):
        if not body.visible:
            return
        center = (body.x, body.y)

        if body.is_moon:
            radius = VISUAL_STYLE['moon_radius']
            r, g, b = VISUAL_STYLE['moon_color']
            fill_circle(image, center, radius, (r, g, b, 255))
            radial_gradient_ellipse(
                image, center, (radius * 2, radius * 2), radius, radius * 2,
                [(0.0, (r, g, b, 77)), (1.0, (r, g, b, 0))],
            )
            # Craters
            fill_circle(image, (body.x - 8, body.y - 5), 5, (200, 200, 200, 77))
            fill_circle(image, (body.x + 6, body.y + 3), 3, (200, 200, 200, 77))
        else:
            radius = VISUAL_STYLE['sun_radius']
            radial_gradient_ellipse(
                image, center, (radius * 2, radius * 2), radius * 0.5, radius * 2,
                [
                    (0.0, (255, 220, 100, 204)),
                    (0.5, (255, 200, 50, 102)),
                    (1.0, (255, 180, 0, 0)),
                ],
            )
            r, g, b = VISUAL_STYLE['sun_color']
            fill_circle(image, center, radius, (r, g, b, 255))

    def draw_cloud(self, image: Image.Image, cloud: Cloud):
        # Puffs share one layer so overlaps don't stack opacity
        layer = Image.new('RGBA', image.size, (0, 0, 0, 0))
        for cx, cy, radius in cloud.circles():
            fill_circle(layer, (cx, cy), radius, (255, 255, 255, 255))
        alpha = layer.getchannel('A').point(lambda value: int(value * cloud.opacity))
        layer.putalpha(alpha)
        image.alpha_composite(layer)
