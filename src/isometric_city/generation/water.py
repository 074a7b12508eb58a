"""
Water feature synthesis for generated cities.

Produces a per-cell water mask (None or a WaterType) for one of the map
shapes:
- square / circle: scattered circular lakes
- coastal: an ocean band along the left edge
- river: a single winding channel crossing the map left to right
"""
import logging
import math
from typing import List, Optional

import numpy as np

from isometric_city.generation.models import MapShape, WaterType

logger = logging.getLogger(__name__)

WaterMask = List[List[Optional[WaterType]]]

COASTAL_OCEAN_FRACTION = 0.2
LAKE_MIN_RADIUS = 2
LAKE_RADIUS_RANGE = 3
RIVER_BASE_HALF_WIDTH = 2
RIVER_WIND_INTERVAL = 3
RIVER_EDGE_MARGIN = 2


def lake_count(density: float) -> int:
    """Number of lakes drawn for a water density"""
    return int(math.floor(density * 3))


def ocean_band_width(grid_size: int) -> int:
    """Columns of ocean on the left edge of a coastal map"""
    return int(math.floor(grid_size * COASTAL_OCEAN_FRACTION))


def river_half_width(density: float) -> int:
    """Half-width (in rows) of the river channel"""
    return RIVER_BASE_HALF_WIDTH + int(math.floor(density * 3))


def empty_mask(grid_size: int) -> WaterMask:
    return [[None] * grid_size for _ in range(grid_size)]


def _add_lakes(mask: WaterMask, grid_size: int, density: float, rng: np.random.Generator):
    for _ in range(lake_count(density)):
        lake_x = int(math.floor(rng.random() * grid_size))
        lake_y = int(math.floor(rng.random() * grid_size))
        radius = int(math.floor(LAKE_MIN_RADIUS + rng.random() * LAKE_RADIUS_RANGE))

        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                if math.sqrt(dx * dx + dy * dy) >= radius:
                    continue
                x, y = lake_x + dx, lake_y + dy
                if 0 <= x < grid_size and 0 <= y < grid_size:
                    # Later lakes overwrite earlier ones
                    mask[y][x] = WaterType.LAKE


def _add_ocean(mask: WaterMask, grid_size: int):
    width = ocean_band_width(grid_size)
    for row in mask:
        for x in range(width):
            row[x] = WaterType.OCEAN


def _add_river(mask: WaterMask, grid_size: int, density: float, rng: np.random.Generator):
    river_y = grid_size // 2
    half_width = river_half_width(density)

    for x in range(grid_size):
        if x % RIVER_WIND_INTERVAL == 0:
            river_y += int(rng.integers(-1, 2))
            river_y = max(RIVER_EDGE_MARGIN, min(grid_size - 1 - RIVER_EDGE_MARGIN, river_y))

        for y in range(river_y - half_width, river_y + half_width + 1):
            if 0 <= y < grid_size:
                mask[y][x] = WaterType.RIVER


def synthesize_water_mask(
    grid_size: int,
    shape: MapShape,
    density: float,
    rng: Optional[np.random.Generator] = None,
) -> WaterMask:
    """
    Build the water mask for a map.

    Args:
        grid_size: Width and height of the grid in cells
        shape: Map shape controlling which feature is synthesized
        density: Water density (0.0-1.0); 0 yields no water at all
        rng: Uniform random source (fresh default_rng when omitted)

    Returns:
        grid_size x grid_size list of WaterType or None, indexed [y][x]
    """
    mask = empty_mask(grid_size)
    if density == 0:
        return mask

    if rng is None:
        rng = np.random.default_rng()

    shape = MapShape(shape)
    if shape in (MapShape.SQUARE, MapShape.CIRCLE):
        _add_lakes(mask, grid_size, density, rng)
    elif shape == MapShape.COASTAL:
        _add_ocean(mask, grid_size)
    elif shape == MapShape.RIVER:
        _add_river(mask, grid_size, density, rng)

    water_cells = sum(1 for row in mask for value in row if value is not None)
    logger.debug(f"Water mask for {shape.value} at density={density:.2f}: {water_cells} cells")
    return mask
