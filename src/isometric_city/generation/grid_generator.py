"""
Procedural city grid generation.

Combines map-shape bounds, the water mask, a road-pattern rule and
stochastic building placement into a CityGrid. Placement is intentionally
non-reproducible between runs; pass a seeded numpy Generator to pin it.
"""
import logging
import math
from typing import Dict, List, Optional

import numpy as np

from isometric_city.generation.models import (
    Cell,
    CellType,
    CityCharacteristics,
    CityGrid,
    MapShape,
    RoadPattern,
    WaterType,
)
from isometric_city.generation.water import (
    COASTAL_OCEAN_FRACTION,
    synthesize_water_mask,
)

logger = logging.getLogger(__name__)

CIRCLE_RADIUS_FRACTION = 0.9
COMMERCIAL_BAND = 0.2


def is_in_bounds(x: int, y: int, grid_size: int, shape: MapShape) -> bool:
    """Whether a cell lies on land for the given map shape"""
    shape = MapShape(shape)
    if shape == MapShape.CIRCLE:
        center = grid_size / 2
        dist = math.sqrt((x - center) ** 2 + (y - center) ** 2)
        return dist < (grid_size / 2) * CIRCLE_RADIUS_FRACTION
    if shape == MapShape.COASTAL:
        return x >= grid_size * COASTAL_OCEAN_FRACTION
    return True


def is_road(x: int, y: int, pattern: RoadPattern, grid_size: int) -> bool:
    """Road predicate for a road pattern; only radial depends on grid_size"""
    pattern = RoadPattern(pattern)
    if pattern == RoadPattern.WIDE:
        return x % 5 in (0, 1) or y % 5 in (0, 1)
    if pattern == RoadPattern.COMPLEX:
        return x % 3 == 0 or y % 3 == 0
    if pattern == RoadPattern.RADIAL:
        center = grid_size / 2
        dist = math.sqrt((x - center) ** 2 + (y - center) ** 2)
        return dist % 4 < 0.5 or x % 4 == 0 or y % 4 == 0
    # grid and mixed share the 4-block rule
    return x % 4 == 0 or y % 4 == 0


def _open_lot(characteristics: CityCharacteristics, rng: np.random.Generator) -> Cell:
    # Only reached when r1 > density, so density < 1 here for in-range input.
    # A ratio above 1 simply means every open lot becomes a park.
    park_chance = characteristics.park_ratio / (1 - characteristics.density)
    if rng.random() < park_chance:
        return Cell(CellType.PARK)
    return Cell(CellType.EMPTY)


def _building(characteristics: CityCharacteristics, rng: np.random.Generator) -> Cell:
    avg_height = characteristics.avg_height
    roll = rng.random()

    if roll < characteristics.skyscraper_ratio:
        cell_type = CellType.SKYSCRAPER
        height = math.floor(avg_height * 1.5 + rng.random() * avg_height)
    elif roll < characteristics.skyscraper_ratio + COMMERCIAL_BAND:
        cell_type = CellType.COMMERCIAL
        height = math.floor(avg_height * 0.8 + rng.random() * 2)
    else:
        cell_type = CellType.RESIDENTIAL
        height = math.floor(avg_height * 0.5 + rng.random() * 2)

    return Cell(cell_type, height=max(1, int(height)))


def classify_cell(
    x: int,
    y: int,
    characteristics: CityCharacteristics,
    grid_size: int,
    shape: MapShape,
    water: Optional[WaterType],
    rng: np.random.Generator,
) -> Cell:
    """Decide the type (and height) of a single cell"""
    if not is_in_bounds(x, y, grid_size, shape):
        return Cell(CellType.WATER, water_type=WaterType.OCEAN)
    if water is not None:
        return Cell(CellType.WATER, water_type=water)
    if is_road(x, y, characteristics.road_pattern, grid_size):
        return Cell(CellType.ROAD)
    if rng.random() > characteristics.density:
        return _open_lot(characteristics, rng)
    return _building(characteristics, rng)


def generate_city_grid(
    characteristics: CityCharacteristics,
    grid_size: int,
    shape: MapShape = MapShape.SQUARE,
    water_density: float = 0.15,
    rng: Optional[np.random.Generator] = None,
) -> CityGrid:
    """
    Generate a complete city grid.

    Args:
        characteristics: Density, heights, ratios and road pattern
        grid_size: Cells per side
        shape: Map shape (square, circle, coastal, river)
        water_density: Water feature density (0.0-1.0)
        rng: Uniform random source shared by water and placement sampling

    Returns:
        A new grid_size x grid_size CityGrid
    """
    if rng is None:
        rng = np.random.default_rng()
    shape = MapShape(shape)

    water_mask = synthesize_water_mask(grid_size, shape, water_density, rng)

    rows: List[List[Cell]] = []
    for y in range(grid_size):
        rows.append([
            classify_cell(x, y, characteristics, grid_size, shape, water_mask[y][x], rng)
            for x in range(grid_size)
        ])

    grid = CityGrid(rows)
    counts = {cell_type.value: count for cell_type, count in grid.counts().items()}
    logger.info(f"Generated {grid_size}x{grid_size} {shape.value} city '{characteristics.name}': {counts}")
    return grid


def summarize_city(characteristics: CityCharacteristics, grid: CityGrid) -> Dict[str, object]:
    """City info summary: name, density, style, height and cell counts"""
    counts = grid.counts()
    return {
        'name': characteristics.name,
        'density_percent': int(round(characteristics.density * 100)),
        'style': characteristics.style,
        'avg_height_floors': characteristics.avg_height,
        'grid_size': grid.size,
        'counts': {cell_type.value: counts.get(cell_type, 0) for cell_type in CellType},
        'buildings': sum(1 for _, _, cell in grid.cells() if cell.is_building),
    }
