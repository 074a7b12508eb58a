"""
Isometric projection and back-to-front ordering.

Grid (x, y) maps to screen space through the 2:1 diagonal projection
    iso_x = (x - y) * cell_size * cos(30)
    iso_y = (x + y) * cell_size * sin(30)
anchored at (width/2, height/3) plus the camera offset.
"""
import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple, TypeVar

from isometric_city.config.render_config import HeightConfig
from isometric_city.rendering.camera import CameraPose

COS_30 = math.cos(math.radians(30))
SIN_30 = math.sin(math.radians(30))
DEPTH_HEIGHT_WEIGHT = 0.1

T = TypeVar('T')


@dataclass(frozen=True)
class Projection:
    """Screen-space anchor (top vertex of the tile rhombus) and depth key"""
    draw_x: float
    draw_y: float
    depth_key: float


def base_cell_size(width: int, height: int, grid_size: int) -> float:
    return min(width, height) / grid_size


def cell_size_for(width: int, height: int, grid_size: int, camera: CameraPose) -> float:
    """Zoomed cell edge length in pixels"""
    return base_cell_size(width, height, grid_size) * camera.zoom


def tile_half_extents(cell_size: float) -> Tuple[float, float]:
    """(w, h): half-width and half-height of the tile rhombus"""
    return cell_size * COS_30, cell_size * SIN_30


def depth_key(x: int, y: int, height_units: float = 0) -> float:
    """Larger keys are farther back and drawn first"""
    return x + y + DEPTH_HEIGHT_WEIGHT * height_units


def project(
    x: int,
    y: int,
    height_units: float,
    camera: CameraPose,
    viewport: Tuple[int, int],
    grid_size: int,
) -> Projection:
    """
    Project a grid cell into screen space.

    Args:
        x, y: Grid coordinates
        height_units: Logical building height (0 for flat cells)
        camera: Current camera pose
        viewport: (width, height) of the drawing surface
        grid_size: Cells per side

    Returns:
        Projection with draw position and depth key
    """
    width, height = viewport
    cell_size = cell_size_for(width, height, grid_size, camera)

    iso_x = (x - y) * cell_size * COS_30
    iso_y = (x + y) * cell_size * SIN_30

    center_x = width / 2 + camera.offset_x
    center_y = height / 3 + camera.offset_y

    return Projection(center_x + iso_x, center_y + iso_y, depth_key(x, y, height_units))


def sort_back_to_front(items: Iterable[T], key=lambda item: item.depth_key) -> List[T]:
    """Stable sort by descending depth key; ties keep iteration order"""
    return sorted(items, key=key, reverse=True)


def height_multiplier(rotation_x: float, config: HeightConfig = HeightConfig()) -> float:
    """Tilt foreshortening, 0.4 looking flat on to 0.7 looking straight down"""
    return config.base_multiplier + (rotation_x / 90) * config.tilt_multiplier


def visual_height(
    cell_height: float,
    cell_size: float,
    rotation_x: float,
    config: HeightConfig = HeightConfig(),
) -> float:
    """Screen-space extrusion length of a building"""
    return cell_height * cell_size * height_multiplier(rotation_x, config)
