"""
Single-cell renderer for flat and isometric city views.

Draws one classified cell at a projected position:
- flat tiles (rectangle in 2D, rhombus in isometric) for roads, parks, empty lots
- water with a directional shimmer and an optional animated ripple
- extruded buildings with three shaded faces, ambient occlusion and
  procedural windows
"""
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from PIL import Image

from isometric_city.config.render_config import (
    CELL_COLORS,
    DEFAULT_RENDER_CONFIG,
    FALLBACK_COLOR,
    RenderConfig,
    VISUAL_STYLE,
    WATER_COLORS,
)
from isometric_city.generation.models import Cell, CellType, WaterType
from isometric_city.rendering.color_math import (
    lighten_color,
    rgba,
    shade_color,
    sine_rand,
    vary_color,
)
from isometric_city.rendering.drawing import (
    fill_polygon,
    fill_rect,
    linear_gradient_polygon,
    radial_gradient_ellipse,
    radial_gradient_polygon,
)
from isometric_city.rendering.projection import tile_half_extents

Point = Tuple[float, float]

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def _tint(color: Tuple[int, int, int], alpha: float) -> Tuple[int, int, int, int]:
    return color[0], color[1], color[2], int(round(alpha * 255))


@dataclass(frozen=True)
class FaceShading:
    """Brightness deltas (percent) for the three visible building faces"""
    top: float
    right: float
    left: float


@dataclass(frozen=True)
class WindowSlot:
    floor: int
    index: int
    x: float
    y: float
    lit: bool


def ripple_alpha(animation_clock: float, x: int, y: int) -> float:
    """Per-cell water ripple opacity, oscillating in [-0.1, 0.1]"""
    phase = (animation_clock + x * 0.1 + y * 0.1) % 1
    return 0.1 * math.sin(phase * math.pi * 2)


def rhombus(x: float, y: float, size: float, lift: float = 0.0) -> List[Point]:
    """Tile rhombus with its top vertex at (x, y - lift)"""
    w, h = tile_half_extents(size)
    return [
        (x, y - lift),
        (x + w, y + h - lift),
        (x, y + h * 2 - lift),
        (x - w, y + h - lift),
    ]


class CellRenderer:
    """Renders individual cells using explicit tuning constants"""

    def __init__(self, config: RenderConfig = DEFAULT_RENDER_CONFIG):
        self.config = config

    # ------------------------------------------------------------------
    # Colors and shading
    # ------------------------------------------------------------------

    def base_color(self, cell: Cell) -> str:
        """Type base color; water is keyed by its subtype"""
        if cell.type == CellType.WATER:
            water_type = cell.water_type or WaterType.LAKE
            return WATER_COLORS[water_type.value]
        return CELL_COLORS.get(cell.type.value, FALLBACK_COLOR)

    def cell_color(self, cell: Cell, x: int, y: int, color_seed: float) -> str:
        """Base color with deterministic per-cell variance for buildings"""
        color = self.base_color(cell)
        if not cell.is_building:
            return color
        hash_config = self.config.color_hash
        return vary_color(color, hash_config.building_variance, x, y, color_seed, hash_config)

    def face_shading(self, rotation_y: float) -> FaceShading:
        """Light from the camera's horizontal rotation"""
        lighting = self.config.lighting
        light_x = math.cos(math.radians(rotation_y))
        right = max(lighting.right_min, min(lighting.right_max, light_x * lighting.light_scale))
        left = max(
            lighting.left_min,
            min(lighting.left_max, -light_x * lighting.light_scale + lighting.left_bias),
        )
        return FaceShading(top=lighting.top_brightness, right=right, left=left)

    # ------------------------------------------------------------------
    # Windows
    # ------------------------------------------------------------------

    def window_rand(self, grid_x: int, grid_y: int, floor: int, window: int) -> float:
        """Deterministic pseudo-uniform value for one window"""
        windows = self.config.windows
        seed = (
            grid_x * windows.prime_x
            + grid_y * windows.prime_y
            + floor * windows.prime_floor
            + window * windows.prime_window
        ) % windows.modulus
        return sine_rand(seed, 0.1)

    def window_floor_count(self, visual_height: float) -> int:
        return max(1, int(visual_height // self.config.windows.spacing))

    def windows_per_floor(self, face_width: float) -> int:
        return max(1, int(face_width // self.config.windows.spacing))

    def window_slots(
        self,
        draw_x: float,
        draw_y: float,
        size: float,
        visual_height: float,
        grid_x: int,
        grid_y: int,
        time_of_day: float,
    ) -> List[WindowSlot]:
        """
        Window slots for a building, empty when it is too short for windows.

        Args:
            draw_x, draw_y: Projected top vertex of the building's footprint
            size: Cell size in pixels
            visual_height: Screen-space extrusion length
            grid_x, grid_y: Grid coordinates seeding the lit pattern
            time_of_day: Hour, selecting the night or day lit threshold

        Returns:
            One WindowSlot per floor and window index
        """
        if visual_height <= size * 0.5:
            return []

        windows = self.config.windows
        w, h = tile_half_extents(size)
        threshold = windows.threshold_for(time_of_day % 24)

        slots = []
        for floor in range(1, self.window_floor_count(visual_height) + 1):
            floor_y = draw_y + h * 2 - floor * windows.spacing
            for index in range(self.windows_per_floor(w)):
                window_x = draw_x + (index + 0.5) * windows.spacing - w / 2
                lit = self.window_rand(grid_x, grid_y, floor, index) > threshold
                slots.append(WindowSlot(floor, index, window_x, floor_y, lit))
        return slots

    # ------------------------------------------------------------------
    # Flat (2D) cells
    # ------------------------------------------------------------------

    def draw_flat_cell(
        self,
        image: Image.Image,
        cell: Cell,
        x: int,
        y: int,
        cell_size: float,
        color_seed: float,
        animation_clock: Optional[float] = None,
    ):
        """Top-down square for one cell; animation_clock enables water ripples"""
        px, py = x * cell_size, y * cell_size
        extent = cell_size - 1
        square = [(px, py), (px + extent, py), (px + extent, py + extent), (px, py + extent)]
        diagonal = ((px, py), (px + cell_size, py + cell_size))

        fill_rect(image, px, py, extent, extent, rgba(self.cell_color(cell, x, y, color_seed), 1.0))

        if cell.is_building:
            # Directional light from the top-left
            linear_gradient_polygon(image, square, *diagonal, [
                (0.0, _tint(WHITE, 0.25)),
                (1.0, _tint(BLACK, 0.15)),
            ])
            height_ratio = min(cell.height / 10, 1)
            fill_rect(image, px + 2, py + 2, cell_size - 5, cell_size - 5, _tint(WHITE, height_ratio * 0.2))

        elif cell.type == CellType.PARK:
            center = (px + cell_size / 2, py + cell_size / 2)
            radial_gradient_polygon(image, square, center, 0, cell_size / 2, [
                (0.0, (72, 187, 120, 204)),
                (1.0, (34, 139, 69, 204)),
            ])

        elif cell.type == CellType.WATER:
            linear_gradient_polygon(image, square, *diagonal, [
                (0.0, _tint(WHITE, 0.2)),
                (0.5, _tint(WHITE, 0.0)),
                (1.0, _tint(BLACK, 0.1)),
            ])
            if animation_clock is not None:
                alpha = ripple_alpha(animation_clock, x, y)
                if alpha > 0:
                    fill_rect(image, px, py, extent, extent, _tint(WHITE, alpha))

    # ------------------------------------------------------------------
    # Isometric cells
    # ------------------------------------------------------------------

    def draw_iso_tile(self, image: Image.Image, draw_x: float, draw_y: float, size: float, color: str):
        fill_polygon(image, rhombus(draw_x, draw_y, size), rgba(color, 1.0), VISUAL_STYLE['tile_outline_color'])

    def draw_iso_water(
        self,
        image: Image.Image,
        draw_x: float,
        draw_y: float,
        size: float,
        color: str,
        ripple: float = 0.0,
    ):
        """Water rhombus with shimmer; a positive ripple adds a white wash"""
        w, h = tile_half_extents(size)
        shape = rhombus(draw_x, draw_y, size)

        fill_polygon(image, shape, rgba(color, 1.0))
        linear_gradient_polygon(image, shape, (draw_x - w, draw_y), (draw_x + w, draw_y + h * 2), [
            (0.0, _tint(WHITE, 0.3)),
            (0.5, _tint(WHITE, 0.1)),
            (1.0, _tint(BLACK, 0.2)),
        ])
        if ripple > 0:
            fill_polygon(image, shape, _tint(WHITE, ripple))
        fill_polygon(image, shape, None, (0, 0, 0, 77))

    def draw_iso_building(
        self,
        image: Image.Image,
        draw_x: float,
        draw_y: float,
        size: float,
        color: str,
        visual_height: float,
        grid_x: int,
        grid_y: int,
        rotation_y: float,
        time_of_day: float,
    ) -> List[WindowSlot]:
        """
        Extruded rhombic prism with shaded faces, base occlusion and windows.

        Returns:
            The window slots drawn (empty for short buildings)
        """
        x, y = draw_x, draw_y
        w, h = tile_half_extents(size)
        top_y = y - visual_height
        shading = self.face_shading(rotation_y)
        outline = VISUAL_STYLE['building_outline_color']

        # Top face
        top = rhombus(x, y, size, lift=visual_height)
        fill_polygon(image, top, rgba(lighten_color(color, shading.top), 1.0))
        linear_gradient_polygon(image, top, (x - w, top_y + h), (x + w, top_y + h), [
            (0.0, _tint(WHITE, 0.15)),
            (1.0, _tint(BLACK, 0.05)),
        ])
        fill_polygon(image, top, None, outline)

        # Right face
        right = [(x + w, top_y + h), (x + w, y + h), (x, y + h * 2), (x, top_y + h * 2)]
        fill_polygon(image, right, rgba(shade_color(color, shading.right), 1.0))
        linear_gradient_polygon(image, right, (x, top_y + h), (x, y + h * 2), [
            (0.0, _tint(WHITE, 0.08)),
            (1.0, _tint(BLACK, 0.15)),
        ])
        fill_polygon(image, right, None, outline)

        # Left face
        left = [(x - w, top_y + h), (x - w, y + h), (x, y + h * 2), (x, top_y + h * 2)]
        fill_polygon(image, left, rgba(shade_color(color, shading.left), 1.0))
        linear_gradient_polygon(image, left, (x, top_y + h), (x, y + h * 2), [
            (0.0, _tint(BLACK, 0.05)),
            (1.0, _tint(BLACK, 0.25)),
        ])
        fill_polygon(image, left, None, outline)

        # Ambient occlusion at the base
        occlusion = min(1, visual_height / (size * 2))
        radial_gradient_ellipse(image, (x, y + h * 2), (w * 0.8, h * 0.8), 0, w, [
            (0.0, _tint(BLACK, self.config.lighting.ambient_occlusion_alpha * occlusion)),
            (1.0, _tint(BLACK, 0.0)),
        ])

        slots = self.window_slots(x, y, size, visual_height, grid_x, grid_y, time_of_day)
        windows = self.config.windows
        for slot in slots:
            fill_rect(
                image, slot.x, slot.y, windows.size, windows.size,
                windows.lit_color if slot.lit else windows.unlit_color,
            )
        return slots
