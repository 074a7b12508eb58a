"""
Full-frame city renderer.

Renders the sky, then either a flat top-down grid or a depth-sorted
isometric pass, onto a Pillow image of the requested size. The grid, camera
and sky are read-only inputs.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from PIL import Image

from isometric_city.config.render_config import (
    CELL_COLORS,
    DEFAULT_RENDER_CONFIG,
    RenderConfig,
    VISUAL_STYLE,
)
from isometric_city.generation.models import Cell, CellType, CityGrid
from isometric_city.rendering.camera import CameraPose
from isometric_city.rendering.cell_renderer import CellRenderer, ripple_alpha
from isometric_city.rendering.drawing import draw_line
from isometric_city.rendering.projection import (
    cell_size_for,
    project,
    sort_back_to_front,
    visual_height,
)
from isometric_city.rendering.sky import SkyRenderer, SkyState

logger = logging.getLogger(__name__)


class ViewMode(str, Enum):
    FLAT = '2d'
    ISOMETRIC = '3d'


@dataclass(frozen=True)
class DrawItem:
    """One cell queued for the isometric pass"""
    x: int
    y: int
    cell: Cell
    draw_x: float
    draw_y: float
    depth_key: float


class SceneRenderer:
    """Renders complete frames of a generated city"""

    def __init__(self, config: RenderConfig = DEFAULT_RENDER_CONFIG):
        self.config = config
        self.cell_renderer = CellRenderer(config)
        self.sky_renderer = SkyRenderer()

    def render(
        self,
        grid: Optional[CityGrid],
        view_mode: ViewMode,
        camera: CameraPose,
        sky: SkyState,
        width: int,
        height: int,
        color_seed: float = 0.0,
    ) -> Optional[Image.Image]:
        """
        Render one frame.

        Args:
            grid: City to draw; None means nothing has been generated yet
            view_mode: '2d' flat map or '3d' isometric scene
            camera: Camera pose (isometric view only)
            sky: Time of day, weather and animation clock
            width, height: Output size in pixels
            color_seed: Session seed for building color variance

        Returns:
            RGB image, or None when there is no grid to draw
        """
        if grid is None:
            logger.debug("No city generated yet, skipping render")
            return None

        image = Image.new('RGBA', (width, height), (0, 0, 0, 0))
        self.sky_renderer.draw(image, sky)

        if ViewMode(view_mode) == ViewMode.FLAT:
            self.render_flat(image, grid, sky, color_seed)
        else:
            self.render_isometric(image, grid, camera, sky, color_seed)

        return image.convert('RGB')

    def render_flat(self, image: Image.Image, grid: CityGrid, sky: SkyState, color_seed: float):
        width, height = image.size
        cell_size = width / grid.size
        clock = sky.animation_clock if sky.animate else None

        for x, y, cell in grid.cells():
            self.cell_renderer.draw_flat_cell(image, cell, x, y, cell_size, color_seed, clock)

        line_color = VISUAL_STYLE['grid_line_color']
        for i in range(grid.size + 1):
            pos = i * cell_size
            draw_line(image, (pos, 0), (pos, height), line_color)
            draw_line(image, (0, pos), (width, pos), line_color)

    def draw_order(self, grid: CityGrid, camera: CameraPose, width: int, height: int) -> List[DrawItem]:
        """Cells in isometric draw order, back to front"""
        items = []
        for x, y, cell in grid.cells():
            projection = project(x, y, cell.height, camera, (width, height), grid.size)
            items.append(DrawItem(x, y, cell, projection.draw_x, projection.draw_y, projection.depth_key))
        return sort_back_to_front(items)

    def render_isometric(
        self,
        image: Image.Image,
        grid: CityGrid,
        camera: CameraPose,
        sky: SkyState,
        color_seed: float,
    ):
        width, height = image.size
        size = cell_size_for(width, height, grid.size, camera)
        renderer = self.cell_renderer

        items = self.draw_order(grid, camera, width, height)
        for item in items:
            cell = item.cell
            if cell.type in (CellType.ROAD, CellType.PARK, CellType.EMPTY):
                renderer.draw_iso_tile(image, item.draw_x, item.draw_y, size, CELL_COLORS[cell.type.value])
            elif cell.type == CellType.WATER:
                ripple = ripple_alpha(sky.animation_clock, item.x, item.y) if sky.animate else 0.0
                renderer.draw_iso_water(
                    image, item.draw_x, item.draw_y, size, renderer.base_color(cell), ripple,
                )
            else:
                building_height = visual_height(cell.height, size, camera.rotation_x, self.config.height)
                renderer.draw_iso_building(
                    image,
                    item.draw_x,
                    item.draw_y,
                    size,
                    renderer.cell_color(cell, item.x, item.y, color_seed),
                    building_height,
                    item.x,
                    item.y,
                    camera.rotation_y,
                    sky.time_of_day,
                )

        logger.debug(f"Rendered {len(items)} isometric cells at cell size {size:.1f}px")
