"""Host-side state for one interactive city: current grid, camera and sky"""
import logging
from dataclasses import replace
from typing import Optional

import numpy as np
from PIL import Image

from isometric_city.config.render_config import DEFAULT_RENDER_CONFIG, RenderConfig
from isometric_city.data.city_presets import match_city_prompt
from isometric_city.generation.grid_generator import generate_city_grid, summarize_city
from isometric_city.generation.models import CityCharacteristics, CityGrid, MapShape
from isometric_city.rendering import camera as camera_controls
from isometric_city.rendering.animation import FrameScheduler, SkyAnimator
from isometric_city.rendering.camera import CameraPose
from isometric_city.rendering.scene_renderer import SceneRenderer, ViewMode
from isometric_city.rendering.sky import SkyState, Weather

logger = logging.getLogger(__name__)

COLOR_SEED_RANGE = 1000


class CitySession:
    """
    Owns the generated grid and the view state around it.

    The grid reference is replaced in a single assignment on every
    generate() call, so a render always sees a complete grid (or None).
    """

    def __init__(
        self,
        grid_size: int = 20,
        map_shape: MapShape = MapShape.SQUARE,
        water_density: float = 0.15,
        view_mode: ViewMode = ViewMode.FLAT,
        rng: Optional[np.random.Generator] = None,
        config: RenderConfig = DEFAULT_RENDER_CONFIG,
    ):
        self.grid_size = grid_size
        self.map_shape = MapShape(map_shape)
        self.water_density = water_density
        self.view_mode = ViewMode(view_mode)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.renderer = SceneRenderer(config)

        self.camera = CameraPose()
        self.sky = SkyState()
        self.grid: Optional[CityGrid] = None
        self.characteristics: Optional[CityCharacteristics] = None
        # Fixed for the session so re-renders keep their colors
        self.color_seed = float(self.rng.random() * COLOR_SEED_RANGE)

    def generate(self, prompt: str) -> CityGrid:
        """Build a new city for a place name and make it current"""
        prompt = prompt.strip()
        if not prompt:
            raise ValueError("Please enter a city name or location")
        return self.generate_from(match_city_prompt(prompt))

    def generate_from(self, characteristics: CityCharacteristics) -> CityGrid:
        grid = generate_city_grid(
            characteristics,
            self.grid_size,
            self.map_shape,
            self.water_density,
            self.rng,
        )
        self.characteristics, self.grid = characteristics, grid
        return grid

    def summary(self) -> Optional[dict]:
        if self.grid is None or self.characteristics is None:
            return None
        return summarize_city(self.characteristics, self.grid)

    def render(self, width: int, height: int) -> Optional[Image.Image]:
        """Render the current grid; None before the first generate()"""
        return self.renderer.render(
            self.grid,
            self.view_mode,
            self.camera,
            self.sky,
            width,
            height,
            self.color_seed,
        )

    # View controls

    def set_time_of_day(self, time_of_day: float):
        self.sky = replace(self.sky, time_of_day=time_of_day)

    def set_weather(self, weather: Weather):
        self.sky = replace(self.sky, weather=Weather(weather))

    def apply_camera_preset(self, name: str):
        self.camera = camera_controls.apply_preset(self.camera, name)

    def drag_camera(self, delta_x: float, delta_y: float):
        self.camera = camera_controls.drag(self.camera, delta_x, delta_y)

    def zoom_camera(self, wheel_delta: float):
        self.camera = camera_controls.zoom(self.camera, wheel_delta)

    def animator(self, scheduler: FrameScheduler, width: int, height: int, on_image=None) -> SkyAnimator:
        """
        Animator that advances this session's sky clock and re-renders
        every frame, passing each image to on_image when given.
        """
        def on_frame(sky: SkyState):
            # Only the clock comes from the animator; time and weather stay live
            self.sky = replace(self.sky, animation_clock=sky.animation_clock)
            image = self.render(width, height)
            if on_image is not None and image is not None:
                on_image(image)

        return SkyAnimator(self.sky, on_frame, scheduler)
