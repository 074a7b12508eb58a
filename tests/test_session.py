"""Tests for the interactive city session"""
import numpy as np
import pytest

from isometric_city.generation.models import CityCharacteristics, MapShape
from isometric_city.rendering.animation import ManualScheduler
from isometric_city.rendering.scene_renderer import ViewMode
from isometric_city.rendering.sky import Weather
from isometric_city.session import CitySession


@pytest.fixture
def session():
    return CitySession(grid_size=8, rng=np.random.default_rng(3))


class TestGenerate:
    """Test generating cities from prompts"""

    @pytest.mark.parametrize('prompt', ['', '   '])
    def test_empty_prompt_rejected(self, session, prompt):
        with pytest.raises(ValueError, match="Please enter a city name"):
            session.generate(prompt)
        assert session.grid is None

    def test_generate(self, session):
        grid = session.generate('  Tokyo ')
        assert grid is session.grid
        assert grid.size == 8
        assert session.characteristics.name == 'Tokyo'
        assert session.characteristics.style == 'Ultra-Dense'

    def test_regenerate_replaces_grid(self, session):
        first = session.generate('Paris')
        second = session.generate('Paris')
        assert session.grid is second
        assert first is not second

    def test_color_seed_fixed_for_session(self, session):
        seed = session.color_seed
        session.generate('London')
        session.generate('Dubai')
        assert session.color_seed == seed
        assert 0 <= seed < 1000

    def test_generate_from(self, session):
        grid = session.generate_from(CityCharacteristics(name='Custom', density=1.0))
        assert session.summary()['name'] == 'Custom'
        assert sum(session.summary()['counts'].values()) == grid.size ** 2

    def test_shape_passed_through(self):
        session = CitySession(grid_size=20, map_shape=MapShape.COASTAL, rng=np.random.default_rng(1))
        grid = session.generate('Miami')
        assert all(grid.cell(0, y).water_type is not None for y in range(20))


class TestRender:
    """Test rendering through the session"""

    def test_nothing_before_generate(self, session):
        assert session.render(100, 100) is None
        assert session.summary() is None

    @pytest.mark.parametrize('view_mode', list(ViewMode))
    def test_render(self, view_mode):
        session = CitySession(grid_size=6, view_mode=view_mode, rng=np.random.default_rng(2))
        session.generate('Chicago')
        image = session.render(90, 90)
        assert image.size == (90, 90)

    def test_view_controls(self, session):
        session.set_time_of_day(21.5)
        session.set_weather('rainy')
        session.apply_camera_preset('aerial')
        session.drag_camera(10, 0)
        session.zoom_camera(200)

        assert session.sky.time_of_day == 21.5
        assert session.sky.weather == Weather.RAINY
        assert session.camera.rotation_x == 60
        assert session.camera.rotation_y == 50
        assert session.camera.zoom == pytest.approx(1.0)


class TestAnimator:
    """Test the session-bound animator"""

    def test_frames_render_and_advance_clock(self, session):
        session.generate('London')
        session.set_weather(Weather.CLOUDY)
        scheduler = ManualScheduler()
        images = []

        animator = session.animator(scheduler, 64, 64, images.append)
        animator.start()
        scheduler.run_pending()
        animator.stop()

        assert len(images) == 2
        assert session.sky.animation_clock == pytest.approx(0.02)
        assert session.sky.weather == Weather.CLOUDY
        assert scheduler.pending_count == 0

    def test_live_time_of_day_kept(self, session):
        session.generate('London')
        scheduler = ManualScheduler()
        animator = session.animator(scheduler, 32, 32)
        animator.start()
        session.set_time_of_day(3.0)
        scheduler.run_pending()
        animator.stop()
        assert session.sky.time_of_day == 3.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
