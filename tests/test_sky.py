"""Tests for the time-of-day sky and weather model"""
import pytest
from PIL import Image

from isometric_city.config.render_config import SKY_PALETTES
from isometric_city.rendering.color_math import hex_to_rgb, interpolate_color
from isometric_city.rendering.sky import (
    Cloud,
    SkyRenderer,
    SkyState,
    Weather,
    celestial_body,
    cloud_layout,
    is_night,
    rain_layout,
    sky_colors,
)


def _close(first, second, tolerance=2):
    for a, b in zip(first.as_tuple(), second.as_tuple()):
        for ca, cb in zip(hex_to_rgb(a), hex_to_rgb(b)):
            if abs(ca - cb) > tolerance:
                return False
    return True


class TestSkyColors:
    """Test gradient stops by hour"""

    def test_fixed_palettes(self):
        assert sky_colors(12).as_tuple() == SKY_PALETTES['day']
        assert sky_colors(0).as_tuple() == SKY_PALETTES['night']
        assert sky_colors(3).as_tuple() == SKY_PALETTES['night']
        assert sky_colors(24).as_tuple() == SKY_PALETTES['night']

    def test_dawn_midpoint(self):
        expected = tuple(
            interpolate_color(night, day, 0.5)
            for night, day in zip(SKY_PALETTES['night'], SKY_PALETTES['day'])
        )
        assert sky_colors(6).as_tuple() == expected

    def test_dusk_start_is_day(self):
        assert sky_colors(17).as_tuple() == SKY_PALETTES['day']

    def test_evening_start(self):
        assert sky_colors(19).as_tuple() == SKY_PALETTES['evening']

    @pytest.mark.parametrize('boundary', [5, 7, 17, 19])
    def test_continuous_at_band_edges(self, boundary):
        assert _close(sky_colors(boundary - 1e-6), sky_colors(boundary))

    def test_continuous_at_midnight(self):
        assert _close(sky_colors(24 - 1e-6), sky_colors(0))


class TestCelestialBody:
    """Test sun and moon placement"""

    def test_is_night(self):
        assert is_night(5.9)
        assert not is_night(6)
        assert not is_night(20)
        assert is_night(20.5)

    def test_noon_sun_at_zenith(self):
        body = celestial_body(12, 500, 500)
        assert not body.is_moon
        assert body.visible
        assert body.x == pytest.approx(250)
        assert body.y == pytest.approx(200)

    def test_midnight_moon_at_zenith(self):
        body = celestial_body(0, 500, 500)
        assert body.is_moon
        assert body.visible
        assert body.x == pytest.approx(250)
        assert body.y == pytest.approx(200)

    def test_sun_moves_left_to_right(self):
        morning = celestial_body(9, 500, 500)
        afternoon = celestial_body(15, 500, 500)
        assert morning.x < 250 < afternoon.x
        assert morning.y == pytest.approx(afternoon.y)

    def test_below_horizon(self):
        assert not celestial_body(6.2, 500, 500).visible
        assert not celestial_body(19.5, 500, 500).visible

    def test_late_evening_moon(self):
        body = celestial_body(22, 500, 500)
        assert body.is_moon
        assert body.visible


class TestWeatherLayout:
    """Test cloud and rain particle layouts"""

    def test_cloud_counts(self):
        assert cloud_layout(SkyState(weather=Weather.CLEAR), 500, 500) == []
        cloudy = cloud_layout(SkyState(weather=Weather.CLOUDY), 500, 500)
        rainy = cloud_layout(SkyState(weather=Weather.RAINY), 500, 500)
        assert len(cloudy) == 5
        assert len(rainy) == 8
        assert {cloud.opacity for cloud in cloudy} == {0.6}
        assert {cloud.opacity for cloud in rainy} == {0.8}

    def test_cloud_bounds(self):
        for clock in (0.0, 3.3, 17.0):
            sky = SkyState(weather=Weather.RAINY, animation_clock=clock)
            for cloud in cloud_layout(sky, 400, 300):
                assert -100 <= cloud.x < 500
                assert 0 <= cloud.y < 120
                assert 40 <= cloud.size < 80

    def test_clouds_drift_with_clock(self):
        first = cloud_layout(SkyState(weather=Weather.CLOUDY, animation_clock=0.0), 500, 500)
        later = cloud_layout(SkyState(weather=Weather.CLOUDY, animation_clock=1.0), 500, 500)
        assert first[0].x == pytest.approx(-100)
        assert later[0].x == pytest.approx(-80)

    def test_clouds_still_when_not_animating(self):
        first = cloud_layout(SkyState(weather=Weather.CLOUDY, animate=False), 500, 500)
        later = cloud_layout(SkyState(weather=Weather.CLOUDY, animate=False, animation_clock=5.0), 500, 500)
        assert first == later

    def test_cloud_circles(self):
        circles = Cloud(10, 20, 40, 0.6).circles()
        assert len(circles) == 4
        assert circles[1] == pytest.approx((30, 20, 24))

    def test_rain(self):
        assert rain_layout(SkyState(weather=Weather.CLOUDY), 500, 500) == []
        drops = rain_layout(SkyState(weather=Weather.RAINY, animation_clock=2.5), 500, 400)
        assert len(drops) == 50
        for drop in drops:
            assert 0 <= drop.x < 500
            assert -50 <= drop.y < 450
            assert drop.end == (drop.x - 2, drop.y + 10)


class TestSkyRenderer:
    """Test drawing the sky backdrop"""

    def test_backdrop_is_opaque_gradient(self):
        image = Image.new('RGBA', (400, 400), (0, 0, 0, 0))
        SkyRenderer().draw(image, SkyState(time_of_day=3))

        top = image.getpixel((5, 5))
        bottom = image.getpixel((5, 398))
        assert top[3] == 255
        for channel, expected in zip(top[:3], hex_to_rgb(SKY_PALETTES['night'][0])):
            assert abs(channel - expected) <= 2
        for channel, expected in zip(bottom[:3], hex_to_rgb(SKY_PALETTES['night'][2])):
            assert abs(channel - expected) <= 2

    def test_rain_changes_image(self):
        clear = Image.new('RGBA', (300, 300), (0, 0, 0, 0))
        rainy = Image.new('RGBA', (300, 300), (0, 0, 0, 0))
        SkyRenderer().draw(clear, SkyState(time_of_day=14))
        SkyRenderer().draw(rainy, SkyState(time_of_day=14, weather=Weather.RAINY))
        assert clear.tobytes() != rainy.tobytes()

    def test_cloud_opacity(self):
        image = Image.new('RGBA', (200, 200), (0, 0, 0, 0))
        SkyRenderer().draw_cloud(image, Cloud(50, 50, 40, 0.6))
        pixel = image.getpixel((70, 50))
        assert abs(pixel[3] - 153) <= 1
        assert pixel[0] >= 250


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
