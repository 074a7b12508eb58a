"""Tests for the keyword city presets"""
import pytest

from isometric_city.data.city_presets import (
    CITY_PRESETS,
    DEFAULT_CHARACTERISTICS,
    find_preset,
    match_city_prompt,
)
from isometric_city.generation.models import RoadPattern


class TestMatching:
    """Test prompt to characteristics matching"""

    @pytest.mark.parametrize('prompt,style', [
        ('New York City', 'Dense Urban'),
        ('manhattan', 'Dense Urban'),
        ('Houston', 'Sprawling'),
        ('Chicago', 'High-rise'),
        ('Miami Beach', 'Coastal'),
        ('Tokyo', 'Ultra-Dense'),
        ('London', 'Historic'),
        ('Paris', 'European'),
        ('Dubai', 'Futuristic'),
        ('dense core', 'Urban'),
        ('quiet suburb', 'Suburban'),
        ('Downtown Seattle', 'Downtown'),
    ])
    def test_styles(self, prompt, style):
        assert match_city_prompt(prompt).style == style

    def test_case_insensitive(self):
        assert match_city_prompt('TOKYO').road_pattern == RoadPattern.COMPLEX

    def test_first_match_wins(self):
        """'Dallas' contains 'la' but the Texas rule comes first"""
        assert find_preset('Dallas').label == 'Texas'

    def test_name_is_prompt(self):
        assert match_city_prompt('Paris').name == 'Paris'

    def test_unknown_uses_defaults(self):
        characteristics = match_city_prompt('Reykjavik')
        assert find_preset('Reykjavik') is None
        assert characteristics.name == 'Reykjavik'
        assert characteristics.density == DEFAULT_CHARACTERISTICS.density
        assert characteristics.style == 'Mixed'
        assert characteristics.road_pattern == RoadPattern.GRID

    def test_generic_presets_keep_default_pattern(self):
        assert match_city_prompt('urban core').road_pattern == RoadPattern.GRID
        assert match_city_prompt('urban core').park_ratio == DEFAULT_CHARACTERISTICS.park_ratio


class TestPresetTable:
    """Test the preset table is well formed"""

    def test_ratios_in_range(self):
        for preset in CITY_PRESETS:
            c = preset.characteristics
            assert 0 <= c.density <= 1
            assert 0 <= c.park_ratio <= 1
            assert 0 <= c.skyscraper_ratio <= 1
            assert c.avg_height > 0

    def test_keywords_lowercase(self):
        for preset in CITY_PRESETS:
            assert all(keyword == keyword.lower() for keyword in preset.keywords)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
