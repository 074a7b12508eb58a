"""Keyword presets mapping place names to city characteristics"""
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from isometric_city.generation.models import CityCharacteristics, RoadPattern


@dataclass(frozen=True)
class CityPreset:
    """A keyword rule and the characteristics it selects"""
    label: str
    keywords: Tuple[str, ...]
    characteristics: CityCharacteristics

    def matches(self, prompt: str) -> bool:
        lower = prompt.lower()
        return any(keyword in lower for keyword in self.keywords)


DEFAULT_CHARACTERISTICS = CityCharacteristics()


# Checked in order, first match wins
CITY_PRESETS: List[CityPreset] = [
    # Major US cities
    CityPreset(
        label='New York',
        keywords=('new york', 'manhattan', 'nyc'),
        characteristics=CityCharacteristics(
            density=0.95, avg_height=8, style='Dense Urban',
            park_ratio=0.08, skyscraper_ratio=0.25, road_pattern=RoadPattern.GRID,
        ),
    ),
    CityPreset(
        label='Texas',
        keywords=('texas', 'houston', 'dallas', 'austin'),
        characteristics=CityCharacteristics(
            density=0.45, avg_height=2, style='Sprawling',
            park_ratio=0.15, skyscraper_ratio=0.03, road_pattern=RoadPattern.WIDE,
        ),
    ),
    CityPreset(
        label='Los Angeles',
        keywords=('los angeles', 'la', 'california'),
        characteristics=CityCharacteristics(
            density=0.6, avg_height=3, style='Spread Out',
            park_ratio=0.12, skyscraper_ratio=0.08, road_pattern=RoadPattern.GRID,
        ),
    ),
    CityPreset(
        label='Chicago',
        keywords=('chicago', 'illinois'),
        characteristics=CityCharacteristics(
            density=0.75, avg_height=6, style='High-rise',
            park_ratio=0.1, skyscraper_ratio=0.18, road_pattern=RoadPattern.GRID,
        ),
    ),
    CityPreset(
        label='Miami',
        keywords=('miami', 'florida'),
        characteristics=CityCharacteristics(
            density=0.55, avg_height=4, style='Coastal',
            park_ratio=0.15, skyscraper_ratio=0.1, road_pattern=RoadPattern.GRID,
        ),
    ),
    # International cities
    CityPreset(
        label='Tokyo',
        keywords=('tokyo', 'japan'),
        characteristics=CityCharacteristics(
            density=0.98, avg_height=7, style='Ultra-Dense',
            park_ratio=0.05, skyscraper_ratio=0.2, road_pattern=RoadPattern.COMPLEX,
        ),
    ),
    CityPreset(
        label='London',
        keywords=('london', 'uk', 'england'),
        characteristics=CityCharacteristics(
            density=0.7, avg_height=4, style='Historic',
            park_ratio=0.18, skyscraper_ratio=0.06, road_pattern=RoadPattern.MIXED,
        ),
    ),
    CityPreset(
        label='Paris',
        keywords=('paris', 'france'),
        characteristics=CityCharacteristics(
            density=0.8, avg_height=5, style='European',
            park_ratio=0.12, skyscraper_ratio=0.02, road_pattern=RoadPattern.RADIAL,
        ),
    ),
    CityPreset(
        label='Dubai',
        keywords=('dubai',),
        characteristics=CityCharacteristics(
            density=0.5, avg_height=10, style='Futuristic',
            park_ratio=0.08, skyscraper_ratio=0.35, road_pattern=RoadPattern.WIDE,
        ),
    ),
    # Generic descriptors keep the default park ratio and road pattern
    CityPreset(
        label='Urban',
        keywords=('dense', 'urban', 'city'),
        characteristics=replace(
            DEFAULT_CHARACTERISTICS,
            density=0.85, avg_height=6, style='Urban', skyscraper_ratio=0.15,
        ),
    ),
    CityPreset(
        label='Suburban',
        keywords=('suburb', 'residential'),
        characteristics=replace(
            DEFAULT_CHARACTERISTICS,
            density=0.4, avg_height=2, style='Suburban',
            park_ratio=0.2, skyscraper_ratio=0.01,
        ),
    ),
    CityPreset(
        label='Downtown',
        keywords=('downtown', 'center'),
        characteristics=replace(
            DEFAULT_CHARACTERISTICS,
            density=0.9, avg_height=7, style='Downtown', skyscraper_ratio=0.22,
        ),
    ),
]


def find_preset(prompt: str) -> Optional[CityPreset]:
    """First preset whose keywords appear in the prompt"""
    for preset in CITY_PRESETS:
        if preset.matches(prompt):
            return preset
    return None


def match_city_prompt(prompt: str) -> CityCharacteristics:
    """
    Characteristics for a free-text place name.
    Falls back to the mixed defaults when no keyword matches.
    """
    preset = find_preset(prompt)
    base = preset.characteristics if preset else DEFAULT_CHARACTERISTICS
    return replace(base, name=prompt)
