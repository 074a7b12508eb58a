"""City layout data model: characteristics, cells and grids"""
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple


class CellType(str, Enum):
    ROAD = 'road'
    EMPTY = 'empty'
    PARK = 'park'
    WATER = 'water'
    RESIDENTIAL = 'residential'
    COMMERCIAL = 'commercial'
    SKYSCRAPER = 'skyscraper'


BUILDING_TYPES = frozenset({CellType.RESIDENTIAL, CellType.COMMERCIAL, CellType.SKYSCRAPER})


class WaterType(str, Enum):
    LAKE = 'lake'
    RIVER = 'river'
    OCEAN = 'ocean'


class RoadPattern(str, Enum):
    GRID = 'grid'
    WIDE = 'wide'
    COMPLEX = 'complex'
    RADIAL = 'radial'
    MIXED = 'mixed'


class MapShape(str, Enum):
    SQUARE = 'square'
    CIRCLE = 'circle'
    COASTAL = 'coastal'
    RIVER = 'river'


@dataclass(frozen=True)
class CityCharacteristics:
    """Parameter bundle driving one generation run"""
    name: str = ''
    density: float = 0.5
    avg_height: int = 3
    style: str = 'Mixed'
    park_ratio: float = 0.1
    skyscraper_ratio: float = 0.05
    road_pattern: RoadPattern = RoadPattern.GRID


@dataclass(frozen=True)
class Cell:
    """One grid unit; water cells always have height 0"""
    type: CellType
    height: int = 0
    water_type: Optional[WaterType] = None

    @property
    def is_building(self) -> bool:
        return self.type in BUILDING_TYPES

    def to_dict(self) -> dict:
        data = {'type': self.type.value, 'height': self.height}
        if self.water_type is not None:
            data['waterType'] = self.water_type.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Cell':
        water_type = data.get('waterType')
        return cls(
            type=CellType(data['type']),
            height=int(data.get('height', 0)),
            water_type=WaterType(water_type) if water_type else None,
        )


class CityGrid:
    """
    Immutable square matrix of cells, row-major, indexed grid[y][x].

    A new grid is built for every generation run; nothing mutates one after
    construction.
    """

    def __init__(self, rows: Sequence[Sequence[Cell]]):
        self._rows: Tuple[Tuple[Cell, ...], ...] = tuple(tuple(row) for row in rows)
        size = len(self._rows)
        for row in self._rows:
            if len(row) != size:
                raise ValueError(f"Grid must be square: row of {len(row)} in a {size}-row grid")

    @property
    def size(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __getitem__(self, y: int) -> Tuple[Cell, ...]:
        return self._rows[y]

    def __eq__(self, other) -> bool:
        return isinstance(other, CityGrid) and self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def cell(self, x: int, y: int) -> Cell:
        return self._rows[y][x]

    def cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Yield (x, y, cell) in row-major order"""
        for y, row in enumerate(self._rows):
            for x, cell in enumerate(row):
                yield x, y, cell

    def counts(self) -> Dict[CellType, int]:
        """Number of cells per type"""
        return dict(Counter(cell.type for _, _, cell in self.cells()))

    def to_dict(self) -> dict:
        return {
            'gridSize': self.size,
            'cells': [[cell.to_dict() for cell in row] for row in self._rows],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'CityGrid':
        rows: List[List[Cell]] = [
            [Cell.from_dict(cell) for cell in row] for row in data['cells']
        ]
        return cls(rows)
