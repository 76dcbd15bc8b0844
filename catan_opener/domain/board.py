from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from .hexgrid import HexGrid


class InvalidEnumValue(ValueError):
    """Raised when a terrain or number token falls outside its closed set."""


class Terrain(str, Enum):
    DESERT = "desert"
    WOOD = "wood"
    BRICK = "brick"
    SHEEP = "sheep"
    WHEAT = "wheat"
    ORE = "ore"

    @property
    def resource(self) -> Optional["Terrain"]:
        if self is Terrain.DESERT:
            return None
        return self

    @property
    def display_name(self) -> str:
        if self is Terrain.SHEEP:
            return "wool"
        return self.value


TERRAIN_CYCLE: tuple[Terrain, ...] = tuple(Terrain)
RESOURCE_TERRAINS: tuple[Terrain, ...] = (
    Terrain.WOOD,
    Terrain.BRICK,
    Terrain.SHEEP,
    Terrain.WHEAT,
    Terrain.ORE,
)

NUMBER_CYCLE: tuple[Optional[int], ...] = (None, 2, 3, 4, 5, 6, 8, 9, 10, 11, 12)
RED_NUMBERS = frozenset({6, 8})


def is_red_number(number: Optional[int]) -> bool:
    return number in RED_NUMBERS


def parse_terrain(value: object) -> Terrain:
    if isinstance(value, Terrain):
        return value
    try:
        return Terrain(value)
    except ValueError:
        raise InvalidEnumValue(f"Unknown terrain: {value!r}.") from None


def parse_number(value: object) -> Optional[int]:
    # bool is an int subclass; True must not read as a number token.
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value not in NUMBER_CYCLE:
        raise InvalidEnumValue(f"Number token must be one of {NUMBER_CYCLE}, received {value!r}.")
    return value


@dataclass
class Tile:
    id: int
    q: int
    r: int
    terrain: Terrain = Terrain.DESERT
    number: Optional[int] = None

    @property
    def resource(self) -> Optional[Terrain]:
        return self.terrain.resource

    def is_default(self) -> bool:
        return self.terrain is Terrain.DESERT and self.number is None


@dataclass
class BoardState:
    """Terrain and number token per tile.

    Values are not validated here; the editor validates at its command
    boundary. Nothing derived from the tiles is cached, so every mutation is
    visible to the next score computation.
    """

    tiles: List[Tile]
    _tile_lookup: Dict[int, Tile] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._tile_lookup = {tile.id: tile for tile in self.tiles}

    def get_tile(self, tile_id: int) -> Tile:
        return self._tile_lookup[tile_id]

    @property
    def tile_count(self) -> int:
        return len(self.tiles)

    def set_terrain(self, tile_id: int, terrain: Terrain) -> None:
        self._tile_lookup[tile_id].terrain = terrain

    def set_number(self, tile_id: int, number: Optional[int]) -> None:
        self._tile_lookup[tile_id].number = number

    def reset(self) -> None:
        for tile in self.tiles:
            tile.terrain = Terrain.DESERT
            tile.number = None

    def is_default(self) -> bool:
        return all(tile.is_default() for tile in self.tiles)

    def assign(self, terrains: Sequence[Terrain], numbers: Sequence[Optional[int]]) -> None:
        if len(terrains) != len(self.tiles) or len(numbers) != len(self.tiles):
            raise ValueError(
                f"Expected {len(self.tiles)} terrains and numbers, "
                f"received {len(terrains)} and {len(numbers)}."
            )
        for tile, terrain, number in zip(self.tiles, terrains, numbers):
            tile.terrain = terrain
            tile.number = number

    def snapshot(self) -> "BoardState":
        return BoardState(tiles=copy.deepcopy(self.tiles))

    def numbers(self) -> List[Optional[int]]:
        return [tile.number for tile in self.tiles]

    def terrains(self) -> List[Terrain]:
        return [tile.terrain for tile in self.tiles]


def new_board(grid: HexGrid) -> BoardState:
    return BoardState(tiles=[Tile(id=tile_id, q=q, r=r) for tile_id, (q, r) in enumerate(grid.coords)])
