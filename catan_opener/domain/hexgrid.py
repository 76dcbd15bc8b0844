from __future__ import annotations

import math
from typing import Dict, List, Tuple

Point = Tuple[float, float]
AxialCoord = Tuple[int, int]

BOARD_RADIUS = 2
HEX_SIZE = 50.0

HEX_DIRECTIONS: Tuple[AxialCoord, ...] = (
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
)


class HexGrid:
    """Static tile layout of a radius-2 board.

    Tile indices follow the canonical ``(r, q)`` ordering of
    :func:`generate_axial_coords`; that ordering is the only index contract.
    """

    def __init__(self, radius: int = BOARD_RADIUS) -> None:
        self.radius = radius
        self._coords: Tuple[AxialCoord, ...] = tuple(generate_axial_coords(radius))
        self._index_lookup: Dict[AxialCoord, int] = {coord: index for index, coord in enumerate(self._coords)}
        self._neighbors: Tuple[Tuple[int, ...], ...] = tuple(
            self._compute_neighbors(index) for index in range(len(self._coords))
        )

    @property
    def coords(self) -> Tuple[AxialCoord, ...]:
        return self._coords

    @property
    def tile_count(self) -> int:
        return len(self._coords)

    def index_of(self, q: int, r: int) -> int | None:
        return self._index_lookup.get((q, r))

    def neighbors(self, tile_index: int) -> Tuple[int, ...]:
        return self._neighbors[tile_index]

    def are_neighbors(self, first: int, second: int) -> bool:
        return second in self._neighbors[first]

    def center(self, tile_index: int, size: float = HEX_SIZE) -> Point:
        q, r = self._coords[tile_index]
        return axial_to_pixel(q, r, size)

    def _compute_neighbors(self, tile_index: int) -> Tuple[int, ...]:
        q, r = self._coords[tile_index]
        found = []
        for dq, dr in HEX_DIRECTIONS:
            neighbor = self._index_lookup.get((q + dq, r + dr))
            if neighbor is not None:
                found.append(neighbor)
        return tuple(found)


def generate_axial_coords(radius: int = BOARD_RADIUS) -> List[AxialCoord]:
    coords: List[AxialCoord] = []
    for q in range(-radius, radius + 1):
        r_min = max(-radius, -q - radius)
        r_max = min(radius, -q + radius)
        for r in range(r_min, r_max + 1):
            coords.append((q, r))
    coords.sort(key=lambda item: (item[1], item[0]))
    return coords


def axial_to_pixel(q: int, r: int, size: float = HEX_SIZE) -> Point:
    x = size * math.sqrt(3) * (q + r / 2)
    y = size * 1.5 * r
    return (x, y)


def hex_corner(center: Point, corner_index: int, size: float = HEX_SIZE) -> Point:
    angle_rad = math.radians(60 * corner_index - 30)
    return (
        center[0] + size * math.cos(angle_rad),
        center[1] + size * math.sin(angle_rad),
    )


def hex_corners(center: Point, size: float = HEX_SIZE) -> Tuple[Point, ...]:
    return tuple(hex_corner(center, corner_index, size) for corner_index in range(6))
