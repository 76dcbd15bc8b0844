from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from .hexgrid import HEX_SIZE, HexGrid, Point, hex_corners

EdgeKey = Tuple[int, int]
QuantizedKey = Tuple[int, int]

# Corners are merged on a 1e-4 lattice. Distinct corners on a board of hex
# size 50 are at least 50 apart; float round-off stays below 1e-9.
QUANTIZATION_EPSILON = 1e-4


@dataclass(frozen=True)
class Vertex:
    id: int
    point: Point
    adjacent_tile_ids: Tuple[int, ...]
    adjacent_vertex_ids: Tuple[int, ...]


@dataclass(frozen=True)
class VertexGraph:
    """Settlement spots and their adjacency, indexed by integer vertex id.

    Vertex ids are assigned in construction order: tiles in canonical order,
    corners ``0..5`` within each tile. Ranking relies on this ordering for
    deterministic tie-breaks.
    """

    vertices: Tuple[Vertex, ...]
    edges: Mapping[EdgeKey, Tuple[int, ...]]
    tile_corner_ids: Tuple[Tuple[int, ...], ...]

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def vertex_ids(self) -> range:
        return range(len(self.vertices))

    def vertex(self, vertex_id: int) -> Vertex:
        return self.vertices[vertex_id]

    def are_adjacent(self, first: int, second: int) -> bool:
        return second in self.vertices[first].adjacent_vertex_ids

    def tile_vertex_ids(self, tile_id: int) -> Tuple[int, ...]:
        return self.tile_corner_ids[tile_id]

    @staticmethod
    def normalize_edge_key(vertex_a: int, vertex_b: int) -> EdgeKey:
        first, second = int(vertex_a), int(vertex_b)
        return (first, second) if first <= second else (second, first)


def quantize_point(point: Point, epsilon: float = QUANTIZATION_EPSILON) -> QuantizedKey:
    return (round(point[0] / epsilon), round(point[1] / epsilon))


def build_vertex_graph(grid: HexGrid, size: float = HEX_SIZE) -> VertexGraph:
    vertex_lookup: Dict[QuantizedKey, int] = {}
    vertex_points: List[Point] = []
    vertex_tiles: List[set[int]] = []
    vertex_neighbors: List[set[int]] = []
    edge_tiles: Dict[EdgeKey, set[int]] = {}
    tile_corner_ids: List[Tuple[int, ...]] = []

    for tile_id in range(grid.tile_count):
        corner_ids: List[int] = []
        for corner_point in hex_corners(grid.center(tile_id, size), size):
            key = quantize_point(corner_point)
            vertex_id = vertex_lookup.get(key)
            if vertex_id is None:
                vertex_id = len(vertex_points)
                vertex_lookup[key] = vertex_id
                vertex_points.append(corner_point)
                vertex_tiles.append(set())
                vertex_neighbors.append(set())
            corner_ids.append(vertex_id)
            vertex_tiles[vertex_id].add(tile_id)

        for first, second in zip(corner_ids, corner_ids[1:] + corner_ids[:1]):
            edge_key = VertexGraph.normalize_edge_key(first, second)
            edge_tiles.setdefault(edge_key, set()).add(tile_id)
            vertex_neighbors[first].add(second)
            vertex_neighbors[second].add(first)
        tile_corner_ids.append(tuple(corner_ids))

    vertices = tuple(
        Vertex(
            id=vertex_id,
            point=vertex_points[vertex_id],
            adjacent_tile_ids=tuple(sorted(vertex_tiles[vertex_id])),
            adjacent_vertex_ids=tuple(sorted(vertex_neighbors[vertex_id])),
        )
        for vertex_id in range(len(vertex_points))
    )
    return VertexGraph(
        vertices=vertices,
        edges=MappingProxyType(
            {edge_key: tuple(sorted(tile_ids)) for edge_key, tile_ids in sorted(edge_tiles.items())}
        ),
        tile_corner_ids=tuple(tile_corner_ids),
    )


@lru_cache(maxsize=None)
def standard_grid() -> HexGrid:
    return HexGrid()


@lru_cache(maxsize=None)
def standard_vertex_graph(size: float = HEX_SIZE) -> VertexGraph:
    return build_vertex_graph(standard_grid(), size)
