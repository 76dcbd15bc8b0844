from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from catan_opener.analysis.scoring import pip_count, vertex_pip_totals
from catan_opener.domain.board import BoardState, Terrain, is_red_number
from catan_opener.domain.graph import VertexGraph
from catan_opener.domain.hexgrid import HEX_SIZE, Point

from .interfaces import VertexPair

TERRAIN_COLORS = {
    Terrain.DESERT: "#d7b98e",
    Terrain.WOOD: "#2e7d32",
    Terrain.BRICK: "#c62828",
    Terrain.SHEEP: "#7cb342",
    Terrain.WHEAT: "#f9a825",
    Terrain.ORE: "#546e7a",
}
TOKEN_TEXT_COLOR = "#111"
RED_TOKEN_TEXT_COLOR = "#c62828"

BOARD_MARGIN_FACTOR = 1.2
VIEW_PADDING = 30.0


@dataclass(frozen=True)
class TileGlyph:
    tile_id: int
    center: Point
    polygon: Tuple[Point, ...]
    terrain: Terrain
    fill: str
    token_label: str
    token_color: str
    pip_dots: int


@dataclass(frozen=True)
class VertexPipLabel:
    vertex_id: int
    point: Point
    pips: int


@dataclass(frozen=True)
class SettlementMarker:
    vertex_id: int
    point: Point
    label: str


@dataclass(frozen=True)
class RenderScene:
    view_box: Tuple[float, float, float, float]
    tiles: Tuple[TileGlyph, ...]
    vertex_pips: Tuple[VertexPipLabel, ...] = field(default_factory=tuple)
    markers: Tuple[SettlementMarker, ...] = field(default_factory=tuple)


def build_render_scene(
    board: BoardState,
    graph: VertexGraph,
    highlight: Optional[VertexPair] = None,
    *,
    show_pips: bool = False,
    size: float = HEX_SIZE,
) -> RenderScene:
    """Describe what a renderer should draw, in board pixel coordinates.

    ``graph`` must have been built with the same hex ``size``.
    """
    tiles = []
    centers = []
    for tile in board.tiles:
        corner_ids = graph.tile_vertex_ids(tile.id)
        polygon = tuple(graph.vertex(vertex_id).point for vertex_id in corner_ids)
        center = (
            sum(point[0] for point in polygon) / len(polygon),
            sum(point[1] for point in polygon) / len(polygon),
        )
        centers.append(center)
        tiles.append(
            TileGlyph(
                tile_id=tile.id,
                center=center,
                polygon=polygon,
                terrain=tile.terrain,
                fill=TERRAIN_COLORS[tile.terrain],
                token_label="" if tile.number is None else str(tile.number),
                token_color=RED_TOKEN_TEXT_COLOR if is_red_number(tile.number) else TOKEN_TEXT_COLOR,
                pip_dots=pip_count(tile.number) if show_pips else 0,
            )
        )

    vertex_pips: Tuple[VertexPipLabel, ...] = ()
    if show_pips:
        vertex_pips = tuple(
            VertexPipLabel(vertex_id=vertex_id, point=graph.vertex(vertex_id).point, pips=pips)
            for vertex_id, pips in vertex_pip_totals(board, graph).items()
            if pips > 0
        )

    markers: Tuple[SettlementMarker, ...] = ()
    if highlight is not None:
        markers = tuple(
            SettlementMarker(vertex_id=vertex_id, point=graph.vertex(vertex_id).point, label=label)
            for vertex_id, label in zip(highlight, ("1", "2"))
        )

    return RenderScene(
        view_box=compute_view_box(centers, size),
        tiles=tuple(tiles),
        vertex_pips=vertex_pips,
        markers=markers,
    )


def compute_view_box(centers: list[Point], size: float = HEX_SIZE) -> Tuple[float, float, float, float]:
    if not centers:
        return (0.0, 0.0, 0.0, 0.0)
    margin = size * BOARD_MARGIN_FACTOR
    min_x = min(point[0] for point in centers) - margin
    max_x = max(point[0] for point in centers) + margin
    min_y = min(point[1] for point in centers) - margin
    max_y = max(point[1] for point in centers) + margin
    return (
        min_x - VIEW_PADDING,
        min_y - VIEW_PADDING,
        (max_x - min_x) + 2 * VIEW_PADDING,
        (max_y - min_y) + 2 * VIEW_PADDING,
    )
