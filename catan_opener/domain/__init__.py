"""Board topology, board state and map generation."""

from .board import (
    NUMBER_CYCLE,
    RED_NUMBERS,
    RESOURCE_TERRAINS,
    TERRAIN_CYCLE,
    BoardState,
    InvalidEnumValue,
    Terrain,
    Tile,
    new_board,
    parse_number,
    parse_terrain,
)
from .graph import QUANTIZATION_EPSILON, Vertex, VertexGraph, build_vertex_graph, standard_grid, standard_vertex_graph
from .hexgrid import BOARD_RADIUS, HEX_SIZE, HexGrid
from .randomizer import (
    MAX_GENERATION_ATTEMPTS,
    GenerationExhausted,
    generate_standard_assignment,
    generate_standard_random_map,
    validate_red_number_spacing,
    validate_standard_counts,
)

__all__ = [
    "BOARD_RADIUS",
    "HEX_SIZE",
    "MAX_GENERATION_ATTEMPTS",
    "NUMBER_CYCLE",
    "QUANTIZATION_EPSILON",
    "RED_NUMBERS",
    "RESOURCE_TERRAINS",
    "TERRAIN_CYCLE",
    "BoardState",
    "GenerationExhausted",
    "HexGrid",
    "InvalidEnumValue",
    "Terrain",
    "Tile",
    "Vertex",
    "VertexGraph",
    "build_vertex_graph",
    "generate_standard_assignment",
    "generate_standard_random_map",
    "new_board",
    "parse_number",
    "parse_terrain",
    "standard_grid",
    "standard_vertex_graph",
    "validate_red_number_spacing",
    "validate_standard_counts",
]
