from __future__ import annotations

import random
from collections import Counter
from typing import Dict, List, Optional, Tuple

import structlog

from .board import RED_NUMBERS, BoardState, Terrain
from .hexgrid import HexGrid

logger = structlog.get_logger(__name__)

TERRAIN_COUNTS: Dict[Terrain, int] = {
    Terrain.WOOD: 4,
    Terrain.BRICK: 3,
    Terrain.SHEEP: 4,
    Terrain.WHEAT: 4,
    Terrain.ORE: 3,
    Terrain.DESERT: 1,
}

NUMBER_TOKENS = [2, 3, 3, 4, 4, 5, 5, 6, 6, 8, 8, 9, 9, 10, 10, 11, 11, 12]
MAX_GENERATION_ATTEMPTS = 5000

Assignment = Tuple[List[Terrain], List[Optional[int]]]


class GenerationExhausted(RuntimeError):
    """Raised when no red-number-safe map was found within the attempt bound."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            "Unable to generate a map that satisfies red-number spacing "
            f"after {attempts} attempts."
        )
        self.attempts = attempts


def generate_standard_assignment(
    grid: HexGrid,
    rng: Optional[random.Random] = None,
    max_attempts: int = MAX_GENERATION_ATTEMPTS,
) -> Assignment:
    """Shuffle the standard terrain and number sets until red numbers are apart.

    Terrains and numbers are shuffled independently; numbers fill the
    non-desert tiles in tile-index order. Nothing is written to a board here.
    """
    rng = rng if rng is not None else random.Random()

    terrain_pool: List[Terrain] = []
    for terrain, count in TERRAIN_COUNTS.items():
        terrain_pool.extend([terrain] * count)
    if len(terrain_pool) != grid.tile_count:
        raise ValueError(f"Standard terrain set covers {len(terrain_pool)} tiles, grid has {grid.tile_count}.")

    for attempt in range(1, max_attempts + 1):
        terrains = terrain_pool[:]
        rng.shuffle(terrains)

        tokens = NUMBER_TOKENS[:]
        rng.shuffle(tokens)

        token_iter = iter(tokens)
        numbers: List[Optional[int]] = [
            None if terrain is Terrain.DESERT else next(token_iter) for terrain in terrains
        ]

        if _red_numbers_apart(grid, numbers):
            logger.debug("map_generated", attempts=attempt)
            return terrains, numbers

    raise GenerationExhausted(max_attempts)


def generate_standard_random_map(
    board: BoardState,
    grid: HexGrid,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    max_attempts: int = MAX_GENERATION_ATTEMPTS,
) -> bool:
    """Fill ``board`` with a random standard map; ``False`` leaves it untouched."""
    rng = rng if rng is not None else random.Random(seed)
    try:
        terrains, numbers = generate_standard_assignment(grid, rng, max_attempts)
    except GenerationExhausted as exc:
        logger.warning("map_generation_exhausted", attempts=exc.attempts)
        return False

    board.assign(terrains, numbers)
    return True


def _red_numbers_apart(grid: HexGrid, numbers: List[Optional[int]]) -> bool:
    for tile_id, number in enumerate(numbers):
        if number not in RED_NUMBERS:
            continue
        for neighbor_id in grid.neighbors(tile_id):
            if numbers[neighbor_id] in RED_NUMBERS:
                return False
    return True


def validate_red_number_spacing(board: BoardState, grid: HexGrid) -> bool:
    return _red_numbers_apart(grid, board.numbers())


def validate_standard_counts(board: BoardState) -> bool:
    """True when the board holds exactly the standard terrain and token sets,
    with tokens on every resource tile and none on the desert."""
    if Counter(board.terrains()) != Counter(TERRAIN_COUNTS):
        return False
    if any((tile.terrain is Terrain.DESERT) != (tile.number is None) for tile in board.tiles):
        return False
    placed = Counter(number for number in board.numbers() if number is not None)
    return placed == Counter(NUMBER_TOKENS)
