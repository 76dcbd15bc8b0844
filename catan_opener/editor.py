from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TypeVar

import structlog

from catan_opener.analysis.ranking import rank_openings
from catan_opener.analysis.types import Opening, RankingConfig
from catan_opener.domain.board import (
    NUMBER_CYCLE,
    TERRAIN_CYCLE,
    BoardState,
    Terrain,
    new_board,
    parse_number,
    parse_terrain,
)
from catan_opener.domain.graph import VertexGraph, build_vertex_graph, standard_grid, standard_vertex_graph
from catan_opener.domain.hexgrid import HEX_SIZE, HexGrid
from catan_opener.domain.randomizer import MAX_GENERATION_ATTEMPTS, generate_standard_random_map
from catan_opener.ui.interfaces import AutoConfirmPrompt, Renderer, UserPrompt

logger = structlog.get_logger(__name__)

RANDOMIZE_CONFIRM_MESSAGE = "This action will erase the current board. Proceed?"
RESET_CONFIRM_MESSAGE = "Are you sure you want to reset the board?"
GENERATION_FAILED_MESSAGE = "Failed to generate a valid map. Try again."

T = TypeVar("T")


@dataclass(frozen=True)
class EditorConfig:
    ranking: RankingConfig = field(default_factory=RankingConfig)
    max_generation_attempts: int = MAX_GENERATION_ATTEMPTS
    seed: Optional[int] = None
    hex_size: float = HEX_SIZE


def cycle_value(values: Sequence[T], current: T, direction: int) -> T:
    """Step through ``values`` with wrap-around.

    A ``current`` outside ``values`` (a tile set directly on the board) steps
    to the first value going forward and the last going backward.
    """
    if direction not in (1, -1):
        raise ValueError("direction must be 1 or -1.")
    if current not in values:
        return values[0] if direction == 1 else values[-1]
    index = values.index(current)
    return values[(index + direction) % len(values)]


class BoardEditor:
    """Command surface a front end drives: edits, randomize, reset and rank.

    Destructive commands ask the prompt first unless the board is still in
    its default all-desert state; a declined prompt leaves the board as is.
    """

    def __init__(
        self,
        board: Optional[BoardState] = None,
        grid: Optional[HexGrid] = None,
        graph: Optional[VertexGraph] = None,
        *,
        prompt: Optional[UserPrompt] = None,
        renderer: Optional[Renderer] = None,
        config: EditorConfig = EditorConfig(),
    ) -> None:
        self.config = config
        self.grid = grid if grid is not None else standard_grid()
        if graph is not None:
            self.graph = graph
        elif grid is None:
            self.graph = standard_vertex_graph(config.hex_size)
        else:
            self.graph = build_vertex_graph(self.grid, config.hex_size)
        self.board = board if board is not None else new_board(self.grid)
        self.prompt: UserPrompt = prompt if prompt is not None else AutoConfirmPrompt()
        self.renderer = renderer
        self._rng = random.Random(config.seed)

    def cycle_terrain(self, tile_id: int, direction: int = 1) -> Terrain:
        self._check_tile(tile_id)
        terrain = cycle_value(TERRAIN_CYCLE, self.board.get_tile(tile_id).terrain, direction)
        self.board.set_terrain(tile_id, terrain)
        self._changed("cycle_terrain", tile_id=tile_id, terrain=terrain.value)
        return terrain

    def cycle_number(self, tile_id: int, direction: int = 1) -> Optional[int]:
        self._check_tile(tile_id)
        number = cycle_value(NUMBER_CYCLE, self.board.get_tile(tile_id).number, direction)
        self.board.set_number(tile_id, number)
        self._changed("cycle_number", tile_id=tile_id, number=number)
        return number

    def set_terrain(self, tile_id: int, value: object) -> Terrain:
        self._check_tile(tile_id)
        terrain = parse_terrain(value)
        self.board.set_terrain(tile_id, terrain)
        self._changed("set_terrain", tile_id=tile_id, terrain=terrain.value)
        return terrain

    def set_number(self, tile_id: int, value: object) -> Optional[int]:
        self._check_tile(tile_id)
        number = parse_number(value)
        self.board.set_number(tile_id, number)
        self._changed("set_number", tile_id=tile_id, number=number)
        return number

    def randomize_standard_map(self) -> bool:
        if not self._confirm_destructive(RANDOMIZE_CONFIRM_MESSAGE):
            return False

        success = generate_standard_random_map(
            self.board,
            self.grid,
            rng=self._rng,
            max_attempts=self.config.max_generation_attempts,
        )
        if not success:
            self.prompt.alert(GENERATION_FAILED_MESSAGE)
            return False

        self._changed("randomize_standard_map")
        return True

    def reset(self) -> bool:
        if not self._confirm_destructive(RESET_CONFIRM_MESSAGE):
            return False
        self.board.reset()
        self._changed("reset")
        return True

    def rank_openings(self, top_k: Optional[int] = None) -> List[Opening]:
        ranking = self.config.ranking
        return rank_openings(
            self.board.snapshot(),
            self.graph,
            ranking.top_k if top_k is None else top_k,
            policy=ranking.policy,
        )

    def _confirm_destructive(self, message: str) -> bool:
        if self.board.is_default():
            return True
        confirmed = bool(self.prompt.confirm(message))
        if not confirmed:
            logger.info("destructive_command_declined", message=message)
        return confirmed

    def _check_tile(self, tile_id: int) -> None:
        if isinstance(tile_id, bool) or not isinstance(tile_id, int) or not 0 <= tile_id < self.board.tile_count:
            raise ValueError(f"Invalid tile index: {tile_id!r}.")

    def _changed(self, command: str, **context: object) -> None:
        logger.debug("board_edited", command=command, **context)
        if self.renderer is not None:
            self.renderer.render(self.board, self.graph, None)
