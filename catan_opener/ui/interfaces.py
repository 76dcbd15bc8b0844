from __future__ import annotations

from typing import Optional, Protocol, Tuple

from catan_opener.domain.board import BoardState
from catan_opener.domain.graph import VertexGraph

VertexPair = Tuple[int, int]


class UserPrompt(Protocol):
    """Yes/no gate in front of destructive editor commands."""

    def confirm(self, message: str) -> bool: ...

    def alert(self, message: str) -> None: ...


class Renderer(Protocol):
    """Draws a board; ``highlight`` marks two settlement spots as "1" and "2"."""

    def render(
        self,
        board: BoardState,
        graph: VertexGraph,
        highlight: Optional[VertexPair] = None,
    ) -> None: ...


class AutoConfirmPrompt:
    def confirm(self, message: str) -> bool:
        return True

    def alert(self, message: str) -> None:
        return None
