from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Tuple

import structlog

from catan_opener.domain.board import BoardState, Terrain
from catan_opener.domain.graph import VertexGraph

from .scoring import compute_board_pip_totals, compute_pair_details, opening_coverage, score_pair
from .types import DEFAULT_TOP_K, Opening, OpeningReport, PairScore, ScoringPolicy

logger = structlog.get_logger(__name__)


def candidate_pairs(graph: VertexGraph) -> List[Tuple[int, int]]:
    """Every unordered pair of distinct, non-adjacent vertices.

    Pairs come out ``a``-major then ``b``-major in vertex-id order, which is the
    discovery order ranking ties fall back on.
    """
    pairs: List[Tuple[int, int]] = []
    vertex_ids = list(graph.vertex_ids())
    for index, vertex_a in enumerate(vertex_ids):
        for vertex_b in vertex_ids[index + 1 :]:
            if graph.are_adjacent(vertex_a, vertex_b):
                continue
            pairs.append((vertex_a, vertex_b))
    return pairs


def rank_openings(
    board: BoardState,
    graph: VertexGraph,
    top_k: int = DEFAULT_TOP_K,
    *,
    policy: ScoringPolicy = ScoringPolicy.MULTIPLICATIVE,
) -> List[Opening]:
    if top_k < 0:
        raise ValueError("top_k must be non-negative.")

    scored: List[Tuple[int, int, PairScore]] = [
        (vertex_a, vertex_b, score_pair(board, graph, vertex_a, vertex_b, policy=policy))
        for vertex_a, vertex_b in candidate_pairs(graph)
    ]
    # sorted() is stable, so equal scores keep discovery order.
    scored.sort(key=lambda item: item[2].score, reverse=True)
    logger.debug("openings_ranked", candidates=len(scored), top_k=top_k, policy=policy.value)

    return [
        Opening(
            rank=rank,
            vertex_a=vertex_a,
            vertex_b=vertex_b,
            score=pair_score.score,
            total_pips=pair_score.total_pips,
            resources_covered=pair_score.union_size,
            repeated_numbers=pair_score.repeated_numbers,
            resource_tile_counts=dict(pair_score.resource_tile_counts),
        )
        for rank, (vertex_a, vertex_b, pair_score) in enumerate(scored[:top_k], start=1)
    ]


def describe_opening(
    board: BoardState,
    graph: VertexGraph,
    opening: Opening,
    board_totals: Optional[Mapping[Terrain, int]] = None,
) -> OpeningReport:
    totals: Mapping[Terrain, int] = board_totals if board_totals is not None else compute_board_pip_totals(board)
    details = compute_pair_details(board, graph, opening.vertex_a, opening.vertex_b)
    return OpeningReport(opening=opening, details=details, coverage=opening_coverage(details, totals))


def describe_openings(board: BoardState, graph: VertexGraph, openings: List[Opening]) -> List[OpeningReport]:
    totals: Dict[Terrain, int] = compute_board_pip_totals(board)
    return [describe_opening(board, graph, opening, totals) for opening in openings]
