from __future__ import annotations

from collections import Counter
from typing import Dict, Iterator, Mapping, Optional

from catan_opener.domain.board import RESOURCE_TERRAINS, BoardState, Terrain, Tile
from catan_opener.domain.graph import VertexGraph

from .types import PairDetails, PairScore, ScoringPolicy

PIP_VALUES = {
    2: 1,
    3: 2,
    4: 3,
    5: 4,
    6: 5,
    8: 5,
    9: 4,
    10: 3,
    11: 2,
    12: 1,
}

# Chance of rolling each number with two six-sided dice.
DICE_PROBABILITY = {number: pips / 36 for number, pips in PIP_VALUES.items()}

RESOURCE_MULTIPLIERS: Dict[Terrain, float] = {
    Terrain.WHEAT: 1.1,
    Terrain.ORE: 1.1,
    Terrain.WOOD: 1.0,
    Terrain.BRICK: 1.0,
    Terrain.SHEEP: 0.9,
}
REPEATED_NUMBER_MULTIPLIER = 0.95

# Weights of the additive policy: ore = wheat > brick = wood > wool.
ADDITIVE_RESOURCE_WEIGHTS: Dict[Terrain, float] = {
    Terrain.ORE: 1.0,
    Terrain.WHEAT: 1.0,
    Terrain.BRICK: 0.7,
    Terrain.WOOD: 0.7,
    Terrain.SHEEP: 0.25,
}
ADDITIVE_PIP_WEIGHT = 1_000_000
ADDITIVE_COVERAGE_WEIGHT = 10_000
ADDITIVE_EXPECTED_WEIGHT = 10_000
ADDITIVE_REPEAT_PENALTY = 1_000


def pip_count(number: Optional[int]) -> int:
    if number is None:
        return 0
    return PIP_VALUES.get(number, 0)


def dice_probability(number: Optional[int]) -> float:
    if number is None:
        return 0.0
    return DICE_PROBABILITY.get(number, 0.0)


def score_pair(
    board: BoardState,
    graph: VertexGraph,
    vertex_a: int,
    vertex_b: int,
    *,
    policy: ScoringPolicy = ScoringPolicy.MULTIPLICATIVE,
) -> PairScore:
    if policy is ScoringPolicy.ADDITIVE:
        return score_pair_additive(board, graph, vertex_a, vertex_b)
    return score_pair_multiplicative(board, graph, vertex_a, vertex_b)


def score_pair_multiplicative(
    board: BoardState,
    graph: VertexGraph,
    vertex_a: int,
    vertex_b: int,
) -> PairScore:
    """Score two settlements as independent producers.

    A tile touched by both settlements is counted once for each of them, so it
    contributes twice to the pip total and the per-resource tile counts. The
    resource set is unaffected by that double count. A numbered desert adds
    its pips but no resource.
    """
    total_pips = 0
    resources_present: set[Terrain] = set()
    resource_tile_counts = {resource: 0 for resource in RESOURCE_TERRAINS}

    for vertex_id in (vertex_a, vertex_b):
        for tile in _numbered_tiles(board, graph, vertex_id):
            total_pips += pip_count(tile.number)
            if tile.resource is None:
                continue
            resources_present.add(tile.resource)
            resource_tile_counts[tile.resource] += 1

    repeated_numbers = len(_vertex_numbers(board, graph, vertex_a) & _vertex_numbers(board, graph, vertex_b))

    score = float(total_pips * len(resources_present))
    for resource, count in resource_tile_counts.items():
        score *= RESOURCE_MULTIPLIERS[resource] ** count
    score *= REPEATED_NUMBER_MULTIPLIER**repeated_numbers

    return PairScore(
        score=score,
        total_pips=total_pips,
        resources_present=frozenset(resources_present),
        resource_tile_counts=resource_tile_counts,
        repeated_numbers=repeated_numbers,
    )


def score_pair_additive(
    board: BoardState,
    graph: VertexGraph,
    vertex_a: int,
    vertex_b: int,
) -> PairScore:
    """Earlier ranking formula, kept as an alternative policy.

    Works on the union of touched tiles and scores in strict priority: pips
    with each dice number counted once, then weighted resource coverage and
    weighted expected production, then a small penalty per repeated number.
    """
    union_tile_ids = sorted(
        set(graph.vertex(vertex_a).adjacent_tile_ids) | set(graph.vertex(vertex_b).adjacent_tile_ids)
    )
    union_tiles = [board.get_tile(tile_id) for tile_id in union_tile_ids]

    number_counts = Counter(tile.number for tile in union_tiles if tile.number is not None)
    unique_pips = sum(pip_count(number) for number in number_counts)
    repeated_in_union = sum(count - 1 for count in number_counts.values() if count > 1)

    resources_present: set[Terrain] = set()
    resource_tile_counts = {resource: 0 for resource in RESOURCE_TERRAINS}
    weighted_expected = 0.0
    for tile in union_tiles:
        resource = tile.resource
        if resource is None:
            continue
        resources_present.add(resource)
        if tile.number is None:
            continue
        resource_tile_counts[resource] += 1
        weighted_expected += dice_probability(tile.number) * ADDITIVE_RESOURCE_WEIGHTS[resource]

    weighted_coverage = sum(ADDITIVE_RESOURCE_WEIGHTS[resource] for resource in resources_present)

    score = (
        unique_pips * ADDITIVE_PIP_WEIGHT
        + weighted_coverage * ADDITIVE_COVERAGE_WEIGHT
        + weighted_expected * ADDITIVE_EXPECTED_WEIGHT
        - repeated_in_union * ADDITIVE_REPEAT_PENALTY
    )
    return PairScore(
        score=float(score),
        total_pips=unique_pips,
        resources_present=frozenset(resources_present),
        resource_tile_counts=resource_tile_counts,
        repeated_numbers=repeated_in_union,
    )


def compute_pair_details(
    board: BoardState,
    graph: VertexGraph,
    vertex_a: int,
    vertex_b: int,
) -> PairDetails:
    repeated = _vertex_numbers(board, graph, vertex_a) & _vertex_numbers(board, graph, vertex_b)
    details = PairDetails(repeated_numbers=tuple(sorted(repeated)), total_pips=0)

    for vertex_id in (vertex_a, vertex_b):
        for tile in _numbered_tiles(board, graph, vertex_id):
            pips = pip_count(tile.number)
            details.total_pips += pips
            if tile.resource is None:
                continue
            breakdown = details.per_resource[tile.resource]
            breakdown.prob += dice_probability(tile.number)
            breakdown.pips += pips
    return details


def compute_board_pip_totals(board: BoardState) -> Dict[Terrain, int]:
    totals = {resource: 0 for resource in RESOURCE_TERRAINS}
    for tile in board.tiles:
        if tile.resource is None or tile.number is None:
            continue
        totals[tile.resource] += pip_count(tile.number)
    return totals


def opening_coverage(details: PairDetails, board_totals: Mapping[Terrain, int]) -> Dict[Terrain, float]:
    coverage: Dict[Terrain, float] = {}
    for resource in RESOURCE_TERRAINS:
        board_pips = board_totals.get(resource, 0)
        if board_pips <= 0:
            coverage[resource] = 0.0
            continue
        coverage[resource] = details.per_resource[resource].pips / board_pips
    return coverage


def vertex_pip_totals(board: BoardState, graph: VertexGraph) -> Dict[int, int]:
    totals: Dict[int, int] = {}
    for vertex in graph.vertices:
        totals[vertex.id] = sum(pip_count(board.get_tile(tile_id).number) for tile_id in vertex.adjacent_tile_ids)
    return totals


def _numbered_tiles(board: BoardState, graph: VertexGraph, vertex_id: int) -> Iterator[Tile]:
    for tile_id in graph.vertex(vertex_id).adjacent_tile_ids:
        tile = board.get_tile(tile_id)
        if tile.number is None:
            continue
        yield tile


def _vertex_numbers(board: BoardState, graph: VertexGraph, vertex_id: int) -> set[int]:
    numbers = set()
    for tile_id in graph.vertex(vertex_id).adjacent_tile_ids:
        number = board.get_tile(tile_id).number
        if number is not None:
            numbers.add(number)
    return numbers
