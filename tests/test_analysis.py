import unittest

from catan_opener.analysis.ranking import candidate_pairs, describe_opening, describe_openings, rank_openings
from catan_opener.analysis.scoring import (
    DICE_PROBABILITY,
    compute_board_pip_totals,
    compute_pair_details,
    opening_coverage,
    pip_count,
    score_pair,
    score_pair_additive,
    vertex_pip_totals,
)
from catan_opener.analysis.types import ScoringPolicy
from catan_opener.domain.board import RESOURCE_TERRAINS, Terrain, new_board
from catan_opener.domain.graph import standard_grid, standard_vertex_graph
from catan_opener.domain.randomizer import NUMBER_TOKENS, generate_standard_random_map

TILE_ZERO_PAIRS = [(0, 2), (0, 3), (0, 4), (1, 3), (1, 4), (1, 5), (2, 4), (2, 5), (3, 5)]


def _single_tile_board(terrain: Terrain, number: int):
    board = new_board(standard_grid())
    board.set_terrain(0, terrain)
    board.set_number(0, number)
    return board


def _random_board(seed: int):
    board = new_board(standard_grid())
    generate_standard_random_map(board, standard_grid(), seed=seed)
    return board


def _far_vertex(graph) -> int:
    return next(vertex.id for vertex in reversed(graph.vertices) if 0 not in vertex.adjacent_tile_ids)


class PipCountTests(unittest.TestCase):
    def test_known_table(self) -> None:
        expected = {2: 1, 12: 1, 3: 2, 11: 2, 4: 3, 10: 3, 5: 4, 9: 4, 6: 5, 8: 5}
        for number, pips in expected.items():
            self.assertEqual(pip_count(number), pips)
        self.assertEqual(pip_count(None), 0)
        self.assertEqual(pip_count(7), 0)

    def test_standard_token_set_sum(self) -> None:
        self.assertEqual(sum(pip_count(number) for number in NUMBER_TOKENS), 58)

    def test_dice_probability_matches_pips(self) -> None:
        self.assertAlmostEqual(DICE_PROBABILITY[6], 5 / 36)
        self.assertAlmostEqual(sum(DICE_PROBABILITY.values()), 30 / 36)


class ScoringTests(unittest.TestCase):
    def setUp(self) -> None:
        self.graph = standard_vertex_graph()

    def test_single_settlement_on_wheat_six(self) -> None:
        board = _single_tile_board(Terrain.WHEAT, 6)
        far_vertex = _far_vertex(self.graph)
        result = score_pair(board, self.graph, 0, far_vertex)

        self.assertEqual(result.total_pips, 5)
        self.assertEqual(result.resources_present, frozenset({Terrain.WHEAT}))
        self.assertEqual(result.union_size, 1)
        self.assertEqual(result.resource_tile_counts[Terrain.WHEAT], 1)
        self.assertEqual(result.repeated_numbers, 0)
        self.assertAlmostEqual(result.score, 5 * 1 * 1.1)

    def test_shared_tile_counts_once_per_settlement(self) -> None:
        board = _single_tile_board(Terrain.WHEAT, 6)
        result = score_pair(board, self.graph, 0, 3)

        self.assertEqual(result.total_pips, 10)
        self.assertEqual(result.resources_present, frozenset({Terrain.WHEAT}))
        self.assertEqual(result.resource_tile_counts[Terrain.WHEAT], 2)
        self.assertEqual(result.repeated_numbers, 1)
        self.assertAlmostEqual(result.score, 10 * 1 * 1.1**2 * 0.95)

    def test_sheep_is_discounted(self) -> None:
        board = _single_tile_board(Terrain.SHEEP, 8)
        result = score_pair(board, self.graph, 0, _far_vertex(self.graph))
        self.assertAlmostEqual(result.score, 5 * 0.9)

    def test_unnumbered_resource_tile_does_not_produce(self) -> None:
        board = new_board(standard_grid())
        board.set_terrain(0, Terrain.ORE)
        result = score_pair(board, self.graph, 0, _far_vertex(self.graph))
        self.assertEqual(result.total_pips, 0)
        self.assertEqual(result.union_size, 0)
        self.assertEqual(result.score, 0.0)

    def test_numbered_desert_adds_pips_but_no_resource(self) -> None:
        board = _single_tile_board(Terrain.DESERT, 6)
        result = score_pair(board, self.graph, 0, 3)
        details = compute_pair_details(board, self.graph, 0, 3)

        self.assertEqual(result.total_pips, 10)
        self.assertEqual(result.resources_present, frozenset())
        self.assertEqual(sum(result.resource_tile_counts.values()), 0)
        self.assertEqual(result.score, 0.0)
        self.assertEqual(details.total_pips, 10)
        self.assertEqual(details.repeated_numbers, (6,))
        self.assertTrue(all(item.pips == 0 for item in details.per_resource.values()))
        self.assertEqual(sum(compute_board_pip_totals(board).values()), 0)

    def test_numbered_desert_pips_match_vertex_overlay(self) -> None:
        board = _single_tile_board(Terrain.DESERT, 9)
        overlay = vertex_pip_totals(board, self.graph)
        far_vertex = _far_vertex(self.graph)
        result = score_pair(board, self.graph, 0, far_vertex)
        self.assertEqual(result.total_pips, overlay[0] + overlay[far_vertex])
        self.assertEqual(result.total_pips, 4)

    def test_repeated_numbers_are_counted_by_value(self) -> None:
        board = new_board(standard_grid())
        for tile_id in range(19):
            board.set_terrain(tile_id, Terrain.WOOD)
            board.set_number(tile_id, 5)
        vertex_a, vertex_b = candidate_pairs(self.graph)[0]
        result = score_pair(board, self.graph, vertex_a, vertex_b)
        self.assertEqual(result.repeated_numbers, 1)

    def test_pair_details_use_same_double_counting(self) -> None:
        board = _single_tile_board(Terrain.ORE, 6)
        details = compute_pair_details(board, self.graph, 0, 3)

        self.assertEqual(details.repeated_numbers, (6,))
        self.assertEqual(details.repeated_count, 1)
        self.assertEqual(details.total_pips, 10)
        self.assertEqual(details.per_resource[Terrain.ORE].pips, 10)
        self.assertAlmostEqual(details.per_resource[Terrain.ORE].prob, 10 / 36)
        self.assertAlmostEqual(details.total_probability, 10 / 36)
        self.assertEqual(set(details.per_resource), set(RESOURCE_TERRAINS))

    def test_details_agree_with_score_on_random_board(self) -> None:
        board = _random_board(21)
        for vertex_a, vertex_b in candidate_pairs(self.graph)[:200]:
            score = score_pair(board, self.graph, vertex_a, vertex_b)
            details = compute_pair_details(board, self.graph, vertex_a, vertex_b)
            self.assertEqual(score.total_pips, details.total_pips)
            self.assertEqual(score.repeated_numbers, details.repeated_count)

    def test_board_pip_totals_on_random_board(self) -> None:
        totals = compute_board_pip_totals(_random_board(4))
        self.assertEqual(sum(totals.values()), 58)

    def test_coverage_for_single_ore_tile(self) -> None:
        board = _single_tile_board(Terrain.ORE, 8)
        totals = compute_board_pip_totals(board)
        self.assertEqual(totals[Terrain.ORE], 5)
        self.assertEqual(totals[Terrain.WOOD], 0)

        details = compute_pair_details(board, self.graph, 0, _far_vertex(self.graph))
        coverage = opening_coverage(details, totals)
        self.assertAlmostEqual(coverage[Terrain.ORE], details.per_resource[Terrain.ORE].pips / 5)
        self.assertAlmostEqual(coverage[Terrain.ORE], 1.0)
        self.assertEqual(coverage[Terrain.WOOD], 0.0)

    def test_vertex_pip_totals(self) -> None:
        board = _single_tile_board(Terrain.BRICK, 4)
        totals = vertex_pip_totals(board, self.graph)
        self.assertEqual(len(totals), 54)
        for vertex_id in range(54):
            expected = 3 if vertex_id in self.graph.tile_vertex_ids(0) else 0
            self.assertEqual(totals[vertex_id], expected)

    def test_additive_policy_uses_union_of_tiles(self) -> None:
        board = _single_tile_board(Terrain.WHEAT, 6)
        result = score_pair_additive(board, self.graph, 0, 3)
        self.assertEqual(result.total_pips, 5)
        self.assertEqual(result.repeated_numbers, 0)
        self.assertEqual(result.resource_tile_counts[Terrain.WHEAT], 1)
        self.assertAlmostEqual(result.score, 5 * 1_000_000 + 1.0 * 10_000 + (5 / 36) * 10_000)

    def test_additive_policy_penalizes_repeats_in_union(self) -> None:
        board = new_board(standard_grid())
        board.set_terrain(0, Terrain.WOOD)
        board.set_number(0, 9)
        board.set_terrain(1, Terrain.WOOD)
        board.set_number(1, 9)
        shared = next(
            vertex.id for vertex in self.graph.vertices if {0, 1}.issubset(vertex.adjacent_tile_ids)
        )
        result = score_pair(board, self.graph, shared, _far_vertex(self.graph), policy=ScoringPolicy.ADDITIVE)
        self.assertEqual(result.total_pips, 4)
        self.assertEqual(result.repeated_numbers, 1)


class RankingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.graph = standard_vertex_graph()

    def test_candidate_pair_count(self) -> None:
        pairs = candidate_pairs(self.graph)
        self.assertEqual(len(pairs), 54 * 53 // 2 - 72)
        self.assertEqual(len(pairs), 1359)
        self.assertEqual(pairs, sorted(pairs))

    def test_ranking_never_returns_adjacent_vertices(self) -> None:
        board = _random_board(31)
        for opening in rank_openings(board, self.graph, top_k=1359):
            self.assertNotEqual(opening.vertex_a, opening.vertex_b)
            self.assertFalse(self.graph.are_adjacent(opening.vertex_a, opening.vertex_b))

    def test_ranking_is_sorted_by_score(self) -> None:
        board = _random_board(32)
        openings = rank_openings(board, self.graph, top_k=200)
        self.assertEqual(len(openings), 200)
        scores = [opening.score for opening in openings]
        self.assertEqual(scores, sorted(scores, reverse=True))
        self.assertEqual([opening.rank for opening in openings], list(range(1, 201)))

    def test_all_desert_board_scores_zero(self) -> None:
        board = new_board(standard_grid())
        openings = rank_openings(board, self.graph, top_k=2000)
        self.assertEqual(len(openings), 1359)
        self.assertTrue(all(opening.score == 0 for opening in openings))
        self.assertEqual(
            [(opening.vertex_a, opening.vertex_b) for opening in openings],
            candidate_pairs(self.graph),
        )

    def test_ties_keep_discovery_order(self) -> None:
        board = _single_tile_board(Terrain.WHEAT, 6)
        openings = rank_openings(board, self.graph, top_k=10)
        top_pairs = [opening.vertex_pair for opening in openings[:9]]
        self.assertEqual(top_pairs, TILE_ZERO_PAIRS)
        for opening in openings[:9]:
            self.assertEqual(opening.total_pips, 10)
            self.assertEqual(opening.resources_covered, 1)
            self.assertAlmostEqual(opening.score, 10 * 1.1**2 * 0.95)
        self.assertEqual(openings[9].total_pips, 5)
        self.assertAlmostEqual(openings[9].score, 5 * 1.1)

    def test_top_k_limits_result(self) -> None:
        board = _random_board(33)
        self.assertEqual(len(rank_openings(board, self.graph)), 28)
        self.assertEqual(len(rank_openings(board, self.graph, top_k=18)), 18)
        self.assertEqual(rank_openings(board, self.graph, top_k=0), [])
        with self.assertRaises(ValueError):
            rank_openings(board, self.graph, top_k=-1)

    def test_ranking_is_deterministic(self) -> None:
        board = _random_board(34)
        first = rank_openings(board, self.graph, top_k=28)
        second = rank_openings(board, self.graph, top_k=28)
        self.assertEqual(first, second)

    def test_additive_policy_ranking_is_sorted(self) -> None:
        board = _random_board(35)
        openings = rank_openings(board, self.graph, top_k=50, policy=ScoringPolicy.ADDITIVE)
        scores = [opening.score for opening in openings]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_describe_opening_reports_coverage(self) -> None:
        board = _single_tile_board(Terrain.ORE, 6)
        best = rank_openings(board, self.graph, top_k=1)[0]
        report = describe_opening(board, self.graph, best)
        self.assertEqual(report.details.total_pips, 10)
        self.assertAlmostEqual(report.coverage[Terrain.ORE], 2.0)

    def test_describe_openings_matches_ranked_pips(self) -> None:
        board = _random_board(36)
        openings = rank_openings(board, self.graph, top_k=5)
        reports = describe_openings(board, self.graph, openings)
        self.assertEqual(len(reports), 5)
        for report in reports:
            self.assertEqual(report.details.total_pips, report.opening.total_pips)
            self.assertEqual(report.details.repeated_count, report.opening.repeated_numbers)


if __name__ == "__main__":
    unittest.main()
