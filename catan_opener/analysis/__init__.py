"""Opening scoring and ranking."""

from .ranking import candidate_pairs, describe_opening, describe_openings, rank_openings
from .scoring import (
    DICE_PROBABILITY,
    PIP_VALUES,
    compute_board_pip_totals,
    compute_pair_details,
    opening_coverage,
    pip_count,
    score_pair,
    score_pair_additive,
    score_pair_multiplicative,
    vertex_pip_totals,
)
from .types import (
    COMPACT_TOP_K,
    DEFAULT_TOP_K,
    Opening,
    OpeningReport,
    PairDetails,
    PairScore,
    RankingConfig,
    ResourceBreakdown,
    ScoringPolicy,
)

__all__ = [
    "COMPACT_TOP_K",
    "DEFAULT_TOP_K",
    "DICE_PROBABILITY",
    "PIP_VALUES",
    "Opening",
    "OpeningReport",
    "PairDetails",
    "PairScore",
    "RankingConfig",
    "ResourceBreakdown",
    "ScoringPolicy",
    "candidate_pairs",
    "compute_board_pip_totals",
    "compute_pair_details",
    "describe_opening",
    "describe_openings",
    "opening_coverage",
    "pip_count",
    "rank_openings",
    "score_pair",
    "score_pair_additive",
    "score_pair_multiplicative",
    "vertex_pip_totals",
]
