from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Tuple

from catan_opener.domain.board import RESOURCE_TERRAINS, Terrain

DEFAULT_TOP_K = 28
COMPACT_TOP_K = 18


class ScoringPolicy(str, Enum):
    MULTIPLICATIVE = "multiplicative"
    ADDITIVE = "additive"


@dataclass(frozen=True)
class RankingConfig:
    top_k: int = DEFAULT_TOP_K
    policy: ScoringPolicy = ScoringPolicy.MULTIPLICATIVE


@dataclass(frozen=True)
class PairScore:
    score: float
    total_pips: int
    resources_present: FrozenSet[Terrain]
    resource_tile_counts: Dict[Terrain, int]
    repeated_numbers: int

    @property
    def union_size(self) -> int:
        return len(self.resources_present)


@dataclass
class ResourceBreakdown:
    prob: float = 0.0
    pips: int = 0


@dataclass
class PairDetails:
    repeated_numbers: Tuple[int, ...]
    total_pips: int
    per_resource: Dict[Terrain, ResourceBreakdown] = field(
        default_factory=lambda: {resource: ResourceBreakdown() for resource in RESOURCE_TERRAINS}
    )

    @property
    def repeated_count(self) -> int:
        return len(self.repeated_numbers)

    @property
    def total_probability(self) -> float:
        return sum(item.prob for item in self.per_resource.values())


@dataclass(frozen=True)
class Opening:
    rank: int
    vertex_a: int
    vertex_b: int
    score: float
    total_pips: int
    resources_covered: int
    repeated_numbers: int
    resource_tile_counts: Dict[Terrain, int]

    @property
    def vertex_pair(self) -> Tuple[int, int]:
        return (self.vertex_a, self.vertex_b)


@dataclass
class OpeningReport:
    opening: Opening
    details: PairDetails
    coverage: Dict[Terrain, float]
