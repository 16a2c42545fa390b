from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from .catalog import Platform, catalog_position
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .filters import apply_all_filters
from .models import BusinessProfile, RankedResult, Recommendation
from .scoring import SCORERS, Scorer

logger = logging.getLogger(__name__)

NO_PLATFORMS_ADVISORY = (
    "No suitable marketing platforms were found based on your business profile. "
    "This might be due to very specific constraints."
)


@dataclass(frozen=True)
class ScoredCandidate:
    platform: Platform | str
    score: float
    breakdown: dict[str, float] = field(default_factory=dict)

    @property
    def platform_name(self) -> str:
        return getattr(self.platform, "value", str(self.platform))


def _composite(breakdown: dict[str, float], config: EngineConfig) -> float:
    weights = config.scorer_weights
    total_weight = sum(weights.get(name, 1.0) for name in breakdown)
    if total_weight <= 0:
        return 0.0
    mean = sum(weights.get(name, 1.0) * value for name, value in breakdown.items()) / total_weight
    # Rounded so that summation order cannot split an exact tie.
    return round(mean, config.score_precision)


def score_candidates(
    business: BusinessProfile,
    candidates: Sequence[Platform | str],
    scorers: Sequence[Scorer] = SCORERS,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[ScoredCandidate]:
    scored: list[ScoredCandidate] = []
    for platform in candidates:
        breakdown = {s.name: s.score(business, platform) for s in scorers}
        scored.append(ScoredCandidate(platform, _composite(breakdown, config), breakdown))
    return scored


def rank_candidates(scored: Sequence[ScoredCandidate]) -> list[ScoredCandidate]:
    """Sort by score descending; ties go to the platform listed first in the catalog."""
    return sorted(scored, key=lambda c: (-c.score, catalog_position(c.platform), c.platform_name))


def recommend(
    business: BusinessProfile,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> RankedResult:
    candidates = apply_all_filters(business)
    if not candidates:
        logger.info("No candidate platforms survived filtering")
        return RankedResult(recommendations=[], total_candidates=0, advisory=NO_PLATFORMS_ADVISORY)

    ranked = rank_candidates(score_candidates(business, candidates, config=config))
    top = ranked[: config.top_n]
    for c in top:
        logger.debug("%s scored %.4f %s", c.platform_name, c.score, c.breakdown)

    return RankedResult(
        recommendations=[
            Recommendation(rank=i, platform=c.platform_name, score=c.score)
            for i, c in enumerate(top, start=1)
        ],
        total_candidates=len(candidates),
    )
