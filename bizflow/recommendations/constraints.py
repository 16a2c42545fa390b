from __future__ import annotations

import logging
from dataclasses import dataclass

from .catalog import EffortLevel, Platform, lookup
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .models import BudgetTier, BusinessProfile, BusinessType, MarketingGoal, tier_for_budget

logger = logging.getLogger(__name__)

_NOT_FOUND_REASON = "Platform metadata not found"


@dataclass(frozen=True)
class ConstraintResult:
    """Outcome of one feasibility check. ``penalty`` runs 0.0 (ideal) to 1.0 (worst)."""

    is_valid: bool
    reason: str
    penalty: float


# Names kept for callers that distinguish the two kinds of check.
BudgetConstraint = ConstraintResult
EffortConstraint = ConstraintResult


def _not_found(platform: Platform | str) -> ConstraintResult:
    logger.debug("No catalog entry for %s", platform)
    return ConstraintResult(is_valid=False, reason=_NOT_FOUND_REASON, penalty=1.0)


def validate_budget(budget: float, platform: Platform | str) -> ConstraintResult:
    meta = lookup(platform)
    if meta is None:
        return _not_found(platform)

    if budget < meta.min_budget:
        return ConstraintResult(
            is_valid=False,
            reason=(
                f"Budget (${budget:.2f}/month) is below the ${meta.min_budget:.2f}/month "
                f"minimum for {meta.platform.value}"
            ),
            penalty=1.0,
        )

    tier = tier_for_budget(budget)
    if tier is BudgetTier.low:
        if not meta.is_organic:
            return ConstraintResult(True, "Paid-only reach is hard to buy on a low budget", 0.7)
        return ConstraintResult(True, "Organic posting suits a low budget", 0.0)

    if tier is BudgetTier.medium:
        if meta.is_paid and not meta.is_organic:
            return ConstraintResult(True, "Medium budget covers only limited paid advertising", 0.3)
        return ConstraintResult(True, "Medium budget sustains a consistent organic presence", 0.0)

    return ConstraintResult(True, "Budget supports both organic and paid strategies", 0.0)


def validate_effort(business: BusinessProfile, platform: Platform | str) -> ConstraintResult:
    meta = lookup(platform)
    if meta is None:
        return _not_found(platform)

    if meta.requires_video:
        if business.type == BusinessType.retail:
            return ConstraintResult(True, "Physical products translate well into short video", 0.2)
        return ConstraintResult(
            True, "Video production is a heavy lift for service and digital businesses", 0.6
        )

    if meta.effort_level is EffortLevel.high:
        return ConstraintResult(True, "High posting effort may stretch a small team", 0.4)
    if meta.effort_level is EffortLevel.medium:
        return ConstraintResult(True, "Moderate effort, manageable with a regular schedule", 0.1)
    return ConstraintResult(True, "Low effort, suited to resource-constrained businesses", 0.0)


_VISUAL_PENALTIES: dict[str, tuple[float, str]] = {
    BusinessType.retail.value: (0.0, "Products give natural material for visual posts"),
    BusinessType.service.value: (0.2, "Services can show before/after shots, testimonials and the team"),
    BusinessType.digital.value: (0.3, "Digital offerings need creative work to look good visually"),
}


def validate_visual_requirements(
    business: BusinessProfile, platform: Platform | str,
) -> ConstraintResult:
    meta = lookup(platform)
    if meta is None:
        return _not_found(platform)

    if not meta.requires_visuals:
        return ConstraintResult(True, "Text-first platform, no visual assets required", 0.0)

    business_type = getattr(business.type, "value", business.type)
    penalty, reason = _VISUAL_PENALTIES.get(business_type, (0.0, "Unknown business type"))
    return ConstraintResult(True, reason, penalty)


def _threshold_penalty(rating: int) -> float:
    if rating >= 8:
        return 0.0
    if rating >= 6:
        return 0.2
    return 0.4


def validate_goal_alignment(goal: MarketingGoal | str, platform: Platform | str) -> ConstraintResult:
    """Penalise weak reach for awareness goals and weak conversion for sales goals."""
    meta = lookup(platform)
    if meta is None:
        return _not_found(platform)

    if goal == MarketingGoal.awareness:
        penalty = _threshold_penalty(meta.reach_potential)
        return ConstraintResult(True, f"Reach potential {meta.reach_potential}/10 for awareness", penalty)
    if goal == MarketingGoal.sales:
        penalty = _threshold_penalty(meta.conversion_focus)
        return ConstraintResult(True, f"Conversion focus {meta.conversion_focus}/10 for sales", penalty)
    return ConstraintResult(True, "Unknown goal", 0.0)


def evaluate_constraints(
    business: BusinessProfile, platform: Platform | str,
) -> dict[str, ConstraintResult]:
    return {
        "budget": validate_budget(business.budget, platform),
        "effort": validate_effort(business, platform),
        "visual": validate_visual_requirements(business, platform),
        "goal": validate_goal_alignment(business.goal, platform),
    }


def combined_penalty(
    business: BusinessProfile,
    platform: Platform | str,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> float:
    """Weighted mean of the four check penalties; equal weights give the plain mean."""
    results = evaluate_constraints(business, platform)
    weights = config.constraint_weights
    total_weight = sum(weights.get(name, 1.0) for name in results)
    if total_weight <= 0:
        return 0.0
    total = sum(weights.get(name, 1.0) * result.penalty for name, result in results.items())
    return min(1.0, max(0.0, total / total_weight))


def is_valid_platform(business: BusinessProfile, platform: Platform | str) -> bool:
    # Goal alignment only ever penalises.
    return (
        validate_budget(business.budget, platform).is_valid
        and validate_effort(business, platform).is_valid
        and validate_visual_requirements(business, platform).is_valid
    )
