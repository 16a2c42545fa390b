from __future__ import annotations

from typing import Protocol

from .catalog import Platform, lookup
from .constraints import validate_budget, validate_effort
from .models import BusinessProfile, MarketingGoal


class Scorer(Protocol):
    """Scores one platform for one business, 0.0 (worst fit) to 1.0 (perfect fit)."""

    name: str

    def score(self, business: BusinessProfile, platform: Platform | str) -> float: ...


class AudienceScorer:
    name = "audience"

    def score(self, business: BusinessProfile, platform: Platform | str) -> float:
        meta = lookup(platform)
        if meta is None:
            return 0.0
        # A weak fit still scores; only the filters eliminate platforms.
        return 1.0 if business.type in meta.best_for else 0.1


class BudgetScorer:
    name = "budget"

    def score(self, business: BusinessProfile, platform: Platform | str) -> float:
        return max(0.0, 1.0 - validate_budget(business.budget, platform).penalty)


class EffortScorer:
    name = "effort"

    def score(self, business: BusinessProfile, platform: Platform | str) -> float:
        return max(0.0, 1.0 - validate_effort(business, platform).penalty)


class ReturnScorer:
    name = "return"

    def score(self, business: BusinessProfile, platform: Platform | str) -> float:
        meta = lookup(platform)
        if meta is None:
            return 0.0
        if business.goal == MarketingGoal.awareness:
            return meta.reach_potential / 10.0
        if business.goal == MarketingGoal.sales:
            return meta.conversion_focus / 10.0
        return 0.0


SCORERS: tuple[Scorer, ...] = (
    AudienceScorer(),
    BudgetScorer(),
    EffortScorer(),
    ReturnScorer(),
)
