from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

LOW_BUDGET_CEILING = 50.0
MEDIUM_BUDGET_CEILING = 200.0


class BusinessType(str, Enum):
    retail = "retail"
    service = "service"
    digital = "digital"


class MarketingGoal(str, Enum):
    awareness = "awareness"
    sales = "sales"


class BudgetTier(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


def tier_for_budget(budget: float) -> BudgetTier:
    """Map a monthly budget onto exactly one tier: <50, [50, 200], >200."""
    if budget < LOW_BUDGET_CEILING:
        return BudgetTier.low
    if budget <= MEDIUM_BUDGET_CEILING:
        return BudgetTier.medium
    return BudgetTier.high


class BusinessProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: BusinessType
    description: str = Field(default="", max_length=2000)
    location: str = Field(default="", description='Empty or "online" for online-only businesses')
    budget: float = Field(..., ge=0.0, allow_inf_nan=False, description="Monthly marketing spend")
    channels: list[str] = Field(default_factory=list)
    goal: MarketingGoal

    @property
    def is_online_only(self) -> bool:
        return self.location.strip().lower() in ("", "online")

    @property
    def is_local(self) -> bool:
        return not self.is_online_only

    @property
    def budget_tier(self) -> BudgetTier:
        return tier_for_budget(self.budget)


class ContentTemplate(BaseModel):
    hook: str
    caption: str
    cta: str
    hashtags: list[str] = Field(default_factory=list)


class Recommendation(BaseModel):
    rank: int = Field(..., ge=1)
    platform: str
    score: float = Field(..., ge=0.0, le=1.0)
    reasoning: str = ""
    content_template: ContentTemplate | None = None


class RankedResult(BaseModel):
    recommendations: list[Recommendation]
    total_candidates: int
    advisory: str | None = None


class ConsultationResult(BaseModel):
    recommendations: list[Recommendation]
    strategic_advice: str
    risks: list[str] = Field(default_factory=list)
    persona: str = ""


class FilterExplanation(BaseModel):
    candidates: list[str]
    explanations: dict[str, str]
