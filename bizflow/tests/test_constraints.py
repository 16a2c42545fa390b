from __future__ import annotations

import dataclasses
from unittest.mock import patch

import pytest

from bizflow.recommendations.catalog import Platform, all_platform_ids, lookup
from bizflow.recommendations.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from bizflow.recommendations.constraints import (
    combined_penalty,
    is_valid_platform,
    validate_budget,
    validate_effort,
    validate_goal_alignment,
    validate_visual_requirements,
)
from bizflow.recommendations.models import BusinessProfile, BudgetTier, tier_for_budget


def _business(**overrides) -> BusinessProfile:
    fields = dict(type="retail", location="", budget=100.0, goal="awareness")
    fields.update(overrides)
    return BusinessProfile(**fields)


# ── Budget tiers ─────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "budget, tier",
    [
        (0.0, BudgetTier.low),
        (49.99, BudgetTier.low),
        (50.0, BudgetTier.medium),
        (200.0, BudgetTier.medium),
        (200.01, BudgetTier.high),
        (10_000.0, BudgetTier.high),
    ],
)
def test_budget_tier_boundaries(budget, tier):
    assert tier_for_budget(budget) is tier


def test_budget_tiers_are_exhaustive_and_disjoint():
    for cents in range(0, 30_000, 7):
        budget = cents / 100
        matches = [
            budget < 50,
            50 <= budget <= 200,
            budget > 200,
        ]
        assert matches.count(True) == 1
        assert tier_for_budget(budget) is [BudgetTier.low, BudgetTier.medium, BudgetTier.high][matches.index(True)]


# ── Budget check ─────────────────────────────────────────────────────────


class TestBudgetCheck:
    def test_low_budget_organic_platform_has_no_penalty(self):
        result = validate_budget(30.0, Platform.whatsapp)
        assert result.is_valid is True
        assert result.penalty == 0.0

    def test_low_budget_organic_and_paid_platform_has_no_penalty(self):
        assert validate_budget(30.0, Platform.google_business).penalty == 0.0

    def test_low_budget_paid_only_platform_is_penalised(self):
        paid_only = dataclasses.replace(lookup(Platform.facebook), is_organic=False)
        with patch("bizflow.recommendations.constraints.lookup", return_value=paid_only):
            result = validate_budget(30.0, Platform.facebook)
        assert result.is_valid is True
        assert result.penalty == 0.7

    def test_medium_budget_paid_only_platform_is_soft_penalised(self):
        paid_only = dataclasses.replace(lookup(Platform.facebook), is_organic=False)
        with patch("bizflow.recommendations.constraints.lookup", return_value=paid_only):
            assert validate_budget(120.0, Platform.facebook).penalty == 0.3

    def test_high_budget_never_penalised(self):
        paid_only = dataclasses.replace(lookup(Platform.facebook), is_organic=False)
        with patch("bizflow.recommendations.constraints.lookup", return_value=paid_only):
            assert validate_budget(500.0, Platform.facebook).penalty == 0.0

    def test_budget_below_minimum_is_invalid(self):
        pricey = dataclasses.replace(lookup(Platform.youtube), min_budget=100.0)
        with patch("bizflow.recommendations.constraints.lookup", return_value=pricey):
            result = validate_budget(80.0, Platform.youtube)
        assert result.is_valid is False
        assert result.penalty == 1.0
        assert "YouTube" in result.reason

    def test_unknown_platform(self):
        result = validate_budget(100.0, "MySpace")
        assert result.is_valid is False
        assert result.penalty == 1.0


# ── Effort, visual and goal checks ───────────────────────────────────────


def test_video_platform_effort_depends_on_business_type():
    assert validate_effort(_business(type="retail"), Platform.tiktok).penalty == 0.2
    assert validate_effort(_business(type="service"), Platform.tiktok).penalty == 0.6
    assert validate_effort(_business(type="digital"), Platform.youtube).penalty == 0.6


def test_effort_level_penalties():
    business = _business()
    assert validate_effort(business, Platform.linkedin).penalty == 0.4
    assert validate_effort(business, Platform.instagram).penalty == 0.1
    assert validate_effort(business, Platform.google_business).penalty == 0.0


def test_visual_requirements():
    assert validate_visual_requirements(_business(type="service"), Platform.email).penalty == 0.0
    assert validate_visual_requirements(_business(type="retail"), Platform.instagram).penalty == 0.0
    assert validate_visual_requirements(_business(type="service"), Platform.instagram).penalty == 0.2
    assert validate_visual_requirements(_business(type="digital"), Platform.instagram).penalty == 0.3


def test_visual_requirements_unknown_business_type():
    business = BusinessProfile.model_construct(type="nonprofit", budget=10.0, goal="awareness")
    result = validate_visual_requirements(business, Platform.instagram)
    assert result.is_valid is True
    assert result.penalty == 0.0


@pytest.mark.parametrize(
    "goal, platform, penalty",
    [
        ("awareness", Platform.tiktok, 0.0),        # reach 10
        ("awareness", Platform.facebook, 0.0),      # reach 8
        ("awareness", Platform.google_business, 0.2),  # reach 7
        ("awareness", Platform.email, 0.2),         # reach 6
        ("awareness", Platform.whatsapp, 0.4),      # reach 5
        ("sales", Platform.email, 0.0),             # conversion 9
        ("sales", Platform.instagram, 0.2),         # conversion 7
        ("sales", Platform.tiktok, 0.2),            # conversion 6
        ("unknown", Platform.tiktok, 0.0),
    ],
)
def test_goal_alignment(goal, platform, penalty):
    result = validate_goal_alignment(goal, platform)
    assert result.is_valid is True
    assert result.penalty == penalty


def test_unknown_platform_fails_every_check():
    business = _business()
    for result in (
        validate_effort(business, "MySpace"),
        validate_visual_requirements(business, "MySpace"),
        validate_goal_alignment("sales", "MySpace"),
    ):
        assert result.is_valid is False
        assert result.penalty == 1.0
    assert is_valid_platform(business, "MySpace") is False
    assert combined_penalty(business, "MySpace") == 1.0


# ── Combined penalty ─────────────────────────────────────────────────────


def test_combined_penalty_is_mean_of_checks():
    business = _business(type="digital", budget=30.0, goal="awareness")
    # budget 0.0, effort 0.6 (video), visual 0.3, goal 0.0 (reach 10)
    assert combined_penalty(business, Platform.tiktok) == pytest.approx(0.225)


def test_combined_penalty_stays_in_unit_interval():
    for budget in (0.0, 25.0, 50.0, 125.0, 200.0, 201.0, 5000.0):
        for business_type in ("retail", "service", "digital"):
            for goal in ("awareness", "sales"):
                business = _business(type=business_type, budget=budget, goal=goal)
                for platform in all_platform_ids():
                    assert 0.0 <= combined_penalty(business, platform) <= 1.0


def test_combined_penalty_defaults_missing_weights_to_one():
    business = _business(type="digital", budget=30.0, goal="awareness")
    partial = EngineConfig(constraint_weights={"budget": 1.0})
    assert combined_penalty(business, Platform.tiktok, partial) == pytest.approx(0.225)

    heavy_effort = EngineConfig(constraint_weights={"effort": 2.0})
    # (0.0 + 2 * 0.6 + 0.3 + 0.0) / 5
    assert combined_penalty(business, Platform.tiktok, heavy_effort) == pytest.approx(0.3)


def test_engine_weights_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_ENGINE_CONFIG.constraint_weights["budget"] = 5.0
    with pytest.raises(TypeError):
        DEFAULT_ENGINE_CONFIG.scorer_weights["audience"] = 2.0

    weights = {"budget": 2.0}
    config = EngineConfig(constraint_weights=weights)
    weights["budget"] = 9.0
    assert config.constraint_weights["budget"] == 2.0


def test_goal_never_invalidates_platform():
    business = _business(goal="awareness")
    assert validate_goal_alignment(business.goal, Platform.whatsapp).penalty == 0.4
    assert is_valid_platform(business, Platform.whatsapp) is True
