"""
Hard filters that shrink the catalog to candidates for one business.

Every stage takes and returns a tuple and never reorders what it keeps.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .catalog import EffortLevel, Platform, all_platform_ids, lookup
from .models import BudgetTier, BusinessProfile, BusinessType

logger = logging.getLogger(__name__)

PlatformSeq = tuple[Platform | str, ...]

_TYPE_PLATFORMS: dict[str, tuple[Platform, ...]] = {
    BusinessType.retail.value: (
        Platform.instagram,
        Platform.facebook,
        Platform.tiktok,
        Platform.google_business,
    ),
    BusinessType.service.value: (
        Platform.google_business,
        Platform.facebook,
        Platform.whatsapp,
        Platform.instagram,
    ),
    BusinessType.digital.value: (
        Platform.linkedin,
        Platform.email,
        Platform.youtube,
        Platform.instagram,
    ),
}


def filter_by_business_type(business_type: BusinessType | str) -> PlatformSeq:
    key = getattr(business_type, "value", business_type)
    return _TYPE_PLATFORMS.get(key, all_platform_ids())


def filter_by_location(business: BusinessProfile, platforms: Sequence[Platform | str]) -> PlatformSeq:
    platforms = tuple(platforms)
    if business.is_local and Platform.google_business not in platforms:
        return platforms + (Platform.google_business,)
    return platforms


def filter_by_budget(business: BusinessProfile, platforms: Iterable[Platform | str]) -> PlatformSeq:
    low_tier = business.budget_tier is BudgetTier.low
    kept = []
    for platform in platforms:
        meta = lookup(platform)
        if meta is None:
            logger.debug("Dropping uncatalogued platform %s", platform)
            continue
        if low_tier:
            if meta.min_budget == 0:
                kept.append(platform)
        elif business.budget >= meta.min_budget:
            kept.append(platform)
    return tuple(kept)


def filter_by_effort(business: BusinessProfile, platforms: Iterable[Platform | str]) -> PlatformSeq:
    kept = []
    for platform in platforms:
        meta = lookup(platform)
        if meta is None:
            logger.debug("Dropping uncatalogued platform %s", platform)
            continue
        heavy_video = meta.requires_video and meta.effort_level is EffortLevel.high
        if heavy_video and business.type != BusinessType.retail:
            continue
        kept.append(platform)
    return tuple(kept)


def refine(business: BusinessProfile, platforms: Sequence[Platform | str]) -> PlatformSeq:
    """Run the location, budget and effort stages over an existing candidate list."""
    platforms = filter_by_location(business, platforms)
    platforms = filter_by_budget(business, platforms)
    return filter_by_effort(business, platforms)


def apply_all_filters(business: BusinessProfile) -> PlatformSeq:
    candidates = refine(business, filter_by_business_type(business.type))
    logger.debug(
        "Filtered candidates for %s/%s budget: %s",
        getattr(business.type, "value", business.type),
        business.budget_tier.value,
        [getattr(p, "value", p) for p in candidates],
    )
    return candidates


def _format_platforms(platforms: Sequence[Platform | str]) -> str:
    names = [getattr(p, "value", str(p)) for p in platforms]
    if not names:
        return "none"
    if len(names) == 1:
        return names[0]
    return ", ".join(names[:-1]) + " and " + names[-1]


def explain_filtering(business: BusinessProfile) -> dict[str, str]:
    """Human-readable account of each filter stage for *business*."""
    business_type = getattr(business.type, "value", business.type)
    explanations = {
        "business_type": (
            f"{business_type} businesses are best suited for "
            f"{_format_platforms(filter_by_business_type(business.type))}"
        ),
    }

    tier = business.budget_tier
    if tier is BudgetTier.low:
        explanations["budget"] = "Low budget (<$50/month) limits platforms to organic-only channels"
    elif tier is BudgetTier.medium:
        explanations["budget"] = "Medium budget ($50-$200/month) allows organic and some paid channels"
    else:
        explanations["budget"] = "High budget (>$200/month) enables all channel types including paid advertising"

    if business.is_local:
        explanations["location"] = "Local business benefits from location-based platforms like Google My Business"
    else:
        explanations["location"] = "Online-only business can leverage any platform regardless of location"

    return explanations
