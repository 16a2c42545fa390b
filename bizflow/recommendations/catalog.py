"""
Static platform catalog.

The table is built once at import time and exposed read-only; every
request shares it. ``all_platform_ids`` order is the tie-break order used
by the ranker, so new platforms must be appended, never inserted.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .models import BusinessType


class Platform(str, Enum):
    instagram = "Instagram"
    facebook = "Facebook"
    tiktok = "TikTok"
    google_business = "Google My Business"
    whatsapp = "WhatsApp Business"
    email = "Email/Newsletter"
    linkedin = "LinkedIn"
    youtube = "YouTube"


class EffortLevel(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


@dataclass(frozen=True)
class PlatformMetadata:
    platform: Platform
    requires_visuals: bool
    requires_video: bool
    min_budget: float
    effort_level: EffortLevel
    best_for: frozenset[BusinessType]
    supports_hashtags: bool
    is_organic: bool
    is_paid: bool
    reach_potential: int
    conversion_focus: int

    def __post_init__(self) -> None:
        if not self.best_for:
            raise ValueError(f"{self.platform.value}: best_for must not be empty")
        for name in ("reach_potential", "conversion_focus"):
            value = getattr(self, name)
            if not 1 <= value <= 10:
                raise ValueError(f"{self.platform.value}: {name} must be in [1, 10], got {value}")
        if self.min_budget < 0:
            raise ValueError(f"{self.platform.value}: min_budget must be non-negative")

    def as_dict(self) -> dict:
        return {
            "platform": self.platform.value,
            "requires_visuals": self.requires_visuals,
            "requires_video": self.requires_video,
            "min_budget": self.min_budget,
            "effort_level": self.effort_level.value,
            "best_for": sorted(t.value for t in self.best_for),
            "supports_hashtags": self.supports_hashtags,
            "is_organic": self.is_organic,
            "is_paid": self.is_paid,
            "reach_potential": self.reach_potential,
            "conversion_focus": self.conversion_focus,
        }


_R, _S, _D = BusinessType.retail, BusinessType.service, BusinessType.digital


def _build_catalog() -> Mapping[str, PlatformMetadata]:
    entries = [
        PlatformMetadata(
            platform=Platform.instagram,
            requires_visuals=True,
            requires_video=False,
            min_budget=0.0,
            effort_level=EffortLevel.medium,
            best_for=frozenset({_R, _S, _D}),
            supports_hashtags=True,
            is_organic=True,
            is_paid=True,
            reach_potential=9,
            conversion_focus=7,
        ),
        PlatformMetadata(
            platform=Platform.facebook,
            requires_visuals=True,
            requires_video=False,
            min_budget=0.0,
            effort_level=EffortLevel.medium,
            best_for=frozenset({_R, _S}),
            supports_hashtags=False,
            is_organic=True,
            is_paid=True,
            reach_potential=8,
            conversion_focus=8,
        ),
        PlatformMetadata(
            platform=Platform.tiktok,
            requires_visuals=True,
            requires_video=True,
            min_budget=0.0,
            effort_level=EffortLevel.high,
            best_for=frozenset({_R, _D}),
            supports_hashtags=True,
            is_organic=True,
            is_paid=True,
            reach_potential=10,
            conversion_focus=6,
        ),
        PlatformMetadata(
            platform=Platform.google_business,
            requires_visuals=True,
            requires_video=False,
            min_budget=0.0,
            effort_level=EffortLevel.low,
            best_for=frozenset({_R, _S}),
            supports_hashtags=False,
            is_organic=True,
            is_paid=True,
            reach_potential=7,
            conversion_focus=9,
        ),
        PlatformMetadata(
            platform=Platform.whatsapp,
            requires_visuals=False,
            requires_video=False,
            min_budget=0.0,
            effort_level=EffortLevel.low,
            best_for=frozenset({_S}),
            supports_hashtags=False,
            is_organic=True,
            is_paid=False,
            reach_potential=5,
            conversion_focus=8,
        ),
        PlatformMetadata(
            platform=Platform.email,
            requires_visuals=False,
            requires_video=False,
            min_budget=0.0,
            effort_level=EffortLevel.medium,
            best_for=frozenset({_R, _S, _D}),
            supports_hashtags=False,
            is_organic=True,
            is_paid=True,
            reach_potential=6,
            conversion_focus=9,
        ),
        PlatformMetadata(
            platform=Platform.linkedin,
            requires_visuals=True,
            requires_video=False,
            min_budget=0.0,
            effort_level=EffortLevel.high,
            best_for=frozenset({_D, _S}),
            supports_hashtags=False,
            is_organic=True,
            is_paid=True,
            reach_potential=7,
            conversion_focus=8,
        ),
        PlatformMetadata(
            platform=Platform.youtube,
            requires_visuals=True,
            requires_video=True,
            min_budget=0.0,
            effort_level=EffortLevel.high,
            best_for=frozenset({_R, _D}),
            supports_hashtags=True,
            is_organic=True,
            is_paid=True,
            reach_potential=9,
            conversion_focus=7,
        ),
    ]
    return MappingProxyType({m.platform.value: m for m in entries})


_CATALOG = _build_catalog()
_ORDER: tuple[Platform, ...] = tuple(Platform(key) for key in _CATALOG)
_POSITION: Mapping[str, int] = MappingProxyType({p.value: i for i, p in enumerate(_ORDER)})


def _key(platform_id: Platform | str) -> str:
    return platform_id.value if isinstance(platform_id, Platform) else str(platform_id)


def lookup(platform_id: Platform | str) -> PlatformMetadata | None:
    """Return metadata for *platform_id*, or ``None`` if it is not catalogued."""
    return _CATALOG.get(_key(platform_id))


def all_platform_ids() -> tuple[Platform, ...]:
    return _ORDER


def catalog_position(platform_id: Platform | str) -> int:
    """Stable sort position; unknown ids sort after every catalogued platform."""
    return _POSITION.get(_key(platform_id), len(_ORDER))


def all_metadata() -> list[PlatformMetadata]:
    return [_CATALOG[p.value] for p in _ORDER]
