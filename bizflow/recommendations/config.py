from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


def _equal_weights(*names: str) -> dict[str, float]:
    return {name: 1.0 for name in names}


@dataclass(frozen=True)
class EngineConfig:
    """
    Tuning knobs for the ranking pipeline.

    Equal weights reproduce a plain arithmetic mean, which is the
    calibrated behaviour. Change them only together with the scenarios
    in the ranking tests. Names missing from a weight mapping count as 1.0.
    """

    top_n: int = 3
    score_precision: int = 4
    constraint_weights: Mapping[str, float] = field(
        default_factory=lambda: _equal_weights("budget", "effort", "visual", "goal")
    )
    scorer_weights: Mapping[str, float] = field(
        default_factory=lambda: _equal_weights("audience", "budget", "effort", "return")
    )

    def __post_init__(self) -> None:
        # Shared instances must not be mutated in place.
        for name in ("constraint_weights", "scorer_weights"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))


DEFAULT_ENGINE_CONFIG = EngineConfig()
