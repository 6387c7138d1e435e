"""Per-domain scoring weights."""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from promptsmith.domains import Domain
from promptsmith.types import Dimension

_SUM_TOLERANCE = 1e-6


@dataclass(frozen=True, slots=True)
class WeightProfile:
    """Four dimension weights that combine into `overall`; they must sum to 1.0."""

    clarity: float
    specificity: float
    structure: float
    completeness: float

    def __post_init__(self) -> None:
        weights = self.as_dict()
        for name, weight in weights.items():
            if not 0.0 <= weight <= 1.0:
                raise ValueError(f"Weight {name}={weight} is outside [0, 1]")
        total = math.fsum(weights.values())
        if abs(total - 1.0) > _SUM_TOLERANCE:
            raise ValueError(f"Weights must sum to 1.0, got {total}")

    def weight(self, dimension: Dimension) -> float:
        return float(getattr(self, dimension.value))

    def as_dict(self) -> dict[str, float]:
        return {
            "clarity": self.clarity,
            "specificity": self.specificity,
            "structure": self.structure,
            "completeness": self.completeness,
        }


DEFAULT_WEIGHTS: Mapping[Domain, WeightProfile] = MappingProxyType(
    {
        Domain.GENERAL: WeightProfile(0.25, 0.25, 0.25, 0.25),
        Domain.SQL: WeightProfile(0.30, 0.35, 0.20, 0.15),
        Domain.BRANDING: WeightProfile(0.25, 0.30, 0.25, 0.20),
        Domain.CINE: WeightProfile(0.20, 0.35, 0.30, 0.15),
        Domain.SAAS: WeightProfile(0.25, 0.30, 0.25, 0.20),
        Domain.DEVOPS: WeightProfile(0.20, 0.40, 0.25, 0.15),
        Domain.MOBILE: WeightProfile(0.25, 0.30, 0.25, 0.20),
        Domain.WEB: WeightProfile(0.25, 0.30, 0.25, 0.20),
        Domain.BACKEND: WeightProfile(0.25, 0.35, 0.20, 0.20),
        Domain.FRONTEND: WeightProfile(0.25, 0.30, 0.25, 0.20),
        Domain.AI: WeightProfile(0.30, 0.30, 0.20, 0.20),
        Domain.GAMING: WeightProfile(0.20, 0.30, 0.30, 0.20),
        Domain.CRYPTO: WeightProfile(0.20, 0.40, 0.20, 0.20),
        Domain.EDUCATION: WeightProfile(0.35, 0.20, 0.25, 0.20),
        Domain.HEALTHCARE: WeightProfile(0.30, 0.30, 0.15, 0.25),
        Domain.FINANCE: WeightProfile(0.25, 0.35, 0.20, 0.20),
        Domain.LEGAL: WeightProfile(0.30, 0.30, 0.15, 0.25),
    }
)


def weights_for(domain: Domain | None, table: Mapping[Domain, WeightProfile] = DEFAULT_WEIGHTS) -> WeightProfile:
    """Look up a domain's profile, falling back to `general`."""
    if domain is not None and domain in table:
        return table[domain]
    return table[Domain.GENERAL]
