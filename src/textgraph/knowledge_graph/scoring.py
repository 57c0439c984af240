from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Protocol

from textgraph.settings import settings


class ConfidenceScorer(Protocol):
    """Assigns a heuristic confidence to an extracted span.

    Scores are used for visual weighting only; they are not calibrated.
    """

    def score(self, label: str, kind: str) -> float: ...


@dataclass(slots=True)
class RandomScorer:
    """Uniform pseudo-random score in [low, high).

    Pass a `seed` to make runs reproducible.
    """

    low: float = 0.7
    high: float = 1.0
    seed: int | None = None
    _rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not 0.0 <= self.low < self.high <= 1.0:
            raise ValueError(f"invalid confidence range [{self.low}, {self.high})")
        self._rng = random.Random(self.seed)

    def score(self, label: str, kind: str) -> float:
        return self.low + self._rng.random() * (self.high - self.low)


@dataclass(frozen=True, slots=True)
class FixedScorer:
    value: float = 0.85

    def score(self, label: str, kind: str) -> float:
        return self.value


def default_scorer() -> ConfidenceScorer:
    return RandomScorer(
        low=settings.confidence_low,
        high=settings.confidence_high,
        seed=settings.confidence_seed,
    )
