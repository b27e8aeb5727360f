"""Configuration objects.

Style rules:
- keep signatures stable (no alias chaos)
- prefer explicit field names
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class IndicatorConfig:
    """Indicator window configuration (trading days)."""

    sma_short: int = 10
    sma_long: int = 20
    ema_short: int = 10

    def __post_init__(self) -> None:
        for name in ("sma_short", "sma_long", "ema_short"):
            if int(getattr(self, name)) <= 0:
                raise ValueError(f"{name} must be positive")

    @property
    def longest_window(self) -> int:
        return max(self.sma_short, self.sma_long, self.ema_short)


@dataclass(frozen=True)
class BacktestConfig:
    """Flat proportional cost charged on each side of a round-trip."""

    cost_rate: float = 0.001

    def __post_init__(self) -> None:
        if not (0.0 <= float(self.cost_rate) < 1.0):
            raise ValueError("cost_rate must be in [0, 1)")


@dataclass(frozen=True)
class ModelConfig:
    """Estimator and train/test split parameters."""

    n_estimators: int = 200
    train_frac: float = 0.8
    seed: int = 123
    # number of target quantile bins used to stratify the split
    split_groups: int = 5
    n_jobs: Optional[int] = None

    def __post_init__(self) -> None:
        if int(self.n_estimators) <= 0:
            raise ValueError("n_estimators must be positive")
        if not (0.0 < float(self.train_frac) < 1.0):
            raise ValueError("train_frac must be in (0, 1)")
        if int(self.split_groups) <= 0:
            raise ValueError("split_groups must be positive")


@dataclass(frozen=True)
class ForecastConfig:
    horizon: int = 5

    def __post_init__(self) -> None:
        if int(self.horizon) < 1:
            raise ValueError("horizon must be >= 1")
