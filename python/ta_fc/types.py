"""Shared types for the forecast / backtest core.

The guiding principle is to keep the runtime objects small and explicit.
Series data stays in pandas frames; everything handed to a consumer is a
frozen record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from functools import total_ordering
from typing import Any, Optional

import pandas as pd


class Signal(str, Enum):
    """Per-row trend classification. There is no HOLD at this layer."""

    BUY = "BUY"
    SELL = "SELL"


@total_ordering
class Recommendation(Enum):
    """Categorical call derived from a forecast.

    Values are ordered by bullishness so that ``SELL < HOLD < STRONG_BUY``.
    """

    SELL = 0
    HOLD = 1
    STRONG_BUY = 2

    @property
    def label(self) -> str:
        return self.name.replace("_", " ")

    def __lt__(self, other: "Recommendation") -> bool:
        if not isinstance(other, Recommendation):
            return NotImplemented
        return self.value < other.value


@dataclass(frozen=True)
class Bar:
    """OHLCV bar for one trading day."""

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: float


@dataclass(frozen=True)
class TradeRecord:
    """A closed round-trip (BUY entry followed by a SELL exit)."""

    entry_index: int
    exit_index: int
    entry_price: float
    exit_price: float
    cost: float  # (entry + exit) * cost_rate

    @property
    def raw_profit(self) -> float:
        return self.exit_price - self.entry_price

    @property
    def net_profit(self) -> float:
        return self.raw_profit - self.cost


@dataclass(frozen=True)
class BacktestResult:
    net_profit: float
    win_rate: float  # percent, 2 decimals
    max_drawdown: float  # <= 0, 2 decimals
    trade_count: int  # closed round-trips only
    total_cost: float


@dataclass(frozen=True)
class ForecastRow:
    horizon_label: str  # "Day 1".."Day N"
    predicted_close: float
    signal: Signal


@dataclass(frozen=True)
class HoldoutMetrics:
    """Error of the estimator on the held-out split."""

    rmse: float
    mae: float
    mape_pct: float
    n: int


@dataclass(frozen=True)
class PredictionResult:
    """Everything a presentation layer needs for one symbol request."""

    symbol: str
    model: Any
    full_data: pd.DataFrame  # indicator/signal-augmented series
    test_data: pd.DataFrame  # held-out split with a `Predicted` column
    forecast: list[ForecastRow]
    recommendation: Recommendation
    plain_profit: float
    backtest: BacktestResult
    holdout: Optional[HoldoutMetrics] = None
    trades: list[TradeRecord] = field(default_factory=list)
