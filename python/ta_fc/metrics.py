"""Performance metrics."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .types import BacktestResult, TradeRecord


def max_drawdown(equity: Sequence[float]) -> float:
    """Largest decline of equity below its running peak (<= 0, absolute units).

    Returns 0.0 for an empty curve.
    """
    x = np.asarray(equity, dtype=float)
    if len(x) == 0:
        return 0.0
    peak = np.maximum.accumulate(x)
    return float(np.min(x - peak))


def win_rate(profits: Sequence[float]) -> float:
    """Percent of trades with strictly positive net profit (0 when no trades)."""
    p = np.asarray(profits, dtype=float)
    if len(p) == 0:
        return 0.0
    return float(np.count_nonzero(p > 0) / len(p) * 100.0)


def summarize_trades(trades: Sequence[TradeRecord], equity_curve: Sequence[float], total_cost: float) -> BacktestResult:
    profits = [t.net_profit for t in trades]
    return BacktestResult(
        net_profit=round(float(sum(profits)), 2),
        win_rate=round(win_rate(profits), 2),
        max_drawdown=round(max_drawdown(equity_curve), 2),
        trade_count=len(profits),
        total_cost=round(float(total_cost), 2),
    )
