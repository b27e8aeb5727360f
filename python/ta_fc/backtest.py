"""Backtest runners: the plain headline profit and the cost-aware report."""

from __future__ import annotations

import logging
import warnings
from typing import List, Tuple

import pandas as pd

from .config import BacktestConfig
from .errors import NoTradesWarning
from .metrics import summarize_trades
from .trader import replay
from .types import BacktestResult, TradeRecord

log = logging.getLogger(__name__)


def simulate(df: pd.DataFrame, cost_rate: float = 0.0) -> Tuple[List[TradeRecord], List[float], float]:
    """Replay `df` (Close + Signal, in row order) once.

    Returns (closed trades, equity curve, total cost).
    """
    BacktestConfig(cost_rate=cost_rate)  # validate
    return replay(df, cost_rate=cost_rate)


def plain_profit(trades: List[TradeRecord]) -> float:
    return round(float(sum(t.raw_profit for t in trades)), 2)


def run_plain_backtest(df: pd.DataFrame) -> float:
    """Total realized raw profit of closed round-trips, costs ignored (2 decimals)."""
    trades, _, _ = simulate(df, cost_rate=0.0)
    return plain_profit(trades)


def backtest_report(df: pd.DataFrame, cost_rate: float = BacktestConfig.cost_rate) -> Tuple[BacktestResult, List[TradeRecord]]:
    """Cost-aware result together with the closed trades it was built from."""
    trades, equity_curve, total_cost = simulate(df, cost_rate=cost_rate)
    result = summarize_trades(trades, equity_curve, total_cost)

    if result.trade_count == 0:
        warnings.warn(
            f"no closed trades in {len(df)} rows; win rate and drawdown reported as 0",
            NoTradesWarning,
            stacklevel=3,
        )
    log.info(
        "backtest: trades=%d net=%.2f win_rate=%.2f%% mdd=%.2f cost=%.2f",
        result.trade_count, result.net_profit, result.win_rate, result.max_drawdown, result.total_cost,
    )
    return result, trades


def run_cost_backtest(df: pd.DataFrame, cost_rate: float = BacktestConfig.cost_rate) -> BacktestResult:
    """Cost-aware backtest with win rate and max drawdown over the equity curve.

    Entry costs are accrued into ``total_cost`` as soon as a position opens,
    even when that position is still open at the end of the series.
    """
    result, _ = backtest_report(df, cost_rate)
    return result
