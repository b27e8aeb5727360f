"""Flat proportional cost model."""

from __future__ import annotations

from .config import BacktestConfig


class FlatCostModel:
    """Costs:
    - the same proportional rate is charged on entry (BUY) and exit (SELL)
    - no slippage, spread or borrow component
    """

    def __init__(self, cost_rate: float = BacktestConfig.cost_rate):
        self.cfg = BacktestConfig(cost_rate=float(cost_rate))

    @property
    def rate(self) -> float:
        return float(self.cfg.cost_rate)

    def transaction_cost(self, price: float) -> float:
        """Cost of one side executed at `price` (one unit)."""
        return float(price) * self.rate

    def round_trip_cost(self, entry_price: float, exit_price: float) -> float:
        return (float(entry_price) + float(exit_price)) * self.rate
