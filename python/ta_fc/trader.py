"""Single-symbol, single-position signal trader.

Replays an ordered signal sequence through a two-state machine:
- FLAT + BUY  -> enter LONG at Close(t), pay entry cost
- LONG + SELL -> exit to FLAT at Close(t), pay exit cost, book the trade
- anything else is ignored (position held)

A position still open when the sequence ends is never closed or counted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from .cost_model import FlatCostModel
from .types import Signal, TradeRecord

log = logging.getLogger(__name__)


class Position(Enum):
    FLAT = 0
    LONG = 1


@dataclass
class _PositionState:
    pos: Position = Position.FLAT
    entry_price: float = float("nan")
    entry_index: Optional[int] = None


class SignalTrader:
    """One-unit long-only trader driven by per-row BUY/SELL signals.

    Each instance is one pass over one series. Build a new trader per run;
    rows must be fed in chronological order.
    """

    def __init__(self, cost_model: FlatCostModel = FlatCostModel(0.0)):
        self.cost_model = cost_model

        self.state = _PositionState()
        self.trade_log: List[TradeRecord] = []
        self.equity_curve: List[float] = []  # cumulative net profit after each closed trade
        self.equity = 0.0
        self.total_cost = 0.0

    # ---------- public API ----------

    def run(self, closes: Iterable[float], signals: Iterable[str]) -> "SignalTrader":
        for i, (close, sig) in enumerate(zip(closes, signals, strict=True)):
            self.step(i, float(close), Signal(sig))
        return self

    def run_frame(self, df: pd.DataFrame) -> "SignalTrader":
        """Replay `df` in its given row order (Close + Signal columns)."""
        return self.run(df["Close"].to_numpy(dtype=float), df["Signal"].to_numpy())

    def step(self, i: int, close: float, signal: Signal) -> None:
        """Process row i. At most one transition happens per row."""
        if not np.isfinite(close):
            raise ValueError(f"row {i}: close must be finite, got {close}")

        if self.state.pos is Position.FLAT and signal is Signal.BUY:
            self._enter_long(i, close)
        elif self.state.pos is Position.LONG and signal is Signal.SELL:
            self._exit_long(i, close)

    @property
    def is_open(self) -> bool:
        return self.state.pos is Position.LONG

    # ---------- internal helpers ----------

    def _enter_long(self, i: int, price: float) -> None:
        self.total_cost += self.cost_model.transaction_cost(price)
        self.state = _PositionState(pos=Position.LONG, entry_price=price, entry_index=i)

    def _exit_long(self, i: int, price: float) -> None:
        st = self.state
        self.total_cost += self.cost_model.transaction_cost(price)

        trade = TradeRecord(
            entry_index=int(st.entry_index),
            exit_index=i,
            entry_price=st.entry_price,
            exit_price=price,
            cost=self.cost_model.round_trip_cost(st.entry_price, price),
        )
        self.trade_log.append(trade)
        self.equity += trade.net_profit
        self.equity_curve.append(self.equity)
        log.debug(
            "trade #%d rows %d->%d: %.4f -> %.4f net=%.4f equity=%.4f",
            len(self.trade_log), trade.entry_index, i, trade.entry_price, price, trade.net_profit, self.equity,
        )

        self.state = _PositionState()


def replay(df: pd.DataFrame, cost_rate: float = 0.0) -> Tuple[List[TradeRecord], List[float], float]:
    """Run a fresh trader over `df`; returns (trades, equity_curve, total_cost)."""
    trader = SignalTrader(FlatCostModel(cost_rate)).run_frame(df)
    return trader.trade_log, trader.equity_curve, trader.total_cost
