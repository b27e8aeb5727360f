"""Trend signal: BUY iff close is strictly above the row's own long SMA."""

from __future__ import annotations

import numpy as np
import pandas as pd

from .types import Signal


def classify(close: float, sma_long: float) -> Signal:
    # equality is SELL
    return Signal.BUY if close > sma_long else Signal.SELL


def apply_signals(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of `df` with Signal / Buy / Sell columns.

    Buy carries the close on BUY rows, Sell on SELL rows; the other is NaN.
    """
    out = df.copy()
    is_buy = (out["Close"] > out["smaLong"]).to_numpy()
    out["Signal"] = np.where(is_buy, Signal.BUY.value, Signal.SELL.value)
    out["Buy"] = out["Close"].where(is_buy, np.nan)
    out["Sell"] = out["Close"].where(~is_buy, np.nan)
    return out
