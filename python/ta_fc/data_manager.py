"""Data manager: computes indicators and signals for a single symbol.

The frame built here is the single source of truth consumed by both the
backtest and the model trainer; nothing downstream mutates it.
"""

from __future__ import annotations

import logging

import pandas as pd

from .config import IndicatorConfig
from .data_provider import OhlcvFrame
from .errors import InsufficientHistoryError
from .indicators import ema, sma
from .signals import apply_signals

log = logging.getLogger(__name__)

INDICATOR_COLUMNS = ["smaShort", "smaLong", "emaShort"]


def compute_indicators(df: pd.DataFrame, cfg: IndicatorConfig) -> pd.DataFrame:
    """Same-length copy of `df` with indicator columns (NaN before a full window)."""
    out = df.copy()
    close = out["Close"]
    out["smaShort"] = sma(close, cfg.sma_short)
    out["smaLong"] = sma(close, cfg.sma_long)
    out["emaShort"] = ema(close, cfg.ema_short)
    return out


def build_signal_frame(frame: OhlcvFrame, cfg: IndicatorConfig = IndicatorConfig()) -> pd.DataFrame:
    """Indicators + signals with the undefined leading rows dropped.

    Raises InsufficientHistoryError before any training happens if the
    series cannot fill the longest window.
    """
    n = len(frame.df)
    required = cfg.longest_window
    if n < required:
        raise InsufficientHistoryError(n, required)

    df = compute_indicators(frame.df, cfg)
    df = df.dropna(subset=["Open", "High", "Low", "Close", "Volume"] + INDICATOR_COLUMNS)
    if df.empty:
        raise InsufficientHistoryError(n, required)

    log.info("%s: %d of %d bars have full indicator history", frame.symbol, len(df), n)
    return apply_signals(df)
