"""Indicator computation utilities.

All indicators are computed on the CLOSE series and are undefined (NaN)
until a full window of history exists. Leading NaN rows are dropped
downstream, never imputed.
"""

from __future__ import annotations

import numpy as np
import pandas as pd


def sma(series: pd.Series, window: int) -> pd.Series:
    """Simple moving average over [i-window+1, i]."""
    if window <= 0:
        raise ValueError("window must be positive")
    return series.astype(float).rolling(window=window, min_periods=window).mean()


def ema(series: pd.Series, window: int) -> pd.Series:
    """Exponential moving average seeded by the SMA of the first `window` values.

    alpha = 2 / (window + 1); ema[i] = x[i] * alpha + ema[i-1] * (1 - alpha).
    Unlike pandas ``ewm(adjust=False)`` this does not start at the first
    sample, so values before index ``window - 1`` stay NaN.
    """
    if window <= 0:
        raise ValueError("window must be positive")
    x = series.astype(float).to_numpy()
    out = np.full(len(x), np.nan)
    if len(x) >= window:
        alpha = 2.0 / (window + 1.0)
        prev = float(np.mean(x[:window]))
        out[window - 1] = prev
        for i in range(window, len(x)):
            prev = x[i] * alpha + prev * (1.0 - alpha)
            out[i] = prev
    return pd.Series(out, index=series.index, name=series.name)
