from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from ta_fc.data_provider import OhlcvFrame


def make_ohlcv(closes, start: str = "2024-01-01") -> pd.DataFrame:
    closes = np.asarray(closes, dtype=float)
    idx = pd.bdate_range(start=start, periods=len(closes), name="Date")
    return pd.DataFrame(
        {
            "Open": closes - 0.5,
            "High": closes + 1.0,
            "Low": closes - 1.0,
            "Close": closes,
            "Volume": np.linspace(1_000, 2_000, len(closes)),
        },
        index=idx,
    )


def signal_frame(closes, signals) -> pd.DataFrame:
    """Minimal frame for the trader: Close + Signal only."""
    return pd.DataFrame({"Close": list(map(float, closes)), "Signal": list(signals)})


class StaticProvider:
    def __init__(self, df: pd.DataFrame):
        self.df = df
        self.calls = []

    def fetch(self, symbol: str) -> OhlcvFrame:
        self.calls.append(symbol)
        return OhlcvFrame(df=self.df.copy(), symbol=symbol)


class LinearEstimator:
    """Deterministic stand-in: predicts smaLong * factor."""

    def __init__(self, factor: float = 1.01):
        self.factor = factor
        self.fitted = False

    def fit(self, X, y):
        self.fitted = True
        return self

    def predict(self, X):
        return X["smaLong"].to_numpy(dtype=float) * self.factor


@pytest.fixture
def wave_df() -> pd.DataFrame:
    t = np.arange(200)
    closes = 100.0 + 0.05 * t + 5.0 * np.sin(t / 6.0)
    return make_ohlcv(closes)


@pytest.fixture
def static_provider(wave_df) -> StaticProvider:
    return StaticProvider(wave_df)
