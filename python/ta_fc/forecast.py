"""Multi-day forward rollout and the recommendation derived from it."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from .config import ForecastConfig
from .estimator import Estimator, predict_one
from .signals import classify
from .types import ForecastRow, Recommendation, Signal

# BUY-count thresholds over the forecast window. Fixed, not configurable.
STRONG_BUY_MIN_BUYS = 4
HOLD_MIN_BUYS = 2


def forecast_next_days(
    estimator: Estimator,
    last_row: pd.Series,
    horizon: int = ForecastConfig.horizon,
) -> list[ForecastRow]:
    """Roll the estimator forward `horizon` trading days from `last_row`.

    Each step predicts from the current row and signals against that row's
    smaLong. The next row then has Close and every indicator set to the
    predicted price itself (indicators are not recomputed as rolling
    averages).
    """
    ForecastConfig(horizon=horizon)  # validate

    rows: list[ForecastRow] = []
    current = last_row.copy()
    for day in range(1, horizon + 1):
        pred = predict_one(estimator, current)
        rows.append(
            ForecastRow(
                horizon_label=f"Day {day}",
                predicted_close=pred,
                signal=classify(pred, float(current["smaLong"])),
            )
        )

        current = current.copy()
        for col in ("Close", "smaShort", "smaLong", "emaShort"):
            current[col] = pred
    return rows


def recommend(rows: Sequence[ForecastRow]) -> Recommendation:
    buys = sum(1 for r in rows if r.signal is Signal.BUY)
    if buys >= STRONG_BUY_MIN_BUYS:
        return Recommendation.STRONG_BUY
    if buys >= HOLD_MIN_BUYS:
        return Recommendation.HOLD
    return Recommendation.SELL


def forecast_frame(rows: Sequence[ForecastRow]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Day": [r.horizon_label for r in rows],
            "Predicted_Close": [r.predicted_close for r in rows],
            "Signal": [r.signal.value for r in rows],
        }
    )
