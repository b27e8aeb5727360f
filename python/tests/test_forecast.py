import pandas as pd
import pytest

from ta_fc.forecast import forecast_frame, forecast_next_days, recommend
from ta_fc.types import ForecastRow, Recommendation, Signal

from conftest import LinearEstimator


def _last_row(sma_long: float = 100.0) -> pd.Series:
    return pd.Series(
        {
            "Open": 99.0,
            "High": 102.0,
            "Low": 98.0,
            "Close": 101.0,
            "Volume": 1_000.0,
            "smaShort": 100.5,
            "smaLong": sma_long,
            "emaShort": 100.7,
            "Signal": "BUY",
        }
    )


class RecordingEstimator:
    """Replays fixed predictions and records the rows it saw."""

    def __init__(self, preds):
        self.preds = list(preds)
        self.seen = []

    def fit(self, X, y):
        return self

    def predict(self, X):
        self.seen.append(X.iloc[0].to_dict())
        return [self.preds[len(self.seen) - 1]]


def _rows(signals):
    return [ForecastRow(f"Day {i + 1}", 1.0, Signal(s)) for i, s in enumerate(signals)]


def test_rollout_has_five_labelled_rows():
    rows = forecast_next_days(LinearEstimator(1.01), _last_row())
    assert [r.horizon_label for r in rows] == ["Day 1", "Day 2", "Day 3", "Day 4", "Day 5"]


def test_rollout_collapses_indicators_to_prediction():
    est = RecordingEstimator([105.0, 104.0, 104.0, 110.0, 109.0])
    rows = forecast_next_days(est, _last_row(100.0))

    assert [r.predicted_close for r in rows] == [105.0, 104.0, 104.0, 110.0, 109.0]
    # day 1 vs original smaLong; day k vs day k-1 prediction; equality is SELL
    assert [r.signal for r in rows] == [Signal.BUY, Signal.SELL, Signal.SELL, Signal.BUY, Signal.SELL]

    for seen, prev in zip(est.seen[1:], [105.0, 104.0, 104.0, 110.0]):
        assert seen["smaShort"] == seen["smaLong"] == seen["emaShort"] == prev
        # raw price features carry over unchanged
        assert seen["Open"] == 99.0 and seen["Volume"] == 1_000.0
    assert est.seen[0]["smaLong"] == 100.0


def test_rollout_does_not_mutate_last_row():
    row = _last_row()
    forecast_next_days(LinearEstimator(), row)
    assert row["Close"] == 101.0 and row["smaLong"] == 100.0


def test_rollout_custom_horizon_and_validation():
    assert len(forecast_next_days(LinearEstimator(), _last_row(), horizon=3)) == 3
    with pytest.raises(ValueError):
        forecast_next_days(LinearEstimator(), _last_row(), horizon=0)


@pytest.mark.parametrize(
    "signals, expected",
    [
        (["BUY"] * 5, Recommendation.STRONG_BUY),
        (["BUY", "BUY", "BUY", "BUY", "SELL"], Recommendation.STRONG_BUY),
        (["BUY", "SELL", "BUY", "SELL", "BUY"], Recommendation.HOLD),
        (["BUY", "BUY", "SELL", "SELL", "SELL"], Recommendation.HOLD),
        (["SELL", "SELL", "BUY", "SELL", "SELL"], Recommendation.SELL),
        (["SELL"] * 5, Recommendation.SELL),
    ],
)
def test_recommend_thresholds(signals, expected):
    assert recommend(_rows(signals)) is expected


def test_recommend_is_monotonic_in_buy_count():
    recs = [recommend(_rows(["BUY"] * b + ["SELL"] * (5 - b))) for b in range(6)]
    assert all(a <= b for a, b in zip(recs, recs[1:]))
    assert Recommendation.SELL < Recommendation.HOLD < Recommendation.STRONG_BUY
    assert Recommendation.STRONG_BUY.label == "STRONG BUY"


def test_forecast_frame_columns():
    fc = forecast_frame(_rows(["BUY", "SELL"]))
    assert list(fc.columns) == ["Day", "Predicted_Close", "Signal"]
    assert fc["Signal"].tolist() == ["BUY", "SELL"]


def test_recommendation_full_ordering():
    assert Recommendation.STRONG_BUY > Recommendation.HOLD > Recommendation.SELL
    assert Recommendation.HOLD >= Recommendation.HOLD >= Recommendation.SELL
    assert not Recommendation.SELL > Recommendation.HOLD
    assert sorted(Recommendation, reverse=True) == [Recommendation.STRONG_BUY, Recommendation.HOLD, Recommendation.SELL]
