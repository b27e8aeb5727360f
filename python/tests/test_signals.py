import numpy as np
import pandas as pd

from ta_fc.data_manager import build_signal_frame
from ta_fc.data_provider import OhlcvFrame
from ta_fc.signals import apply_signals, classify
from ta_fc.types import Signal


def test_classify_strict_inequality():
    assert classify(101.0, 100.0) is Signal.BUY
    assert classify(100.0, 100.0) is Signal.SELL
    assert classify(99.0, 100.0) is Signal.SELL


def test_apply_signals_markers():
    df = pd.DataFrame({"Close": [10.0, 10.0, 12.0], "smaLong": [9.0, 10.0, 13.0]})
    out = apply_signals(df)
    assert out["Signal"].tolist() == ["BUY", "SELL", "SELL"]
    assert out["Buy"].iloc[0] == 10.0 and np.isnan(out["Sell"].iloc[0])
    assert np.isnan(out["Buy"].iloc[1]) and out["Sell"].iloc[1] == 10.0
    assert "Signal" not in df.columns


def test_signal_uses_own_row_and_markers_never_both_set(wave_df):
    df = build_signal_frame(OhlcvFrame(df=wave_df, symbol="X"))
    expected = np.where(df["Close"] > df["smaLong"], "BUY", "SELL")
    assert (df["Signal"].to_numpy() == expected).all()
    assert not (df["Buy"].notna() & df["Sell"].notna()).any()
    assert (df["Buy"].notna() | df["Sell"].notna()).all()
    assert (df.loc[df["Signal"] == "BUY", "Buy"] == df.loc[df["Signal"] == "BUY", "Close"]).all()
