"""End-to-end prediction pipeline for one symbol.

fetch -> indicators -> signals -> split -> fit -> hold-out predict
      -> backtests on the full series -> forward rollout -> recommendation

Strictly sequential and stateless: every call builds its own frames and
model, so independent symbols can be processed concurrently.
"""

from __future__ import annotations

import logging
from typing import Optional

import pandas as pd

from .backtest import backtest_report, plain_profit
from .config import BacktestConfig, ForecastConfig, IndicatorConfig, ModelConfig
from .data_manager import build_signal_frame
from .data_provider import OhlcvProvider, YfinanceProvider
from .estimator import Estimator, evaluate_holdout, features, fit_estimator, split_frame
from .forecast import forecast_next_days, recommend
from .signals import apply_signals
from .types import PredictionResult

log = logging.getLogger(__name__)


def train_predict_model(
    symbol: str,
    provider: Optional[OhlcvProvider] = None,
    ind_cfg: IndicatorConfig = IndicatorConfig(),
    model_cfg: ModelConfig = ModelConfig(),
    estimator: Optional[Estimator] = None,
) -> dict:
    """Fetch, build the signal frame, train, and predict the held-out split.

    Returns ``{"model", "full_data", "data"}`` where ``data`` is the test
    split with a ``Predicted`` column and re-derived signals.
    """
    symbol = str(symbol).strip()
    provider = provider if provider is not None else YfinanceProvider()

    frame = provider.fetch(symbol)
    full = build_signal_frame(frame, ind_cfg)

    train, test = split_frame(full, model_cfg)
    log.info("%s: train=%d test=%d rows", symbol, len(train), len(test))

    model = fit_estimator(train, estimator, model_cfg)

    test = apply_signals(test)
    test["Predicted"] = model.predict(features(test))
    return {"model": model, "full_data": full, "data": test}


def run_prediction(
    symbol: str,
    provider: Optional[OhlcvProvider] = None,
    ind_cfg: IndicatorConfig = IndicatorConfig(),
    model_cfg: ModelConfig = ModelConfig(),
    bt_cfg: BacktestConfig = BacktestConfig(),
    fc_cfg: ForecastConfig = ForecastConfig(),
    estimator: Optional[Estimator] = None,
) -> PredictionResult:
    symbol = str(symbol).strip()
    res = train_predict_model(symbol, provider, ind_cfg, model_cfg, estimator)
    model = res["model"]
    full: pd.DataFrame = res["full_data"]
    test: pd.DataFrame = res["data"]

    holdout = evaluate_holdout(test["Close"], test["Predicted"])
    log.info("%s: hold-out rmse=%.4f mae=%.4f mape=%.2f%%", symbol, holdout.rmse, holdout.mae, holdout.mape_pct)

    # the closed trades are the same at any cost rate; only their net profit changes
    backtest, trades = backtest_report(full, bt_cfg.cost_rate)
    headline = plain_profit(trades)
    log.info("%s: plain backtest profit=%.2f", symbol, headline)

    forecast = forecast_next_days(model, full.iloc[-1], fc_cfg.horizon)
    rec = recommend(forecast)
    log.info("%s: recommendation %s", symbol, rec.label)

    return PredictionResult(
        symbol=symbol,
        model=model,
        full_data=full,
        test_data=test,
        forecast=forecast,
        recommendation=rec,
        plain_profit=headline,
        backtest=backtest,
        holdout=holdout,
        trades=trades,
    )
