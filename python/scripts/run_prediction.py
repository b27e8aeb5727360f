"""Predict, backtest and recommend for a single ticker.

Example:
    python -m scripts.run_prediction --symbol AAPL
    python -m scripts.run_prediction --symbol INFY.NS --csv infy.csv --output_dir outputs
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import pandas as pd

from ta_fc.config import BacktestConfig, ForecastConfig, IndicatorConfig, ModelConfig
from ta_fc.data_provider import CsvProvider, YfinanceProvider
from ta_fc.errors import PredictionError
from ta_fc.forecast import forecast_frame
from ta_fc.logger import setup_logger
from ta_fc.pipeline import run_prediction


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--symbol", type=str, default="AAPL", help="Example: AAPL, MSFT, TSLA, INFY.NS")
    p.add_argument("--csv", type=str, default=None, help="Simple OHLCV CSV path (Date,Open,High,Low,Close,Volume).")
    p.add_argument("--start", type=str, default=None)
    p.add_argument("--end", type=str, default=None)
    p.add_argument("--sma_short", type=int, default=10)
    p.add_argument("--sma_long", type=int, default=20)
    p.add_argument("--ema_short", type=int, default=10)
    p.add_argument("--cost_rate", type=float, default=0.001, help="Proportional cost per side. Default 0.001.")
    p.add_argument("--n_estimators", type=int, default=200)
    p.add_argument("--seed", type=int, default=123)
    p.add_argument("--output_dir", type=str, default=None, help="Write full/test/forecast CSVs here.")
    p.add_argument("--log_level", type=str, default="INFO")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    log = setup_logger("run_prediction", level=args.log_level.upper())

    symbol = args.symbol.strip()
    if args.csv:
        provider = CsvProvider(args.csv)
    else:
        provider = YfinanceProvider(start=args.start, end=args.end)

    try:
        result = run_prediction(
            symbol,
            provider=provider,
            ind_cfg=IndicatorConfig(sma_short=args.sma_short, sma_long=args.sma_long, ema_short=args.ema_short),
            model_cfg=ModelConfig(n_estimators=args.n_estimators, seed=args.seed),
            bt_cfg=BacktestConfig(cost_rate=args.cost_rate),
            fc_cfg=ForecastConfig(),
        )
    except PredictionError as e:
        log.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1

    bt = result.backtest
    fc = forecast_frame(result.forecast)

    print(f"Final Recommendation: {result.recommendation.label}")
    print(f"Backtesting Profit (Historical): {result.plain_profit}")
    print(f"Net Profit (after costs): {bt.net_profit}")
    print(f"Win Rate: {bt.win_rate} %")
    print(f"Max Drawdown: {bt.max_drawdown}")
    print(f"Trades: {bt.trade_count}  Total Cost: {bt.total_cost}")
    print()
    print("Next Week Forecast")
    print(fc.to_string(index=False))
    print()
    with pd.option_context("display.width", 160, "display.max_columns", 20):
        print(result.test_data.head(10))

    if args.output_dir:
        out_dir = Path(args.output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        tag = symbol.replace(".", "_")
        full_path = out_dir / f"full_{tag}.csv"
        test_path = out_dir / f"test_{tag}.csv"
        fc_path = out_dir / f"forecast_{tag}.csv"
        result.full_data.to_csv(full_path, encoding="utf-8")
        result.test_data.to_csv(test_path, encoding="utf-8")
        fc.to_csv(fc_path, index=False, encoding="utf-8")
        print(full_path)
        print(test_path)
        print(fc_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
