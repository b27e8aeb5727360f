"""Data providers (yfinance / CSV) and a standardized OHLCV schema."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

import pandas as pd

from .errors import FetchError
from .types import Bar

log = logging.getLogger(__name__)

OHLCV_COLUMNS = ["Open", "High", "Low", "Close", "Volume"]


@dataclass(frozen=True)
class OhlcvFrame:
    """Standard OHLCV dataframe wrapper."""

    df: pd.DataFrame  # columns: Open, High, Low, Close, Volume; index: Date (tz-naive)
    symbol: str

    def __len__(self) -> int:
        return int(len(self.df))

    def bars(self) -> list[Bar]:
        return [
            Bar(
                date=ts.date(),
                open=float(r.Open),
                high=float(r.High),
                low=float(r.Low),
                close=float(r.Close),
                volume=float(r.Volume),
            )
            for ts, r in zip(self.df.index, self.df.itertuples(index=False))
        ]


class OhlcvProvider(Protocol):
    def fetch(self, symbol: str) -> OhlcvFrame: ...


def _standardize_ohlcv_columns(df: pd.DataFrame, symbol: str) -> pd.DataFrame:
    # yfinance can return MultiIndex columns depending on options/version.
    # We standardize to a simple 1-level column index.
    if isinstance(df.columns, pd.MultiIndex):
        df = df.copy()
        tickers = list(dict.fromkeys(df.columns.get_level_values(-1)))
        if len(tickers) == 1:
            df.columns = df.columns.get_level_values(0)
        else:
            df = df.xs(tickers[0], axis=1, level=-1, drop_level=True)

    rename_map = {}
    for col in df.columns:
        c = str(col).strip().lower()
        if c in {"open", "high", "low", "close", "volume"}:
            rename_map[col] = c.capitalize()
        elif c in {"adj close", "adjclose", "adjusted"}:
            # Keep adjusted close separate to avoid duplicate "Close" columns.
            rename_map[col] = "AdjClose"
    df = df.rename(columns=rename_map).copy()

    if "Close" not in df.columns and "AdjClose" in df.columns:
        df = df.rename(columns={"AdjClose": "Close"})

    missing = [c for c in OHLCV_COLUMNS if c not in df.columns]
    if missing:
        raise FetchError(symbol, f"missing required OHLCV columns: {missing}")

    try:
        df = df[OHLCV_COLUMNS].astype(float)
    except (TypeError, ValueError) as e:
        raise FetchError(symbol, f"non-numeric OHLCV data ({e})") from e

    idx = pd.DatetimeIndex(pd.to_datetime(df.index))
    if idx.tz is not None:
        idx = idx.tz_localize(None)
    df.index = idx.rename("Date")

    # Rows with no close cannot be priced; drop them rather than impute.
    df = df.dropna(subset=["Close"])
    df = df[~df.index.duplicated(keep="last")].sort_index()
    if df.empty:
        raise FetchError(symbol, "series is empty after cleaning")
    return df


class YfinanceProvider:
    """Fetch daily bars from yfinance."""

    def __init__(
        self,
        start: Optional[str] = None,
        end: Optional[str] = None,
        period: str = "max",
        interval: str = "1d",
        auto_adjust: bool = False,
    ):
        self.start = start
        self.end = end
        self.period = period
        self.interval = interval
        self.auto_adjust = auto_adjust

    def fetch(self, symbol: str) -> OhlcvFrame:
        import yfinance as yf  # local import to keep dependency optional in some environments

        symbol = str(symbol).strip()
        if not symbol:
            raise FetchError(symbol, "empty ticker")

        kwargs = dict(
            tickers=symbol,
            interval=self.interval,
            auto_adjust=self.auto_adjust,
            progress=False,
        )
        if self.start is not None or self.end is not None:
            kwargs.update(start=self.start, end=self.end)
        else:
            kwargs.update(period=self.period)

        try:
            df = yf.download(**kwargs)
        except Exception as e:  # network / parsing failures surface as one error kind
            raise FetchError(symbol, f"download failed ({e})") from e

        if df is None or len(df) == 0:
            raise FetchError(symbol, "yfinance returned empty data")

        df = _standardize_ohlcv_columns(df, symbol)
        log.info("fetched %d bars for %s (%s .. %s)", len(df), symbol, df.index[0].date(), df.index[-1].date())
        return OhlcvFrame(df=df, symbol=symbol)


class CsvProvider:
    """Load OHLCV data from a CSV file (Date,Open,High,Low,Close,Volume)."""

    def __init__(self, csv_path: str | Path, datetime_col: str = "Date"):
        self.csv_path = Path(csv_path)
        self.datetime_col = datetime_col

    def fetch(self, symbol: str) -> OhlcvFrame:
        symbol = str(symbol).strip()
        path = self.csv_path
        if not path.exists():
            raise FetchError(symbol, f"no such file: {path}")

        try:
            df = pd.read_csv(path)
        except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
            raise FetchError(symbol, f"unreadable CSV ({e})") from e

        datetime_col = self.datetime_col
        if datetime_col not in df.columns:
            # try common alternatives
            for cand in ["Datetime", "datetime", "date", "timestamp", "Time", "time"]:
                if cand in df.columns:
                    datetime_col = cand
                    break
        if datetime_col not in df.columns:
            raise FetchError(symbol, f"CSV must contain a datetime column (tried '{self.datetime_col}')")

        try:
            df[datetime_col] = pd.to_datetime(df[datetime_col])
        except (ValueError, TypeError) as e:
            raise FetchError(symbol, f"unparseable dates in column '{datetime_col}' ({e})") from e
        # file order decides which duplicate date wins; sorting happens after dedup
        df = df.set_index(datetime_col)

        df = _standardize_ohlcv_columns(df, symbol)
        log.info("loaded %d bars for %s from %s", len(df), symbol, path)
        return OhlcvFrame(df=df, symbol=symbol)
