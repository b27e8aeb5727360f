"""Error kinds raised by the prediction pipeline.

Every error aborts the single request that raised it. Nothing here holds
state, so one failing symbol never affects another.
"""

from __future__ import annotations


class PredictionError(Exception):
    """Base class for pipeline failures."""


class FetchError(PredictionError):
    """Unknown ticker, network failure, or an empty / malformed series."""

    def __init__(self, symbol: str, reason: str):
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"failed to fetch {symbol!r}: {reason}")


class InsufficientHistoryError(PredictionError):
    """Series too short to define the longest indicator window."""

    def __init__(self, n_rows: int, required: int):
        self.n_rows = n_rows
        self.required = required
        super().__init__(f"need at least {required} bars, got {n_rows}")


class DegenerateSplitError(PredictionError):
    """Train/test partition left one side empty."""


class NoTradesWarning(UserWarning):
    """Backtest finished without a single closed round-trip."""
