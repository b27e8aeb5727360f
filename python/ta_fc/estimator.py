"""Estimator adapter, stratified train/test split and hold-out scoring.

The core only relies on the ``fit`` / ``predict`` contract, so any
regressor with that shape (tree ensemble, boosting, linear) can be dropped in.
"""

from __future__ import annotations

import math
from typing import Optional, Protocol, Tuple

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestRegressor
from sklearn.metrics import mean_absolute_error, mean_squared_error

from .config import ModelConfig
from .errors import DegenerateSplitError
from .types import HoldoutMetrics

FEATURE_COLUMNS = ["Open", "High", "Low", "Volume", "smaShort", "smaLong", "emaShort"]
TARGET_COLUMN = "Close"


class Estimator(Protocol):
    def fit(self, X: pd.DataFrame, y: pd.Series) -> "Estimator": ...

    def predict(self, X: pd.DataFrame) -> np.ndarray: ...


class RandomForestEstimator:
    """Random forest regressor on the fixed feature set. Deterministic for a fixed seed."""

    def __init__(self, cfg: ModelConfig = ModelConfig()):
        self.cfg = cfg
        self.model = RandomForestRegressor(
            n_estimators=int(cfg.n_estimators),
            random_state=int(cfg.seed),
            n_jobs=cfg.n_jobs,
        )

    def fit(self, X: pd.DataFrame, y: pd.Series) -> "RandomForestEstimator":
        self.model.fit(X[FEATURE_COLUMNS], y)
        return self

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        return self.model.predict(X[FEATURE_COLUMNS])


def features(df: pd.DataFrame) -> pd.DataFrame:
    return df[FEATURE_COLUMNS]


def fit_estimator(train: pd.DataFrame, estimator: Optional[Estimator] = None, cfg: ModelConfig = ModelConfig()) -> Estimator:
    est = estimator if estimator is not None else RandomForestEstimator(cfg)
    est.fit(features(train), train[TARGET_COLUMN])
    return est


def predict_one(estimator: Estimator, row: pd.Series) -> float:
    """Predict a single price from one feature row."""
    X = row[FEATURE_COLUMNS].to_frame().T.astype(float)
    return float(np.asarray(estimator.predict(X), dtype=float)[0])


def partition_indices(
    y: pd.Series | np.ndarray,
    train_frac: float = 0.8,
    seed: int = 123,
    groups: int = 5,
) -> Tuple[np.ndarray, np.ndarray]:
    """Stratified split on a numeric target.

    Targets are cut into up to `groups` quantile bins and
    ``ceil(len(bin) * train_frac)`` positions are drawn from each bin.
    Returns sorted (train, test) positions so both sides stay chronological.
    """
    values = np.asarray(y, dtype=float)
    n = len(values)
    if n == 0:
        raise DegenerateSplitError("cannot split an empty series")

    n_bins = max(1, min(int(groups), n))
    # rank first so ties never collapse bins
    ranks = pd.Series(values).rank(method="first").to_numpy()
    bins = np.minimum(((ranks - 1) * n_bins // n).astype(int), n_bins - 1)

    rng = np.random.default_rng(seed)
    train_parts = []
    for b in range(n_bins):
        members = np.flatnonzero(bins == b)
        if len(members) == 0:
            continue
        k = int(math.ceil(len(members) * float(train_frac)))
        train_parts.append(rng.choice(members, size=k, replace=False))

    train_idx = np.sort(np.concatenate(train_parts)) if train_parts else np.array([], dtype=int)
    test_idx = np.setdiff1d(np.arange(n), train_idx)
    if len(train_idx) == 0 or len(test_idx) == 0:
        raise DegenerateSplitError(
            f"split of {n} rows at train_frac={train_frac} gave train={len(train_idx)} test={len(test_idx)}"
        )
    return train_idx, test_idx


def split_frame(df: pd.DataFrame, cfg: ModelConfig = ModelConfig()) -> Tuple[pd.DataFrame, pd.DataFrame]:
    train_idx, test_idx = partition_indices(df[TARGET_COLUMN], cfg.train_frac, cfg.seed, cfg.split_groups)
    return df.iloc[train_idx].copy(), df.iloc[test_idx].copy()


def evaluate_holdout(actual: pd.Series | np.ndarray, predicted: pd.Series | np.ndarray) -> HoldoutMetrics:
    a = np.asarray(actual, dtype=float)
    p = np.asarray(predicted, dtype=float)
    nonzero = a != 0
    mape = float(np.mean(np.abs((a[nonzero] - p[nonzero]) / a[nonzero])) * 100.0) if nonzero.any() else float("nan")
    return HoldoutMetrics(
        rmse=float(math.sqrt(mean_squared_error(a, p))),
        mae=float(mean_absolute_error(a, p)),
        mape_pct=mape,
        n=int(len(a)),
    )
