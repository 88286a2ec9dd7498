"""
Binomial likelihood and data generation for the GQEM model.

Each of the 12 prediction cells is an independent binomial observation: n[i, j]
trials of instruction i with word type j, of which data[i, j] were answered
"yes". Counts are organized like the prediction matrix:

                     old   related   unrelated
    gist             3      5         9
    verbatim         0      1         2
    gist+verbatim    4      1         10
    unrelated        5      8         2
"""

from __future__ import annotations

import logging
from typing import Tuple, Union

import numpy as np
from scipy.stats import binom

from gqem_errors import DomainError, ShapeMismatch
from gqem_model import GQEM
from gqem_predict import DEFAULT_ORDER, PREDICTION_SHAPE, JudgmentOrder, compute_predictions

logger = logging.getLogger(__name__)

TrialCounts = Union[int, np.ndarray]
Dataset = Tuple[np.ndarray, np.ndarray]


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------
def _as_integer_array(values, name: str) -> np.ndarray:
    arr = np.asarray(values)
    if arr.dtype == bool or not np.issubdtype(arr.dtype, np.number):
        raise DomainError(f"{name} must hold integer counts, got dtype {arr.dtype}")
    if not np.issubdtype(arr.dtype, np.integer):
        if not np.all(np.isfinite(arr)) or np.any(arr != np.round(arr)):
            raise DomainError(f"{name} must hold integer counts")
    return arr.astype(np.int64)


def trial_counts(n: TrialCounts) -> np.ndarray:
    """
    Broadcast trial counts to the prediction shape.

    Args:
        n: single trial count for every cell, or a 4x3 matrix of counts.
    Returns:
        4x3 int64 array.
    Raises:
        ShapeMismatch: if n is neither scalar nor 4x3.
        DomainError: if any count is negative or non-integral.
    """
    arr = np.asarray(n)
    if arr.ndim == 0:
        arr = np.full(PREDICTION_SHAPE, arr)
    elif arr.shape != PREDICTION_SHAPE:
        raise ShapeMismatch(f"n has shape {arr.shape}, expected a scalar or {PREDICTION_SHAPE}")
    arr = _as_integer_array(arr, "n")
    if np.any(arr < 0):
        raise DomainError("n must be non-negative")
    return arr


def _observed_counts(n: TrialCounts, data) -> Tuple[np.ndarray, np.ndarray]:
    data_arr = np.asarray(data)
    if data_arr.shape != PREDICTION_SHAPE:
        raise ShapeMismatch(f"data has shape {data_arr.shape}, expected {PREDICTION_SHAPE}")
    n_arr = trial_counts(n)
    data_arr = _as_integer_array(data_arr, "data")
    bad = np.argwhere((data_arr < 0) | (data_arr > n_arr))
    if bad.size:
        i, j = bad[0]
        raise DomainError(
            f"data[{i}, {j}] = {data_arr[i, j]} lies outside [0, {n_arr[i, j]}]"
        )
    return n_arr, data_arr


# -----------------------------------------------------------------------------
# Likelihood
# -----------------------------------------------------------------------------
def log_likelihood(
    model: GQEM,
    n: TrialCounts,
    data,
    order: JudgmentOrder = DEFAULT_ORDER,
) -> float:
    """
    Log likelihood of "yes" counts under the model.

    Args:
        model: GQEM parameterization.
        n: number of trials, a single int or a 4x3 matrix.
        data: 4x3 matrix of "yes" counts, 0 <= data <= n.
        order: evaluation order of the gist+verbatim judgment.
    Returns:
        Sum of the 12 binomial log pmfs. -inf when a count falls on the
        impossible side of a probability of exactly 0 or 1.
    Raises:
        ShapeMismatch: data is not 4x3 or n does not broadcast to it.
        DomainError: a count is negative, non-integral, or exceeds its n.
    """
    n_arr, data_arr = _observed_counts(n, data)
    preds = compute_predictions(model, order)
    loglike = float(np.sum(binom.logpmf(data_arr, n_arr, preds)))
    if loglike == -np.inf:
        logger.debug("data impossible under %r", model)
    return loglike


def log_likelihood_dataset(
    model: GQEM,
    dataset: Dataset,
    order: JudgmentOrder = DEFAULT_ORDER,
) -> float:
    """Log likelihood of an (n, counts) pair as returned by simulate()."""
    n, data = dataset
    return log_likelihood(model, n, data, order)


# -----------------------------------------------------------------------------
# Data generation
# -----------------------------------------------------------------------------
def sample(
    model: GQEM,
    n: TrialCounts,
    rng: np.random.Generator | None = None,
    order: JudgmentOrder = DEFAULT_ORDER,
) -> np.ndarray:
    """
    Draw one 4x3 matrix of "yes" counts, a binomial draw per cell.

    Args:
        model: GQEM parameterization.
        n: number of trials, a single int or a 4x3 matrix.
        rng: random generator; a fresh unseeded one is used when omitted.
        order: evaluation order of the gist+verbatim judgment.
    Returns:
        4x3 int64 array with 0 <= counts <= n.
    """
    n_arr = trial_counts(n)
    rng = rng if rng is not None else np.random.default_rng()
    preds = compute_predictions(model, order)
    counts = rng.binomial(n_arr, preds).astype(np.int64)
    logger.debug("sampled %d trials from %r", int(n_arr.sum()), model)
    return counts


def simulate(
    model: GQEM,
    n: TrialCounts,
    rng: np.random.Generator | None = None,
    order: JudgmentOrder = DEFAULT_ORDER,
) -> Dataset:
    """Generate a dataset as an (n, counts) pair, with n broadcast to 4x3."""
    n_arr = trial_counts(n)
    return n_arr, sample(model, n_arr, rng, order)
