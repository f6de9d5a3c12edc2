"""Forecast accuracy metrics for the evaluation pass."""

from __future__ import annotations

from typing import Dict

import numpy as np


def _align_arrays(
    y_true: np.ndarray,
    y_pred: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """Flatten both arrays and truncate to the shorter length."""
    y_true = np.asarray(y_true, dtype=np.float64).ravel()
    y_pred = np.asarray(y_pred, dtype=np.float64).ravel()
    n = min(len(y_true), len(y_pred))
    return y_true[:n], y_pred[:n]


def mse(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Mean Squared Error."""
    yt, yp = _align_arrays(y_true, y_pred)
    return float(np.mean((yt - yp) ** 2))


def rmse(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Root Mean Squared Error."""
    return float(np.sqrt(mse(y_true, y_pred)))


def mae(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Mean Absolute Error."""
    yt, yp = _align_arrays(y_true, y_pred)
    return float(np.mean(np.abs(yt - yp)))


def r2(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """R-squared (coefficient of determination)."""
    yt, yp = _align_arrays(y_true, y_pred)
    ss_res = np.sum((yt - yp) ** 2)
    ss_tot = np.sum((yt - np.mean(yt)) ** 2)
    return float(1 - ss_res / ss_tot) if ss_tot > 0 else 0.0


def compute_all(y_true: np.ndarray, y_pred: np.ndarray) -> Dict[str, float]:
    """Compute all metrics and return as a dict."""
    return {
        "MSE": mse(y_true, y_pred),
        "RMSE": rmse(y_true, y_pred),
        "MAE": mae(y_true, y_pred),
        "R2": r2(y_true, y_pred),
    }


def summary(y_true: np.ndarray, y_pred: np.ndarray, name: str = "Model") -> str:
    """Return a formatted metrics summary string."""
    m = compute_all(y_true, y_pred)
    return (
        f"\n{'=' * 40}\n"
        f"Metrics for: {name}\n"
        f"{'=' * 40}\n"
        f"  MSE:    {m['MSE']:.6f}\n"
        f"  RMSE:   {m['RMSE']:.6f}\n"
        f"  MAE:    {m['MAE']:.6f}\n"
        f"  R²:     {m['R2']:.4f}\n"
        f"{'=' * 40}"
    )
