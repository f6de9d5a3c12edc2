"""Prediction accuracy metrics."""

from .metrics import compute_all, mae, mse, r2, rmse, summary

__all__ = ["compute_all", "mae", "mse", "r2", "rmse", "summary"]
