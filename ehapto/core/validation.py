"""ehapto.core.validation

Базовые проверки, чтобы ловить физически невозможные значения как можно раньше.
"""

from __future__ import annotations

import math

import numpy as np


def ensure_non_negative(value: float, name: str) -> None:
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")


def ensure_positive(value: float, name: str) -> None:
    if not value > 0:
        raise ValueError(f"{name} must be > 0, got {value}")


def ensure_in_range(value: float, min_value: float, max_value: float, name: str) -> None:
    if not (min_value <= value <= max_value):
        raise ValueError(f"{name} must be in [{min_value}, {max_value}], got {value}")


def ensure_finite(value: float, name: str) -> None:
    if not math.isfinite(float(value)):
        raise ValueError(f"{name} must be finite, got {value}")


def as_series(values, name: str) -> np.ndarray:
    """Convert to a finite 1-D float64 array."""

    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1-D, got shape {arr.shape}")
    if arr.size == 0:
        raise ValueError(f"{name} must not be empty")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must contain only finite values")
    return arr


def ensure_strictly_increasing(values: np.ndarray, name: str) -> None:
    if values.size > 1 and not np.all(np.diff(values) > 0.0):
        raise ValueError(f"{name} must be strictly increasing")
