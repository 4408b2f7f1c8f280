"""Shared utilities for real-valued variation operators."""

from __future__ import annotations

from typing import Any, Sequence, Tuple

import numpy as np

from decomo.foundation.exceptions import ConfigurationError
from decomo.foundation.solution import Solution

ArrayLike = np.ndarray


def _ensure_bounds(lower: ArrayLike, upper: ArrayLike) -> Tuple[np.ndarray, np.ndarray]:
    """Validate bounds and return float arrays of identical shape."""
    lower_arr = np.atleast_1d(np.asarray(lower, dtype=float))
    upper_arr = np.atleast_1d(np.asarray(upper, dtype=float))
    if lower_arr.shape != upper_arr.shape:
        raise ConfigurationError("lower and upper bounds must have the same shape.")
    if lower_arr.ndim != 1:
        raise ConfigurationError("Bounds must be one-dimensional arrays.")
    if np.any(lower_arr > upper_arr):
        raise ConfigurationError("Each lower bound must be <= corresponding upper bound.")
    return lower_arr, upper_arr


def _check_nvars(n_vars: int, bounds: np.ndarray) -> None:
    """Ensure that a bounds array matches the provided dimensionality."""
    if bounds.shape[0] != n_vars:
        raise ConfigurationError(
            "Bounds dimensionality does not match the individual size.",
            details={"n_var": n_vars, "n_bounds": int(bounds.shape[0])},
        )


def resolve_prob_expression(value: Any, n_var: int, default: float) -> float:
    """Resolve probabilities given as floats or as "1/n" / "k/n" expressions."""
    if value is None:
        return float(default)
    if isinstance(value, str):
        text = value.strip().lower().replace(" ", "")
        if text.endswith("/n"):
            factor = text[:-2] or "1"
            try:
                return float(factor) / max(1, n_var)
            except ValueError as exc:
                raise ConfigurationError(f"Cannot parse probability expression '{value}'.") from exc
        try:
            return float(text)
        except ValueError as exc:
            raise ConfigurationError(f"Cannot parse probability expression '{value}'.") from exc
    return float(value)


class RealOperator:
    """Common validation utilities shared by all real-coded operators."""

    @staticmethod
    def _check_pool(pool: Sequence[Solution], expected: int, name: str) -> None:
        if len(pool) < expected:
            raise ConfigurationError(
                f"{name} requires at least {expected} solutions in the mating pool, got {len(pool)}.",
                suggestion="Increase neighbor_size/pop_size or select more parents",
                details={"operator": name, "required": expected, "pool_size": len(pool)},
            )

    @staticmethod
    def _check_bounds_match(vector: np.ndarray, bounds: np.ndarray) -> None:
        _check_nvars(vector.shape[-1], bounds)


__all__ = [
    "ArrayLike",
    "RealOperator",
    "_check_nvars",
    "_ensure_bounds",
    "resolve_prob_expression",
]
