# algorithm/moead/aggregation.py
"""
Aggregative (scalarizing) functions for decomposition.

Each function owns the ideal point shared by all subproblems. ``update``
lowers it componentwise; ``compute`` maps an objective vector and a weight
vector to a scalar fitness where lower is better. ``compute`` broadcasts, so
``(k, M)`` objective/weight batches yield ``k`` values.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from decomo.foundation.exceptions import ConfigurationError


class AggregativeFunction(ABC):
    """Scalarization against a monotonically tracked ideal point."""

    def __init__(self) -> None:
        self.ideal: np.ndarray | None = None

    def update(self, objectives: np.ndarray) -> None:
        """Lower the ideal point with one objective vector or a batch of them."""
        f = np.asarray(objectives, dtype=float)
        if f.ndim > 1:
            f = f.min(axis=0)
        if self.ideal is None:
            self.ideal = np.full(f.shape, np.inf)
        elif self.ideal.shape != f.shape:
            raise ConfigurationError(
                f"Objective vector of length {f.shape[0]} does not match ideal point of length {self.ideal.shape[0]}.",
            )
        np.minimum(self.ideal, f, out=self.ideal)

    def reset(self) -> None:
        self.ideal = None

    def compute(self, objectives: np.ndarray, weights: np.ndarray) -> np.ndarray | float:
        if self.ideal is None:
            raise ConfigurationError("compute() called before the ideal point was initialised with update().")
        value = self._aggregate(np.asarray(objectives, dtype=float), np.asarray(weights, dtype=float), self.ideal)
        return float(value) if np.ndim(value) == 0 else value

    @abstractmethod
    def _aggregate(self, fvals: np.ndarray, weights: np.ndarray, ideal: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Tschebyscheff(AggregativeFunction):
    """max_j(w_j * |f_j - z_j|); zero weights are replaced by ``epsilon``."""

    def __init__(self, epsilon: float = 1.0e-4) -> None:
        super().__init__()
        self.epsilon = float(epsilon)

    def _aggregate(self, fvals: np.ndarray, weights: np.ndarray, ideal: np.ndarray) -> np.ndarray:
        w = np.where(weights == 0.0, self.epsilon, weights)
        return np.max(w * np.abs(fvals - ideal), axis=-1)


class WeightedSum(AggregativeFunction):
    """sum_j(w_j * (f_j - z_j))."""

    def _aggregate(self, fvals: np.ndarray, weights: np.ndarray, ideal: np.ndarray) -> np.ndarray:
        return np.sum(weights * (fvals - ideal), axis=-1)


class ModifiedTschebyscheff(Tschebyscheff):
    """Tschebyscheff plus ``rho`` times the weighted L1 term."""

    def __init__(self, rho: float = 0.001, epsilon: float = 1.0e-4) -> None:
        super().__init__(epsilon=epsilon)
        self.rho = float(rho)

    def _aggregate(self, fvals: np.ndarray, weights: np.ndarray, ideal: np.ndarray) -> np.ndarray:
        w = np.where(weights == 0.0, self.epsilon, weights)
        weighted = w * np.abs(fvals - ideal)
        return np.max(weighted, axis=-1) + self.rho * np.sum(weighted, axis=-1)


def build_aggregative_function(name: str, params: dict[str, Any] | None = None) -> AggregativeFunction:
    """Build aggregation function from name and parameters.

    Parameters
    ----------
    name : str
        "tschebyscheff", "weighted_sum" or "modified_tschebyscheff"
        (common spellings accepted).
    params : dict
        Additional parameters for the aggregation method.

    Raises
    ------
    ConfigurationError
        If the aggregation method is not supported.
    """
    params = dict(params or {})
    method = name.lower()
    if method in {"tchebycheff", "tchebychef", "tschebyscheff", "te"}:
        return Tschebyscheff(epsilon=float(params.get("epsilon", 1.0e-4)))
    if method in {"weighted_sum", "weightedsum", "ws"}:
        return WeightedSum()
    if method in {"modifiedtchebycheff", "modified_tchebycheff", "modified_tschebyscheff"}:
        return ModifiedTschebyscheff(
            rho=float(params.get("rho", 0.001)),
            epsilon=float(params.get("epsilon", 1.0e-4)),
        )
    raise ConfigurationError(
        f"Unsupported aggregation method '{name}'.",
        suggestion="Available methods: tschebyscheff, weighted_sum, modified_tschebyscheff",
        details={"aggregation": name},
    )


__all__ = [
    "AggregativeFunction",
    "Tschebyscheff",
    "WeightedSum",
    "ModifiedTschebyscheff",
    "build_aggregative_function",
]
