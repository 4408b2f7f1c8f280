"""Real-valued mutation operators. Mutations modify a Solution in place."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from decomo.foundation.solution import Solution

from .utils import ArrayLike, RealOperator, _ensure_bounds


class Mutation(RealOperator, ABC):
    """Base class for real-coded mutation operators."""

    @abstractmethod
    def execute(self, solution: Solution, rng: np.random.Generator) -> None:
        raise NotImplementedError


class PolynomialMutation(Mutation):
    """Standard polynomial mutation (Deb and Goyal)."""

    def __init__(
        self,
        prob_mutation: float,
        eta: float = 20.0,
        *,
        lower: ArrayLike,
        upper: ArrayLike,
    ) -> None:
        self.prob = float(prob_mutation)
        self.eta = float(eta)
        self.lower, self.upper = _ensure_bounds(lower, upper)
        self.span = self.upper - self.lower
        self._span_safe = np.where(self.span == 0.0, 1.0, self.span)

    def execute(self, solution: Solution, rng: np.random.Generator) -> None:
        x = solution.variables
        self._check_bounds_match(x, self.lower)
        mask = rng.random(x.shape[0]) <= self.prob
        if not np.any(mask):
            return

        cols = np.flatnonzero(mask)
        values = x[cols].copy()
        yl = self.lower[cols]
        yu = self.upper[cols]
        delta1 = (values - yl) / self._span_safe[cols]
        delta2 = (yu - values) / self._span_safe[cols]
        rnd = rng.random(cols.size)
        mut_pow = 1.0 / (self.eta + 1.0)
        deltaq = np.zeros(cols.size)

        idx_lower = rnd <= 0.5
        idx_upper = ~idx_lower
        if np.any(idx_lower):
            xy = 1.0 - delta1[idx_lower]
            val = 2.0 * rnd[idx_lower] + (1.0 - 2.0 * rnd[idx_lower]) * np.power(xy, self.eta + 1.0)
            deltaq[idx_lower] = np.power(val, mut_pow) - 1.0
        if np.any(idx_upper):
            xy = 1.0 - delta2[idx_upper]
            val = 2.0 * (1.0 - rnd[idx_upper]) + 2.0 * (rnd[idx_upper] - 0.5) * np.power(xy, self.eta + 1.0)
            deltaq[idx_upper] = 1.0 - np.power(val, mut_pow)

        values += deltaq * self.span[cols]
        x[cols] = np.clip(values, yl, yu)


class NullMutation(Mutation):
    """Leaves the solution untouched."""

    def execute(self, solution: Solution, rng: np.random.Generator) -> None:
        return None


__all__ = ["Mutation", "NullMutation", "PolynomialMutation"]
