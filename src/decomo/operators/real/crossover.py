"""Real-valued crossover operators.

Crossovers receive a mating pool of Solutions (anchor last) and return a list
of new, unevaluated Solutions. The engine keeps only the first one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from decomo.foundation.exceptions import ConfigurationError
from decomo.foundation.solution import Solution

from .utils import ArrayLike, RealOperator, _ensure_bounds


class Crossover(RealOperator, ABC):
    """Base class for real-coded crossover operators."""

    required_parents: int = 2

    def set_anchor(self, solution: Solution) -> None:
        """Solution of the current subproblem; only anchor-based operators use it."""
        self.anchor = solution

    @abstractmethod
    def execute(self, pool: Sequence[Solution], rng: np.random.Generator) -> list[Solution]:
        raise NotImplementedError


class DifferentialEvolutionCrossover(Crossover):
    """
    Differential Evolution crossover around an anchor solution.

    With pool ``[p0, p1, p2]`` the mutant is ``p2 + F * (p0 - p1)``; the child
    starts as a copy of the anchor and takes mutant components where
    ``u < CR`` (binomial, "rand/1/bin") or along a contiguous run
    ("rand/1/exp"). One position ``j_rand`` always comes from the mutant.
    """

    required_parents = 3
    VARIANTS = ("rand/1/bin", "rand/1/exp")

    def __init__(
        self,
        cr: float = 1.0,
        f: float = 0.5,
        variant: str = "rand/1/bin",
        *,
        lower: ArrayLike,
        upper: ArrayLike,
    ) -> None:
        if not 0.0 <= float(cr) <= 1.0:
            raise ConfigurationError(f"DE crossover rate must be in [0, 1], got {cr}.", details={"cr": cr})
        if variant not in self.VARIANTS:
            raise ConfigurationError(
                f"Unsupported DE variant '{variant}'.",
                suggestion=f"Available variants: {', '.join(self.VARIANTS)}",
                details={"variant": variant},
            )
        self.cr = float(cr)
        self.f = float(f)
        self.variant = variant
        self.lower, self.upper = _ensure_bounds(lower, upper)
        self.anchor: Solution | None = None

    def execute(self, pool: Sequence[Solution], rng: np.random.Generator) -> list[Solution]:
        self._check_pool(pool, self.required_parents, "DifferentialEvolutionCrossover")
        anchor = self.anchor if self.anchor is not None else pool[-1]
        base = anchor.variables
        self._check_bounds_match(base, self.lower)
        n_var = base.shape[0]

        mutant = pool[2].variables + self.f * (pool[0].variables - pool[1].variables)
        j_rand = int(rng.integers(n_var))
        if self.variant == "rand/1/bin":
            mask = rng.random(n_var) < self.cr
            mask[j_rand] = True
        else:
            mask = np.zeros(n_var, dtype=bool)
            j = j_rand
            for _ in range(n_var):
                mask[j] = True
                j = (j + 1) % n_var
                if rng.random() >= self.cr:
                    break

        child = np.where(mask, mutant, base)
        child = np.clip(child, self.lower, self.upper)
        return [Solution.unevaluated(child, anchor.n_obj)]


class SBXCrossover(Crossover):
    """Simulated Binary Crossover (SBX) on the first two pool members."""

    required_parents = 2

    def __init__(
        self,
        prob_crossover: float = 0.9,
        eta: float = 20.0,
        *,
        lower: ArrayLike,
        upper: ArrayLike,
    ) -> None:
        self.prob = float(prob_crossover)
        self.eta = float(eta)
        self.lower, self.upper = _ensure_bounds(lower, upper)

    def execute(self, pool: Sequence[Solution], rng: np.random.Generator) -> list[Solution]:
        self._check_pool(pool, self.required_parents, "SBXCrossover")
        parent1 = pool[0].variables.copy()
        parent2 = pool[1].variables.copy()
        self._check_bounds_match(parent1, self.lower)
        n_obj = pool[0].n_obj

        if rng.random() > self.prob:
            return [Solution.unevaluated(parent1, n_obj), Solution.unevaluated(parent2, n_obj)]

        eps = 1.0e-14
        y1 = np.minimum(parent1, parent2)
        y2 = np.maximum(parent1, parent2)
        diff = y2 - y1
        if not np.any(diff > eps):
            return [Solution.unevaluated(parent1, n_obj), Solution.unevaluated(parent2, n_obj)]

        rand = rng.random(parent1.shape)
        inv_eta = 1.0 / (self.eta + 1.0)
        c1 = 0.5 * ((y1 + y2) - self._betaq(1.0 + 2.0 * (y1 - self.lower) / diff.clip(min=eps), rand, inv_eta) * diff)
        c2 = 0.5 * ((y1 + y2) + self._betaq(1.0 + 2.0 * (self.upper - y2) / diff.clip(min=eps), rand, inv_eta) * diff)

        c1 = np.clip(c1, self.lower, self.upper)
        c2 = np.clip(c2, self.lower, self.upper)
        swap = rng.random(parent1.shape) <= 0.5
        child1 = np.where(swap, c2, c1)
        child2 = np.where(swap, c1, c2)
        return [Solution.unevaluated(child1, n_obj), Solution.unevaluated(child2, n_obj)]

    def _betaq(self, beta: np.ndarray, rand: np.ndarray, inv_eta: float) -> np.ndarray:
        eps = 1.0e-14
        beta = np.maximum(beta, eps)
        alpha = np.maximum(2.0 - np.power(beta, -(self.eta + 1.0)), eps)
        term = rand <= (1.0 / alpha)
        betaq = np.empty_like(rand)
        betaq[term] = np.power(rand[term] * alpha[term], inv_eta)
        betaq[~term] = np.power(1.0 / (2.0 - rand[~term] * alpha[~term]), inv_eta)
        return betaq


__all__ = [
    "Crossover",
    "DifferentialEvolutionCrossover",
    "SBXCrossover",
]
