"""
Candidate solution container.

A Solution owns its decision vector and its objective vector. Population slots
never share instances: whenever a solution moves into another slot it is
copied first.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass(eq=False)
class Solution:
    """
    Decision variables plus objective values.

    Attributes
    ----------
    variables : np.ndarray
        Decision vector, shape (n_var,).
    objectives : np.ndarray
        Objective vector, shape (n_obj,). NaN until evaluated.
    """

    variables: np.ndarray
    objectives: np.ndarray = field(default_factory=lambda: np.empty(0))

    def __post_init__(self) -> None:
        self.variables = np.array(self.variables, dtype=float, copy=True).ravel()
        self.objectives = np.array(self.objectives, dtype=float, copy=True).ravel()

    @classmethod
    def unevaluated(cls, variables: np.ndarray, n_obj: int) -> "Solution":
        return cls(variables=variables, objectives=np.full(n_obj, np.nan))

    @property
    def n_var(self) -> int:
        return int(self.variables.shape[0])

    @property
    def n_obj(self) -> int:
        return int(self.objectives.shape[0])

    @property
    def evaluated(self) -> bool:
        return self.objectives.size > 0 and bool(np.all(np.isfinite(self.objectives)))

    def copy(self) -> "Solution":
        """Return an independent deep copy."""
        return Solution(variables=self.variables.copy(), objectives=self.objectives.copy())

    def __repr__(self) -> str:
        return f"Solution(n_var={self.n_var}, objectives={np.array2string(self.objectives, precision=4)})"


def stack_variables(solutions: list[Solution]) -> np.ndarray:
    """Stack decision vectors into an (N, n_var) matrix."""
    if not solutions:
        return np.empty((0, 0))
    return np.vstack([s.variables for s in solutions])


def stack_objectives(solutions: list[Solution]) -> np.ndarray:
    """Stack objective vectors into an (N, n_obj) matrix."""
    if not solutions:
        return np.empty((0, 0))
    return np.vstack([s.objectives for s in solutions])


__all__ = ["Solution", "stack_variables", "stack_objectives"]
