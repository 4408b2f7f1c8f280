from __future__ import annotations

from typing import Protocol

import numpy as np

from decomo.foundation.solution import Solution


class ProblemProtocol(Protocol):
    n_var: int
    n_obj: int
    xl: float | np.ndarray
    xu: float | np.ndarray

    def evaluate(self, X: np.ndarray, out: dict[str, np.ndarray]) -> None: ...


class SolutionFactoryProtocol(ProblemProtocol, Protocol):
    def create_solution(self, rng: np.random.Generator) -> Solution: ...


__all__ = ["ProblemProtocol", "SolutionFactoryProtocol"]
