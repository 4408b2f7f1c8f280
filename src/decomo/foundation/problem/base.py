"""
Base class for class-based custom optimization problems.
"""

from __future__ import annotations

import numpy as np

from decomo.foundation.exceptions import ConfigurationError
from decomo.foundation.solution import Solution


def resolve_bounds(problem) -> tuple[np.ndarray, np.ndarray]:
    """Return (xl, xu) as float arrays of length n_var."""
    n_var = int(problem.n_var)
    xl = np.broadcast_to(np.asarray(problem.xl, dtype=float), (n_var,)).copy()
    xu = np.broadcast_to(np.asarray(problem.xu, dtype=float), (n_var,)).copy()
    if np.any(xl > xu):
        raise ConfigurationError(
            "Problem bounds are inconsistent.",
            suggestion="Ensure xl <= xu for all variables",
            details={"xl": xl.tolist(), "xu": xu.tolist()},
        )
    return xl, xu


class Problem:
    """Base class for class-based custom optimization problems.

    Subclass this when your problem needs state set up in ``__init__``.

    **Required:** set ``n_var``, ``n_obj``, ``xl``, ``xu`` in ``__init__`` and
    implement :meth:`objectives`.

    Example::

        import numpy as np
        from decomo import MOEAD, MOEADConfig, Problem

        class MyProblem(Problem):
            def __init__(self):
                self.n_var = 3
                self.n_obj = 2
                self.xl = np.zeros(3)
                self.xu = np.ones(3)

            def objectives(self, X: np.ndarray) -> np.ndarray:
                f1 = np.sum(X ** 2, axis=1)
                f2 = np.sum((X - 1) ** 2, axis=1)
                return np.column_stack([f1, f2])

        cfg = MOEADConfig.default(pop_size=50, n_var=3)
        result = MOEAD(cfg).run(MyProblem(), ("n_eval", 5000), seed=1)
    """

    # ------------------------------------------------------------------
    # User-overridable interface
    # ------------------------------------------------------------------

    def objectives(self, X: np.ndarray) -> np.ndarray:
        """Compute objective values for a batch of solutions.

        Args:
            X: Decision matrix of shape ``(N, n_var)``.

        Returns:
            Array of shape ``(N, n_obj)`` with objective values to
            **minimize**.
        """
        raise NotImplementedError(
            f"{type(self).__name__} must implement objectives(self, X)."
        )

    def create_solution(self, rng: np.random.Generator) -> Solution:
        """Random solution drawn uniformly inside the bounds."""
        xl, xu = resolve_bounds(self)
        return Solution.unevaluated(rng.uniform(xl, xu), self.n_obj)

    # ------------------------------------------------------------------
    # Framework entry point - do not override
    # ------------------------------------------------------------------

    def evaluate(self, X: np.ndarray, out: dict[str, np.ndarray]) -> None:
        """Framework evaluation entry point. Override :meth:`objectives` instead."""
        X = np.asarray(X, dtype=float)
        F_computed = np.asarray(self.objectives(X), dtype=float)
        if F_computed.ndim == 1:
            F_computed = F_computed.reshape(-1, self.n_obj)
        F_buf = out.get("F")
        if F_buf is not None and F_buf.shape == F_computed.shape:
            F_buf[:] = F_computed
        else:
            out["F"] = F_computed


__all__ = ["Problem", "resolve_bounds"]
