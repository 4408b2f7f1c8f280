# problem/convex.py
import numpy as np

from decomo.foundation.problem.base import Problem


class ConvexBiObjective(Problem):
    """Minimize (x, 1 - sqrt(x)) for a single x in [0, 1]; the whole domain is Pareto-optimal."""

    def __init__(self) -> None:
        self.n_var = 1
        self.n_obj = 2
        self.xl = 0.0
        self.xu = 1.0

    def objectives(self, X: np.ndarray) -> np.ndarray:
        x = np.clip(X[:, 0], 0.0, 1.0)
        return np.column_stack([x, 1.0 - np.sqrt(x)])
