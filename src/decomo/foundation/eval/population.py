from __future__ import annotations

import logging
from typing import Any, Sequence

import numpy as np

from decomo.foundation.exceptions import EvaluationError
from decomo.foundation.solution import Solution, stack_variables

_logger = logging.getLogger(__name__)


def evaluate_population(problem, X: np.ndarray) -> np.ndarray:
    """
    Evaluate a decision matrix and return the validated objective matrix.

    Raises
    ------
    EvaluationError
        If the problem raises, or returns objectives of the wrong shape or
        with non-finite values.
    """
    n_obj = int(problem.n_obj)
    out = {"F": np.empty((X.shape[0], n_obj))}
    try:
        problem.evaluate(X, out)
    except EvaluationError:
        raise
    except Exception as exc:
        raise EvaluationError(
            f"Problem {type(problem).__name__} failed to evaluate {X.shape[0]} solution(s): {exc}",
            details={"n_solutions": int(X.shape[0])},
        ) from exc

    F = np.asarray(out.get("F"), dtype=float)
    if F.ndim == 1 and X.shape[0] == 1:
        F = F.reshape(1, -1)
    if F.shape != (X.shape[0], n_obj):
        raise EvaluationError(
            f"Expected objectives with shape {(X.shape[0], n_obj)}, got {F.shape}.",
            details={"expected_shape": (X.shape[0], n_obj), "shape": F.shape},
        )
    if not np.all(np.isfinite(F)):
        bad = np.flatnonzero(~np.all(np.isfinite(F), axis=1))
        raise EvaluationError(
            f"Problem returned non-finite objectives for {bad.size} solution(s).",
            details={"rows": bad.tolist()},
        )
    return F


def evaluate_solutions(
    problem,
    solutions: Sequence[Solution],
    context: dict[str, Any] | None = None,
) -> Sequence[Solution]:
    """
    Fill in the objective vectors of ``solutions`` in place.

    ``context`` (e.g. subproblem and generation) is merged into the details of
    any EvaluationError so failures can be traced back to the step that caused them.
    """
    if not solutions:
        return solutions
    X = stack_variables(list(solutions))
    try:
        F = evaluate_population(problem, X)
    except EvaluationError as exc:
        if context:
            exc.details.update(context)
        _logger.error("Evaluation failed (%s): %s", context or {}, exc.message)
        raise
    for solution, f in zip(solutions, F):
        solution.objectives = f.copy()
    return solutions


__all__ = ["evaluate_population", "evaluate_solutions"]
