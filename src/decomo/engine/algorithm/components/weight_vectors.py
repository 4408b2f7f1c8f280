"""
Weight vectors and weight-vector neighborhoods for decomposition.

Each subproblem i is anchored to weights[i]; its neighborhood is the list of
the T subproblems whose weight vectors are closest in Euclidean distance
(itself included, ties broken by index).
"""

from __future__ import annotations

import logging
import os
from math import comb
from typing import Optional

import numpy as np

from decomo.foundation.exceptions import ConfigurationError

_logger = logging.getLogger(__name__)


def load_or_generate_weight_vectors(
    pop_size: int,
    n_obj: int,
    *,
    path: Optional[str] = None,
    divisions: Optional[int] = None,
) -> np.ndarray:
    """
    Load weight vectors from a file if one is given, otherwise generate a
    simplex-lattice design with exactly ``pop_size`` points.
    """
    if path:
        if not os.path.exists(path):
            raise ConfigurationError(
                f"Weight vector file '{path}' does not exist.",
                details={"path": path},
            )
        weights = load_weight_vectors(path)
        _assert_valid_weights(weights, n_obj)
        if weights.shape[0] != pop_size:
            raise ConfigurationError(
                f"Weight file '{path}' contains {weights.shape[0]} vectors but pop_size={pop_size}.",
                suggestion="Use a weight file with exactly one vector per subproblem",
                details={"path": path, "n_weights": int(weights.shape[0]), "pop_size": pop_size},
            )
        return _freeze(weights)

    return generate_weight_vectors(pop_size, n_obj, divisions=divisions)


def load_weight_vectors(path: str) -> np.ndarray:
    """Read a comma- or whitespace-separated weight matrix."""
    with open(path, "r", encoding="utf-8") as fh:
        text = fh.read().replace(",", " ")
    rows = [line.split() for line in text.splitlines() if line.strip() and not line.lstrip().startswith("#")]
    try:
        arr = np.asarray([[float(v) for v in row] for row in rows], dtype=float)
    except ValueError as exc:
        raise ConfigurationError(f"Weight file '{path}' is not numeric: {exc}", details={"path": path}) from exc
    return np.atleast_2d(arr)


def generate_weight_vectors(pop_size: int, n_obj: int, *, divisions: Optional[int] = None) -> np.ndarray:
    """
    Uniform simplex-lattice weight vectors, one per subproblem.

    Raises
    ------
    ConfigurationError
        If no lattice (or the requested ``divisions``) yields exactly ``pop_size`` vectors.
    """
    if pop_size < 1:
        raise ConfigurationError(f"pop_size must be positive, got {pop_size}.", details={"pop_size": pop_size})
    if n_obj < 1:
        raise ConfigurationError(f"n_obj must be positive, got {n_obj}.", details={"n_obj": n_obj})

    if n_obj == 1:
        return _freeze(np.ones((pop_size, 1), dtype=float))

    if n_obj == 2 and divisions is None:
        if pop_size == 1:
            return _freeze(np.array([[0.5, 0.5]]))
        w = np.arange(pop_size, dtype=float) / (pop_size - 1)
        return _freeze(np.column_stack([w, 1.0 - w]))

    if divisions is None:
        divisions = _find_exact_divisions(pop_size, n_obj)
    elif _count_lattice_points(n_obj, divisions) != pop_size:
        raise ConfigurationError(
            f"A simplex lattice with {divisions} divisions has "
            f"{_count_lattice_points(n_obj, divisions)} points, not pop_size={pop_size}.",
            suggestion=f"Use pop_size={_count_lattice_points(n_obj, divisions)} or drop 'divisions'",
            details={"pop_size": pop_size, "n_obj": n_obj, "divisions": divisions},
        )

    weights = _simplex_lattice(n_obj, divisions)
    _logger.debug("Generated %d weight vectors (n_obj=%d, divisions=%d)", weights.shape[0], n_obj, divisions)
    return _freeze(weights)


def valid_population_sizes(n_obj: int, upto: int) -> list[int]:
    """Population sizes a simplex lattice can produce exactly, up to ``upto``."""
    if n_obj == 1:
        # every size collapses to the single weight (1.0,)
        return [1] if upto >= 1 else []
    sizes = []
    divisions = 1
    while True:
        count = _count_lattice_points(n_obj, divisions)
        if count > upto:
            break
        sizes.append(count)
        divisions += 1
    return sizes


def compute_neighbors(weights: np.ndarray, neighbor_size: int) -> np.ndarray:
    """Compute neighborhood indices based on weight vector distances.

    Parameters
    ----------
    weights : np.ndarray
        Weight vectors, shape (pop_size, n_obj).
    neighbor_size : int
        Neighborhood size (T parameter). Values above pop_size are clamped.

    Returns
    -------
    np.ndarray
        Read-only neighborhood indices, shape (pop_size, min(T, pop_size)).
        Row i starts with i itself.
    """
    if neighbor_size < 1:
        raise ConfigurationError(
            f"neighbor_size must be positive, got {neighbor_size}.",
            details={"neighbor_size": neighbor_size},
        )
    pop_size = weights.shape[0]
    size = min(int(neighbor_size), pop_size)
    dist = np.linalg.norm(weights[:, None, :] - weights[None, :, :], axis=2)
    # i first, then index order among equal distances
    np.fill_diagonal(dist, -1.0)
    order = np.argsort(dist, axis=1, kind="stable")
    return _freeze(order[:, :size].astype(int))


class WeightSpace:
    """
    Weight vectors plus their neighborhoods, computed once and immutable afterwards.

    Parameters
    ----------
    pop_size : int
        Number of subproblems N.
    n_obj : int
        Number of objectives M.
    neighbor_size : int
        Neighborhood size T; values above N degrade to N.
    path, divisions : optional
        Forwarded to :func:`load_or_generate_weight_vectors`.
    """

    def __init__(
        self,
        pop_size: int,
        n_obj: int,
        neighbor_size: int,
        *,
        path: Optional[str] = None,
        divisions: Optional[int] = None,
    ) -> None:
        self.weights = load_or_generate_weight_vectors(pop_size, n_obj, path=path, divisions=divisions)
        if self.weights.shape[0] != pop_size:
            raise ConfigurationError(
                f"Generated {self.weights.shape[0]} weight vectors for pop_size={pop_size}.",
                details={"pop_size": pop_size, "n_weights": int(self.weights.shape[0])},
            )
        if neighbor_size > pop_size:
            _logger.warning("neighbor_size=%d exceeds pop_size=%d; using %d", neighbor_size, pop_size, pop_size)
        self.neighbors = compute_neighbors(self.weights, neighbor_size)

    @property
    def size(self) -> int:
        return int(self.weights.shape[0])

    @property
    def neighbor_size(self) -> int:
        return int(self.neighbors.shape[1])

    def neighbors_of(self, index: int) -> np.ndarray:
        return self.neighbors[index]

    def weight_of(self, index: int) -> np.ndarray:
        return self.weights[index]


def _assert_valid_weights(weights: np.ndarray, n_obj: int) -> None:
    if weights.ndim != 2:
        raise ConfigurationError("Weight matrix must be 2D.")
    if weights.shape[1] != n_obj:
        raise ConfigurationError(
            f"Expected weight vectors with {n_obj} columns, got {weights.shape[1]}.",
            details={"n_obj": n_obj, "columns": int(weights.shape[1])},
        )
    if np.any(weights < 0.0):
        raise ConfigurationError("Weight vectors must be non-negative.")
    rows_sum = weights.sum(axis=1)
    if np.any(np.abs(rows_sum - 1.0) > 1e-6):
        raise ConfigurationError("Each weight vector must sum to 1.")


def _find_exact_divisions(pop_size: int, n_obj: int) -> int:
    divisions = 1
    while _count_lattice_points(n_obj, divisions) < pop_size:
        divisions += 1
    if _count_lattice_points(n_obj, divisions) != pop_size:
        below = _count_lattice_points(n_obj, divisions - 1) if divisions > 1 else None
        above = _count_lattice_points(n_obj, divisions)
        nearest = [s for s in (below, above) if s is not None]
        raise ConfigurationError(
            f"No uniform simplex lattice has exactly {pop_size} weight vectors for {n_obj} objectives.",
            suggestion=f"Use one of the population sizes {nearest} or supply a weight file",
            details={"pop_size": pop_size, "n_obj": n_obj, "nearest": nearest},
        )
    return divisions


def _count_lattice_points(n_obj: int, divisions: int) -> int:
    if divisions < 1:
        raise ConfigurationError("divisions must be >= 1", details={"divisions": divisions})
    return comb(divisions + n_obj - 1, n_obj - 1)


def _simplex_lattice(n_obj: int, divisions: int) -> np.ndarray:
    coords = []

    def rec(remaining: int, depth: int, current: list[int]) -> None:
        if depth == n_obj - 1:
            current.append(remaining)
            coords.append(tuple(current))
            current.pop()
            return
        for value in range(remaining + 1):
            current.append(value)
            rec(remaining - value, depth + 1, current)
            current.pop()

    rec(divisions, 0, [])
    arr = np.asarray(coords, dtype=float)
    arr /= divisions
    # keep rows summing to exactly 1
    arr = np.clip(arr, 0.0, 1.0)
    arr /= arr.sum(axis=1, keepdims=True)
    return arr


def _freeze(arr: np.ndarray) -> np.ndarray:
    arr = np.ascontiguousarray(arr)
    arr.setflags(write=False)
    return arr


__all__ = [
    "WeightSpace",
    "compute_neighbors",
    "generate_weight_vectors",
    "load_or_generate_weight_vectors",
    "load_weight_vectors",
    "valid_population_sizes",
]
