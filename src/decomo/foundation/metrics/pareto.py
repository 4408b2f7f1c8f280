"""
Non-dominated filtering for result extraction.

The optimizer returns its whole population; callers use these helpers to
pull out the Pareto-front approximation (minimization on every objective).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Sequence, overload

import numpy as np

if TYPE_CHECKING:
    from decomo.foundation.solution import Solution


def non_dominated_mask(F: np.ndarray) -> np.ndarray:
    """Boolean mask of the rows of ``F`` no other row dominates. Duplicates are all kept."""
    F = np.asarray(F, dtype=float)
    keep = np.ones(F.shape[0], dtype=bool)
    for i, row in enumerate(F):
        if not keep[i]:
            continue
        # rows that i dominates
        beaten = np.all(row <= F, axis=1) & np.any(row < F, axis=1)
        keep[beaten] = False
        if np.any(np.all(F <= row, axis=1) & np.any(F < row, axis=1)):
            keep[i] = False
    return keep


@overload
def pareto_filter(F: np.ndarray | None, *, return_indices: Literal[False] = False) -> np.ndarray | None: ...


@overload
def pareto_filter(F: np.ndarray | None, *, return_indices: Literal[True]) -> tuple[np.ndarray, np.ndarray]: ...


def pareto_filter(F: np.ndarray | None, *, return_indices: bool = False) -> np.ndarray | tuple[np.ndarray, np.ndarray] | None:
    """
    Return the first Pareto front of an objective matrix.

    Args:
        F: Objective values (n_solutions, n_objectives), or None.
        return_indices: Also return the row indices of the front.

    Returns:
        Front array, or (front, indices) when return_indices is True.
        None (or empty arrays) when F is None.
    """
    if F is None:
        return (np.empty((0, 0)), np.empty(0, dtype=int)) if return_indices else None
    F = np.asarray(F)
    if F.ndim == 2 and F.shape[0] > 0:
        idx = np.flatnonzero(non_dominated_mask(F))
    else:
        idx = np.arange(F.shape[0] if F.ndim else 0, dtype=int)
        return (F, idx) if return_indices else F
    return (F[idx], idx) if return_indices else F[idx]


def non_dominated_solutions(population: Sequence["Solution"]) -> list["Solution"]:
    """Solutions of ``population`` on its first front, in population order."""
    if not population:
        return []
    F = np.vstack([s.objectives for s in population])
    return [population[int(i)] for i in np.flatnonzero(non_dominated_mask(F))]


__all__ = ["non_dominated_mask", "non_dominated_solutions", "pareto_filter"]
