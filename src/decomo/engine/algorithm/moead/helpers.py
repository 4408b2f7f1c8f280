# algorithm/moead/helpers.py
"""
Support functions for MOEA/D.

Neighbor-vs-population choice, mating sources and the bounded replacement
rule. The neighbor decision is made once per step and passed explicitly to
both mating and replacement.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from decomo.foundation.solution import Solution

if TYPE_CHECKING:
    from .state import MOEADState


def choose_neighbor_type(rng: np.random.Generator, delta: float) -> bool:
    """True to mate/replace within the neighborhood, False for the whole population."""
    return bool(rng.random() < delta)


def mating_source(st: "MOEADState", idx: int, use_neighbors: bool) -> np.ndarray:
    """Indices parents are drawn from for subproblem ``idx``."""
    if use_neighbors:
        return st.neighbors[idx]
    return np.arange(st.pop_size)


def replacement_order(st: "MOEADState", idx: int, use_neighbors: bool) -> np.ndarray:
    """Random permutation of the replacement candidates for subproblem ``idx``."""
    if use_neighbors:
        return st.rng.permutation(st.neighbors[idx])
    return st.rng.permutation(st.pop_size)


def update_neighborhood(
    st: "MOEADState",
    idx: int,
    child: Solution,
    use_neighbors: bool,
) -> np.ndarray:
    """Replace incumbents the offspring beats under their own weight vectors.

    Candidates are visited in random order; slot k is replaced when
    ``g(child | w_k, z) < g(x_k | w_k, z)``. The walk stops once
    ``replace_limit`` slots have been replaced, so later candidates are never
    examined.

    Parameters
    ----------
    st : MOEADState
        Algorithm state.
    idx : int
        Index of the current subproblem.
    child : Solution
        Evaluated offspring.
    use_neighbors : bool
        Same source decision as used for mating.

    Returns
    -------
    np.ndarray
        Indices of the replaced slots, in replacement order.
    """
    if st.replace_limit <= 0:
        return np.empty(0, dtype=int)

    order = replacement_order(st, idx, use_neighbors)
    if order.size == 0:
        return np.empty(0, dtype=int)

    local_weights = st.weights[order]
    current_vals = st.aggregator.compute(np.vstack([st.population[k].objectives for k in order]), local_weights)
    child_vals = st.aggregator.compute(np.broadcast_to(child.objectives, local_weights.shape), local_weights)

    # ideal point and child are constant over the walk
    replaced = order[np.asarray(child_vals < current_vals)][: st.replace_limit]
    for k in replaced:
        st.population[int(k)] = child.copy()
    return replaced


__all__ = [
    "choose_neighbor_type",
    "mating_source",
    "replacement_order",
    "update_neighborhood",
]
