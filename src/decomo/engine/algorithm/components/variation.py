"""
Mating-pool construction and offspring production for decomposition.

One call to :meth:`VariationPipeline.reproduce` yields exactly one offspring:
parents are drawn from the chosen source (a neighborhood or the whole
population), the current solution of the subproblem is appended last as the
anchor, crossover keeps its first child and mutation is applied in place.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from decomo.foundation.exceptions import ConfigurationError
from decomo.foundation.solution import Solution
from decomo.operators.real import Crossover, Mutation

_logger = logging.getLogger(__name__)


class NaryRandomSelection:
    """Pick ``n`` distinct indices uniformly at random from a source."""

    def __init__(self, n: int = 2) -> None:
        if int(n) < 1:
            raise ConfigurationError(f"Selection must pick at least one parent, got {n}.", details={"n": n})
        self.n = int(n)

    def select(self, source: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        if source.size < self.n:
            raise ConfigurationError(
                f"Cannot select {self.n} distinct parents from a source of {source.size}.",
                suggestion="Increase neighbor_size/pop_size",
                details={"required": self.n, "source_size": int(source.size)},
            )
        return rng.choice(source, size=self.n, replace=False)


class VariationPipeline:
    """
    Selection + crossover + mutation producing one offspring per subproblem visit.

    Parameters
    ----------
    selection : NaryRandomSelection
        Parent selection over the mating source.
    crossover : Crossover
        Receives the pool (anchor last) after ``set_anchor``.
    mutation : Mutation
        Applied in place to the retained child.
    """

    def __init__(self, selection: NaryRandomSelection, crossover: Crossover, mutation: Mutation) -> None:
        self.selection = selection
        self.crossover = crossover
        self.mutation = mutation

    @property
    def pool_size(self) -> int:
        return self.selection.n + 1

    def validate(self, source_size: int, pop_size: int) -> None:
        """
        Check that both mating sources can feed the operators.

        Raises
        ------
        ConfigurationError
            If the selection cannot draw enough distinct parents from the
            smaller source, or the pool is smaller than the crossover needs.
        """
        required = int(getattr(self.crossover, "required_parents", 2))
        if self.pool_size < required:
            raise ConfigurationError(
                f"{type(self.crossover).__name__} needs {required} parents but the mating pool "
                f"holds only {self.pool_size} (selection of {self.selection.n} plus the anchor).",
                suggestion=f"Select at least {required - 1} parents",
                details={"required": required, "pool_size": self.pool_size},
            )
        smallest = min(int(source_size), int(pop_size))
        if smallest < self.selection.n:
            raise ConfigurationError(
                f"A mating source of {smallest} subproblems cannot supply {self.selection.n} distinct parents.",
                suggestion="Increase neighbor_size or pop_size relative to the operator's parent count",
                details={"source_size": smallest, "required": self.selection.n},
            )

    def mating_pool(
        self,
        population: Sequence[Solution],
        source: np.ndarray,
        anchor_index: int,
        rng: np.random.Generator,
    ) -> list[Solution]:
        """Selected parents followed by the anchor solution."""
        if source.size < self.selection.n:
            _logger.debug("Mating source of size %d too small; using whole population", source.size)
            source = np.arange(len(population))
        indices = self.selection.select(source, rng)
        pool = [population[int(k)] for k in indices]
        pool.append(population[anchor_index])
        return pool

    def reproduce(
        self,
        population: Sequence[Solution],
        source: np.ndarray,
        anchor_index: int,
        rng: np.random.Generator,
    ) -> Solution:
        """Return one unevaluated offspring for subproblem ``anchor_index``."""
        pool = self.mating_pool(population, source, anchor_index, rng)
        self.crossover.set_anchor(population[anchor_index])
        children = self.crossover.execute(pool, rng)
        if not children:
            raise ConfigurationError(
                f"{type(self.crossover).__name__} returned no offspring.",
                details={"subproblem": anchor_index},
            )
        child = children[0]
        self.mutation.execute(child, rng)
        return child


__all__ = ["NaryRandomSelection", "VariationPipeline"]
