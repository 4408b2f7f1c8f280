"""
MOEA/D state container and result building.

The state owns the population and, through the aggregative function, the
ideal point. Both are only mutated from inside one engine step.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

import numpy as np

from decomo.foundation.observer import AlgorithmStatus
from decomo.foundation.solution import Solution, stack_objectives, stack_variables

if TYPE_CHECKING:
    from decomo.engine.algorithm.components.sequencer import SubproblemSequencer
    from decomo.engine.algorithm.components.termination import TerminationPolicy
    from decomo.engine.algorithm.components.variation import VariationPipeline
    from decomo.engine.algorithm.components.weight_vectors import WeightSpace
    from decomo.foundation.problem.types import ProblemProtocol

    from .aggregation import AggregativeFunction


class Phase(str, Enum):
    CREATED = "created"
    INITIALIZED = "initialized"
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass
class MOEADState:
    """
    Mutable state of one MOEA/D run.

    Attributes
    ----------
    population : list[Solution]
        Slot i holds the incumbent of subproblem i; length is fixed at pop_size.
    weight_space : WeightSpace
        Weight vectors and neighborhoods.
    aggregator : AggregativeFunction
        Scalarization; owns the ideal point.
    sequencer : SubproblemSequencer
        Yields the next subproblem to visit.
    pipeline : VariationPipeline
        Mating-pool selection, crossover and mutation.
    delta : float
        Probability of using the neighborhood instead of the whole population.
    replace_limit : int
        Maximum number of slots one offspring may replace.
    """

    problem: "ProblemProtocol"
    population: list[Solution]
    rng: np.random.Generator
    weight_space: "WeightSpace"
    aggregator: "AggregativeFunction"
    sequencer: "SubproblemSequencer"
    pipeline: "VariationPipeline"
    termination: "TerminationPolicy"
    pop_size: int
    delta: float = 0.9
    replace_limit: int = 2

    evaluations: int = 0
    generation: int = 0
    replacements: int = 0
    start_time: float = field(default_factory=time.perf_counter)
    phase: Phase = Phase.INITIALIZED

    # Pending offspring for ask/tell
    pending_offspring: Solution | None = None
    pending_subproblem: int | None = None
    pending_use_neighbors: bool | None = None

    @property
    def weights(self) -> np.ndarray:
        return self.weight_space.weights

    @property
    def neighbors(self) -> np.ndarray:
        return self.weight_space.neighbors

    @property
    def ideal(self) -> np.ndarray:
        return self.aggregator.ideal

    @property
    def X(self) -> np.ndarray:
        return stack_variables(self.population)

    @property
    def F(self) -> np.ndarray:
        return stack_objectives(self.population)

    def computing_time(self) -> int:
        return int((time.perf_counter() - self.start_time) * 1000)

    def status(self) -> AlgorithmStatus:
        return AlgorithmStatus(
            evaluations=self.evaluations,
            generation=self.generation,
            population=tuple(self.population),
            computing_time=self.computing_time(),
            ideal=self.ideal.copy(),
        )


def build_moead_result(state: MOEADState) -> dict[str, Any]:
    """
    Build the result dictionary from MOEA/D state.

    Returns
    -------
    dict[str, Any]
        X, F, population, weights, ideal, evaluations, generations and
        computing_time (ms). The Pareto front is left to the caller
        (see :func:`decomo.foundation.metrics.pareto_filter`).
    """
    return {
        "X": state.X,
        "F": state.F,
        "population": list(state.population),
        "weights": state.weights,
        "ideal": state.ideal.copy(),
        "evaluations": state.evaluations,
        "generations": state.generation,
        "replacements": state.replacements,
        "computing_time": state.computing_time(),
    }


__all__ = [
    "MOEADState",
    "Phase",
    "build_moead_result",
]
