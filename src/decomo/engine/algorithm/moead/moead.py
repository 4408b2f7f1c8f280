# algorithm/moead/moead.py
"""
MOEA/D evolutionary algorithm core.

This module contains the main MOEAD class with the evolutionary loop
(run/step/ask/tell).
- Setup logic: initialization.py
- Scalarization and ideal point: aggregation.py
- State and results: state.py
- Helper functions: helpers.py

References:
    Q. Zhang and H. Li, "MOEA/D: A Multiobjective Evolutionary Algorithm Based on
    Decomposition," IEEE Trans. Evolutionary Computation, vol. 11, no. 6, 2007.
    H. Li and Q. Zhang, "Multiobjective Optimization Problems With Complicated
    Pareto Sets, MOEA/D and NSGA-II," IEEE Trans. Evolutionary Computation,
    vol. 13, no. 2, 2009.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from decomo.engine.algorithm.config.moead import MOEADConfig, MOEADConfigData
from decomo.foundation.eval.population import evaluate_solutions
from decomo.foundation.exceptions import EvaluationError, StateError
from decomo.foundation.observer import AlgorithmStatus, StatusCallback, notify_observers
from decomo.foundation.solution import Solution

from .helpers import choose_neighbor_type, mating_source, update_neighborhood
from .initialization import initialize_moead_run, validate_moead_config
from .state import MOEADState, Phase, build_moead_result

if TYPE_CHECKING:
    from decomo.foundation.problem.types import ProblemProtocol

_logger = logging.getLogger(__name__)


class MOEAD:
    """
    Multi-Objective Evolutionary Algorithm based on Decomposition.

    MOEA/D decomposes a multi-objective problem into scalar subproblems using
    weight vectors and optimizes them collaboratively via neighborhood-based
    mating and replacement. Each step visits one subproblem and produces,
    evaluates and integrates exactly one offspring.

    Parameters
    ----------
    config : MOEADConfigData | Mapping
        Algorithm configuration, usually built with
        ``MOEADConfig().pop_size(...)...fixed()``. Plain mappings go through
        :meth:`MOEADConfig.from_dict`.
    observers : Iterable[StatusCallback]
        Callables receiving an :class:`AlgorithmStatus` after initialization
        and after every step.

    Raises
    ------
    ConfigurationError
        If the crossover cannot be fed by the configured mating pool.

    Examples
    --------
    >>> from decomo import MOEAD, MOEADConfig, ZDT1Problem
    >>> config = MOEADConfig.default(pop_size=100, n_var=30)
    >>> result = MOEAD(config).run(ZDT1Problem(n_var=30), ("n_eval", 20000), seed=42)

    Using ask/tell for external evaluation:

    >>> moead = MOEAD(config)
    >>> moead.initialize(problem, ("n_eval", 20000), seed=42)
    >>> while not moead.should_stop():
    ...     child = moead.ask()
    ...     child.objectives = my_external_evaluator(child.variables)
    ...     moead.tell(child)
    """

    name = "MOEA/D"

    def __init__(
        self,
        config: MOEADConfigData | Mapping[str, Any],
        *,
        observers: Iterable[StatusCallback] = (),
    ) -> None:
        if not isinstance(config, MOEADConfigData):
            config = MOEADConfig.from_dict(dict(config))
        validate_moead_config(config)
        self.cfg = config
        self.observers: list[StatusCallback] = list(observers)
        self._st: MOEADState | None = None
        self._phase = Phase.CREATED

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def state(self) -> MOEADState:
        if self._st is None:
            raise StateError("MOEA/D has not been initialized.", phase=self._phase.value)
        return self._st

    def add_observer(self, observer: StatusCallback) -> None:
        self.observers.append(observer)

    def run(
        self,
        problem: "ProblemProtocol",
        termination: Any = ("n_eval", 10000),
        seed: int | None = None,
    ) -> dict[str, Any]:
        """
        Run the MOEA/D algorithm.

        Parameters
        ----------
        problem : ProblemProtocol
            The optimization problem to solve.
        termination : Any
            A TerminationPolicy, a ``("n_eval", N)`` / ``("max_time", ms)`` /
            ``("n_gen", G)`` tuple, or a predicate over AlgorithmStatus.
        seed : int | None
            Random seed for reproducibility.

        Returns
        -------
        dict[str, Any]
            Result dictionary with X, F, population, weights, ideal,
            evaluations, generations and computing_time.
        """
        self.initialize(problem, termination, seed)
        st = self._st
        assert st is not None, "State not initialized"
        _logger.info(
            "Starting %s on %s (pop_size=%d, neighbor_size=%d, termination=%r)",
            self.name,
            type(problem).__name__,
            st.pop_size,
            st.weight_space.neighbor_size,
            st.termination,
        )

        self._phase = st.phase = Phase.RUNNING
        while not self.should_stop():
            self.step()
        self._phase = st.phase = Phase.TERMINATED

        result = build_moead_result(st)
        _logger.info(
            "%s finished: %d evaluations, %d generations, %d ms",
            self.name,
            result["evaluations"],
            result["generations"],
            result["computing_time"],
        )
        return result

    def initialize(
        self,
        problem: "ProblemProtocol",
        termination: Any = ("n_eval", 10000),
        seed: int | None = None,
    ) -> AlgorithmStatus:
        """Build weights, neighborhoods and the evaluated initial population."""
        self._st = initialize_moead_run(self.cfg, problem, termination, seed)
        self._phase = Phase.INITIALIZED
        return self._publish()

    def should_stop(self) -> bool:
        """Ask the termination policy; only meaningful between steps."""
        st = self.state
        if st.pending_offspring is not None:
            return False
        return bool(st.termination.is_met(st.status()))

    def step(self) -> int:
        """
        Run one generation step: visit a subproblem, produce, evaluate and
        integrate one offspring.

        Returns
        -------
        int
            Number of population slots replaced by the offspring.
        """
        st = self.state
        child = self.ask()
        evaluate_solutions(
            st.problem,
            [child],
            context={"subproblem": st.pending_subproblem, "generation": st.generation},
        )
        return self.tell(child)

    def ask(self) -> Solution:
        """
        Produce the offspring for the next subproblem without evaluating it.

        Returns
        -------
        Solution
            Unevaluated offspring; pass it back to :meth:`tell` once its
            objectives are set.

        Raises
        ------
        StateError
            If called before initialization or while an offspring is pending.
        """
        st = self.state
        if st.pending_offspring is not None:
            raise StateError(
                "ask() called while the previous offspring has not been told.",
                phase=self._phase.value,
            )
        if self._phase is Phase.TERMINATED:
            raise StateError("ask() called on a terminated run.", phase=self._phase.value)

        idx = int(next(st.sequencer))
        use_neighbors = choose_neighbor_type(st.rng, st.delta)
        source = mating_source(st, idx, use_neighbors)
        child = st.pipeline.reproduce(st.population, source, idx, st.rng)

        st.pending_offspring = child
        st.pending_subproblem = idx
        st.pending_use_neighbors = use_neighbors
        return child

    def tell(self, offspring: Solution) -> int:
        """
        Integrate an evaluated offspring: update the ideal point, then run
        bounded replacement over the source chosen in :meth:`ask`.

        Returns
        -------
        int
            Number of population slots replaced.

        Raises
        ------
        StateError
            If there is no pending offspring.
        EvaluationError
            If the offspring has no valid objective vector.
        """
        st = self.state
        idx = st.pending_subproblem
        use_neighbors = st.pending_use_neighbors
        if st.pending_offspring is None or idx is None or use_neighbors is None:
            raise StateError("tell() called without a pending ask().", phase=self._phase.value)

        if not offspring.evaluated or offspring.n_obj != st.aggregator.ideal.shape[0]:
            raise EvaluationError(
                "tell() received an offspring without a valid objective vector.",
                details={"subproblem": idx, "generation": st.generation, "objectives": offspring.objectives},
            )

        st.pending_offspring = None
        st.pending_subproblem = None
        st.pending_use_neighbors = None

        st.evaluations += 1
        st.aggregator.update(offspring.objectives)
        replaced = update_neighborhood(st, idx, offspring, use_neighbors)

        st.generation += 1
        st.replacements += int(replaced.size)
        _logger.debug(
            "step %d: subproblem=%d source=%s replaced=%s evaluations=%d",
            st.generation,
            idx,
            "neighborhood" if use_neighbors else "population",
            replaced.tolist(),
            st.evaluations,
        )
        self._publish()
        return int(replaced.size)

    def result(self) -> dict[str, Any]:
        return build_moead_result(self.state)

    def _publish(self) -> AlgorithmStatus:
        status = self.state.status()
        notify_observers(self.observers, status)
        return status


__all__ = ["MOEAD"]
