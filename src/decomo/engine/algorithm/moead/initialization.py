# algorithm/moead/initialization.py
"""
Setup and initialization helpers for MOEA/D.

Builds weight vectors, neighborhoods, operators and the initial population,
and validates that the configuration can actually feed the operators.
"""
from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

import numpy as np

from decomo.engine.algorithm.components.sequencer import build_sequencer
from decomo.engine.algorithm.components.termination import parse_termination
from decomo.engine.algorithm.components.variation import NaryRandomSelection, VariationPipeline
from decomo.engine.algorithm.components.weight_vectors import WeightSpace
from decomo.foundation.eval.population import evaluate_solutions
from decomo.foundation.exceptions import ConfigurationError
from decomo.foundation.problem.base import resolve_bounds
from decomo.foundation.solution import Solution
from decomo.operators.policies import build_variation_operators, required_parents

from .aggregation import build_aggregative_function
from .state import MOEADState

if TYPE_CHECKING:
    from decomo.engine.algorithm.config.moead import MOEADConfigData
    from decomo.foundation.problem.types import ProblemProtocol

_logger = logging.getLogger(__name__)


def validate_moead_config(cfg: "MOEADConfigData") -> None:
    """
    Check that the mating pool can satisfy the crossover before any run starts.

    Raises
    ------
    ConfigurationError
        If the pool (selected parents plus anchor) is smaller than the
        crossover's parent count, or the smallest mating source cannot supply
        the selected parents.
    """
    needed = required_parents(cfg.crossover)
    pool_size = cfg.n_parents + 1
    if pool_size < needed:
        raise ConfigurationError(
            f"The crossover needs {needed} parents but the mating pool holds {pool_size} "
            f"({cfg.n_parents} selected plus the anchor).",
            suggestion=f"Use n_parents >= {needed - 1}",
            details={"required": needed, "pool_size": pool_size},
        )
    smallest_source = min(cfg.neighbor_size, cfg.pop_size)
    if smallest_source < cfg.n_parents:
        raise ConfigurationError(
            f"pop_size={cfg.pop_size} / neighbor_size={cfg.neighbor_size} cannot supply "
            f"{cfg.n_parents} distinct parents per mating.",
            suggestion=f"Use pop_size and neighbor_size >= {cfg.n_parents}",
            details={"pop_size": cfg.pop_size, "neighbor_size": cfg.neighbor_size, "n_parents": cfg.n_parents},
        )


def initialize_moead_run(
    cfg: "MOEADConfigData",
    problem: "ProblemProtocol",
    termination: Any,
    seed: int | None,
) -> MOEADState:
    """Initialize all components for a MOEA/D run.

    Parameters
    ----------
    cfg : MOEADConfigData
        Algorithm configuration.
    problem : ProblemProtocol
        The optimization problem.
    termination : Any
        Anything :func:`parse_termination` accepts.
    seed : int | None
        Random seed.

    Returns
    -------
    MOEADState
        State with an evaluated population and an initialised ideal point.
    """
    start_time = time.perf_counter()
    policy = parse_termination(termination, "MOEA/D")
    rng = np.random.default_rng(seed)

    pop_size = cfg.pop_size
    n_var = int(problem.n_var)
    n_obj = int(problem.n_obj)
    if n_var < 1 or n_obj < 1:
        raise ConfigurationError(
            f"Problem must have n_var >= 1 and n_obj >= 1, got n_var={n_var}, n_obj={n_obj}.",
            details={"n_var": n_var, "n_obj": n_obj},
        )
    xl, xu = resolve_bounds(problem)

    # Weight vectors and neighborhoods
    weight_cfg = cfg.weight_vectors or {}
    weight_space = WeightSpace(
        pop_size,
        n_obj,
        cfg.neighbor_size,
        path=weight_cfg.get("path"),
        divisions=weight_cfg.get("divisions"),
    )

    # Variation
    crossover, mutation = build_variation_operators(cfg.crossover, cfg.mutation, n_var, xl, xu)
    pipeline = VariationPipeline(NaryRandomSelection(cfg.n_parents), crossover, mutation)
    pipeline.validate(weight_space.neighbor_size, pop_size)

    agg_method, agg_params = cfg.aggregation
    aggregator = build_aggregative_function(agg_method, agg_params)
    sequencer = build_sequencer(cfg.sequencer, pop_size, rng)

    population = initialize_population(problem, pop_size, n_obj, xl, xu, rng)
    evaluate_solutions(problem, population, context={"phase": "initialization", "generation": 0})
    for solution in population:
        aggregator.update(solution.objectives)

    _logger.debug(
        "Initialized MOEA/D: pop_size=%d, n_obj=%d, neighbor_size=%d, ideal=%s",
        pop_size,
        n_obj,
        weight_space.neighbor_size,
        aggregator.ideal,
    )

    return MOEADState(
        problem=problem,
        population=population,
        rng=rng,
        weight_space=weight_space,
        aggregator=aggregator,
        sequencer=sequencer,
        pipeline=pipeline,
        termination=policy,
        pop_size=pop_size,
        delta=float(cfg.delta),
        replace_limit=int(cfg.replace_limit),
        evaluations=pop_size,
        start_time=start_time,
    )


def initialize_population(
    problem: "ProblemProtocol",
    pop_size: int,
    n_obj: int,
    xl: np.ndarray,
    xu: np.ndarray,
    rng: np.random.Generator,
) -> list[Solution]:
    """Create ``pop_size`` unevaluated solutions.

    Uses ``problem.create_solution(rng)`` when the problem provides one,
    otherwise samples uniformly inside the bounds.
    """
    factory = getattr(problem, "create_solution", None)
    if callable(factory):
        population = [factory(rng) for _ in range(pop_size)]
    else:
        population = [Solution.unevaluated(rng.uniform(xl, xu), n_obj) for _ in range(pop_size)]

    # slots must never share an instance
    seen: set[int] = set()
    for i, solution in enumerate(population):
        if id(solution) in seen:
            population[i] = solution.copy()
        seen.add(id(population[i]))
    return population


__all__ = [
    "initialize_moead_run",
    "initialize_population",
    "validate_moead_config",
]
