"""
decomo: decomposition-based multi-objective optimization (MOEA/D).

Quick start::

    from decomo import MOEAD, MOEADConfig, ZDT1Problem, pareto_filter

    problem = ZDT1Problem(n_var=30)
    config = MOEADConfig.default(pop_size=100, n_var=problem.n_var)
    result = MOEAD(config).run(problem, ("n_eval", 20000), seed=1)
    front = pareto_filter(result["F"])
"""

from .engine.algorithm.components.termination import (
    AnyOf,
    MaxComputingTime,
    MaxEvaluations,
    MaxGenerations,
    Predicate,
    TerminationPolicy,
)
from .engine.algorithm.components.weight_vectors import WeightSpace
from .engine.algorithm.config import MOEADConfig, MOEADConfigData
from .engine.algorithm.moead import MOEAD
from .foundation.exceptions import (
    ConfigurationError,
    DecomoError,
    EvaluationError,
    InvalidOperatorError,
    MissingConfigError,
    OptimizationError,
    StateError,
)
from .foundation.logging import configure_decomo_logging
from .foundation.metrics import pareto_filter
from .foundation.observer import AlgorithmStatus
from .foundation.problem import ConvexBiObjective, DTLZ2Problem, Problem, ZDT1Problem
from .foundation.solution import Solution
from .hooks import ProgressLogger, StatusHistory

__version__ = "0.1.0"

__all__ = [
    "MOEAD",
    "MOEADConfig",
    "MOEADConfigData",
    "WeightSpace",
    # Problems
    "Problem",
    "ConvexBiObjective",
    "DTLZ2Problem",
    "ZDT1Problem",
    "Solution",
    # Termination
    "AnyOf",
    "MaxComputingTime",
    "MaxEvaluations",
    "MaxGenerations",
    "Predicate",
    "TerminationPolicy",
    # Observers
    "AlgorithmStatus",
    "ProgressLogger",
    "StatusHistory",
    # Errors
    "ConfigurationError",
    "DecomoError",
    "EvaluationError",
    "InvalidOperatorError",
    "MissingConfigError",
    "OptimizationError",
    "StateError",
    "configure_decomo_logging",
    "pareto_filter",
]
