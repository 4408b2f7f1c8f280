"""
Operator building for MOEA/D.

Maps ``(name, params)`` tuples from the configuration to operator instances
bound to the problem's bounds. Ready-made operator objects pass through.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from decomo.foundation.exceptions import InvalidOperatorError
from decomo.operators.real import (
    Crossover,
    DifferentialEvolutionCrossover,
    Mutation,
    NullMutation,
    PolynomialMutation,
    SBXCrossover,
)
from decomo.operators.real.utils import resolve_prob_expression

_logger = logging.getLogger(__name__)

CROSSOVER_ALIASES = {
    "de": "de",
    "differential": "de",
    "differential_evolution": "de",
    "sbx": "sbx",
}

REQUIRED_PARENTS = {
    "de": DifferentialEvolutionCrossover.required_parents,
    "sbx": SBXCrossover.required_parents,
}

MUTATION_ALIASES = {
    "pm": "pm",
    "polynomial": "pm",
    "none": "none",
    "null": "none",
}


def required_parents(op_cfg: Any) -> int:
    """Number of pool members a crossover setting (tuple, name or instance) consumes."""
    if hasattr(op_cfg, "execute"):
        return int(getattr(op_cfg, "required_parents", 2))
    method, _ = _split(op_cfg)
    key = CROSSOVER_ALIASES.get(method.lower())
    if key is None:
        raise InvalidOperatorError("crossover", method, sorted(CROSSOVER_ALIASES))
    return REQUIRED_PARENTS[key]


def build_crossover(op_cfg: Any, xl: np.ndarray, xu: np.ndarray) -> Crossover:
    """Build a crossover operator from a ``(name, params)`` tuple or return an instance as-is."""
    if hasattr(op_cfg, "execute"):
        return op_cfg
    method, params = _split(op_cfg)
    key = CROSSOVER_ALIASES.get(method.lower())
    if key == "de":
        return DifferentialEvolutionCrossover(
            cr=float(params.get("cr", 1.0)),
            f=float(params.get("f", 0.5)),
            variant=str(params.get("variant", "rand/1/bin")),
            lower=xl,
            upper=xu,
        )
    if key == "sbx":
        return SBXCrossover(
            prob_crossover=float(params.get("prob", 0.9)),
            eta=float(params.get("eta", 20.0)),
            lower=xl,
            upper=xu,
        )
    raise InvalidOperatorError("crossover", method, sorted(CROSSOVER_ALIASES))


def build_mutation(op_cfg: Any, n_var: int, xl: np.ndarray, xu: np.ndarray) -> Mutation:
    """Build a mutation operator from a ``(name, params)`` tuple or return an instance as-is."""
    if hasattr(op_cfg, "execute"):
        return op_cfg
    method, params = _split(op_cfg)
    key = MUTATION_ALIASES.get(method.lower())
    if key == "pm":
        prob = resolve_prob_expression(params.get("prob"), n_var, 1.0 / max(1, n_var))
        return PolynomialMutation(prob_mutation=prob, eta=float(params.get("eta", 20.0)), lower=xl, upper=xu)
    if key == "none":
        return NullMutation()
    raise InvalidOperatorError("mutation", method, sorted(MUTATION_ALIASES))


def build_variation_operators(
    crossover: Any,
    mutation: Any,
    n_var: int,
    xl: np.ndarray,
    xu: np.ndarray,
) -> tuple[Crossover, Mutation]:
    """Build the (crossover, mutation) pair used by the variation pipeline."""
    cross_op = build_crossover(crossover, xl, xu)
    mut_op = build_mutation(mutation, n_var, xl, xu)
    _logger.debug("Variation operators: %s + %s", type(cross_op).__name__, type(mut_op).__name__)
    return cross_op, mut_op


def _split(op_cfg: Any) -> tuple[str, dict[str, Any]]:
    if isinstance(op_cfg, str):
        return op_cfg, {}
    method, params = op_cfg
    return str(method), dict(params or {})


__all__ = [
    "CROSSOVER_ALIASES",
    "MUTATION_ALIASES",
    "REQUIRED_PARENTS",
    "build_crossover",
    "build_mutation",
    "build_variation_operators",
    "required_parents",
]
