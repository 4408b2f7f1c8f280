"""Real-valued evolutionary operators."""

from .crossover import Crossover, DifferentialEvolutionCrossover, SBXCrossover
from .mutation import Mutation, NullMutation, PolynomialMutation
from .utils import ArrayLike, RealOperator, resolve_prob_expression

__all__ = [
    "ArrayLike",
    "Crossover",
    "DifferentialEvolutionCrossover",
    "Mutation",
    "NullMutation",
    "PolynomialMutation",
    "RealOperator",
    "SBXCrossover",
    "resolve_prob_expression",
]
