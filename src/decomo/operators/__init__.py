"""Variation operators."""

from .policies import build_crossover, build_mutation, build_variation_operators
from .real import (
    Crossover,
    DifferentialEvolutionCrossover,
    Mutation,
    NullMutation,
    PolynomialMutation,
    SBXCrossover,
)

__all__ = [
    "Crossover",
    "DifferentialEvolutionCrossover",
    "Mutation",
    "NullMutation",
    "PolynomialMutation",
    "SBXCrossover",
    "build_crossover",
    "build_mutation",
    "build_variation_operators",
]
