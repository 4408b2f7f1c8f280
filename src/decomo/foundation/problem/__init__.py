"""Problem interface and bundled test problems."""

from .base import Problem, resolve_bounds
from .convex import ConvexBiObjective
from .dtlz2 import DTLZ2Problem
from .types import ProblemProtocol, SolutionFactoryProtocol
from .zdt1 import ZDT1Problem

__all__ = [
    "Problem",
    "ProblemProtocol",
    "SolutionFactoryProtocol",
    "ConvexBiObjective",
    "DTLZ2Problem",
    "ZDT1Problem",
    "resolve_bounds",
]
