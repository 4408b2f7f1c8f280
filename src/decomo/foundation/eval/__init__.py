"""Evaluation of solutions against a problem."""

from .population import evaluate_population, evaluate_solutions

__all__ = ["evaluate_population", "evaluate_solutions"]
