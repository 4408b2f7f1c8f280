"""
decomo exception hierarchy.

Every error raised by the optimizer inherits from DecomoError so callers can
catch a single type. Errors carry an optional suggestion and a details dict
with enough context (subproblem, generation, parameter) to reproduce them.

Example:
    try:
        result = MOEAD(config).run(problem, ("n_eval", 10000), seed=1)
    except DecomoError as e:
        print(f"Optimization failed: {e}")
        print(f"Context: {e.details}")
"""

from __future__ import annotations

from typing import Any, Sequence


class DecomoError(Exception):
    """
    Base exception for all decomo errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(DecomoError):
    """Raised when configuration is invalid, inconsistent or incomplete."""

    pass


class InvalidOperatorError(ConfigurationError):
    """Raised when an unknown operator is specified."""

    def __init__(
        self,
        operator_type: str,
        operator_name: str,
        available: list[str] | None = None,
    ) -> None:
        message = f"Unknown {operator_type} operator '{operator_name}'."
        suggestion = f"Available {operator_type} operators: {', '.join(available)}" if available else None
        super().__init__(
            message,
            suggestion,
            {"operator_type": operator_type, "operator_name": operator_name},
        )


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str | Sequence[str], config_class: str | None = None) -> None:
        fields = [field] if isinstance(field, str) else list(field)
        names = ", ".join(f"'{name}'" for name in fields)
        message = f"Missing required configuration: {names}."
        suggestion = f"Add {names} to your configuration"
        if config_class:
            suggestion += f" or use {config_class}.default() for sensible defaults"
        super().__init__(message, suggestion, {"field": fields[0], "missing": fields})


# =============================================================================
# Runtime Errors
# =============================================================================


class OptimizationError(DecomoError):
    """Raised when optimization fails during execution."""

    pass


class EvaluationError(OptimizationError):
    """Raised when the problem fails to produce a valid objective vector."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        suggestion = "Check your problem's evaluate() function for errors"
        super().__init__(message, suggestion, details)


class StateError(OptimizationError):
    """Raised when the engine is driven out of its lifecycle order."""

    def __init__(self, message: str, phase: str | None = None) -> None:
        suggestion = "Call initialize() (or run()) before stepping the algorithm"
        super().__init__(message, suggestion, {"phase": phase})


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "DecomoError",
    "ConfigurationError",
    "InvalidOperatorError",
    "MissingConfigError",
    "OptimizationError",
    "EvaluationError",
    "StateError",
]
