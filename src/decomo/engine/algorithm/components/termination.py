"""
Stopping conditions.

A termination policy is any object with ``is_met(status) -> bool``. Policies
only read the status they are given; the engine checks them once per step
boundary.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

from decomo.foundation.exceptions import ConfigurationError
from decomo.foundation.observer import AlgorithmStatus


@runtime_checkable
class TerminationPolicy(Protocol):
    def is_met(self, status: AlgorithmStatus) -> bool: ...


class MaxEvaluations:
    """Stop once ``evaluations >= max_evaluations``."""

    def __init__(self, max_evaluations: int) -> None:
        if int(max_evaluations) < 0:
            raise ConfigurationError(
                f"max_evaluations must be >= 0, got {max_evaluations}.",
                details={"max_evaluations": max_evaluations},
            )
        self.max_evaluations = int(max_evaluations)

    def is_met(self, status: AlgorithmStatus) -> bool:
        return status.evaluations >= self.max_evaluations

    def __repr__(self) -> str:
        return f"MaxEvaluations({self.max_evaluations})"


class MaxComputingTime:
    """Stop once the run has taken at least ``max_time`` milliseconds."""

    def __init__(self, max_time: int) -> None:
        if int(max_time) < 0:
            raise ConfigurationError(f"max_time must be >= 0, got {max_time}.", details={"max_time": max_time})
        self.max_time = int(max_time)

    def is_met(self, status: AlgorithmStatus) -> bool:
        return status.computing_time >= self.max_time

    def __repr__(self) -> str:
        return f"MaxComputingTime({self.max_time} ms)"


class MaxGenerations:
    def __init__(self, max_generations: int) -> None:
        if int(max_generations) < 0:
            raise ConfigurationError(
                f"max_generations must be >= 0, got {max_generations}.",
                details={"max_generations": max_generations},
            )
        self.max_generations = int(max_generations)

    def is_met(self, status: AlgorithmStatus) -> bool:
        return status.generation >= self.max_generations

    def __repr__(self) -> str:
        return f"MaxGenerations({self.max_generations})"


class Predicate:
    """Wraps a user function ``fn(status) -> bool``."""

    def __init__(self, fn: Callable[[AlgorithmStatus], bool]) -> None:
        self.fn = fn

    def is_met(self, status: AlgorithmStatus) -> bool:
        return bool(self.fn(status))

    def __repr__(self) -> str:
        return f"Predicate({getattr(self.fn, '__name__', self.fn)!r})"


class AnyOf:
    """Met as soon as one of the wrapped policies is met."""

    def __init__(self, *policies: TerminationPolicy) -> None:
        if not policies:
            raise ConfigurationError("AnyOf requires at least one termination policy.")
        self.policies = tuple(policies)

    def is_met(self, status: AlgorithmStatus) -> bool:
        return any(policy.is_met(status) for policy in self.policies)

    def __repr__(self) -> str:
        return f"AnyOf({', '.join(repr(p) for p in self.policies)})"


_TUPLE_KINDS: dict[str, Callable[[Any], TerminationPolicy]] = {
    "n_eval": MaxEvaluations,
    "max_evaluations": MaxEvaluations,
    "max_time": MaxComputingTime,
    "time": MaxComputingTime,
    "n_gen": MaxGenerations,
    "max_generations": MaxGenerations,
}


def parse_termination(termination: Any, algorithm_name: str = "MOEA/D") -> TerminationPolicy:
    """
    Normalise a termination criterion into a policy.

    Parameters
    ----------
    termination : TerminationPolicy | callable | tuple[str, Any]
        A policy instance, a predicate over the status, or one of
        ``("n_eval", N)``, ``("max_time", ms)``, ``("n_gen", N)``.
    algorithm_name : str
        Algorithm name for error messages.

    Raises
    ------
    ConfigurationError
        If the criterion cannot be interpreted.
    """
    if isinstance(termination, TerminationPolicy):
        return termination
    if isinstance(termination, tuple) and len(termination) == 2:
        term_type, term_val = termination
        factory = _TUPLE_KINDS.get(str(term_type).lower())
        if factory is None:
            raise ConfigurationError(
                f"Unsupported termination criterion '{term_type}' for {algorithm_name}.",
                suggestion=f"Supported criteria: {', '.join(sorted(_TUPLE_KINDS))}",
                details={"termination": term_type},
            )
        return factory(term_val)
    if callable(termination):
        return Predicate(termination)
    raise ConfigurationError(
        f"Cannot interpret termination {termination!r} for {algorithm_name}.",
        suggestion="Pass a policy with is_met(status), a callable, or a tuple like ('n_eval', 10000)",
    )


__all__ = [
    "TerminationPolicy",
    "MaxEvaluations",
    "MaxComputingTime",
    "MaxGenerations",
    "Predicate",
    "AnyOf",
    "parse_termination",
]
