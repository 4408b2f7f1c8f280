from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from decomo.foundation.solution import Solution

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlgorithmStatus:
    """
    Immutable snapshot published after initialization and after every step.

    The population tuple holds references to the live solutions; observers
    must treat them as read-only.
    """

    evaluations: int
    generation: int
    population: tuple["Solution", ...]
    computing_time: int  # milliseconds since the run started
    ideal: np.ndarray = field(default_factory=lambda: np.empty(0))

    def as_dict(self) -> dict[str, Any]:
        """Mapping form keyed the way status consumers expect."""
        return {
            "EVALUATIONS": self.evaluations,
            "GENERATION": self.generation,
            "POPULATION": self.population,
            "COMPUTING_TIME": self.computing_time,
            "IDEAL": self.ideal,
        }


@runtime_checkable
class Observer(Protocol):
    """Anything callable with an AlgorithmStatus."""

    def __call__(self, status: AlgorithmStatus) -> None: ...


StatusCallback = Callable[[AlgorithmStatus], None]


def notify_observers(observers: Iterable[StatusCallback], status: AlgorithmStatus) -> None:
    """Publish a status to every observer in registration order."""
    for observer in observers:
        _logger.debug("Publishing status (evaluations=%d) to %r", status.evaluations, observer)
        observer(status)


__all__ = ["AlgorithmStatus", "Observer", "StatusCallback", "notify_observers"]
