"""
Subproblem traversal orders.

Sequencers are plain iterators over subproblem indices; the engine only calls
``next(sequencer)`` so strategies can be swapped without touching it.
"""

from __future__ import annotations

from typing import Iterator, Protocol

import numpy as np

from decomo.foundation.exceptions import ConfigurationError


class SubproblemSequencer(Protocol):
    size: int

    def __iter__(self) -> Iterator[int]: ...

    def __next__(self) -> int: ...


class PermutationSequencer:
    """
    Cycles through random permutations of range(size).

    Every index is returned exactly once per cycle of ``size`` calls; the order
    is reshuffled whenever a cycle is exhausted.
    """

    def __init__(self, size: int, rng: np.random.Generator) -> None:
        _check_size(size)
        self.size = int(size)
        self.rng = rng
        self.order = rng.permutation(self.size).astype(int, copy=False)
        self.cursor = 0

    def __iter__(self) -> "PermutationSequencer":
        return self

    def __next__(self) -> int:
        value = int(self.order[self.cursor])
        self.cursor += 1
        if self.cursor == self.size:
            self.order = self.rng.permutation(self.size).astype(int, copy=False)
            self.cursor = 0
        return value


class RandomSequencer:
    """Draws an independent uniform index per call; ``cursor`` counts the draws."""

    def __init__(self, size: int, rng: np.random.Generator) -> None:
        _check_size(size)
        self.size = int(size)
        self.rng = rng
        self.cursor = 0

    def __iter__(self) -> "RandomSequencer":
        return self

    def __next__(self) -> int:
        self.cursor += 1
        return int(self.rng.integers(self.size))


class CyclicSequencer:
    """0, 1, ..., size - 1, 0, 1, ..."""

    def __init__(self, size: int, rng: np.random.Generator | None = None) -> None:
        _check_size(size)
        self.size = int(size)
        self.cursor = 0

    def __iter__(self) -> "CyclicSequencer":
        return self

    def __next__(self) -> int:
        value = self.cursor
        self.cursor = (self.cursor + 1) % self.size
        return value


SEQUENCERS = {
    "permutation": PermutationSequencer,
    "random": RandomSequencer,
    "cyclic": CyclicSequencer,
}


def build_sequencer(name: str, size: int, rng: np.random.Generator) -> SubproblemSequencer:
    """Build a sequencer by name ("permutation", "random" or "cyclic")."""
    key = str(name).lower()
    if key not in SEQUENCERS:
        raise ConfigurationError(
            f"Unknown subproblem sequencer '{name}'.",
            suggestion=f"Available sequencers: {', '.join(SEQUENCERS)}",
            details={"sequencer": name},
        )
    return SEQUENCERS[key](size, rng)


def _check_size(size: int) -> None:
    if int(size) < 1:
        raise ConfigurationError(f"Sequencer size must be positive, got {size}.", details={"size": size})


__all__ = [
    "SubproblemSequencer",
    "PermutationSequencer",
    "RandomSequencer",
    "CyclicSequencer",
    "SEQUENCERS",
    "build_sequencer",
]
