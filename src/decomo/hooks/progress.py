from __future__ import annotations

import logging
from typing import Optional

from decomo.foundation.exceptions import ConfigurationError
from decomo.foundation.observer import AlgorithmStatus

_logger = logging.getLogger(__name__)


class ProgressLogger:
    """Log evaluation count and ideal point every ``every`` evaluations."""

    def __init__(self, every: int = 1000, logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        if int(every) < 1:
            raise ConfigurationError(f"every must be >= 1, got {every}.", details={"every": every})
        self.every = int(every)
        self.logger = logger or _logger
        self.level = level
        self._next = 0

    def __call__(self, status: AlgorithmStatus) -> None:
        if status.evaluations < self._next:
            return
        self.logger.log(
            self.level,
            "evaluations=%d generation=%d time=%dms ideal=%s",
            status.evaluations,
            status.generation,
            status.computing_time,
            status.ideal,
        )
        self._next = (status.evaluations // self.every + 1) * self.every

    def __repr__(self) -> str:
        return f"ProgressLogger(every={self.every})"


class StatusHistory:
    """Keep every published status, optionally thinned to one in ``stride``."""

    def __init__(self, stride: int = 1) -> None:
        self.stride = max(1, int(stride))
        self.statuses: list[AlgorithmStatus] = []
        self._seen = 0

    def __call__(self, status: AlgorithmStatus) -> None:
        if self._seen % self.stride == 0:
            self.statuses.append(status)
        self._seen += 1

    def __len__(self) -> int:
        return len(self.statuses)

    @property
    def evaluations(self) -> list[int]:
        return [s.evaluations for s in self.statuses]

    @property
    def last(self) -> AlgorithmStatus | None:
        return self.statuses[-1] if self.statuses else None


__all__ = ["ProgressLogger", "StatusHistory"]
