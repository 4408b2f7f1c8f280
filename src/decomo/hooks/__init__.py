from .progress import ProgressLogger, StatusHistory

__all__ = ["ProgressLogger", "StatusHistory"]
