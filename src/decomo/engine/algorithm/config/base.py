"""Serialization and validation shared by the algorithm config dataclasses."""

from __future__ import annotations

import json
from dataclasses import fields
from typing import Any, Dict, Mapping, Tuple

import numpy as np

from decomo.foundation.exceptions import MissingConfigError


def _plain(value: Any) -> Any:
    """Turn a config value into JSON-friendly data; operator objects become their class name."""
    if isinstance(value, Mapping):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return type(value).__name__


class _SerializableConfig:
    """Mixin to serialize dataclass configs."""

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}  # type: ignore[arg-type]

    def to_json(self, *, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, indent=indent)


def _require_fields(cfg: Dict[str, Any], required: Tuple[str, ...], name: str) -> None:
    """Raise one MissingConfigError listing every absent field, in declaration order."""
    missing = [field for field in required if field not in cfg]
    if missing:
        raise MissingConfigError(missing, config_class=f"{name}Config")
