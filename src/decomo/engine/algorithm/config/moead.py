"""MOEA/D configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from decomo.foundation.exceptions import ConfigurationError

from .base import _SerializableConfig, _require_fields

# Keys accepted by from_dict() besides the canonical field names.
_ALIASES = {
    "population_size": "pop_size",
    "neighbourhood_size": "neighbor_size",
    "neighborhood_selection_probability": "delta",
    "maximum_number_of_replaced_solutions": "replace_limit",
}


@dataclass(frozen=True)
class MOEADConfigData(_SerializableConfig):
    """
    Immutable MOEA/D settings.

    ``delta`` is the probability of mating (and replacing) within the
    neighborhood rather than the whole population; ``replace_limit`` caps how
    many population slots a single offspring may overwrite.
    """

    pop_size: int
    neighbor_size: int
    delta: float
    replace_limit: int
    crossover: Any
    mutation: Any
    aggregation: Tuple[str, Dict[str, Any]] = ("tschebyscheff", {})
    sequencer: str = "permutation"
    n_parents: int = 2
    weight_vectors: Dict[str, Optional[int | str]] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.pop_size, int) or self.pop_size < 1:
            raise ConfigurationError(
                f"pop_size must be a positive integer, got {self.pop_size!r}.",
                details={"pop_size": self.pop_size},
            )
        if not isinstance(self.neighbor_size, int) or self.neighbor_size < 1:
            raise ConfigurationError(
                f"neighbor_size must be a positive integer, got {self.neighbor_size!r}.",
                details={"neighbor_size": self.neighbor_size},
            )
        if not 0.0 <= float(self.delta) <= 1.0:
            raise ConfigurationError(
                f"delta (neighborhood selection probability) must be in [0, 1], got {self.delta}.",
                details={"delta": self.delta},
            )
        if not isinstance(self.replace_limit, int) or self.replace_limit < 0:
            raise ConfigurationError(
                f"replace_limit must be a non-negative integer, got {self.replace_limit!r}.",
                details={"replace_limit": self.replace_limit},
            )
        if not isinstance(self.n_parents, int) or self.n_parents < 1:
            raise ConfigurationError(
                f"n_parents must be a positive integer, got {self.n_parents!r}.",
                details={"n_parents": self.n_parents},
            )


class MOEADConfig:
    """
    Declarative configuration holder for MOEA/D settings.

    Examples:
        # Fluent builder
        cfg = MOEADConfig().pop_size(100).neighbor_size(20).delta(0.9).replace_limit(2) \\
            .crossover("de", cr=1.0, f=0.5).mutation("pm", prob="1/n", eta=20.0).fixed()

        # Quick default configuration
        cfg = MOEADConfig.default()

        # From dictionary
        cfg = MOEADConfig.from_dict({"pop_size": 100, "neighbor_size": 20})
    """

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    @classmethod
    def default(
        cls,
        pop_size: int = 100,
        n_var: int | None = None,
    ) -> "MOEADConfigData":
        """MOEA/D-DE defaults: DE rand/1/bin, polynomial mutation, Tschebyscheff."""
        mut_prob: float | str = 1.0 / n_var if n_var else "1/n"
        return (
            cls()
            .pop_size(pop_size)
            .neighbor_size(min(20, pop_size))
            .delta(0.9)
            .replace_limit(2)
            .crossover("de", cr=1.0, f=0.5)
            .mutation("pm", prob=mut_prob, eta=20.0)
            .aggregation("tschebyscheff")
            .sequencer("permutation")
            .fixed()
        )

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "MOEADConfigData":
        """Create configuration from a dictionary, filling gaps with defaults."""
        config = {_ALIASES.get(k, k): v for k, v in dict(config).items()}
        pop_size = int(config.get("pop_size", 100))
        builder = cls()
        builder.pop_size(pop_size)
        builder.neighbor_size(config.get("neighbor_size", min(20, pop_size)))
        builder.delta(config.get("delta", 0.9))
        builder.replace_limit(config.get("replace_limit", 2))

        for key, default_method in (("crossover", "de"), ("mutation", "pm"), ("aggregation", "tschebyscheff")):
            value = config.get(key, default_method)
            setter = getattr(builder, key)
            if isinstance(value, tuple):
                setter(value[0], **value[1])
            elif isinstance(value, dict):
                params = dict(value)
                method = params.pop("method", params.pop("type", default_method))
                setter(method, **params)
            elif isinstance(value, str):
                setter(value)
            else:
                builder._cfg[key] = value

        if "sequencer" in config:
            builder.sequencer(config["sequencer"])
        if "n_parents" in config:
            builder.n_parents(config["n_parents"])
        if "weight_vectors" in config and config["weight_vectors"]:
            builder.weight_vectors(**config["weight_vectors"])
        return builder.fixed()

    def pop_size(self, value: int) -> "MOEADConfig":
        self._cfg["pop_size"] = value
        return self

    def neighbor_size(self, value: int) -> "MOEADConfig":
        self._cfg["neighbor_size"] = value
        return self

    def delta(self, value: float) -> "MOEADConfig":
        self._cfg["delta"] = value
        return self

    def replace_limit(self, value: int) -> "MOEADConfig":
        self._cfg["replace_limit"] = value
        return self

    def crossover(self, method: Any, **kwargs) -> "MOEADConfig":
        """Operator name plus parameters, or a ready-made crossover instance."""
        self._cfg["crossover"] = method if hasattr(method, "execute") else (method, kwargs)
        return self

    def mutation(self, method: Any, **kwargs) -> "MOEADConfig":
        """Operator name plus parameters, or a ready-made mutation instance."""
        self._cfg["mutation"] = method if hasattr(method, "execute") else (method, kwargs)
        return self

    def aggregation(self, method: str, **kwargs) -> "MOEADConfig":
        self._cfg["aggregation"] = (method, kwargs)
        return self

    def sequencer(self, value: str) -> "MOEADConfig":
        self._cfg["sequencer"] = value
        return self

    def n_parents(self, value: int) -> "MOEADConfig":
        self._cfg["n_parents"] = value
        return self

    def weight_vectors(
        self, *, path: Optional[str] = None, divisions: Optional[int] = None
    ) -> "MOEADConfig":
        self._cfg["weight_vectors"] = {"path": path, "divisions": divisions}
        return self

    def fixed(self) -> MOEADConfigData:
        _require_fields(
            self._cfg,
            (
                "pop_size",
                "neighbor_size",
                "delta",
                "replace_limit",
                "crossover",
                "mutation",
            ),
            "MOEAD",
        )
        return MOEADConfigData(
            pop_size=self._cfg["pop_size"],
            neighbor_size=self._cfg["neighbor_size"],
            delta=self._cfg["delta"],
            replace_limit=self._cfg["replace_limit"],
            crossover=self._cfg["crossover"],
            mutation=self._cfg["mutation"],
            aggregation=self._cfg.get("aggregation", ("tschebyscheff", {})),
            sequencer=self._cfg.get("sequencer", "permutation"),
            n_parents=self._cfg.get("n_parents", 2),
            weight_vectors=self._cfg.get("weight_vectors"),
        )


__all__ = ["MOEADConfig", "MOEADConfigData"]
