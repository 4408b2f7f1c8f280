"""
MOEA/D algorithm module.

This package provides the MOEA/D (Multi-Objective Evolutionary Algorithm based on
Decomposition) implementation with modular components:
- `moead.py`: main MOEAD class (run/step/ask/tell loop)
- `initialization.py`: setup and configuration checks
- `aggregation.py`: scalarizing functions owning the ideal point
- `state.py`: MOEADState + result building
- `helpers.py`: neighbor-type choice and bounded replacement

References:
    Q. Zhang and H. Li, "MOEA/D: A Multiobjective Evolutionary Algorithm Based on
    Decomposition," IEEE Trans. Evolutionary Computation, vol. 11, no. 6, 2007.
"""

from .aggregation import (
    AggregativeFunction,
    ModifiedTschebyscheff,
    Tschebyscheff,
    WeightedSum,
    build_aggregative_function,
)
from .helpers import choose_neighbor_type, mating_source, replacement_order, update_neighborhood
from .initialization import initialize_moead_run, initialize_population, validate_moead_config
from .moead import MOEAD
from .state import MOEADState, Phase, build_moead_result

__all__ = [
    "MOEAD",
    # Aggregation
    "AggregativeFunction",
    "ModifiedTschebyscheff",
    "Tschebyscheff",
    "WeightedSum",
    "build_aggregative_function",
    # Helpers
    "choose_neighbor_type",
    "mating_source",
    "replacement_order",
    "update_neighborhood",
    # Setup
    "initialize_moead_run",
    "initialize_population",
    "validate_moead_config",
    # State
    "MOEADState",
    "Phase",
    "build_moead_result",
]
