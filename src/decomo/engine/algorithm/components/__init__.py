"""Reusable building blocks shared by decomposition algorithms."""

from .sequencer import CyclicSequencer, PermutationSequencer, RandomSequencer, SubproblemSequencer, build_sequencer
from .termination import (
    AnyOf,
    MaxComputingTime,
    MaxEvaluations,
    MaxGenerations,
    Predicate,
    TerminationPolicy,
    parse_termination,
)
from .variation import NaryRandomSelection, VariationPipeline
from .weight_vectors import (
    WeightSpace,
    compute_neighbors,
    generate_weight_vectors,
    load_or_generate_weight_vectors,
    load_weight_vectors,
    valid_population_sizes,
)

__all__ = [
    "AnyOf",
    "CyclicSequencer",
    "MaxComputingTime",
    "MaxEvaluations",
    "MaxGenerations",
    "NaryRandomSelection",
    "PermutationSequencer",
    "Predicate",
    "RandomSequencer",
    "SubproblemSequencer",
    "TerminationPolicy",
    "VariationPipeline",
    "WeightSpace",
    "build_sequencer",
    "compute_neighbors",
    "generate_weight_vectors",
    "load_or_generate_weight_vectors",
    "load_weight_vectors",
    "parse_termination",
    "valid_population_sizes",
]
