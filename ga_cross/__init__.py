"""
Crossover operators for genetic algorithms

This package provides the recombination stage of a genetic algorithm:
interchangeable operators that build offspring from fixed-length parent
genomes using a caller-supplied numpy random generator.

Key Features:
- One `Crossover` interface: apply(parent1, parent2, rng) -> (child1, child2)
- N-point crossover for any gene type
- Uniform and proportionate (multi-parent) blends for real-valued genes
- Partially mapped crossover (PMX) for permutation genomes
- Reproducible: no global random state

Modules:
- data_models: Core data structures (Individual, ParentManifest, LineageRecord)
- gene_utils: Distinct index sampling, gene lookup, precondition checks
- crossover: Crossover operators and config-driven dispatch
- io_utils: Genome CSV I/O, manifest parsing, lineage logging
- orchestration: Batch recombination of parent groups
- visualization_utils: Parent/offspring genome plots
- cli: Run configuration loading and validation
"""

__version__ = "0.1.0"
__author__ = "GA Cross Contributors"

from .data_models import Individual, ParentManifest, LineageRecord, make_individual
from .gene_utils import CrossoverPreconditionError, GeneNotFoundError, random_ints, get_index
from .crossover import (
    Crossover,
    CrossPoint,
    CrossUniformF,
    CrossProportionateF,
    CrossPMX,
    create_crossover,
    apply_crossover,
)

__all__ = [
    "Individual",
    "ParentManifest",
    "LineageRecord",
    "make_individual",
    "CrossoverPreconditionError",
    "GeneNotFoundError",
    "random_ints",
    "get_index",
    "Crossover",
    "CrossPoint",
    "CrossUniformF",
    "CrossProportionateF",
    "CrossPMX",
    "create_crossover",
    "apply_crossover",
]
