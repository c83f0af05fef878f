"""
Gene-level utilities for crossover operators.

Distinct random index sampling, first-match value lookup and the
precondition checks shared by every operator.
"""

from numbers import Real
from typing import Any, Sequence

import numpy as np


class CrossoverPreconditionError(ValueError):
    """Raised when crossover inputs violate an operator's contract."""
    pass


class GeneNotFoundError(LookupError):
    """Raised when a gene value cannot be found in a genome."""
    pass


def random_ints(k: int, low: int, high: int, rng: np.random.Generator) -> list[int]:
    """
    Draw k distinct integers from [low, high).

    The order of the returned values is unspecified; sort them if needed.

    Args:
        k: Number of integers to draw
        low: Inclusive lower bound
        high: Exclusive upper bound
        rng: Random number generator

    Returns:
        List of k pairwise-distinct integers

    Raises:
        CrossoverPreconditionError: If k is negative or exceeds high - low
    """
    if k < 0:
        raise CrossoverPreconditionError(f"Cannot draw a negative number of integers: {k}")
    if k > high - low:
        raise CrossoverPreconditionError(
            f"Cannot draw {k} distinct integers from [{low}, {high})"
        )
    if k == 0:
        return []
    return [int(v) + low for v in rng.choice(high - low, size=k, replace=False)]


def get_index(value: Any, sequence: Sequence[Any]) -> int:
    """
    Return the position of the first element of `sequence` equal to `value`.

    Raises:
        GeneNotFoundError: If `value` is absent
    """
    for i, gene in enumerate(sequence):
        if gene == value:
            return i
    raise GeneNotFoundError(f"Gene value {value!r} not found in genome")


def require_same_length(*genomes: Sequence[Any]) -> int:
    """
    Check that all genomes share one length and return it.

    Raises:
        CrossoverPreconditionError: If lengths differ
    """
    lengths = {len(g) for g in genomes}
    if len(lengths) > 1:
        raise CrossoverPreconditionError(
            f"Parents must have equal genome lengths, got {sorted(lengths)}"
        )
    return lengths.pop() if lengths else 0


def is_numeric_gene(value: Any) -> bool:
    # bool is registered as a Real; exclude it
    return isinstance(value, Real) and not isinstance(value, (bool, np.bool_))


def require_numeric_genome(genome: Sequence[Any]) -> None:
    """
    Check that every gene is a real number.

    Raises:
        TypeError: On the first non-numeric gene
    """
    for i, value in enumerate(genome):
        if not is_numeric_gene(value):
            raise TypeError(
                f"Blend crossover requires real-valued genes, "
                f"got {type(value).__name__} at position {i}"
            )


def is_permutation_of(genome: Sequence[Any], other: Sequence[Any]) -> bool:
    """
    Check whether two genomes hold the same values, each exactly once.
    """
    if len(genome) != len(other):
        return False
    values = list(genome)
    if len(set(values)) != len(values):
        return False
    return set(values) == set(other) and len(set(other)) == len(other)
