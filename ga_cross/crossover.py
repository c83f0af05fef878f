"""
Crossover operators.

Implements n-point, uniform blend, proportionate multi-parent blend and
partially mapped (permutation-preserving) crossover strategies behind a
single `Crossover` interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence, Tuple
import logging

import numpy as np

from .data_models import Individual, make_individual
from .gene_utils import (
    CrossoverPreconditionError,
    get_index,
    is_permutation_of,
    random_ints,
    require_numeric_genome,
    require_same_length,
)

logger = logging.getLogger(__name__)


class Crossover(ABC):
    """
    Base class for crossover strategies.

    Strategies hold only their parameters. Each call to `apply` depends on
    nothing but its arguments, so a seeded generator reproduces its output.
    """

    name = "crossover"
    n_parents = 2

    @abstractmethod
    def apply(
        self,
        parent1: Individual,
        parent2: Individual,
        rng: np.random.Generator
    ) -> Tuple[Individual, Individual]:
        """
        Produce two offspring from two parents.

        Args:
            parent1: First parent
            parent2: Second parent
            rng: Random number generator

        Returns:
            Tuple of (offspring1, offspring2), both newly allocated
        """

    def _tag(self, child: Individual, parents: Sequence[Individual], **extra: Any) -> Individual:
        child.metadata.update({
            'parent_ids': [p.id for p in parents],
            'crossover_strategy': self.name,
            **extra
        })
        return child

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class CrossPoint(Crossover):
    """
    N-point crossover.

    Picks `nb_points` distinct cut points shared by both parents and swaps
    the source parent at every cut. One-point and two-point crossover are
    the cases nb_points=1 and nb_points=2; nb_points=0 copies the parents.
    """

    name = "n_point"

    def __init__(self, nb_points: int):
        if nb_points < 0:
            raise CrossoverPreconditionError(f"nb_points must be >= 0, got {nb_points}")
        self.nb_points = nb_points

    def apply(self, parent1, parent2, rng):
        n_genes = require_same_length(parent1.genome, parent2.genome)
        points = sorted(random_ints(self.nb_points, 0, n_genes, rng))
        logger.debug("n-point crossover at %s", points)

        child1 = make_individual(n_genes, rng)
        child2 = make_individual(n_genes, rng)

        bounds = [0] + points + [n_genes]
        for segment, (start, end) in enumerate(zip(bounds[:-1], bounds[1:])):
            if segment % 2 == 0:
                src1, src2 = parent1.genome, parent2.genome
            else:
                src1, src2 = parent2.genome, parent1.genome
            child1.genome[start:end] = src1[start:end]
            child2.genome[start:end] = src2[start:end]

        parents = (parent1, parent2)
        return (
            self._tag(child1, parents, crossover_points=points),
            self._tag(child2, parents, crossover_points=points)
        )

    def __repr__(self) -> str:
        return f"CrossPoint(nb_points={self.nb_points})"


class CrossUniformF(Crossover):
    """
    Uniform arithmetic blend for real-valued genomes.

    Every gene draws its own weight p in [0, 1): offspring1 takes
    p*parent1 + (1-p)*parent2 and offspring2 the mirrored combination, so
    each offspring gene lies between the two parental values.
    """

    name = "uniform_blend"

    def apply(self, parent1, parent2, rng):
        n_genes = require_same_length(parent1.genome, parent2.genome)
        require_numeric_genome(parent1.genome)
        require_numeric_genome(parent2.genome)

        child1 = make_individual(n_genes, rng)
        child2 = make_individual(n_genes, rng)

        for i in range(n_genes):
            p = rng.random()
            a, b = parent1.genome[i], parent2.genome[i]
            lo, hi = min(a, b), max(a, b)
            # Rounding can step one ulp outside [lo, hi]
            child1.genome[i] = float(min(max(p * a + (1 - p) * b, lo), hi))
            child2.genome[i] = float(min(max((1 - p) * a + p * b, lo), hi))

        parents = (parent1, parent2)
        return self._tag(child1, parents), self._tag(child2, parents)


class CrossProportionateF(Crossover):
    """
    Weighted blend of any number of real-valued parents.

    Each parent receives a weight drawn uniformly from [0, 1); weights are
    normalized to sum to 1 and every offspring gene is the weighted sum of
    the parents' genes at that position. `apply_many` returns a single
    offspring. `apply` keeps the two-parent signature and returns a second
    offspring built from the reversed weights.
    """

    name = "proportionate"

    def __init__(self, nb_parents: int = 2):
        if nb_parents < 2:
            raise CrossoverPreconditionError(f"nb_parents must be >= 2, got {nb_parents}")
        self.nb_parents = nb_parents

    @property
    def n_parents(self) -> int:
        return self.nb_parents

    def draw_weights(self, rng: np.random.Generator) -> np.ndarray:
        """Draw `nb_parents` non-negative weights summing to 1."""
        weights = rng.random(self.nb_parents)
        total = weights.sum()
        if total == 0:
            return np.full(self.nb_parents, 1.0 / self.nb_parents)
        return weights / total

    def _check_parents(self, parents: Sequence[Individual]) -> int:
        if len(parents) < 2:
            raise CrossoverPreconditionError(
                f"Proportionate crossover needs at least 2 parents, got {len(parents)}"
            )
        if len(parents) != self.nb_parents:
            raise CrossoverPreconditionError(
                f"Expected {self.nb_parents} parents, got {len(parents)}"
            )
        n_genes = require_same_length(*(p.genome for p in parents))
        for parent in parents:
            require_numeric_genome(parent.genome)
        return n_genes

    def _blend(self, parents, weights, n_genes, rng) -> Individual:
        child = make_individual(n_genes, rng)
        genomes = np.asarray([p.genome for p in parents], dtype=float)
        blended = np.clip(weights @ genomes, genomes.min(axis=0), genomes.max(axis=0))
        child.genome = blended.tolist()
        return self._tag(child, parents, crossover_weights=weights.tolist())

    def apply_many(self, parents: Sequence[Individual], rng: np.random.Generator) -> Individual:
        """
        Produce one offspring from `nb_parents` parents.

        Raises:
            CrossoverPreconditionError: On a wrong parent count or unequal lengths
            TypeError: If any gene is not a real number
        """
        n_genes = self._check_parents(parents)
        weights = self.draw_weights(rng)
        logger.debug("proportionate crossover weights %s", weights)
        return self._blend(parents, weights, n_genes, rng)

    def apply(self, parent1, parent2, rng):
        parents = (parent1, parent2)
        n_genes = self._check_parents(parents)
        weights = self.draw_weights(rng)
        logger.debug("proportionate crossover weights %s", weights)
        return (
            self._blend(parents, weights, n_genes, rng),
            self._blend(parents, weights[::-1], n_genes, rng)
        )

    def __repr__(self) -> str:
        return f"CrossProportionateF(nb_parents={self.nb_parents})"


def partially_mapped(
    genome1: Sequence[Any],
    genome2: Sequence[Any],
    point: int
) -> Tuple[List[Any], List[Any]]:
    """
    Partially mapped crossover of two permutations at a fixed point.

    Each child starts as a copy of its own parent. For every position before
    `point`, the other parent's value is swapped into place, so each child
    keeps every value exactly once.

    Args:
        genome1: First parent genome
        genome2: Second parent genome
        point: Number of leading positions taken from the other parent

    Returns:
        Tuple of (child1_genome, child2_genome)

    Raises:
        GeneNotFoundError: If the parents are not permutations of the same values
    """
    child1 = list(genome1)
    child2 = list(genome2)
    for i in range(point):
        a = get_index(genome2[i], child1)
        child1[a], child1[i] = child1[i], genome2[i]
        b = get_index(genome1[i], child2)
        child2[b], child2[i] = child2[i], genome1[i]
    return child1, child2


class CrossPMX(Crossover):
    """
    Partially mapped crossover (PMX) for permutation genomes.

    Draws one interior crossover point p with 0 < p < n - 1 and maps the
    other parent's leading p genes into each offspring by swapping, which
    keeps both offspring valid permutations (e.g. TSP tours). Parents that
    are not permutations of the same values fail with GeneNotFoundError.
    """

    name = "pmx"

    def apply(self, parent1, parent2, rng):
        n_genes = require_same_length(parent1.genome, parent2.genome)
        if n_genes < 3:
            raise CrossoverPreconditionError(
                f"PMX needs genomes of length >= 3 for an interior point, got {n_genes}"
            )

        child1 = make_individual(n_genes, rng)
        child2 = make_individual(n_genes, rng)

        point = int(rng.integers(1, n_genes - 1))
        logger.debug("PMX crossover at %d", point)
        child1.genome, child2.genome = partially_mapped(parent1.genome, parent2.genome, point)

        parents = (parent1, parent2)
        return (
            self._tag(child1, parents, crossover_points=[point]),
            self._tag(child2, parents, crossover_points=[point])
        )


def create_crossover(config: Dict) -> Crossover:
    """
    Build the crossover operator named by `config['crossover_strategy']`.

    Args:
        config: Operator configuration, e.g.
            {'crossover_strategy': 'n_point', 'n_point': {'nb_points': 2}}

    Returns:
        Crossover instance

    Raises:
        ValueError: If the strategy is unknown or its parameters are invalid
    """
    strategy = config.get('crossover_strategy', 'n_point')

    if strategy == 'n_point':
        nb_points = (config.get('n_point') or {}).get('nb_points', 1)
        if not isinstance(nb_points, int) or isinstance(nb_points, bool):
            raise ValueError(f"n_point.nb_points must be an integer, got: {nb_points!r}")
        return CrossPoint(nb_points)

    elif strategy == 'uniform_blend':
        return CrossUniformF()

    elif strategy == 'proportionate':
        nb_parents = (config.get('proportionate') or {}).get('nb_parents', 2)
        if not isinstance(nb_parents, int) or isinstance(nb_parents, bool):
            raise ValueError(f"proportionate.nb_parents must be an integer, got: {nb_parents!r}")
        return CrossProportionateF(nb_parents)

    elif strategy == 'pmx':
        return CrossPMX()

    else:
        raise ValueError(f"Unknown crossover strategy: {strategy}")


def apply_crossover(
    parents: Sequence[Individual],
    config: Dict,
    rng: np.random.Generator
) -> List[Individual]:
    """
    Apply crossover using configured strategy.

    This is the main entry point for crossover operations. Two-parent
    strategies return two offspring; proportionate crossover returns one
    offspring built from all of its parents.

    Args:
        parents: Parents, two or `proportionate.nb_parents` of them
        config: Operator configuration
        rng: Random number generator

    Returns:
        List of offspring

    Raises:
        ValueError: If the strategy is unknown
        CrossoverPreconditionError: If the parent count does not fit the strategy
    """
    operator = create_crossover(config)

    if isinstance(operator, CrossProportionateF):
        return [operator.apply_many(parents, rng)]

    if len(parents) != 2:
        raise CrossoverPreconditionError(
            f"{operator.name} crossover needs exactly 2 parents, got {len(parents)}"
        )
    return list(operator.apply(parents[0], parents[1], rng))


def crossover_statistics(child: Individual, parents: Sequence[Individual]) -> Dict:
    """
    Calculate statistics about a crossover operation.

    Args:
        child: Offspring individual
        parents: Parents it was produced from

    Returns:
        Dictionary with crossover statistics
    """
    n_genes = len(child.genome)
    stats = {
        'genome_length': n_genes,
        'length_preserved': all(len(p.genome) == n_genes for p in parents),
        'is_permutation': is_permutation_of(child.genome, parents[0].genome),
    }

    # Share of positions identical to each parent
    for j, parent in enumerate(parents):
        same = sum(1 for a, b in zip(child.genome, parent.genome) if a == b)
        stats[f'parent_{j}_share'] = same / max(n_genes, 1)

    return stats
