"""
Data models for crossover operators.

Core data structures representing individuals, parent manifests, and lineage records.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Any

import numpy as np

from .gene_utils import CrossoverPreconditionError


ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
ID_LENGTH = 3

STRATEGIES = ("n_point", "uniform_blend", "proportionate", "pmx")


@dataclass
class Individual:
    """
    Represents a single candidate solution (individual in GA population).

    Attributes:
        genome: Ordered, fixed-length sequence of gene values
        fitness: Fitness value set by an external evaluator
        fitness_valid: False until the fitness has been (re)computed
        id: Identifier for this individual
        metadata: Additional information (parent ids, crossover points, etc.)
    """
    genome: list[Any]
    fitness: Optional[float] = None
    fitness_valid: bool = False
    id: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Ensure genome is a list."""
        if not isinstance(self.genome, list):
            self.genome = list(self.genome)

    def __len__(self) -> int:
        return len(self.genome)

    def copy(self) -> "Individual":
        """
        Create a copy of this individual with its own genome and metadata.

        Returns:
            New Individual with copied genome and metadata
        """
        return Individual(
            genome=self.genome.copy(),
            fitness=self.fitness,
            fitness_valid=self.fitness_valid,
            id=self.id,
            metadata=self.metadata.copy()
        )


def make_individual(length: int, rng: Optional[np.random.Generator] = None) -> Individual:
    """
    Allocate an individual with `length` unset genes and invalid fitness.

    Callers are expected to fill every slot of the genome before handing
    the individual out.

    Args:
        length: Genome length
        rng: Random number generator used to draw the individual's id

    Returns:
        Individual with a genome of `length` None values

    Raises:
        CrossoverPreconditionError: If length is negative
    """
    if length < 0:
        raise CrossoverPreconditionError(f"Genome length must be >= 0, got {length}")

    individual_id = ""
    if rng is not None:
        letters = rng.integers(0, len(ID_ALPHABET), size=ID_LENGTH)
        individual_id = "".join(ID_ALPHABET[i] for i in letters)

    return Individual(genome=[None] * length, fitness_valid=False, id=individual_id)


@dataclass
class ParentManifest:
    """
    Represents an ordered set of parents handed over by an external selector.

    Attributes:
        parents: List of Individual objects, in the order they will be grouped
        metadata: Additional information (source file, load time, etc.)
    """
    parents: list[Individual]
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate manifest."""
        if not self.parents:
            raise ValueError("ParentManifest must contain at least one parent")

    def get_parent_by_id(self, parent_id: str) -> Optional[Individual]:
        """
        Retrieve parent by ID.

        Args:
            parent_id: ID of parent to retrieve

        Returns:
            Parent Individual if found, None otherwise
        """
        for parent in self.parents:
            if parent.id == parent_id:
                return parent
        return None

    def groups(self, group_size: int) -> list[list[Individual]]:
        """
        Split parents into consecutive groups of `group_size`.

        A trailing group shorter than `group_size` is dropped.
        """
        if group_size < 1:
            raise ValueError(f"group_size must be >= 1, got {group_size}")
        n_groups = len(self.parents) // group_size
        return [
            self.parents[i * group_size:(i + 1) * group_size]
            for i in range(n_groups)
        ]

    def __len__(self) -> int:
        """Number of parents in manifest."""
        return len(self.parents)


@dataclass
class LineageRecord:
    """
    Tracks provenance of an offspring produced by crossover.

    Attributes:
        child_path: Path to child CSV file
        parent_ids: Parent IDs used to create this child
        strategy: Crossover strategy name
        crossover_points: Points drawn by the operator (empty for blends)
        seed: Root random seed of the run
        stream: Index of the random stream spawned from the seed for this call
        timestamp: When this child was created
        metadata: Additional information
    """
    child_path: Path
    parent_ids: list[str]
    strategy: str
    crossover_points: list[int]
    seed: int
    stream: int = 0
    timestamp: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate lineage record and ensure path is Path object."""
        if not isinstance(self.child_path, Path):
            self.child_path = Path(self.child_path)

        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"Invalid strategy: {self.strategy}. Must be one of {', '.join(STRATEGIES)}"
            )

        if len(self.parent_ids) < 2:
            raise ValueError("Crossover lineage must have at least two parents")

    def to_dict(self) -> dict[str, Any]:
        """
        Convert lineage record to dictionary for CSV export.

        Returns:
            Dictionary with string-serializable values
        """
        return {
            "child_path": str(self.child_path),
            "parent_ids": ",".join(self.parent_ids),
            "strategy": self.strategy,
            "crossover_points": " ".join(str(p) for p in self.crossover_points),
            "seed": self.seed,
            "stream": self.stream,
            "timestamp": self.timestamp or "",
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LineageRecord":
        """
        Create lineage record from dictionary (e.g., from CSV).

        Args:
            data: Dictionary with lineage information

        Returns:
            LineageRecord instance
        """
        points = data.get("crossover_points") or ""
        return cls(
            child_path=Path(data["child_path"]),
            parent_ids=data["parent_ids"].split(","),
            strategy=data["strategy"],
            crossover_points=[int(p) for p in points.split()],
            seed=int(data["seed"]),
            stream=int(data.get("stream") or 0),
            timestamp=data.get("timestamp") or None,
        )
