"""
Visualization utilities for crossover runs.

Draws parents and offspring of one crossover call as stacked gene rows so
segment boundaries and permutation mappings can be inspected by eye.
"""

from pathlib import Path
from typing import Any, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .data_models import Individual
from .gene_utils import is_numeric_gene


def genomes_to_matrix(individuals: Sequence[Individual]) -> Tuple[np.ndarray, bool]:
    """
    Stack genomes into a 2D array for plotting.

    Real-valued genomes are used as-is. Token genomes are coded by order of
    first appearance, scanning the individuals in order.

    Returns:
        Tuple of (matrix, is_numeric)
    """
    numeric = all(is_numeric_gene(g) for ind in individuals for g in ind.genome)
    if numeric:
        return np.asarray([ind.genome for ind in individuals], dtype=float), True

    codes: dict[Any, int] = {}
    rows = []
    for ind in individuals:
        row = []
        for gene in ind.genome:
            if gene not in codes:
                codes[gene] = len(codes)
            row.append(codes[gene])
        rows.append(row)
    return np.asarray(rows, dtype=float), False


def plot_crossover(
    parents: Sequence[Individual],
    offspring: Sequence[Individual],
    output_path: Path,
    figsize: Tuple[int, int] = (10, 4)
) -> Path:
    """
    Save a PNG showing parents above offspring, one row per genome.

    Crossover points recorded in the offspring metadata are drawn as
    vertical lines.

    Args:
        parents: Parents of the crossover call
        offspring: Offspring produced by it
        output_path: Path to save PNG file
        figsize: Figure size (width, height) in inches

    Returns:
        Path to the saved image
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    individuals = list(parents) + list(offspring)
    matrix, numeric = genomes_to_matrix(individuals)
    labels = [f"parent {p.id}" for p in parents] + [f"child {c.id}" for c in offspring]

    fig, ax = plt.subplots(figsize=figsize)
    image = ax.imshow(matrix, aspect='auto', cmap='viridis' if numeric else 'tab20',
                      interpolation='nearest')
    ax.set_yticks(range(len(labels)))
    ax.set_yticklabels(labels)
    ax.set_xlabel("gene index")
    ax.axhline(len(parents) - 0.5, color='white', linewidth=2)

    points = offspring[0].metadata.get('crossover_points', []) if offspring else []
    for point in points:
        ax.axvline(point - 0.5, color='red', linestyle='--', linewidth=1)

    strategy = offspring[0].metadata.get('crossover_strategy', '') if offspring else ''
    ax.set_title(f"Crossover: {strategy}" if strategy else "Crossover")
    fig.colorbar(image, ax=ax, label="gene value" if numeric else "gene code")

    fig.tight_layout()
    fig.savefig(output_path, dpi=100)
    plt.close(fig)

    print(f"  Saved visualization: {output_path}")
    return output_path
