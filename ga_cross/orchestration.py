"""
Orchestration module for crossover runs.

Implements the offspring generation workflow: load parents, recombine them
group by group, and write offspring plus a lineage log.
"""

from typing import Dict, List
from pathlib import Path
from datetime import datetime
import numpy as np

from .data_models import Individual, LineageRecord, ParentManifest
from .io_utils import (
    load_config,
    load_parent_manifest,
    load_parents_from_directory,
    save_individual_to_csv,
    save_lineage_log,
    generate_child_path,
)
from .crossover import apply_crossover, create_crossover, crossover_statistics
from .visualization_utils import plot_crossover


DEFAULT_GA_CONFIG = Path(__file__).parent / "ga_cross_config.yaml"


def load_parents(run_config: Dict, gene_type: str) -> ParentManifest:
    """
    Load parents from the manifest or directory named in run_config['input'].
    """
    input_config = run_config['input']
    if 'parents_manifest' in input_config:
        manifest_path = input_config['parents_manifest']
        print(f"Loading parents from manifest: {manifest_path}")
        return load_parent_manifest(manifest_path, gene_type=gene_type)
    elif 'parents_dir' in input_config:
        dir_path = input_config['parents_dir']
        print(f"Loading parents from directory: {dir_path}")
        return load_parents_from_directory(dir_path, gene_type=gene_type)
    else:
        # Should never reach here due to validation
        raise ValueError("Must specify either 'parents_manifest' or 'parents_dir'")


def run_offspring_mode(run_config: Dict) -> List[Individual]:
    """
    Generate offspring by recombining the given parents.

    Parents are grouped in the order they were supplied: consecutive pairs,
    or consecutive groups of `proportionate.nb_parents`. No selection takes
    place here.

    Args:
        run_config: Run configuration dict from YAML

    Algorithm:
        1. Load crossover config (run_config['ga_config'] or the packaged default)
        2. Resolve the root seed and spawn one generator per parent group
        3. Load parents (from manifest or directory)
        4. Create output directory: run_config['output']['root']
        5. For each group:
           a. Apply the configured crossover with the group's own generator
           b. Save each offspring to output_root/child_{i:03d}.csv
           c. Optionally plot the group
           d. Create LineageRecord
        6. Save lineage log to output_root/lineage_log.csv
        7. Print summary report

    Returns:
        List of offspring (also written to disk)
    """
    print("=" * 70)
    print("OFFSPRING MODE")
    print("=" * 70)

    # Load crossover configuration
    ga_config_path = run_config.get('ga_config', DEFAULT_GA_CONFIG)
    print(f"Loading GA config from: {ga_config_path}")
    ga_config = load_config(ga_config_path)
    operator = create_crossover(ga_config)
    strategy = operator.name
    print(f"Crossover operator: {operator!r}")

    # Setup seed
    seed = run_config.get('random_seed', ga_config.get('random_seed'))
    if seed is None:
        seed = int(np.random.SeedSequence().entropy % 2**31)
    print(f"Random seed: {seed}")

    # Load parents
    gene_type = ga_config.get('gene_type', 'float')
    parent_manifest = load_parents(run_config, gene_type)
    print(f"Loaded {len(parent_manifest)} parents")

    groups = parent_manifest.groups(operator.n_parents)
    leftover = len(parent_manifest) - len(groups) * operator.n_parents
    if leftover:
        print(f"Skipping {leftover} trailing parent(s) that do not fill a group of "
              f"{operator.n_parents}")

    # Create output directory
    output_root = Path(run_config['output']['root'])
    overwrite = run_config['output'].get('overwrite', False)
    visualize = run_config['output'].get('visualize', False)

    if output_root.exists() and not overwrite:
        raise FileExistsError(
            f"Output directory already exists: {output_root}\n"
            f"Set 'output.overwrite: true' in config to overwrite"
        )

    output_root.mkdir(parents=True, exist_ok=overwrite)
    print(f"Output directory: {output_root}\n")

    print(f"Recombining {len(groups)} parent groups with {strategy} crossover...")
    print()

    # One independent stream per crossover call
    streams = np.random.SeedSequence(seed).spawn(len(groups))

    children = []
    lineage_records = []

    for g, (group, stream) in enumerate(zip(groups, streams)):
        rng = np.random.default_rng(stream)
        offspring = apply_crossover(group, ga_config, rng)

        for child in offspring:
            index = len(children)
            child.id = f"child_{index:03d}"
            child_path = generate_child_path(output_root, index)
            save_individual_to_csv(child, child_path, overwrite=overwrite)

            lineage_records.append(
                LineageRecord(
                    child_path=child_path,
                    parent_ids=[p.id for p in group],
                    strategy=strategy,
                    crossover_points=child.metadata.get('crossover_points', []),
                    seed=seed,
                    stream=g,
                    timestamp=datetime.now().isoformat()
                )
            )
            children.append(child)

        if visualize:
            plot_crossover(group, offspring, output_root / f"group_{g:03d}.png")

        # Progress reporting
        if (g + 1) % 10 == 0 or g == len(groups) - 1:
            print(f"  Progress: {g+1}/{len(groups)} groups recombined")

    lineage_log_path = save_lineage_log(
        lineage_records, output_root / "lineage_log.csv", overwrite=overwrite
    )

    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Generated: {len(children)} offspring")
    if children:
        stats = crossover_statistics(children[0], groups[0])
        print(f"Genome length: {stats['genome_length']}")
        if strategy == 'pmx':
            print(f"First child is a valid permutation: {stats['is_permutation']}")
    print(f"Output directory: {output_root}")
    print(f"Lineage log: {lineage_log_path}")

    return children
