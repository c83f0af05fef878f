"""
I/O utilities for crossover runs.

Handles genome CSV parsing/serialization, manifest loading, lineage logging
and configuration loading.
"""

import csv
from pathlib import Path
from typing import Callable, Optional, Union
from datetime import datetime
import yaml

from .data_models import Individual, ParentManifest, LineageRecord


GENE_TYPES: dict[str, Callable[[str], object]] = {
    'float': float,
    'int': int,
    'str': str,
}


def resolve_gene_type(gene_type: Union[str, Callable]) -> Callable:
    """
    Map a configured gene type name ('float', 'int', 'str') to a parser.

    Raises:
        ValueError: If the name is unknown
    """
    if callable(gene_type):
        return gene_type
    if gene_type not in GENE_TYPES:
        raise ValueError(
            f"Unknown gene_type: {gene_type!r}. Must be one of {', '.join(GENE_TYPES)}"
        )
    return GENE_TYPES[gene_type]


def load_csv_to_individual(
    csv_path: Union[str, Path],
    individual_id: Optional[str] = None,
    gene_type: Union[str, Callable] = float
) -> Individual:
    """
    Load a genome CSV file into an Individual object.

    CSV format:
        index,gene
        0,3.25
        1,-0.5
        ...

    Rows may come in any order; genes are placed by their index.

    Args:
        csv_path: Path to CSV file
        individual_id: Optional ID for the individual (defaults to filename stem)
        gene_type: Parser for gene values, or one of 'float', 'int', 'str'

    Returns:
        Individual object with genome loaded and fitness invalid

    Raises:
        FileNotFoundError: If CSV file doesn't exist
        ValueError: If CSV format is invalid
    """
    csv_path = Path(csv_path)
    parse = resolve_gene_type(gene_type)

    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    if individual_id is None:
        individual_id = csv_path.stem

    genes = {}
    with open(csv_path, 'r', newline='') as f:
        reader = csv.DictReader(f)

        # Validate header
        if not all(col in (reader.fieldnames or []) for col in ['index', 'gene']):
            raise ValueError(f"Invalid CSV format in {csv_path}. Expected columns: index,gene")

        for row in reader:
            index = int(row['index'])
            if index in genes:
                raise ValueError(f"Duplicate gene index {index} in {csv_path}")
            genes[index] = parse(row['gene'])

    if sorted(genes) != list(range(len(genes))):
        raise ValueError(f"Gene indices in {csv_path} must be contiguous from 0")

    return Individual(
        genome=[genes[i] for i in range(len(genes))],
        id=individual_id,
        metadata={
            "loaded_at": datetime.now().isoformat(),
            "source_file": str(csv_path)
        }
    )


def save_individual_to_csv(
    individual: Individual,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save an Individual's genome to CSV file.

    Args:
        individual: Individual to save
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved CSV file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    # Create parent directory if needed
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['index', 'gene'])
        for index, gene in enumerate(individual.genome):
            writer.writerow([index, gene])

    individual.metadata["saved_at"] = datetime.now().isoformat()
    individual.metadata["path"] = str(output_path)

    return output_path


def load_parent_manifest(
    manifest_path: Union[str, Path],
    gene_type: Union[str, Callable] = float
) -> ParentManifest:
    """
    Load a parent manifest CSV file.

    CSV format:
        id,path,score,tags
        parent_001,gen_000/ind_001.csv,0.89,elite
        parent_002,gen_000/ind_005.csv,0.85,diverse

    Parents keep the manifest's row order.

    Args:
        manifest_path: Path to manifest CSV
        gene_type: Parser for gene values

    Returns:
        ParentManifest object

    Raises:
        FileNotFoundError: If manifest file doesn't exist
        ValueError: If manifest format is invalid
    """
    manifest_path = Path(manifest_path)

    if not manifest_path.exists():
        raise FileNotFoundError(f"Manifest file not found: {manifest_path}")

    parents = []

    with open(manifest_path, 'r', newline='') as f:
        reader = csv.DictReader(f)

        if 'id' not in (reader.fieldnames or []) or 'path' not in reader.fieldnames:
            raise ValueError("Invalid manifest format. Required columns: id, path")

        for row in reader:
            parent_path = Path(row['path'])

            # Resolve relative paths relative to manifest directory
            if not parent_path.is_absolute():
                parent_path = manifest_path.parent / parent_path

            individual = load_csv_to_individual(parent_path, row['id'], gene_type)

            # Selector score; fitness_valid stays False
            if row.get('score'):
                individual.fitness = float(row['score'])

            if row.get('tags'):
                individual.metadata['tags'] = row['tags']

            parents.append(individual)

    return ParentManifest(
        parents=parents,
        metadata={
            'manifest_path': str(manifest_path),
            'loaded_at': datetime.now().isoformat()
        }
    )


def load_parents_from_directory(
    directory: Union[str, Path],
    pattern: str = "*.csv",
    gene_type: Union[str, Callable] = float
) -> ParentManifest:
    """
    Load all CSV files from a directory as parents, in filename order.

    Args:
        directory: Directory containing parent CSV files
        pattern: Glob pattern for CSV files (default: "*.csv")
        gene_type: Parser for gene values

    Returns:
        ParentManifest with all loaded individuals

    Raises:
        FileNotFoundError: If directory doesn't exist
        ValueError: If no CSV files found
    """
    directory = Path(directory)

    if not directory.exists():
        raise FileNotFoundError(f"Directory not found: {directory}")

    csv_files = sorted(directory.glob(pattern))

    if not csv_files:
        raise ValueError(f"No CSV files found in {directory} matching pattern {pattern}")

    parents = [load_csv_to_individual(csv_file, gene_type=gene_type) for csv_file in csv_files]

    return ParentManifest(
        parents=parents,
        metadata={
            'source_directory': str(directory),
            'loaded_at': datetime.now().isoformat(),
            'count': len(parents)
        }
    )


def save_lineage_log(
    lineage_records: list[LineageRecord],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save lineage records to CSV file.

    Args:
        lineage_records: List of LineageRecord objects
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved lineage log

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Lineage log already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        fieldnames = ['child_path', 'parent_ids', 'strategy', 'crossover_points',
                      'seed', 'stream', 'timestamp']
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()

        for record in lineage_records:
            writer.writerow(record.to_dict())

    return output_path


def load_lineage_log(log_path: Union[str, Path]) -> list[LineageRecord]:
    """
    Load lineage records written by `save_lineage_log`.

    Raises:
        FileNotFoundError: If the log doesn't exist
    """
    log_path = Path(log_path)

    if not log_path.exists():
        raise FileNotFoundError(f"Lineage log not found: {log_path}")

    with open(log_path, 'r', newline='') as f:
        return [LineageRecord.from_dict(row) for row in csv.DictReader(f)]


def generate_child_path(
    output_folder: Path,
    index: int,
    prefix: str = "child",
    format_string: str = "{:03d}"
) -> Path:
    """
    Generate a standard child file path.

    Args:
        output_folder: Folder for this run
        index: Child index
        prefix: Filename prefix
        format_string: Format string for index

    Returns:
        Path for child CSV file
    """
    filename = f"{prefix}_{format_string.format(index)}.csv"
    return Path(output_folder) / filename


def load_config(config_path: Union[str, Path]) -> dict:
    """
    Load crossover operator configuration from YAML file.

    Args:
        config_path: Path to config YAML file

    Returns:
        Configuration dictionary (empty if the file is empty)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    return config or {}


def validate_csv_format(csv_path: Union[str, Path]) -> tuple[bool, Optional[str]]:
    """
    Validate that a genome CSV file has correct format.

    Args:
        csv_path: Path to CSV file

    Returns:
        Tuple of (is_valid, error_message)
    """
    csv_path = Path(csv_path)

    if not csv_path.exists():
        return False, f"File not found: {csv_path}"

    try:
        with open(csv_path, 'r', newline='') as f:
            reader = csv.DictReader(f)

            required_cols = {'index', 'gene'}
            if not required_cols.issubset(set(reader.fieldnames or [])):
                return False, f"Missing required columns. Expected: {required_cols}"

            row_count = 0
            for row in reader:
                row_count += 1
                try:
                    int(row['index'])
                except (TypeError, ValueError):
                    return False, f"Invalid gene index in row {row_count}"

            if row_count == 0:
                return False, "CSV file is empty (no genes)"

        return True, None

    except (OSError, csv.Error, UnicodeDecodeError) as e:
        return False, f"Error reading CSV: {str(e)}"
