"""
CLI module for crossover runs.

Handles run configuration loading, validation, and dispatching.
"""

from typing import Dict, Any, List
from pathlib import Path
import yaml

from .data_models import Individual


class ConfigValidationError(Exception):
    """Raised when run configuration is invalid."""
    pass


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration file must contain a mapping")

    return config


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    for field in ['input', 'output']:
        if field not in config:
            raise ConfigValidationError(f"Missing required field: '{field}'")

    # Validate input section
    if not isinstance(config['input'], dict):
        raise ConfigValidationError("'input' must be a dictionary")

    # Validate output section
    if not isinstance(config['output'], dict):
        raise ConfigValidationError("'output' must be a dictionary")

    if 'root' not in config['output']:
        raise ConfigValidationError("Missing required field: 'output.root'")

    if 'ga_config' in config:
        ga_config_path = Path(config['ga_config'])
        if not ga_config_path.exists():
            raise ConfigValidationError(f"GA config file not found: {ga_config_path}")

    if 'random_seed' in config:
        seed = config['random_seed']
        if not isinstance(seed, int) or isinstance(seed, bool) or seed < 0:
            raise ConfigValidationError(
                f"'random_seed' must be a non-negative integer, got: {seed}"
            )

    _validate_input_config(config['input'])


def _validate_input_config(input_config: Dict[str, Any]) -> None:
    """
    Validate the parent source of a run.

    Args:
        input_config: The 'input' section of the run configuration

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    has_manifest = 'parents_manifest' in input_config
    has_dir = 'parents_dir' in input_config

    if not has_manifest and not has_dir:
        raise ConfigValidationError(
            "Run requires either 'input.parents_manifest' or 'input.parents_dir'"
        )

    if has_manifest and has_dir:
        raise ConfigValidationError(
            "Run cannot have both 'parents_manifest' and 'parents_dir'. "
            "Please specify only one."
        )

    if has_manifest:
        manifest_path = Path(input_config['parents_manifest'])
        if not manifest_path.exists():
            raise ConfigValidationError(f"Parent manifest not found: {manifest_path}")

    if has_dir:
        dir_path = Path(input_config['parents_dir'])
        if not dir_path.is_dir():
            raise ConfigValidationError(f"Parent directory not found: {dir_path}")


def run_from_config(config_path: str) -> List[Individual]:
    """
    Load run configuration and generate offspring.

    This is the main entry point called by ga_cross_cli.py.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        List of offspring written by the run

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
        Various exceptions from the crossover operators
    """
    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)

    print("Validating configuration...")
    validate_run_config(config)

    from .orchestration import run_offspring_mode
    children = run_offspring_mode(config)

    print("\nRun completed successfully!")
    return children
