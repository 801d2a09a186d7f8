"""Grid Configuration Management Module.

Handles listing, loading, and saving of grid configurations.
Enforces the strictly typed GridConfig schema.
"""

import json
import logging
from pathlib import Path
from typing import List

from ..schemas import GridConfig

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.cwd() / "grid_configs"


def list_grid_configs() -> List[str]:
    """List all available configuration files in the config directory.

    Returns:
        Sorted list of filenames (e.g., ['office.json', 'shifts.json']).
    """
    if not CONFIG_DIR.exists():
        return []
    return sorted(f.name for f in CONFIG_DIR.glob("*.json"))


def load_grid_config(filename: str) -> GridConfig:
    """Load and validate a grid configuration from a JSON file.

    Args:
        filename: Name of the file (e.g. 'office.json').

    Returns:
        Validated GridConfig object.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValidationError: If JSON doesn't match schema.
    """
    file_path = CONFIG_DIR / filename
    if not file_path.exists():
        raise FileNotFoundError(f"Grid config file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    logger.info(f"Loading grid config: {filename}")
    return GridConfig(**data)


def save_grid_config(config: GridConfig, filename: str) -> Path:
    """Save a grid configuration to a JSON file.

    Args:
        config: The GridConfig object to save.
        filename: Target filename.

    Returns:
        Path of the written file.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    file_path = CONFIG_DIR / filename

    with open(file_path, "w", encoding="utf-8") as f:
        f.write(config.model_dump_json(indent=2))
    logger.info(f"Saved grid config to {file_path}")
    return file_path
