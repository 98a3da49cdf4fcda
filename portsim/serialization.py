"""
Serialization module for PortSim run definitions.

Purpose
-------
Provides JSON loading and saving of run configurations (portfolios,
simulation parameters, time budget) so runs can be shared and version
controlled. Simulation results are never persisted.

Design Principles
-----------------
- Type-safe: Uses Pydantic configs for validation
- Human-readable: JSON format for easy editing
- Backward compatible: Validates schema versions

Example
-------
>>> from pathlib import Path
>>> from portsim.config import RunConfig
>>> from portsim.serialization import save_run_config, load_run_config
>>> save_run_config(RunConfig(), Path("run.json"))
>>> cfg = load_run_config(Path("run.json"))
>>> [p.name for p in cfg.portfolios]
['Aggressive', 'Very Conservative']
"""

from __future__ import annotations
from typing import Any, Dict
from pathlib import Path
import json
import warnings

import pydantic

from .config import RunConfig
from .exceptions import ConfigurationError

__all__ = [
    "SCHEMA_VERSION",
    "run_config_to_dict",
    "run_config_from_dict",
    "save_run_config",
    "load_run_config",
]


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# Dict conversion
# ---------------------------------------------------------------------------

def run_config_to_dict(config: RunConfig) -> Dict[str, Any]:
    """
    Convert RunConfig to its JSON-ready dictionary, stamped with the
    current schema version.
    """
    data = config.model_dump(mode="json")
    data["schema_version"] = SCHEMA_VERSION
    return data


def run_config_from_dict(data: Dict[str, Any]) -> RunConfig:
    """
    Create RunConfig from dictionary representation.

    Parameters
    ----------
    data : dict
        Run definition. Missing sections fall back to defaults.

    Returns
    -------
    RunConfig

    Raises
    ------
    ConfigurationError
        If the data fails validation.
    """
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Run configuration must be a JSON object, got {type(data).__name__}."
        )

    schema_version = data.get("schema_version", "0.0.0")
    if schema_version != SCHEMA_VERSION:
        warnings.warn(
            f"Config schema version {schema_version} differs from current "
            f"version {SCHEMA_VERSION}. May encounter compatibility issues.",
            UserWarning,
        )

    try:
        return RunConfig.model_validate(data)
    except pydantic.ValidationError as e:
        raise ConfigurationError(f"Invalid run configuration:\n{e}") from e


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def save_run_config(config: RunConfig, path: Path) -> None:
    """
    Save RunConfig to a JSON file, creating parent directories.

    Examples
    --------
    >>> save_run_config(RunConfig(), Path("runs/default.json"))
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(run_config_to_dict(config), f, indent=2)


def load_run_config(path: Path) -> RunConfig:
    """
    Load RunConfig from a JSON file.

    Raises
    ------
    ConfigurationError
        If the file cannot be read, is not valid JSON, or fails validation.
    """
    path = Path(path)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read run configuration {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Run configuration {path} is not valid JSON: {e}") from e

    return run_config_from_dict(data)
