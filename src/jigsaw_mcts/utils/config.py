"""YAML configuration for searches."""

import dataclasses
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..mcts.search import SearchConfig

logger = logging.getLogger(__name__)


def config_from_dict(values: Dict[str, Any], validate: bool = True) -> SearchConfig:
    """Build a SearchConfig from a mapping.

    Accepts either the fields directly or nested under a ``search`` key.
    Unknown keys are ignored with a warning.

    Args:
        values: Parsed configuration
        validate: Check application ranges

    Returns:
        SearchConfig
    """
    if values is None:
        values = {}
    if not isinstance(values, dict):
        raise ValueError(f"Config must be a mapping, got {type(values).__name__}")
    if isinstance(values.get("search"), dict):
        values = values["search"]

    known = {f.name for f in dataclasses.fields(SearchConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")

    config = SearchConfig(**{k: v for k, v in values.items() if k in known})
    if validate:
        config.validate()
    return config


def load_config(path: Union[str, Path], validate: bool = True) -> SearchConfig:
    """Load a SearchConfig from a YAML file."""
    with open(path, 'r') as f:
        values = yaml.safe_load(f)
    logger.info(f"Loaded config from {path}")
    return config_from_dict(values, validate=validate)


def save_config(config: SearchConfig, path: Union[str, Path]) -> None:
    """Write a SearchConfig as YAML under a ``search`` section."""
    with open(path, 'w') as f:
        yaml.safe_dump({"search": dataclasses.asdict(config)}, f, sort_keys=False)


def merge_overrides(config: SearchConfig, overrides: Dict[str, Optional[Any]]) -> SearchConfig:
    """Replace fields with every override that is not None."""
    changes = {k: v for k, v in overrides.items() if v is not None}
    return dataclasses.replace(config, **changes)
