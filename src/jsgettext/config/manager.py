"""Options file loading for jsgettext.

This module reads extraction options from a YAML file and validates them
with the ExtractOptions Pydantic model.
"""

import logging
from pathlib import Path

import yaml

from ..utils.core.exceptions import ConfigurationError
from .schema import ExtractOptions


logger = logging.getLogger(__name__)


def load_options_data(config_path: Path) -> dict[str, object]:
    """
    Read the raw option mapping from a YAML file.

    Args:
        config_path: Path to the YAML options file

    Returns:
        dict[str, object]: Option names mapped to their values

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML or is not a mapping
    """
    if not config_path.exists():
        raise ConfigurationError(f"Options file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        raise ConfigurationError(
            f"Options file must contain a YAML dictionary, got {type(raw_data).__name__}"
        )

    logger.debug(f"Loaded {len(raw_data)} option(s) from {config_path}")  # pyright: ignore[reportUnknownArgumentType]
    return {str(key): value for key, value in raw_data.items()}  # pyright: ignore[reportUnknownVariableType]


def load_options_file(
    config_path: Path, overrides: dict[str, object] | None = None
) -> ExtractOptions:
    """
    Load and validate extraction options from a YAML file.

    Args:
        config_path: Path to the YAML options file
        overrides: Values that replace the ones read from the file

    Returns:
        ExtractOptions: Validated options

    Raises:
        ConfigurationError: If the file cannot be read or fails validation
    """
    data = load_options_data(config_path)
    if overrides:
        data.update(overrides)
    return ExtractOptions.from_value(data)
