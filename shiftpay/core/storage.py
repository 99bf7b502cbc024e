# shiftpay/core/storage.py
"""
Loading and saving of the wage/bonus configuration file.
"""

import json
import logging
import os
import warnings
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from shiftpay.core.config import DEFAULT_WAGE_CONFIG_PATH, WAGE_CONFIG_PATH_ENV
from shiftpay.core.errors import ConfigurationError, DegradedRuleWarning
from shiftpay.core.models import WageConfiguration

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """General error type for problems reading or writing data files."""

    pass


def wage_config_path() -> Path:
    """Path of the wage/bonus file: WAGE_CONFIG_PATH if set, else the default."""
    return Path(os.getenv(WAGE_CONFIG_PATH_ENV) or DEFAULT_WAGE_CONFIG_PATH)


def _load_json(file_path: Path) -> list[Any] | dict[str, Any]:
    """
    Read and parse JSON with robust error handling.
    Args:
        file_path: Path to the JSON file
    Returns:
        Parsed JSON data as list or dict
    Raises:
        StorageError: If file cannot be read or JSON is invalid
    """
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.exception("Failed to read JSON file %s", file_path)
        raise StorageError(f"Could not read JSON file {file_path}: {e}") from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.exception("Invalid JSON in file %s", file_path)
        raise StorageError(f"Invalid JSON in file {file_path}: {e}") from e


def parse_wage_configuration(data: Any, source: str = "<data>") -> WageConfiguration:
    """
    Validate raw data into a WageConfiguration.

    Weekday bonuses with unknown day names are kept with their valid days and
    reported through DegradedRuleWarning.

    Raises:
        ConfigurationError: With the offending field and value
    """
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected wage configuration object in {source}", field=None, value=type(data).__name__)

    try:
        config = WageConfiguration.model_validate(data)
    except ValidationError as e:
        logger.error("Invalid wage configuration in %s: %s", source, e)
        raise _configuration_error_from(e, source) from e

    for index, rule in config.degraded_rules():
        message = (
            f"{source}: weekday_bonuses[{index}] has unknown day names {list(rule.rejected_days)}; "
            "they are ignored"
        )
        logger.warning(message)
        warnings.warn(message, DegradedRuleWarning, stacklevel=2)

    return config


def load_wage_configuration(file_path: Path | str | None = None) -> WageConfiguration:
    """
    Load the wage/bonus configuration from file.
    Args:
        file_path: JSON file; defaults to wage_config_path()
    Returns:
        Validated WageConfiguration
    Raises:
        StorageError: If the file cannot be read or is not JSON
        ConfigurationError: If the content is invalid
    """
    path = Path(file_path) if file_path is not None else wage_config_path()
    data = _load_json(path)
    config = parse_wage_configuration(data, source=str(path))
    logger.info(
        "Loaded wage configuration from %s (%d general, %d weekday bonuses)",
        path,
        len(config.general_bonuses),
        len(config.weekday_bonuses),
    )
    return config


def save_wage_configuration(config: WageConfiguration, file_path: Path | str) -> None:
    """
    Write the configuration in canonical form.
    Raises:
        StorageError: If the file cannot be written
    """
    path = Path(file_path)
    payload = config.model_dump(mode="json")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as e:
        logger.exception("Failed to write wage configuration to %s", path)
        raise StorageError(f"Could not write wage configuration to {path}: {e}") from e


# Cache for the configuration used by the API
_wage_config: WageConfiguration | None = None


def get_wage_configuration() -> WageConfiguration:
    """Cached load_wage_configuration() for request handlers."""
    global _wage_config
    if _wage_config is None:
        _wage_config = load_wage_configuration()
    return _wage_config


def clear_configuration_cache() -> None:
    global _wage_config
    _wage_config = None


# === Private helpers ===


def _configuration_error_from(error: ValidationError, source: str) -> ConfigurationError:
    """Turn the first pydantic error into a ConfigurationError naming field and value."""
    first = error.errors()[0]
    cause = (first.get("ctx") or {}).get("error")
    location = [str(part) for part in first.get("loc", ())]

    if isinstance(cause, ConfigurationError):
        # Keep the specific subclass, qualified with where in the file it happened
        cause.field = _qualified_field(location, cause.field)
        return cause

    return ConfigurationError(
        f"Invalid wage configuration in {source}: {first.get('msg', 'invalid value')}",
        field=".".join(location) or None,
        value=first.get("input"),
    )


def _qualified_field(location: list[str], field: str | None) -> str | None:
    if field is None:
        return ".".join(location) or None
    if not location or field.split(".")[0].split("[")[0] == location[0]:
        return field
    if location[-1] == field:
        return ".".join(location)
    return ".".join([*location, field])
