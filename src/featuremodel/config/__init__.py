"""
featuremodel.config - Configuration loading and defaults

Configuration lives in a ``.featuremodel.toml`` file found in the working
directory or one of its parents. Values are merged over DEFAULT_CONFIG and
may be overridden by FEATUREMODEL_<SECTION>_<KEY> environment variables.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError as TOMLParseError

from featuremodel.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".featuremodel.toml"
ENV_PREFIX = "FEATUREMODEL_"

DEFAULT_CONFIG: dict[str, Any] = {
    "parsing": {
        "dialect": "en",
    },
    "scanning": {
        "patterns": ["*.feature"],
        "recursive": True,
        "skip_dirs": [],
        "skip_files": [],
    },
}


def parse_toml_document(text: str) -> tomlkit.TOMLDocument:
    """Parse TOML text, keeping the tomlkit document structure.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        return tomlkit.parse(text)
    except TOMLParseError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def parse_toml(text: str) -> dict[str, Any]:
    """Parse TOML text into plain Python containers."""
    return parse_toml_document(text).unwrap()


def find_config_file(start: Path | str) -> Path | None:
    """Find the nearest configuration file at or above ``start``.

    Args:
        start: Directory (or file) to begin the search from.

    Returns:
        Path to the configuration file, or None if there is none.
    """
    current = Path(start).resolve()
    if current.is_file():
        current = current.parent

    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``.

    Nested tables are merged key by key; any other value in ``override``
    replaces the one in ``base``.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Interpret an environment value as JSON container or boolean.

    Strings that look like JSON arrays or objects are decoded; malformed
    JSON falls back to the raw string. ``true``/``false`` in any case
    become booleans.
    """
    stripped = value.strip()
    if stripped[:1] in ("[", "{"):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    if stripped.lower() == "true":
        return True
    if stripped.lower() == "false":
        return False
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply FEATUREMODEL_<SECTION>_<KEY> environment overrides in place.

    Only sections already present in ``config`` are considered, so the
    first underscore-separated word after the prefix names the section and
    the rest (lower-cased) names the key.
    """
    for name, raw_value in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        remainder = name[len(ENV_PREFIX):].lower()
        section, _, key = remainder.partition("_")
        if not key or not isinstance(config.get(section), dict):
            continue
        config[section][key] = _try_parse_env_value(raw_value)
        logger.debug("Config override from %s: %s.%s", name, section, key)
    return config


def load_config(path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration.

    Args:
        path: Explicit config file. When omitted, the nearest
            ``.featuremodel.toml`` above the working directory is used,
            and defaults alone when there is none.

    Returns:
        The merged configuration dict.
    """
    config_path = Path(path) if path is not None else find_config_file(Path.cwd())

    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path is not None:
        logger.debug("Loading configuration from %s", config_path)
        user_config = parse_toml(config_path.read_text(encoding="utf-8"))
        config = merge_configs(config, user_config)

    return _apply_env_overrides(config)


__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_CONFIG",
    "find_config_file",
    "load_config",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
]
