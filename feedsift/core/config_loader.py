"""Loader for packaged defaults.

Keyword tables, filter rules and the category table ship as
`feedsift/config/defaults.yaml`. They are parsed once, validated into frozen
pydantic models and cached for the life of the process.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from feedsift.config.categories import CategoryTable
from feedsift.config.filtering import FilterRules
from feedsift.config.topics import TopicsConfig
from feedsift.core.exceptions import ConfigError, ConfigNotFoundError, ConfigValidationError
from feedsift.core.logging import get_logger

logger = get_logger(__name__)

_DEFAULTS_PATH = Path(__file__).parent.parent / "config" / "defaults.yaml"


@lru_cache(maxsize=1)
def load_defaults() -> dict[str, Any]:
    """Load packaged defaults from feedsift/config/defaults.yaml.

    Returns:
        Dictionary with `topics`, `filtering` and `categories` sections

    Raises:
        ConfigError: If the file doesn't exist or is invalid YAML.
    """
    return load_yaml_file(_DEFAULTS_PATH, "defaults")


@lru_cache(maxsize=1)
def load_topics_config() -> TopicsConfig:
    """Load the keyword pools used by topic matching and exclusion."""
    return _validate_section(TopicsConfig, "topics")


@lru_cache(maxsize=1)
def load_filter_rules() -> FilterRules:
    """Load clickbait, spam and excluded-topic rules."""
    return _validate_section(FilterRules, "filtering")


@lru_cache(maxsize=1)
def load_category_table() -> CategoryTable:
    """Load the priority-ordered category table."""
    defaults = load_defaults()
    if "categories" not in defaults:
        raise ConfigNotFoundError("categories", config_path=str(_DEFAULTS_PATH))
    try:
        return CategoryTable(categories=defaults["categories"])
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid category table: {e.error_count()} error(s)",
            config_path=str(_DEFAULTS_PATH),
        ) from e


def _validate_section(model: Any, section: str) -> Any:
    defaults = load_defaults()
    data = defaults.get(section)
    if data is None:
        raise ConfigNotFoundError(section, config_path=str(_DEFAULTS_PATH))
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid '{section}' section: {e.error_count()} error(s)",
            config_path=str(_DEFAULTS_PATH),
        ) from e


def load_yaml_file(path: Path, name: str) -> dict[str, Any]:
    """Load a YAML (or JSON) file from disk.

    Args:
        path: Path to the file.
        name: Human-readable name for error messages.

    Returns:
        Parsed content as dictionary.

    Raises:
        ConfigError: If file doesn't exist or parsing fails.
    """
    if not path.exists():
        logger.error("Config file not found", name=name, path=str(path))
        raise ConfigError(f"Config file not found: {path}", config_path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)

        if not isinstance(content, dict):
            raise ConfigError(f"Config file must contain a mapping: {path}", config_path=str(path))

        logger.debug("Loaded config file", name=name, path=str(path))
        return content

    except yaml.YAMLError as e:
        logger.error("YAML parsing failed", name=name, path=str(path), error=str(e))
        raise ConfigError(f"Invalid YAML in {path}: {e}", config_path=str(path)) from e


def clear_global_config_cache() -> None:
    """Clear all cached packaged configuration."""
    load_defaults.cache_clear()
    load_topics_config.cache_clear()
    load_filter_rules.cache_clear()
    load_category_table.cache_clear()
    logger.info("Global config cache cleared")


__all__ = [
    "load_defaults",
    "load_topics_config",
    "load_filter_rules",
    "load_category_table",
    "load_yaml_file",
    "clear_global_config_cache",
]
