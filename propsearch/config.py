"""Configuration management for search defaults."""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError, OptionsError
from .indexing.analyzers import TokenizeOptions
from .ranking import SearchOptions

logger = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    """Default settings for searching, suggestions and history."""

    weights: dict[str, float] = field(default_factory=dict)
    limit: int = 50
    threshold: float = 0.0
    fuzzy: bool = False
    fuzzy_threshold: float = 0.8
    boost_exact: float = 2.0
    min_query_length: int = 1
    suggestion_limit: int = 10
    suggestion_min_length: int = 2
    history_max_items: int = 20
    tokenizer: TokenizeOptions = field(default_factory=TokenizeOptions)

    def __post_init__(self):
        """Validate search options eagerly."""
        self.search_options()

    def search_options(self) -> SearchOptions:
        """Search options derived from this configuration."""
        return SearchOptions(
            limit=self.limit,
            threshold=self.threshold,
            fuzzy=self.fuzzy,
            fuzzy_threshold=self.fuzzy_threshold,
            boost_exact=self.boost_exact,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchConfig":
        """Create from a configuration mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")

        values = {key: value for key, value in data.items() if key in known}
        tokenizer = values.pop("tokenizer", None)
        try:
            if isinstance(tokenizer, dict):
                values["tokenizer"] = TokenizeOptions(**tokenizer)
            return cls(**values)
        except (OptionsError, TypeError) as e:
            raise ConfigError(f"Invalid configuration: {e}")


CONFIG_FILENAMES = (".propsearch.yaml", "propsearch.yaml")

# Sections merged key by key rather than replaced wholesale
NESTED_SECTIONS = ("weights", "tokenizer")


def config_paths() -> list[Path]:
    """Config files consulted by ``load_config``, lowest precedence first.

    The user file lives under ``$XDG_CONFIG_HOME/propsearch``; project files
    are looked up in the working directory.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return [Path(config_home) / "propsearch" / "config.yaml"] + [
        Path(name) for name in CONFIG_FILENAMES
    ]


def read_config_file(path: Path) -> dict[str, Any]:
    """Read one YAML config file; an empty file is an empty mapping.

    Raises:
        ConfigError: If the file is unreadable, malformed or not a mapping
    """
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping of settings")
    return data


def apply_overrides(settings: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Layer overrides onto settings without mutating either.

    ``weights`` and ``tokenizer`` are merged per key so a project file can
    adjust one field weight while keeping the user's others.
    """
    merged = dict(settings)
    for key, value in overrides.items():
        current = merged.get(key)
        if key in NESTED_SECTIONS and isinstance(current, dict) and isinstance(value, dict):
            merged[key] = {**current, **value}
        else:
            merged[key] = value
    return merged


def _env_overrides() -> dict[str, Any]:
    """Read overrides from PROPSEARCH_* environment variables."""
    overrides: dict[str, Any] = {}

    try:
        if limit := os.environ.get("PROPSEARCH_LIMIT"):
            overrides["limit"] = int(limit)
        if fuzzy_threshold := os.environ.get("PROPSEARCH_FUZZY_THRESHOLD"):
            overrides["fuzzy_threshold"] = float(fuzzy_threshold)
    except ValueError as e:
        raise ConfigError(f"Invalid environment override: {e}")

    if fuzzy := os.environ.get("PROPSEARCH_FUZZY"):
        overrides["fuzzy"] = fuzzy.strip().lower() in ("1", "true", "yes", "on")

    return overrides


def load_config(path: Path | None = None) -> SearchConfig:
    """Load search defaults from config files and the environment.

    Args:
        path: Explicit config file; when given, default locations are skipped

    Returns:
        Effective search configuration

    Raises:
        ConfigError: If a config file or override is invalid
    """
    settings: dict[str, Any] = {}

    if path is not None:
        settings = read_config_file(path)
    else:
        for candidate in config_paths():
            if candidate.is_file():
                logger.debug(f"Loading config from {candidate}")
                settings = apply_overrides(settings, read_config_file(candidate))

    return SearchConfig.from_dict(apply_overrides(settings, _env_overrides()))
