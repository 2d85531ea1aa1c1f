"""Registry configuration, loaded from YAML."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from noderegistry.errors import CatalogError
from noderegistry.registry.catalog import load_catalog
from noderegistry.registry.type_registry import TypeRegistry

logger = logging.getLogger(__name__)

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class RegistryConfig:
    """Settings used to construct a registry."""

    allow_duplicates: bool = False
    log_level: str = "WARNING"
    catalogs: list[Path] = field(default_factory=list)


def load_config(path: str | Path) -> RegistryConfig:
    """Load a registry config from a YAML file.

    Catalog paths are resolved relative to the config file's directory.
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise CatalogError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in config {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(f"Config {path} must be a mapping")

    log_level = str(data.get("log_level", "WARNING")).upper()
    if log_level not in LOG_LEVELS:
        raise CatalogError(f"Invalid log_level '{log_level}'. Must be one of: {sorted(LOG_LEVELS)}")

    allow_duplicates = data.get("allow_duplicates", False)
    if not isinstance(allow_duplicates, bool):
        raise CatalogError(f"Config {path}: allow_duplicates must be true or false, got {allow_duplicates!r}")

    catalogs = data.get("catalogs") or []
    if not isinstance(catalogs, list) or not all(isinstance(c, str) for c in catalogs):
        raise CatalogError(f"Config {path}: catalogs must be a list of file paths")

    return RegistryConfig(
        allow_duplicates=allow_duplicates,
        log_level=log_level,
        catalogs=[path.parent / c for c in catalogs],
    )


def build_registry(config: RegistryConfig | None = None) -> TypeRegistry:
    """Create a registry and register every node type in the configured catalogs."""
    config = config or RegistryConfig()
    registry = TypeRegistry(allow_duplicates=config.allow_duplicates)
    for catalog in config.catalogs:
        registry.register_all(load_catalog(catalog))
    logger.info("Built registry with %d node types", len(registry))
    return registry
