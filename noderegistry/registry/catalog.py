"""Catalog files — YAML lists of node types used to bootstrap a registry.

A catalog looks like::

    node_types:
      - identifier: net.nodebox.node.vector.Rect
        version: "1.0"
        description: Rectangle
        category: vector

Catalogs are only read. The registry is never written back to disk.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from noderegistry.errors import CatalogError
from noderegistry.registry.models import NodeType, Version

logger = logging.getLogger(__name__)


def load_catalog(path: str | Path) -> list[NodeType]:
    """Load the node types listed in a catalog file, in file order."""
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in catalog {path}: {e}") from e

    if data is None:
        return []
    if not isinstance(data, dict) or not isinstance(data.get("node_types", []), list):
        raise CatalogError(f"Catalog {path} must contain a 'node_types' list")

    node_types = []
    for i, entry in enumerate(data.get("node_types", [])):
        node_types.append(_entry_to_node_type(entry, f"{path}: node type {i + 1}"))

    logger.debug("Loaded %d node types from %s", len(node_types), path)
    return node_types


def _entry_to_node_type(entry: object, where: str) -> NodeType:
    if not isinstance(entry, dict):
        raise CatalogError(f"{where} must be a mapping")

    identifier = entry.get("identifier")
    if not identifier or not isinstance(identifier, str):
        raise CatalogError(f"{where} missing 'identifier'")

    raw_version = entry.get("version", "1.0")
    # Unquoted YAML versions arrive as numbers.
    if isinstance(raw_version, (int, float)) and not isinstance(raw_version, bool):
        raw_version = str(raw_version)
    if not isinstance(raw_version, str):
        raise CatalogError(f"{where} has invalid version {raw_version!r}")
    try:
        version = Version.parse(raw_version)
    except ValueError as e:
        raise CatalogError(f"{where} ({identifier}): {e}") from e

    return NodeType(
        identifier=identifier,
        version=version,
        description=_text_field(entry, "description", where),
        category=_text_field(entry, "category", where),
    )


def _text_field(entry: dict, key: str, where: str) -> str:
    value = entry.get(key)
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise CatalogError(f"{where} has invalid {key} {value!r}")
    return str(value)
