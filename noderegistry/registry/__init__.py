"""Registry — versioned catalog of node types.

The registry provides:
- Registration: node types grouped by identifier, newest version first
- Lookup: latest version, exact version, or the newest version matching a specifier
- Enumeration: the latest version of every registered identifier
"""

from noderegistry.registry.models import NodeType, TypeDefinition, Version, VersionSpecifier
from noderegistry.registry.type_registry import TypeRegistry, VersionFamily

__all__ = [
    "NodeType",
    "TypeDefinition",
    "TypeRegistry",
    "Version",
    "VersionFamily",
    "VersionSpecifier",
]
