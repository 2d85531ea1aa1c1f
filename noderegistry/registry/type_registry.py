"""In-memory registry of versioned node types.

Node types are grouped by identifier into version families. Each family is
kept ordered from the newest (highest) version to the oldest, so scanning a
family front to back always yields the newest candidate first.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator

from noderegistry.errors import DuplicateVersionError, NotFoundError
from noderegistry.registry.models import TypeDefinition, Version, VersionSpecifier

logger = logging.getLogger(__name__)


class VersionFamily:
    """Node types sharing one identifier, ordered newest version first."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        self._types: list[TypeDefinition] = []

    def add(self, node_type: TypeDefinition) -> None:
        """Insert before the first entry whose version is smaller.

        Entries with an equal version stay ahead of the new one.
        """
        new_version = node_type.version
        index = len(self._types)
        for i, existing in enumerate(self._types):
            if existing.version < new_version:
                index = i
                break
        self._types.insert(index, node_type)

    def has_version(self, version: Version) -> bool:
        return any(t.version == version for t in self._types)

    @property
    def latest(self) -> TypeDefinition:
        return self._types[0]

    def __iter__(self) -> Iterator[TypeDefinition]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)


class TypeRegistry:
    """Lookup service for node types by identifier and version.

    The registry always deals with node types specified by their qualified
    identifier, a "full" name in reverse domain notation, e.g.
    ``net.nodebox.node.vector.Rect``.
    """

    def __init__(self, allow_duplicates: bool = False):
        self.allow_duplicates = allow_duplicates
        self._families: dict[str, VersionFamily] = {}
        self._lock = threading.RLock()

    # -- registration ------------------------------------------------------

    def register(self, node_type: TypeDefinition) -> None:
        """Add a node type to the family for its identifier.

        Raises DuplicateVersionError if the same identifier and version is
        already registered, unless duplicates are allowed.
        """
        identifier = node_type.identifier
        with self._lock:
            family = self._families.get(identifier)
            if family is None:
                family = VersionFamily(identifier)
                self._families[identifier] = family
            elif family.has_version(node_type.version):
                if not self.allow_duplicates:
                    logger.warning(
                        "Rejected duplicate node type %s version %s",
                        identifier,
                        node_type.version,
                    )
                    raise DuplicateVersionError(identifier, node_type.version)
                logger.debug("Registering duplicate %s version %s", identifier, node_type.version)
            family.add(node_type)
        logger.debug("Registered node type %s version %s", identifier, node_type.version)

    def register_all(self, node_types: Iterable[TypeDefinition]) -> None:
        for node_type in node_types:
            self.register(node_type)

    # -- lookup ------------------------------------------------------------

    def get_latest(self, identifier: str) -> TypeDefinition:
        """Return the newest version of the node type with the given identifier."""
        with self._lock:
            return self._family(identifier).latest

    def get_exact(self, identifier: str, version: Version | str) -> TypeDefinition:
        """Return the node type with exactly the given version."""
        if isinstance(version, str):
            version = Version.parse(version)
        with self._lock:
            for node_type in self._family(identifier):
                if node_type.version == version:
                    return node_type
        logger.debug("No version %s of node type %s", version, identifier)
        raise NotFoundError(identifier, version)

    def get_matching(
        self, identifier: str, specifier: VersionSpecifier | str
    ) -> TypeDefinition:
        """Return the newest node type whose version satisfies the specifier."""
        if isinstance(specifier, str):
            specifier = VersionSpecifier(specifier)
        with self._lock:
            for node_type in self._family(identifier):
                if specifier.matches(node_type.version):
                    return node_type
        logger.debug("No version of node type %s matches %s", identifier, specifier)
        raise NotFoundError(identifier, specifier)

    def get(
        self,
        identifier: str,
        selector: Version | VersionSpecifier | str | None = None,
    ) -> TypeDefinition:
        """Resolve a node type by identifier and an optional selector.

        A ``Version`` selects an exact version, a ``VersionSpecifier`` or
        specifier text selects the newest matching version, and no selector
        selects the latest version.
        """
        if selector is None:
            return self.get_latest(identifier)
        if isinstance(selector, Version):
            return self.get_exact(identifier, selector)
        return self.get_matching(identifier, selector)

    def versions(self, identifier: str) -> tuple[TypeDefinition, ...]:
        """All registered versions of a node type, newest first."""
        with self._lock:
            return tuple(self._family(identifier))

    def list_latest(self) -> list[TypeDefinition]:
        """The latest version of every node type. Each identifier occurs once."""
        with self._lock:
            return [family.latest for family in self._families.values()]

    def identifiers(self) -> list[str]:
        with self._lock:
            return list(self._families)

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._families

    def __len__(self) -> int:
        with self._lock:
            return len(self._families)

    def _family(self, identifier: str) -> VersionFamily:
        family = self._families.get(identifier)
        if family is None:
            logger.debug("Unknown node type %s", identifier)
            raise NotFoundError(identifier)
        return family
