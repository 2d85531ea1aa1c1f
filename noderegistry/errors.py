"""Errors raised by the node type registry."""

from __future__ import annotations


class RegistryError(Exception):
    """Base class for all registry errors."""


class NotFoundError(RegistryError, LookupError):
    """No node type satisfies a lookup."""

    def __init__(self, identifier: str, selector: object | None = None):
        self.identifier = identifier
        self.selector = selector
        if selector is None:
            message = f"The registry cannot find node type '{identifier}'."
        else:
            message = f"The registry cannot find node type '{identifier}' matching '{selector}'."
        super().__init__(message)


class InvalidSpecifierError(RegistryError, ValueError):
    """Version specifier text does not follow the ``[=|>=]major.minor`` grammar."""

    def __init__(self, text: str, reason: str = ""):
        self.text = text
        message = f"Invalid version specifier {text!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class DuplicateVersionError(RegistryError, ValueError):
    """The (identifier, version) pair is already registered."""

    def __init__(self, identifier: str, version: object):
        self.identifier = identifier
        self.version = version
        super().__init__(f"Node type '{identifier}' version {version} is already registered.")


class CatalogError(RegistryError, ValueError):
    """A catalog or config file is malformed."""
