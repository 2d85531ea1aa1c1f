"""Registry data models — versions, specifiers and node type definitions."""

from __future__ import annotations

import operator
import re
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from noderegistry.errors import InvalidSpecifierError

_VERSION_RE = re.compile(r"^(?P<major>[0-9]+)\.(?P<minor>[0-9]+)$")

# Optional comparator followed by major.minor. Longest comparator first.
_SPECIFIER_RE = re.compile(r"^(?P<op>>=|=)?\s*(?P<major>[0-9]+)\.(?P<minor>[0-9]+)$")

_OPERATORS = {
    "=": operator.eq,
    ">=": operator.ge,
}


@dataclass(frozen=True, order=True)
class Version:
    """A ``major.minor`` node type version, ordered major first."""

    major: int = 1
    minor: int = 0

    def __post_init__(self):
        for name in ("major", "minor"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"Version {name} must be an int, got {value!r}")
            if value < 0:
                raise ValueError(f"Version {name} must be non-negative, got {value}")

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse ``"2.0"`` into ``Version(2, 0)``."""
        match = _VERSION_RE.match(text.strip())
        if not match:
            raise ValueError(f"Invalid version {text!r}, expected 'major.minor'")
        try:
            return cls(int(match["major"]), int(match["minor"]))
        except ValueError as e:
            raise ValueError(f"Invalid version {text!r}: {e}") from e

    def smaller_than(self, other: Version) -> bool:
        return self < other

    def larger_than(self, other: Version) -> bool:
        return self > other

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


class VersionSpecifier:
    """A "fuzzy" way of selecting node type versions.

    Examples:
    - ``"=2.0"`` -- only version 2.0, nothing above or below that.
    - ``"2.0"`` -- same as above.
    - ``">=2.0"`` -- anything greater than or equal to version 2.0.
    """

    __slots__ = ("_text", "_op", "_version")

    def __init__(self, specifier: str):
        if not isinstance(specifier, str):
            raise InvalidSpecifierError(repr(specifier), "specifier must be a string")
        match = _SPECIFIER_RE.match(specifier.strip())
        if not match:
            raise InvalidSpecifierError(specifier, "expected '[=|>=]major.minor'")
        try:
            version = Version(int(match["major"]), int(match["minor"]))
        except ValueError as e:
            raise InvalidSpecifierError(specifier, str(e)) from e
        self._text = specifier
        self._op = match["op"] or "="
        self._version = version

    @property
    def specifier(self) -> str:
        return self._text

    @property
    def operator(self) -> str:
        return self._op

    @property
    def version(self) -> Version:
        return self._version

    def matches(self, version: Version | int, minor: int | None = None) -> bool:
        """Check a candidate version, given as a ``Version`` or as ``(major, minor)``."""
        if minor is not None:
            version = Version(version, minor)
        return _OPERATORS[self._op](version, self._version)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionSpecifier):
            return NotImplemented
        return (self._op, self._version) == (other._op, other._version)

    def __hash__(self) -> int:
        return hash((self._op, self._version))

    def __str__(self) -> str:
        return f"{self._op}{self._version}"

    def __repr__(self) -> str:
        return f"VersionSpecifier({self._text!r})"


@runtime_checkable
class TypeDefinition(Protocol):
    """What the registry needs from a node type: its identifier and version."""

    @property
    def identifier(self) -> str: ...

    @property
    def version(self) -> Version: ...


@dataclass(frozen=True)
class NodeType:
    """A node type descriptor, as listed in catalog files."""

    identifier: str
    version: Version = Version()
    description: str = ""
    category: str = ""

    @property
    def qualified_id(self) -> str:
        return f"{self.identifier}@{self.version}"
