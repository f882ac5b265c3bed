"""
Namespace prefix registry.

Maps short prefixes such as ``ex`` to the namespace IRI they abbreviate.
A registry is built fresh for every declaration from that declaration's
own ``prefix(...)`` annotations.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from rdflib import Namespace, URIRef

from .errors import InvalidPrefixError

logger = logging.getLogger(__name__)


def _valid_first_char(c: str) -> bool:
    return c.isalpha() or c == "_"


def _valid_subsequent_char(c: str) -> bool:
    return c.isascii() and (c.isalnum() or c in "_-.")


@dataclass(frozen=True)
class Prefix:
    """
    A validated namespace prefix.

    Rules:
    - non-empty
    - no colon
    - first character is a letter (any script) or underscore
    - later characters are ASCII letters, digits, underscore, hyphen, or period
    """

    value: str

    def __post_init__(self) -> None:
        prefix = self.value
        if ":" in prefix:
            raise InvalidPrefixError("prefix cannot contain colons")
        if not prefix:
            raise InvalidPrefixError("prefix cannot be empty")
        if not _valid_first_char(prefix[0]):
            raise InvalidPrefixError("prefix must start with a letter or underscore")
        for i, c in enumerate(prefix[1:], start=1):
            if not _valid_subsequent_char(c):
                raise InvalidPrefixError(f"prefix has invalid character {c!r} at position {i}")

    def __str__(self) -> str:
        return self.value


class PrefixRegistry:
    """
    Mapping from Prefix to namespace IRI.

    Inserting an existing prefix overwrites its binding; when registries
    are merged the later one wins.
    """

    def __init__(self, bindings: Iterable[tuple[Prefix, URIRef]] = ()) -> None:
        self._bindings: dict[Prefix, URIRef] = {}
        for prefix, namespace in bindings:
            self.insert(prefix, namespace)

    @classmethod
    def from_bindings(cls, bindings: Iterable[tuple[Prefix, URIRef]]) -> PrefixRegistry:
        return cls(bindings)

    @classmethod
    def merged(cls, registries: Iterable[PrefixRegistry]) -> PrefixRegistry:
        """Fold several registries into a new one, later registries winning."""
        result = cls()
        for registry in registries:
            result.merge(registry)
        return result

    def insert(self, prefix: Prefix, namespace: URIRef) -> URIRef | None:
        """
        Bind `prefix` to `namespace`.

        Returns:
            The namespace previously bound to `prefix`, if any
        """
        previous = self._bindings.get(prefix)
        if previous is not None and previous != namespace:
            logger.debug("Prefix %s rebound from %s to %s", prefix, previous, namespace)
        self._bindings[prefix] = namespace
        return previous

    def lookup(self, prefix: Prefix) -> URIRef | None:
        return self._bindings.get(prefix)

    def merge(self, other: PrefixRegistry) -> None:
        """Insert every binding of `other` into this registry."""
        for prefix, namespace in other:
            self.insert(prefix, namespace)

    def namespace(self, prefix: Prefix) -> Namespace | None:
        """Return the binding as an rdflib Namespace for term construction."""
        namespace = self.lookup(prefix)
        return Namespace(namespace) if namespace is not None else None

    def __iter__(self) -> Iterator[tuple[Prefix, URIRef]]:
        return iter(list(self._bindings.items()))

    def __len__(self) -> int:
        return len(self._bindings)

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._bindings

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrefixRegistry):
            return NotImplemented
        return self._bindings == other._bindings

    def __repr__(self) -> str:
        inner = ", ".join(f"{p}: {ns}" for p, ns in self._bindings.items())
        return f"PrefixRegistry({{{inner}}})"
