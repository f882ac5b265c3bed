"""
Declaration-level attributes for records and tagged unions.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from rdflib import URIRef

from ..errors import (
    DisallowedUnionTypeError,
    InvalidPrefixError,
    MultipleTypesError,
    make_resolution_error,
)
from ..identifiers import resolve
from ..ir.annotations import PrefixEntry, RecordAnnotation, TypeEntry
from ..prefix_registry import Prefix, PrefixRegistry


@dataclass
class RecordAttributes:
    """Prefixes and optional type IRI of a record declaration."""

    registry: PrefixRegistry = field(default_factory=PrefixRegistry)
    type_iri: URIRef | None = None


@dataclass
class UnionAttributes:
    """Prefixes of a tagged-union declaration."""

    registry: PrefixRegistry = field(default_factory=PrefixRegistry)


def prefix_binding(entry: PrefixEntry) -> tuple[Prefix, URIRef]:
    """
    Validate one `prefix("p" = "iri")` entry.

    The namespace must be an absolute IRI on its own; it is never
    expanded against other prefixes.
    """
    namespace = resolve(entry.namespace, PrefixRegistry())
    try:
        prefix = Prefix(entry.prefix.value)
    except InvalidPrefixError as e:
        raise make_resolution_error(
            InvalidPrefixError,
            f"Invalid prefix '{entry.prefix.value}': {e.message}",
            entry.prefix.location,
        ) from e
    return prefix, namespace


def registry_from_entries(entries: Iterable[PrefixEntry]) -> PrefixRegistry:
    """Fold prefix entries into a registry, later bindings winning."""
    return PrefixRegistry.from_bindings(prefix_binding(entry) for entry in entries)


def record_attributes(entries: Iterable[RecordAnnotation]) -> RecordAttributes:
    """
    Build record attributes from parsed record annotations.

    Prefixes are collected first, so a type literal may use prefixes bound
    anywhere on the same declaration.

    Raises:
        MultipleTypesError: If more than one type entry is present
        InvalidPrefixError: If a prefix literal is invalid
        MalformedIdentifierError: If an IRI literal is invalid
    """
    prefix_entries: list[PrefixEntry] = []
    type_entries: list[TypeEntry] = []
    for entry in entries:
        match entry:
            case PrefixEntry():
                prefix_entries.append(entry)
            case TypeEntry():
                type_entries.append(entry)

    registry = registry_from_entries(prefix_entries)

    if len(type_entries) > 1:
        second = type_entries[1]
        raise make_resolution_error(
            MultipleTypesError,
            "A record can declare at most one type",
            second.identifier.location,
        )

    type_iri = resolve(type_entries[0].identifier, registry) if type_entries else None
    return RecordAttributes(registry=registry, type_iri=type_iri)


def union_attributes(entries: Iterable[RecordAnnotation]) -> UnionAttributes:
    """
    Build tagged-union attributes from parsed annotations.

    The union grammar never produces type entries; one passed in here is
    rejected all the same.

    Raises:
        DisallowedUnionTypeError: If a type entry is present
    """
    prefix_entries: list[PrefixEntry] = []
    for entry in entries:
        match entry:
            case PrefixEntry():
                prefix_entries.append(entry)
            case TypeEntry():
                raise make_resolution_error(
                    DisallowedUnionTypeError,
                    "A tagged union cannot declare a type",
                    entry.location,
                )
    return UnionAttributes(registry=registry_from_entries(prefix_entries))
