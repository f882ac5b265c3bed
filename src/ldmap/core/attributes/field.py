"""Field-level attributes."""

from __future__ import annotations

from collections.abc import Iterable

from ..errors import MultipleIrisError, make_resolution_error
from ..identifiers import resolve
from ..ir.annotations import FieldAnnotation, FieldFlag, FlagEntry, IriEntry
from ..ir.metadata import FieldAttributes
from ..prefix_registry import PrefixRegistry


def field_attributes(
    entries: Iterable[FieldAnnotation], registry: PrefixRegistry
) -> FieldAttributes:
    """
    Fold parsed field annotations into FieldAttributes.

    Repeated flags are harmless. A second IRI literal is an error.

    Args:
        entries: Parsed field annotations in source order
        registry: Prefixes of the enclosing declaration

    Raises:
        MultipleIrisError: If more than one IRI literal is present
        MalformedIdentifierError: If the IRI literal is invalid
    """
    values: dict[str, object] = {}
    for entry in entries:
        match entry:
            case FlagEntry(flag=FieldFlag.IGNORE):
                values["ignore"] = True
            case FlagEntry(flag=FieldFlag.FLATTEN):
                values["flatten"] = True
            case FlagEntry(flag=FieldFlag.ID):
                values["is_identifier_field"] = True
            case FlagEntry(flag=FieldFlag.GRAPH):
                values["is_graph_field"] = True
            case IriEntry():
                if "predicate" in values:
                    raise make_resolution_error(
                        MultipleIrisError,
                        "A field can declare at most one IRI",
                        entry.location,
                    )
                values["predicate"] = resolve(entry.identifier, registry)
    return FieldAttributes(**values)
