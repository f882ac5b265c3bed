"""
Tagged-union case attributes.

A case can be annotated in two places: on its single payload field (the
inner site) and on the case itself (the outer site).

    inner    outer    path
    -        -        error: missing IRI
    -        o        Direct(o)
    i        -        Direct(i)
    i        o        Chained(to_blank=i, from_blank=o)
"""

from __future__ import annotations

from collections.abc import Sequence

from rdflib import URIRef

from ..errors import MissingIriAttributeError, MultipleIrisError, make_resolution_error
from ..identifiers import resolve
from ..ir.annotations import CaseAnnotation
from ..ir.location import SourceLocation
from ..ir.metadata import ChainedPath, DirectPath
from ..prefix_registry import PrefixRegistry


def site_iri(entries: Sequence[CaseAnnotation], registry: PrefixRegistry) -> URIRef | None:
    """
    Resolve the IRI of one annotation site.

    Raises:
        MultipleIrisError: If the site carries more than one IRI literal
    """
    if len(entries) > 1:
        raise make_resolution_error(
            MultipleIrisError,
            "A case annotation site can declare at most one IRI",
            entries[1].location,
        )
    if not entries:
        return None
    return resolve(entries[0].identifier, registry)


def predicate_path(
    inner: Sequence[CaseAnnotation],
    outer: Sequence[CaseAnnotation],
    registry: PrefixRegistry,
    location: SourceLocation,
) -> DirectPath | ChainedPath:
    """
    Resolve the predicate path of a case from its two annotation sites.

    Args:
        inner: Parsed annotations on the payload field
        outer: Parsed annotations on the case
        registry: Prefixes of the enclosing union
        location: Location of the case, reported when both sites are empty

    Raises:
        MissingIriAttributeError: If neither site carries an IRI
        MultipleIrisError: If a site carries more than one IRI
    """
    inner_iri = site_iri(inner, registry)
    outer_iri = site_iri(outer, registry)

    match (inner_iri, outer_iri):
        case (None, None):
            raise make_resolution_error(
                MissingIriAttributeError,
                "A case needs an IRI on the case or on its payload field",
                location,
            )
        case (None, URIRef() as outer_only):
            return DirectPath(predicate=outer_only)
        case (URIRef() as inner_only, None):
            return DirectPath(predicate=inner_only)
        case (URIRef() as to_blank, URIRef() as from_blank):
            return ChainedPath(to_blank=to_blank, from_blank=from_blank)
    raise AssertionError("unreachable")
