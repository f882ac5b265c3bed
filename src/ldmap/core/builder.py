"""
Metadata tree builder.

Drives parsing and attribute resolution for one declaration at a time and
assembles the resulting metadata tree. Any error aborts the declaration
being built; other declarations are unaffected.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .annotation_parser import parse_annotations
from .attributes import field_attributes, predicate_path, record_attributes, union_attributes
from .errors import (
    LdmapError,
    StructVariantError,
    UnionTypeError,
    UnitVariantError,
    make_resolution_error,
)
from .ir.annotations import AnnotationContext
from .ir.declarations import AnnotationBlock, CaseDecl, CaseSite, Declaration, DeclarationKind, FieldDecl
from .ir.metadata import CaseNode, FieldNode, RecordNode, TaggedUnionNode, TypeNode
from .manifest import BuildConfig
from .prefix_registry import PrefixRegistry

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of building one declaration in a batch."""

    name: str
    node: TypeNode | None = None
    error: LdmapError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MetadataBuilder:
    """
    Builds metadata trees from host declarations.

    The builder holds configuration only; every build gets its own prefix
    registry.
    """

    def __init__(self, config: BuildConfig | None = None):
        self.config = config or BuildConfig()

    def build(self, declaration: Declaration) -> TypeNode:
        """
        Build the metadata tree for one declaration.

        Performs:
        1. Declaration attributes (prefix registry, type IRI for records)
        2. Field attributes for each record field, in order
        3. Structure checks and predicate paths for each union case, in order

        Args:
            declaration: Declaration handed over by the host

        Returns:
            RecordNode or TaggedUnionNode

        Raises:
            LdmapError: On the first invalid annotation or unsupported shape,
                with the declaration name attached to its context
        """
        logger.debug("Building metadata for %s '%s'", declaration.kind.value, declaration.name)
        try:
            match declaration.kind:
                case DeclarationKind.RECORD:
                    return self._build_record(declaration)
                case DeclarationKind.TAGGED_UNION:
                    return self._build_tagged_union(declaration)
                case DeclarationKind.UNTAGGED_UNION:
                    raise make_resolution_error(
                        UnionTypeError,
                        "Untagged unions are not supported",
                        declaration.location,
                    )
        except LdmapError as error:
            raise error.in_declaration(declaration.name)
        raise AssertionError(f"Unhandled declaration kind: {declaration.kind}")

    def build_all(self, declarations: Iterable[Declaration]) -> list[BuildResult]:
        """
        Build several independent declarations.

        A failing declaration is reported in its result and does not stop
        the others.
        """
        results: list[BuildResult] = []
        for declaration in declarations:
            try:
                results.append(BuildResult(declaration.name, node=self.build(declaration)))
            except LdmapError as error:
                logger.debug("Declaration '%s' failed: %s", declaration.name, error.kind)
                results.append(BuildResult(declaration.name, error=error))
        return results

    def _parse(self, blocks: Iterable[AnnotationBlock], context: AnnotationContext) -> list:
        return parse_annotations(blocks, context, self.config.attribute_path)

    # =========================================================================
    # Records
    # =========================================================================

    def _build_record(self, declaration: Declaration) -> RecordNode:
        attributes = record_attributes(self._parse(declaration.annotations, AnnotationContext.RECORD))
        fields = tuple(self._build_field(f, attributes.registry) for f in declaration.fields)
        return RecordNode(name=declaration.name, type_iri=attributes.type_iri, fields=fields)

    def _build_field(self, field: FieldDecl, registry: PrefixRegistry) -> FieldNode:
        entries = self._parse(field.annotations, AnnotationContext.FIELD)
        return FieldNode(
            name=field.name,
            type_name=field.type_name,
            attributes=field_attributes(entries, registry),
        )

    # =========================================================================
    # Tagged unions
    # =========================================================================

    def _build_tagged_union(self, declaration: Declaration) -> TaggedUnionNode:
        attributes = union_attributes(self._parse(declaration.annotations, AnnotationContext.UNION))
        cases = tuple(self._build_case(c, attributes.registry) for c in declaration.cases)
        return TaggedUnionNode(name=declaration.name, cases=cases)

    def _build_case(self, case: CaseDecl, registry: PrefixRegistry) -> CaseNode:
        if not case.fields:
            raise make_resolution_error(
                UnitVariantError,
                f"Case '{case.name}' must carry exactly one payload field, found none",
                case.location,
            )
        if len(case.fields) > 1:
            raise make_resolution_error(
                StructVariantError,
                f"Case '{case.name}' must carry exactly one payload field, found {len(case.fields)}",
                case.fields[1].location,
            )

        inner = self._parse(case.blocks_at(CaseSite.INNER), AnnotationContext.CASE)
        outer = self._parse(case.blocks_at(CaseSite.OUTER), AnnotationContext.CASE)
        return CaseNode(
            name=case.name,
            predicate_path=predicate_path(inner, outer, registry, case.location),
            payload_type=case.fields[0].type_name,
        )


def build_metadata(
    declaration: Declaration, config: BuildConfig | None = None
) -> TypeNode:
    """
    Convenience function to build one declaration's metadata tree.

    Args:
        declaration: Declaration handed over by the host
        config: Optional build configuration

    Returns:
        RecordNode or TaggedUnionNode
    """
    return MetadataBuilder(config).build(declaration)
