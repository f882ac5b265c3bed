"""Shared pytest fixtures for ldmap tests."""

from collections.abc import Callable

import pytest
from rdflib import URIRef

from ldmap.core import ir
from ldmap.core.prefix_registry import Prefix, PrefixRegistry

EX = "http://example.org/"


def at(line: int = 1, column: int = 1, file: str = "model.rs") -> ir.SourceLocation:
    """Shorthand for a SourceLocation."""
    return ir.SourceLocation(file=file, line=line, column=column)


@pytest.fixture
def origin() -> ir.SourceLocation:
    """Location where test annotation text starts."""
    return at(3, 7)


@pytest.fixture
def block() -> Callable[..., ir.AnnotationBlock]:
    """Factory for annotation blocks: block('type = "..."', line=2)."""

    def make(
        content: str,
        line: int = 1,
        column: int = 6,
        path: str = "ld",
        site: ir.CaseSite | None = None,
    ) -> ir.AnnotationBlock:
        return ir.AnnotationBlock(content=content, location=at(line, column), path=path, site=site)

    return make


@pytest.fixture
def ex_registry() -> PrefixRegistry:
    """Registry binding ex -> http://example.org/."""
    return PrefixRegistry([(Prefix("ex"), URIRef(EX))])


@pytest.fixture
def person_record(block) -> ir.Declaration:
    """Record with a prefix, a compact type, and one compact predicate."""
    return ir.Declaration(
        name="Person",
        kind=ir.DeclarationKind.RECORD,
        location=at(1, 1),
        annotations=[
            block(f'prefix("ex" = "{EX}")', line=1),
            block('type = "ex:Person"', line=2),
        ],
        fields=[
            ir.FieldDecl(
                name="name",
                type_name="String",
                location=at(4, 5),
                annotations=[block('"ex:name"', line=4)],
            ),
        ],
    )


@pytest.fixture
def contact_union(block) -> ir.Declaration:
    """Tagged union with one direct and one chained case."""
    return ir.Declaration(
        name="Contact",
        kind=ir.DeclarationKind.TAGGED_UNION,
        location=at(10, 1),
        annotations=[block(f'prefix("ex" = "{EX}")', line=10)],
        cases=[
            ir.CaseDecl(
                name="Email",
                location=at(12, 5),
                annotations=[block('"ex:email"', line=12)],
                fields=[ir.FieldDecl(type_name="String", location=at(13, 11))],
            ),
            ir.CaseDecl(
                name="Postal",
                location=at(14, 5),
                annotations=[block('"ex:postal"', line=14)],
                fields=[
                    ir.FieldDecl(
                        type_name="Address",
                        location=at(15, 12),
                        annotations=[block('"ex:address"', line=15)],
                    )
                ],
            ),
        ],
    )
