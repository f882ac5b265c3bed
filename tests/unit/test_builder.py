"""Tests for the metadata tree builder."""

import pytest
from pydantic import TypeAdapter, ValidationError
from rdflib import URIRef

from ldmap.core import ir
from ldmap.core.builder import MetadataBuilder, build_metadata
from ldmap.core.errors import (
    MalformedAttributeError,
    MissingIriAttributeError,
    MultipleTypesError,
    StructVariantError,
    UnionTypeError,
    UnitVariantError,
)
from ldmap.core.manifest import BuildConfig

EX = "http://example.org/"


def loc(line: int, column: int = 1) -> ir.SourceLocation:
    return ir.SourceLocation(file="model.rs", line=line, column=column)


class TestRecords:
    """Tests for building record trees."""

    def test_person_record(self, person_record) -> None:
        node = build_metadata(person_record)
        assert isinstance(node, ir.RecordNode)
        assert node.name == "Person"
        assert node.type_iri == URIRef(f"{EX}Person")

        (field,) = node.fields
        assert field.name == "name"
        assert field.type_name == "String"
        assert field.predicate == URIRef(f"{EX}name")
        assert not field.ignore
        assert not field.flatten
        assert not field.is_identifier_field
        assert not field.is_graph_field

    def test_fields_keep_declaration_order(self, block) -> None:
        declaration = ir.Declaration(
            name="Point",
            kind=ir.DeclarationKind.RECORD,
            location=loc(1),
            fields=[
                ir.FieldDecl(type_name="f64", location=loc(2), annotations=[block("id", line=2)]),
                ir.FieldDecl(type_name="f64", location=loc(3)),
                ir.FieldDecl(type_name="f64", location=loc(4), annotations=[block("ignore", line=4)]),
            ],
        )
        node = build_metadata(declaration)
        assert [f.is_identifier_field for f in node.fields] == [True, False, False]
        assert [f.ignore for f in node.fields] == [False, False, True]
        assert all(f.name is None for f in node.fields)

    def test_record_without_annotations(self) -> None:
        declaration = ir.Declaration(name="Empty", kind=ir.DeclarationKind.RECORD, location=loc(1))
        assert build_metadata(declaration) == ir.RecordNode(name="Empty")

    def test_field_error_aborts_record(self, block) -> None:
        declaration = ir.Declaration(
            name="Broken",
            kind=ir.DeclarationKind.RECORD,
            location=loc(1),
            fields=[
                ir.FieldDecl(name="ok", type_name="u8", location=loc(2)),
                ir.FieldDecl(
                    name="bad",
                    type_name="u8",
                    location=loc(3),
                    annotations=[block("skip", line=3)],
                ),
            ],
        )
        with pytest.raises(MalformedAttributeError) as exc_info:
            build_metadata(declaration)
        assert exc_info.value.location.line == 3

    def test_build_is_repeatable(self, person_record) -> None:
        builder = MetadataBuilder()
        assert builder.build(person_record) == builder.build(person_record)

    def test_trees_validate_as_type_nodes(self, person_record, contact_union) -> None:
        """Built trees survive a dump and reload through the TypeNode union."""
        adapter = TypeAdapter(ir.TypeNode)
        for declaration in (person_record, contact_union):
            node = build_metadata(declaration)
            assert adapter.validate_python(node.model_dump()) == node


class TestTaggedUnions:
    """Tests for building tagged-union trees."""

    def test_contact_union(self, contact_union) -> None:
        node = build_metadata(contact_union)
        assert isinstance(node, ir.TaggedUnionNode)
        assert [c.name for c in node.cases] == ["Email", "Postal"]

        email, postal = node.cases
        assert email.payload_type == "String"
        assert email.predicate_path == ir.DirectPath(predicate=URIRef(f"{EX}email"))
        assert postal.payload_type == "Address"
        assert postal.predicate_path == ir.ChainedPath(
            to_blank=URIRef(f"{EX}address"),
            from_blank=URIRef(f"{EX}postal"),
        )

    def test_inner_marked_case_block(self, block) -> None:
        """Blocks marked as inner on the case count toward the payload site."""
        declaration = ir.Declaration(
            name="Value",
            kind=ir.DeclarationKind.TAGGED_UNION,
            location=loc(1),
            cases=[
                ir.CaseDecl(
                    name="Text",
                    location=loc(2),
                    annotations=[block(f'"{EX}text"', line=2, site=ir.CaseSite.INNER)],
                    fields=[ir.FieldDecl(type_name="String", location=loc(2, 10))],
                )
            ],
        )
        (case,) = build_metadata(declaration).cases
        assert case.predicate_path == ir.DirectPath(predicate=URIRef(f"{EX}text"))

    def test_unit_case(self, block) -> None:
        declaration = ir.Declaration(
            name="Status",
            kind=ir.DeclarationKind.TAGGED_UNION,
            location=loc(1),
            cases=[ir.CaseDecl(name="Unknown", location=loc(5, 3), annotations=[block(f'"{EX}u"')])],
        )
        with pytest.raises(UnitVariantError) as exc_info:
            build_metadata(declaration)
        assert exc_info.value.location == loc(5, 3)

    def test_struct_case(self) -> None:
        declaration = ir.Declaration(
            name="Shape",
            kind=ir.DeclarationKind.TAGGED_UNION,
            location=loc(1),
            cases=[
                ir.CaseDecl(
                    name="Rect",
                    location=loc(2),
                    fields=[
                        ir.FieldDecl(name="w", type_name="u32", location=loc(3)),
                        ir.FieldDecl(name="h", type_name="u32", location=loc(4)),
                    ],
                )
            ],
        )
        with pytest.raises(StructVariantError) as exc_info:
            build_metadata(declaration)
        assert exc_info.value.location == loc(4)

    def test_case_without_iri(self) -> None:
        declaration = ir.Declaration(
            name="Bare",
            kind=ir.DeclarationKind.TAGGED_UNION,
            location=loc(1),
            cases=[
                ir.CaseDecl(
                    name="Only",
                    location=loc(2, 5),
                    fields=[ir.FieldDecl(type_name="u8", location=loc(2, 10))],
                )
            ],
        )
        with pytest.raises(MissingIriAttributeError) as exc_info:
            build_metadata(declaration)
        assert exc_info.value.location == loc(2, 5)

    def test_union_without_cases(self) -> None:
        declaration = ir.Declaration(name="Never", kind=ir.DeclarationKind.TAGGED_UNION, location=loc(1))
        assert build_metadata(declaration) == ir.TaggedUnionNode(name="Never")


class TestUnsupportedShapes:
    """Tests for declarations that are rejected outright."""

    def test_untagged_union(self, block) -> None:
        declaration = ir.Declaration(
            name="Raw",
            kind=ir.DeclarationKind.UNTAGGED_UNION,
            location=loc(7),
            annotations=[block('type = "not even parsed"')],
        )
        with pytest.raises(UnionTypeError) as exc_info:
            build_metadata(declaration)
        assert exc_info.value.location == loc(7)

    def test_record_with_cases_rejected_by_model(self) -> None:
        with pytest.raises(ValidationError, match="cannot declare cases"):
            ir.Declaration(
                name="Odd",
                kind=ir.DeclarationKind.RECORD,
                location=loc(1),
                cases=[ir.CaseDecl(name="A", location=loc(2))],
            )

    def test_union_with_fields_rejected_by_model(self) -> None:
        with pytest.raises(ValidationError, match="cannot declare fields"):
            ir.Declaration(
                name="Odd",
                kind=ir.DeclarationKind.TAGGED_UNION,
                location=loc(1),
                fields=[ir.FieldDecl(type_name="u8", location=loc(2))],
            )


class TestErrorContext:
    """Tests for how build errors are reported."""

    def test_declaration_name_attached(self, block) -> None:
        declaration = ir.Declaration(
            name="Person",
            kind=ir.DeclarationKind.RECORD,
            location=loc(1),
            annotations=[block(f'type = "{EX}A"', line=1), block(f'type = "{EX}B"', line=2)],
        )
        with pytest.raises(MultipleTypesError) as exc_info:
            build_metadata(declaration)
        error = exc_info.value
        assert error.context.declaration == "Person"
        assert "model.rs:2:13 in declaration Person" in str(error)
        assert error.message == "A record can declare at most one type"


class TestConfiguration:
    """Tests for builder configuration."""

    def test_custom_attribute_path(self, block) -> None:
        declaration = ir.Declaration(
            name="Tagged",
            kind=ir.DeclarationKind.RECORD,
            location=loc(1),
            annotations=[
                block(f'type = "{EX}Ignored"', path="ld"),
                block(f'type = "{EX}Used"', path="rdf"),
            ],
        )
        node = MetadataBuilder(BuildConfig(attribute_path="rdf")).build(declaration)
        assert node.type_iri == URIRef(f"{EX}Used")

    def test_default_path_ignores_other_blocks(self, block) -> None:
        declaration = ir.Declaration(
            name="Tagged",
            kind=ir.DeclarationKind.RECORD,
            location=loc(1),
            annotations=[block("Debug, Clone", path="derive")],
        )
        assert build_metadata(declaration).type_iri is None


class TestBuildAll:
    """Tests for building several declarations at once."""

    def test_failures_are_isolated(self, person_record, contact_union) -> None:
        broken = ir.Declaration(name="Raw", kind=ir.DeclarationKind.UNTAGGED_UNION, location=loc(30))
        results = MetadataBuilder().build_all([person_record, broken, contact_union])

        assert [r.name for r in results] == ["Person", "Raw", "Contact"]
        assert [r.ok for r in results] == [True, False, True]
        assert isinstance(results[1].error, UnionTypeError)
        assert results[1].node is None
        assert results[0].node == build_metadata(person_record)

    def test_registries_do_not_leak(self, person_record, block) -> None:
        """A prefix bound in one declaration is unknown to the next."""
        other = ir.Declaration(
            name="Other",
            kind=ir.DeclarationKind.RECORD,
            location=loc(40),
            annotations=[block('type = "ex:Other"', line=40)],
        )
        _, result = MetadataBuilder().build_all([person_record, other])
        assert result.node.type_iri == URIRef("ex:Other")
