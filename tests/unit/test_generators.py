"""Tests for generator dispatch, the registry, and the summary generator."""

import pytest
from rdflib import URIRef

from ldmap.core.builder import build_metadata
from ldmap.core.errors import GeneratorError
from ldmap.core.ir import FieldAttributes, FieldNode, RecordNode
from ldmap.core.manifest import BuildConfig
from ldmap.generators import Generator, GeneratorRegistry, generate, get_generator, get_registry
from ldmap.generators.summary import SummaryGenerator


class RecordingGenerator(Generator):
    """Generator that records every call it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []

    def emit_type(self, node) -> None:
        self.calls.append(("type", node.name))

    def emit_record(self, record) -> None:
        self.calls.append(("record", record.name))

    def emit_enum_case(self, union, case) -> None:
        self.calls.append(("case", union.name, case.name))

    def emit_field(self, record, field) -> None:
        self.calls.append(("field", record.name, field.name))

    def finish(self) -> list[tuple[str, ...]]:
        return self.calls


class TestGenerate:
    """Tests for walking a tree into a generator."""

    def test_record_dispatch_order(self, person_record) -> None:
        calls = generate(build_metadata(person_record), RecordingGenerator())
        assert calls == [
            ("type", "Person"),
            ("record", "Person"),
            ("field", "Person", "name"),
        ]

    def test_union_dispatch_order(self, contact_union) -> None:
        calls = generate(build_metadata(contact_union), RecordingGenerator())
        assert calls == [
            ("type", "Contact"),
            ("case", "Contact", "Email"),
            ("case", "Contact", "Postal"),
        ]

    def test_default_finish_returns_none(self, person_record) -> None:
        class Silent(RecordingGenerator):
            def finish(self):
                return super(RecordingGenerator, self).finish()

        assert generate(build_metadata(person_record), Silent()) is None


class TestSummaryGenerator:
    """Tests for the plain-text summary."""

    def test_record(self, person_record) -> None:
        output = generate(build_metadata(person_record), SummaryGenerator())
        assert output == (
            "Person a <http://example.org/Person>\n"
            "  name: String -> <http://example.org/name>"
        )

    def test_union(self, contact_union) -> None:
        output = generate(build_metadata(contact_union), SummaryGenerator())
        assert output == (
            "Contact (tagged union)\n"
            "  Email(String) -> <http://example.org/email>\n"
            "  Postal(Address) -> <http://example.org/address> / [] / <http://example.org/postal>"
        )

    def test_positional_fields_and_flags(self) -> None:
        record = RecordNode(
            name="Pair",
            fields=(
                FieldNode(
                    name=None,
                    type_name="Uri",
                    attributes=FieldAttributes(is_identifier_field=True),
                ),
                FieldNode(
                    name=None,
                    type_name="Graph",
                    attributes=FieldAttributes(
                        ignore=True,
                        is_graph_field=True,
                        predicate=URIRef("http://example.org/g"),
                    ),
                ),
            ),
        )
        output = generate(record, SummaryGenerator())
        assert output.splitlines() == [
            "Pair",
            "  0: Uri [id]",
            "  1: Graph -> <http://example.org/g> [ignore, graph]",
        ]

    def test_several_trees_share_one_generator(self, person_record, contact_union) -> None:
        generator = SummaryGenerator()
        generate(build_metadata(person_record), generator)
        output = generate(build_metadata(contact_union), generator)
        assert "\n\nContact (tagged union)\n" in output


class TestGeneratorRegistry:
    """Tests for GeneratorRegistry."""

    def test_register_and_get(self) -> None:
        registry = GeneratorRegistry()
        registry.register("recording", RecordingGenerator)
        assert registry.list_generators() == ["recording"]
        first = registry.get("recording")
        assert isinstance(first, RecordingGenerator)
        assert registry.get("recording") is not first

    def test_duplicate_name(self) -> None:
        registry = GeneratorRegistry()
        registry.register("recording", RecordingGenerator)
        with pytest.raises(GeneratorError, match="already registered"):
            registry.register("recording", SummaryGenerator)

    def test_not_a_generator(self) -> None:
        registry = GeneratorRegistry()
        with pytest.raises(GeneratorError, match="must extend Generator"):
            registry.register("bogus", dict)

    def test_unknown_name(self) -> None:
        registry = GeneratorRegistry()
        registry.register_builtins()
        with pytest.raises(GeneratorError, match=r"not found. Available generators: \['summary'\]"):
            registry.get("turtle")

    def test_global_registry_has_builtins(self) -> None:
        assert "summary" in get_registry().list_generators()
        assert isinstance(get_registry().get("summary"), SummaryGenerator)

    def test_configured_default_generator(self) -> None:
        generator = get_generator(config=BuildConfig(default_generator="summary"))
        assert isinstance(generator, SummaryGenerator)

    def test_explicit_name_beats_default(self) -> None:
        with pytest.raises(GeneratorError, match="'turtle' not found"):
            get_generator("turtle", BuildConfig(default_generator="summary"))

    def test_no_name_and_no_default(self) -> None:
        with pytest.raises(GeneratorError, match="no default_generator configured"):
            get_generator()
