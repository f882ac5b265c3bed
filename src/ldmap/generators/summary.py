"""
Plain-text summary generator.

Renders a metadata tree as a short human-readable listing, one line per
node. Useful for debugging annotations:

    Person a <http://example.org/Person>
      name: String -> <http://example.org/name>
      id: Uri [id]

    Contact (tagged union)
      Email(String) -> <http://example.org/email>
      Postal(Address) -> <http://example.org/address> / [] / <http://example.org/postal>
"""

from __future__ import annotations

from typing import assert_never

from ..core.ir.metadata import (
    CaseNode,
    ChainedPath,
    DirectPath,
    FieldNode,
    RecordNode,
    TaggedUnionNode,
    TypeNode,
)
from . import Generator

_FLAG_LABELS = (
    ("ignore", "ignore"),
    ("flatten", "flatten"),
    ("is_identifier_field", "id"),
    ("is_graph_field", "graph"),
)


class SummaryGenerator(Generator):
    def __init__(self) -> None:
        self.lines: list[str] = []
        self._position = 0

    def emit_type(self, node: TypeNode) -> None:
        if self.lines:
            self.lines.append("")
        if isinstance(node, TaggedUnionNode):
            self.lines.append(f"{node.name} (tagged union)")

    def emit_record(self, record: RecordNode) -> None:
        self._position = 0
        if record.type_iri is None:
            self.lines.append(record.name)
        else:
            self.lines.append(f"{record.name} a <{record.type_iri}>")

    def emit_enum_case(self, union: TaggedUnionNode, case: CaseNode) -> None:
        path = case.predicate_path
        match path:
            case DirectPath():
                rendered = f"<{path.predicate}>"
            case ChainedPath():
                rendered = f"<{path.to_blank}> / [] / <{path.from_blank}>"
            case _:
                assert_never(path)
        self.lines.append(f"  {case.name}({case.payload_type}) -> {rendered}")

    def emit_field(self, record: RecordNode, field: FieldNode) -> None:
        label = field.name if field.name is not None else str(self._position)
        self._position += 1
        line = f"  {label}: {field.type_name}"
        if field.predicate is not None:
            line += f" -> <{field.predicate}>"
        flags = [text for attr, text in _FLAG_LABELS if getattr(field, attr)]
        if flags:
            line += f" [{', '.join(flags)}]"
        self.lines.append(line)

    def finish(self) -> str:
        return "\n".join(self.lines)
