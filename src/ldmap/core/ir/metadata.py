"""
Resolved metadata tree for ldmap IR.

This is what generators consume: one TypeNode per declaration, owning its
ordered field or case nodes. The tree is built once and never mutated.

Examples:
    - RecordNode(name="Person", type_iri=URIRef("http://example.org/Person"), fields=(...))
    - CaseNode(name="Email", predicate_path=DirectPath(predicate=...), payload_type="String")
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from rdflib import URIRef


class DirectPath(BaseModel):
    """
    Subject linked to object by one edge.

        :s <predicate> :o .
    """

    kind: Literal["direct"] = "direct"
    predicate: URIRef

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class ChainedPath(BaseModel):
    """
    Subject linked to object through an anonymous intermediate node.

        :s <to_blank> _:b .
        _:b <from_blank> :o .
    """

    kind: Literal["chained"] = "chained"
    to_blank: URIRef
    from_blank: URIRef

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


PredicatePath = Annotated[Union[DirectPath, ChainedPath], Field(discriminator="kind")]


class FieldAttributes(BaseModel):
    """
    Resolved annotations of one field.

    The flags are independent; generators decide precedence between them.
    """

    ignore: bool = False
    flatten: bool = False
    is_identifier_field: bool = False
    is_graph_field: bool = False
    predicate: URIRef | None = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class FieldNode(BaseModel):
    """A record field with its resolved attributes."""

    name: str | None
    type_name: str
    attributes: FieldAttributes

    model_config = ConfigDict(frozen=True)

    @property
    def ignore(self) -> bool:
        return self.attributes.ignore

    @property
    def flatten(self) -> bool:
        return self.attributes.flatten

    @property
    def is_identifier_field(self) -> bool:
        return self.attributes.is_identifier_field

    @property
    def is_graph_field(self) -> bool:
        return self.attributes.is_graph_field

    @property
    def predicate(self) -> URIRef | None:
        return self.attributes.predicate


class CaseNode(BaseModel):
    """A tagged-union case with its predicate path and payload type."""

    name: str
    predicate_path: PredicatePath
    payload_type: str

    model_config = ConfigDict(frozen=True)


class RecordNode(BaseModel):
    """Metadata for a record declaration. Fields keep declaration order."""

    kind: Literal["record"] = "record"
    name: str
    type_iri: URIRef | None = None
    fields: tuple[FieldNode, ...] = ()

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class TaggedUnionNode(BaseModel):
    """Metadata for a tagged-union declaration. Cases keep declaration order."""

    kind: Literal["tagged_union"] = "tagged_union"
    name: str
    cases: tuple[CaseNode, ...] = ()

    model_config = ConfigDict(frozen=True)


TypeNode = Annotated[Union[RecordNode, TaggedUnionNode], Field(discriminator="kind")]
