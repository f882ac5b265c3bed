"""
Parsed annotation entries for ldmap IR.

Each annotation context accepts a closed set of entry shapes:

    record declaration:  type = "..." | prefix("..." = "...")
    union declaration:   prefix("..." = "...")
    union case:          "..."
    field:               ignore | flatten | id | graph | "..."

Entries are purely syntactic. String literals keep their raw text and
location; identifier expansion and multiplicity checks happen later.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .location import SourceLocation, Spanned


class AnnotationContext(str, Enum):
    """Where an annotation block is attached."""

    RECORD = "record"
    UNION = "union"
    CASE = "case"
    FIELD = "field"


class FieldFlag(str, Enum):
    """Bare keyword flags accepted on fields."""

    IGNORE = "ignore"
    FLATTEN = "flatten"
    ID = "id"
    GRAPH = "graph"


class TypeEntry(BaseModel):
    """
    A `type = "..."` entry on a record declaration.

    Examples:
        - type = "http://example.org/Person"
        - type = "ex:Person"
    """

    kind: Literal["type"] = "type"
    identifier: Spanned[str]
    location: SourceLocation

    model_config = ConfigDict(frozen=True)


class PrefixEntry(BaseModel):
    """
    A `prefix("..." = "...")` entry binding a prefix to a namespace IRI.

    Examples:
        - prefix("ex" = "http://example.org/")
    """

    kind: Literal["prefix"] = "prefix"
    prefix: Spanned[str]
    namespace: Spanned[str]
    location: SourceLocation

    model_config = ConfigDict(frozen=True)


class IriEntry(BaseModel):
    """A bare string literal naming an IRI (predicate on fields and cases)."""

    kind: Literal["iri"] = "iri"
    identifier: Spanned[str]

    model_config = ConfigDict(frozen=True)

    @property
    def location(self) -> SourceLocation:
        return self.identifier.location


class FlagEntry(BaseModel):
    """A bare keyword flag on a field."""

    kind: Literal["flag"] = "flag"
    flag: FieldFlag
    location: SourceLocation

    model_config = ConfigDict(frozen=True)


RecordAnnotation = Annotated[Union[TypeEntry, PrefixEntry], Field(discriminator="kind")]
UnionAnnotation = PrefixEntry
CaseAnnotation = IriEntry
FieldAnnotation = Annotated[Union[FlagEntry, IriEntry], Field(discriminator="kind")]
