"""
Host declaration input for ldmap.

The host front end describes each type declaration it wants mapped:
its name and shape, its ordered fields or cases, and the raw annotation
blocks attached to every part. Annotation text is kept unparsed here.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .location import SourceLocation

DEFAULT_ATTRIBUTE_PATH = "ld"


class DeclarationKind(str, Enum):
    """Shapes of type declarations a host can hand over."""

    RECORD = "record"
    TAGGED_UNION = "tagged_union"
    UNTAGGED_UNION = "untagged_union"  # recognized, never supported


class CaseSite(str, Enum):
    """Annotation sites on a tagged-union case."""

    INNER = "inner"  # on the case's payload field
    OUTER = "outer"  # on the case itself


class AnnotationBlock(BaseModel):
    """
    One raw annotation block as written in the host source.

    Attributes:
        content: Un-parsed text between the block's delimiters
        location: Location of the first character of `content`
        path: Attribute path the block was written under (e.g. "ld")
        site: For blocks on a case, which site they belong to
    """

    content: str
    location: SourceLocation
    path: str = DEFAULT_ATTRIBUTE_PATH
    site: CaseSite | None = None

    model_config = ConfigDict(frozen=True)


class FieldDecl(BaseModel):
    """
    A declared field of a record, or the payload field of a union case.

    Attributes:
        name: Field name (None for positional fields)
        type_name: Host type of the field, passed through to generators
        annotations: Annotation blocks attached to the field
        location: Location of the field declaration
    """

    name: str | None = None
    type_name: str
    annotations: list[AnnotationBlock] = Field(default_factory=list)
    location: SourceLocation

    model_config = ConfigDict(frozen=True)


class CaseDecl(BaseModel):
    """
    A declared case of a tagged union.

    Blocks in `annotations` belong to the outer site unless marked
    `CaseSite.INNER`; blocks on the payload field belong to the inner site.
    """

    name: str
    fields: list[FieldDecl] = Field(default_factory=list)
    annotations: list[AnnotationBlock] = Field(default_factory=list)
    location: SourceLocation

    model_config = ConfigDict(frozen=True)

    def blocks_at(self, site: CaseSite) -> list[AnnotationBlock]:
        """Return the annotation blocks attached at one site of this case."""
        if site == CaseSite.INNER:
            inner = [b for b in self.annotations if b.site == CaseSite.INNER]
            if self.fields:
                inner.extend(self.fields[0].annotations)
            return inner
        return [b for b in self.annotations if b.site != CaseSite.INNER]


class Declaration(BaseModel):
    """
    A complete type declaration as handed over by the host.

    Records carry `fields`, tagged unions carry `cases`. Untagged unions
    may carry either; they are rejected during the build.
    """

    name: str
    kind: DeclarationKind
    annotations: list[AnnotationBlock] = Field(default_factory=list)
    fields: list[FieldDecl] = Field(default_factory=list)
    cases: list[CaseDecl] = Field(default_factory=list)
    location: SourceLocation

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_shape(self) -> Declaration:
        """Ensure records have no cases and tagged unions have no fields."""
        if self.kind == DeclarationKind.RECORD and self.cases:
            raise ValueError(f"Record '{self.name}' cannot declare cases")
        if self.kind == DeclarationKind.TAGGED_UNION and self.fields:
            raise ValueError(f"Tagged union '{self.name}' cannot declare fields")
        return self
