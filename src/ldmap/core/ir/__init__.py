"""
ldmap Intermediate Representation (IR) types.

Types are organized into submodules: source locations, parsed annotation
entries, host declaration input, and the resolved metadata tree.

All types are re-exported from this package.
"""

# Parsed annotation entries
from .annotations import (
    AnnotationContext,
    CaseAnnotation,
    FieldAnnotation,
    FieldFlag,
    FlagEntry,
    IriEntry,
    PrefixEntry,
    RecordAnnotation,
    TypeEntry,
    UnionAnnotation,
)

# Host declarations
from .declarations import (
    DEFAULT_ATTRIBUTE_PATH,
    AnnotationBlock,
    CaseDecl,
    CaseSite,
    Declaration,
    DeclarationKind,
    FieldDecl,
)

# Locations
from .location import SourceLocation, Spanned

# Metadata tree
from .metadata import (
    CaseNode,
    ChainedPath,
    DirectPath,
    FieldAttributes,
    FieldNode,
    PredicatePath,
    RecordNode,
    TaggedUnionNode,
    TypeNode,
)

__all__ = [
    # Locations
    "SourceLocation",
    "Spanned",
    # Annotations
    "AnnotationContext",
    "FieldFlag",
    "TypeEntry",
    "PrefixEntry",
    "IriEntry",
    "FlagEntry",
    "RecordAnnotation",
    "UnionAnnotation",
    "CaseAnnotation",
    "FieldAnnotation",
    # Declarations
    "DEFAULT_ATTRIBUTE_PATH",
    "DeclarationKind",
    "CaseSite",
    "AnnotationBlock",
    "FieldDecl",
    "CaseDecl",
    "Declaration",
    # Metadata
    "DirectPath",
    "ChainedPath",
    "PredicatePath",
    "FieldAttributes",
    "FieldNode",
    "CaseNode",
    "RecordNode",
    "TaggedUnionNode",
    "TypeNode",
]
