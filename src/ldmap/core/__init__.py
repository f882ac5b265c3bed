"""Core ldmap functionality: IR, annotation parser, prefix registry, identifier resolution, attribute builders, metadata builder."""

from . import ir
from .annotation_parser import parse_annotation, parse_annotations
from .builder import BuildResult, MetadataBuilder, build_metadata
from .errors import (
    ConfigError,
    DisallowedUnionTypeError,
    ErrorContext,
    GeneratorError,
    InvalidPrefixError,
    LdmapError,
    MalformedAttributeError,
    MalformedIdentifierError,
    MissingIriAttributeError,
    MultipleIrisError,
    MultipleTypesError,
    ParseError,
    ResolutionError,
    StructureError,
    StructVariantError,
    UnionTypeError,
    UnitVariantError,
)
from .identifiers import expand, is_absolute_iri, resolve
from .manifest import BuildConfig, find_config, load_config
from .prefix_registry import Prefix, PrefixRegistry

__all__ = [
    "ir",
    # Errors
    "LdmapError",
    "ErrorContext",
    "ParseError",
    "MalformedAttributeError",
    "ResolutionError",
    "MalformedIdentifierError",
    "InvalidPrefixError",
    "MultipleTypesError",
    "MultipleIrisError",
    "MissingIriAttributeError",
    "DisallowedUnionTypeError",
    "StructureError",
    "UnitVariantError",
    "StructVariantError",
    "UnionTypeError",
    "GeneratorError",
    "ConfigError",
    # Parsing and resolution
    "parse_annotation",
    "parse_annotations",
    "Prefix",
    "PrefixRegistry",
    "is_absolute_iri",
    "expand",
    "resolve",
    # Building
    "BuildConfig",
    "load_config",
    "find_config",
    "MetadataBuilder",
    "BuildResult",
    "build_metadata",
]
