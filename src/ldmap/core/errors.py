"""
Error types for ldmap annotation parsing and metadata resolution.

Every error raised while building a metadata tree carries the source
location of the annotation (or declaration) that caused it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from .ir.location import SourceLocation


class LdmapError(Exception):
    """Base exception for all ldmap errors."""

    kind = "Error"

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message

    @property
    def location(self) -> SourceLocation | None:
        """Source location of the offending annotation, if known."""
        return self.context.location if self.context else None

    def in_declaration(self, name: str) -> LdmapError:
        """
        Attach the enclosing declaration name to this error.

        Returns the same error instance so callers can re-raise it.
        """
        if self.context and self.context.declaration is None:
            self.context = replace(self.context, declaration=name)
            self.args = (self._format_message(),)
        return self


class ParseError(LdmapError):
    """
    Raised when annotation text does not match the annotation grammar.

    Examples:
    - Unknown keywords
    - Unterminated string literals
    - `type` without `=`, `prefix` without a parenthesized binding
    """

    kind = "ParseError"


class MalformedAttributeError(ParseError):
    kind = "MalformedAttribute"


class ResolutionError(LdmapError):
    """
    Raised when parsed annotations fail semantic resolution.

    Examples:
    - Identifier literal is not an absolute IRI
    - Prefix literal violates the prefix character rules
    - More than one identifier at a single annotation site
    """

    kind = "ResolutionError"


class MalformedIdentifierError(ResolutionError):
    kind = "MalformedIdentifier"


class InvalidPrefixError(ResolutionError):
    kind = "InvalidPrefix"


class MultipleTypesError(ResolutionError):
    kind = "MultipleTypes"


class MultipleIrisError(ResolutionError):
    kind = "MultipleIris"


class MissingIriAttributeError(ResolutionError):
    kind = "MissingIriAttribute"


class DisallowedUnionTypeError(ResolutionError):
    kind = "DisallowedUnionType"


class StructureError(LdmapError):
    """
    Raised when a declaration's shape cannot be mapped.

    Examples:
    - Union case without a payload field
    - Union case with more than one payload field
    - Untagged union declarations
    """

    kind = "StructureError"


class UnitVariantError(StructureError):
    kind = "UnitVariant"


class StructVariantError(StructureError):
    kind = "StructVariant"


class UnionTypeError(StructureError):
    kind = "UnionType"


class GeneratorError(LdmapError):
    """Raised when a generator cannot be registered or looked up."""

    kind = "GeneratorError"


class ConfigError(LdmapError):
    """Raised when an ldmap configuration file is invalid."""

    kind = "ConfigError"


@dataclass
class ErrorContext:
    """
    Context information for an error.

    Attributes:
        location: Source location of the offending annotation or declaration
        declaration: Optional name of the declaration being built
    """

    location: SourceLocation
    declaration: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "person.rs:10:5 in declaration Person"
        """
        location = str(self.location)
        if self.declaration:
            location += f" in declaration {self.declaration}"
        return location


E = TypeVar("E", bound=LdmapError)


def make_parse_error(message: str, location: SourceLocation) -> MalformedAttributeError:
    """
    Helper to create a MalformedAttributeError with context.

    Args:
        message: Error description
        location: Location of the offending token

    Returns:
        MalformedAttributeError with context attached
    """
    return MalformedAttributeError(message, ErrorContext(location=location))


def make_resolution_error(
    error_class: type[E],
    message: str,
    location: SourceLocation | None = None,
) -> E:
    """
    Helper to create a resolution or structure error with optional context.

    Args:
        error_class: Concrete LdmapError subclass to instantiate
        message: Error description
        location: Optional location of the offending annotation

    Returns:
        Error instance with context if a location was provided
    """
    if location is not None:
        return error_class(message, ErrorContext(location=location))
    return error_class(message)
