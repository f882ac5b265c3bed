"""
Parser for ldmap annotation blocks.

Turns the text of one annotation block into a list of entries for the
context the block is attached to. A block holds zero or more entries,
separated by commas:

    prefix("ex" = "http://example.org/"), type = "ex:Person"

The parser is purely syntactic. It never expands identifiers and never
checks how many entries of a kind appear; the attribute builders do that.

Entry points:
    ``parse_annotation(block, context) -> list[entry]``
    ``parse_annotations(blocks, context, attribute_path) -> list[entry]``
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from .errors import MalformedAttributeError, make_parse_error
from .ir.annotations import (
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
from .ir.declarations import DEFAULT_ATTRIBUTE_PATH, AnnotationBlock
from .ir.location import SourceLocation, Spanned
from .lexer import Token, TokenType, tokenize

EntryT = TypeVar("EntryT")

_FLAG_TOKENS = {
    TokenType.IGNORE: FieldFlag.IGNORE,
    TokenType.FLATTEN: FieldFlag.FLATTEN,
    TokenType.ID: FieldFlag.ID,
    TokenType.GRAPH: FieldFlag.GRAPH,
}


class AnnotationParser:
    """
    Recursive descent parser over the tokens of one annotation block.
    """

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *token_types: TokenType) -> bool:
        return self.current_token().type in token_types

    def expect(self, token_type: TokenType, what: str | None = None) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            MalformedAttributeError: If token doesn't match
        """
        token = self.current_token()
        if token.type != token_type:
            expected = what or f"'{token_type.value}'"
            raise make_parse_error(
                f"Expected {expected}, got {token.describe()}",
                token.location,
            )
        return self.advance()

    def expect_string(self) -> Spanned[str]:
        token = self.expect(TokenType.STRING, "string literal")
        return Spanned[str](value=token.value, location=token.location)

    def unexpected(self, expected: str) -> MalformedAttributeError:
        token = self.current_token()
        return make_parse_error(
            f"Expected one of {expected}, got {token.describe()}",
            token.location,
        )

    # =========================================================================
    # Entry lists
    # =========================================================================

    def parse_entries(self, parse_entry: Callable[[], EntryT]) -> list[EntryT]:
        """Parse comma-separated entries up to EOF. A trailing comma is allowed."""
        entries: list[EntryT] = []
        while not self.match(TokenType.EOF):
            entries.append(parse_entry())
            if self.match(TokenType.COMMA):
                self.advance()
            elif not self.match(TokenType.EOF):
                token = self.current_token()
                raise make_parse_error(
                    f"Expected ',' or end of annotation, got {token.describe()}",
                    token.location,
                )
        return entries

    def parse_record_entry(self) -> RecordAnnotation:
        if self.match(TokenType.TYPE):
            return self.parse_type_entry()
        if self.match(TokenType.PREFIX):
            return self.parse_prefix_entry()
        raise self.unexpected("'type', 'prefix'")

    def parse_union_entry(self) -> UnionAnnotation:
        if self.match(TokenType.TYPE):
            token = self.current_token()
            raise make_parse_error(
                "Tagged union declarations cannot carry a 'type' annotation",
                token.location,
            )
        if self.match(TokenType.PREFIX):
            return self.parse_prefix_entry()
        raise self.unexpected("'prefix'")

    def parse_case_entry(self) -> CaseAnnotation:
        return IriEntry(identifier=self.expect_string())

    def parse_field_entry(self) -> FieldAnnotation:
        token = self.current_token()
        if token.type == TokenType.STRING:
            return IriEntry(identifier=self.expect_string())
        flag = _FLAG_TOKENS.get(token.type)
        if flag is None:
            raise self.unexpected("string literal, 'ignore', 'flatten', 'id', 'graph'")
        self.advance()
        return FlagEntry(flag=flag, location=token.location)

    # =========================================================================
    # Shapes
    # =========================================================================

    def parse_type_entry(self) -> TypeEntry:
        """Parse `type = "<iri>"`."""
        keyword = self.expect(TokenType.TYPE)
        self.expect(TokenType.EQUALS)
        identifier = self.expect_string()
        return TypeEntry(identifier=identifier, location=keyword.location)

    def parse_prefix_entry(self) -> PrefixEntry:
        """Parse `prefix("<prefix>" = "<iri>")`."""
        keyword = self.expect(TokenType.PREFIX)
        self.expect(TokenType.LPAREN)
        prefix = self.expect_string()
        self.expect(TokenType.EQUALS)
        namespace = self.expect_string()
        self.expect(TokenType.RPAREN)
        return PrefixEntry(prefix=prefix, namespace=namespace, location=keyword.location)


def parse_text(
    text: str, origin: SourceLocation, context: AnnotationContext
) -> list[RecordAnnotation] | list[UnionAnnotation] | list[CaseAnnotation] | list[FieldAnnotation]:
    """
    Parse annotation text for one context.

    Args:
        text: Annotation content
        origin: Location of the first character of `text`
        context: What the annotation is attached to

    Returns:
        Entries in source order

    Raises:
        MalformedAttributeError: If the text does not match the grammar
    """
    parser = AnnotationParser(tokenize(text, origin))
    match context:
        case AnnotationContext.RECORD:
            return parser.parse_entries(parser.parse_record_entry)
        case AnnotationContext.UNION:
            return parser.parse_entries(parser.parse_union_entry)
        case AnnotationContext.CASE:
            return parser.parse_entries(parser.parse_case_entry)
        case AnnotationContext.FIELD:
            return parser.parse_entries(parser.parse_field_entry)
    raise AssertionError(f"Unhandled annotation context: {context}")


def parse_annotation(block: AnnotationBlock, context: AnnotationContext) -> list:
    """Parse a single annotation block."""
    return parse_text(block.content, block.location, context)


def parse_annotations(
    blocks: Iterable[AnnotationBlock],
    context: AnnotationContext,
    attribute_path: str = DEFAULT_ATTRIBUTE_PATH,
) -> list:
    """
    Parse every block written under `attribute_path`, in order.

    Blocks under other paths belong to other tools and are skipped.
    """
    entries: list = []
    for block in blocks:
        if block.path != attribute_path:
            continue
        entries.extend(parse_annotation(block, context))
    return entries
