r"""
Lexer/Tokenizer for ldmap annotation text.

Converts the content of one annotation block into a stream of tokens.
Token locations are absolute: the lexer starts counting from the block's
own source location, so errors point into the host source file.

String literals are double-quoted and accept the escapes `\n`, `\r`, `\t`,
`\0`, `\\`, `\"`, `\'` and `\u{XXXX}` (one to six hex digits naming a
Unicode scalar value).
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum

from .errors import make_parse_error
from .ir.location import SourceLocation


class TokenType(Enum):
    """Token types in the annotation grammar."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"

    # Keywords
    TYPE = "type"
    PREFIX = "prefix"
    IGNORE = "ignore"
    FLATTEN = "flatten"
    ID = "id"
    GRAPH = "graph"

    # Operators
    EQUALS = "="
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","

    # Special
    EOF = "EOF"


KEYWORDS = {
    "type",
    "prefix",
    "ignore",
    "flatten",
    "id",
    "graph",
}

_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

_PUNCTUATION = {
    "=": TokenType.EQUALS,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
}


@dataclass
class Token:
    """
    A single token of annotation text.

    Attributes:
        type: Type of token
        value: String value of the token (unescaped for strings)
        location: Location of the token's first character
    """

    type: TokenType
    value: str
    location: SourceLocation

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.location.line}:{self.location.column})"

    def describe(self) -> str:
        """Human-readable description used in error messages."""
        if self.type == TokenType.EOF:
            return "end of annotation"
        if self.type == TokenType.STRING:
            return f'string "{self.value}"'
        return f"'{self.value}'"


class Lexer:
    """
    Lexer for annotation text.

    Whitespace, including newlines, only separates tokens.
    """

    def __init__(self, text: str, origin: SourceLocation):
        """
        Initialize lexer.

        Args:
            text: Annotation content to tokenize
            origin: Location of the first character of `text`
        """
        self.text = text
        self.file = origin.file
        self.pos = 0
        self.line = origin.line
        self.column = origin.column
        self.tokens: list[Token] = []

    def location(self) -> SourceLocation:
        return SourceLocation(file=self.file, line=self.line, column=self.column)

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace(self) -> None:
        current = self.current_char()
        while current is not None and current.isspace():
            self.advance()
            current = self.current_char()

    def read_string(self) -> str:
        """Read a double-quoted string literal."""
        start = self.location()
        self.advance()  # skip opening quote

        chars = []
        while True:
            current = self.current_char()
            if current is None or current == '"':
                break

            if current == "\\":
                escape_start = self.location()
                self.advance()
                escape_char = self.current_char()
                if escape_char is None:
                    break
                if escape_char == "u":
                    self.advance()
                    chars.append(self.read_unicode_escape(escape_start))
                    continue
                if escape_char not in _ESCAPES:
                    raise make_parse_error(
                        f"Unknown escape sequence: \\{escape_char}",
                        self.location(),
                    )
                chars.append(_ESCAPES[escape_char])
                self.advance()
            else:
                chars.append(current)
                self.advance()

        if self.current_char() != '"':
            raise make_parse_error("Unterminated string literal", start)

        self.advance()  # skip closing quote
        return "".join(chars)

    def read_unicode_escape(self, start: SourceLocation) -> str:
        """Read the `{XXXX}` part of a `\\u{XXXX}` escape."""
        if self.current_char() != "{":
            raise make_parse_error("Expected '{' after \\u", self.location())
        self.advance()

        digits = []
        current = self.current_char()
        while current is not None and current != "}":
            digits.append(current)
            self.advance()
            current = self.current_char()
        if current is None:
            raise make_parse_error("Unterminated unicode escape", start)
        self.advance()  # skip closing brace

        text = "".join(digits)
        if not 1 <= len(text) <= 6 or any(c not in string.hexdigits for c in text):
            raise make_parse_error(f"Invalid unicode escape: \\u{{{text}}}", start)
        code = int(text, 16)
        if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
            raise make_parse_error(f"Unicode escape is not a scalar value: \\u{{{text}}}", start)
        return chr(code)

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        chars = []
        current = self.current_char()
        while current and (current.isalnum() or current == "_"):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire annotation text.

        Returns:
            List of tokens ending with EOF

        Raises:
            MalformedAttributeError: If an unexpected character is found
        """
        while True:
            self.skip_whitespace()
            ch = self.current_char()
            if ch is None:
                break

            start = self.location()

            if ch == '"':
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING, value, start))

            elif ch.isalpha() or ch == "_":
                value = self.read_identifier()
                if value in KEYWORDS:
                    token_type = TokenType(value)
                else:
                    token_type = TokenType.IDENTIFIER
                self.tokens.append(Token(token_type, value, start))

            elif ch in _PUNCTUATION:
                self.advance()
                self.tokens.append(Token(_PUNCTUATION[ch], ch, start))

            else:
                raise make_parse_error(f"Unexpected character: {ch!r}", start)

        self.tokens.append(Token(TokenType.EOF, "", self.location()))
        return self.tokens


def tokenize(text: str, origin: SourceLocation) -> list[Token]:
    """
    Convenience function to tokenize annotation text.

    Args:
        text: Annotation content
        origin: Location of the first character of `text`

    Returns:
        List of tokens
    """
    lexer = Lexer(text, origin)
    return lexer.tokenize()
