"""
Identifier resolution.

Every identifier literal in an annotation goes through `resolve`:

1. The literal must be a syntactically valid absolute IRI (RFC 3987),
   compact or not. ``ex:Person`` qualifies (scheme ``ex``);
   ``not an iri`` never does.
2. If the text before the first colon is a valid prefix bound in the
   registry, the bound namespace replaces it. Otherwise the literal is
   used verbatim.
"""

from __future__ import annotations

import rfc3987
from rdflib import URIRef

from .errors import InvalidPrefixError, MalformedIdentifierError, make_resolution_error
from .ir.location import Spanned
from .prefix_registry import Prefix, PrefixRegistry


_IRI_PATTERN = rfc3987.get_compiled_pattern("%(IRI)s")


def is_absolute_iri(text: str) -> bool:
    """Check whether `text` is an absolute IRI (scheme required, fragment allowed)."""
    # fullmatch: a trailing newline must not slip past an end-of-line anchor
    return _IRI_PATTERN.fullmatch(text) is not None


def parse_iri(text: str) -> URIRef:
    """
    Parse `text` as an absolute IRI without any prefix expansion.

    Raises:
        MalformedIdentifierError: If `text` is not an absolute IRI
    """
    if not is_absolute_iri(text):
        raise MalformedIdentifierError(f"'{text}' is not a valid absolute IRI")
    return URIRef(text)


def expand(text: str, registry: PrefixRegistry) -> URIRef:
    """
    Expand a literal against `registry`.

    Raises:
        MalformedIdentifierError: If the literal, or its expansion, is not an absolute IRI
    """
    iri = parse_iri(text)

    head, sep, local = text.partition(":")
    if not sep:
        return iri

    try:
        prefix = Prefix(head)
    except InvalidPrefixError:
        return iri

    namespace = registry.lookup(prefix)
    if namespace is None:
        return iri

    return parse_iri(f"{namespace}{local}")


def resolve(literal: Spanned[str], registry: PrefixRegistry) -> URIRef:
    """
    Resolve an identifier literal read from an annotation.

    Args:
        literal: The literal text and its location
        registry: Prefixes of the enclosing declaration

    Raises:
        MalformedIdentifierError: With the literal's location attached
    """
    try:
        return expand(literal.value, registry)
    except MalformedIdentifierError as e:
        raise make_resolution_error(MalformedIdentifierError, e.message, literal.location) from e
