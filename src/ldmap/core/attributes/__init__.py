"""
Attribute builders: turn parsed annotation entries into validated attributes.

- declaration: prefixes and type IRI of records and tagged unions
- field: flags and predicate of record fields
- case: predicate path of tagged-union cases
"""

from .case import predicate_path, site_iri
from .declaration import (
    RecordAttributes,
    UnionAttributes,
    prefix_binding,
    record_attributes,
    registry_from_entries,
    union_attributes,
)
from .field import field_attributes

__all__ = [
    "RecordAttributes",
    "UnionAttributes",
    "prefix_binding",
    "registry_from_entries",
    "record_attributes",
    "union_attributes",
    "field_attributes",
    "site_iri",
    "predicate_path",
]
