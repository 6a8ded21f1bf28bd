"""Conversion of Python objects into documents that can be partitioned."""

from docsplit.serialization.encoder import (
    UnsupportedFormatError,
    add_child,
    apply_format,
    encode_element,
    set_attribute,
    to_document,
)
from docsplit.serialization.schema import (
    FieldKind,
    FieldSpec,
    ObjectSpec,
    SchemaError,
    SchemaRegistry,
    spec_from_dataclass,
)

__all__ = [
    "FieldKind",
    "FieldSpec",
    "ObjectSpec",
    "SchemaError",
    "SchemaRegistry",
    "UnsupportedFormatError",
    "add_child",
    "apply_format",
    "encode_element",
    "set_attribute",
    "spec_from_dataclass",
    "to_document",
]
