"""Encoding of Python objects into element trees."""

from __future__ import annotations

from typing import Any

from lxml import etree

from docsplit.serialization.schema import FieldKind, FieldSpec, SchemaRegistry

# Attribute carrying the value of scalar collection items
SCALAR_VALUE_ATTRIBUTE = "value"


class UnsupportedFormatError(Exception):
    """Raised when a format spec cannot be applied to a value."""

    def __init__(self, value_type: type, format_spec: str) -> None:
        """Initialize the error.

        Args:
            value_type: Type of the value that refused the format
            format_spec: The format spec that was applied
        """
        self.value_type = value_type
        self.format_spec = format_spec
        super().__init__(
            f'Cannot apply format string "{format_spec}" to type '
            f"{value_type.__module__}.{value_type.__qualname__}"
        )


def add_child(parent: etree._Element, tag: str) -> etree._Element:
    """Append a new element to parent and return it."""
    return etree.SubElement(parent, tag)


def set_attribute(elem: etree._Element, name: str, value: Any) -> etree._Element:
    """Set an attribute to str(value) and return the element."""
    elem.set(name, str(value))
    return elem


def apply_format(value: Any, format_spec: str) -> str:
    """Format a value with a format spec.

    Raises:
        UnsupportedFormatError: If the value's type rejects the spec
    """
    try:
        return format(value, format_spec)
    except (TypeError, ValueError) as e:
        raise UnsupportedFormatError(type(value), format_spec) from e


def encode_element(
    parent: etree._Element,
    obj: Any,
    registry: SchemaRegistry,
) -> etree._Element:
    """Write the fields of obj into parent according to its schema.

    Args:
        parent: Element representing obj
        obj: The object to encode
        registry: Schemas for obj and nested objects

    Returns:
        The parent element
    """
    spec = registry.spec_for(type(obj))
    for field_spec in spec.fields:
        if field_spec.exclude:
            continue

        value = getattr(obj, field_spec.name, None)
        if value is None:
            continue

        if field_spec.format is not None:
            set_attribute(parent, field_spec.name, apply_format(value, field_spec.format))
        elif field_spec.kind is FieldKind.CHILDREN:
            _encode_items(parent, value, registry)
        elif field_spec.kind is FieldKind.CHILD:
            _encode_child(parent, field_spec, value, registry)
        else:
            set_attribute(parent, field_spec.name, value)

    return parent


def _encode_child(
    parent: etree._Element,
    field_spec: FieldSpec,
    value: Any,
    registry: SchemaRegistry,
) -> None:
    tag = field_spec.tag or registry.spec_for(type(value)).tag
    encode_element(add_child(parent, tag), value, registry)


def _encode_items(parent: etree._Element, items: Any, registry: SchemaRegistry) -> None:
    # Each item is named after its own runtime type
    for item in items:
        if item is None:
            continue
        item_type = type(item)
        if registry.has_spec(item_type):
            child = add_child(parent, registry.spec_for(item_type).tag)
            encode_element(child, item, registry)
        else:
            child = add_child(parent, item_type.__name__)
            set_attribute(child, SCALAR_VALUE_ATTRIBUTE, item)


def to_document(obj: Any, registry: SchemaRegistry | None = None) -> etree._ElementTree:
    """Convert an object into a document.

    The root element is named after the object's type; its fields are
    encoded according to the registered or derived schema.

    Args:
        obj: The object to convert
        registry: Schemas to use (default: derive from dataclasses)

    Returns:
        The document as an ElementTree

    Raises:
        SchemaError: If obj or a nested object has no schema
        UnsupportedFormatError: If a format spec does not fit its value
    """
    registry = registry or SchemaRegistry()
    spec = registry.spec_for(type(obj))
    root = etree.Element(spec.tag)
    encode_element(root, obj, registry)
    return etree.ElementTree(root)
