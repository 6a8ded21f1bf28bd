"""Explicit schemas mapping Python objects to elements."""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Union


class SchemaError(TypeError):
    """Raised when an object has no usable schema."""


class FieldKind(Enum):
    """How a field value is written into the element."""

    ATTRIBUTE = auto()  # attribute holding str(value)
    CHILD = auto()  # one child element, recursing into the value
    CHILDREN = auto()  # one child element per item of the value


@dataclass
class FieldSpec:
    """Declarative specification of one field of an encoded object."""

    name: str
    """Attribute name on the object; also the XML attribute name."""

    kind: FieldKind = FieldKind.ATTRIBUTE
    """How the value is encoded."""

    format: str | None = None
    """Format spec applied with format() before writing (e.g. "%Y-%m-%d")."""

    exclude: bool = False
    """Skip this field entirely."""

    tag: str | None = None
    """Element tag for CHILD fields (default: the declared type's name)."""


@dataclass
class ObjectSpec:
    """Specification of how an object type is encoded."""

    type: type
    """The Python type described."""

    tag: str
    """Element tag for instances of the type."""

    fields: list[FieldSpec] = field(default_factory=list)
    """Fields in output order."""


def _unwrap_optional(hint: Any) -> Any:
    """Strip None from X | None and Optional[X]."""
    origin = typing.get_origin(hint)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _is_collection_hint(hint: Any) -> bool:
    origin = typing.get_origin(hint) or hint
    if not isinstance(origin, type):
        return False
    if issubclass(origin, (str, bytes, Mapping)):
        return False
    return issubclass(origin, Iterable)


def spec_from_dataclass(
    cls: type,
    formats: Mapping[str, str] | None = None,
    exclude: Iterable[str] = (),
    tag: str | None = None,
) -> ObjectSpec:
    """Derive an ObjectSpec from a dataclass and its type hints.

    Fields typed as sequences become CHILDREN, fields typed as dataclasses
    become CHILD, everything else becomes an attribute. Fields whose name
    starts with an underscore are private and left out.

    Args:
        cls: A dataclass type
        formats: Format specs per field name
        exclude: Field names to skip
        tag: Element tag (default: the class name)

    Returns:
        The derived ObjectSpec

    Raises:
        SchemaError: If cls is not a dataclass
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise SchemaError(f"Cannot derive a schema for {cls!r}: not a dataclass type")

    formats = formats or {}
    excluded = set(exclude)
    hints = typing.get_type_hints(cls)

    specs: list[FieldSpec] = []
    for f in dataclasses.fields(cls):
        if f.name.startswith("_"):
            continue

        hint = _unwrap_optional(hints.get(f.name, Any))
        child_tag = None
        if f.name in formats:
            kind = FieldKind.ATTRIBUTE
        elif _is_collection_hint(hint):
            kind = FieldKind.CHILDREN
        elif isinstance(hint, type) and dataclasses.is_dataclass(hint):
            kind = FieldKind.CHILD
            child_tag = hint.__name__
        else:
            kind = FieldKind.ATTRIBUTE

        specs.append(
            FieldSpec(
                name=f.name,
                kind=kind,
                format=formats.get(f.name),
                exclude=f.name in excluded,
                tag=child_tag,
            )
        )

    return ObjectSpec(type=cls, tag=tag or cls.__name__, fields=specs)


class SchemaRegistry:
    """Registry of object specifications.

    Maps Python types to their ObjectSpec. Dataclasses without an explicit
    registration get a derived spec on first use.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._specs: dict[type, ObjectSpec] = {}

    def register(self, spec: ObjectSpec) -> None:
        """Register an object specification.

        Args:
            spec: The specification to register
        """
        self._specs[spec.type] = spec

    def has_spec(self, cls: type) -> bool:
        """Check if a type is registered or derivable."""
        return cls in self._specs or dataclasses.is_dataclass(cls)

    def spec_for(self, cls: type) -> ObjectSpec:
        """Get the specification for a type.

        Args:
            cls: The type of an object to encode

        Returns:
            The registered or derived ObjectSpec

        Raises:
            SchemaError: If the type is neither registered nor a dataclass
        """
        spec = self._specs.get(cls)
        if spec is None:
            if not dataclasses.is_dataclass(cls):
                raise SchemaError(
                    f"No schema registered for type {cls.__module__}.{cls.__qualname__}"
                )
            spec = spec_from_dataclass(cls)
            self._specs[cls] = spec
        return spec

    def registered_types(self) -> set[type]:
        """Return set of all types with a spec."""
        return set(self._specs.keys())
