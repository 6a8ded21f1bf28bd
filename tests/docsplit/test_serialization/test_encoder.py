"""Tests for object-to-document encoding."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

import pytest
from lxml import etree

from docsplit.partitioning import partition
from docsplit.serialization import (
    FieldKind,
    FieldSpec,
    ObjectSpec,
    SchemaError,
    SchemaRegistry,
    UnsupportedFormatError,
    add_child,
    set_attribute,
    spec_from_dataclass,
    to_document,
)


@dataclass
class Author:
    name: str
    born: date | None = None


@dataclass
class Chapter:
    title: str
    pages: int


@dataclass
class Book:
    id: str
    title: str
    price: Decimal
    author: Author
    chapters: list[Chapter] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    in_print: bool = True
    note: str | None = None


@dataclass
class Catalog:
    name: str
    books: list[Book] = field(default_factory=list)


class Opaque:
    pass


@dataclass
class Holder:
    value: Opaque


def make_book(book_id: str = "A", note: str | None = None) -> Book:
    return Book(
        id=book_id,
        title="Dune",
        price=Decimal("12.50"),
        author=Author(name="Herbert", born=date(1920, 10, 8)),
        chapters=[Chapter(title="One", pages=10), Chapter(title="Two", pages=12)],
        tags=["sf", "classic"],
        note=note,
    )


class TestToDocument:
    """Tests for to_document function."""

    def test_root_tag_from_type(self) -> None:
        tree = to_document(make_book())

        assert tree.getroot().tag == "Book"

    def test_simple_fields_become_attributes(self) -> None:
        root = to_document(make_book()).getroot()

        assert dict(root.attrib) == {
            "id": "A",
            "title": "Dune",
            "price": "12.50",
            "in_print": "True",
        }
        assert list(root.attrib) == ["id", "title", "price", "in_print"]

    def test_none_fields_omitted(self) -> None:
        root = to_document(make_book(note=None)).getroot()

        assert "note" not in root.attrib

    def test_nested_object_becomes_child(self) -> None:
        root = to_document(make_book()).getroot()

        author = root.find("Author")
        assert author.get("name") == "Herbert"
        assert author.get("born") == "1920-10-08"

    def test_collection_items_become_children(self) -> None:
        root = to_document(make_book()).getroot()

        chapters = root.findall("Chapter")
        assert [(c.get("title"), c.get("pages")) for c in chapters] == [
            ("One", "10"),
            ("Two", "12"),
        ]

    def test_scalar_items_use_value_attribute(self) -> None:
        root = to_document(make_book()).getroot()

        assert [t.get("value") for t in root.findall("str")] == ["sf", "classic"]

    def test_child_order_follows_fields(self) -> None:
        root = to_document(make_book()).getroot()

        assert [c.tag for c in root] == ["Author", "Chapter", "Chapter", "str", "str"]

    def test_excluded_field_skipped(self) -> None:
        registry = SchemaRegistry()
        registry.register(spec_from_dataclass(Book, exclude=["author", "price"]))

        root = to_document(make_book(), registry).getroot()

        assert root.find("Author") is None
        assert "price" not in root.attrib

    def test_format_applied(self) -> None:
        registry = SchemaRegistry()
        registry.register(spec_from_dataclass(Author, formats={"born": "%d.%m.%Y"}))
        registry.register(spec_from_dataclass(Chapter, formats={"pages": "03d"}))

        root = to_document(make_book(), registry).getroot()

        assert root.find("Author").get("born") == "08.10.1920"
        assert [c.get("pages") for c in root.findall("Chapter")] == ["010", "012"]

    def test_registered_tags_used_for_items(self) -> None:
        registry = SchemaRegistry()
        registry.register(spec_from_dataclass(Chapter, tag="chapter"))

        root = to_document(make_book(), registry).getroot()

        assert len(root.findall("chapter")) == 2

    def test_plain_class_field_is_attribute(self) -> None:
        """Derived schemas only nest dataclasses."""
        obj = Opaque()

        root = to_document(Holder(value=obj)).getroot()

        assert len(root) == 0
        assert dict(root.attrib) == {"value": str(obj)}

    def test_explicit_spec_skips_excluded_field(self) -> None:
        registry = SchemaRegistry()
        registry.register(
            ObjectSpec(
                type=Opaque,
                tag="opaque",
                fields=[FieldSpec(name="label"), FieldSpec(name="hidden", exclude=True)],
            )
        )
        obj = Opaque()
        obj.label = "x"
        obj.hidden = "y"

        root = to_document(obj, registry).getroot()

        assert root.tag == "opaque"
        assert dict(root.attrib) == {"label": "x"}

    def test_explicit_child_field(self) -> None:
        registry = SchemaRegistry()
        registry.register(ObjectSpec(type=Opaque, tag="opaque", fields=[FieldSpec(name="label")]))
        registry.register(
            ObjectSpec(
                type=Holder,
                tag="holder",
                fields=[FieldSpec(name="value", kind=FieldKind.CHILD)],
            )
        )
        obj = Opaque()
        obj.label = "x"

        root = to_document(Holder(value=obj), registry).getroot()

        assert root.tag == "holder"
        assert root.find("opaque").get("label") == "x"


class TestEncodingErrors:
    """Tests for encoding failures."""

    def test_unsupported_format(self) -> None:
        registry = SchemaRegistry()
        registry.register(spec_from_dataclass(Author, formats={"name": "%Y"}))

        with pytest.raises(UnsupportedFormatError, match='"%Y" to type builtins.str') as exc:
            to_document(Author(name="Herbert"), registry)

        assert exc.value.value_type is str
        assert exc.value.format_spec == "%Y"

    def test_format_on_object_without_format_support(self) -> None:
        registry = SchemaRegistry()
        registry.register(
            ObjectSpec(type=Holder, tag="holder", fields=[FieldSpec(name="value", format="x")])
        )

        with pytest.raises(UnsupportedFormatError, match="Opaque"):
            to_document(Holder(value=Opaque()), registry)

    def test_no_schema(self) -> None:
        with pytest.raises(SchemaError):
            to_document(Opaque())


class TestHelpers:
    """Tests for element helpers."""

    def test_add_child(self) -> None:
        parent = etree.Element("a")

        child = add_child(parent, "b")

        assert child.getparent() is parent
        assert child.tag == "b"

    def test_set_attribute(self) -> None:
        elem = set_attribute(etree.Element("a"), "n", 3)

        assert elem.get("n") == "3"


class TestRoundTrip:
    """Encoded values can be read back unchanged."""

    def test_values_survive(self) -> None:
        book = make_book(note="signed")
        root = to_document(book).getroot()

        assert root.get("id") == book.id
        assert root.get("title") == book.title
        assert Decimal(root.get("price")) == book.price
        assert root.get("note") == book.note
        assert root.find("Author").get("name") == book.author.name
        assert [
            Chapter(title=c.get("title"), pages=int(c.get("pages")))
            for c in root.findall("Chapter")
        ] == book.chapters
        assert [t.get("value") for t in root.findall("str")] == book.tags

    def test_encoded_document_can_be_partitioned(self) -> None:
        catalog = Catalog(name="shop", books=[make_book("A"), make_book("B"), make_book("A")])

        documents = partition(to_document(catalog), 2, match_rules=["Catalog,Book,id"])

        assert [b.get("id") for b in documents[0].root.findall("Book")] == ["A", "A"]
        assert [b.get("id") for b in documents[1].root.findall("Book")] == ["B"]
        assert documents[1].root.get("name") == "shop"
