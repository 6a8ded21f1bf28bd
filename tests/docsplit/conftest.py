"""Shared test fixtures for docsplit tests."""

from unittest.mock import Mock

import pytest
from lxml import etree


CATALOG_XML = b"""<catalog>
    <header title="Books"/>
    <book id="A"><title>One</title></book>
    <book id="B"><title>Two</title></book>
    <book id="A"><title>Three</title></book>
    <book id="B"><title>Four</title></book>
</catalog>"""


@pytest.fixture
def catalog_xml() -> bytes:
    """Raw XML of a small catalog with two repeated book ids."""
    return CATALOG_XML


@pytest.fixture
def catalog() -> etree._ElementTree:
    """Parsed catalog document."""
    parser = etree.XMLParser(remove_blank_text=True)
    return etree.ElementTree(etree.fromstring(CATALOG_XML, parser))


@pytest.fixture
def mock_http_response():
    """Factory fixture to create mock HTTP responses.

    Usage:
        def test_example(mock_http_response):
            response = mock_http_response(b"<xml>content</xml>")
            # response.content == b"<xml>content</xml>"
            # response.raise_for_status() does nothing
    """

    def _create_response(content: bytes) -> Mock:
        response = Mock()
        response.content = content
        response.raise_for_status = Mock()
        return response

    return _create_response
