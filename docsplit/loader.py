"""Loading of source documents from bytes, files or URLs."""

from pathlib import Path

import requests
from lxml import etree

from docsplit.config import HTTP_TIMEOUT

# Whitespace between elements carries no content in partitioned documents
_PARSER = etree.XMLParser(remove_blank_text=True)


def parse_document(content: bytes) -> etree._ElementTree:
    """Parse XML bytes into a document.

    Args:
        content: Raw XML

    Returns:
        Parsed element tree

    Raises:
        lxml.etree.XMLSyntaxError: If the content is not well-formed XML
    """
    return etree.ElementTree(etree.fromstring(content, _PARSER))


def download_document(url: str) -> etree._ElementTree:
    """Download and parse an XML document.

    Args:
        url: http(s) URL of the document

    Returns:
        Parsed element tree

    Raises:
        requests.HTTPError: If download fails
    """
    response = requests.get(url, timeout=HTTP_TIMEOUT, allow_redirects=True)
    try:
        response.raise_for_status()
    except requests.HTTPError as e:
        raise requests.HTTPError(f"Failed to download document from {url}: {e}") from e
    return parse_document(response.content)


def is_url(source: str) -> bool:
    """Check whether a source refers to an http(s) URL."""
    return source.startswith(("http://", "https://"))


def load_document(source: str | Path) -> etree._ElementTree:
    """Load a document from a file path or an http(s) URL.

    Args:
        source: Filesystem path or URL

    Returns:
        Parsed element tree

    Raises:
        FileNotFoundError: If a local file does not exist
        requests.HTTPError: If a download fails
    """
    if isinstance(source, str) and is_url(source):
        return download_document(source)
    return parse_document(Path(source).read_bytes())
