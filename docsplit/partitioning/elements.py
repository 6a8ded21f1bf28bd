"""Element helpers for copying nodes into output documents."""

from __future__ import annotations

import copy

from lxml import etree


def get_tag_name(elem: etree._Element) -> str:
    """Get tag name without namespace prefix.

    Args:
        elem: XML element

    Returns:
        Tag name without namespace (e.g., "book" not "{ns}book"), or ""
        for comments and processing instructions
    """
    tag = elem.tag
    if isinstance(tag, str) and "}" in tag:
        return tag.split("}")[-1]
    return tag if isinstance(tag, str) else ""


def element_children(elem: etree._Element) -> list[etree._Element]:
    """Return the element children of a node in document order.

    Comments and processing instructions are left out.
    """
    return [child for child in elem if isinstance(child.tag, str)]


def deep_copy(elem: etree._Element) -> etree._Element:
    """Copy a node with its entire subtree, detached from the source."""
    clone = copy.deepcopy(elem)
    clone.tail = None
    return clone


def shallow_copy(elem: etree._Element) -> etree._Element:
    """Copy a node with its attributes but without text or children."""
    clone = etree.Element(elem.tag, nsmap=elem.nsmap)
    for name, value in elem.attrib.items():
        clone.set(name, value)
    return clone
