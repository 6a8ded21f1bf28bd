"""Data structures passed through the partitioning walk."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from lxml import etree

from docsplit.partitioning.assigner import PartitionAssigner
from docsplit.partitioning.paths import child_path


class Placement(Enum):
    """How a node is placed into the output documents."""

    ROUTE_BY_VALUE = auto()  # One output, chosen by attribute value
    ROUTE_ONCE = auto()  # One output, chosen by the once cursor
    EXCLUDE = auto()  # No output
    RECURSE = auto()  # Per-output copies rebuilt from the children
    DUPLICATE = auto()  # Every output gets its own deep copy


@dataclass
class NodeResult:
    """A node copy destined for one output document."""

    index: int
    """Partition index of the target output."""

    node: etree._Element
    """The copy to attach; never shared with the input or another result."""


@dataclass
class PartitionContext:
    """Context for partitioning operations.

    Carries the run state through the recursive tree walk. The assigner
    is shared by all contexts of one run and by nothing else.
    """

    assigner: PartitionAssigner
    """Round-robin state for this run."""

    path: str = ""
    """Tag path of the current node's parent ("" at top level)."""

    @property
    def partition_count(self) -> int:
        return self.assigner.partition_count

    def with_tag(self, tag: str) -> PartitionContext:
        """Create the context for the children of a node with this tag."""
        return PartitionContext(
            assigner=self.assigner,
            path=child_path(self.path, tag),
        )


class DocumentShapeError(ValueError):
    """Raised when an output document cannot be written as a single XML tree."""


@dataclass
class OutputDocument:
    """One of the N documents produced by a partition run."""

    index: int
    """Partition index of this document."""

    nodes: list[etree._Element] = field(default_factory=list)
    """Top-level elements in order of arrival."""

    placeholder: bool = False
    """True if the document only holds the empty placeholder element."""

    @property
    def has_content(self) -> bool:
        """Whether any top-level element exists (placeholder included)."""
        return bool(self.nodes)

    @property
    def root(self) -> etree._Element | None:
        """The first top-level element, or None if there is none."""
        return self.nodes[0] if self.nodes else None

    def to_tree(self) -> etree._ElementTree:
        """Wrap the document in an ElementTree.

        Raises:
            DocumentShapeError: If the document has no element or several
                top-level elements
        """
        if len(self.nodes) != 1:
            raise DocumentShapeError(
                f"Output document {self.index} has {len(self.nodes)} top-level "
                "elements; an XML document needs exactly one"
            )
        return etree.ElementTree(self.nodes[0])

    def to_bytes(self, pretty_print: bool = True) -> bytes:
        """Serialize to UTF-8 XML with declaration."""
        return etree.tostring(
            self.to_tree(),
            xml_declaration=True,
            encoding="UTF-8",
            pretty_print=pretty_print,
        )
