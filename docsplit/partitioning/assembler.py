"""Assembly of node results into output documents."""

from __future__ import annotations

from collections.abc import Iterable

from lxml import etree

from docsplit.config import (
    DEFAULT_EMPTY_TAG,
    validate_partition_count,
    validate_tag_name,
)
from docsplit.partitioning.protocols import NodeResult, OutputDocument


class DocumentAssembler:
    """Collects top-level node results into N output documents.

    Documents that receive no element end up holding a single
    placeholder element, so every output has at least one element.
    """

    def __init__(self, partition_count: int, empty_tag: str = DEFAULT_EMPTY_TAG) -> None:
        """Initialize the assembler.

        Args:
            partition_count: Number of output documents
            empty_tag: Tag of the placeholder for empty documents

        Raises:
            PartitionConfigError: On a bad count or placeholder tag
        """
        validate_partition_count(partition_count)
        validate_tag_name(empty_tag)
        self._count = partition_count
        self._empty_tag = empty_tag

    def assemble(self, results: Iterable[NodeResult]) -> list[OutputDocument]:
        """Build the output documents.

        Args:
            results: Top-level results in order of arrival

        Returns:
            Exactly partition_count documents, indexed 0..N-1
        """
        documents = [OutputDocument(index=i) for i in range(self._count)]

        for result in results:
            documents[result.index].nodes.append(result.node)

        for document in documents:
            if not document.has_content:
                document.nodes.append(etree.Element(self._empty_tag))
                document.placeholder = True

        return documents
