"""Entry points for partitioning a document."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from lxml import etree

from docsplit.config import DEFAULT_EMPTY_TAG, validate_partition_count
from docsplit.logging_config import logger
from docsplit.partitioning.assembler import DocumentAssembler
from docsplit.partitioning.assigner import PartitionAssigner
from docsplit.partitioning.engine import PartitionEngine
from docsplit.partitioning.protocols import NodeResult, OutputDocument, PartitionContext
from docsplit.partitioning.ruleset import RuleSet

Document = etree._ElementTree | etree._Element | Iterable[etree._Element]


@dataclass
class PartitionRun:
    """Outcome of one partition run."""

    documents: list[OutputDocument]
    """The output documents, one per partition."""

    key_index: dict[str, int] = field(default_factory=dict)
    """Discriminator values and the partition each was assigned."""

    once_count: int = 0
    """Number of once-tagged nodes that were routed."""


def top_level_nodes(document: Document) -> list[etree._Element]:
    """Return the top-level elements of a document.

    Args:
        document: An ElementTree, a single element, or a forest of elements

    Returns:
        Elements in document order
    """
    if isinstance(document, etree._ElementTree):
        root = document.getroot()
        return [] if root is None else [root]
    if isinstance(document, etree._Element):
        return [document]
    return [node for node in document if isinstance(node.tag, str)]


class Partitioner:
    """Splits documents into a fixed number of outputs.

    The partitioner only holds configuration. Each call to run() creates
    its own assignment state, so one instance can serve concurrent runs.
    """

    def __init__(
        self,
        partition_count: int,
        rules: RuleSet | None = None,
        empty_tag: str = DEFAULT_EMPTY_TAG,
    ) -> None:
        """Initialize the partitioner.

        Args:
            partition_count: Number of output documents
            rules: Routing rules; no rules duplicates everything
            empty_tag: Placeholder tag for documents without content

        Raises:
            PartitionConfigError: On a bad count or placeholder tag
        """
        validate_partition_count(partition_count)
        self._count = partition_count
        self._rules = rules or RuleSet()
        self._engine = PartitionEngine(self._rules)
        self._assembler = DocumentAssembler(partition_count, empty_tag)

    @property
    def rules(self) -> RuleSet:
        return self._rules

    def run(self, document: Document) -> PartitionRun:
        """Partition a document.

        Args:
            document: The input document; it is never modified

        Returns:
            PartitionRun with the output documents and assignment details
        """
        assigner = PartitionAssigner(self._count)
        context = PartitionContext(assigner=assigner)

        results: list[NodeResult] = []
        for node in top_level_nodes(document):
            results.extend(self._engine.partition(node, context))

        documents = self._assembler.assemble(results)
        empty = sum(1 for doc in documents if doc.placeholder)
        logger.info(
            f"Partitioned into {self._count} documents "
            f"({len(assigner.key_index)} keys, {assigner.once_assigned} once, "
            f"{empty} empty)"
        )

        return PartitionRun(
            documents=documents,
            key_index=assigner.key_index,
            once_count=assigner.once_assigned,
        )


def partition(
    document: Document,
    partition_count: int,
    match_rules: Iterable[str] | None = None,
    include_values: Iterable[str] | None = None,
    exclude_values: Iterable[str] | None = None,
    once_tag_paths: Iterable[str] | None = None,
    exclude_tag_paths: Iterable[str] | None = None,
    empty_tag: str = DEFAULT_EMPTY_TAG,
) -> list[OutputDocument]:
    """Partition a document into partition_count documents.

    Args:
        document: The input document
        partition_count: Number of output documents
        match_rules: Rules like "catalog,book,id" routing by attribute value
        include_values: Only these values are routed by value
        exclude_values: These values are never routed by value
        once_tag_paths: Paths like "catalog,notice" sent to exactly one output
        exclude_tag_paths: Paths like "catalog,internal" dropped everywhere
        empty_tag: Placeholder tag for documents without content

    Returns:
        List of exactly partition_count OutputDocuments

    Raises:
        PartitionConfigError: If partition_count < 1 or empty_tag is invalid
        RuleSyntaxError: If a rule string is malformed or duplicated
    """
    rules = RuleSet.from_strings(
        match_rules=match_rules,
        include_values=include_values,
        exclude_values=exclude_values,
        once_tag_paths=once_tag_paths,
        exclude_tag_paths=exclude_tag_paths,
    )
    return Partitioner(partition_count, rules, empty_tag).run(document).documents
