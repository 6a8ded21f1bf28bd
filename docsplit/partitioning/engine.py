"""Partition engine that routes nodes into output documents using a rule set."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docsplit.logging_config import logger
from docsplit.partitioning.elements import (
    deep_copy,
    element_children,
    get_tag_name,
    shallow_copy,
)
from docsplit.partitioning.paths import child_path
from docsplit.partitioning.protocols import NodeResult, PartitionContext, Placement
from docsplit.partitioning.ruleset import RuleSet

if TYPE_CHECKING:
    from lxml import etree


class PartitionEngine:
    """Engine for partitioning a tree according to routing rules.

    Walks the tree depth-first. Every node is placed in exactly one way:

    1. a match rule at its path with an accepted attribute value routes
       the whole subtree to the value's partition
    2. a once rule routes the whole subtree to the next once partition
    3. an exclude rule drops the subtree
    4. a rule somewhere below it makes the engine recurse and rebuild one
       copy of the node per partition its children ended up in
    5. otherwise the subtree is duplicated into every partition

    A match rule whose attribute is missing or filtered out does not stop
    evaluation: the node continues at step 2 as if no match rule existed.
    """

    def __init__(self, rules: RuleSet) -> None:
        """Initialize the engine.

        Args:
            rules: The routing rules to apply
        """
        self._rules = rules

    def partition(
        self,
        elem: etree._Element,
        context: PartitionContext,
    ) -> list[NodeResult]:
        """Partition a node and its subtree.

        Args:
            elem: The element to place
            context: Context of the element's parent

        Returns:
            NodeResults in document order, at most one per partition for
            rebuilt nodes and one per partition for duplicated nodes
        """
        tag = get_tag_name(elem)
        path = child_path(context.path, tag)

        placement, index = self._place(elem, path, context)

        if placement in (Placement.ROUTE_BY_VALUE, Placement.ROUTE_ONCE):
            logger.debug(f"{path} -> {placement.name.lower()} [{index}]")
            return [NodeResult(index=index, node=deep_copy(elem))]

        if placement is Placement.EXCLUDE:
            logger.debug(f"{path} -> excluded")
            return []

        if placement is Placement.RECURSE:
            with logger.indent_block(f"{path} -> recurse"):
                return self._rebuild(elem, context.with_tag(tag))

        logger.debug(f"{path} -> duplicate x{context.partition_count}")
        return [
            NodeResult(index=i, node=deep_copy(elem))
            for i in range(context.partition_count)
        ]

    def _place(
        self,
        elem: etree._Element,
        path: str,
        context: PartitionContext,
    ) -> tuple[Placement, int | None]:
        """Decide how a node is placed.

        Assignment happens here, so the cursors advance in document order.

        Returns:
            The placement and, for routed nodes, the partition index
        """
        rule = self._rules.match_rule_for(path)
        if rule is not None:
            value = elem.get(rule.attribute)
            if self._rules.accepts_value(value):
                return Placement.ROUTE_BY_VALUE, context.assigner.assign(value)

        if self._rules.is_once(path):
            return Placement.ROUTE_ONCE, context.assigner.assign_once()

        if self._rules.is_excluded(path):
            return Placement.EXCLUDE, None

        if element_children(elem) and self._rules.reaches_below(path):
            return Placement.RECURSE, None

        return Placement.DUPLICATE, None

    def _rebuild(
        self,
        elem: etree._Element,
        child_context: PartitionContext,
    ) -> list[NodeResult]:
        """Recurse into children and rebuild one copy of elem per partition.

        Partitions are visited in the order they first appear among the
        children's results; each copy receives only the children routed to
        its partition, in document order.
        """
        child_results: list[NodeResult] = []
        for child in element_children(elem):
            child_results.extend(self.partition(child, child_context))

        copies: dict[int, etree._Element] = {}
        for result in child_results:
            parent = copies.get(result.index)
            if parent is None:
                parent = shallow_copy(elem)
                copies[result.index] = parent
            parent.append(result.node)

        return [NodeResult(index=index, node=node) for index, node in copies.items()]
