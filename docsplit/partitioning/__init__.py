"""Partitioning module for rule-based document splitting.

This module splits one element tree into a fixed number of output
documents. Declarative rules route subtrees by attribute value, send
them to a single output, or drop them; everything no rule reaches is
duplicated into every output.
"""

from docsplit.partitioning.assembler import DocumentAssembler
from docsplit.partitioning.assigner import PartitionAssigner
from docsplit.partitioning.engine import PartitionEngine
from docsplit.partitioning.partitioner import (
    PartitionRun,
    Partitioner,
    partition,
    top_level_nodes,
)
from docsplit.partitioning.paths import (
    MatchRule,
    RuleSyntaxError,
    child_path,
    normalize_tag_path,
)
from docsplit.partitioning.protocols import (
    DocumentShapeError,
    NodeResult,
    OutputDocument,
    PartitionContext,
    Placement,
)
from docsplit.partitioning.ruleset import RuleSet

__all__ = [
    "DocumentAssembler",
    "DocumentShapeError",
    "MatchRule",
    "NodeResult",
    "OutputDocument",
    "PartitionAssigner",
    "PartitionContext",
    "PartitionEngine",
    "PartitionRun",
    "Partitioner",
    "Placement",
    "RuleSet",
    "RuleSyntaxError",
    "child_path",
    "normalize_tag_path",
    "partition",
    "top_level_nodes",
]
