"""docsplit: split one XML document into N documents by routing rules."""

from docsplit.config import PartitionConfigError
from docsplit.partitioning import (
    OutputDocument,
    Partitioner,
    PartitionRun,
    RuleSet,
    RuleSyntaxError,
    partition,
)

__version__ = "0.1.0"

__all__ = [
    "OutputDocument",
    "PartitionConfigError",
    "PartitionRun",
    "Partitioner",
    "RuleSet",
    "RuleSyntaxError",
    "partition",
]
