"""Round-robin assignment of discriminator values to partitions."""

from __future__ import annotations

from docsplit.config import validate_partition_count


class PartitionAssigner:
    """Per-run allocator of output slots.

    Keeps two independent round-robin cursors:

    - the value cursor, advanced only when a discriminator value is seen
      for the first time; repeated values reuse their slot
    - the once cursor, advanced on every once-tagged node regardless of
      its tag or content

    One instance belongs to exactly one partition run.
    """

    def __init__(self, partition_count: int) -> None:
        """Initialize the assigner.

        Args:
            partition_count: Number of output documents

        Raises:
            PartitionConfigError: If partition_count is less than 1
        """
        validate_partition_count(partition_count)
        self._count = partition_count
        self._key_index: dict[str, int] = {}
        self._cursor = 0
        self._once_cursor = 0
        self._once_assigned = 0

    @property
    def partition_count(self) -> int:
        return self._count

    def assign(self, value: str) -> int:
        """Get the partition for a discriminator value.

        Args:
            value: Attribute value observed on a routed node

        Returns:
            Partition index in [0, partition_count)
        """
        index = self._key_index.get(value)
        if index is None:
            index = self._cursor
            self._key_index[value] = index
            self._cursor = (self._cursor + 1) % self._count
        return index

    def assign_once(self) -> int:
        """Get the partition for the next once-tagged node."""
        index = self._once_cursor
        self._once_cursor = (self._once_cursor + 1) % self._count
        self._once_assigned += 1
        return index

    @property
    def key_index(self) -> dict[str, int]:
        """Copy of the value-to-partition mapping in discovery order."""
        return dict(self._key_index)

    @property
    def once_assigned(self) -> int:
        """Number of once-tagged nodes assigned so far."""
        return self._once_assigned
