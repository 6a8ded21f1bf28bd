"""Shared configuration for the docsplit package."""

import re

# Separator between tag names in rule strings and tag paths
PATH_DELIMITER = ","

# Tag inserted into an output document that received no content
DEFAULT_EMPTY_TAG = "empty"

# HTTP timeout in seconds for downloading source documents
HTTP_TIMEOUT = 10

# Conservative XML name check (no namespace prefixes)
TAG_NAME_PATTERN = re.compile(r"[A-Za-z_][\w.\-]*")


class PartitionConfigError(ValueError):
    """Raised when partitioning is configured with invalid values."""


def validate_partition_count(count: int) -> None:
    """Validate the number of output documents.

    Args:
        count: Requested number of partitions

    Raises:
        PartitionConfigError: If count is not a positive integer
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise PartitionConfigError(
            f"Invalid partition count: {count!r}. Expected an integer >= 1"
        )


def validate_tag_name(tag: str) -> None:
    """Validate a tag name used for generated elements.

    Args:
        tag: The tag name to validate

    Raises:
        PartitionConfigError: If tag is not a usable XML element name
    """
    if not tag or not TAG_NAME_PATTERN.fullmatch(tag):
        raise PartitionConfigError(
            f"Invalid tag name: '{tag}'. Expected an XML element name (e.g., empty)"
        )
