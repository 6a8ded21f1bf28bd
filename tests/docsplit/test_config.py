"""Tests for input validation."""

import pytest

from docsplit.config import PartitionConfigError, validate_partition_count, validate_tag_name


class TestValidatePartitionCount:
    """Tests for partition count validation."""

    def test_valid_count(self) -> None:
        validate_partition_count(3)  # Should not raise

    @pytest.mark.parametrize("count", [0, -1, True, "2", 2.0])
    def test_invalid_count(self, count) -> None:
        with pytest.raises(PartitionConfigError, match="Invalid partition count"):
            validate_partition_count(count)

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_partition_count(0)


class TestValidateTagName:
    """Tests for tag name validation."""

    @pytest.mark.parametrize("tag", ["empty", "_x", "no-content", "a.b", "part2"])
    def test_valid_tag(self, tag: str) -> None:
        validate_tag_name(tag)  # Should not raise

    @pytest.mark.parametrize("tag", ["", "2part", "has space", "ns:tag", "<x>", "empty\n"])
    def test_invalid_tag(self, tag: str) -> None:
        with pytest.raises(PartitionConfigError, match="Invalid tag name"):
            validate_tag_name(tag)
