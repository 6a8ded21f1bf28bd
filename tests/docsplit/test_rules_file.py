"""Tests for routing rules loaded from YAML."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from docsplit.rules import RoutingRules


RULES_YAML = """
partitions: 3
match:
  - catalog,book,id
exclude_values:
  - anonymous
once:
  - catalog,notice
exclude:
  - catalog,internal
empty_tag: nothing
"""


class TestRoutingRulesLoading:
    """Tests for loading rules files."""

    def test_from_yaml(self) -> None:
        rules = RoutingRules.from_yaml(RULES_YAML)

        assert rules.partitions == 3
        assert rules.match == ["catalog,book,id"]
        assert rules.include_values == []
        assert rules.exclude_values == ["anonymous"]
        assert rules.once == ["catalog,notice"]
        assert rules.exclude == ["catalog,internal"]
        assert rules.empty_tag == "nothing"

    def test_from_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text(RULES_YAML, encoding="utf-8")

        rules = RoutingRules.from_yaml_file(path)

        assert rules.partitions == 3

    def test_empty_yaml_uses_defaults(self) -> None:
        rules = RoutingRules.from_yaml("")

        assert rules.partitions is None
        assert rules.match == []
        assert rules.empty_tag == "empty"


class TestRoutingRulesValidation:
    """Tests for rejected rules files."""

    def test_zero_partitions_rejected(self) -> None:
        with pytest.raises(ValidationError, match="partitions must be at least 1"):
            RoutingRules.from_yaml("partitions: 0")

    def test_malformed_match_rule_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Invalid rule 'id'"):
            RoutingRules.from_yaml("match: [id]")

    def test_malformed_path_rejected(self) -> None:
        with pytest.raises(ValidationError, match="empty tag name"):
            RoutingRules.from_yaml("once: ['catalog,,notice']")

    def test_bad_empty_tag_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Invalid tag name"):
            RoutingRules.from_yaml("empty_tag: '1x'")

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RoutingRules.from_yaml("partition: 2")


class TestRoutingRulesUsage:
    """Tests for merging and converting rules."""

    def test_merged_extends_lists_and_overrides_scalars(self) -> None:
        rules = RoutingRules.from_yaml(RULES_YAML)

        merged = rules.merged(
            partitions=2,
            match=["catalog,magazine,issn"],
            once=["catalog,banner"],
        )

        assert merged.partitions == 2
        assert merged.match == ["catalog,book,id", "catalog,magazine,issn"]
        assert merged.once == ["catalog,notice", "catalog,banner"]
        assert merged.empty_tag == "nothing"
        assert rules.partitions == 3

    def test_merged_without_overrides(self) -> None:
        rules = RoutingRules.from_yaml(RULES_YAML)

        assert rules.merged() == rules

    def test_to_ruleset(self) -> None:
        ruleset = RoutingRules.from_yaml(RULES_YAML).to_ruleset()

        assert ruleset.match_rule_for("catalog,book,").attribute == "id"
        assert ruleset.is_once("catalog,notice,") is True
        assert ruleset.is_excluded("catalog,internal,") is True
        assert ruleset.accepts_value("anonymous") is False
