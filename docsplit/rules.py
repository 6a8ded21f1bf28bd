"""
Routing rules loaded from YAML files.

A rules file describes one partitioning setup:

    partitions: 3
    match:
      - catalog,book,author
    include_values: []
    exclude_values:
      - anonymous
    once:
      - catalog,notice
    exclude:
      - catalog,internal
    empty_tag: empty
"""

from __future__ import annotations

from pathlib import Path
from typing import Self

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from docsplit.config import DEFAULT_EMPTY_TAG, validate_tag_name
from docsplit.partitioning.paths import MatchRule, normalize_tag_path
from docsplit.partitioning.ruleset import RuleSet


class RoutingRules(BaseModel):
    """
    Partitioning configuration.

    Attributes:
        partitions: Number of output documents (None if left to the caller)
        match: Match rules like "catalog,book,id"
        include_values: Values allowed for value routing (empty = all)
        exclude_values: Values never routed by value
        once: Tag paths emitted in exactly one output
        exclude: Tag paths dropped from every output
        empty_tag: Placeholder tag for documents without content
    """

    model_config = ConfigDict(extra="forbid")

    partitions: int | None = None
    match: list[str] = []
    include_values: list[str] = []
    exclude_values: list[str] = []
    once: list[str] = []
    exclude: list[str] = []
    empty_tag: str = DEFAULT_EMPTY_TAG

    @field_validator("partitions")
    @classmethod
    def _check_partitions(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("partitions must be at least 1")
        return value

    @field_validator("match")
    @classmethod
    def _check_match(cls, value: list[str]) -> list[str]:
        for rule in value:
            MatchRule.parse(rule)
        return value

    @field_validator("once", "exclude")
    @classmethod
    def _check_paths(cls, value: list[str]) -> list[str]:
        for path in value:
            normalize_tag_path(path)
        return value

    @field_validator("empty_tag")
    @classmethod
    def _check_empty_tag(cls, value: str) -> str:
        validate_tag_name(value)
        return value

    @classmethod
    def from_yaml(cls, yaml_text: str) -> Self:
        """
        Load rules from YAML text.

        Example:
            rules = RoutingRules.from_yaml('''
                partitions: 2
                match:
                  - catalog,book,id
            ''')
        """
        data = yaml.safe_load(yaml_text) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: str | Path) -> Self:
        """Load rules from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)

    def merged(
        self,
        partitions: int | None = None,
        match: list[str] | None = None,
        include_values: list[str] | None = None,
        exclude_values: list[str] | None = None,
        once: list[str] | None = None,
        exclude: list[str] | None = None,
        empty_tag: str | None = None,
    ) -> RoutingRules:
        """Return a copy with extra rules appended and scalars overridden.

        Lists are extended (file entries first); partitions and empty_tag
        replace the file value when given.
        """
        return RoutingRules(
            partitions=partitions if partitions is not None else self.partitions,
            match=[*self.match, *(match or [])],
            include_values=[*self.include_values, *(include_values or [])],
            exclude_values=[*self.exclude_values, *(exclude_values or [])],
            once=[*self.once, *(once or [])],
            exclude=[*self.exclude, *(exclude or [])],
            empty_tag=empty_tag if empty_tag is not None else self.empty_tag,
        )

    def to_ruleset(self) -> RuleSet:
        """Build the RuleSet for these rules."""
        return RuleSet.from_strings(
            match_rules=self.match,
            include_values=self.include_values,
            exclude_values=self.exclude_values,
            once_tag_paths=self.once,
            exclude_tag_paths=self.exclude,
        )
