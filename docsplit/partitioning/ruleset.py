"""Registry of routing rules for a partition run."""

from __future__ import annotations

from collections.abc import Iterable

from docsplit.partitioning.paths import (
    MatchRule,
    RuleSyntaxError,
    is_strict_descendant,
    normalize_tag_path,
)


class RuleSet:
    """Validated, read-only set of routing rules.

    Holds the match rules (keyed by tag path), the once and exclude tag
    paths, and the include/exclude filters on discriminator values. A
    RuleSet carries no per-run state and can be shared between runs.
    """

    def __init__(
        self,
        match_rules: Iterable[MatchRule] = (),
        once_paths: Iterable[str] = (),
        exclude_paths: Iterable[str] = (),
        include_values: Iterable[str] | None = None,
        exclude_values: Iterable[str] | None = None,
    ) -> None:
        """Initialize the rule set.

        Args:
            match_rules: Parsed match rules; paths must be unique
            once_paths: Tag paths whose nodes go to exactly one output
            exclude_paths: Tag paths dropped from every output
            include_values: If given, only these values are routed by value
            exclude_values: If given, these values are never routed by value

        Raises:
            RuleSyntaxError: On duplicate match paths or paths listed both
                as once and exclude
        """
        self._match: dict[str, MatchRule] = {}
        for rule in match_rules:
            if rule.path in self._match:
                raise RuleSyntaxError(
                    str(rule),
                    f"duplicate match rule for path '{rule.path}' "
                    f"(already routed by '{self._match[rule.path].attribute}')",
                )
            self._match[rule.path] = rule

        self._once = frozenset(normalize_tag_path(p) for p in once_paths)
        self._exclude = frozenset(normalize_tag_path(p) for p in exclude_paths)

        conflicting = self._once & self._exclude
        if conflicting:
            path = sorted(conflicting)[0]
            raise RuleSyntaxError(path, "path is listed as both once and exclude")

        # Empty filters behave like no filter at all
        self._include_values = frozenset(include_values or ()) or None
        self._exclude_values = frozenset(exclude_values or ()) or None

        self._all_paths = (
            tuple(self._match) + tuple(sorted(self._once)) + tuple(sorted(self._exclude))
        )

    @classmethod
    def from_strings(
        cls,
        match_rules: Iterable[str] | None = None,
        include_values: Iterable[str] | None = None,
        exclude_values: Iterable[str] | None = None,
        once_tag_paths: Iterable[str] | None = None,
        exclude_tag_paths: Iterable[str] | None = None,
    ) -> RuleSet:
        """Build a rule set from rule strings.

        Args:
            match_rules: Strings like "catalog,book,id"
            include_values: Values allowed for value routing
            exclude_values: Values refused for value routing
            once_tag_paths: Strings like "catalog,notice"
            exclude_tag_paths: Strings like "catalog,internal"

        Returns:
            Configured RuleSet

        Raises:
            RuleSyntaxError: If any rule string is malformed
        """
        return cls(
            match_rules=[MatchRule.parse(rule) for rule in match_rules or ()],
            once_paths=once_tag_paths or (),
            exclude_paths=exclude_tag_paths or (),
            include_values=include_values,
            exclude_values=exclude_values,
        )

    def match_rule_for(self, path: str) -> MatchRule | None:
        """Get the match rule routing nodes at this exact path.

        Args:
            path: Canonical tag path of a node

        Returns:
            The match rule, or None if no rule targets this path
        """
        return self._match.get(path)

    def accepts_value(self, value: str | None) -> bool:
        """Check a discriminator value against the include/exclude filters.

        A missing value (None) is never accepted.
        """
        if value is None:
            return False
        if self._include_values is not None and value not in self._include_values:
            return False
        if self._exclude_values is not None and value in self._exclude_values:
            return False
        return True

    def is_once(self, path: str) -> bool:
        """Check if nodes at this path are emitted in exactly one output."""
        return path in self._once

    def is_excluded(self, path: str) -> bool:
        """Check if nodes at this path are dropped from all outputs."""
        return path in self._exclude

    def reaches_below(self, path: str) -> bool:
        """Check if any rule targets a node strictly inside this subtree.

        Args:
            path: Canonical tag path of a node

        Returns:
            True if a match, once or exclude rule lies below the path
        """
        return any(is_strict_descendant(rule_path, path) for rule_path in self._all_paths)

    @property
    def match_rules(self) -> list[MatchRule]:
        """Match rules in registration order."""
        return list(self._match.values())

    @property
    def once_paths(self) -> set[str]:
        """Return set of once tag paths."""
        return set(self._once)

    @property
    def exclude_paths(self) -> set[str]:
        """Return set of excluded tag paths."""
        return set(self._exclude)

    def is_empty(self) -> bool:
        """True if no rule would ever route or drop a node."""
        return not self._all_paths

    def __repr__(self) -> str:
        return (
            f"RuleSet(match={[str(r) for r in self.match_rules]}, "
            f"once={sorted(self._once)}, exclude={sorted(self._exclude)})"
        )
