"""Tag path handling for routing rules.

A tag path is the sequence of tag names from the document root down to a
node, joined by the delimiter and always ending with it:

```
<catalog><book><chapter/></book></catalog>

catalog,            -> the root element
catalog,book,       -> each book
catalog,book,chapter,
```

The trailing delimiter makes exact and prefix comparisons plain string
operations: "a,b," is a prefix of "a,b,c," but never of "a,bc,".
"""

from __future__ import annotations

from dataclasses import dataclass

from docsplit.config import PATH_DELIMITER


class RuleSyntaxError(ValueError):
    """Raised when a rule string cannot be parsed into a tag path."""

    def __init__(self, rule: str, reason: str) -> None:
        """Initialize the error.

        Args:
            rule: The offending rule string
            reason: Why the rule was rejected
        """
        self.rule = rule
        self.reason = reason
        super().__init__(f"Invalid rule '{rule}': {reason}")


def child_path(parent_path: str, tag: str) -> str:
    """Extend a tag path with one more tag.

    Args:
        parent_path: Path of the parent node ("" for top-level nodes)
        tag: Tag name of the child

    Returns:
        The child's tag path, e.g. "catalog,book,"
    """
    return f"{parent_path}{tag}{PATH_DELIMITER}"


def normalize_tag_path(path: str) -> str:
    """Convert a once/exclude entry to canonical trailing-delimited form.

    Entries may be given with or without the trailing delimiter
    ("catalog,book" and "catalog,book," are equivalent).

    Args:
        path: Tag path as written in a rule

    Returns:
        Canonical tag path

    Raises:
        RuleSyntaxError: If the path is empty or has empty tag segments
    """
    stripped = path.strip()
    if stripped.endswith(PATH_DELIMITER):
        stripped = stripped[: -len(PATH_DELIMITER)]

    if not stripped:
        raise RuleSyntaxError(path, "tag path is empty")

    tags = [tag.strip() for tag in stripped.split(PATH_DELIMITER)]
    if any(not tag for tag in tags):
        raise RuleSyntaxError(path, "tag path contains an empty tag name")

    return PATH_DELIMITER.join(tags) + PATH_DELIMITER


def is_strict_descendant(rule_path: str, node_path: str) -> bool:
    """Check whether a rule path points below a node.

    Args:
        rule_path: Canonical path of a rule
        node_path: Canonical path of the node being visited

    Returns:
        True if rule_path lies strictly inside the node's subtree
    """
    return len(rule_path) > len(node_path) and rule_path.startswith(node_path)


@dataclass(frozen=True)
class MatchRule:
    """Route nodes found at `path` by the value of their `attribute`."""

    path: str
    """Canonical tag path of the routed nodes (e.g. "catalog,book,")."""

    attribute: str
    """Attribute whose distinct values are spread over the partitions."""

    @classmethod
    def parse(cls, rule: str) -> MatchRule:
        """Parse a rule string of the form "tag1,...,tagN,attribute".

        Everything before the last delimiter is the tag path, everything
        after it is the attribute name.

        Args:
            rule: The rule string

        Returns:
            Parsed MatchRule

        Raises:
            RuleSyntaxError: If the rule has no delimiter, no attribute
                name or an empty tag path
        """
        text = rule.strip()
        split_at = text.rfind(PATH_DELIMITER)
        if split_at < 0:
            raise RuleSyntaxError(
                rule, "expected tag path and attribute separated by "
                f"'{PATH_DELIMITER}'"
            )

        attribute = text[split_at + len(PATH_DELIMITER) :].strip()
        if not attribute:
            raise RuleSyntaxError(rule, "attribute name is empty")

        try:
            path = normalize_tag_path(text[:split_at])
        except RuleSyntaxError as e:
            raise RuleSyntaxError(rule, e.reason) from e

        return cls(path=path, attribute=attribute)

    def __str__(self) -> str:
        return f"{self.path}{self.attribute}"
