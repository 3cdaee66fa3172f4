"""
Grammar node base class.

A node contributes a regex fragment and knows how to turn a match of that
fragment into a candidate. Composite nodes hold their children and embed the
children's fragments in their own.

Capture groups are named after the node's position in the tree: a child
created by parent `DayMonthYear` for role `Month` has path
`DayMonthYear__Month`, and its own local groups are `DayMonthYear__Month_<suffix>`.
Roles are CamelCase and suffixes lowercase, so two different nodes can never
produce the same group name.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Type, TypeVar

import regex as re

from ..promise import ExtractedDate, ExtractionContext
from ..temporal import Relation
from .vocabulary import BEGIN, FINISH, alternation

logger = logging.getLogger(__name__)

_GROUP_NAME = re.compile(r"\(\?P<(\w+)>")

N = TypeVar("N", bound="Node")


class GrammarError(Exception):
    """Raised at import time when node composition yields an invalid pattern."""


class Node:
    """
    Base grammar rule.

    Subclasses set `role` (the default name of the node in the tree) and
    implement `pattern()` and `resolve()`.
    """

    role = "Node"
    bounded = True        # rule patterns are wrapped in word boundaries
    expects_value = True  # an unresolved match is worth a warning

    def __init__(self, parent: Optional[str] = None, role: Optional[str] = None):
        role = role or self.role
        self.path = f"{parent}__{role}" if parent else role

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.path})"

    # -------------------------------------------------------------------------
    # Composition helpers
    # -------------------------------------------------------------------------

    def child(self, node_class: Type[N], role: Optional[str] = None, **kwargs) -> N:
        """Create a child node placed under this node's path."""
        return node_class(parent=self.path, role=role, **kwargs)

    def group(self, suffix: Optional[str] = None) -> str:
        return f"{self.path}_{suffix}" if suffix else self.path

    def named(self, fragment: str, suffix: Optional[str] = None) -> str:
        """Wrap a fragment in one of this node's named groups."""
        return f"(?P<{self.group(suffix)}>{fragment})"

    def relation_pattern(self, relations: Dict[Relation, Sequence[str]]) -> str:
        """Alternation of relation words, one named group per relation."""
        return alternation(
            self.named(alternation(words), relation.name.lower())
            for relation, words in relations.items()
        )

    def matched_relation(self, match: re.Match) -> Optional[Relation]:
        for relation in Relation:
            if _participated(match, self.group(relation.name.lower())):
                return relation
        return None

    # -------------------------------------------------------------------------
    # Contract
    # -------------------------------------------------------------------------

    def pattern(self) -> str:
        raise NotImplementedError

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        """
        Resolve the part of `match` produced by this node.

        Returns:
            A candidate, or None if this node did not take part in the match
        """
        raise NotImplementedError

    def matched(self, match: re.Match) -> bool:
        """True if this node's own group took part in the match."""
        return _participated(match, self.path)

    def applies(self, context: ExtractionContext) -> bool:
        """Whether this node takes part in an extraction under `context`."""
        return True

    def compile(self) -> re.Pattern:
        """Compile this node as a standalone rule."""
        pattern = self.pattern()
        if self.bounded:
            pattern = BEGIN + pattern + FINISH
        return compile_rule(pattern, self.path)


def _participated(match: re.Match, name: str) -> bool:
    return match.group(name) is not None


def compile_rule(pattern: str, name: str) -> re.Pattern:
    """
    Compile a rule pattern, rejecting duplicated group names.

    Raises:
        GrammarError: if two groups share a name
    """
    names: List[str] = _GROUP_NAME.findall(pattern)
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise GrammarError(f"Rule '{name}' reuses group names: {', '.join(duplicates)}")
    logger.debug(f"Compiling rule '{name}' with {len(names)} groups")
    return re.compile(pattern, re.IGNORECASE)


def first_resolved(
    match: re.Match,
    context: ExtractionContext,
    nodes: Iterable[Node],
) -> Optional[ExtractedDate]:
    """
    Ordered fallback: the first candidate any of `nodes` resolves from `match`.
    """
    for node in nodes:
        candidate = node.resolve(match, context)
        if candidate is not None:
            return candidate
    return None
