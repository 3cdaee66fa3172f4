"""
"Same year / same month / same week" back-references.

A back-reference has no value of its own. It searches the text before the
phrase with a restricted grammar able to produce a value of its precision,
and takes over the value of the last candidate found there.
"""

import logging
from functools import lru_cache
from typing import List, Optional

import regex as re

from ..promise import AlertType, ExtractedDate, ExtractionContext
from ..values import Precision
from .base import Node, compile_rule
from .vocabulary import BEGIN, FINISH, SAME_MONTH, SAME_WEEK, SAME_YEAR, alternation

logger = logging.getLogger(__name__)


# =============================================================================
# Lookup grammars
# =============================================================================

class Lookup:
    """Restricted grammar searched by back-references."""

    def __init__(self, name: str, nodes: List[Node]):
        self.name = name
        self.nodes = nodes
        self.regex = compile_rule(
            BEGIN + alternation(node.pattern() for node in nodes) + FINISH, name
        )

    def last_antecedent(self, text: str, context: ExtractionContext) -> Optional[ExtractedDate]:
        """
        Last usable candidate in `text`.

        Resolved candidates always qualify; alert-only ones qualify only
        outside history mode.
        """
        found = None
        for match in self.regex.finditer(text):
            for node in self.nodes:
                candidate = node.resolve(match, context)
                if candidate is None:
                    continue
                if candidate.resolved or (not context.history_mode and candidate.alerts):
                    found = candidate
        return found


@lru_cache(maxsize=None)
def lookup_grammar(precision: Precision) -> Lookup:
    """Compiled lookup grammar for a precision, built once per process."""
    from .primitives import RelativeMonthNode, WeekNode, YearNode
    from .composites import MonthWithYearNode, WeekOfMonthNode, WeekOfYearNode

    if precision is Precision.YEAR:
        name, node_classes = "SameYearLookup", [YearNode]
    elif precision is Precision.MONTH:
        name, node_classes = "SameMonthLookup", [MonthWithYearNode, RelativeMonthNode]
    else:
        name, node_classes = "SameWeekLookup", [WeekOfMonthNode, WeekNode, WeekOfYearNode]

    return Lookup(name, [node_class(parent=name) for node_class in node_classes])


# =============================================================================
# Back-reference nodes
# =============================================================================

class SameNode(Node):
    """Base class of the three back-references."""

    words: tuple = ()
    precision: Precision = Precision.YEAR
    alert: AlertType = AlertType.SAME_YEAR_UNRESOLVED

    def __init__(self, parent: Optional[str] = None, role: Optional[str] = None):
        super().__init__(parent, role)
        self.lookup = lookup_grammar(self.precision)

    def pattern(self) -> str:
        return self.named(alternation(self.words))

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        if not self.matched(match):
            return None

        text = match.group(self.path)
        start, end = match.span(self.path)
        antecedent = self.lookup.last_antecedent(match.string[:match.start()], context)

        if antecedent is None or not antecedent.resolved:
            logger.debug(f"No antecedent for '{text}' at {start}")
            return ExtractedDate.alerted(text, start, end, [self.alert])

        logger.debug(f"'{text}' at {start} refers to {antecedent!r}")
        if antecedent.is_correct():
            return ExtractedDate.resolved_at(text, start, end, antecedent.value)
        if context.history_mode:
            return ExtractedDate.incorrect(text, start, end, antecedent.value, antecedent.alerts)
        return ExtractedDate.alerted(text, start, end, [self.alert])


class SameYearNode(SameNode):
    role = "SameYear"
    words = SAME_YEAR
    precision = Precision.YEAR
    alert = AlertType.SAME_YEAR_UNRESOLVED


class SameMonthNode(SameNode):
    role = "SameMonth"
    words = SAME_MONTH
    precision = Precision.MONTH
    alert = AlertType.SAME_MONTH_UNRESOLVED


class SameWeekNode(SameNode):
    role = "SameWeek"
    words = SAME_WEEK
    precision = Precision.WEEK
    alert = AlertType.SAME_WEEK_UNRESOLVED
