"""
Rule Registry

The fixed, ordered set of top-level grammar rules. Every rule's pattern is
compiled once when the module is imported and is read-only afterwards, so a
single registry is shared by all extraction calls.

Rule Priority (highest first):
1. Day with month: "5 June 2021", "the 5th of next month"
2. Month with year: "next June 2025", "June 2021"
3. Weeks of a month or year: "the first week of June 2021"
4. Periods of a year: "end of next year"
5. Relative weeks and months: "next week", "the previous month"
6. Years: "2021", "next year"
7. Back-references: "the same week/month/year"
8. Suspicious tokens: "/", "mon", "new year", "year of birth"
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple

import regex as re

from .grammar import (
    DayMonthYearNode,
    DigitsNearYearToken,
    LastMonthToken,
    MonthWithYearNode,
    NewMonthToken,
    NewWeekToken,
    NewYearToken,
    Node,
    PeriodOfYearNode,
    RelativeMonthNode,
    RelativeMonthWithYearNode,
    SameMonthNode,
    SameWeekNode,
    SameYearNode,
    SlashToken,
    WeekdayAbbreviationToken,
    WeekNode,
    WeekOfMonthNode,
    WeekOfYearNode,
    YearNode,
    YearOfBirthNode,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Rule Definition
# =============================================================================

@dataclass(frozen=True)
class Rule:
    """A top-level grammar rule with its compiled pattern."""
    name: str
    node: Node
    regex: re.Pattern
    priority: int


def _rule(node: Node, priority: int) -> Rule:
    return Rule(name=node.path, node=node, regex=node.compile(), priority=priority)


# =============================================================================
# RuleRegistry
# =============================================================================

class RuleRegistry:
    """Ordered top-level rules; equal priorities keep their definition order."""

    def __init__(self):
        self._rules = self._compile_rules()
        self._rules.sort(key=lambda r: r.priority, reverse=True)
        logger.debug(f"Registry ready with {len(self._rules)} rules")

    def _compile_rules(self) -> List[Rule]:
        """Compile all rule definitions."""
        return [
            _rule(DayMonthYearNode(), 110),
            _rule(RelativeMonthWithYearNode(), 100),
            _rule(MonthWithYearNode(), 95),
            _rule(WeekOfMonthNode(), 90),
            _rule(WeekOfYearNode(), 85),
            _rule(PeriodOfYearNode(), 80),
            _rule(WeekNode(), 70),
            _rule(RelativeMonthNode(), 60),
            _rule(YearNode(), 50),
            _rule(SameWeekNode(), 40),
            _rule(SameMonthNode(), 35),
            _rule(SameYearNode(), 30),
            _rule(SlashToken(), 10),
            _rule(NewYearToken(), 10),
            _rule(WeekdayAbbreviationToken(), 10),
            _rule(NewWeekToken(), 10),
            _rule(NewMonthToken(), 10),
            _rule(DigitsNearYearToken(), 10),
            _rule(LastMonthToken(), 10),
            _rule(YearOfBirthNode(), 10),
        ]

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


registry = RuleRegistry()
