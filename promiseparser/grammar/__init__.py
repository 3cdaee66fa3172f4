"""
Date Grammar

Composable regex rules ("nodes") recognising English date phrases:

1. primitives - years, month names, relative months, day numbers, relative weeks
2. composites - month + year, day + month, first/last week of ...
3. references - "same year", "same month", "same week"
4. tokens - suspicious tokens that only raise alerts

Usage:
    from datetime import date
    from promiseparser.grammar import YearNode
    from promiseparser.promise import ExtractionContext

    node = YearNode()
    match = node.compile().search("see you next year")
    node.resolve(match, ExtractionContext(reference_date=date(2024, 3, 15)))
"""

from .base import GrammarError, Node, compile_rule, first_resolved

from .primitives import (
    DayNode,
    MonthNode,
    RelativeMonthNode,
    WeekNode,
    YearNode,
)

from .composites import (
    DayMonthYearNode,
    MonthWithYearNode,
    PeriodOfYearNode,
    RelativeMonthWithYearNode,
    WeekOfMonthNode,
    WeekOfYearNode,
)

from .references import (
    Lookup,
    SameMonthNode,
    SameWeekNode,
    SameYearNode,
    lookup_grammar,
)

from .tokens import (
    DigitsNearYearToken,
    LastMonthToken,
    NewMonthToken,
    NewWeekToken,
    NewYearToken,
    SlashToken,
    TokenNode,
    WeekdayAbbreviationToken,
    YearOfBirthNode,
)

__all__ = [
    # base
    "GrammarError",
    "Node",
    "compile_rule",
    "first_resolved",
    # primitives
    "DayNode",
    "MonthNode",
    "RelativeMonthNode",
    "WeekNode",
    "YearNode",
    # composites
    "DayMonthYearNode",
    "MonthWithYearNode",
    "PeriodOfYearNode",
    "RelativeMonthWithYearNode",
    "WeekOfMonthNode",
    "WeekOfYearNode",
    # references
    "Lookup",
    "SameMonthNode",
    "SameWeekNode",
    "SameYearNode",
    "lookup_grammar",
    # tokens
    "DigitsNearYearToken",
    "LastMonthToken",
    "NewMonthToken",
    "NewWeekToken",
    "NewYearToken",
    "SlashToken",
    "TokenNode",
    "WeekdayAbbreviationToken",
    "YearOfBirthNode",
]
