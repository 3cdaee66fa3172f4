"""
Composite date nodes.

Each composite embeds the patterns of its children joined by connector
words, resolves whichever child actually matched and combines the child
values:

- "start of 2021"                -> January 2021         (PeriodOfYearNode)
- "June 2021"                    -> June 2021            (MonthWithYearNode)
- "next June 2025"               -> June 2025            (RelativeMonthWithYearNode)
- "the first week of 2021"       -> week of 2021-01-04   (WeekOfYearNode)
- "the last week of June 2021"   -> week of 2021-06-28   (WeekOfMonthNode)
- "5th of June 2021"             -> 2021-06-05           (DayMonthYearNode)

Alerts of the children are carried over to the combined candidate.
"""

import logging
from typing import Optional

import regex as re

from ..promise import AlertType, ExtractedDate, ExtractionContext
from ..temporal import conclude, expected_month, first_week_of, last_week_of
from ..values import Month
from .base import Node, first_resolved
from .primitives import DayNode, MonthNode, RelativeMonthNode, YearNode
from .references import SameMonthNode, SameYearNode
from .vocabulary import (
    DAY_CONNECTOR,
    FIRST_WEEK,
    LAST_WEEK,
    MONTH_YEAR_CONNECTOR,
    PERIOD_ANCHORS,
    alternation,
)

logger = logging.getLogger(__name__)


class _YearTail(Node):
    """Composite ending with a year or a "same year" back-reference."""

    def __init__(self, parent: Optional[str] = None, role: Optional[str] = None):
        super().__init__(parent, role)
        self.year = self.child(YearNode)
        self.same_year = self.child(SameYearNode)

    def year_pattern(self) -> str:
        return alternation([self.year.pattern(), self.same_year.pattern()])

    def resolve_year(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        return first_resolved(match, context, (self.year, self.same_year))


# =============================================================================
# Months inside a year
# =============================================================================

class PeriodOfYearNode(_YearTail):
    """"start of / mid of / end of <year>": January, June or December of that year."""

    role = "PeriodOfYear"

    def pattern(self) -> str:
        anchors = alternation(
            self.named(alternation(words), f"m{month}")
            for month, words in PERIOD_ANCHORS.items()
        )
        return self.named(anchors + r"\s+" + self.year_pattern())

    def anchor_month(self, match: re.Match) -> int:
        for month in PERIOD_ANCHORS:
            if match.group(self.group(f"m{month}")) is not None:
                return month
        raise ValueError(f"No period anchor matched in '{match.group(self.path)}'")

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        if not self.matched(match):
            return None

        text = match.group(self.path)
        start, end = match.span(self.path)
        year = self.resolve_year(match, context)
        if year is None:
            return ExtractedDate.alerted(text, start, end, [AlertType.INCONSISTENT])

        value = None
        if year.resolved:
            value = Month(month=self.anchor_month(match), year=year.value.digits)
        return conclude(text, start, end, value, year.alerts, context)


class MonthWithYearNode(_YearTail):
    """"June 2021", "the month of June, 2021", "June of the same year"."""

    role = "MonthWithYear"

    def __init__(self, parent: Optional[str] = None, role: Optional[str] = None):
        super().__init__(parent, role)
        self.month = self.child(MonthNode)

    def pattern(self) -> str:
        return self.named(self.month.pattern() + MONTH_YEAR_CONNECTOR + self.year_pattern())

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        if not self.matched(match):
            return None

        text = match.group(self.path)
        start, end = match.span(self.path)
        year = self.resolve_year(match, context)
        if year is None:
            return ExtractedDate.alerted(text, start, end, [AlertType.INCONSISTENT])

        value = None
        if year.resolved:
            value = Month(month=self.month.number(match), year=year.value.digits)
        alerts = year.alerts + self.month.alerts(match)
        return conclude(text, start, end, value, alerts, context)


class RelativeMonthWithYearNode(_YearTail):
    """
    "next June 2025", "the previous December of last year".

    Besides the checks of its parts, the combined month must itself be the
    month the relation word points to.
    """

    role = "RelativeMonthWithYear"

    def __init__(self, parent: Optional[str] = None, role: Optional[str] = None):
        super().__init__(parent, role)
        self.month = self.child(RelativeMonthNode, strict=True)

    def pattern(self) -> str:
        return self.named(self.month.pattern() + MONTH_YEAR_CONNECTOR + self.year_pattern())

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        if not self.matched(match):
            return None

        text = match.group(self.path)
        start, end = match.span(self.path)
        month = self.month.resolve(match, context)
        alerts = list(month.alerts) if month else [AlertType.INCONSISTENT]

        year = self.resolve_year(match, context)
        if year is None:
            return ExtractedDate.alerted(text, start, end, alerts + [AlertType.INCONSISTENT])

        alerts += year.alerts
        value = None
        if year.resolved:
            value = Month(month=self.month.month.number(match), year=year.value.digits)
            relation = self.month.matched_relation(match)
            if value != expected_month(context.reference_date, relation):
                alerts.append(AlertType.INCONSISTENT)
        return conclude(text, start, end, value, alerts, context)


# =============================================================================
# Weeks inside a year or month
# =============================================================================

def _week_anchor(node: Node) -> str:
    return alternation([node.named(LAST_WEEK, "last"), node.named(FIRST_WEEK, "first")])


def _anchored_week(node: Node, match: re.Match, value):
    if match.group(node.group("first")) is not None:
        return first_week_of(value)
    return last_week_of(value)


class WeekOfYearNode(_YearTail):
    """"the first week of 2021": the week starting on the first Monday of the year."""

    role = "WeekOfYear"

    def pattern(self) -> str:
        return self.named(_week_anchor(self) + self.year_pattern())

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        if not self.matched(match):
            return None

        text = match.group(self.path)
        start, end = match.span(self.path)
        year = self.resolve_year(match, context)
        if year is None:
            return ExtractedDate.alerted(text, start, end, [AlertType.INCONSISTENT])

        value = _anchored_week(self, match, year.value) if year.resolved else None
        return conclude(text, start, end, value, year.alerts, context)


class WeekOfMonthNode(Node):
    """
    "the first week of June 2021", "the last week of next month",
    "the first week of the same month".

    "the first week of the end of 2021" is recognised but flagged: a week
    cannot be anchored on a period of a year.
    """

    role = "WeekOfMonth"

    def __init__(self, parent: Optional[str] = None, role: Optional[str] = None):
        super().__init__(parent, role)
        self.month_with_year = self.child(MonthWithYearNode)
        self.relative_with_year = self.child(RelativeMonthWithYearNode)
        self.relative_month = self.child(RelativeMonthNode)
        self.period = self.child(PeriodOfYearNode)
        self.same_month = self.child(SameMonthNode)

    def pattern(self) -> str:
        months = alternation([
            self.month_with_year.pattern(),
            self.relative_with_year.pattern(),
            self.relative_month.pattern(),
            self.period.pattern(),
            self.same_month.pattern(),
        ])
        return self.named(_week_anchor(self) + months)

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        if not self.matched(match):
            return None

        text = match.group(self.path)
        start, end = match.span(self.path)
        month = first_resolved(match, context, (
            self.same_month,
            self.month_with_year,
            self.relative_month,
            self.relative_with_year,
        ))
        alerts = []
        if month is None:
            month = self.period.resolve(match, context)
            if month is None:
                return None
            alerts.append(AlertType.INCONSISTENT)

        value = _anchored_week(self, match, month.value) if month.resolved else None
        return conclude(text, start, end, value, month.alerts + alerts, context)


# =============================================================================
# Days
# =============================================================================

class DayMonthYearNode(Node):
    """
    A day number followed by a month phrase: "5 June 2021", "the 5th of next
    month", "12, the same month".

    An impossible date such as "31 April 2021" only raises an alert.
    """

    role = "DayMonthYear"

    def __init__(self, parent: Optional[str] = None, role: Optional[str] = None):
        super().__init__(parent, role)
        self.day = self.child(DayNode)
        self.month_with_year = self.child(MonthWithYearNode)
        self.relative_with_year = self.child(RelativeMonthWithYearNode)
        self.period = self.child(PeriodOfYearNode)
        self.relative_month = self.child(RelativeMonthNode)
        self.same_month = self.child(SameMonthNode)

    def pattern(self) -> str:
        months = alternation([
            self.month_with_year.pattern(),
            self.relative_with_year.pattern(),
            self.period.pattern(),
            self.relative_month.pattern(),
            self.same_month.pattern(),
        ])
        return self.named(self.day.pattern() + DAY_CONNECTOR + months)

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        if not self.matched(match):
            return None

        text = match.group(self.path)
        start, end = match.span(self.path)
        month = first_resolved(match, context, (
            self.month_with_year,
            self.relative_with_year,
            self.relative_month,
            self.same_month,
        ))
        alerts = []
        if month is None:
            # a day of "the end of 2021" is not a usable date
            month = self.period.resolve(match, context)
            if month is None:
                return None
            alerts.append(AlertType.INCONSISTENT)

        alerts = month.alerts + alerts
        value = None
        if month.resolved:
            try:
                value = month.value.at_day(self.day.number(match))
            except ValueError:
                logger.debug(f"'{text}' is not a calendar date")
                return ExtractedDate.alerted(text, start, end, alerts + [AlertType.INCONSISTENT])
        return conclude(text, start, end, value, alerts, context)
