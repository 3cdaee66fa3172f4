"""
Primitive date nodes: years, months, days and relative weeks.

These match a fixed vocabulary and resolve to a single value. Composite
nodes embed them and reuse their resolution.
"""

import logging
from typing import List, Optional

import regex as re

from ..promise import AlertType, ExtractedDate, ExtractionContext
from ..temporal import (
    bounded_month,
    bounded_year,
    conclude,
    expected_month,
    expected_year,
    is_valid_year,
    month_by_name,
    relative_week,
)
from .base import Node
from .vocabulary import (
    ACCURATE_YEAR,
    DAY_NUMBER,
    MONTH_NAMES,
    MONTH_PREFIX,
    MONTH_RELATIONS,
    MONTHS,
    WEEK_RELATIONS,
    YEAR_RELATIONS,
    alternation,
)

logger = logging.getLogger(__name__)

_YEAR_LITERAL = re.compile(r"\d{4}")


# =============================================================================
# Years
# =============================================================================

class YearNode(Node):
    """
    A year, either absolute ("2021", "the year 2021") or relative
    ("next year", "the previous year 2023").

    A relative year takes its literal number when it has one, otherwise the
    reference year shifted by the relation. It is correct only when the value
    equals the reference year shifted by the relation.
    """

    role = "Year"

    def pattern(self) -> str:
        relative = (
            self.relation_pattern(YEAR_RELATIONS)
            + r"\s+"
            + alternation(ACCURATE_YEAR + ("year",))
        )
        absolute = alternation(ACCURATE_YEAR)
        return self.named(
            alternation([self.named(relative, "expr"), self.named(absolute, "simple")])
        )

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        if not self.matched(match):
            return None

        text = match.group(self.path)
        start, end = match.span(self.path)
        literal = _YEAR_LITERAL.search(text)

        if match.group(self.group("simple")) is not None:
            return ExtractedDate.resolved_at(text, start, end, bounded_year(int(literal.group())))

        relation = self.matched_relation(match)
        expected = expected_year(context.reference_date, relation)
        year = int(literal.group()) if literal else expected
        value = bounded_year(year)
        if value is None:
            logger.debug(f"Year {year} of '{text}' is out of range")
            return None

        alerts = [] if year == expected else [AlertType.INCONSISTENT]
        return conclude(text, start, end, value, alerts, context)


# =============================================================================
# Months
# =============================================================================

class MonthNode(Node):
    """A month name, optionally preceded by "the month of"."""

    role = "Month"

    def pattern(self) -> str:
        return self.named(alternation(MONTH_PREFIX) + "?" + self.named(MONTHS, "name"))

    def number(self, match: re.Match) -> int:
        return MONTH_NAMES[match.group(self.group("name")).lower()]

    def alerts(self, match: re.Match) -> List[AlertType]:
        name = match.group(self.group("name"))
        return [] if name[0].isupper() else [AlertType.LOWERCASE_MONTH]

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        # a month name alone has no year; composites read it through number()
        return None


class RelativeMonthNode(Node):
    """
    A month relative to the reference date: "next June", "the previous
    month", "this month".

    Without a relation word a month name is still recognised ("June"), but it
    only produces an alert: a month without a year is ambiguous. The strict
    variant requires both a relation word and a month name.
    """

    role = "RelativeMonth"

    def __init__(self, parent: Optional[str] = None, role: Optional[str] = None, strict: bool = False):
        super().__init__(parent, role)
        self.strict = strict
        self.month = self.child(MonthNode)

    def pattern(self) -> str:
        relation = self.relation_pattern(MONTH_RELATIONS) + r"\s+"
        if self.strict:
            return self.named(relation + self.month.pattern())
        bare = self.named(alternation(MONTH_PREFIX) + "?month", "bare")
        return self.named(f"(?:{relation})?" + alternation([self.month.pattern(), bare]))

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        if not self.matched(match):
            return None

        text = match.group(self.path)
        start, end = match.span(self.path)
        reference = context.reference_date
        relation = self.matched_relation(match)
        named_month = self.month.matched(match)

        if relation is None:
            if not named_month:
                return None
            return ExtractedDate.alerted(
                text, start, end, self.month.alerts(match) + [AlertType.INCONSISTENT]
            )

        expected = expected_month(reference, relation)
        if not named_month:
            return conclude(text, start, end, bounded_month(expected), [], context)

        value = bounded_month(month_by_name(reference, relation, self.month.number(match)))
        alerts = self.month.alerts(match)
        if value != expected:
            alerts.append(AlertType.INCONSISTENT)
        return conclude(text, start, end, value, alerts, context)


# =============================================================================
# Days
# =============================================================================

class DayNode(Node):
    """Day-of-month number 1..31, optionally preceded by "the"."""

    role = "Day"

    def pattern(self) -> str:
        return self.named(r"(?:the\s+)?" + self.named(DAY_NUMBER, "number"))

    def number(self, match: re.Match) -> int:
        return int(match.group(self.group("number")))

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        # a day number alone is not a date; composites read it through number()
        return None


# =============================================================================
# Weeks
# =============================================================================

class WeekNode(Node):
    """Relative week: Monday..Sunday of the week around reference +/- 1 week."""

    role = "Week"

    def pattern(self) -> str:
        return self.named(self.relation_pattern(WEEK_RELATIONS) + r"\s+week")

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        if not self.matched(match):
            return None
        start, end = match.span(self.path)
        value = relative_week(context.reference_date, self.matched_relation(match))
        if not is_valid_year(value.monday.year):
            return None
        return ExtractedDate.resolved_at(match.group(self.path), start, end, value)
