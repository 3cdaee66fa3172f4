"""
Shared date arithmetic for the grammar nodes.

Relative phrases are resolved in two separate steps:

1. compute a value from the reference date and the relation word
   (previous = -1 unit, current = 0, next = +1 unit), preferring a literal
   number when the phrase carries one;
2. check that value against what the relation word should produce.

`conclude` turns the outcome of both steps into a candidate according to the
history mode of the call.
"""

import logging
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta, MO

from .promise import AlertType, ExtractedDate, ExtractionContext
from .values import CalendarValue, Month, Week, Year

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

MIN_YEAR = 2010
MAX_YEAR = 2113


class Relation(Enum):
    """Relation word of a relative phrase, valued by its offset in units."""
    PREVIOUS = -1
    CURRENT = 0
    NEXT = 1

    @property
    def offset(self) -> int:
        return self.value


# =============================================================================
# Bounds
# =============================================================================

def is_valid_year(year: int) -> bool:
    return MIN_YEAR <= year <= MAX_YEAR


def bounded_year(year: int) -> Optional[Year]:
    """Year value, or None outside the supported window."""
    return Year(year) if is_valid_year(year) else None


def bounded_month(month: Month) -> Optional[Month]:
    return month if is_valid_year(month.year) else None


# =============================================================================
# Relative arithmetic
# =============================================================================

def expected_year(reference: date, relation: Relation) -> int:
    return reference.year + relation.offset


def expected_month(reference: date, relation: Relation) -> Month:
    """The month a bare relative month phrase points to."""
    return Month.of(reference + relativedelta(months=relation.offset))


def month_by_name(reference: date, relation: Relation, month: int) -> Month:
    """
    Place a named month relative to the reference date.

    "previous June" is this year's June if June is already over, otherwise
    last year's; "next June" is this year's June if it is still ahead,
    otherwise next year's; "this June" is always this year's.

    Args:
        reference: Reference date of the call
        relation: Relation word in front of the month name
        month: Month number (1-12)

    Returns:
        The computed Month (not yet checked for correctness)
    """
    if relation is Relation.PREVIOUS:
        year = reference.year if reference.month > month else reference.year - 1
    elif relation is Relation.NEXT:
        year = reference.year if reference.month < month else reference.year + 1
    else:
        year = reference.year
    return Month(month=month, year=year)


def relative_week(reference: date, relation: Relation) -> Week:
    """Monday-anchored week containing reference +/- one week."""
    target = reference + timedelta(weeks=relation.offset)
    return Week(target - timedelta(days=target.weekday()))


def first_week_of(value: CalendarValue) -> Week:
    """Week starting on the first Monday inside the value's range."""
    first_day, _ = value.date_range()
    return Week(first_day + relativedelta(weekday=MO(+1)))


def last_week_of(value: CalendarValue) -> Week:
    """Week starting on the last Monday inside the value's range."""
    _, last_day = value.date_range()
    return Week(last_day + relativedelta(weekday=MO(-1)))


# =============================================================================
# Concluding a phrase
# =============================================================================

def conclude(
    text: str,
    start: int,
    end: int,
    value: Optional[CalendarValue],
    alerts: Iterable[AlertType],
    context: ExtractionContext,
) -> Optional[ExtractedDate]:
    """
    Build the candidate for a phrase once its value and alerts are known.

    - value, no alerts: resolved
    - value and alerts, history mode: resolved but incorrect, alerts kept
    - alerts otherwise: alert-only, value dropped
    - neither: nothing to report

    Args:
        text: Matched phrase
        start: Start offset of the phrase
        end: End offset of the phrase
        value: Computed value, or None if none could be computed
        alerts: Alerts collected while resolving the phrase
        context: Extraction context of the call

    Returns:
        ExtractedDate, or None when the phrase produced neither value nor alert
    """
    alerts = list(dict.fromkeys(alerts))
    if value is not None and not alerts:
        return ExtractedDate.resolved_at(text, start, end, value)
    if value is not None and context.history_mode:
        return ExtractedDate.incorrect(text, start, end, value, alerts)
    if alerts:
        return ExtractedDate.alerted(text, start, end, alerts)
    logger.debug(f"Nothing to conclude for '{text}'")
    return None
