"""
Fixed English vocabulary of the date grammar.

Every entry is a regex fragment, matched case-insensitively unless it says
otherwise inline. Multi-word entries use \\s+ between words. Alternatives are
listed longest first so that alternation prefers the fuller phrase.
"""

from typing import Dict, Iterable

from ..temporal import Relation


def alternation(words: Iterable[str]) -> str:
    """Join fragments into a non-capturing alternation."""
    return "(?:" + "|".join(words) + ")"


# =============================================================================
# Boundaries
# =============================================================================

BEGIN = r"(?:^|\b)"
FINISH = r"(?:\b|$)"


# =============================================================================
# Years
# =============================================================================

# 2010 .. 2113
YEAR_DIGITS = r"2(?:11[0-3]|0[1-9]\d|10\d)"

ACCURATE_YEAR = (
    rf"the\s+year\s+{YEAR_DIGITS}",
    rf"the\s+year\s+of\s+{YEAR_DIGITS}",
    rf"year\s+{YEAR_DIGITS}",
    rf"year\s+of\s+{YEAR_DIGITS}",
    rf"{YEAR_DIGITS}\s+year",
    rf"the\s+{YEAR_DIGITS}",
    YEAR_DIGITS,
)

YEAR_RELATIONS: Dict[Relation, tuple] = {
    Relation.PREVIOUS: (r"the\s+last", r"the\s+previous", r"last", r"previous"),
    Relation.CURRENT: (r"the\s+this", r"the\s+current", r"this", r"current"),
    Relation.NEXT: (
        r"the\s+upcoming", r"the\s+coming", r"the\s+next",
        r"upcoming", r"coming", r"next",
    ),
}

SAME_YEAR = (r"the\s+same\s+year", r"same\s+year")

# between a month and its year: "June, 2021", "June 2021", "June of 2021", "June in 2021"
MONTH_YEAR_CONNECTOR = r"(?:,\s+|\s+of\s+|\s+in\s+|\s+)"


# =============================================================================
# Months
# =============================================================================

MONTH_NAMES = {
    'january': 1,
    'february': 2,
    'march': 3,
    'april': 4,
    'may': 5,
    'june': 6,
    'july': 7,
    'august': 8,
    'september': 9,
    'october': 10,
    'november': 11,
    'december': 12,
}

# "may" is a modal verb, so the month needs its capital M
MONTHS = alternation(
    "(?-i:M)ay" if name == "may" else name for name in MONTH_NAMES
)

MONTH_PREFIX = (
    r"the\s+month\s+of\s+",
    r"the\s+month\s+",
    r"month\s+of\s+",
    r"month\s+",
    r"the\s+",
)

# "running" only qualifies months; "last" never does ("last month" is an alert)
MONTH_RELATIONS: Dict[Relation, tuple] = {
    Relation.PREVIOUS: (r"the\s+previous", r"previous"),
    Relation.CURRENT: YEAR_RELATIONS[Relation.CURRENT] + (r"running",),
    Relation.NEXT: YEAR_RELATIONS[Relation.NEXT],
}

SAME_MONTH = (r"the\s+same\s+month", r"same\s+month")

# anchors inside a year: "start of 2021" is January 2021
PERIOD_ANCHORS = {
    1: (r"start\s+of", r"beginning\s+of", r"first\s+month\s+of"),
    6: (r"mid\s+of",),
    12: (r"end\s+of", r"last\s+month\s+of"),
}


# =============================================================================
# Weeks
# =============================================================================

WEEK_RELATIONS: Dict[Relation, tuple] = {
    Relation.PREVIOUS: (r"the\s+previous", r"previous"),
    Relation.CURRENT: YEAR_RELATIONS[Relation.CURRENT],
    Relation.NEXT: YEAR_RELATIONS[Relation.NEXT],
}

SAME_WEEK = (r"the\s+same\s+week", r"same\s+week")

FIRST_WEEK = r"(?:the\s+)?first\s+week(?:\s+of|,)?\s+"
LAST_WEEK = r"(?:the\s+)?last\s+week(?:\s+of|,)?\s+"


# =============================================================================
# Days
# =============================================================================

DAY_NUMBER = r"3[01]|[12]\d|[1-9]"

# between a day and its month: "5 June", "5th June", "5th of June", "5 of June", "5, June"
DAY_CONNECTOR = r"(?:th\s+of\s+|th\s+|\s+of\s+|,\s+|\s+)"
