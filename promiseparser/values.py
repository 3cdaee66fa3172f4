"""
Calendar values produced by the extraction grammar.

Every resolved promise carries exactly one of these values. Each value knows
its precision and the inclusive calendar range it covers:

- Year(2021)             -> 2021-01-01 .. 2021-12-31
- Month(month=6, 2021)   -> 2021-06-01 .. 2021-06-30
- Week(date(2021, 6, 7)) -> 2021-06-07 .. 2021-06-13 (Monday .. Sunday)
- Day(7, 6, 2021)        -> 2021-06-07 .. 2021-06-07

Parameters are ordered smallest to largest, as in Day(day, month, year).
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Tuple
import calendar


# =============================================================================
# Enums
# =============================================================================

class Precision(Enum):
    """Granularity of a resolved value."""
    YEAR = "YEAR"
    MONTH = "MONTH"
    WEEK = "WEEK"
    DAY = "DAY"


# =============================================================================
# Base Class
# =============================================================================

class CalendarValue(ABC):
    """Base class for all resolved calendar values."""

    precision: Precision

    @abstractmethod
    def date_range(self) -> Tuple[date, date]:
        """
        Inclusive range of calendar days covered by this value.

        Returns:
            Tuple of (first_day, last_day)
        """
        pass

    @abstractmethod
    def isoformat(self) -> str:
        pass


# =============================================================================
# Value Types
# =============================================================================

@dataclass(frozen=True)
class Year(CalendarValue):
    """A specific year (e.g., Year(2023))."""
    digits: int

    precision = Precision.YEAR

    def date_range(self) -> Tuple[date, date]:
        return date(self.digits, 1, 1), date(self.digits, 12, 31)

    def isoformat(self) -> str:
        return f"{self.digits:04d}"


@dataclass(frozen=True)
class Month(CalendarValue):
    """
    A specific month of a specific year.

    Examples:
        Month(month=10, year=2023)  # October 2023
    """
    month: int
    year: int

    precision = Precision.MONTH

    @classmethod
    def of(cls, day: date) -> "Month":
        return cls(month=day.month, year=day.year)

    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def date_range(self) -> Tuple[date, date]:
        last_day = calendar.monthrange(self.year, self.month)[1]
        return self.first_day(), date(self.year, self.month, last_day)

    def at_day(self, day: int) -> "Day":
        """
        Pin a day number onto this month.

        Raises:
            ValueError: if the day does not exist in this month (e.g. 31 April)
        """
        date(self.year, self.month, day)
        return Day(day=day, month=self.month, year=self.year)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class Week(CalendarValue):
    """A Monday-anchored week; `monday` is its first day."""
    monday: date

    precision = Precision.WEEK

    def date_range(self) -> Tuple[date, date]:
        return self.monday, self.monday + timedelta(days=6)

    def isoformat(self) -> str:
        return self.monday.isoformat()


@dataclass(frozen=True)
class Day(CalendarValue):
    """A specific calendar day."""
    day: int
    month: int
    year: int

    precision = Precision.DAY

    def as_date(self) -> date:
        return date(self.year, self.month, self.day)

    def date_range(self) -> Tuple[date, date]:
        target = self.as_date()
        return target, target

    def isoformat(self) -> str:
        return self.as_date().isoformat()
