"""
Suspicious tokens.

These never resolve a date. Outside history mode each one raises an alert
so the surrounding text can be reviewed; "year of birth" is recognised only
to keep other rules from reading it as a date.
"""

from typing import Optional

import regex as re

from ..promise import AlertType, ExtractedDate, ExtractionContext
from .base import Node
from .vocabulary import YEAR_DIGITS


class TokenNode(Node):
    """A fixed token that maps to one alert."""

    fragment = ""
    alert = AlertType.INCONSISTENT
    bounded = True
    expects_value = False

    def applies(self, context: ExtractionContext) -> bool:
        return not context.history_mode

    def pattern(self) -> str:
        return self.named(self.fragment)

    def alert_for(self, text: str) -> Optional[AlertType]:
        return self.alert

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        if not self.applies(context) or not self.matched(match):
            return None
        text = match.group(self.path)
        alert = self.alert_for(text)
        if alert is None:
            return None
        start, end = match.span(self.path)
        return ExtractedDate.alerted(text, start, end, [alert])


class SlashToken(TokenNode):
    role = "Slash"
    fragment = "/"
    alert = AlertType.SLASH
    bounded = False


class NewYearToken(TokenNode):
    """"new year" is ambiguous, the bare word "year" is not a date."""

    role = "NewYear"
    fragment = r"new\s+year|year"

    def alert_for(self, text: str) -> Optional[AlertType]:
        if text == "New Year":
            return None
        if text.lower() == "year":
            return AlertType.BARE_YEAR
        return AlertType.NEW_YEAR


class WeekdayAbbreviationToken(TokenNode):
    role = "WeekdayAbbreviation"
    fragment = "mon|tue|wed|thu|fri|sat"
    alert = AlertType.WEEKDAY_ABBREVIATION


class NewWeekToken(TokenNode):
    role = "NewWeek"
    fragment = r"new\s+week"


class NewMonthToken(TokenNode):
    role = "NewMonth"
    fragment = r"new\s+month"


class DigitsNearYearToken(TokenNode):
    """A year glued to another digit run: "2021-05", "123456-2021"."""

    role = "DigitsNearYear"
    fragment = rf"{YEAR_DIGITS}-(?:\d{{5,}}|\d{{1,3}})|(?:\d{{5,}}|\d{{1,3}})-{YEAR_DIGITS}"
    alert = AlertType.DIGITS_NEAR_YEAR


class LastMonthToken(TokenNode):
    role = "LastMonth"
    fragment = r"last\s+month"
    alert = AlertType.LAST_MONTH


class YearOfBirthNode(TokenNode):
    """Recognised in both modes and always hidden from the output."""

    role = "YearOfBirth"
    fragment = r"year\s+of\s+birth"

    def applies(self, context: ExtractionContext) -> bool:
        return True

    def resolve(self, match: re.Match, context: ExtractionContext) -> Optional[ExtractedDate]:
        if not self.matched(match):
            return None
        start, end = match.span(self.path)
        return ExtractedDate.hidden(match.group(self.path), start, end)
