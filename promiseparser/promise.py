"""
Output records of the extraction engine.

An ExtractedDate ("promise date") describes one date phrase found in the text:
the matched substring, where it sits, the calendar value it resolves to (if
any) and the alerts raised while resolving or reconciling it.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .values import CalendarValue, Precision


# =============================================================================
# Alert Catalog
# =============================================================================

class AlertType(IntEnum):
    """
    Closed catalog of alerts. Values are the stable numeric codes exposed to
    callers. Code 27 is unused.
    """
    INCONSISTENT = 16           # phrase disagrees with the reference date or forbidden combination
    SLASH = 17                  # "/" in the text
    NEW_YEAR = 18               # "new year" (the holiday "New Year" is ignored)
    SAME_YEAR_UNRESOLVED = 19   # "same year" with no usable antecedent
    SAME_MONTH_UNRESOLVED = 20  # "same month" with no usable antecedent
    SAME_WEEK_UNRESOLVED = 21   # "same week" with no usable antecedent
    WEEKDAY_ABBREVIATION = 22   # mon, tue, wed, thu, fri, sat
    LOWERCASE_MONTH = 23        # month name written in lowercase
    PARTIAL_OVERLAP = 24        # two candidates partially overlap
    DUPLICATE_SPAN = 25         # same span, different date ranges
    ADJACENT = 26               # two candidates separated by " " or " of "
    BARE_YEAR = 28              # the word "year" on its own
    DIGITS_NEAR_YEAR = 29       # "2021-05", "12345-2021"
    LAST_MONTH = 30             # "last month"

    @property
    def legacy_name(self) -> str:
        """Legacy numbered label, e.g. ALERT1 for code 16."""
        return f"ALERT{self.value - 15}"


# =============================================================================
# Extraction Context
# =============================================================================

@dataclass(frozen=True)
class ExtractionContext:
    """Per-call inputs every resolution step depends on."""
    reference_date: date
    history_mode: bool = False


# =============================================================================
# ExtractedDate
# =============================================================================

@dataclass(eq=False)
class ExtractedDate:
    """A date phrase found in the text."""
    text: str                                   # The matched text (the "promise")
    start: int                                  # Start character offset
    end: int                                    # End character offset (exclusive)
    value: Optional[CalendarValue] = None       # Resolved calendar value
    resolved: bool = False                      # A concrete value was computed
    correct: bool = True                        # Value agrees with what the phrase asserts
    alerts: List[AlertType] = field(default_factory=list)
    visible: bool = True                        # False for recognised non-dates

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def resolved_at(cls, text: str, start: int, end: int, value: CalendarValue) -> "ExtractedDate":
        return cls(text=text, start=start, end=end, value=value, resolved=True)

    @classmethod
    def incorrect(
        cls,
        text: str,
        start: int,
        end: int,
        value: CalendarValue,
        alerts: Iterable[AlertType],
    ) -> "ExtractedDate":
        """Resolved value that contradicts its own phrase (history mode)."""
        return cls(
            text=text, start=start, end=end, value=value,
            resolved=True, correct=False, alerts=_unique(alerts),
        )

    @classmethod
    def alerted(cls, text: str, start: int, end: int, alerts: Iterable[AlertType]) -> "ExtractedDate":
        """Alert-only candidate without a value."""
        return cls(text=text, start=start, end=end, correct=False, alerts=_unique(alerts))

    @classmethod
    def hidden(cls, text: str, start: int, end: int) -> "ExtractedDate":
        """Recognised phrase that must not show up in the output."""
        return cls(text=text, start=start, end=end, visible=False)

    # -------------------------------------------------------------------------
    # Derived properties
    # -------------------------------------------------------------------------

    @property
    def span(self) -> Tuple[int, int]:
        return self.start, self.end

    @property
    def precision(self) -> Optional[Precision]:
        return self.value.precision if self.value is not None else None

    @property
    def date_from(self) -> Optional[date]:
        if not self.resolved or self.value is None:
            return None
        return self.value.date_range()[0]

    @property
    def date_to(self) -> Optional[date]:
        if not self.resolved or self.value is None:
            return None
        return self.value.date_range()[1]

    def is_correct(self) -> bool:
        return self.correct or not self.alerts

    # -------------------------------------------------------------------------
    # Mutation (append-only)
    # -------------------------------------------------------------------------

    def add_alert(self, alert: AlertType) -> None:
        if alert not in self.alerts:
            self.alerts.append(alert)
        self.correct = False

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def alerts_to_string(self) -> str:
        return ",".join(str(int(alert)) for alert in self.alerts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        date_from, date_to = self.date_from, self.date_to
        return {
            "text": self.text,
            "start": self.start,
            "end": self.end,
            "precision": self.precision.value if self.precision else None,
            "value": self.value.isoformat() if self.resolved and self.value else None,
            "date_from": date_from.isoformat() if date_from else None,
            "date_to": date_to.isoformat() if date_to else None,
            "resolved": self.resolved,
            "correct": self.is_correct(),
            "visible": self.visible,
            "alerts": [
                {"code": int(alert), "name": alert.name, "label": alert.legacy_name}
                for alert in self.alerts
            ],
        }

    def __repr__(self) -> str:
        parts = [repr(self.text), f"{self.start}:{self.end}"]
        if self.resolved:
            parts.append(repr(self.value))
        if self.alerts:
            parts.append(f"alerts=[{self.alerts_to_string()}]")
        if not self.visible:
            parts.append("hidden")
        return f"ExtractedDate({', '.join(parts)})"


def _unique(alerts: Iterable[AlertType]) -> List[AlertType]:
    return list(dict.fromkeys(alerts))
