__version__ = "1.0.0"

from datetime import datetime

from .conf import apply_settings, Settings, SettingValidationError
from .extractor import PromiseDateExtractor
from .promise import AlertType, ExtractedDate, ExtractionContext

# Re-export calendar value types for convenience
from .values import CalendarValue, Precision, Year, Month, Week, Day

# =============================================================================
# Grammar and post-processing exports
# =============================================================================

from .grammar import GrammarError
from .registry import Rule, RuleRegistry, registry
from .conflicts import reconcile

_default_extractor = PromiseDateExtractor()


@apply_settings
def extract(text, reference_date=None, history_mode=None, settings=None):
    """Extract date phrases ("promises") from text and resolve them.

    :param text:
        Free text to search for date phrases.
    :type text: str

    :param reference_date:
        Date all relative phrases are resolved against. Overrides the
        ``RELATIVE_BASE`` setting; defaults to today in the local time zone.
    :type reference_date: datetime.date

    :param history_mode:
        Keep values of self-contradicting phrases (with their alerts) instead of
        reducing them to alerts. Overrides the ``HISTORY_MODE`` setting.
    :type history_mode: bool

    :param settings:
        Configure customized behavior using settings defined in :mod:`promiseparser.conf.Settings`.
    :type settings: dict

    :return: Extracted dates ordered by position in the text.
    :rtype: list of :class:`promiseparser.promise.ExtractedDate`

    :raises:
        ``SettingValidationError``: A provided setting is not valid.

    Example usage::

        >>> import promiseparser
        >>> from datetime import date
        >>> promiseparser.extract("next year", reference_date=date(2024, 3, 15))
        [ExtractedDate('next year', 0:9, Year(digits=2025))]
    """
    if isinstance(reference_date, datetime):
        reference_date = reference_date.date()

    context = ExtractionContext(
        reference_date=reference_date or settings.reference_date(),
        history_mode=settings.HISTORY_MODE if history_mode is None else history_mode,
    )
    return _default_extractor.extract(text, context)


__all__ = [
    "__version__",
    "extract",
    "apply_settings",
    "Settings",
    "SettingValidationError",
    "PromiseDateExtractor",
    "AlertType",
    "ExtractedDate",
    "ExtractionContext",
    "CalendarValue",
    "Precision",
    "Year",
    "Month",
    "Week",
    "Day",
    "GrammarError",
    "Rule",
    "RuleRegistry",
    "registry",
    "reconcile",
]
