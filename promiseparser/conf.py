from datetime import date, datetime
from functools import wraps

from tzlocal import get_localzone

default_settings = {
    # reference date of relative phrases; None means today in the local time zone
    "RELATIVE_BASE": None,
    # keep values of self-contradicting phrases instead of reducing them to alerts
    "HISTORY_MODE": False,
}


class Settings:
    """Control and configure extraction behavior.

    Settings are read-only once built; use :meth:`replace` to derive a
    modified copy.
    """

    _default = True

    def __init__(self, settings=None):
        self._mod_settings = {}
        self._updateall(default_settings.items())
        if settings:
            self._updateall(settings.items())

    def _updateall(self, iterable):
        for key, value in iterable:
            setattr(self, key, value)

    def replace(self, mod_settings=None, **kwds):
        for key in default_settings:
            kwds.setdefault(key, getattr(self, key))

        new = self.__class__(settings=kwds)
        new._default = False
        new._mod_settings = dict(mod_settings or {})
        check_settings(new)
        return new

    def reference_date(self):
        """The configured reference date, or today in the local time zone."""
        base = self.RELATIVE_BASE
        if base is None:
            return datetime.now(get_localzone()).date()
        if isinstance(base, datetime):
            return base.date()
        return base


settings = Settings()


def apply_settings(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        mod_settings = kwargs.get("settings")

        kwargs["settings"] = mod_settings or settings

        if isinstance(kwargs["settings"], dict):
            kwargs["settings"] = settings.replace(
                mod_settings=mod_settings, **kwargs["settings"]
            )

        if not isinstance(kwargs["settings"], Settings):
            raise TypeError(
                "settings can only be either dict or instance of Settings class"
            )

        return f(*args, **kwargs)

    return wrapper


class SettingValidationError(ValueError):
    pass


def _check_relative_base(setting_name, setting_value):
    if setting_value is not None and not isinstance(setting_value, date):
        raise SettingValidationError(
            '"{}" must be a date, a datetime or None'.format(setting_name)
        )


def check_settings(settings):
    """
    Check if provided settings are valid, if not it raises `SettingValidationError`.
    Only checks for the modified settings.
    """
    settings_values = {
        "RELATIVE_BASE": {
            "extra_check": _check_relative_base,
        },
        "HISTORY_MODE": {
            "type": bool,
        },
    }

    modified_settings = settings._mod_settings
    for setting_name, setting_value in modified_settings.items():
        setting_type = type(setting_value).__name__
        if setting_name not in settings_values:
            raise SettingValidationError(
                '"{}" is not a valid setting'.format(setting_name)
            )

        expected_type = settings_values[setting_name].get("type")
        if expected_type and not isinstance(setting_value, expected_type):
            raise SettingValidationError(
                '"{}" must be "{}", not "{}".'.format(
                    setting_name, expected_type.__name__, setting_type
                )
            )

        extra_check = settings_values[setting_name].get("extra_check")
        if extra_check:
            extra_check(setting_name, setting_value)
