"""
Tests for calendar values.
"""

from datetime import date

import pytest

from promiseparser.values import Day, Month, Precision, Week, Year


class TestDateRanges:
    """Tests for inclusive date ranges."""

    @pytest.mark.parametrize("value, expected", [
        (Year(2021), (date(2021, 1, 1), date(2021, 12, 31))),
        (Month(6, 2021), (date(2021, 6, 1), date(2021, 6, 30))),
        (Month(2, 2024), (date(2024, 2, 1), date(2024, 2, 29))),
        (Month(2, 2023), (date(2023, 2, 1), date(2023, 2, 28))),
        (Week(date(2021, 6, 7)), (date(2021, 6, 7), date(2021, 6, 13))),
        (Day(7, 6, 2021), (date(2021, 6, 7), date(2021, 6, 7))),
    ])
    def test_date_range(self, value, expected):
        assert value.date_range() == expected

    def test_week_crossing_year(self):
        assert Week(date(2021, 12, 27)).date_range()[1] == date(2022, 1, 2)


class TestMonth:
    """Tests for month helpers."""

    def test_of(self):
        assert Month.of(date(2024, 3, 15)) == Month(3, 2024)

    def test_at_day(self):
        assert Month(6, 2021).at_day(5) == Day(5, 6, 2021)

    def test_at_impossible_day(self):
        with pytest.raises(ValueError):
            Month(4, 2021).at_day(31)


class TestFormatting:
    """Tests for precision and ISO formatting."""

    @pytest.mark.parametrize("value, precision, text", [
        (Year(2021), Precision.YEAR, "2021"),
        (Month(6, 2021), Precision.MONTH, "2021-06"),
        (Week(date(2021, 6, 7)), Precision.WEEK, "2021-06-07"),
        (Day(5, 6, 2021), Precision.DAY, "2021-06-05"),
    ])
    def test_isoformat(self, value, precision, text):
        assert value.precision is precision
        assert value.isoformat() == text

    def test_values_are_hashable(self):
        assert len({Year(2021), Year(2021), Month(6, 2021)}) == 2
