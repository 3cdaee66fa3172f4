"""
Tests for grammar composition and date arithmetic.
"""

from datetime import date

import pytest

from promiseparser.grammar import (
    DayMonthYearNode,
    GrammarError,
    MonthWithYearNode,
    WeekNode,
    YearNode,
    compile_rule,
    first_resolved,
    lookup_grammar,
)
from promiseparser.promise import AlertType, ExtractionContext
from promiseparser.registry import registry
from promiseparser.temporal import (
    Relation,
    bounded_year,
    conclude,
    expected_month,
    first_week_of,
    last_week_of,
    month_by_name,
    relative_week,
)
from promiseparser.values import Month, Precision, Week, Year


@pytest.fixture
def context():
    return ExtractionContext(reference_date=date(2024, 3, 15))


@pytest.fixture
def history():
    return ExtractionContext(reference_date=date(2024, 3, 15), history_mode=True)


class TestComposition:
    """Tests for node paths and rule compilation."""

    def test_child_paths(self):
        node = DayMonthYearNode()
        assert node.path == "DayMonthYear"
        assert node.month_with_year.path == "DayMonthYear__MonthWithYear"
        assert node.month_with_year.year.path == "DayMonthYear__MonthWithYear__Year"
        assert node.month_with_year.group("name") == "DayMonthYear__MonthWithYear_name"

    def test_all_rules_compile(self):
        assert len(registry) == 20
        assert registry.rules[0].name == "DayMonthYear"

    def test_rules_ordered_by_priority(self):
        priorities = [rule.priority for rule in registry]
        assert priorities == sorted(priorities, reverse=True)

    def test_duplicate_group_names_are_rejected(self):
        pattern = "(?P<Year>a)|(?P<Year>b)"
        with pytest.raises(GrammarError):
            compile_rule(pattern, "Broken")

    def test_sibling_reuse_is_rejected(self):
        year = YearNode()
        with pytest.raises(GrammarError):
            compile_rule(year.pattern() + r"\s+" + year.pattern(), "Twice")


class TestNodes:
    """Tests for resolving single nodes."""

    def test_year_node(self, context):
        node = YearNode()
        match = node.compile().search("in the coming year")
        candidate = node.resolve(match, context)
        assert candidate.value == Year(2025)
        assert candidate.span == (3, 18)

    def test_year_node_mismatch(self, context, history):
        node = YearNode()
        match = node.compile().search("the previous year 2021")
        assert node.resolve(match, context).alerts == [AlertType.INCONSISTENT]
        assert node.resolve(match, context).value is None
        assert node.resolve(match, history).value == Year(2021)

    def test_first_resolved_falls_through(self, context):
        node = MonthWithYearNode()
        match = node.compile().search("June of the same year")
        # "the same year" has nothing to refer to
        candidate = first_resolved(match, context, (node.year, node.same_year))
        assert candidate.alerts == [AlertType.SAME_YEAR_UNRESOLVED]

    def test_first_resolved_none(self, context):
        node = WeekNode()
        match = node.compile().search("next week")
        assert first_resolved(match, context, (YearNode(),)) is None

    def test_lookup_grammar_is_shared(self):
        assert lookup_grammar(Precision.MONTH) is lookup_grammar(Precision.MONTH)
        assert lookup_grammar(Precision.YEAR).name == "SameYearLookup"

    def test_month_name_alone_has_no_value(self, context):
        node = MonthWithYearNode()
        match = node.compile().search("June 2021")
        assert node.month.number(match) == 6
        assert node.month.resolve(match, context) is None


class TestArithmetic:
    """Tests for relative date arithmetic."""

    @pytest.mark.parametrize("relation, month, expected", [
        (Relation.PREVIOUS, 2, Month(2, 2024)),
        (Relation.PREVIOUS, 3, Month(3, 2023)),
        (Relation.PREVIOUS, 6, Month(6, 2023)),
        (Relation.NEXT, 4, Month(4, 2024)),
        (Relation.NEXT, 3, Month(3, 2025)),
        (Relation.NEXT, 1, Month(1, 2025)),
        (Relation.CURRENT, 11, Month(11, 2024)),
    ])
    def test_month_by_name(self, relation, month, expected):
        assert month_by_name(date(2024, 3, 15), relation, month) == expected

    def test_expected_month_across_years(self):
        assert expected_month(date(2024, 1, 10), Relation.PREVIOUS) == Month(12, 2023)
        assert expected_month(date(2024, 12, 31), Relation.NEXT) == Month(1, 2025)

    def test_relative_week(self):
        # 2024-03-17 is a Sunday
        assert relative_week(date(2024, 3, 17), Relation.CURRENT) == Week(date(2024, 3, 11))
        assert relative_week(date(2024, 3, 17), Relation.NEXT) == Week(date(2024, 3, 18))

    def test_first_and_last_week(self):
        assert first_week_of(Month(6, 2021)) == Week(date(2021, 6, 7))
        assert last_week_of(Month(6, 2021)) == Week(date(2021, 6, 28))
        # 2024-04-01 is itself a Monday
        assert first_week_of(Month(4, 2024)) == Week(date(2024, 4, 1))

    def test_bounded_year(self):
        assert bounded_year(2010) == Year(2010)
        assert bounded_year(2113) == Year(2113)
        assert bounded_year(2009) is None
        assert bounded_year(2114) is None


class TestConclude:
    """Tests for turning a value and its alerts into a candidate."""

    def test_resolved(self, context):
        candidate = conclude("2021", 0, 4, Year(2021), [], context)
        assert candidate.resolved and candidate.is_correct()

    def test_alerted(self, context):
        candidate = conclude("2021", 0, 4, Year(2021), [AlertType.INCONSISTENT], context)
        assert not candidate.resolved
        assert candidate.value is None

    def test_incorrect_in_history(self, history):
        candidate = conclude("2021", 0, 4, Year(2021), [AlertType.INCONSISTENT], history)
        assert candidate.resolved
        assert not candidate.is_correct()
        assert candidate.value == Year(2021)

    def test_duplicate_alerts_collapse(self, context):
        alerts = [AlertType.INCONSISTENT, AlertType.INCONSISTENT]
        assert conclude("x", 0, 1, None, alerts, context).alerts == [AlertType.INCONSISTENT]

    def test_nothing(self, context):
        assert conclude("x", 0, 1, None, [], context) is None


class TestAlertCatalog:
    """Tests for alert codes and their numbered labels."""

    @pytest.mark.parametrize("alert, label", [
        (AlertType.INCONSISTENT, "ALERT1"),
        (AlertType.ADJACENT, "ALERT11"),
        (AlertType.BARE_YEAR, "ALERT13"),
        (AlertType.LAST_MONTH, "ALERT15"),
    ])
    def test_legacy_name(self, alert, label):
        assert alert.legacy_name == label

    def test_code_27_is_unused(self):
        assert 27 not in {int(alert) for alert in AlertType}

    def test_labels_in_dict(self, context):
        candidate = conclude("next year 2030", 0, 14, Year(2030), [AlertType.INCONSISTENT], context)
        assert candidate.to_dict()["alerts"] == [
            {"code": 16, "name": "INCONSISTENT", "label": "ALERT1"}
        ]
