"""Tests for repeat rule parsing."""

import pytest

from todo_scheduler.models.repeat_rule import (
    DailyRule,
    MonthDay,
    MonthlyRule,
    WeeklyRule,
    YearlyRule,
)
from todo_scheduler.services.errors import (
    EmptyRuleError,
    MalformedNumberError,
    MissingArgumentError,
    OutOfRangeError,
    UnexpectedArgumentError,
    UnsupportedRuleKindError,
)
from todo_scheduler.services.recurrence_validator import RecurrenceValidator


class TestParse:

    def test_daily(self):
        assert RecurrenceValidator.parse("d 7") == DailyRule(interval_days=7)

    def test_extra_whitespace_is_ignored(self):
        assert RecurrenceValidator.parse("  d   7 ") == DailyRule(interval_days=7)

    def test_yearly(self):
        assert RecurrenceValidator.parse("y") == YearlyRule()

    def test_yearly_ignores_trailing_tokens(self):
        assert RecurrenceValidator.parse("y 5 whatever") == YearlyRule()

    def test_weekly(self):
        assert RecurrenceValidator.parse("w 7,1,1") == WeeklyRule(days_of_week=frozenset({1, 7}))

    def test_monthly_with_sentinels(self):
        rule = RecurrenceValidator.parse("m 1,-1,-2")
        assert rule == MonthlyRule(days=frozenset({1, MonthDay.LAST, MonthDay.SECOND_TO_LAST}))
        assert rule.months == frozenset()
        assert rule.allows_month(2)

    def test_monthly_with_months(self):
        rule = RecurrenceValidator.parse("m 15 3,6,9,12")
        assert rule == MonthlyRule(days=frozenset({15}), months=frozenset({3, 6, 9, 12}))
        assert rule.allows_month(6)
        assert not rule.allows_month(5)

    def test_sentinels_do_not_collide_with_day_numbers(self):
        rule = RecurrenceValidator.parse("m -1")
        assert 1 not in rule.days
        assert MonthDay.LAST in rule.days

    def test_rules_are_immutable(self):
        rule = RecurrenceValidator.parse("d 3")
        with pytest.raises(AttributeError):
            rule.interval_days = 4


class TestParseErrors:

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty(self, text):
        with pytest.raises(EmptyRuleError) as exc_info:
            RecurrenceValidator.parse(text)
        assert str(exc_info.value) == "empty repeat rule"
        assert exc_info.value.code == "EMPTY_RULE"

    @pytest.mark.parametrize("text", ["x", "D 1", "daily", "1"])
    def test_unsupported_kind(self, text):
        with pytest.raises(UnsupportedRuleKindError) as exc_info:
            RecurrenceValidator.parse(text)
        assert text.split()[0] in str(exc_info.value)

    def test_daily_interval_bounds(self):
        assert RecurrenceValidator.parse("d 1") == DailyRule(interval_days=1)
        assert RecurrenceValidator.parse("d 400") == DailyRule(interval_days=400)
        with pytest.raises(OutOfRangeError) as exc_info:
            RecurrenceValidator.parse("d 401")
        assert str(exc_info.value) == "interval should be between 1 and 400"

    def test_daily_takes_one_argument(self):
        with pytest.raises(UnexpectedArgumentError):
            RecurrenceValidator.parse("d 1 2")

    @pytest.mark.parametrize("text", ["d 1.5", "d 1_0", "d ٣", "w 1,x", "w 1,,2", "m 1,a", "m 1 1,b"])
    def test_malformed_numbers(self, text):
        with pytest.raises(MalformedNumberError):
            RecurrenceValidator.parse(text)

    def test_weekly_error_names_token(self):
        with pytest.raises(OutOfRangeError) as exc_info:
            RecurrenceValidator.parse("w 1,8")
        assert "8" in str(exc_info.value)
        assert exc_info.value.details == {"day": "8"}

    @pytest.mark.parametrize("text", ["m -01", "m -02", "m 5,-001"])
    def test_sentinels_must_be_written_exactly(self, text):
        with pytest.raises(OutOfRangeError):
            RecurrenceValidator.parse(text)

    def test_monthly_error_names_month(self):
        with pytest.raises(OutOfRangeError) as exc_info:
            RecurrenceValidator.parse("m 1 12,13")
        assert "13" in str(exc_info.value)

    @pytest.mark.parametrize("text", ["d", "w", "m"])
    def test_missing_arguments(self, text):
        with pytest.raises(MissingArgumentError):
            RecurrenceValidator.parse(text)
