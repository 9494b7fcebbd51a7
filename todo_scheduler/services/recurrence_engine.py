"""
Recurrence Engine

Computes the next occurrence of a repeating task: the earliest date matching the
task's repeat rule that is strictly after both its anchor date and "now".
All comparisons are made on calendar days; time of day is discarded.
"""

import calendar
import re
from datetime import date, datetime, timedelta
from typing import FrozenSet, Union

from todo_scheduler.models.repeat_rule import (
    DailyRule,
    DayToken,
    MonthDay,
    MonthlyRule,
    RepeatRule,
    WeeklyRule,
    YearlyRule,
)
from todo_scheduler.services.errors import (
    EmptyRuleError,
    InvalidAnchorDateError,
    NoMatchFoundError,
)
from todo_scheduler.services.recurrence_validator import RecurrenceValidator
from todo_scheduler.utils.logger import get_logger

logger = get_logger(__name__)

DATE_FORMAT = "%Y%m%d"

# Monthly rules such as "m 29 2" only match in leap years, up to 8 years apart.
MAX_SEARCH_YEARS = 10

ONE_DAY = timedelta(days=1)

_DATE_TEXT = re.compile(r"[0-9]{8}")


def parse_date(value: str) -> date:
    """Parse a YYYYMMDD string into a date."""
    if not isinstance(value, str) or not _DATE_TEXT.fullmatch(value):
        raise InvalidAnchorDateError(value)
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise InvalidAnchorDateError(value)


def format_date(value: date) -> str:
    """Format a date as YYYYMMDD."""
    return value.strftime(DATE_FORMAT)


def next_date(now: Union[date, datetime], start: str, repeat: str) -> str:
    """
    Compute the next occurrence of a repeating task.

    Args:
        now: Reference date; the result is strictly after it
        start: Anchor date of the task as YYYYMMDD
        repeat: Repeat rule text, e.g. "d 7" or "m 1,-1"

    Returns:
        The next occurrence as YYYYMMDD

    Raises:
        RepeatRuleError: If the rule or the anchor date is invalid, or the
            rule has no occurrence within the search horizon
    """
    if not repeat or not repeat.strip():
        raise EmptyRuleError()

    anchor = parse_date(start)
    rule = RecurrenceValidator.parse(repeat)

    try:
        result = calculate_next_occurrence(rule, anchor, now)
    except OverflowError:
        raise NoMatchFoundError(
            f"no date matching {repeat!r} before the end of the calendar",
            details={"rule": repeat, "start": start},
        )
    return format_date(result)


def calculate_next_occurrence(rule: RepeatRule, start: date, now: Union[date, datetime]) -> date:
    """Advance `start` to the first date matching `rule` strictly after `now`."""
    today = _as_date(now)

    if isinstance(rule, DailyRule):
        return _advance_daily(rule, start, today)
    if isinstance(rule, YearlyRule):
        return _advance_yearly(start, today)
    if isinstance(rule, WeeklyRule):
        return _advance_weekly(rule, start, today)
    if isinstance(rule, MonthlyRule):
        return _advance_monthly(rule, start, today)
    raise TypeError(f"unknown repeat rule: {rule!r}")


def _as_date(value: Union[date, datetime]) -> date:
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    return value


def _advance_daily(rule: DailyRule, start: date, now: date) -> date:
    interval = rule.interval_days
    steps = max(1, (now - start).days // interval + 1)
    return start + timedelta(days=steps * interval)


def _add_year(value: date) -> date:
    if value.year >= date.max.year:
        raise OverflowError("date value out of range")
    try:
        return value.replace(year=value.year + 1)
    except ValueError:
        # Feb 29 overflows into Mar 1 of a common year
        return date(value.year + 1, 3, 1)


def _advance_yearly(start: date, now: date) -> date:
    result = _add_year(start)
    while result <= now:
        result = _add_year(result)
    return result


def _advance_weekly(rule: WeeklyRule, start: date, now: date) -> date:
    current = max(start, now)
    for _ in range(7):
        current += ONE_DAY
        if current.isoweekday() in rule.days_of_week:
            return current
    raise NoMatchFoundError("weekly rule has no weekdays")


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _matches_month_day(days: FrozenSet[DayToken], value: date) -> bool:
    if value.day in days:
        return True
    last = last_day_of_month(value.year, value.month)
    if MonthDay.LAST in days and value.day == last:
        return True
    return MonthDay.SECOND_TO_LAST in days and value.day == last - 1


def _advance_monthly(rule: MonthlyRule, start: date, now: date) -> date:
    current = max(start, now)
    try:
        limit = current.replace(year=current.year + MAX_SEARCH_YEARS, day=1)
    except ValueError:
        limit = date.max

    while current < limit:
        current += ONE_DAY
        if not rule.allows_month(current.month):
            continue
        if _matches_month_day(rule.days, current):
            return current

    logger.warning(
        "Monthly rule has no occurrence within search horizon",
        days=sorted(str(day) for day in rule.days),
        months=sorted(rule.months),
        years=MAX_SEARCH_YEARS,
    )
    raise NoMatchFoundError(
        f"no matching date within {MAX_SEARCH_YEARS} years",
        details={"from": format_date(max(start, now))},
    )
