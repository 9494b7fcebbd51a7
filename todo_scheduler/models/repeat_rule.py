"""Repeat rule variants produced by the rule parser."""
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Union


class MonthDay(Enum):
    """Day-of-month sentinels counted from the end of the month."""

    LAST = -1
    SECOND_TO_LAST = -2


# A monthly day token is either a literal day number (1..31) or a sentinel.
DayToken = Union[int, MonthDay]


@dataclass(frozen=True)
class DailyRule:
    """Every `interval_days` days from the anchor date (``d 7``)."""

    interval_days: int


@dataclass(frozen=True)
class YearlyRule:
    """Same calendar day every year (``y``)."""


@dataclass(frozen=True)
class WeeklyRule:
    """Given ISO weekdays, 1=Monday..7=Sunday (``w 1,3,5``)."""

    days_of_week: FrozenSet[int]


@dataclass(frozen=True)
class MonthlyRule:
    """Given days of month, optionally limited to some months (``m 1,-1 3,6``)."""

    days: FrozenSet[DayToken]
    months: FrozenSet[int] = field(default_factory=frozenset)  # empty means every month

    def allows_month(self, month: int) -> bool:
        return not self.months or month in self.months


RepeatRule = Union[DailyRule, YearlyRule, WeeklyRule, MonthlyRule]
