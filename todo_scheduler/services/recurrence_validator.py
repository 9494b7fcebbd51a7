"""Recurrence Validator.

Parses the compact repeat rule grammar stored with every task:

    d <interval>          every N days, 1 <= N <= 400
    y                     every year
    w <weekdays>          comma-separated weekdays, 1=Monday..7=Sunday
    m <days> [<months>]   comma-separated days of month (1..31, -1 last, -2 second to last)
                          optionally limited to comma-separated months (1..12)
"""
import re
from typing import FrozenSet, List, Set

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
    MalformedNumberError,
    MissingArgumentError,
    OutOfRangeError,
    UnexpectedArgumentError,
    UnsupportedRuleKindError,
)
from todo_scheduler.utils.logger import get_logger

logger = get_logger(__name__)

MIN_INTERVAL = 1
MAX_INTERVAL = 400

_INTEGER = re.compile(r"[+-]?[0-9]+")


class RecurrenceValidator:
    """Validate repeat rule text and turn it into a RepeatRule."""

    @staticmethod
    def parse(repeat: str) -> RepeatRule:
        """
        Parse a repeat rule.

        Args:
            repeat: Rule text, e.g. "d 7", "y", "w 1,5", "m -1 1,6"

        Returns:
            The parsed rule

        Raises:
            RepeatRuleError: If the rule is empty or malformed
        """
        parts = (repeat or "").split()
        if not parts:
            raise EmptyRuleError()

        kind, args = parts[0], parts[1:]
        if kind == "d":
            return RecurrenceValidator._parse_daily(args)
        if kind == "y":
            if args:
                logger.debug("Ignoring arguments of yearly rule", rule=repeat)
            return YearlyRule()
        if kind == "w":
            return RecurrenceValidator._parse_weekly(args)
        if kind == "m":
            return RecurrenceValidator._parse_monthly(args)

        logger.debug("Unsupported repeat rule", rule=repeat)
        raise UnsupportedRuleKindError(kind)

    @staticmethod
    def _parse_daily(args: List[str]) -> DailyRule:
        if not args:
            raise MissingArgumentError("missing interval for daily rule")
        if len(args) > 1:
            raise UnexpectedArgumentError(
                f"daily rule takes a single interval, got: {' '.join(args)}",
                details={"arguments": args},
            )

        interval = _to_int(args[0], f"invalid interval: {args[0]}")
        if not MIN_INTERVAL <= interval <= MAX_INTERVAL:
            raise OutOfRangeError(
                f"interval should be between {MIN_INTERVAL} and {MAX_INTERVAL}",
                details={"interval": interval},
            )
        return DailyRule(interval_days=interval)

    @staticmethod
    def _parse_weekly(args: List[str]) -> WeeklyRule:
        if not args:
            raise MissingArgumentError("missing days for weekly rule")

        days = set()
        for token in _split_list(args[0]):
            day = _to_int(token, f"invalid day: {token}")
            if not 1 <= day <= 7:
                raise OutOfRangeError(
                    f"invalid day: {token}, days must be in range from 1 to 7",
                    details={"day": token},
                )
            days.add(day)
        return WeeklyRule(days_of_week=frozenset(days))

    @staticmethod
    def _parse_monthly(args: List[str]) -> MonthlyRule:
        if not args:
            raise MissingArgumentError("missing days for monthly rule")

        days: Set[DayToken] = set()
        for token in _split_list(args[0]):
            # sentinels are matched literally, so "-01" is just an out-of-range day
            if token == str(MonthDay.LAST.value):
                days.add(MonthDay.LAST)
                continue
            if token == str(MonthDay.SECOND_TO_LAST.value):
                days.add(MonthDay.SECOND_TO_LAST)
                continue

            day = _to_int(token, f"invalid day: {token}")
            if 1 <= day <= 31:
                days.add(day)
            else:
                raise OutOfRangeError(
                    f"invalid day: {token}, day must be between 1 and 31, or -1, -2",
                    details={"day": token},
                )

        months: FrozenSet[int] = frozenset()
        if len(args) > 1:
            months = RecurrenceValidator._parse_months(args[1])
        return MonthlyRule(days=frozenset(days), months=months)

    @staticmethod
    def _parse_months(text: str) -> FrozenSet[int]:
        months = set()
        for token in _split_list(text):
            month = _to_int(token, f"invalid month: {token}")
            if not 1 <= month <= 12:
                raise OutOfRangeError(
                    f"invalid month: {token}, month must be between 1 and 12",
                    details={"month": token},
                )
            months.add(month)
        return frozenset(months)


def _split_list(text: str) -> List[str]:
    return [token.strip() for token in text.split(",")]


def _to_int(token: str, message: str) -> int:
    # int() alone would also accept "1_0" and non-ASCII digits
    if not _INTEGER.fullmatch(token):
        raise MalformedNumberError(message, details={"value": token})
    return int(token)
