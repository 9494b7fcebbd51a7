"""
Scheduler error types.

Rule errors are raised synchronously while parsing a repeat rule or an anchor
date; the HTTP layer returns their message to the client unchanged.
"""

from typing import Any, Dict, Optional


class RepeatRuleError(Exception):
    """Base exception for repeat rule and anchor date failures"""

    code = "INVALID_REPEAT_RULE"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class EmptyRuleError(RepeatRuleError):
    code = "EMPTY_RULE"

    def __init__(self):
        super().__init__("empty repeat rule")


class InvalidAnchorDateError(RepeatRuleError):
    code = "INVALID_ANCHOR_DATE"

    def __init__(self, value: str):
        super().__init__(
            f"invalid date format: {value!r} is not a YYYYMMDD date",
            details={"date": value},
        )


class UnsupportedRuleKindError(RepeatRuleError):
    code = "UNSUPPORTED_RULE_KIND"

    def __init__(self, kind: str):
        super().__init__(f"unsupported repeat format {kind}", details={"kind": kind})


class MissingArgumentError(RepeatRuleError):
    code = "MISSING_ARGUMENT"


class UnexpectedArgumentError(RepeatRuleError):
    code = "UNEXPECTED_ARGUMENT"


class OutOfRangeError(RepeatRuleError):
    code = "OUT_OF_RANGE"


class MalformedNumberError(RepeatRuleError):
    code = "MALFORMED_NUMBER"


class NoMatchFoundError(RepeatRuleError):
    code = "NO_MATCH_FOUND"


class TaskServiceError(Exception):
    """Base exception for task operations"""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class TaskValidationError(TaskServiceError):
    status_code = 400


class TaskNotFoundError(TaskServiceError):
    status_code = 404

    def __init__(self, task_id: str = ""):
        self.task_id = task_id
        super().__init__("task not found")
