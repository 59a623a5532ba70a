"""
Ошибки планировщика.

    PlannerError
    ├── InvalidDateFormatError
    ├── RuleError
    │   ├── UnsupportedRuleKindError
    │   ├── InvalidRuleShapeError
    │   ├── InvalidIntervalError
    │   ├── InvalidWeekdayError
    │   ├── InvalidMonthDayError
    │   └── InvalidMonthError
    ├── OccurrenceError
    │   ├── NoMatchingWeekdayError
    │   └── NoSuitableDateError
    └── TaskError
        ├── EmptyTitleError
        └── TaskNotFoundError

Хендлеры ловят PlannerError и показывают текст пользователю.
"""


class PlannerError(Exception):
    """Base class for scheduler errors."""


class InvalidDateFormatError(PlannerError):
    """Date is not a valid YYYYMMDD calendar day."""


# ---------- правила повтора ----------

class RuleError(PlannerError):
    """Recurrence rule string was rejected."""


class UnsupportedRuleKindError(RuleError):
    pass


class InvalidRuleShapeError(RuleError):
    pass


class InvalidIntervalError(RuleError):
    pass


class InvalidWeekdayError(RuleError):
    pass


class InvalidMonthDayError(RuleError):
    pass


class InvalidMonthError(RuleError):
    pass


# ---------- поиск даты ----------

class OccurrenceError(PlannerError):
    """A parsed rule produced no next date."""


class NoMatchingWeekdayError(OccurrenceError):
    pass


class NoSuitableDateError(OccurrenceError):
    pass


# ---------- задачи ----------

class TaskError(PlannerError):
    pass


class EmptyTitleError(TaskError):
    pass


class TaskNotFoundError(TaskError):
    pass
