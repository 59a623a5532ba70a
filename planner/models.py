from dataclasses import dataclass, field
from typing import Union


# ---------- правила повтора ----------

@dataclass(frozen=True, slots=True)
class Daily:
    """Every `interval` days (1..399)."""

    interval: int


@dataclass(frozen=True, slots=True)
class Yearly:
    """Same day every year."""


@dataclass(frozen=True, slots=True)
class Weekly:
    """Listed ISO weekdays: 1 = Monday ... 7 = Sunday."""

    days: frozenset[int]


@dataclass(frozen=True, slots=True)
class Monthly:
    """Listed days of the listed months.

    A day is 1..31, -1 (last day of the month) or -2 (the day before it).
    An empty `months` set means every month.
    """

    days: tuple[int, ...]
    months: frozenset[int] = field(default_factory=frozenset)


Rule = Union[Daily, Yearly, Weekly, Monthly]


# ---------- задача ----------

@dataclass(frozen=True, slots=True)
class Task:
    id: str = ""
    date: str = ""      # YYYYMMDD
    title: str = ""
    comment: str = ""
    repeat: str = ""    # "" => без повтора

    @property
    def repeats(self) -> bool:
        return bool(self.repeat)
