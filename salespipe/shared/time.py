from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Callable, Union

Clock = Callable[[], date]
Now = Union[date, datetime, Callable[[], Union[date, datetime]]]


def system_clock() -> date:
    return date.today()


def resolve_today(now: Now) -> date:
    """Accept a date, a datetime, or a zero-argument time source."""
    value = now() if callable(now) else now
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Unsupported clock value: {value!r}")


def days_in_month(value: date) -> int:
    return calendar.monthrange(value.year, value.month)[1]
