# utils/datetime_utils.py

import calendar
from datetime import datetime, date, timedelta

import pytz

DEFAULT_TZ = pytz.utc

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def now_in(tz: pytz.BaseTzInfo = DEFAULT_TZ) -> datetime:
    return datetime.now(tz)


def to_local(dt: datetime, tz: pytz.BaseTzInfo = DEFAULT_TZ) -> datetime:
    """Привести время к часовому поясу пользователя (naive - уже локальное)"""
    if dt.tzinfo is None:
        return tz.localize(dt)
    return dt.astimezone(tz)


def local_date(dt: datetime, tz: pytz.BaseTzInfo = DEFAULT_TZ) -> date:
    return to_local(dt, tz).date()


def start_of_week(day: date, week_starts_on_monday: bool = True) -> date:
    if week_starts_on_monday:
        offset = day.weekday()
    else:
        offset = (day.weekday() + 1) % 7
    return day - timedelta(days=offset)


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def start_of_year(day: date) -> date:
    return day.replace(month=1, day=1)


def days_in_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def weekday_label(day: date) -> str:
    return WEEKDAY_LABELS[day.weekday()]
