# utils/datetime_utils.py

from datetime import date, datetime, timedelta
from typing import Callable

import pytz

DAY_FORMAT = "%Y-%m-%d"
DEFAULT_TIMEZONE = "UTC"

TodayProvider = Callable[[], date]


def now_in(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    return datetime.now(pytz.timezone(tz_name))


def utc_today() -> date:
    return now_in(DEFAULT_TIMEZONE).date()


def make_today_provider(tz_name: str = DEFAULT_TIMEZONE) -> TodayProvider:
    """Вернуть функцию "сегодня" для заданной зоны (для инъекции в контроллер)"""
    tz = pytz.timezone(tz_name)

    def today() -> date:
        return datetime.now(tz).date()

    return today


def day_id(value: date) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(DAY_FORMAT)


def parse_day(day_str: str) -> date:
    return datetime.strptime(day_str, DAY_FORMAT).date()


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def now_iso() -> str:
    """ISO-8601 UTC с миллисекундами и суффиксом Z"""
    stamp = datetime.now(pytz.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")
