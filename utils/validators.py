import re

from pytz import all_timezones_set

from utils.datetime_utils import parse_day

_DAY_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def is_valid_habit_name(name: str) -> bool:
    return isinstance(name, str) and bool(name.strip())


def is_valid_date(date_str: str) -> bool:
    if not isinstance(date_str, str) or not _DAY_RE.match(date_str):
        return False
    try:
        parse_day(date_str)
    except ValueError:
        return False
    return True


def is_valid_timezone(tz_name: str) -> bool:
    return tz_name in all_timezones_set
