"""
Conversions of Wikibase time values.

Wikibase encodes times as strings such as ``+1990-00-00T00:00:00Z``:
a sign, a year of at least four digits, and month and day fields that
are ``00`` when the precision is coarser than a day. The time payload of
a snak adds the precision (11 = day, 10 = month, 9 = year, ...).

Every converter accepts either the payload dict or the bare time string.
"""

import logging
from typing import Dict, Optional, Tuple, Union

logger = logging.getLogger(__name__)

TIME_VALUE = Union[str, Dict]

DAY_PRECISION = 11
MONTH_PRECISION = 10
YEAR_PRECISION = 9

MS_PER_DAY = 86_400_000
MAX_EXPANDED_YEAR = 999_999


def _time_and_precision(value: TIME_VALUE) -> Tuple[str, Optional[int]]:
    if isinstance(value, str):
        return value, None
    return value["time"], value.get("precision")


def _split_sign(time: str) -> Tuple[str, str]:
    if time[:1] in ("+", "-"):
        return time[0], time[1:]
    return "+", time


def _parse_time(time: str) -> Tuple[int, int, int, int, int, int]:
    """
    Parse a Wikibase time string into calendar fields.

    Month and day placeholders (``00``) are normalized to ``01``.

    :param time: e.g. ``+2001-12-31T00:00:00Z``
    :return: year, month, day, hour, minute, second
    """
    sign, rest = _split_sign(time)
    date_part, _, within_day = rest.partition("T")
    year, month, day = (int(x) for x in date_part.split("-"))
    if sign == "-":
        year = -year
    if within_day:
        hour, minute, second = (int(x) for x in within_day.rstrip("Z").split(":"))
    else:
        hour = minute = second = 0
    return year, month or 1, day or 1, hour, minute, second


def _parse_time_at_precision(value: TIME_VALUE) -> Tuple[int, int, int, int, int, int]:
    """
    Parse a time value, dropping the fields finer than its precision.

    At month precision the date is the first of the month; at year
    precision or coarser, the first of January. A bare time string
    carries no precision and is kept as is.

    :param value: time payload or time string
    :return: year, month, day, hour, minute, second
    """
    time, precision = _time_and_precision(value)
    year, month, day, hour, minute, second = _parse_time(time)
    if precision is not None and precision < DAY_PRECISION:
        hour = minute = second = 0
        day = 1
        if precision <= YEAR_PRECISION:
            month = 1
    return year, month, day, hour, minute, second


def _days_from_civil(year: int, month: int, day: int) -> int:
    """Days since 1970-01-01 in the proleptic Gregorian calendar."""
    year -= month <= 2
    era = year // 400
    year_of_era = year - era * 400
    day_of_year = (153 * (month + (-3 if month > 2 else 9)) + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * 146097 + day_of_era - 719468


def _format_year(year: int) -> str:
    if 0 <= year <= 9999:
        return f"{year:04d}"
    sign = "-" if year < 0 else "+"
    return f"{sign}{abs(year):06d}"


def wikibase_time_to_iso_string(value: TIME_VALUE) -> str:
    """
    Convert a Wikibase time to an ISO 8601 string.

    >>> wikibase_time_to_iso_string("+1990-00-00T00:00:00Z")
    '1990-01-01T00:00:00.000Z'

    Fields finer than the precision of a payload are dropped, so a year
    precision time starts on the first of January.

    Years that do not fit the six-digit expanded form are returned as the
    raw Wikibase time string.

    :param value: time payload or time string
    :return:
    """
    time, _ = _time_and_precision(value)
    year, month, day, hour, minute, second = _parse_time_at_precision(value)
    if abs(year) > MAX_EXPANDED_YEAR:
        logger.debug(f"Year {year} cannot be expressed as an ISO date, keeping {time}")
        return time
    return (
        f"{_format_year(year)}-{month:02d}-{day:02d}"
        f"T{hour:02d}:{minute:02d}:{second:02d}.000Z"
    )


def wikibase_time_to_epoch_time(value: TIME_VALUE) -> int:
    """
    Convert a Wikibase time to milliseconds since the Unix epoch.

    :param value: time payload or time string
    :return:
    """
    year, month, day, hour, minute, second = _parse_time_at_precision(value)
    days = _days_from_civil(year, month, day)
    return days * MS_PER_DAY + ((hour * 60 + minute) * 60 + second) * 1000


def wikibase_time_to_simple_day(value: TIME_VALUE) -> str:
    """
    Convert a Wikibase time to a day, month or year string depending on precision.

    >>> wikibase_time_to_simple_day({"time": "+1990-00-00T00:00:00Z", "precision": 9})
    '1990'

    A bare time string is taken to have day precision.

    :param value: time payload or time string
    :return:
    """
    time, precision = _time_and_precision(value)
    if precision is None:
        precision = DAY_PRECISION
    sign, rest = _split_sign(time)
    year, month, day = rest.split("T")[0].split("-")
    year = year.lstrip("0") or "0"
    if precision >= DAY_PRECISION:
        simple_day = f"{year}-{month}-{day}"
    elif precision == MONTH_PRECISION:
        simple_day = f"{year}-{month}"
    else:
        simple_day = year
    if sign == "-":
        simple_day = f"-{simple_day}"
    return simple_day


def wikibase_time_to_raw_string(value: TIME_VALUE) -> str:
    """Return the Wikibase time string unchanged."""
    if isinstance(value, str):
        return value
    return value["time"]
