# SPDX-License-Identifier: MIT

import re
from enum import Enum

import pendulum


class Precision(Enum):
    WITH_SECONDS = "with_seconds"
    WITHOUT_SECONDS = "without_seconds"


class InvalidTimeFormatError(ValueError):
    """Raised when time text does not match the expected literal format."""

    def __init__(self, text: str, precision: Precision) -> None:
        super().__init__(
            f"'{text}' does not match the format {input_format_hint(precision)}"
        )
        self.text = text
        self.precision = precision


_WITH_SECONDS_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2}) (\d{2}):(\d{2}):(\d{2})", re.ASCII
)
_WITHOUT_SECONDS_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2}) (\d{2}):(\d{2})", re.ASCII)


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def precision_for(show_seconds: bool) -> Precision:
    if show_seconds:
        return Precision.WITH_SECONDS
    return Precision.WITHOUT_SECONDS


def input_format_hint(precision: Precision) -> str:
    if precision is Precision.WITH_SECONDS:
        return "YYYY-MM-DD HH:MM:SS"
    return "YYYY-MM-DD HH:MM"


def parse_local_datetime(text: str, precision: Precision) -> pendulum.DateTime:
    """
    Parse user supplied time text in the process-local timezone.

    Only the literal format for the given precision is accepted. There is
    no lenient fallback: "2024-01-01 09:00" is rejected when seconds are
    expected and vice versa.

    Raises:
        InvalidTimeFormatError: If the text does not match the format or
            names an impossible date or time
    """
    if precision is Precision.WITH_SECONDS:
        match = _WITH_SECONDS_PATTERN.fullmatch(text)
    else:
        match = _WITHOUT_SECONDS_PATTERN.fullmatch(text)
    if match is None:
        raise InvalidTimeFormatError(text, precision)

    parts = [int(group) for group in match.groups()]
    if len(parts) == 5:
        parts.append(0)
    year, month, day, hour, minute, second = parts

    try:
        local_value = pendulum.datetime(
            year, month, day, hour, minute, second, tz="local"
        )
    except ValueError as e:
        raise InvalidTimeFormatError(text, precision) from e
    return local_value.in_tz("UTC")


def format_local_datetime(datetime: pendulum.DateTime, precision: Precision) -> str:
    if precision is Precision.WITH_SECONDS:
        return datetime.in_tz("local").format("YYYY-MM-DD HH:mm:ss")
    return datetime.in_tz("local").format("YYYY-MM-DD HH:mm")


def format_local_time(datetime: pendulum.DateTime, precision: Precision) -> str:
    if precision is Precision.WITH_SECONDS:
        return datetime.in_tz("local").format("HH:mm:ss")
    return datetime.in_tz("local").format("HH:mm")


def format_duration(seconds: int, precision: Precision) -> str:
    hours = seconds // 3600
    minutes = seconds % 3600 // 60
    if precision is Precision.WITH_SECONDS:
        return f"{hours:02}:{minutes:02}:{seconds % 60:02}"
    return f"{hours:02}:{minutes:02}"


def local_day_of(datetime: pendulum.DateTime) -> str:
    """Calendar day of an instant in local time, as 'YYYY-MM-DD'."""
    return datetime.in_tz("local").format("YYYY-MM-DD")


def local_day_from_str(date_str: str) -> str:
    """Validate a 'YYYY-MM-DD' day string and return it normalized."""
    parsed = pendulum.parse(date_str, tz="local", exact=True)
    if not isinstance(parsed, pendulum.Date):
        raise ValueError(f"not a day: {date_str!r}")
    return parsed.format("YYYY-MM-DD")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    parsed = pendulum.parse(datetime)
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"not a date-time: {datetime!r}")
    return parsed.in_tz("UTC")

