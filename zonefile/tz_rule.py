"""Library for parsing POSIX TZ rule strings.

The footer of a v2+ TZif file holds a TZ string that describes local time
after the last transition. TZ strings have these two formats:

No DST: std offset
  - std: Name of the timezone, either alphabetic or quoted e.g. <+0330>
  - offset: Time added to local time to get UTC
  Example: EST+5

DST: std offset dst [offset],start[/time],end[/time]
  - dst: Name of the Daylight savings time timezone
  - offset: Defaults to 1 hour ahead of STD offset if not specified
  - start & end: Time period when DST is in effect. The start/end have
    the following formats:
      Jn: A julian day between 1 and 365 (Feb 29th never counted)
      n: A zero-based day between 0 and 365 (Feb 29th is counted in leap years)
      Mm.w.d:
          m: Month between 1 and 12
          d: Between 0 (Sunday) and 6 (Saturday)
          w: Between 1 and 5. Week 5 is the last week d occurs
      The time field is in hh:mm:ss. The hour can be 167 to -167.

Rules are parsed into fields only, no dates are computed from them.
"""

from __future__ import annotations

import datetime
import logging
import re
from dataclasses import dataclass
from typing import Union

__all__ = [
    "PosixRule",
    "RuleJulianDay",
    "RuleMonthWeekDay",
    "RuleOffset",
    "RuleOrdinalDay",
    "parse_posix_rule",
]

_LOGGER = logging.getLogger(__name__)

_DEFAULT_TIME = datetime.timedelta(hours=2)
_DEFAULT_DST_DELTA = datetime.timedelta(hours=1)
_MAX_OFFSET_HOURS = 24
_MAX_TIME_HOURS = 167
_RRULE_WEEKDAYS = ("SU", "MO", "TU", "WE", "TH", "FR", "SA")


@dataclass(frozen=True)
class RuleJulianDay:
    """A rule date given as a julian day, Feb 29th is never counted."""

    day_of_year: int
    """A day of the year between 1 and 365."""

    time: datetime.timedelta
    """Local time of day when the rule goes into effect, default of 02:00:00."""


@dataclass(frozen=True)
class RuleOrdinalDay:
    """A rule date given as a zero-based day of the year, Feb 29th is counted."""

    day_of_year: int
    """A day of the year between 0 and 365."""

    time: datetime.timedelta
    """Local time of day when the rule goes into effect, default of 02:00:00."""


@dataclass(frozen=True)
class RuleMonthWeekDay:
    """A rule date given as the nth weekday of a month."""

    month: int
    """A month between 1 and 12."""

    week_of_month: int
    """A week number of the month (1 to 5) where 5 means the last occurrence."""

    day_of_week: int
    """A day of the week between 0 (Sunday) and 6 (Saturday)."""

    time: datetime.timedelta
    """Local time of day when the rule goes into effect, default of 02:00:00."""

    @property
    def rrule_str(self) -> str:
        """Return an rfc5545 recurrence rule string for this rule date."""
        week = -1 if self.week_of_month == 5 else self.week_of_month
        return ";".join(
            [
                "FREQ=YEARLY",
                f"BYMONTH={self.month}",
                f"BYDAY={week}{_RRULE_WEEKDAYS[self.day_of_week]}",
            ]
        )


RuleDate = Union[RuleJulianDay, RuleOrdinalDay, RuleMonthWeekDay]


@dataclass(frozen=True)
class RuleOffset:
    """A named offset from UTC used by a rule."""

    name: str
    """The designation of local time e.g. EST."""

    utc_offset: datetime.timedelta
    """UTC offset of local time (not the time added to local time)."""


@dataclass(frozen=True)
class PosixRule:
    """A rule for evaluating future timezone transitions."""

    std: RuleOffset
    """Local time when daylight savings time is not in effect."""

    dst: RuleOffset | None = None
    """Local time when daylight savings time is in effect."""

    dst_start: RuleDate | None = None
    """Describes when dst goes into effect."""

    dst_end: RuleDate | None = None
    """Describes when dst ends (std starts)."""

    @property
    def dst_difference(self) -> datetime.timedelta | None:
        """Return the amount local time moves forward while dst is in effect."""
        if self.dst is None:
            return None
        return self.dst.utc_offset - self.std.utc_offset


_NAME_PATTERN = r"(?P<name>[A-Za-z]{3,}|<[A-Za-z0-9+\-]{3,}>)"
_TIME_PATTERN = r"(?P<hour>[+-]?\d{1,3})(?::(?P<minutes>\d{2})(?::(?P<seconds>\d{2}))?)?"
_OFFSET_RE_PATTERN = re.compile(_NAME_PATTERN + r"(?:" + _TIME_PATTERN + r")?")
_DATE_RE_PATTERN = re.compile(
    r",(?:"
    r"J(?P<julian>\d{1,3})"
    r"|(?P<ordinal>\d{1,3})"
    r"|M(?P<month>\d{1,2})\.(?P<week_of_month>\d)\.(?P<day_of_week>\d)"
    r")"
    r"(?:/" + _TIME_PATTERN + r")?"
)


def _parse_time(match: re.Match[str], max_hours: int) -> datetime.timedelta | None:
    """Convert a [+/-]hh[:mm[:ss]] match group to a timedelta."""
    if (hour := match.group("hour")) is None:
        return None
    sign = 1
    if hour.startswith("+"):
        hour = hour[1:]
    elif hour.startswith("-"):
        sign = -1
        hour = hour[1:]
    hours = int(hour)
    minutes = int(match.group("minutes") or "0")
    seconds = int(match.group("seconds") or "0")
    if hours > max_hours:
        raise ValueError(f"Hours must be in [0, {max_hours}]: {match.group(0)}")
    if minutes > 59 or seconds > 59:
        raise ValueError(f"Minutes/seconds must be in [0, 59]: {match.group(0)}")
    return sign * datetime.timedelta(hours=hours, minutes=minutes, seconds=seconds)


def _rule_offset_from_match(
    match: re.Match[str], default: datetime.timedelta | None = None
) -> RuleOffset:
    """Create a rule offset from a regex match.

    POSIX offsets are the time added to local time to get UTC, so the sign
    is inverted to produce a UTC offset.
    """
    name = match.group("name").strip("<>")
    if (offset := _parse_time(match, _MAX_OFFSET_HOURS)) is not None:
        return RuleOffset(name=name, utc_offset=-offset)
    if default is None:
        raise ValueError(f"Missing required offset for {name}")
    return RuleOffset(name=name, utc_offset=default)


def _rule_date_from_match(match: re.Match[str]) -> RuleDate:
    """Create a rule date from a regex match."""
    time = _parse_time(match, _MAX_TIME_HOURS)
    if time is None:
        time = _DEFAULT_TIME
    if (julian := match.group("julian")) is not None:
        if not 1 <= int(julian) <= 365:
            raise ValueError(f"Julian day must be in [1, 365]: {match.group(0)}")
        return RuleJulianDay(day_of_year=int(julian), time=time)
    if (ordinal := match.group("ordinal")) is not None:
        if not 0 <= int(ordinal) <= 365:
            raise ValueError(f"Day of year must be in [0, 365]: {match.group(0)}")
        return RuleOrdinalDay(day_of_year=int(ordinal), time=time)
    month = int(match.group("month"))
    week_of_month = int(match.group("week_of_month"))
    day_of_week = int(match.group("day_of_week"))
    if not (1 <= month <= 12 and 1 <= week_of_month <= 5 and 0 <= day_of_week <= 6):
        raise ValueError(f"Invalid month/week/day rule date: {match.group(0)}")
    return RuleMonthWeekDay(
        month=month,
        week_of_month=week_of_month,
        day_of_week=day_of_week,
        time=time,
    )


def parse_posix_rule(tz_str: str) -> PosixRule:
    """Parse the TZ string into a PosixRule object."""
    buffer = tz_str
    if (std_match := _OFFSET_RE_PATTERN.match(buffer)) is None:
        raise ValueError(f"Unable to parse TZ string: {tz_str}")
    buffer = buffer[std_match.end() :]
    std = _rule_offset_from_match(std_match)

    dst = None
    if (dst_match := _OFFSET_RE_PATTERN.match(buffer)) is not None:
        buffer = buffer[dst_match.end() :]
        dst = _rule_offset_from_match(
            dst_match, default=std.utc_offset + _DEFAULT_DST_DELTA
        )
    if (start_match := _DATE_RE_PATTERN.match(buffer)) is not None:
        buffer = buffer[start_match.end() :]
    if (end_match := _DATE_RE_PATTERN.match(buffer)) is not None:
        buffer = buffer[end_match.end() :]
    if (start_match is None) != (end_match is None):
        raise ValueError(
            f"Unable to parse TZ string, should have both or neither start and end dates: {tz_str}"
        )
    if start_match is not None and dst is None:
        raise ValueError(f"Unable to parse TZ string, dates without dst: {tz_str}")
    if buffer:
        raise ValueError(
            f"Unable to parse TZ string, unexpected trailing data: {tz_str}"
        )
    rule = PosixRule(
        std=std,
        dst=dst,
        dst_start=_rule_date_from_match(start_match) if start_match else None,
        dst_end=_rule_date_from_match(end_match) if end_match else None,
    )
    _LOGGER.debug("Parsed TZ string %s: %s", tz_str, rule)
    return rule
