"""Tests for parsing POSIX TZ strings."""

import datetime

import pytest

from zonefile import tz_rule


def test_standard() -> None:
    """Test standard time with no daylight savings time."""
    rule = tz_rule.parse_posix_rule("EST5")
    assert rule.std.name == "EST"
    assert rule.std.utc_offset == datetime.timedelta(hours=-5)
    assert rule.dst is None
    assert rule.dst_start is None
    assert rule.dst_end is None
    assert rule.dst_difference is None


@pytest.mark.parametrize(
    "tz_str,name,offset",
    [
        ("EST+5", "EST", datetime.timedelta(hours=-5)),
        ("JST-9", "JST", datetime.timedelta(hours=9)),
        ("EXT05:30:20", "EXT", datetime.timedelta(hours=-5, minutes=-30, seconds=-20)),
        ("<+0330>-3:30", "+0330", datetime.timedelta(hours=3, minutes=30)),
        ("<-03>3", "-03", datetime.timedelta(hours=-3)),
        ("GMT0", "GMT", datetime.timedelta(0)),
    ],
)
def test_standard_offsets(tz_str: str, name: str, offset: datetime.timedelta) -> None:
    """Test standard time names and offsets."""
    rule = tz_rule.parse_posix_rule(tz_str)
    assert rule.std.name == name
    assert rule.std.utc_offset == offset
    assert rule.dst is None


def test_dst_implicit_offset() -> None:
    """Test daylight savings time with an implicit offset."""
    rule = tz_rule.parse_posix_rule("PST8PDT")
    assert rule.std.name == "PST"
    assert rule.std.utc_offset == datetime.timedelta(hours=-8)
    assert rule.dst
    assert rule.dst.name == "PDT"
    assert rule.dst.utc_offset == datetime.timedelta(hours=-7)
    assert rule.dst_difference == datetime.timedelta(hours=1)
    assert rule.dst_start is None
    assert rule.dst_end is None


def test_dst_explicit_offset() -> None:
    """Test daylight savings time with an explicit offset."""
    rule = tz_rule.parse_posix_rule("LHST-10:30LHDT-11")
    assert rule.std.utc_offset == datetime.timedelta(hours=10, minutes=30)
    assert rule.dst
    assert rule.dst.utc_offset == datetime.timedelta(hours=11)
    assert rule.dst_difference == datetime.timedelta(minutes=30)


def test_dst_rules() -> None:
    """Test daylight savings start/end value."""
    rule = tz_rule.parse_posix_rule("EST+5EDT,M3.2.0/2,M11.1.0/2")
    assert rule.std.name == "EST"
    assert rule.dst
    assert rule.dst.name == "EDT"
    assert rule.dst_start == tz_rule.RuleMonthWeekDay(
        month=3, week_of_month=2, day_of_week=0, time=datetime.timedelta(hours=2)
    )
    assert rule.dst_end == tz_rule.RuleMonthWeekDay(
        month=11, week_of_month=1, day_of_week=0, time=datetime.timedelta(hours=2)
    )
    assert isinstance(rule.dst_start, tz_rule.RuleMonthWeekDay)
    assert rule.dst_start.rrule_str == "FREQ=YEARLY;BYMONTH=3;BYDAY=2SU"


def test_dst_implicit_time_rules() -> None:
    """Test daylight savings values rules with no explicit time."""
    rule = tz_rule.parse_posix_rule("CET-1CEST,M3.5.0,M10.5.0/3")
    assert isinstance(rule.dst_start, tz_rule.RuleMonthWeekDay)
    assert rule.dst_start.time == datetime.timedelta(hours=2)
    assert rule.dst_start.rrule_str == "FREQ=YEARLY;BYMONTH=3;BYDAY=-1SU"
    assert isinstance(rule.dst_end, tz_rule.RuleMonthWeekDay)
    assert rule.dst_end.time == datetime.timedelta(hours=3)


def test_negative_and_extended_times() -> None:
    """Test transition times outside of a single day."""
    rule = tz_rule.parse_posix_rule("<-02>2<-01>,M3.5.0/-1,M10.5.0/0")
    assert rule.std.name == "-02"
    assert rule.dst
    assert rule.dst.name == "-01"
    assert rule.dst.utc_offset == datetime.timedelta(hours=-1)
    assert rule.dst_start
    assert rule.dst_start.time == datetime.timedelta(hours=-1)

    rule = tz_rule.parse_posix_rule("IST-2IDT,M3.4.4/26,M10.5.0")
    assert rule.dst_start
    assert rule.dst_start.time == datetime.timedelta(hours=26)


def test_julian_day_rules() -> None:
    """Test rules with julian and zero-based days of the year."""
    rule = tz_rule.parse_posix_rule("<+0330>-3:30<+0430>,J79/24,J263/24")
    assert rule.dst_start == tz_rule.RuleJulianDay(
        day_of_year=79, time=datetime.timedelta(hours=24)
    )
    assert rule.dst_end == tz_rule.RuleJulianDay(
        day_of_year=263, time=datetime.timedelta(hours=24)
    )

    rule = tz_rule.parse_posix_rule("XST3XDT,0/0,365/25")
    assert rule.dst_start == tz_rule.RuleOrdinalDay(
        day_of_year=0, time=datetime.timedelta(0)
    )
    assert rule.dst_end == tz_rule.RuleOrdinalDay(
        day_of_year=365, time=datetime.timedelta(hours=25)
    )


@pytest.mark.parametrize(
    "tz_str",
    [
        "",
        "5EST",
        "EST",
        "EST5EDT,M3.2.0",
        "EST5,M3.2.0,M11.1.0",
        "EST5EDT,M3.2.0,M11.1.0,",
        "EST25",
        "EST5:60",
        "EST5EDT,M13.1.0,M11.1.0",
        "EST5EDT,M3.6.0,M11.1.0",
        "EST5EDT,M3.2.7,M11.1.0",
        "EST5EDT,J0,J365",
        "EST5EDT,0,366",
        "EST5EDT,M3.2.0/168,M11.1.0",
    ],
)
def test_invalid_rules(tz_str: str) -> None:
    """Test TZ strings that may not be parsed."""
    with pytest.raises(ValueError):
        tz_rule.parse_posix_rule(tz_str)
