"""Library for querying decoded timezone information.

A `ZoneInfo` holds the tables of a single TZif data block and answers
questions about which local time type is in effect at a given instant.
Instants are POSIX timestamps in seconds. Queries also accept a
`datetime.datetime`, and default to the current time when omitted.

```python
from zonefile import read_zone

zone_info = read_zone("Europe/Amsterdam")
actual = zone_info.actual_zone_info()
print("It's", "summertime!" if actual.is_dst else "cold :(")

if (next_change := zone_info.next_transition_time()) is not None:
    instant, record = next_change
    print("And it will change again at", instant, "to", record.abbreviation)
```
"""

from __future__ import annotations

import bisect
import datetime
import logging
import math
from dataclasses import dataclass

from .exceptions import ZoneInfoFormatError
from .header import Header, TZifVersion
from .model import LocalTimeType, ZoneBody, ZoneRecord
from .tz_rule import PosixRule, parse_posix_rule

__all__ = [
    "ZoneInfo",
    "Timestamp",
]

_LOGGER = logging.getLogger(__name__)

Timestamp = int | datetime.datetime | None


def now_factory() -> datetime.datetime:
    """Factory method for the current time to facilitate mocking."""
    return datetime.datetime.now(tz=datetime.UTC)


def _to_timestamp(value: Timestamp) -> int:
    """Convert a query value to POSIX seconds, naive datetimes are UTC."""
    if value is None:
        value = now_factory()
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=datetime.UTC)
        return math.floor(value.timestamp())
    return value


@dataclass(frozen=True)
class ZoneInfo:
    """The results of parsing a TZif file."""

    body: ZoneBody
    """The data block selected for answering queries."""

    footer: str = ""
    """The raw text following the v2+ data block, empty for v1 files."""

    @property
    def header(self) -> Header:
        """Return the header of the selected data block."""
        return self.body.header

    @property
    def version(self) -> TZifVersion:
        """Return the version of the TZif file."""
        return self.body.header.version

    @property
    def local_time_types(self) -> tuple[LocalTimeType, ...]:
        """Return all local time types declared by the data block."""
        return self.body.local_time_types

    def transitions(self) -> dict[int, ZoneRecord]:
        """Return all transitions ordered by the instant they take effect.

        Fixed offset zones without any transitions contain a single entry at
        the minimum timestamp (see `model.MIN_TIMESTAMP`), which does not
        correspond to a printable date.
        """
        body = self.body
        records: dict[int, ZoneRecord] = {}
        for instant, type_index in zip(body.transition_times, body.transition_types):
            local_time_type = body.local_time_types[type_index]
            records[instant] = ZoneRecord(
                ut_offset=local_time_type.ut_offset,
                is_dst=local_time_type.is_dst,
                abbreviation=local_time_type.abbreviation,
                std_wall=body.std_wall_flag(type_index),
                ut_local=body.ut_local_flag(type_index),
            )
        return dict(sorted(records.items()))

    def leap_second_transitions(self) -> dict[int, int]:
        """Return leap second corrections ordered by occurrence."""
        return dict(
            sorted(
                (leap_second.occurrence, leap_second.correction)
                for leap_second in self.body.leap_seconds
            )
        )

    def actual_zone_info(self, timestamp: Timestamp = None) -> ZoneRecord | None:
        """Return the zone info in effect at the specified instant.

        This is the most recent transition strictly before the instant, or
        None when the instant precedes all transitions.
        """
        value = _to_timestamp(timestamp)
        transitions = self.transitions()
        instants = list(transitions)
        index = bisect.bisect_left(instants, value)
        if index == 0:
            return None
        return transitions[instants[index - 1]]

    def next_transition_time(
        self, timestamp: Timestamp = None
    ) -> tuple[int, ZoneRecord] | None:
        """Return the instant and zone info of the next transition.

        The next transition is the earliest one at or after the instant. Zones
        without daylight savings time usually have no future transitions, in
        which case None is returned.
        """
        value = _to_timestamp(timestamp)
        transitions = self.transitions()
        instants = list(transitions)
        index = bisect.bisect_left(instants, value)
        if index == len(instants):
            return None
        instant = instants[index]
        return (instant, transitions[instant])

    def dst_specifier(self) -> str:
        """Return the daylight savings time rules for the zone."""
        return self.footer.strip()

    def dst_rule(self) -> PosixRule | None:
        """Return the parsed daylight savings time rules for the zone."""
        if not (specifier := self.dst_specifier()):
            return None
        try:
            return parse_posix_rule(specifier)
        except ValueError as err:
            _LOGGER.debug("Failed to parse TZ string: %s", specifier)
            raise ZoneInfoFormatError(
                f"Unable to parse TZ string: {specifier}", detailed_error=str(err)
            ) from err
