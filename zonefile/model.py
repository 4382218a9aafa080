"""Data model for the zonefile library."""

import datetime
import enum
from collections import namedtuple
from dataclasses import dataclass

from .exceptions import ZoneInfoFormatError, ZoneInfoTextError
from .header import Header


MIN_TIMESTAMP = -(2**63)
"""Instant of the transition synthesized for fixed offset zones."""


class StdWallFlag(enum.Enum):
    """Determines if a transition time is standard time or wall clock time."""

    STANDARD = "standard"
    WALL_CLOCK = "wall_clock"


class UtLocalFlag(enum.Enum):
    """Determines if a transition time is universal time or local time."""

    UNIVERSAL = "universal"
    LOCAL = "local"


@dataclass(frozen=True)
class LocalTimeType:
    """A local time type record with its designation resolved."""

    ut_offset: int
    """Number of seconds added to UTC to determine local time."""

    is_dst: bool
    """Determines if local time is Daylight Savings Time (else Standard time)."""

    abbreviation: str
    """The time zone designation e.g. CET."""


LeapSecond = namedtuple("LeapSecond", ["occurrence", "correction"])
"""A correction that needs to be applied to UTC in order to determine TAI.

The occurrence is the time at which the leap-second correction occurs.
The correction is the total correction value on or after the occurrence.
"""


@dataclass(frozen=True)
class AbbreviationPool:
    """The raw time zone designation octets of a data block.

    Local time type records refer to designations by byte offset into the
    pool, and several records may share overlapping suffixes of the same
    string, so text is only materialized on lookup.
    """

    content: bytes
    """The raw designation octets."""

    def lookup(self, offset: int) -> str:
        """Find the NUL terminated string starting at the specified offset."""
        if offset >= len(self.content):
            raise ZoneInfoFormatError(
                f"Designation index out of bounds {offset} >= {len(self.content)}",
                detailed_error=f"pool={self.content!r}",
            )
        # The end of the pool terminates the final designation
        end = self.content.find(b"\x00", offset)
        if end == -1:
            end = len(self.content)
        try:
            return self.content[offset:end].decode("UTF-8")
        except UnicodeDecodeError as err:
            raise ZoneInfoTextError(
                f"Designation at index {offset} is not valid text"
            ) from err


@dataclass(frozen=True)
class ZoneBody:
    """All tables of a single TZif data block decoded at one timestamp width."""

    header: Header
    """The header that declared the size of each table."""

    time_size: int
    """Number of bytes used to encode each timestamp in the block."""

    transition_times: tuple[int, ...]
    """Instants at which the rules for computing local time change."""

    transition_types: tuple[int, ...]
    """Index into local_time_types for each transition time."""

    local_time_types: tuple[LocalTimeType, ...]

    designations: AbbreviationPool
    """The pool of NUL terminated time zone designations."""

    leap_seconds: tuple[LeapSecond, ...]

    std_wall_flags: tuple[StdWallFlag, ...]

    ut_local_flags: tuple[UtLocalFlag, ...]

    def std_wall_flag(self, type_index: int) -> StdWallFlag:
        """Return the standard/wall indicator for a local time type."""
        if type_index < len(self.std_wall_flags):
            return self.std_wall_flags[type_index]
        return StdWallFlag.WALL_CLOCK

    def ut_local_flag(self, type_index: int) -> UtLocalFlag:
        """Return the UT/local indicator for a local time type."""
        if type_index < len(self.ut_local_flags):
            return self.ut_local_flags[type_index]
        return UtLocalFlag.LOCAL


@dataclass(frozen=True)
class ZoneRecord:
    """Information about local time in effect from a transition."""

    ut_offset: int
    """Offset to UTC in seconds."""

    is_dst: bool
    """Determines if local time is Daylight Savings Time."""

    abbreviation: str
    """Abbreviation of the time zone."""

    std_wall: StdWallFlag
    """Transition time is wall clock time or standard time."""

    ut_local: UtLocalFlag
    """Transition time is universal time or local time."""

    @property
    def utc_offset(self) -> datetime.timedelta:
        """Return the offset to UTC as a timedelta."""
        return datetime.timedelta(seconds=self.ut_offset)
