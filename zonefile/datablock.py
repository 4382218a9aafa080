"""Library for decoding the tables of a TZif data block.

A data block is a positional concatenation of six tables whose sizes are
declared by the preceding header (see rfc8536 section 3.2). The same layout
is used for the v1 block with 32-bit timestamps and the v2+ block with
64-bit timestamps, so a single decoder is parameterized by the width of
the timestamps it reads.
"""

import enum
import io
import logging
import struct
from collections import namedtuple

from .exceptions import ZoneInfoFormatError
from .header import Header, read_exact
from .model import (
    MIN_TIMESTAMP,
    AbbreviationPool,
    LeapSecond,
    LocalTimeType,
    StdWallFlag,
    UtLocalFlag,
    ZoneBody,
)

__all__ = [
    "AbbreviationPool",
    "TimestampWidth",
    "read_datablock",
]

_LOGGER = logging.getLogger(__name__)

# Records specifying the local time type
_LOCAL_TIME_TYPE_STRUCT_FORMAT = "".join(
    [
        ">",  # Use standard size of packed value bytes
        "l",  # utoff (4 bytes): Number of seconds to add to UTC to determine local time
        "B",  # dst (1 byte): Indicates the time is DST (non-zero) or standard (0)
        "B",  # idx (1 byte): Offset into the time zone designation octets (0-charcnt-1)
    ]
)
_LOCAL_TIME_RECORD_SIZE = 6
_LEAP_CORRECTION_FORMAT = ">l"
_LEAP_CORRECTION_SIZE = 4

_LocalTimeRecord = namedtuple("_LocalTimeRecord", ["utoff", "dst", "idx"])


class TimestampWidth(enum.Enum):
    """Strategy for reading the timestamps of a data block."""

    NARROW = (4, "l")  # 32-bit in the v1 block
    WIDE = (8, "q")  # 64-bit in the v2+ block

    def __init__(self, time_size: int, time_format: str):
        self._time_size = time_size
        self._time_format = time_format

    @property
    def time_size(self) -> int:
        """Return the number of bytes used for each timestamp."""
        return self._time_size

    @property
    def time_format(self) -> str:
        """Return the struct unpack format character for a timestamp."""
        return self._time_format

    def read(self, buf: io.BytesIO, count: int, field: str) -> tuple[int, ...]:
        """Read count consecutive timestamps from the buffer."""
        data = read_exact(buf, count * self.time_size, field)
        return struct.unpack(f">{count}{self.time_format}", data)


def _read_local_time_types(
    header: Header, buf: io.BytesIO
) -> tuple[tuple[LocalTimeType, ...], AbbreviationPool]:
    """Read the local time type records followed by the designation pool."""
    records = [
        _LocalTimeRecord._make(
            struct.unpack(
                _LOCAL_TIME_TYPE_STRUCT_FORMAT,
                read_exact(buf, _LOCAL_TIME_RECORD_SIZE, "local time types"),
            )
        )
        for _ in range(header.typecnt)
    ]
    pool = AbbreviationPool(read_exact(buf, header.charcnt, "time zone designations"))
    local_time_types = tuple(
        LocalTimeType(
            ut_offset=record.utoff,
            is_dst=bool(record.dst),
            abbreviation=pool.lookup(record.idx),
        )
        for record in records
    )
    return (local_time_types, pool)


def read_datablock(header: Header, width: TimestampWidth, buf: io.BytesIO) -> ZoneBody:
    """Read all tables of the data block described by the header."""
    # A series of transition times in ascending order
    transition_times = list(width.read(buf, header.timecnt, "transition times"))

    # Zero-based indices into the array of local time type records, one for
    # each transition time.
    transition_types = list(read_exact(buf, header.timecnt, "transition types"))
    for transition_type in transition_types:
        if transition_type >= header.typecnt:
            raise ZoneInfoFormatError(
                f"transition_type out of bounds {transition_type} >= {header.typecnt}"
            )

    (local_time_types, designations) = _read_local_time_types(header, buf)

    leap_seconds: list[LeapSecond] = []
    for _ in range(header.leapcnt):
        (occurrence,) = width.read(buf, 1, "leap second records")
        (correction,) = struct.unpack(
            _LEAP_CORRECTION_FORMAT,
            read_exact(buf, _LEAP_CORRECTION_SIZE, "leap second records"),
        )
        leap_seconds.append(LeapSecond(occurrence, correction))

    # Standard/wall indicators determine if the transition times are standard
    # time (non-zero) or wall clock time (0).
    std_wall_flags = tuple(
        StdWallFlag.STANDARD if value else StdWallFlag.WALL_CLOCK
        for value in read_exact(buf, header.isstdcnt, "standard/wall indicators")
    )

    # UT/local indicators determine if the transition times are UT (non-zero)
    # or local time (0).
    ut_local_flags = tuple(
        UtLocalFlag.UNIVERSAL if value else UtLocalFlag.LOCAL
        for value in read_exact(buf, header.isutcnt, "UT/local indicators")
    )

    # Fixed offset zones may be written with a single local time type and no
    # transitions at all. Synthesize a transition so that lookups resolve.
    if not transition_times and len(local_time_types) == 1:
        _LOGGER.debug("Synthesizing transition for fixed offset zone")
        transition_times.append(MIN_TIMESTAMP)
        transition_types.append(0)

    body = ZoneBody(
        header=header,
        time_size=width.time_size,
        transition_times=tuple(transition_times),
        transition_types=tuple(transition_types),
        local_time_types=local_time_types,
        designations=designations,
        leap_seconds=tuple(leap_seconds),
        std_wall_flags=std_wall_flags,
        ut_local_flags=ut_local_flags,
    )
    _LOGGER.debug(
        "Read %s data block with %d transitions, %d types, %d leap seconds",
        width.name,
        len(body.transition_times),
        len(body.local_time_types),
        len(body.leap_seconds),
    )
    return body
