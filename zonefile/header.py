"""Library for reading the fixed size header of a TZif file.

Each TZif data block is preceded by a 44 byte header that identifies the
file and declares the size of each table in the block that follows. See
rfc8536 section 3.1 for the header format. All integers are big endian.
"""

import enum
import io
import logging
import struct
from dataclasses import dataclass

from .exceptions import ZoneInfoFormatError, ZoneInfoTruncatedError

__all__ = [
    "Header",
    "TZifVersion",
    "read_header",
    "read_exact",
]

_LOGGER = logging.getLogger(__name__)

MAGIC = "TZif".encode()
_RESERVED_SIZE = 15
_COUNT_FORMAT = ">L"
_COUNT_SIZE = 4

# Counts in the order they appear in the header
_COUNT_FIELDS = (
    "isutcnt",
    "isstdcnt",
    "leapcnt",
    "timecnt",
    "typecnt",
    "charcnt",
)


def read_exact(buf: io.BytesIO, size: int, field: str) -> bytes:
    """Read exactly size bytes from the buffer or fail naming the field."""
    data = buf.read(size)
    if len(data) != size:
        raise ZoneInfoTruncatedError(field, size, len(data))
    return data


class TZifVersion(enum.Enum):
    """Defines information related to TZif versions."""

    V1 = b"\x00"
    V2 = b"2"
    V3 = b"3"
    V4 = b"4"

    @property
    def has_wide_body(self) -> bool:
        """Return True if a 64-bit data block and footer follow the v1 block."""
        return self is not TZifVersion.V1


@dataclass(frozen=True)
class Header:
    """TZif header information."""

    SIZE = 44  # Total size of the header in bytes

    version: TZifVersion
    """The version of the file format."""

    isutcnt: int
    """The number of UT/local indicators in the data block."""

    isstdcnt: int
    """The number of standard/wall indicators in the data block."""

    leapcnt: int
    """The number of leap second records in the data block."""

    timecnt: int
    """The number of transition times in the data block."""

    typecnt: int
    """The number of local time type records in the data block."""

    charcnt: int
    """The number of bytes of time zone designations in the data block."""


def read_header(buf: io.BytesIO) -> Header:
    """Parse a header from the current position of the buffer.

    The buffer is left positioned at the first byte of the data block.
    """
    magic = read_exact(buf, len(MAGIC), "magic")
    if magic != MAGIC:
        raise ZoneInfoFormatError(
            "zoneinfo content did not contain magic header",
            detailed_error=f"found {magic!r}",
        )
    version_byte = read_exact(buf, 1, "version")
    try:
        version = TZifVersion(version_byte)
    except ValueError as err:
        raise ZoneInfoFormatError(
            f"Unsupported TZif version {version_byte!r}"
        ) from err
    read_exact(buf, _RESERVED_SIZE, "reserved")

    counts: dict[str, int] = {}
    for field in _COUNT_FIELDS:
        (counts[field],) = struct.unpack(
            _COUNT_FORMAT, read_exact(buf, _COUNT_SIZE, field)
        )

    typecnt = counts["typecnt"]
    if counts["isutcnt"] not in (0, typecnt):
        raise ZoneInfoFormatError(
            f"UT/local indicators in datablock mismatched ({counts['isutcnt']}, {typecnt})"
        )
    if counts["isstdcnt"] not in (0, typecnt):
        raise ZoneInfoFormatError(
            f"standard/wall indicators in datablock mismatched ({counts['isstdcnt']}, {typecnt})"
        )
    header = Header(version=version, **counts)
    _LOGGER.debug("Read TZif header: %s", header)
    return header
