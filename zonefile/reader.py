"""Library for reading TZif files.

A TZif file always starts with a v1 header and data block using 32-bit
timestamps. Version 2 and later files repeat the header and data block
with 64-bit timestamps, followed by a footer containing a POSIX TZ string
for computing local time after the last transition. See rfc8536 for the
TZif file format.

Note: The v1 data block of a v2+ file is decoded and validated even though
the 64-bit data block is the one used to answer queries.
"""

import io
import logging

from .compat import body_compat
from .datablock import TimestampWidth, read_datablock
from .exceptions import ZoneInfoFormatError, ZoneInfoTextError
from .header import Header, TZifVersion, read_header
from .model import ZoneBody
from .zone import ZoneInfo

__all__ = [
    "load",
    "read_tzif",
]

_LOGGER = logging.getLogger(__name__)


def _validate_header(header: Header) -> None:
    """Validate a header of the data block used to answer queries."""
    if header.typecnt == 0:
        raise ZoneInfoFormatError("Local time records in block is zero")
    if header.charcnt == 0:
        raise ZoneInfoFormatError("Total number of octets is zero")


def _read_footer(buf: io.BytesIO) -> str:
    """Read the footer containing the TZ string that follows the v2+ data block."""
    content = buf.read()
    try:
        footer = content.decode("UTF-8")
    except UnicodeDecodeError as err:
        raise ZoneInfoTextError("TZ footer is not valid text") from err
    if footer and (
        len(footer) < 2
        or not footer.startswith("\n")
        or not footer.endswith("\n")
        or "\n" in footer[1:-1]
    ):
        raise ZoneInfoFormatError(
            "Failed to read TZ footer", detailed_error=f"footer={footer!r}"
        )
    return footer


def _select_body(legacy: ZoneBody, wide: ZoneBody) -> ZoneBody:
    """Select the data block used to answer queries for a v2+ file."""
    if (
        body_compat.is_native_word_size_selection_enabled()
        and not body_compat.is_64bit_platform()
    ):
        _LOGGER.debug("Selecting 32-bit data block on 32-bit platform")
        return legacy
    return wide


def read_tzif(content: bytes) -> ZoneInfo:
    """Read the TZif file and parse and return the timezone records."""
    buf = io.BytesIO(content)

    # V1 header and block
    header = read_header(buf)
    if header.version == TZifVersion.V1:
        _validate_header(header)
    legacy = read_datablock(header, TimestampWidth.NARROW, buf)
    if not header.version.has_wide_body:
        return ZoneInfo(legacy)

    # V2+ header and block
    wide_header = read_header(buf)
    if wide_header.version != header.version:
        raise ZoneInfoFormatError(
            "TZif version mismatch between data blocks",
            detailed_error=f"{header.version} != {wide_header.version}",
        )
    header = wide_header
    _validate_header(header)
    wide = read_datablock(header, TimestampWidth.WIDE, buf)

    # V2+ footer
    footer = _read_footer(buf)
    return ZoneInfo(_select_body(legacy, wide), footer=footer)


load = read_tzif
