"""
A library for reading IANA timezone database TZif files.

The TZif format (see rfc8536) encodes the history of a timezone as a list
of transitions between local time types, an optional list of leap second
corrections and, for version 2 and later, a POSIX TZ string describing
local time after the last transition.

```python
from zonefile import read_zone

zone_info = read_zone("Europe/Amsterdam")
print("Daylight saving time rules are:", zone_info.dst_specifier())
```

Content that has already been read may be parsed directly with `load`.
"""

from .exceptions import (
    ZoneInfoError,
    ZoneInfoFormatError,
    ZoneInfoTextError,
    ZoneInfoTruncatedError,
    ZoneNotFoundError,
)
from .model import (
    MIN_TIMESTAMP,
    LeapSecond,
    LocalTimeType,
    StdWallFlag,
    UtLocalFlag,
    ZoneBody,
    ZoneRecord,
)
from .reader import load, read_tzif
from .sources import (
    DEFAULT_CONFIG,
    ZoneSearchConfig,
    available_zones,
    find_zone_file,
    load_file,
    read_local_zone,
    read_zone,
)
from .zone import ZoneInfo

__all__ = [
    "DEFAULT_CONFIG",
    "MIN_TIMESTAMP",
    "LeapSecond",
    "LocalTimeType",
    "StdWallFlag",
    "UtLocalFlag",
    "ZoneBody",
    "ZoneInfo",
    "ZoneInfoError",
    "ZoneInfoFormatError",
    "ZoneInfoTextError",
    "ZoneInfoTruncatedError",
    "ZoneNotFoundError",
    "ZoneRecord",
    "ZoneSearchConfig",
    "available_zones",
    "find_zone_file",
    "load",
    "load_file",
    "read_local_zone",
    "read_tzif",
    "read_zone",
]
