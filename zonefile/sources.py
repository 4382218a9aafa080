"""Library for locating TZif files by zone name.

Zone names such as "Europe/Amsterdam" are resolved against an explicit list
of search roots, typically the system zoneinfo directories. When a zone is
not installed on the system, the tzdata python package is used as a
fallback.

```python
from zonefile.sources import ZoneSearchConfig, available_zones, read_zone

config = ZoneSearchConfig.from_tzpath()
for key in available_zones(config):
    print(key, read_zone(key, config).dst_specifier())
```
"""

from __future__ import annotations

import logging
import os
import zoneinfo
from functools import cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

from .exceptions import ZoneNotFoundError
from .header import MAGIC
from .reader import read_tzif
from .zone import ZoneInfo

__all__ = [
    "DEFAULT_CONFIG",
    "ZoneSearchConfig",
    "available_zones",
    "find_zone_file",
    "load_file",
    "read_local_zone",
    "read_zone",
]

_LOGGER = logging.getLogger(__name__)

_DEFAULT_SEARCH_ROOTS = (
    Path("/usr/share/zoneinfo"),
    Path("/usr/local/share/zoneinfo"),
)
_DEFAULT_LOCALTIME = Path("/etc/localtime")
_TZDATA_PACKAGE = "tzdata"


class ZoneSearchConfig(BaseModel):
    """Configuration for where TZif files are located."""

    model_config = ConfigDict(frozen=True)

    search_roots: tuple[Path, ...] = _DEFAULT_SEARCH_ROOTS
    """Directories containing a zoneinfo tree, in order of preference."""

    localtime_path: Path = _DEFAULT_LOCALTIME
    """TZif file describing the local timezone of the system."""

    use_tzdata: bool = True
    """Fall back to the tzdata package for zones not found in a search root."""

    @field_validator("search_roots")
    @classmethod
    def validate_search_roots(cls, value: tuple[Path, ...]) -> tuple[Path, ...]:
        """Validate that at least one absolute search root is configured."""
        if not value:
            raise ValueError("At least one search root is required")
        for root in value:
            if not root.is_absolute():
                raise ValueError(f"Search root must be an absolute path: {root}")
        return value

    @classmethod
    def from_tzpath(cls, **kwargs: object) -> ZoneSearchConfig:
        """Create a configuration using the python zoneinfo search path."""
        return cls(
            search_roots=tuple(Path(root) for root in zoneinfo.TZPATH)
            or _DEFAULT_SEARCH_ROOTS,
            **kwargs,
        )


DEFAULT_CONFIG = ZoneSearchConfig()


def _is_tzif_file(path: Path) -> bool:
    """Return True if the file starts with the TZif magic sequence."""
    try:
        with path.open("rb") as tzif_file:
            return tzif_file.read(len(MAGIC)) == MAGIC
    except OSError:
        return False


@cache
def _walk_zones(root: Path) -> tuple[str, ...]:
    """Read and cache the relative names of all TZif files below the root."""
    if not root.is_dir():
        return ()
    zones = []
    for dirpath, _, filenames in os.walk(root):
        for filename in filenames:
            path = Path(dirpath) / filename
            if path.is_file() and _is_tzif_file(path):
                zones.append(path.relative_to(root).as_posix())
    return tuple(zones)


@cache
def _read_tzdata_zones() -> tuple[str, ...]:
    """Read and cache the zone names listed by the tzdata package."""
    try:
        with resources.files(_TZDATA_PACKAGE).joinpath("zones").open(
            "r", encoding="utf-8"
        ) as zones_file:
            return tuple(line.strip() for line in zones_file if line.strip())
    except ModuleNotFoundError:
        return ()


def _iana_key_to_resource(key: str) -> tuple[str, str]:
    """Returns the package and resource file for the specified zone."""
    if "/" not in key:
        return f"{_TZDATA_PACKAGE}.zoneinfo", key
    package_loc, resource = key.rsplit("/", 1)
    package = f"{_TZDATA_PACKAGE}.zoneinfo." + package_loc.replace("/", ".")
    return package, resource


def _validate_key(key: str) -> None:
    """Reject zone names that would resolve outside a search root."""
    path = Path(key)
    if not key or path.is_absolute() or ".." in path.parts:
        raise ZoneNotFoundError(f"Invalid zone name: {key!r}")


def available_zones(config: ZoneSearchConfig = DEFAULT_CONFIG) -> list[str]:
    """Return the sorted names of all zones available in the first populated root."""
    for root in config.search_roots:
        if zones := _walk_zones(root):
            _LOGGER.debug("Found %d zones in %s", len(zones), root)
            return sorted(zones)
    if config.use_tzdata:
        _LOGGER.debug("No zones in search roots, using tzdata package")
        return sorted(_read_tzdata_zones())
    return []


def find_zone_file(key: str, config: ZoneSearchConfig = DEFAULT_CONFIG) -> Path | None:
    """Retrieve the path to a TZif file from a zone name."""
    _validate_key(key)
    for root in config.search_roots:
        path = root / key
        if path.is_file():
            return path
    return None


def load_file(path: Path | str) -> ZoneInfo:
    """Read and parse a TZif file from disk."""
    with open(path, "rb") as tzif_file:
        content = tzif_file.read()
    return read_tzif(content)


def _read_tzdata_zone(key: str) -> ZoneInfo:
    """Read and parse a zone listed by the tzdata package."""
    (package, resource) = _iana_key_to_resource(key)
    with resources.files(package).joinpath(resource).open("rb") as tzdata_file:
        content = tzdata_file.read()
    return read_tzif(content)


def read_zone(key: str, config: ZoneSearchConfig = DEFAULT_CONFIG) -> ZoneInfo:
    """Read the TZif file for a zone name and return timezone records."""
    _LOGGER.debug("Reading zone: %s", key)
    _validate_key(key)
    if key in available_zones(config) and (path := find_zone_file(key, config)):
        _LOGGER.debug("Using zone file: %s", path)
        return load_file(path)
    if config.use_tzdata and key in _read_tzdata_zones():
        _LOGGER.debug("Using tzdata package for zone: %s", key)
        return _read_tzdata_zone(key)
    raise ZoneNotFoundError(f"Unable to find zone data for {key}")


def read_local_zone(config: ZoneSearchConfig = DEFAULT_CONFIG) -> ZoneInfo:
    """Read the TZif file describing the local timezone of the system."""
    _LOGGER.debug("Reading local zone: %s", config.localtime_path)
    return load_file(config.localtime_path)
