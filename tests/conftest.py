"""Test fixtures."""

from collections.abc import Callable, Sequence
import struct

import pytest

from zonefile.datablock import TimestampWidth

V1 = b"\x00"
V2 = b"2"
V3 = b"3"

_TIME_FORMATS = {width.time_size: width.time_format for width in TimestampWidth}


def make_datablock(
    version: bytes = V1,
    *,
    time_size: int = 4,
    transition_times: Sequence[int] = (),
    transition_types: Sequence[int] = (),
    local_time_types: Sequence[tuple[int, int, int]] = ((0, 0, 0),),
    designations: bytes = b"UTC\x00",
    leap_seconds: Sequence[tuple[int, int]] = (),
    std_flags: bytes = b"",
    ut_flags: bytes = b"",
    magic: bytes = b"TZif",
) -> bytes:
    """Encode a single TZif header and data block."""
    time_format = _TIME_FORMATS[time_size]
    header = b"".join(
        [
            magic,
            version,
            b"\x00" * 15,
            struct.pack(
                ">6L",
                len(ut_flags),
                len(std_flags),
                len(leap_seconds),
                len(transition_times),
                len(local_time_types),
                len(designations),
            ),
        ]
    )
    body = b"".join(
        [
            struct.pack(f">{len(transition_times)}{time_format}", *transition_times),
            bytes(transition_types),
            b"".join(struct.pack(">lBB", *record) for record in local_time_types),
            designations,
            b"".join(
                struct.pack(f">{time_format}l", occurrence, correction)
                for (occurrence, correction) in leap_seconds
            ),
            std_flags,
            ut_flags,
        ]
    )
    return header + body


def make_tzif(version: bytes = V1, *, footer: str = "\n\n", **kwargs) -> bytes:
    """Encode a complete TZif file with the same tables in every data block."""
    content = make_datablock(version, time_size=4, **kwargs)
    if version == V1:
        return content
    return (
        content + make_datablock(version, time_size=8, **kwargs) + footer.encode()
    )


@pytest.fixture(name="make_datablock")
def make_datablock_fixture() -> Callable[..., bytes]:
    """Fixture that encodes a TZif header and data block."""
    return make_datablock


@pytest.fixture(name="make_tzif")
def make_tzif_fixture() -> Callable[..., bytes]:
    """Fixture that encodes a complete TZif file."""
    return make_tzif


@pytest.fixture
def cet_content() -> bytes:
    """A v1 file with a single transition into Central European Time."""
    return make_tzif(
        V1,
        transition_times=[0],
        transition_types=[0],
        local_time_types=[(3600, 0, 0)],
        designations=b"CET\x00",
    )


@pytest.fixture
def amsterdam_content() -> bytes:
    """A v2 file alternating between CET and CEST for 2021."""
    return make_tzif(
        V2,
        transition_times=[-1693706400, 1616893200, 1635642000],
        transition_types=[1, 0, 1],
        local_time_types=[(7200, 1, 0), (3600, 0, 5)],
        designations=b"CEST\x00CET\x00",
        std_flags=b"\x01\x00",
        ut_flags=b"\x01\x00",
        footer="\nCET-1CEST,M3.5.0,M10.5.0/3\n",
    )
