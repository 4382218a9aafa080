"""Compatibility layer for selecting a data block by platform word size."""

from collections.abc import Generator
import contextlib
import contextvars
import sys


_native_word_size_selection = contextvars.ContextVar(
    "native_word_size_selection", default=False
)


@contextlib.contextmanager
def enable_native_word_size_selection() -> Generator[None]:
    """Context manager to select the data block matching the platform word size."""
    token = _native_word_size_selection.set(True)
    try:
        yield
    finally:
        _native_word_size_selection.reset(token)


def is_native_word_size_selection_enabled() -> bool:
    """Check if selecting the data block by platform word size is enabled."""
    return _native_word_size_selection.get()


def is_64bit_platform() -> bool:
    """Return True if the interpreter is running on a 64-bit platform."""
    return sys.maxsize > 2**32
