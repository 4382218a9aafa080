"""Tests for selecting a data block by platform word size."""

import sys
from unittest.mock import patch

from zonefile.compat import body_compat


def test_disabled_by_default() -> None:
    """Test the compatibility mode is disabled outside of the context manager."""
    assert not body_compat.is_native_word_size_selection_enabled()


def test_enable_native_word_size_selection() -> None:
    """Test the compatibility mode is scoped to the context manager."""
    with body_compat.enable_native_word_size_selection():
        assert body_compat.is_native_word_size_selection_enabled()
        with body_compat.enable_native_word_size_selection():
            assert body_compat.is_native_word_size_selection_enabled()
        assert body_compat.is_native_word_size_selection_enabled()
    assert not body_compat.is_native_word_size_selection_enabled()


def test_is_64bit_platform() -> None:
    """Test the platform word size is determined from the interpreter."""
    with patch.object(sys, "maxsize", 2**63 - 1):
        assert body_compat.is_64bit_platform()
    with patch.object(sys, "maxsize", 2**31 - 1):
        assert not body_compat.is_64bit_platform()
