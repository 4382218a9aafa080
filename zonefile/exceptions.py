"""Exceptions for the zonefile library."""


class ZoneInfoError(Exception):
    """Base exception for all zonefile errors."""


class ZoneInfoFormatError(ZoneInfoError, ValueError):
    """Exception raised when TZif content is malformed.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'detailed_error' attribute can provide additional
    information about the error, such as the offending values, useful for
    debugging purposes.
    """

    def __init__(self, message: str, *, detailed_error: str | None = None) -> None:
        """Initialize the ZoneInfoFormatError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error


class ZoneInfoTruncatedError(ZoneInfoFormatError):
    """Exception raised when the buffer ends before a field is fully read.

    The 'field' attribute names the header field or datablock table that
    was being read when the content ran out.
    """

    def __init__(self, field: str, expected: int, actual: int) -> None:
        """Initialize the ZoneInfoTruncatedError for a field."""
        super().__init__(
            f"Truncated TZif content while reading {field}",
            detailed_error=f"expected {expected} bytes but only {actual} remain",
        )
        self.field = field
        self.expected = expected
        self.actual = actual


class ZoneInfoTextError(ZoneInfoError, ValueError):
    """Exception raised when designation or footer bytes are not valid text."""


class ZoneNotFoundError(ZoneInfoError, LookupError):
    """Exception raised when a zone name cannot be resolved."""
