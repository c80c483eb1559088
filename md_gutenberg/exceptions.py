"""Package-specific exception types."""

from __future__ import annotations


class ConversionError(ValueError):
    """Base class for conversion-related errors.

    The conversion pipeline itself is total over text input; these errors are
    raised around it, while validating requests and inputs.
    """


class MissingContentError(ConversionError):
    """Raised when a conversion request carries no content."""

    def __init__(self):
        super().__init__("content is required")


class InputTooLargeError(ConversionError):
    """Raised when an input exceeds the configured maximum size.

    Args:
        size: Size of the rejected input in bytes.
        limit: Maximum allowed size in bytes.
    """

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Input of {self.size} bytes exceeds the maximum allowed size of {self.limit} bytes"
