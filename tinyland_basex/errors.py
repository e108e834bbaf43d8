"""Exception hierarchy shared by every codec.

All codec failures derive from :class:`CodecError`, itself a ``ValueError``,
so callers can catch one class for "the input was not acceptable". Each
subclass names one kind of failure:

  - InvalidArgumentError   - missing or wrongly typed argument
  - InvalidLengthError     - input length breaks the scheme's structure
  - InvalidCharacterError  - character outside the active alphabet
  - InvalidPaddingError    - malformed padding inside a group
  - BufferTooSmallError    - caller-supplied output buffer is undersized
  - UnsupportedConfigError - config value not usable for this scheme
"""

from typing import Optional


class CodecError(ValueError):
    """Base exception for encode/decode operations."""


class InvalidArgumentError(CodecError, TypeError):
    """Raised when a required argument is missing or has the wrong type."""


class InvalidLengthError(CodecError):
    """Raised when the input length violates the scheme's grouping rules."""


class InvalidCharacterError(CodecError):
    """Raised when a character is not part of the active alphabet."""

    def __init__(self, message: str, char: Optional[str] = None, position: Optional[int] = None):
        super().__init__(message)
        self.char = char
        self.position = position


class InvalidPaddingError(CodecError):
    """Raised when padding characters appear in an invalid pattern."""


class BufferTooSmallError(CodecError):
    """Raised when an output buffer cannot hold the result.

    ``required`` holds the capacity the caller must supply to retry.
    """

    def __init__(self, required: int, available: int):
        super().__init__(
            f"Output buffer too small: {required} units required, {available} available"
        )
        self.required = required
        self.available = available


class UnsupportedConfigError(CodecError):
    """Raised for unknown presets or configs that do not fit the scheme."""


def check_bytes_input(data) -> None:
    """Reject anything an encoder cannot read as raw bytes."""
    if data is None:
        raise InvalidArgumentError("Input must not be None")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidArgumentError(
            f"Input must be bytes-like, not {type(data).__name__}"
        )


def check_text_input(text) -> None:
    """Reject anything a decoder cannot read as text."""
    if text is None:
        raise InvalidArgumentError("Input must not be None")
    if not isinstance(text, str):
        raise InvalidArgumentError(f"Input must be a string, not {type(text).__name__}")


def check_length(length) -> None:
    """Validate the argument of an ``encode_len``/``decode_len`` call."""
    if isinstance(length, bool) or not isinstance(length, int):
        raise InvalidArgumentError("Length must be an integer")
    if length < 0:
        raise InvalidArgumentError(f"Length must be non-negative, got {length}")


def write_output(out, result: bytes) -> int:
    """Copy ``result`` into the caller's buffer ``out`` and return its length.

    Nothing is written when ``out`` cannot hold the whole result.
    """
    if out is None:
        raise InvalidArgumentError("Output buffer must not be None")
    try:
        view = memoryview(out)
    except TypeError:
        raise InvalidArgumentError(
            f"Output buffer must support the buffer protocol, not {type(out).__name__}"
        ) from None
    if view.readonly:
        raise InvalidArgumentError("Output buffer is read-only")
    if not view.c_contiguous:
        raise InvalidArgumentError("Output buffer must be contiguous")
    view = view.cast("B")
    if len(view) < len(result):
        raise BufferTooSmallError(len(result), len(view))
    view[: len(result)] = result
    return len(result)


def truncate_at_null(text: str) -> str:
    """Return ``text`` up to, not including, its first NUL character."""
    end = text.find("\x00")
    return text if end < 0 else text[:end]
