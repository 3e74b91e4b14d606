"""Exceptions raised by the decoder.

Malformed input raises a subclass of `DecodeError`, which is a `ValueError` so
that callers that only care about "valid or not" can keep catching the latter.

`Incomplete` is not an error: it means that the bytes seen so far are a valid
prefix of some encoding, and that the operation should be retried once more
bytes have been appended to the buffer.
"""

from typing import Optional


class Incomplete(Exception):
    """More input is needed to make progress.

    `needed` is the number of additional bytes that are known to be required,
    or `None` if that is not known yet.
    """

    def __init__(self, needed: Optional[int] = None):
        super().__init__(needed)
        self.needed = needed


class DecodeError(ValueError):
    """Base class for malformed input."""


class MalformedLength(DecodeError):
    """Leading zero, non-digit or empty digit run."""


class LengthOverflow(DecodeError):
    """Digit run that doesn't fit into an unsigned 64-bit integer."""


class MalformedInteger(DecodeError):
    """Integer token that doesn't match `i` [`-`] uint `e`."""


class IntegerOverflow(DecodeError):
    """Integer that doesn't fit into a signed 64-bit integer."""


class UnterminatedContainer(DecodeError):
    """Final input ended before a token or container was closed."""


class TruncatedByteString(DecodeError):
    """Final input ended inside a byte string."""


class OddEntryCount(DecodeError):
    """Dictionary key without a value."""


class UnexpectedToken(DecodeError):
    """Byte that can't start a value at this position."""


class NestingTooDeep(DecodeError):
    """Containers nested deeper than the eager decoder can recurse."""
