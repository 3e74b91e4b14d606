"""Lexers for the atomic tokens of BEncoding.

Specification: [BEP 0003]

Every lexer takes a cursor (a `memoryview` of the unconsumed input) and
returns a pair `(cursor, token)`, where the new cursor is the suffix of the old
one that follows the token. Nothing is copied; byte strings are returned as
slices of the cursor.

If the input ends in the middle of a token, the lexers raise
`errors.Incomplete`, unless `final` is set, in which case they raise the
`errors.DecodeError` subclass that describes the truncation.

[BEP 0003]: http://bittorrent.org/beps/bep_0003.html
"""

from typing import Optional, Tuple, Type

from . import errors


_DIGITS = range(ord("0"), ord("9") + 1)
_U64_MAX = 2 ** 64 - 1
_I64_MIN = -(2 ** 63)
_I64_MAX = 2 ** 63 - 1


def incomplete(
    final: bool,
    error: Type[errors.DecodeError],
    message: str,
    needed: Optional[int] = None,
) -> Exception:
    """Return the exception for input that ends too early."""
    if final:
        return error(message)
    return errors.Incomplete(needed)


def parse_uint(cursor: memoryview, final: bool = False) -> Tuple[memoryview, int]:
    """Parse `0` or `[1-9][0-9]*`."""
    if not cursor:
        raise incomplete(final, errors.UnterminatedContainer, "Expected a digit.")
    head = cursor[0]
    if head == ord("0"):
        if len(cursor) > 1 and cursor[1] in _DIGITS:
            raise errors.MalformedLength("Leading zero.")
        return cursor[1:], 0
    if head not in _DIGITS:
        raise errors.MalformedLength(f"Expected a digit, got {bytes([head])!r}.")
    value = 0
    for i, b in enumerate(cursor):
        if b not in _DIGITS:
            return cursor[i:], value
        value = value * 10 + b - ord("0")
        # Fail early; no suffix can bring the value back into range.
        if value > _U64_MAX:
            raise errors.LengthOverflow("Digit run exceeds 2 ** 64 - 1.")
    # The run might continue in the next chunk.
    raise incomplete(final, errors.UnterminatedContainer, "Digit run reaches end of input.")


def parse_integer(cursor: memoryview, final: bool = False) -> Tuple[memoryview, int]:
    """Parse `i` [`-`] uint `e`.

    Negative zero is rejected, as are values outside the signed 64-bit range.
    """
    if not cursor:
        raise incomplete(final, errors.UnterminatedContainer, "Expected b'i'.")
    if cursor[0] != ord("i"):
        raise errors.MalformedInteger(f"Expected b'i', got {bytes([cursor[0]])!r}.")
    rest = cursor[1:]
    negative = bool(rest) and rest[0] == ord("-")
    if negative:
        rest = rest[1:]
    try:
        rest, magnitude = parse_uint(rest, final)
    except errors.MalformedLength as exc:
        raise errors.MalformedInteger(str(exc)) from exc
    except errors.LengthOverflow as exc:
        raise errors.IntegerOverflow("Integer exceeds 64 bits.") from exc
    if negative and magnitude == 0:
        raise errors.MalformedInteger("Negative zero.")
    if not rest:
        raise incomplete(final, errors.UnterminatedContainer, "Expected b'e'.", 1)
    if rest[0] != ord("e"):
        raise errors.MalformedInteger(f"Expected b'e', got {bytes([rest[0]])!r}.")
    value = -magnitude if negative else magnitude
    if not _I64_MIN <= value <= _I64_MAX:
        raise errors.IntegerOverflow(f"{value} exceeds 64 bits.")
    return rest[1:], value


def parse_byte_string(
    cursor: memoryview, final: bool = False
) -> Tuple[memoryview, memoryview]:
    """Parse uint `:` followed by that many raw bytes.

    The payload is a slice of `cursor`, so it stays tied to the input buffer.
    """
    try:
        rest, length = parse_uint(cursor)
    except errors.Incomplete:
        raise incomplete(
            final, errors.TruncatedByteString, "Length reaches end of input."
        ) from None
    if not rest:
        raise incomplete(final, errors.TruncatedByteString, "Expected b':'.", length + 1)
    if rest[0] != ord(":"):
        raise errors.MalformedLength(f"Expected b':', got {bytes([rest[0]])!r}.")
    rest = rest[1:]
    if len(rest) < length:
        raise incomplete(
            final,
            errors.TruncatedByteString,
            f"Expected {length} bytes, got {len(rest)}.",
            length - len(rest),
        )
    return rest[length:], rest[:length]
