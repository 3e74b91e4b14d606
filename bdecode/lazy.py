"""Lazy, pull-based decoding.

Specification: [BEP 0003]

The functions in this module never build containers. Decoding a list or a
dictionary only consumes its opening byte and returns a handle (`List` or
`Dictionary`); the caller then asks the handle for the container's elements one
at a time, passing in the cursor that the previous call returned. Handles are
stateless, so all position information lives in the cursor, and a caller can
stop iterating whenever it likes (see `skip` for getting past the rest).

Byte strings are returned as `ByteString`s, which hold a `memoryview` into the
input buffer instead of a copy.

Using a handle with a cursor that didn't come from the same decoding session
is a bug in the caller; it isn't detected.

[BEP 0003]: http://bittorrent.org/beps/bep_0003.html
"""

from __future__ import annotations
from typing import Optional, Tuple, Union

import dataclasses

from . import _lexers
from . import errors


_DIGITS = range(ord("0"), ord("9") + 1)


def cursor(data) -> memoryview:
    """Return a read-only cursor over all of `data`."""
    return memoryview(data).toreadonly()


@dataclasses.dataclass(frozen=True)
class Integer:
    value: int


@dataclasses.dataclass(frozen=True)
class ByteString:
    """A byte string that aliases the input buffer.

    Use `bytes(...)` to get a copy that doesn't keep the buffer alive.
    """

    data: memoryview

    def __bytes__(self):
        return self.data.tobytes()


@dataclasses.dataclass(frozen=True)
class List:
    """Handle for a list whose elements start at the accompanying cursor."""

    def next(
        self, cursor: memoryview, final: bool = False
    ) -> Tuple[memoryview, Optional[Value]]:
        """Return the next element, or `None` after consuming the terminator."""
        return peek_value_or_end(cursor, final)


@dataclasses.dataclass(frozen=True)
class Dictionary:
    """Handle for a dictionary whose entries start at the accompanying cursor."""

    def next_pair(
        self, cursor: memoryview, final: bool = False
    ) -> Tuple[memoryview, Optional[Tuple[Value, Value]]]:
        """Return the next key and value, or `None` after the terminator.

        Keys are taken as they come; neither order nor uniqueness is checked.
        A key that is a container is rejected, because its value can't be
        reached without descending into it; `skip` and `eager.materialize`
        accept such keys.
        """
        cursor, key = peek_value_or_end(cursor, final)
        if key is None:
            return cursor, None
        if isinstance(key, (List, Dictionary)):
            raise errors.UnexpectedToken("Dictionary key is a container.")
        cursor, value = pair_value(cursor, final)
        return cursor, (key, value)


Value = Union[Integer, ByteString, List, Dictionary]

_LIST = List()
_DICTIONARY = Dictionary()


def pair_value(cursor: memoryview, final: bool = False) -> Tuple[memoryview, Value]:
    """Decode the value that must follow a dictionary key."""
    if final and not cursor:
        raise errors.OddEntryCount("Input ends after a dictionary key.")
    cursor, value = peek_value_or_end(cursor, final)
    if value is None:
        raise errors.OddEntryCount("Dictionary ends after a key.")
    return cursor, value


def peek_value(cursor: memoryview, final: bool = False) -> Tuple[memoryview, Value]:
    """Decode the value that starts at `cursor`.

    Containers are not descended into; the returned cursor points at their
    first element.
    """
    if not cursor:
        raise _lexers.incomplete(final, errors.UnterminatedContainer, "Expected a value.")
    token = cursor[0]
    if token == ord("l"):
        return cursor[1:], _LIST
    if token == ord("d"):
        return cursor[1:], _DICTIONARY
    if token == ord("i"):
        cursor, value = _lexers.parse_integer(cursor, final)
        return cursor, Integer(value)
    if token in _DIGITS:
        cursor, data = _lexers.parse_byte_string(cursor, final)
        return cursor, ByteString(data)
    raise errors.UnexpectedToken(f"Unexpected token {bytes([token])!r}.")


def peek_value_or_end(
    cursor: memoryview, final: bool = False, root: bool = False
) -> Tuple[memoryview, Optional[Value]]:
    """Like `peek_value`, but return `None` at the end of a sequence.

    Inside a container the sequence ends with `e`, which is consumed. At the
    root, it ends with the input; `e` is then just an unexpected token.
    """
    if root:
        if not cursor:
            return cursor, None
    elif cursor and cursor[0] == ord("e"):
        return cursor[1:], None
    return peek_value(cursor, final)


def next_root(
    cursor: memoryview, final: bool = False
) -> Tuple[memoryview, Optional[Value]]:
    """Return the next root-level value, or `None` at the end of input."""
    return peek_value_or_end(cursor, final, root=True)


def skip(cursor: memoryview, value: Value, final: bool = False) -> memoryview:
    """Return the cursor after the end of `value`.

    `value` is the value that was decoded together with `cursor`. Scalars are
    already consumed; containers are walked without recursion.
    """
    # One entry per open container: `None` for lists, the number of items seen
    # so far for dictionaries.
    stack = []
    while True:
        if isinstance(value, List):
            stack.append(None)
        elif isinstance(value, Dictionary):
            stack.append(0)
        if not stack:
            return cursor
        cursor, value = peek_value_or_end(cursor, final)
        count = stack[-1]
        if value is None:
            stack.pop()
            if count is not None and count % 2:
                raise errors.OddEntryCount("Dictionary ends after a key.")
        elif count is not None:
            stack[-1] = count + 1


def raw_value(data, key: bytes) -> memoryview:
    """Return the encoded value associated with `key` in the dictionary `data`.

    Only byte string keys are compared; the first match wins. Raise `KeyError`
    if `key` is not a key of `data`.
    """
    rest, value = peek_value(cursor(data), final=True)
    if not isinstance(value, Dictionary):
        raise errors.UnexpectedToken("Expected a dictionary.")
    while True:
        rest, current = peek_value_or_end(rest, final=True)
        if current is None:
            raise KeyError(key)
        rest = skip(rest, current, final=True)
        begin = rest
        rest, value = pair_value(rest, final=True)
        rest = skip(rest, value, final=True)
        if isinstance(current, ByteString) and current.data == key:
            return begin[: len(begin) - len(rest)]
