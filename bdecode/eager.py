"""Eager decoding into plain Python objects.

This module drives the lazy decoder in `lazy` to build trees that don't
reference the input buffer: integers become `int`, byte strings are copied into
`bytes`, lists become `list` and dictionaries become `Pairs`, which keep every
entry in the order it was encountered.

Any `errors.DecodeError` aborts the whole decode. Pass `final=False` to decode
from a buffer that may still grow; an unfinished document then raises
`errors.Incomplete` and can be retried from scratch after more input arrived.
"""

from typing import Any, List, Optional, Tuple

from . import errors
from . import lazy


class Pairs(tuple):
    """Dictionary entries in encountered order; duplicate keys are kept."""

    def get(self, key, default=None):
        """Return the value of the first entry with `key`."""
        for k, v in self:
            if k == key:
                return v
        return default

    def to_dict(self) -> dict:
        return dict(self)

    def __repr__(self):
        return f"Pairs({tuple.__repr__(self)})"


def materialize(
    cursor: memoryview, value: lazy.Value, final: bool = True
) -> Tuple[memoryview, Any]:
    """Expand `value`, which was decoded together with `cursor`."""
    if isinstance(value, lazy.Integer):
        return cursor, value.value
    if isinstance(value, lazy.ByteString):
        return cursor, bytes(value)
    if isinstance(value, lazy.List):
        items = []
        while True:
            cursor, item = value.next(cursor, final)
            if item is None:
                return cursor, items
            cursor, item = materialize(cursor, item, final)
            items.append(item)
    if isinstance(value, lazy.Dictionary):
        entries = []
        while True:
            # Unlike `Dictionary.next_pair`, this accepts container keys.
            cursor, key = lazy.peek_value_or_end(cursor, final)
            if key is None:
                return cursor, Pairs(entries)
            cursor, key = materialize(cursor, key, final)
            cursor, item = lazy.pair_value(cursor, final)
            cursor, item = materialize(cursor, item, final)
            entries.append((key, item))
    raise TypeError(type(value))


def _expand(cursor, value, final):
    try:
        return materialize(cursor, value, final)
    except RecursionError as exc:
        raise errors.NestingTooDeep("Containers are nested too deeply.") from exc


def decode_from(
    cursor: memoryview, final: bool = True
) -> Tuple[memoryview, Optional[Any]]:
    """Decode the next root value, or return `None` at the end of input."""
    cursor, value = lazy.next_root(cursor, final)
    if value is None:
        return cursor, None
    return _expand(cursor, value, final)


def decode_all(data, final: bool = True) -> List[Any]:
    """Return the values of all root-level documents in `data`."""
    cursor = lazy.cursor(data)
    result = []
    while True:
        cursor, value = decode_from(cursor, final)
        if value is None:
            return result
        result.append(value)


def decode(data, final: bool = True) -> Any:
    """Return the Python object corresponding to `data`.

    Raise `errors.DecodeError` if `data` is not a single valid document.
    """
    cursor, value = lazy.peek_value(lazy.cursor(data), final)
    cursor, value = _expand(cursor, value, final)
    if cursor:
        raise errors.UnexpectedToken(f"Leftover bytes at index {len(data) - len(cursor)}.")
    return value
