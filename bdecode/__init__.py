"""Streaming, zero-copy decoder for BEncoding.

Specification: [BEP 0003]

The decoder comes in two layers. `lazy` decodes one value at a time straight
from a `memoryview` of the input, without copying byte strings and without
descending into containers; lists and dictionaries are walked by the caller
through the stateless `List` and `Dictionary` handles. `eager` is built on top
of it and returns ordinary Python objects.

Incomplete input raises `Incomplete`; malformed input raises a subclass of
`DecodeError`. `Buffer` and `stream.Reader` take care of feeding input that
arrives in chunks.

[BEP 0003]: http://bittorrent.org/beps/bep_0003.html
"""

from ._lexers import parse_byte_string, parse_integer, parse_uint
from .buffer import Buffer
from .eager import Pairs, decode, decode_all, decode_from, materialize
from .errors import (
    DecodeError,
    Incomplete,
    IntegerOverflow,
    LengthOverflow,
    MalformedInteger,
    MalformedLength,
    NestingTooDeep,
    OddEntryCount,
    TruncatedByteString,
    UnexpectedToken,
    UnterminatedContainer,
)
from .lazy import (
    ByteString,
    Dictionary,
    Integer,
    List,
    Value,
    cursor,
    next_root,
    pair_value,
    peek_value,
    peek_value_or_end,
    raw_value,
    skip,
)
