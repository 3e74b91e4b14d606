"""Decoding documents from asynchronous byte sources.

A `Reader` wraps any object with a coroutine method `read(n)` that returns at
most `n` bytes, and `b""` at the end of input: `asyncio.StreamReader`,
`aiohttp.StreamReader` and `aiofiles` file objects all qualify. The reader
pulls chunks until the buffered bytes contain a whole root-level document.

Because the decoder keeps no state between attempts, waiting for input is just
a matter of catching `errors.Incomplete`, reading another chunk and decoding
the document again from its first byte.
"""

from typing import Any, Callable, Optional, Tuple

import asyncio
import contextlib
import logging

import aiofiles
import aiohttp

from . import eager
from . import errors
from . import lazy
from .buffer import Buffer


# Upper bound for a single read. Lengths come from the input and can be
# arbitrarily large, so larger shortfalls are filled over several reads.
_MAX_READ = 2 ** 20


def _raw_from(cursor: memoryview, final: bool) -> Tuple[memoryview, Optional[bytes]]:
    rest, value = lazy.next_root(cursor, final)
    if value is None:
        return rest, None
    rest = lazy.skip(rest, value, final)
    return rest, cursor[: len(cursor) - len(rest)].tobytes()


class Reader:
    """A stream of root-level documents."""

    def __init__(self, source, chunk_size: int = 2 ** 14):
        self._source = source
        self._chunk_size = chunk_size
        self._buffer = Buffer()
        self._cursor = self._buffer.cursor()

    async def read(self) -> Any:
        """Return the next document.

        Raise `EOFError` if the input ended cleanly, and `errors.DecodeError` if
        it is malformed or ends in the middle of a document.
        """
        return await self._next(eager.decode_from)

    async def read_raw(self) -> bytes:
        """Return the encoded bytes of the next document, validated but not
        decoded."""
        return await self._next(_raw_from)

    def __aiter__(self):
        return self

    async def __anext__(self) -> Any:
        try:
            return await self.read()
        except EOFError:
            raise StopAsyncIteration from None

    async def _next(self, decode_from: Callable[[memoryview, bool], Tuple[memoryview, Any]]):
        while True:
            try:
                cursor, result = decode_from(self._cursor, self._buffer.final)
            except errors.Incomplete as exc:
                logging.debug("Document incomplete, %r more bytes needed", exc.needed)
                await self._fill(exc.needed)
                continue
            if result is not None:
                self._cursor = self._buffer.compact(cursor)
                return result
            if self._buffer.final:
                raise EOFError
            await self._fill(None)

    async def _fill(self, needed: Optional[int]) -> None:
        size = max(self._chunk_size, min(needed or 0, _MAX_READ))
        chunk = await self._source.read(size)
        if chunk:
            self._cursor = self._buffer.feed(chunk, self._cursor)
        else:
            logging.debug("End of input after %r buffered bytes", len(self._buffer))
            self._buffer.close()


@contextlib.asynccontextmanager
async def open_connection(host: str, port: int, chunk_size: int = 2 ** 14):
    reader, writer = await asyncio.open_connection(host, port)
    try:
        yield Reader(reader, chunk_size)
    finally:
        writer.close()
        await writer.wait_closed()


@contextlib.asynccontextmanager
async def open_file(path, chunk_size: int = 2 ** 14):
    async with aiofiles.open(path, "rb") as f:
        yield Reader(f, chunk_size)


@contextlib.asynccontextmanager
async def open_url(url: str, chunk_size: int = 2 ** 14):
    async with aiohttp.ClientSession() as session:
        async with session.get(url) as resp:
            resp.raise_for_status()
            yield Reader(resp.content, chunk_size)
