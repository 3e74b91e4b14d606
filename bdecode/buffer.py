"""Growable input for incremental decoding.

Cursors are views of an immutable `bytes` object. When more input arrives, a
`Buffer` creates a new, longer `bytes` object and translates the caller's
cursor into a view of it; views of older generations stay valid, so
`ByteString`s decoded before a `feed` remain usable.
"""

from . import lazy


class Buffer:
    """Owner of the input of one decoding session.

    `feed` and `compact` expect a cursor of the current generation, i.e. one
    derived from the last cursor that this buffer returned.
    """

    def __init__(self, data: bytes = b""):
        self._data = bytes(data)
        self.final = False

    def __len__(self):
        return len(self._data)

    def cursor(self) -> memoryview:
        """Return a cursor over the whole buffer."""
        return lazy.cursor(self._data)

    def feed(self, chunk: bytes, cursor: memoryview) -> memoryview:
        """Append `chunk` and return `cursor` rebased onto the new buffer."""
        if self.final:
            raise ValueError("Buffer is closed.")
        # Cursors are suffixes, so their length identifies their position.
        consumed = len(self._data) - len(cursor)
        self._data += chunk
        return self.cursor()[consumed:]

    def compact(self, cursor: memoryview) -> memoryview:
        """Drop everything before `cursor`."""
        self._data = cursor.tobytes()
        return self.cursor()

    def close(self) -> None:
        """Declare that no more input will arrive."""
        self.final = True
