import argparse
import asyncio
import hashlib
import logging
import sys

try:
    import uvloop
except ImportError:
    pass
else:
    uvloop.install()

from . import errors
from . import lazy
from . import stream


def _open(location, chunk_size):
    if location.startswith(("http://", "https://")):
        return stream.open_url(location, chunk_size)
    return stream.open_file(location, chunk_size)


async def dump(location, chunk_size):
    async with _open(location, chunk_size) as reader:
        async for value in reader:
            print(repr(value))


async def show_key(location, key, chunk_size):
    async with _open(location, chunk_size) as reader:
        raw = lazy.raw_value(await reader.read_raw(), key)
    print(raw.hex())
    print(f"SHA-1: {hashlib.sha1(raw).hexdigest()}")


def main(args):
    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s,%(msecs)03d %(levelname)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    if args.key is None:
        coro = dump(args.location, args.chunk_size)
    else:
        coro = show_key(args.location, args.key.encode(), args.chunk_size)
    try:
        asyncio.run(coro)
    except (errors.DecodeError, EOFError, KeyError, OSError) as e:
        logging.warning("%r failed with %r", args.location, e)
        print(f"Could not decode {args.location}: {e!r}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Decode bencoded documents.")
    parser.add_argument("location", help="Path or URL of the input.", metavar="<location>")
    parser.add_argument("--key", help="Print the raw value of this key of the first document.", metavar="<key>")
    parser.add_argument("--chunk-size", help="Number of bytes to read at a time.", type=int, default=2 ** 14, metavar="<chunk-size>")
    parser.add_argument("--debug", help="Enable logging.", action="store_true")
    try:
        main(parser.parse_args())
    except KeyboardInterrupt:
        sys.exit(130)
