"""The stream capability contract that every member must satisfy.

WHY: The fused reader only ever talks to its members through a handful of
operations. Writing those down in one place keeps the reader free of any
knowledge about where a stream came from (a file, a BytesIO, an adapted
foreign handle).

HOW: Stream is a typing Protocol describing the binary file-like surface.
missing_capabilities() probes an object for it, stream_size() measures a
member once at attach time by seeking to the end and back.

RULES:
- The contract is read(size), readline(), seek(offset, whence), tell(), close()
- Position queries use tell(); seeking is only done while measuring size
- Sizes are measured once; members must not grow or shrink afterwards
"""

from __future__ import annotations

import io
from typing import List, Optional, Protocol, runtime_checkable

REQUIRED_CAPABILITIES = ("read", "readline", "seek", "tell", "close")
"""Attribute names a member must expose as callables."""


@runtime_checkable
class Stream(Protocol):
    """Binary stream accepted as a fused reader member."""

    def read(self, size: int = -1) -> Optional[bytes]: ...

    def readline(self, size: int = -1) -> Optional[bytes]: ...

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int: ...

    def tell(self) -> int: ...

    def close(self) -> None: ...


def missing_capabilities(obj: object) -> List[str]:
    """Return the names of contract operations ``obj`` does not provide."""
    return [
        name for name in REQUIRED_CAPABILITIES
        if not callable(getattr(obj, name, None))
    ]


def is_stream(obj: object) -> bool:
    """True when ``obj`` satisfies the whole stream contract."""
    return not missing_capabilities(obj)


def stream_size(stream: Stream) -> int:
    """Measure a stream's length in bytes and rewind it to the start.

    WHY: The reader decides that a member is exhausted by comparing its
    position against this size, so it must be taken before any read.

    HOW: seek(0, SEEK_END) returns the end offset, then seek(0, SEEK_SET)
    rewinds.
    """
    size = stream.seek(0, io.SEEK_END)
    stream.seek(0, io.SEEK_SET)
    return size
