"""Adapter from "handle table" streams to the Python stream contract.

WHY: Some hosts hand out file handles as a table of plain functions rather
than an object with methods: ``handle["read"](4)``, ``handle.readLine()``,
``handle.seek("end", 0)``. The ComputerCraft ``fs.open`` API is the best
known example, and bridges or emulators that expose it to Python keep that
shape. Such handles cannot be attached to a FusedReader as they are: the
function names differ, seek takes a whence *name* first and the offset
second, and there is no tell().

HOW: HandleTableStream holds a reference to the handle and forwards each
contract operation to the matching function, translating arguments on the
way. adapt() is the single place where a caller states which kind of handle
it holds; nothing downstream inspects handles to guess.

RULES:
- Pure wrapping: no buffering, no state beyond the wrapped handle
- Functions are looked up by key on mappings and by attribute otherwise
- Results given as str are converted to bytes through latin-1
- A handle function returning None at end of data becomes b""
"""

from __future__ import annotations

import enum
import io
from collections.abc import Mapping
from typing import Any, Callable, Optional

from fused_reader.core.stream import Stream

# Python whence constant -> handle table whence name
WHENCE_NAMES = {
    io.SEEK_SET: "set",
    io.SEEK_CUR: "cur",
    io.SEEK_END: "end",
}

HANDLE_TABLE_FUNCTIONS = ("read", "readLine", "seek", "close")
"""Functions a handle table must provide to be adapted."""


class HandleKind(enum.Enum):
    """Which calling convention a handle follows."""

    NATIVE = "native"
    HANDLE_TABLE = "handle_table"


def _to_bytes(value: Any) -> bytes:
    if value is None:
        return b""
    if isinstance(value, str):
        return value.encode("latin-1")
    return bytes(value)


class HandleTableStream:
    """Present a handle table as a binary stream.

    Args:
        handle: A mapping or namespace whose ``read``, ``readLine``,
                ``seek`` and ``close`` entries are plain callables.
                ``readAll`` is used when present.

    Raises:
        TypeError: ``handle`` lacks one of the required functions.
    """

    def __init__(self, handle: Any) -> None:
        missing = [name for name in HANDLE_TABLE_FUNCTIONS if _lookup(handle, name) is None]
        if missing:
            raise TypeError(
                "handle table is missing: {}".format(", ".join(missing))
            )
        self.handle = handle

    def _fn(self, name: str) -> Callable[..., Any]:
        return _lookup(self.handle, name)

    def read(self, size: Optional[int] = -1) -> bytes:
        if size is None or size < 0:
            read_all = self._fn("readAll")
            if read_all is not None:
                return _to_bytes(read_all())
            chunks = []
            while True:
                chunk = _to_bytes(self._fn("read")(io.DEFAULT_BUFFER_SIZE))
                if not chunk:
                    return b"".join(chunks)
                chunks.append(chunk)
        if size == 0:
            return b""
        return _to_bytes(self._fn("read")(size))

    def readline(self, size: int = -1) -> bytes:
        """Read one line, terminator included.

        Size-limited line reads are not part of the handle table API.
        """
        if size is not None and size >= 0:
            raise ValueError("handle table streams do not support readline(size)")
        return _to_bytes(self._fn("readLine")(True))

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        try:
            whence_name = WHENCE_NAMES[whence]
        except KeyError:
            raise ValueError("invalid whence ({!r})".format(whence)) from None
        position = self._fn("seek")(whence_name, offset)
        if position is None:
            raise OSError("seek({!r}, {}) failed on handle table".format(whence_name, offset))
        return position

    def tell(self) -> int:
        return self.seek(0, io.SEEK_CUR)

    def close(self) -> None:
        self._fn("close")()

    def __repr__(self) -> str:
        return "HandleTableStream({!r})".format(self.handle)


def _lookup(handle: Any, name: str) -> Optional[Callable[..., Any]]:
    if isinstance(handle, Mapping):
        fn = handle.get(name)
    else:
        fn = getattr(handle, name, None)
    return fn if callable(fn) else None


def adapt(handle: Any, kind: HandleKind = HandleKind.NATIVE) -> Stream:
    """Return a contract-conforming stream for ``handle``.

    WHY: The caller that obtained a handle knows which convention it
    follows. Stating it here keeps the reader itself convention-agnostic.

    HOW: NATIVE handles are returned unchanged (the reader validates them
    when they are attached). HANDLE_TABLE handles are wrapped in a
    HandleTableStream.

    Args:
        handle: The stream or handle table to adapt.
        kind: The calling convention ``handle`` follows.

    Returns:
        An object satisfying the Stream contract.
    """
    if kind is HandleKind.NATIVE:
        return handle
    if kind is HandleKind.HANDLE_TABLE:
        return HandleTableStream(handle)
    raise ValueError("unknown handle kind: {!r}".format(kind))
