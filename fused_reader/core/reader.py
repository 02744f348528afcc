"""FusedReader: several finite byte streams read as one.

WHY: Inputs often arrive split across files (rotated logs, chunked
uploads, a document stored as numbered parts). Reading them as one stream
means lines, fixed-size records and numbers that straddle a file boundary
come out whole, and the caller never has to juggle handles.

HOW: The reader keeps an ordered list of members, each a stream paired
with the size measured when it was attached, and a cursor to the member
being read. Every read operation follows one rule: read from the current
member, and if that member is now at its recorded size, close it and move
the cursor on. Repeat until the request is satisfied or no member is left.

RULES:
- Members are read in attach order; attaching after reads have started
  appends to the unread tail
- A member is closed exactly once: when the cursor moves past it, or by
  close() if it was never exhausted
- At most one member is being read at a time
- End of data is signalled by returning None, never by raising
- A line never spans two members; bytes, read_all, read_while and
  read_number do
- read_while consumes and discards the first byte that fails the
  predicate; there is no pushback
- close() resets the reader to its freshly constructed state and may be
  called any number of times
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union

from fused_reader.core.errors import InvalidStreamError, StreamOpenError
from fused_reader.core.predicates import (
    DECIMAL,
    RADIX_PREFIXES,
    PredicateLike,
    as_byte_predicate,
)
from fused_reader.core.stream import Stream, missing_capabilities, stream_size

logger = logging.getLogger(__name__)

_DECIMAL_BYTE = re.compile(DECIMAL)

ReadResult = Union[bytes, int, None]


@dataclass
class Member:
    """One attached stream and the size it had when it was attached."""

    stream: Stream
    size: int


# ---------------------------------------------------------------------------
# Attach items: the three shapes attach_many accepts
# ---------------------------------------------------------------------------


class SingleStream(NamedTuple):
    stream: Any


class StreamCollection(NamedTuple):
    items: Sequence[Any]


class FusedReaderHandle(NamedTuple):
    reader: "FusedReader"


AttachItem = Union[SingleStream, StreamCollection, FusedReaderHandle]


def classify(item: Any) -> AttachItem:
    """Decide once which shape an attach_many argument has.

    Lists and tuples are collections. Anything else that is not a
    FusedReader is treated as a single stream and validated on attach.
    """
    if isinstance(item, FusedReader):
        return FusedReaderHandle(item)
    if isinstance(item, (list, tuple)):
        return StreamCollection(item)
    return SingleStream(item)


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------


class FusedReader:
    """Read an ordered sequence of byte streams as one continuous stream.

    Example::

        with FusedReader.from_paths_raw("part1.txt", "part2.txt") as reader:
            for line in reader:
                ...

    The reader takes ownership of every attached stream. Callers must not
    read from or close a stream after attaching it.
    """

    def __init__(self) -> None:
        self.members: List[Member] = []
        self.cursor = 0

    # -- construction -----------------------------------------------------

    @classmethod
    def from_streams(cls, *items: Any) -> "FusedReader":
        """Create a reader and attach ``items`` as attach_many() would."""
        reader = cls()
        reader.attach_many(*items)
        return reader

    @classmethod
    def from_paths_raw(cls, *paths: Union[str, "os.PathLike[str]"]) -> "FusedReader":
        """Open each path in binary mode and attach it, in argument order.

        No globbing or expansion is done on the paths.

        Raises:
            StreamOpenError: a path could not be opened, or the opened
                file cannot be measured (it is not seekable). Files opened
                earlier in the same call are closed first, and no reader
                is returned.
        """
        reader = cls()
        for path in paths:
            try:
                stream = open(path, "rb")
            except OSError as exc:
                reader.close()
                raise StreamOpenError(os.fspath(path), exc.strerror or str(exc)) from exc
            try:
                reader.attach(stream)
            except OSError as exc:
                stream.close()
                reader.close()
                raise StreamOpenError(os.fspath(path), exc.strerror or str(exc)) from exc
        return reader

    # -- attachment -------------------------------------------------------

    def attach(self, stream: Stream) -> None:
        """Append one stream as the last member.

        The stream's size is measured now (seek to end, rewind), so it must
        be positioned at the start and must not change size afterwards.

        Raises:
            InvalidStreamError: ``stream`` lacks part of the contract.
        """
        position = len(self.members) + 1
        missing = missing_capabilities(stream)
        if missing:
            raise InvalidStreamError(position, missing)
        size = stream_size(stream)
        self.members.append(Member(stream, size))
        logger.debug("Attached member #%d (%d bytes)", position, size)

    def attach_many(self, *items: Any) -> None:
        """Attach streams, collections of streams, or other readers.

        WHY: Callers usually have their inputs in whatever shape they came
        in: a few handles, a list built in a loop, or a reader someone
        else assembled.

        HOW: Each argument is classified once (see classify()) and then
        handled: single streams are attached, collections are flattened
        recursively, and readers are absorbed.

        RULES:
        - Order is preserved left to right, depth first
        - An absorbed reader contributes its unread members in its own
          order and is left empty
        - Processing continues with the remaining arguments after an
          absorbed reader
        """
        for item in items:
            kind = classify(item)
            if isinstance(kind, FusedReaderHandle):
                self.absorb(kind.reader)
            elif isinstance(kind, StreamCollection):
                self.attach_many(*kind.items)
            else:
                self.attach(kind.stream)

    push_streams = attach_many

    def absorb(self, other: "FusedReader") -> None:
        """Move ``other``'s unread members to the end of this reader.

        Sizes recorded by ``other`` are kept. ``other`` is reset to empty
        so each stream keeps a single owner.
        """
        if other is self:
            raise ValueError("a FusedReader cannot absorb itself")
        taken = other.members[other.cursor:]
        self.members.extend(taken)
        other.members = []
        other.cursor = 0
        logger.debug("Absorbed %d member(s) from another reader", len(taken))

    # -- cursor -----------------------------------------------------------

    @property
    def member_count(self) -> int:
        """Number of members attached since construction or the last close()."""
        return len(self.members)

    @property
    def current_stream(self) -> Optional[Stream]:
        if self.is_finished():
            return None
        return self.members[self.cursor].stream

    @property
    def current_size(self) -> Optional[int]:
        if self.is_finished():
            return None
        return self.members[self.cursor].size

    def is_finished(self) -> bool:
        """True when the cursor has moved past the last member."""
        return self.cursor >= len(self.members)

    def is_current_eof(self) -> bool:
        """True when the current member's position equals its recorded size.

        This only checks; it does not advance. With no current member
        there is nothing left to read, so the answer is True.
        """
        if self.is_finished():
            return True
        member = self.members[self.cursor]
        return member.stream.tell() == member.size

    def advance(self) -> None:
        """Close the current member and move to the next one.

        Meant to be called once the current member is exhausted. A failing
        close is logged and otherwise ignored; the cursor moves either way.
        """
        if self.is_finished():
            return
        stream = self.members[self.cursor].stream
        self.cursor += 1
        try:
            stream.close()
        except Exception:
            logger.warning("Failed to close member #%d", self.cursor, exc_info=True)
        logger.debug("Advanced past member #%d of %d", self.cursor, len(self.members))

    def _skip_exhausted(self) -> None:
        # Empty members, or ones another reader finished, hold nothing.
        while not self.is_finished() and self.is_current_eof():
            self.advance()

    # -- reads ------------------------------------------------------------

    def read_bytes(self, count: int) -> Optional[bytes]:
        """Read exactly ``count`` bytes, crossing member boundaries.

        Fewer bytes are returned only when every member is exhausted
        first. Returns None if nothing is left at all.
        """
        if count < 0:
            raise ValueError("byte count must not be negative, got {}".format(count))
        self._skip_exhausted()
        if self.is_finished():
            return None

        chunks: List[bytes] = []
        remaining = count
        while remaining > 0 and not self.is_finished():
            data = self.current_stream.read(remaining) or b""
            chunks.append(data)
            remaining -= len(data)
            if not data or self.is_current_eof():
                self.advance()
        return b"".join(chunks)

    def read_line(self, keep_terminator: bool = False) -> Optional[bytes]:
        """Read one line from the current member.

        A member that ends without a trailing newline yields its last
        partial line as is; the next line starts in the next member.

        Args:
            keep_terminator: keep the trailing ``b"\\n"`` when True.
        """
        line = b""
        while not line:
            self._skip_exhausted()
            if self.is_finished():
                return None
            line = self.current_stream.readline() or b""
            if not line or self.is_current_eof():
                self.advance()

        if not keep_terminator and line.endswith(b"\n"):
            line = line[:-1]
        return line

    def read_all(self) -> Optional[bytes]:
        """Read everything left, across all remaining members.

        Member contents are concatenated byte for byte, with no separator.
        """
        if self.is_finished():
            return None

        chunks: List[bytes] = []
        while not self.is_finished():
            chunks.append(self.current_stream.read() or b"")
            self.advance()
        return b"".join(chunks)

    def read_while(self, predicate: PredicateLike) -> Optional[bytes]:
        """Read bytes one at a time while each satisfies ``predicate``.

        The first byte that fails the predicate is consumed and dropped.
        Returns None when not even one byte matched.

        Args:
            predicate: a character class such as ``"[0-9]"`` (str or
                bytes), a compiled bytes pattern, or a callable taking a
                single byte as ``bytes``.
        """
        test = as_byte_predicate(predicate)
        run = bytearray()
        while True:
            byte = self.read_bytes(1)
            if not byte or not test(byte):
                break
            run += byte
        return bytes(run) if run else None

    def read_number(self) -> Optional[int]:
        """Parse one integer literal at the current position.

        WHY: Numeric data split across members (``"420"``, ``"69"``,
        ``"666"``) should parse as the single number ``42069666``.

        HOW: Built on read_bytes/read_while, so it crosses boundaries
        like they do. A leading ``0`` is followed by a look at the next
        byte: ``x``/``X``, ``o``/``O`` and ``b``/``B`` select base 16, 8
        and 2.

        RULES:
        - ``0`` followed by anything else, or by nothing, is 0; that
          following byte is lost
        - A radix prefix with no digits after it returns None
        - Any other non-digit first byte returns None (and is consumed)
        - The byte after the digit run is consumed, as with read_while
        """
        first = self.read_bytes(1)
        if not first:
            return None

        if first == b"0":
            radix = RADIX_PREFIXES.get(self.read_bytes(1) or b"")
            if radix is None:
                return 0
            digit_class, base = radix
            digits = self.read_while(digit_class)
            if digits is None:
                return None
            return int(digits, base)

        if _DECIMAL_BYTE.fullmatch(first):
            rest = self.read_while(DECIMAL) or b""
            return int(first + rest)
        return None

    def read(self, *modes: Union[int, str]) -> Union[ReadResult, Tuple[ReadResult, ...]]:
        """Read in one or more modes.

        Modes:
            int: that many bytes (see read_bytes)
            ``"a"``: everything left
            ``"l"``: a line without its terminator
            ``"L"``: a line with its terminator
            ``"n"``: an integer literal

        A leading ``*`` on string modes (``"*n"``) is accepted. With no
        modes a single line is read. With one mode its result is returned;
        with several, a tuple of results in the same order.
        """
        if not modes:
            return self.read_line()
        results = tuple(self._read_mode(mode) for mode in modes)
        if len(results) == 1:
            return results[0]
        return results

    def _read_mode(self, mode: Union[int, str]) -> ReadResult:
        if isinstance(mode, int) and not isinstance(mode, bool):
            return self.read_bytes(mode)
        if isinstance(mode, str):
            name = mode[1:] if mode.startswith("*") else mode
            if name == "a":
                return self.read_all()
            if name == "l":
                return self.read_line()
            if name == "L":
                return self.read_line(keep_terminator=True)
            if name == "n":
                return self.read_number()
        raise ValueError("invalid read mode: {!r}".format(mode))

    # -- termination ------------------------------------------------------

    def close(self) -> None:
        """Close every member not yet closed and reset to empty.

        Close failures are logged and skipped so the remaining members are
        still closed. The reader can be reused by attaching new streams.
        """
        for index in range(self.cursor, len(self.members)):
            try:
                self.members[index].stream.close()
            except Exception:
                logger.warning("Failed to close member #%d", index + 1, exc_info=True)
        self.members = []
        self.cursor = 0

    # -- protocol sugar ---------------------------------------------------

    def __enter__(self) -> "FusedReader":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __iter__(self) -> Iterator[bytes]:
        while True:
            line = self.read_line(keep_terminator=True)
            if line is None:
                return
            yield line

    def __repr__(self) -> str:
        return "FusedReader(members={}, cursor={})".format(len(self.members), self.cursor)
