"""Exception types raised by the fused reader.

WHY: Callers need typed exceptions to tell an unusable stream apart from a
file that could not be opened, and both apart from ordinary I/O errors
raised by the member streams themselves.

HOW: FusedReaderError is the common base. InvalidStreamError is raised at
attach time, StreamOpenError by the path-based constructor.

RULES:
- End of data is never an exception; reads return None instead
- Close failures during FusedReader.close() and FusedReader.advance() are
  logged at WARNING, never raised
"""

from __future__ import annotations

from typing import Sequence


class FusedReaderError(Exception):
    """Base class for errors raised by this package."""


class InvalidStreamError(FusedReaderError, TypeError):
    """Raised when an attached object lacks part of the stream contract.

    WHY: A member without read/seek/tell/close would fail later in the
    middle of a read, far from the attach call that caused it.

    HOW: Raised synchronously by FusedReader.attach before anything is
    recorded, so the rejected object is never a member.

    RULES:
    - position is 1-based: the slot the stream would have occupied
    - missing lists the capability names that were not found
    """

    def __init__(self, position: int, missing: Sequence[str] = ()) -> None:
        self.position = position
        self.missing = tuple(missing)
        detail = ""
        if self.missing:
            detail = " (missing: {})".format(", ".join(self.missing))
        super().__init__("invalid stream: #{}{}".format(position, detail))


class StreamOpenError(FusedReaderError, OSError):
    """Raised by FusedReader.from_paths_raw when a path cannot be opened.

    The underlying OSError is chained as ``__cause__``.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__("cannot open {}: {}".format(path, reason))
