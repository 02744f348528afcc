"""fused_reader: read an ordered set of byte streams as one.

WHY: Data split across several files or streams is awkward to parse when
records, lines or numbers straddle the boundaries. A fused reader hides
the boundaries entirely.

HOW: FusedReader owns its member streams, reads them in order and closes
each as soon as it is exhausted. Foreign handle conventions are bridged
by the adapters package before attaching.

RULES:
- The core talks to members only through the stream contract in
  core/stream.py
- End of data is None, never an exception
"""

from fused_reader.adapters import HandleKind, HandleTableStream, adapt
from fused_reader.core.errors import FusedReaderError, InvalidStreamError, StreamOpenError
from fused_reader.core.predicates import BINARY, DECIMAL, HEX, OCTAL, WHITESPACE
from fused_reader.core.reader import FusedReader

__version__ = "0.1.0"

__all__ = [
    "BINARY",
    "DECIMAL",
    "FusedReader",
    "FusedReaderError",
    "HEX",
    "HandleKind",
    "HandleTableStream",
    "InvalidStreamError",
    "OCTAL",
    "StreamOpenError",
    "WHITESPACE",
    "adapt",
]
