"""Single-byte predicates used by FusedReader.read_while.

WHY: Predicate-bounded reads (digit runs, whitespace runs, hex literals)
are written by callers either as a regex character class, which is the
natural way to describe a set of bytes, or as an arbitrary test function.
The reader should not care which.

HOW: as_byte_predicate() turns a str/bytes character class, a compiled
pattern, or a callable into a function of one ``bytes`` of length 1.
The named classes below cover the numeric-literal parser.

RULES:
- str patterns are encoded as latin-1 so every byte value is expressible
- A pattern matches only when it matches the whole single byte
- Callables receive a bytes object of length 1, never an int
"""

from __future__ import annotations

import re
from typing import Callable, Union

BytePredicate = Callable[[bytes], bool]
PredicateLike = Union[str, bytes, re.Pattern, Callable[[bytes], object]]

DECIMAL = rb"[0-9]"
HEX = rb"[0-9a-fA-F]"
OCTAL = rb"[0-7]"
BINARY = rb"[01]"
WHITESPACE = rb"\s"

# Radix prefix byte (after a leading "0") -> (digit class, base)
RADIX_PREFIXES = {
    b"x": (HEX, 16),
    b"X": (HEX, 16),
    b"o": (OCTAL, 8),
    b"O": (OCTAL, 8),
    b"b": (BINARY, 2),
    b"B": (BINARY, 2),
}


def as_byte_predicate(predicate: PredicateLike) -> BytePredicate:
    """Normalize a character class or test function into a byte predicate.

    Raises:
        TypeError: ``predicate`` is none of the accepted shapes.
        re.error: the pattern does not compile.
    """
    if isinstance(predicate, str):
        predicate = predicate.encode("latin-1")
    if isinstance(predicate, bytes):
        predicate = re.compile(predicate)
    if isinstance(predicate, re.Pattern):
        if isinstance(predicate.pattern, str):
            raise TypeError("read_while needs a bytes pattern, got a str pattern")
        pattern = predicate
        return lambda byte: pattern.fullmatch(byte) is not None
    if callable(predicate):
        test = predicate
        return lambda byte: bool(test(byte))
    raise TypeError(
        "predicate must be a character class or a callable, got {}".format(
            type(predicate).__name__
        )
    )
