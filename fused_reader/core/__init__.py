"""Core reader, stream contract, predicates and errors.

WHY: Everything the fused reader needs lives here and depends on nothing
outside the standard library, so it can be used without the CLI.

HOW: stream.py states the member contract, predicates.py the byte tests
used by read_while, errors.py the exception types, reader.py the
FusedReader itself.
"""
