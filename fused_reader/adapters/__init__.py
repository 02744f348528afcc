"""Adapters that turn foreign stream handles into contract streams.

WHY: Not every host exposes files as Python objects with read/seek/tell/
close methods. Adapters bridge those handles so the reader only ever sees
one contract.

HOW: Each adapter module wraps one foreign convention. adapt() is the
explicit entry point: the caller names the convention it holds.

RULES:
- Adapters only wrap; they do no buffering and hold no extra state
- The choice of adapter is made by the caller, never guessed by the reader
"""

from fused_reader.adapters.handle_table import HandleKind, HandleTableStream, adapt

__all__ = ["HandleKind", "HandleTableStream", "adapt"]
