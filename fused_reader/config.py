"""Configuration defaults and .env loading.

WHY: The CLI has a few knobs (log level, output encoding, default split
delimiters) that users want to set once per project rather than on every
command line.

HOW: python-dotenv loads the .env file on import. Defaults are module-level
constants, each overridable by an environment variable.

RULES:
- Every setting has a working default; .env is optional
- Environment variables are read once, at import time
- log_level() raises ValueError on an unknown level name
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv

# Load .env from the working directory
load_dotenv()

LOG_LEVEL = os.getenv("FUSED_READER_LOG_LEVEL", "WARNING")
ENCODING = os.getenv("FUSED_READER_ENCODING", "utf-8")
DEFAULT_DELIMITERS = os.getenv("FUSED_READER_DEFAULT_DELIMITERS", " \t\r\n\f\v")
"""Characters that separate words for the ``split`` command."""


def log_level(name: Optional[str] = None) -> int:
    """Resolve a level name such as ``"debug"`` to a logging constant.

    Args:
        name: Level name; defaults to LOG_LEVEL.

    Raises:
        ValueError: the name is not a standard logging level.
    """
    name = (name or LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(
            "Unknown log level '{}'. Use one of: DEBUG, INFO, WARNING, ERROR, CRITICAL.".format(name)
        )
    return level
