"""Command-line interface for fused_reader.

WHY: The quickest way to use a fused reader is from the shell: treat a set
of files as one input and print its contents, its words or the numbers
in it, without caring where one file ends and the next begins.

HOW: argparse with one subcommand per task. Each subcommand opens its
files with FusedReader.from_paths_raw(), drains the reader and closes it.
Data goes to stdout; errors go to stderr.

RULES:
- cat: raw byte concatenation of all files to stdout
- words: every whitespace-separated word, one per line
- split: every run of characters not in DELIMITERS, one per line
- numbers: every integer literal, in decimal, one per line
- Exit code 1 when a file cannot be opened, 130 on Ctrl-C
- Log level comes from --log-level, else FUSED_READER_LOG_LEVEL
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import Callable, Dict, List, Optional

from fused_reader import __version__
from fused_reader.config import DEFAULT_DELIMITERS, ENCODING, log_level
from fused_reader.core.errors import StreamOpenError
from fused_reader.core.reader import FusedReader

logger = logging.getLogger(__name__)


def _error(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr, flush=True)


def _decode(line: bytes) -> str:
    return line.decode(ENCODING, errors="replace")


def _print_matches(reader: FusedReader, pattern: "re.Pattern[str]") -> int:
    count = 0
    for line in iter(reader.read_line, None):
        for word in pattern.findall(_decode(line)):
            print(word)
            count += 1
    return count


def cmd_cat(reader: FusedReader, args: argparse.Namespace) -> None:
    out = sys.stdout.buffer
    for chunk in iter(lambda: reader.read_bytes(1 << 16), None):
        out.write(chunk)
    out.flush()


def cmd_words(reader: FusedReader, args: argparse.Namespace) -> None:
    count = _print_matches(reader, re.compile(r"\S+"))
    logger.info("Printed %d word(s)", count)


def cmd_split(reader: FusedReader, args: argparse.Namespace) -> None:
    if not args.delimiters:
        raise ValueError("DELIMITERS must name at least one character")
    pattern = re.compile("[^{}]+".format(re.escape(args.delimiters)))
    count = _print_matches(reader, pattern)
    logger.info("Printed %d field(s)", count)


def cmd_numbers(reader: FusedReader, args: argparse.Namespace) -> None:
    count = 0
    while not reader.is_finished():
        value = reader.read_number()
        if value is not None:
            print(value)
            count += 1
    logger.info("Parsed %d number(s)", count)


COMMANDS: Dict[str, Callable[[FusedReader, argparse.Namespace], None]] = {
    "cat": cmd_cat,
    "words": cmd_words,
    "split": cmd_split,
    "numbers": cmd_numbers,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Kept separate from main() so tests can inspect the parser without
    reading any files.
    """
    parser = argparse.ArgumentParser(
        prog="fused-reader",
        description="Read several files as one continuous stream.",
    )
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: FUSED_READER_LOG_LEVEL or WARNING).",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    cat = sub.add_parser("cat", help="Write the concatenated bytes of all files to stdout.")
    cat.add_argument("files", nargs="+", metavar="FILE")

    words = sub.add_parser("words", help="Print every whitespace-separated word.")
    words.add_argument("files", nargs="+", metavar="FILE")

    split = sub.add_parser("split", help="Print every run of characters not in DELIMITERS.")
    split.add_argument(
        "-d", "--delimiters",
        metavar="DELIMITERS",
        default=DEFAULT_DELIMITERS,
        help="Separator characters (default: whitespace, or FUSED_READER_DEFAULT_DELIMITERS).",
    )
    split.add_argument("files", nargs="+", metavar="FILE")

    numbers = sub.add_parser("numbers", help="Print every integer literal (0x, 0o, 0b prefixes allowed).")
    numbers.add_argument("files", nargs="+", metavar="FILE")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``fused-reader`` and ``python -m fused_reader``.

    Args:
        argv: Argument list for testing; None means sys.argv.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        level = log_level(args.log_level)
    except ValueError as e:
        _error(str(e))
        sys.exit(1)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        reader = FusedReader.from_paths_raw(*args.files)
    except StreamOpenError as e:
        _error(str(e))
        sys.exit(1)

    try:
        with reader:
            COMMANDS[args.command](reader, args)
    except KeyboardInterrupt:
        print("\nCancelled by user.", file=sys.stderr, flush=True)
        sys.exit(130)
    except ValueError as e:
        _error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
