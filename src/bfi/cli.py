#!/usr/bin/env python3
"""
bfi - run a Brainfuck program.

The program reads stdin and writes raw bytes to stdout; diagnostics go to
stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import BinaryIO, List, Optional, Tuple

from . import __version__
from .errors import (
    ARG_ERROR,
    OUTPUT_ERROR,
    SUCCESS,
    BFIError,
    EmptyCodeError,
    InputError,
    NegativePointerError,
    NoValidTokensError,
    OutputError,
    UnmatchedLoopEndError,
    UnmatchedLoopStartError,
)
from .interpreter import Interpreter

logger = logging.getLogger(__name__)

MESSAGES = {
    UnmatchedLoopStartError: "Unmatched loop start",
    UnmatchedLoopEndError: "Unmatched loop end",
    EmptyCodeError: "Empty code",
    NoValidTokensError: "No valid operations in input stream",
    NegativePointerError: "Data pointer negative",
    InputError: "Cannot read from input stream",
    OutputError: "Cannot write to output stream",
}


EXIT_CODES = """\
Exit codes:
    0  success
    1  bad arguments or unreadable source file
    2  syntax error (empty code, no operations, unmatched loop, negative pointer)
    3  cannot read from input stream
    4  cannot write to output stream
"""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        # argparse exits with 2, which is taken by syntax errors
        self.print_usage(sys.stderr)
        self.exit(ARG_ERROR, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="bfi",
        description="Brainfuck interpreter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EXIT_CODES,
    )
    parser.add_argument("code", nargs="?", help="program source")
    parser.add_argument("-f", "--file", help="read program source from FILE")
    parser.add_argument("--encoding", default="utf-8", help="source file encoding (default: utf-8)")
    parser.add_argument("--time", action="store_true", help="log how long the program ran")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="only log errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


_VALUE_OPTIONS = ("--file", "--encoding")


def _is_option(arg: str) -> bool:
    if len(arg) < 2 or arg[0] != "-":
        return False
    if arg[1] == "-":
        return arg[2:3].isalpha()
    return arg[1].isalpha()


def _takes_value(arg: str) -> bool:
    if arg == "-f":
        return True
    return arg.startswith("--") and "=" not in arg and any(o.startswith(arg) for o in _VALUE_OPTIONS)


def split_code_argument(argv: List[str]) -> Tuple[Optional[str], List[str]]:
    """
    Take the program text out of ``argv`` before argparse sees it.

    Brainfuck code often starts with '-' (``--.``), which argparse would read as
    an option. Options are words starting with '-' followed by a letter; the
    first argument that is neither an option nor an option value is the code.
    """
    i = 0
    while i < len(argv):
        arg = argv[i]
        if _is_option(arg):
            i += 2 if _takes_value(arg) else 1
            continue
        return arg, argv[:i] + argv[i + 1:]
    return None, list(argv)


def setup_logging(verbose: bool, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logging.basicConfig(level=level, handlers=[handler], force=True)


def _load_source(args: argparse.Namespace) -> Optional[str]:
    if args.code is not None and args.file is not None:
        logger.error("Too many arguments (expected code or --file, not both)")
        return None
    if args.file is not None:
        try:
            return Path(args.file).read_text(encoding=args.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Couldn't read %s: %s", args.file, exc)
            return None
    if args.code is None:
        logger.error("Expected code as argument")
        return None
    return args.code


def run(code: str, reader: BinaryIO, writer: BinaryIO, *, timed: bool = False) -> int:
    """Execute ``code`` and map the outcome to an exit code."""
    start = time.perf_counter()
    try:
        Interpreter().execute(code, reader, writer)
        writer.flush()
    except BFIError as exc:
        logger.error(MESSAGES.get(type(exc), exc.kind))
        logger.debug("%s", exc)
        return exc.exit_code
    except OSError as exc:
        logger.error(MESSAGES[OutputError])
        logger.debug("flush failed: %s", exc)
        return OUTPUT_ERROR
    finally:
        if timed:
            logger.info("Execution took %.2f ms", (time.perf_counter() - start) * 1000)
    return SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    code, rest = split_code_argument(argv)
    args = build_parser().parse_args(rest)
    setup_logging(args.verbose, args.quiet)

    if code is not None:
        if args.code is not None:
            logger.error("Too many arguments (expected 1)")
            return ARG_ERROR
        args.code = code

    code = _load_source(args)
    if code is None:
        return ARG_ERROR

    return run(code, sys.stdin.buffer, sys.stdout.buffer, timed=args.time)


if __name__ == "__main__":
    raise SystemExit(main())
