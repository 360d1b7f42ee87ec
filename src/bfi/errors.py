from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, List, Optional, Tuple

SUCCESS = 0
ARG_ERROR = 1
SYNTAX_ERROR = 2
INPUT_ERROR = 3
OUTPUT_ERROR = 4


def _locate(source: str, position: int) -> Tuple[int, int]:
    line = source.count('\n', 0, position) + 1
    line_start = source.rfind('\n', 0, position) + 1
    return line, position - line_start + 1


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'UnmatchedLoopStart':
        return 'Every "[" needs a "]" later in the program. Check for a missing "]".'
    if kind == 'UnmatchedLoopEnd':
        return 'This "]" closes no loop. Check for an extra "]" or a missing "[" before it.'
    return None


@dataclass
class BFIError(Exception):
    message: str

    kind: ClassVar[str] = 'Error'
    exit_code: ClassVar[int] = SYNTAX_ERROR

    def __str__(self) -> str:
        return self.message


@dataclass
class BFISyntaxError(BFIError):
    pass


class EmptyCodeError(BFISyntaxError):
    kind = 'EmptyCode'


class NoValidTokensError(BFISyntaxError):
    kind = 'NoValidTokens'


@dataclass
class LoopError(BFISyntaxError):
    position: int
    line: int
    column: int
    context: str


class UnmatchedLoopStartError(LoopError):
    kind = 'UnmatchedLoopStart'


class UnmatchedLoopEndError(LoopError):
    kind = 'UnmatchedLoopEnd'


@dataclass
class BFIRuntimeError(BFIError):
    pointer: int
    count: int


class NegativePointerError(BFIRuntimeError):
    kind = 'NegativePointer'


@dataclass
class BFIIOError(BFIError):
    pass


class InputError(BFIIOError):
    kind = 'Input'
    exit_code = INPUT_ERROR


class OutputError(BFIIOError):
    kind = 'Output'
    exit_code = OUTPUT_ERROR


def make_loop_error(cls, *, message: str, source: str, position: int) -> LoopError:
    """Build an unmatched-loop error pointing at the bracket at ``position`` in ``source``."""
    line, column = _locate(source, position)
    ctx = _build_context(source.split('\n'), line, column)
    hint = _hint_for(cls.kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    return cls(
        message=f"{cls.kind}: {message} (line {line}, column {column})\n{ctx}{hint_block}",
        position=position,
        line=line,
        column=column,
        context=ctx,
    )
