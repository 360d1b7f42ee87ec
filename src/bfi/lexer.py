from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Sequence, Tuple

from .errors import (
    NoValidTokensError,
    UnmatchedLoopEndError,
    UnmatchedLoopStartError,
    make_loop_error,
)


class Token(Enum):
    INC_PTR = '>'
    DEC_PTR = '<'
    INC_VAL = '+'
    DEC_VAL = '-'
    LOOP_START = '['
    LOOP_END = ']'
    INPUT = ','
    OUTPUT = '.'


_TOKEN_FOR_CHAR: Dict[str, Token] = {t.value: t for t in Token}


@dataclass(frozen=True)
class JumpTable:
    """Bidirectional map between matching loop tokens, keyed by token index."""

    starts: Mapping[int, int]
    ends: Mapping[int, int]

    def end_of(self, start_index: int) -> int:
        return self.starts[start_index]

    def start_of(self, end_index: int) -> int:
        return self.ends[end_index]


@dataclass(frozen=True)
class Program:
    tokens: Tuple[Token, ...]
    jump_table: JumpTable

    def __len__(self) -> int:
        return len(self.tokens)

    def run_length(self, index: int) -> int:
        return consecutive_run_length(self.tokens, index)


def consecutive_run_length(tokens: Sequence[Token], index: int) -> int:
    """Count the tokens equal to ``tokens[index]`` starting at ``index`` (inclusive)."""
    needle = tokens[index]
    count = 1
    while index + count < len(tokens) and tokens[index + count] is needle:
        count += 1
    return count


def _scan(source: str) -> Tuple[List[Token], List[int]]:
    tokens: List[Token] = []
    positions: List[int] = []
    for pos, ch in enumerate(source):
        token = _TOKEN_FOR_CHAR.get(ch)
        if token is None:
            continue
        tokens.append(token)
        positions.append(pos)
    return tokens, positions


def build_jump_table(tokens: Sequence[Token], *, source: str = '', positions: Sequence[int] = ()) -> JumpTable:
    """
    Pair every loop start with its loop end in a single pass.

    ``source`` and ``positions`` (source offset of each token) are only used to
    point error messages at the offending bracket; without them the token index
    is reported instead.
    """
    starts: Dict[int, int] = {}
    ends: Dict[int, int] = {}
    stack: List[int] = []

    def where(i: int) -> int:
        return positions[i] if positions else i

    for i, token in enumerate(tokens):
        if token is Token.LOOP_START:
            stack.append(i)
        elif token is Token.LOOP_END:
            if not stack:
                raise make_loop_error(
                    UnmatchedLoopEndError,
                    message="']' without a matching '['",
                    source=source,
                    position=where(i),
                )
            start = stack.pop()
            starts[start] = i
            ends[i] = start

    if stack:
        # innermost unclosed loop is the one the reader most likely forgot
        raise make_loop_error(
            UnmatchedLoopStartError,
            message="'[' without a matching ']'",
            source=source,
            position=where(stack[-1]),
        )
    return JumpTable(starts=starts, ends=ends)


def tokenize(source: str) -> Program:
    """
    Turn source text into a Program.

    Characters outside the eight operators are comments and are dropped.

    Raises:
        NoValidTokensError: no operator characters at all
        UnmatchedLoopEndError / UnmatchedLoopStartError: unbalanced brackets
    """
    tokens, positions = _scan(source)
    if not tokens:
        raise NoValidTokensError(message="NoValidTokens: no valid operations in input stream")
    jump_table = build_jump_table(tokens, source=source, positions=positions)
    return Program(tokens=tuple(tokens), jump_table=jump_table)
