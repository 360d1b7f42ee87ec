#!/usr/bin/env python3
"""
Tokenizer and loop resolution tests.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfi.errors import NoValidTokensError, UnmatchedLoopEndError, UnmatchedLoopStartError
from bfi.lexer import Token, build_jump_table, consecutive_run_length, tokenize


def test_comments_are_dropped():
    program = tokenize("a+b>c.d\n ignore me, ")
    assert program.tokens == (Token.INC_VAL, Token.INC_PTR, Token.OUTPUT, Token.INPUT)


def test_all_eight_operators():
    program = tokenize("><+-[],.")
    assert [t.value for t in program.tokens] == list("><+-[],.")


def test_no_valid_tokens():
    with pytest.raises(NoValidTokensError):
        tokenize("no valid tokens")


def test_jump_table_nested():
    program = tokenize("+[>[-]<-]")
    jumps = program.jump_table
    assert jumps.end_of(1) == 8
    assert jumps.end_of(3) == 5
    assert jumps.start_of(8) == 1
    assert jumps.start_of(5) == 3


def test_jump_table_round_trip():
    program = tokenize("[[]][[[]]][][ [ ] ]")
    jumps = program.jump_table
    opens = [i for i, t in enumerate(program.tokens) if t is Token.LOOP_START]
    closes = [i for i, t in enumerate(program.tokens) if t is Token.LOOP_END]
    assert sorted(jumps.starts) == opens
    assert sorted(jumps.ends) == closes
    for start in opens:
        end = jumps.end_of(start)
        assert end > start
        assert jumps.start_of(end) == start


def test_unmatched_loop_start():
    with pytest.raises(UnmatchedLoopStartError):
        tokenize("[")


def test_unmatched_loop_end():
    with pytest.raises(UnmatchedLoopEndError):
        tokenize("]")


def test_extra_close_after_balanced_loop():
    with pytest.raises(UnmatchedLoopEndError):
        tokenize("[-]]")


def test_loop_error_points_at_source_position():
    source = "+++\n++ [->+<\n.."
    with pytest.raises(UnmatchedLoopStartError) as info:
        tokenize(source)
    err = info.value
    assert err.position == source.index('[')
    assert (err.line, err.column) == (2, 4)
    assert "> " in err.context
    assert "Hint:" in str(err)


def test_unmatched_end_reports_first_stray_bracket():
    source = "+]-]"
    with pytest.raises(UnmatchedLoopEndError) as info:
        tokenize(source)
    assert info.value.position == 1


def test_build_jump_table_without_source():
    with pytest.raises(UnmatchedLoopEndError) as info:
        build_jump_table([Token.INC_VAL, Token.LOOP_END])
    assert info.value.position == 1


def test_consecutive_run_length():
    tokens = tokenize("+++>>-<<<[[]]").tokens
    assert consecutive_run_length(tokens, 0) == 3
    assert consecutive_run_length(tokens, 1) == 2
    assert consecutive_run_length(tokens, 3) == 2
    assert consecutive_run_length(tokens, 5) == 1
    assert consecutive_run_length(tokens, 6) == 3


def test_run_length_is_not_split_by_comments():
    program = tokenize("+ + +\n+")
    assert program.run_length(0) == 4


def test_run_length_of_loop_tokens():
    tokens = (Token.LOOP_START, Token.LOOP_START, Token.LOOP_END, Token.LOOP_END)
    assert consecutive_run_length(tokens, 0) == 2
    assert consecutive_run_length(tokens, 1) == 1
