#!/usr/bin/env python3
"""
Tape growth, pointer and cell arithmetic tests.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfi.errors import NegativePointerError
from bfi.state import Tape


def test_initial_tape():
    tape = Tape()
    assert len(tape) == 1
    assert tape.ptr == 0
    assert tape.get() == 0


def test_growth_doubles():
    tape = Tape()
    tape.move_right(1)
    assert len(tape) == 2
    tape.move_right(1)
    assert len(tape) == 4
    tape.move_right(1)
    assert len(tape) == 4
    tape.move_right(1)
    assert len(tape) == 8


def test_growth_to_required_length():
    tape = Tape()
    tape.move_right(30)
    assert tape.ptr == 30
    assert len(tape) == 31
    assert tape.get() == 0


def test_growth_keeps_existing_cells():
    tape = Tape()
    tape.add(7)
    tape.move_right(5)
    tape.add(9)
    tape.move_right(100)
    assert tape.snapshot(6) == [7, 0, 0, 0, 0, 9]
    assert set(tape.snapshot()[6:]) == {0}


def test_move_left_to_zero():
    tape = Tape()
    tape.move_right(3)
    tape.move_left(3)
    assert tape.ptr == 0


def test_negative_pointer_does_not_mutate():
    tape = Tape()
    tape.move_right(2)
    tape.add(5)
    before = tape.snapshot()
    with pytest.raises(NegativePointerError) as info:
        tape.move_left(3)
    assert tape.ptr == 2
    assert tape.snapshot() == before
    assert info.value.pointer == 2
    assert info.value.count == 3


def test_wraparound():
    tape = Tape()
    tape.sub(1)
    assert tape.get() == 255
    tape.add(1)
    assert tape.get() == 0
    tape.add(256 * 3 + 10)
    assert tape.get() == 10


@pytest.mark.parametrize("start, n", [(0, 1), (0, 255), (17, 256), (200, 1000), (255, 65537)])
def test_add_then_sub_restores(start, n):
    tape = Tape()
    tape.set(start)
    tape.add(n)
    tape.sub(n)
    assert tape.get() == start
