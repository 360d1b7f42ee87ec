from __future__ import annotations

from typing import List, Optional

import numpy as np

from .errors import NegativePointerError

INITIAL_TAPE_SIZE = 1
TAPE_GROWTH_FACTOR = 2
CELL_MODULUS = 256


class Tape:
    """
    Byte tape plus data pointer for a single run.

    Cells are materialized lazily: the tape starts with one zero cell and only
    grows when the pointer moves past the end. Growth at least doubles the
    length so long runs of '>' stay amortized O(1).
    """

    def __init__(self, size: int = INITIAL_TAPE_SIZE):
        self.cells = np.zeros(size, dtype=np.uint8)
        self.ptr = 0

    def __len__(self) -> int:
        return len(self.cells)

    def move_right(self, count: int) -> None:
        target = self.ptr + count
        if target >= len(self.cells):
            self._grow(max(target + 1, len(self.cells) * TAPE_GROWTH_FACTOR))
        self.ptr = target

    def move_left(self, count: int) -> None:
        if self.ptr - count < 0:
            raise NegativePointerError(
                message=f"NegativePointer: cannot move {count} left from cell {self.ptr}",
                pointer=self.ptr,
                count=count,
            )
        self.ptr -= count

    def add(self, count: int) -> None:
        self.cells[self.ptr] = (int(self.cells[self.ptr]) + count) % CELL_MODULUS

    def sub(self, count: int) -> None:
        self.cells[self.ptr] = (int(self.cells[self.ptr]) - count) % CELL_MODULUS

    def get(self) -> int:
        return int(self.cells[self.ptr])

    def set(self, value: int) -> None:
        self.cells[self.ptr] = value

    def snapshot(self, limit: Optional[int] = None) -> List[int]:
        cells = self.cells if limit is None else self.cells[:limit]
        return [int(b) for b in cells]

    def _grow(self, new_size: int) -> None:
        grown = np.zeros(new_size, dtype=np.uint8)
        grown[:len(self.cells)] = self.cells
        self.cells = grown
