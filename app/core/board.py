from __future__ import annotations

from enum import StrEnum

CELL_COUNT = 9

# Evaluation order matters: the first completed line is the one reported.
WIN_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class Symbol(StrEnum):
    X = "X"
    O = "O"

    @property
    def other(self) -> "Symbol":
        return Symbol.O if self is Symbol.X else Symbol.X


def is_valid_index(index: object) -> bool:
    # bool is an int subclass; True/False are not cell indices.
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < CELL_COUNT


class Board:
    """Nine cells laid out row-major; `None` marks an empty cell.

        0 1 2
        3 4 5
        6 7 8

    Cells only go from empty to occupied. Clearing happens by building a new Board.
    """

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: list[Symbol | None] = [None] * CELL_COUNT

    @property
    def cells(self) -> tuple[Symbol | None, ...]:
        return tuple(self._cells)

    def __getitem__(self, index: int) -> Symbol | None:
        return self._cells[index]

    def is_empty(self, index: int) -> bool:
        return self._cells[index] is None

    def place(self, index: int, symbol: Symbol) -> None:
        if not is_valid_index(index):
            raise ValueError(f"Cell index out of range: {index!r}")
        if self._cells[index] is not None:
            raise ValueError(f"Cell {index} is already occupied by {self._cells[index]}")
        self._cells[index] = symbol

    def is_full(self) -> bool:
        return all(c is not None for c in self._cells)

    def occupied_count(self) -> int:
        return sum(1 for c in self._cells if c is not None)

    def completed_line(self, symbol: Symbol) -> tuple[int, int, int] | None:
        """Return the first line fully held by `symbol`, in WIN_LINES order."""

        for line in WIN_LINES:
            if all(self._cells[i] is symbol for i in line):
                return line
        return None
