"""Jigsaw tile-placement puzzle.

A 4x6 board is filled by polyomino figures that are dealt one at a
time at random. Each turn the player either places the current figure
or skips it. The puzzle is solved when every cell is covered.

Board layout: a 24-bit integer, bit 23 is (row 0, col 0) and bits run
left to right, top to bottom. Figures use the same layout anchored at
the top-left corner; placing with action ``a`` shifts the figure right
by ``a`` bits.
"""

from dataclasses import dataclass, field, replace
from typing import List

import numpy as np

ROWS = 4
COLS = 6
CELLS = ROWS * COLS
FULL_BOARD = (1 << CELLS) - 1
SKIP_ACTION = CELLS
TOTAL_ACTIONS = CELLS + 1
ROW_MASK = (1 << COLS) - 1
TOP_LEFT = 1 << (CELLS - 1)

ALL_FIGURES = (
    0b100000000000000000000000,  # single
    0b100000100000100000000000,  # vertical bar of 3
    0b100000110000000000000000,  # L
    0b110000010000000000000000,  # mirrored L
    0b110000110000000000000000,  # 2x2 square
    0b110000011000000000000000,  # Z
)


def random_figure() -> int:
    """Index of a uniformly random figure."""
    return int(np.random.randint(len(ALL_FIGURES)))


@dataclass
class Jigsaw:
    """One Jigsaw position.

    Attributes:
        board: Occupied cells bitmask
        figure_index: Figure to be placed next
        quantity: Number of turns played (placements and skips)
    """
    board: int = 0
    figure_index: int = field(default_factory=random_figure)
    quantity: int = 0

    def validate(self) -> "Jigsaw":
        """Check a position built from user input.

        Raises:
            ValueError: If the board has bits outside the 24 cells or the
                figure index is unknown
        """
        if not 0 <= self.board <= FULL_BOARD:
            raise ValueError(f"Board must be a 24-bit mask, got {self.board:#x}")
        if not 0 <= self.figure_index < len(ALL_FIGURES):
            raise ValueError(
                f"Figure must be in [0, {len(ALL_FIGURES) - 1}], got {self.figure_index}"
            )
        return self

    @staticmethod
    def index(row: int, col: int) -> int:
        """Cell index (0..23) of (row, col)."""
        return COLS * row + col

    def coord(self, row: int, col: int) -> bool:
        return (self.board & (TOP_LEFT >> self.index(row, col))) != 0

    def toggle_coord(self, row: int, col: int) -> None:
        self.board ^= TOP_LEFT >> self.index(row, col)

    @property
    def figure(self) -> int:
        return ALL_FIGURES[self.figure_index]

    def in_figure(self, action: int, index: int) -> bool:
        """Whether placing with ``action`` covers cell ``index``."""
        return ((self.figure >> action) & (TOP_LEFT >> index)) != 0

    def is_legal(self, action: int) -> bool:
        if action == SKIP_ACTION:
            return True
        if not 0 <= action < SKIP_ACTION:
            return False

        figure = self.figure
        placed = figure >> action

        # Overlap with occupied cells
        if self.board & placed:
            return False

        # Cells pushed off the bottom of the board
        if (placed << action) != figure:
            return False

        # Cells wrapping past the right edge into the next row
        x_offset = action % COLS
        for row in range(ROWS):
            figure_row = (figure >> (COLS * row)) & ROW_MASK
            if ((figure_row >> x_offset) << x_offset) != figure_row:
                return False
        return True

    def has_finished(self) -> bool:
        return self.board == FULL_BOARD

    def legal_actions(self) -> List[int]:
        return [action for action in range(TOTAL_ACTIONS) if self.is_legal(action)]

    def perform_action(self, action: int) -> None:
        if not self.is_legal(action):
            raise ValueError(
                f"Illegal action {action} for figure {self.figure_index} on board {self.board:#08x}"
            )

        if action != SKIP_ACTION:
            self.board |= self.figure >> action

        self.quantity += 1
        self.figure_index = random_figure()

    def eval(self) -> int:
        return 1 if self.has_finished() else 0

    def copy(self) -> "Jigsaw":
        return replace(self)

    def render(self) -> str:
        """Text board: '#' occupied, '+' legal anchor, '.' otherwise; figure on the right."""
        lines = [f"turn {self.quantity}"]
        for row in range(ROWS):
            board_cells = []
            figure_cells = []
            for col in range(COLS):
                index = self.index(row, col)
                if self.coord(row, col):
                    board_cells.append("#")
                elif self.is_legal(index):
                    board_cells.append("+")
                else:
                    board_cells.append(".")
                figure_cells.append("@" if self.figure & (TOP_LEFT >> index) else " ")
            lines.append("".join(board_cells) + "  " + "".join(figure_cells).rstrip())
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()
