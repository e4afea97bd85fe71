"""
Constants for the Hex game.

This module defines the cell states, the six hexagonal directions used to
link neighbouring cells, and the default sizes and budgets used throughout
the Hex implementation.
"""
from __future__ import annotations
from enum import Enum
from typing import Dict, Final, Tuple
import math


class CellState(Enum):
    """Enum representing the occupancy of a single cell."""
    EMPTY = 0
    BLUE = 1  # Connects the left diagonal edge to the right diagonal edge
    RED = 2   # Connects the top row to the bottom row

    @property
    def opposite(self) -> CellState:
        """The other player's color (EMPTY stays EMPTY)."""
        if self is CellState.EMPTY:
            return CellState.EMPTY
        return CellState.RED if self is CellState.BLUE else CellState.BLUE

    def __str__(self) -> str:
        return self.name


class Direction(Enum):
    """
    The six neighbour directions of a hexagonal cell.

    Each value is the (dx, dy) offset in the skewed coordinate system used by
    the board, where row x spans columns x .. x + size - 1.
    """
    NORTH_WEST = (-1, -1)
    NORTH_EAST = (-1, 0)
    SOUTH_WEST = (1, 0)
    SOUTH_EAST = (1, 1)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITE_DIRECTIONS[self]


_OPPOSITE_DIRECTIONS: Final[Dict[Direction, Direction]] = {
    Direction.NORTH_WEST: Direction.SOUTH_EAST,
    Direction.SOUTH_EAST: Direction.NORTH_WEST,
    Direction.NORTH_EAST: Direction.SOUTH_WEST,
    Direction.SOUTH_WEST: Direction.NORTH_EAST,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Characters used for plain-text board rendering
CELL_SYMBOLS: Final[Dict[CellState, str]] = {
    CellState.EMPTY: ".",
    CellState.BLUE: "B",
    CellState.RED: "R",
}

# Rich markup styles for terminal display
CELL_STYLES: Final[Dict[CellState, str]] = {
    CellState.EMPTY: "dim",
    CellState.BLUE: "bold blue",
    CellState.RED: "bold red",
}

PLAYER_COLORS: Final[Tuple[CellState, CellState]] = (CellState.BLUE, CellState.RED)

# Board settings
DEFAULT_BOARD_SIZE: Final[int] = 9
MIN_BOARD_SIZE: Final[int] = 1

# AI and simulation settings
DEFAULT_MCTS_ITERATIONS: Final[int] = 2000
DEFAULT_EXPLORATION: Final[float] = math.sqrt(2)  # UCT exploration constant
