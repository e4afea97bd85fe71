"""
Board representation for the Hex game.

This module defines the Position value type, the Cell handle and the Board
class. The board is a rhombus of side `size` embedded in a skewed grid: row x
holds the columns x .. x + size - 1. Occupancy is stored in a numpy array and
each valid coordinate has a Cell handle that knows its neighbours.

BLUE wins by linking the left diagonal edge (cells (x, x)) to the right one
(cells (x, x + size - 1)); RED wins by linking the top row (x == 0) to the
bottom row (x == size - 1).
"""
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterator, List, Optional, Set, Union

import numpy as np

from hex_ai.core.constants import (
    CellState, Direction, CELL_SYMBOLS, PLAYER_COLORS, MIN_BOARD_SIZE, DEFAULT_BOARD_SIZE
)


class InvalidPositionError(ValueError):
    """Raised when a cell is accessed at coordinates outside the board."""


@dataclass(frozen=True)
class Position:
    """A cell coordinate on the skewed hex grid."""
    x: int
    y: int

    def distance(self, other: Position) -> int:
        """Manhattan distance between two positions."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def neighbor(self, direction: Direction) -> Position:
        """The position one step away in `direction` (may be off the board)."""
        return Position(self.x + direction.dx, self.y + direction.dy)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Cell:
    """
    Handle on one cell of a Board.

    The occupancy lives in the owning board's array; the handle only carries
    the position and the precomputed neighbour links.
    """

    __slots__ = ("_board", "position", "neighbors")

    def __init__(self, board: Board, position: Position):
        self._board = board
        self.position = position
        self.neighbors: Dict[Direction, Cell] = {}

    @property
    def state(self) -> CellState:
        return CellState(int(self._board._grid[self.position.x, self.position.y]))

    @state.setter
    def state(self, value: CellState) -> None:
        self._board._grid[self.position.x, self.position.y] = value.value

    def is_empty(self) -> bool:
        return self.state is CellState.EMPTY

    def __repr__(self) -> str:
        return f"Cell({self.position}, {self.state})"


class Board:
    """
    A Hex board of side `size`.

    Valid coordinates satisfy 0 <= x < size and x <= y < size + x, giving
    exactly size * size cells. Adjacency is computed once at construction and
    never changes afterwards.
    """

    def __init__(self, size: int = DEFAULT_BOARD_SIZE):
        """
        Create an empty board.

        Args:
            size: Side length of the board (must be at least 1)
        """
        if size < MIN_BOARD_SIZE:
            raise ValueError(f"Board size must be at least {MIN_BOARD_SIZE}, got {size}")

        self.size = size
        self._grid = np.zeros((size, 2 * size - 1), dtype=np.int8)

        # Row-major list of valid positions, used for stable enumeration
        self._positions: List[Position] = [
            Position(x, y)
            for x in range(size)
            for y in range(x, size + x)
        ]
        self._cells: Dict[Position, Cell] = {}
        self._link_cells()

    def _link_cells(self) -> None:
        """Create every Cell and wire up its neighbours."""
        for position in self._positions:
            self._cells[position] = Cell(self, position)

        for position in self._positions:
            cell = self._cells[position]
            for direction in Direction:
                neighbor = position.neighbor(direction)
                if self.is_in_bounds(neighbor):
                    cell.neighbors[direction] = self._cells[neighbor]

    def is_in_bounds(self, position: Optional[Position]) -> bool:
        """
        Check whether a position lies on the board.

        Args:
            position: Position to check

        Returns:
            True if the coordinates are valid for this board
        """
        if position is None:
            raise ValueError("Position must not be None")
        x, y = position.x, position.y
        return 0 <= x < self.size and x <= y < self.size + x

    def cell_at(self, position: Union[Position, int], y: Optional[int] = None) -> Cell:
        """
        Get the cell at a position.

        Accepts either a Position or two integer coordinates.

        Raises:
            InvalidPositionError: If the position is outside the board
        """
        if y is not None:
            position = Position(position, y)
        if not self.is_in_bounds(position):
            raise InvalidPositionError(f"Position {position} is not on a board of size {self.size}")
        return self._cells[position]

    def place(self, position: Position, color: CellState) -> None:
        """
        Put a stone of `color` on an empty cell.

        Raises:
            InvalidPositionError: If the position is outside the board
            ValueError: If the cell is occupied or the color is EMPTY
        """
        if color is CellState.EMPTY:
            raise ValueError("Cannot place an EMPTY stone")
        cell = self.cell_at(position)
        if not cell.is_empty():
            raise ValueError(f"Cell {position} is already occupied by {cell.state}")
        cell.state = color

    def cells(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        for position in self._positions:
            yield self._cells[position]

    def available_moves(self) -> Dict[int, Position]:
        """
        Enumerate the empty cells.

        Cells are listed in row-major order (x, then y) and numbered from 0,
        so a uniformly random key picks a uniformly random legal move.

        Returns:
            Mapping from sequential index to the position of an empty cell
        """
        empty = CellState.EMPTY.value
        grid = self._grid
        moves: Dict[int, Position] = {}
        for position in self._positions:
            if grid[position.x, position.y] == empty:
                moves[len(moves)] = position
        return moves

    def has_won(self, color: CellState) -> bool:
        """
        Check whether `color` connects its two borders.

        Runs a breadth-first search from every border cell occupied by
        `color`, following neighbours of the same color, and stops as soon
        as a cell on the opposite border is reached.

        Args:
            color: BLUE or RED

        Returns:
            True if a connected chain links both borders
        """
        if color is CellState.BLUE:
            seeds = [self._cells[Position(x, x)] for x in range(self.size)]
        elif color is CellState.RED:
            seeds = [self._cells[Position(0, y)] for y in range(self.size)]
        else:
            raise ValueError(f"No player plays {color}")

        last = self.size - 1
        frontier: Deque[Cell] = deque(cell for cell in seeds if cell.state is color)
        visited: Set[Cell] = set()

        while frontier:
            cell = frontier.popleft()
            if cell in visited:
                continue
            visited.add(cell)

            x, y = cell.position.x, cell.position.y
            if color is CellState.BLUE and y == x + last:
                return True
            if color is CellState.RED and x == last:
                return True

            for neighbor in cell.neighbors.values():
                if neighbor not in visited and neighbor.state is color:
                    frontier.append(neighbor)

        return False

    def winner(self) -> Optional[CellState]:
        """The color that has won, or None."""
        for color in PLAYER_COLORS:
            if self.has_won(color):
                return color
        return None

    def is_terminal(self) -> bool:
        """The game is over when either color has won or the board is full."""
        return (
            self.has_won(CellState.BLUE)
            or self.has_won(CellState.RED)
            or not self.available_moves()
        )

    def copy(self) -> Board:
        """
        Create an independent copy of this board.

        The occupancy is copied; adjacency is rebuilt by the new board.
        """
        clone = Board(self.size)
        clone._grid = self._grid.copy()
        return clone

    def clear(self) -> None:
        """Reset every cell to EMPTY."""
        self._grid.fill(CellState.EMPTY.value)

    def to_array(self) -> np.ndarray:
        """
        Occupancy as a size x size array of CellState values.

        Row x of the result holds the cells (x, x) .. (x, x + size - 1).
        """
        rows = [self._grid[x, x:x + self.size] for x in range(self.size)]
        return np.array(rows, dtype=np.int8)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._grid, other._grid)

    __hash__ = None  # mutable

    def __str__(self) -> str:
        lines = []
        for x in range(self.size):
            row = " ".join(
                CELL_SYMBOLS[self._cells[Position(x, y)].state]
                for y in range(x, self.size + x)
            )
            lines.append(" " * x + row)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Board(size={self.size}, free={len(self.available_moves())})"
