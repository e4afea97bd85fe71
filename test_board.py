"""
Tests for the Hex board: bounds, adjacency, enumeration, win detection and copies.
"""
import numpy as np
import pytest

from hex_ai.core.board import Board, Position, InvalidPositionError
from hex_ai.core.constants import CellState, Direction


def fill(board, positions, color):
    for position in positions:
        board.place(position, color)


@pytest.mark.parametrize("size", [1, 2, 3, 5, 7])
def test_bounds_accept_exactly_size_squared_cells(size):
    board = Board(size)
    accepted = [
        (x, y)
        for x in range(-2, size + 2)
        for y in range(-2, 2 * size + 2)
        if board.is_in_bounds(Position(x, y))
    ]
    assert len(accepted) == size * size
    assert all(x <= y < size + x for x, y in accepted)


@pytest.mark.parametrize("size", [1, 3, 4])
def test_fresh_board_available_moves_are_numbered_row_major(size):
    board = Board(size)
    moves = board.available_moves()

    assert list(moves.keys()) == list(range(size * size))
    expected = [Position(x, y) for x in range(size) for y in range(x, size + x)]
    assert list(moves.values()) == expected


def test_available_moves_skip_occupied_cells_and_stay_contiguous():
    board = Board(3)
    board.place(Position(0, 1), CellState.BLUE)
    board.place(Position(1, 2), CellState.RED)

    moves = board.available_moves()

    assert len(moves) == 7
    assert list(moves.keys()) == list(range(7))
    assert Position(0, 1) not in moves.values()
    assert Position(1, 2) not in moves.values()
    assert moves[0] == Position(0, 0)
    assert moves[1] == Position(0, 2)


def test_cell_at_rejects_positions_off_the_board():
    board = Board(4)
    for position in [Position(-1, -1), Position(0, 4), Position(1, 0), Position(4, 4)]:
        with pytest.raises(InvalidPositionError):
            board.cell_at(position)


def test_invalid_position_is_a_value_error():
    with pytest.raises(ValueError):
        Board(2).cell_at(Position(5, 5))


def test_cell_at_accepts_coordinates():
    board = Board(3)
    assert board.cell_at(1, 2) is board.cell_at(Position(1, 2))


def test_is_in_bounds_rejects_none():
    with pytest.raises(ValueError):
        Board(3).is_in_bounds(None)


@pytest.mark.parametrize("size", [0, -3])
def test_degenerate_sizes_are_rejected(size):
    with pytest.raises(ValueError):
        Board(size)


def test_adjacency_is_symmetric():
    board = Board(5)
    for cell in board.cells():
        for direction, neighbor in cell.neighbors.items():
            assert neighbor.neighbors[direction.opposite] is cell


def test_neighbor_counts():
    board = Board(3)
    assert len(board.cell_at(1, 2).neighbors) == 6
    # Acute corners have two neighbours, obtuse corners three
    assert set(board.cell_at(0, 0).neighbors) == {Direction.SOUTH_EAST, Direction.RIGHT}
    assert len(board.cell_at(0, 2).neighbors) == 3
    assert len(board.cell_at(2, 2).neighbors) == 3
    assert len(board.cell_at(2, 4).neighbors) == 2


def test_place_rejects_occupied_cells_and_empty_stones():
    board = Board(3)
    board.place(Position(0, 0), CellState.BLUE)
    with pytest.raises(ValueError):
        board.place(Position(0, 0), CellState.RED)
    with pytest.raises(ValueError):
        board.place(Position(0, 1), CellState.EMPTY)


def test_empty_board_has_no_winner():
    board = Board(5)
    assert not board.has_won(CellState.BLUE)
    assert not board.has_won(CellState.RED)
    assert board.winner() is None
    assert not board.is_terminal()


def test_red_top_row_alone_does_not_win():
    board = Board(5)
    fill(board, [Position(0, y) for y in range(5)], CellState.RED)
    assert not board.has_won(CellState.RED)
    assert not board.has_won(CellState.BLUE)


def test_blue_full_row_wins():
    board = Board(5)
    fill(board, [Position(0, y) for y in range(5)], CellState.BLUE)
    assert board.has_won(CellState.BLUE)
    assert not board.has_won(CellState.RED)
    assert board.is_terminal()


@pytest.mark.parametrize("size", [2, 3, 6])
def test_diagonal_connects_top_and_bottom_rows(size):
    board = Board(size)
    fill(board, [Position(x, x) for x in range(size)], CellState.RED)
    assert board.has_won(CellState.RED)

    board = Board(size)
    fill(board, [Position(x, x) for x in range(size)], CellState.BLUE)
    # All on BLUE's starting edge, never reaching the far edge
    assert not board.has_won(CellState.BLUE)


def test_red_chain_through_south_west_and_south_east_links():
    board = Board(4)
    # (0, 2) -> SW (1, 2) -> SE (2, 3) -> SW (3, 3)
    fill(board, [Position(0, 2), Position(1, 2), Position(2, 3), Position(3, 3)], CellState.RED)
    assert board.has_won(CellState.RED)


def test_broken_chain_does_not_win():
    board = Board(4)
    fill(board, [Position(2, 2), Position(2, 3), Position(2, 5)], CellState.BLUE)
    assert not board.has_won(CellState.BLUE)
    board.place(Position(2, 4), CellState.BLUE)
    assert board.has_won(CellState.BLUE)


def test_blocked_by_opponent_stone():
    board = Board(3)
    fill(board, [Position(0, 0), Position(1, 1)], CellState.RED)
    board.place(Position(2, 2), CellState.BLUE)
    assert not board.has_won(CellState.RED)


def test_one_by_one_board():
    board = Board(1)
    assert board.available_moves() == {0: Position(0, 0)}
    assert not board.has_won(CellState.BLUE)
    assert not board.has_won(CellState.RED)
    assert not board.is_terminal()

    board.place(Position(0, 0), CellState.BLUE)
    assert board.has_won(CellState.BLUE)
    assert not board.has_won(CellState.RED)
    assert board.available_moves() == {}
    assert board.is_terminal()


def test_has_won_rejects_empty_color():
    with pytest.raises(ValueError):
        Board(3).has_won(CellState.EMPTY)


def test_copy_preserves_every_cell():
    board = Board(4)
    board.place(Position(0, 1), CellState.BLUE)
    board.place(Position(2, 3), CellState.RED)
    board.place(Position(3, 6), CellState.BLUE)

    clone = board.copy()

    for cell in board.cells():
        assert clone.cell_at(cell.position).state is cell.state
    assert clone == board


def test_copy_is_independent_both_ways():
    board = Board(3)
    clone = board.copy()

    clone.place(Position(1, 1), CellState.RED)
    assert board.cell_at(1, 1).state is CellState.EMPTY

    board.place(Position(2, 2), CellState.BLUE)
    assert clone.cell_at(2, 2).state is CellState.EMPTY
    assert clone != board


def test_copy_rebuilds_adjacency():
    board = Board(3)
    clone = board.copy()
    original_cell = board.cell_at(1, 2)
    cloned_cell = clone.cell_at(1, 2)

    assert cloned_cell is not original_cell
    for direction, neighbor in cloned_cell.neighbors.items():
        assert neighbor is clone.cell_at(neighbor.position)
        assert neighbor is not original_cell.neighbors[direction]


def test_clear_resets_all_cells():
    board = Board(3)
    fill(board, [Position(0, 0), Position(1, 1), Position(2, 2)], CellState.RED)
    assert board.is_terminal()

    board.clear()

    assert len(board.available_moves()) == 9
    assert board == Board(3)
    assert not board.is_terminal()


def test_cell_state_setter_writes_through_to_board():
    board = Board(2)
    board.cell_at(0, 1).state = CellState.RED
    assert board.cell_at(Position(0, 1)).state is CellState.RED
    assert not board.cell_at(0, 1).is_empty()
    assert board.to_array()[0, 1] == CellState.RED.value


def test_to_array_shape_and_contents():
    board = Board(3)
    board.place(Position(2, 4), CellState.BLUE)
    array = board.to_array()
    assert array.shape == (3, 3)
    assert array[2, 2] == CellState.BLUE.value
    assert np.count_nonzero(array) == 1


def test_boards_of_different_sizes_are_not_equal():
    assert Board(2) != Board(3)


def test_str_renders_hex_shape():
    board = Board(2)
    board.place(Position(0, 0), CellState.BLUE)
    board.place(Position(1, 2), CellState.RED)
    assert str(board) == "B .\n . R"


def test_position_value_semantics():
    assert Position(1, 2) == Position(1, 2)
    assert hash(Position(1, 2)) == hash(Position(1, 2))
    assert len({Position(1, 2), Position(1, 2), Position(2, 1)}) == 2
    assert Position(0, 0).distance(Position(2, 3)) == 5
    assert str(Position(3, 4)) == "(3, 4)"


def test_cell_state_opposite():
    assert CellState.BLUE.opposite is CellState.RED
    assert CellState.RED.opposite is CellState.BLUE
    assert CellState.EMPTY.opposite is CellState.EMPTY
