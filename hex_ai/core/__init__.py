"""
Hex AI Core Package

This package contains the game logic for Hex, including:
- Board representation, adjacency and win detection
- Players and the random baseline agent
- Game flow management
- Constants and enums

All core components can be imported directly from this package.
"""

# Constants
from hex_ai.core.constants import (
    CellState, Direction,
    DEFAULT_BOARD_SIZE, DEFAULT_MCTS_ITERATIONS, DEFAULT_EXPLORATION
)

# Board
from hex_ai.core.board import Board, Cell, Position, InvalidPositionError

# Players
from hex_ai.core.player import (
    Player, RandomAgent, create_player, UnknownStrategyError
)

# Game
from hex_ai.core.game import Game, GameResult

__all__ = [
    # Constants
    'CellState', 'Direction',
    'DEFAULT_BOARD_SIZE', 'DEFAULT_MCTS_ITERATIONS', 'DEFAULT_EXPLORATION',

    # Board
    'Board', 'Cell', 'Position', 'InvalidPositionError',

    # Players
    'Player', 'RandomAgent', 'create_player', 'UnknownStrategyError',

    # Game
    'Game', 'GameResult',
]
