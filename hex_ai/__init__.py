"""
Hex AI - Monte Carlo Tree Search and RAVE players for the game of Hex.

This package provides a Hex board with breadth-first win detection, search
engines based on MCTS and RAVE, and the players and game loop that tie them
together.
"""

__version__ = "0.1.0"
__author__ = "Hex AI Team"

# Make key components available at package level
from hex_ai.core.board import Board, Position
from hex_ai.core.constants import CellState
from hex_ai.core.game import Game, GameResult
from hex_ai.core.player import Player, create_player
from hex_ai.mcts.search import MCTS
from hex_ai.mcts.rave import RAVE

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))
