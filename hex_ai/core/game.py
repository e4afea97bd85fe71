"""
Game flow management for Hex.

This module defines the Game class, which owns the live board, alternates
turns between a BLUE and a RED player and reports the result. Hex cannot end
in a draw on a full board, but DRAW is kept for games stopped by a turn limit.
"""
from __future__ import annotations
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple, Any

from hex_ai.core.board import Board, Position
from hex_ai.core.constants import CellState, DEFAULT_BOARD_SIZE
from hex_ai.core.player import Player


class GameResult(Enum):
    """Enum representing possible game results."""
    IN_PROGRESS = auto()
    BLUE_WINS = auto()
    RED_WINS = auto()
    DRAW = auto()  # Only reachable when a turn limit stops the game


class Game:
    """
    Manager for Hex game flow.

    The game holds the live board; players receive it on their turn and place
    exactly one stone.
    """

    def __init__(
        self,
        blue: Player,
        red: Player,
        size: int = DEFAULT_BOARD_SIZE,
        first: CellState = CellState.BLUE,
    ):
        """
        Initialize a new Hex game.

        Args:
            blue: Player with the BLUE color
            red: Player with the RED color
            size: Side length of the board
            first: Color that moves first
        """
        if blue.color is not CellState.BLUE:
            raise ValueError(f"{blue.name} must play BLUE, not {blue.color}")
        if red.color is not CellState.RED:
            raise ValueError(f"{red.name} must play RED, not {red.color}")
        if first is CellState.EMPTY:
            raise ValueError("first must be BLUE or RED")

        self.board = Board(size)
        self.players: Dict[CellState, Player] = {CellState.BLUE: blue, CellState.RED: red}
        self.first = first
        self.current_color = first
        self.history: List[Tuple[CellState, Position]] = []

    @property
    def current_player(self) -> Player:
        return self.players[self.current_color]

    @property
    def is_over(self) -> bool:
        return self.board.is_terminal()

    @property
    def winner(self) -> Optional[Player]:
        """The winning player, or None while nobody has connected."""
        color = self.board.winner()
        return self.players[color] if color is not None else None

    @property
    def result(self) -> GameResult:
        color = self.board.winner()
        if color is CellState.BLUE:
            return GameResult.BLUE_WINS
        if color is CellState.RED:
            return GameResult.RED_WINS
        if not self.board.available_moves():
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    def step(self) -> Position:
        """
        Let the current player move and pass the turn.

        Returns:
            The position played
        """
        if self.is_over:
            raise ValueError("The game is already over")

        player = self.current_player
        move = player.play(self.board)
        self.history.append((player.color, move))
        self.current_color = self.current_color.opposite
        return move

    def play(self, max_turns: Optional[int] = None) -> GameResult:
        """
        Run the game until it is over or `max_turns` moves have been played.

        Returns:
            Final result (DRAW if the turn limit stopped an unfinished game)
        """
        turns = 0
        while not self.is_over:
            if max_turns is not None and turns >= max_turns:
                return GameResult.DRAW
            self.step()
            turns += 1
        return self.result

    def reset(self) -> None:
        """Clear the board and the history for a new game with the same players."""
        self.board.clear()
        self.current_color = self.first
        self.history = []
        for player in self.players.values():
            player.last_move = None
            reset = getattr(player.agent, "reset", None)
            if reset is not None:
                reset()

    def get_game_statistics(self) -> Dict[str, Any]:
        """Summary of the game so far."""
        winner = self.winner
        return {
            "size": self.board.size,
            "moves": len(self.history),
            "result": self.result.name,
            "winner": winner.name if winner is not None else None,
            "first": self.first.name,
        }

    def __str__(self) -> str:
        return (f"Hex {self.board.size}x{self.board.size}: "
                f"{self.players[CellState.BLUE].name} (BLUE) vs "
                f"{self.players[CellState.RED].name} (RED), {self.result.name}\n{self.board}")
