"""
Player representation for the Hex game.

This module defines the Player class, which binds a name and a color to an
agent, the baseline RandomAgent, and the create_player factory used to build
players from a strategy name.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Protocol
import random

from hex_ai.core.board import Board, Position
from hex_ai.core.constants import CellState, DEFAULT_MCTS_ITERATIONS
from hex_ai.mcts.agent import MCTSAgent
from hex_ai.mcts.config import MCTSConfig

STRATEGIES = ("random", "mcts", "rave")


class UnknownStrategyError(ValueError):
    """Raised when a player is requested with a strategy that does not exist."""


class Agent(Protocol):
    """Anything that can choose a move for a color on a board."""

    name: str

    def select_move(self, board: Board, color: CellState) -> Position:
        ...


class RandomAgent:
    """
    Agent that plays a uniformly random empty cell.

    This agent serves as a baseline for comparison with the search agents.
    """

    def __init__(self, name: str = "Random Agent", rng: Optional[random.Random] = None):
        self.name = name
        self.rng = rng if rng is not None else random.Random()

    def select_move(self, board: Board, color: CellState) -> Position:
        moves = board.available_moves()
        if not moves:
            raise ValueError(f"No available moves for {color}")
        return moves[self.rng.randrange(len(moves))]

    def __str__(self) -> str:
        return self.name


@dataclass
class Player:
    """
    A Hex player: a name, a color and the agent that chooses its moves.
    """
    name: str
    color: CellState
    agent: Agent
    last_move: Optional[Position] = None

    def __post_init__(self):
        if self.color is CellState.EMPTY:
            raise ValueError("A player must play BLUE or RED")

    def play(self, board: Board) -> Position:
        """
        Ask the agent for a move and place it on the board.

        Args:
            board: The live game board

        Returns:
            The position that was played
        """
        move = self.agent.select_move(board, self.color)
        board.place(move, self.color)
        self.last_move = move
        return move

    def __str__(self) -> str:
        return f"{self.name} [{self.color}, {self.agent}]"


def create_player(
    name: str,
    color: CellState,
    strategy: str,
    iterations: Optional[int] = None,
    seed: Optional[int] = None,
    verbose: bool = False,
) -> Player:
    """
    Create a player with the named strategy.

    Args:
        name: Player name
        color: BLUE or RED
        strategy: "random", "mcts" or "rave" (case-insensitive)
        iterations: Iteration budget for search strategies (None = default)
        seed: Seed for the agent's random generator
        verbose: Whether search agents print their candidate moves

    Returns:
        The new Player

    Raises:
        UnknownStrategyError: If the strategy name is not recognised
    """
    key = strategy.lower()
    if key == "random":
        agent: Agent = RandomAgent(name=f"Random ({name})", rng=random.Random(seed))
    elif key in ("mcts", "rave"):
        config = MCTSConfig(
            iterations=iterations if iterations is not None else DEFAULT_MCTS_ITERATIONS,
            seed=seed,
            verbose=verbose,
        )
        agent = MCTSAgent(config=config, name=f"{key.upper()} ({name})", algorithm=key)
    else:
        raise UnknownStrategyError(
            f"Unknown strategy {strategy!r}, expected one of {', '.join(STRATEGIES)}"
        )
    return Player(name=name, color=color, agent=agent)
