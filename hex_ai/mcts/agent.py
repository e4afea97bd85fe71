"""
Monte Carlo Tree Search Agent for Hex.

This module provides the MCTSAgent class, a ready-to-use AI player that
picks moves with the MCTS or RAVE engine. The agent keeps one engine for the
whole game so the search tree is reused from move to move, and it records
statistics about each search.
"""
from typing import Any, Dict, List, Optional, Tuple
import json
import random

from hex_ai.core.board import Board, Position
from hex_ai.core.constants import CellState
from hex_ai.mcts.config import MCTSConfig
from hex_ai.mcts.rave import RAVE
from hex_ai.mcts.search import MCTS, get_principal_variation

ALGORITHMS = {
    "mcts": MCTS,
    "rave": RAVE,
}


class MCTSAgent:
    """
    Tree search agent for playing Hex.

    Wraps an MCTS or RAVE engine and exposes the common agent interface
    `select_move(board, color)`.
    """

    def __init__(
        self,
        config: Optional[MCTSConfig] = None,
        name: str = "MCTS Agent",
        algorithm: str = "mcts",
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize an MCTS agent.

        Args:
            config: MCTS configuration parameters
            name: Name of the agent
            algorithm: "mcts" or "rave"
            rng: Random generator handed to the engine
        """
        algorithm = algorithm.lower()
        if algorithm not in ALGORITHMS:
            raise ValueError(f"algorithm must be one of {sorted(ALGORITHMS)}, got {algorithm!r}")

        self.config = config or MCTSConfig()
        self.name = name
        self.algorithm = algorithm
        self.engine: MCTS = ALGORITHMS[algorithm](self.config, rng=rng)

        # History of all moves and their statistics
        self.move_history: List[Tuple[Position, Dict[str, Any]]] = []

    def select_move(self, board: Board, color: CellState) -> Position:
        """
        Select a move using tree search.

        Args:
            board: Current board (left unchanged)
            color: Color to move

        Returns:
            Selected position
        """
        move = self.engine.find_best_move(board, color)
        self.move_history.append((move, self.engine.last_stats))
        return move

    @property
    def last_stats(self) -> Dict[str, Any]:
        """Statistics from the most recent search."""
        return self.engine.last_stats

    def get_principal_variation(self) -> List[Tuple[Position, float]]:
        """
        Most visited line below the current tree root.

        Returns:
            List of (move, ratio) pairs, empty before the first search
        """
        if self.engine.root is None:
            return []
        return get_principal_variation(self.engine.root)

    def reset(self) -> None:
        """Drop the search tree and the move history (e.g. between games)."""
        self.engine.reset()
        self.move_history = []

    def save_statistics(self, filename: str) -> None:
        """
        Save the per-move statistics to a JSON file.

        Args:
            filename: Name of the file to save to
        """
        history = []
        for move, stats in self.move_history:
            history.append({
                "move": [move.x, move.y],
                "stats": {k: v for k, v in stats.items() if not isinstance(v, dict)},
            })

        data = {
            "agent_name": self.name,
            "algorithm": self.algorithm,
            "config": self.config.to_dict(),
            "history": history,
            "total_moves": len(self.move_history),
        }

        with open(filename, 'w') as f:
            json.dump(data, f, indent=2)

    def __str__(self) -> str:
        return f"{self.name} ({self.algorithm.upper()}, {self.config.iterations} iterations)"


class MCTSAgentFactory:
    """
    Factory for creating MCTS agents with different configurations.
    """

    @staticmethod
    def create_fast(algorithm: str = "mcts") -> MCTSAgent:
        return MCTSAgent(config=MCTSConfig.fast(), name="Fast MCTS", algorithm=algorithm)

    @staticmethod
    def create_standard(algorithm: str = "mcts") -> MCTSAgent:
        return MCTSAgent(config=MCTSConfig.default(), name="Standard MCTS", algorithm=algorithm)

    @staticmethod
    def create_strong(algorithm: str = "mcts") -> MCTSAgent:
        return MCTSAgent(config=MCTSConfig.deep(), name="Strong MCTS", algorithm=algorithm)

    @staticmethod
    def create_custom(
        iterations: int = 1000,
        algorithm: str = "mcts",
        seed: Optional[int] = None,
        verbose: bool = False,
        name: str = "Custom MCTS",
    ) -> MCTSAgent:
        """
        Create a custom MCTS agent.

        Args:
            iterations: Number of iterations per move
            algorithm: "mcts" or "rave"
            seed: Seed for the engine's random generator
            verbose: Whether to print the candidate moves after each search
            name: Name of the agent

        Returns:
            MCTSAgent
        """
        config = MCTSConfig(iterations=iterations, seed=seed, verbose=verbose)
        return MCTSAgent(config=config, name=name, algorithm=algorithm)
