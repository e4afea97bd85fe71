"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the configuration parameters for the MCTS and RAVE
engines: the iteration budget, the exploration constant, the random seed and
the diagnostic output switch.
"""
from dataclasses import dataclass, fields
from typing import Optional

from hex_ai.core.constants import DEFAULT_MCTS_ITERATIONS, DEFAULT_EXPLORATION


@dataclass
class MCTSConfig:
    """
    Configuration parameters for Monte Carlo Tree Search.

    The search is bounded by the number of iterations only; there is no time
    limit, and the budget must be positive.
    """
    # Search parameters
    iterations: int = DEFAULT_MCTS_ITERATIONS
    """Number of MCTS iterations to perform per move decision"""

    exploration_weight: float = DEFAULT_EXPLORATION
    """UCT exploration constant (default is sqrt(2))"""

    # Reproducibility
    seed: Optional[int] = None
    """Seed for the engine's random generator (None = nondeterministic)"""

    # Diagnostics
    verbose: bool = False
    """Whether to print the candidate moves and timing after each search"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if not isinstance(self.iterations, int) or isinstance(self.iterations, bool):
            raise ValueError("iterations must be an integer")

        if self.iterations <= 0:
            raise ValueError("iterations must be positive")

        if self.exploration_weight <= 0:
            raise ValueError("exploration_weight must be positive")

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """
        Get the default configuration.

        Returns:
            Default MCTSConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for speed (fewer iterations).

        Returns:
            Fast MCTSConfig object
        """
        return cls(iterations=200)

    @classmethod
    def deep(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for deep search.

        Returns:
            Deep MCTSConfig object
        """
        return cls(iterations=10000)

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Unknown keys are ignored.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        names = {f.name for f in fields(cls)}
        valid_params = {k: v for k, v in config_dict.items() if k in names}
        return cls(**valid_params)

    def to_dict(self) -> dict:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary of configuration parameters
        """
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
        }

    def __str__(self) -> str:
        params = ", ".join(f"{name}={value}" for name, value in self.to_dict().items())
        return f"MCTSConfig({params})"
