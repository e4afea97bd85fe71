"""
Monte Carlo Tree Search (MCTS) implementation for Hex.

This package provides MCTS and RAVE engines that play Hex without any
training. Each iteration of the search:

1. Selection: Starting from the root, descend through fully expanded nodes
   by UCT (RAVE: by combined value plus an exploration bonus).
2. Expansion: Create one child for a random untried move.
3. Simulation: Play random moves until one side connects its borders.
4. Backpropagation: Add the result to the wins or losses of every node on
   the path. RAVE also credits every node of the tree whose move the
   searching player made during the rollout.

The tree is kept between moves and re-rooted on the chosen child.
"""

from hex_ai.mcts.node import SearchNode
from hex_ai.mcts.config import MCTSConfig
from hex_ai.mcts.search import (
    MCTS,
    EmptyChildSetError,
    find_node,
    count_nodes,
    get_principal_variation,
    get_move_statistics,
)
from hex_ai.mcts.rave import RAVE
from hex_ai.mcts.agent import MCTSAgent, MCTSAgentFactory

# Default configuration
DEFAULT_CONFIG = MCTSConfig()

__all__ = [
    'SearchNode',
    'MCTSConfig',
    'MCTS',
    'RAVE',
    'EmptyChildSetError',
    'MCTSAgent',
    'MCTSAgentFactory',
    'find_node',
    'count_nodes',
    'get_principal_variation',
    'get_move_statistics',
    'DEFAULT_CONFIG',
]
