"""
Monte Carlo Tree Search (MCTS) algorithm for Hex.

This module implements the MCTS engine with the four standard phases:
1. Selection: Descend through fully expanded nodes by UCT
2. Expansion: Add one child for a random untried move
3. Simulation: Play random moves until the game is over
4. Backpropagation: Update win/loss statistics up to the root

The engine keeps its tree between calls. After choosing a move it re-roots
the tree on the chosen child, and the next call looks for the incoming board
below that root so that statistics gathered earlier are reused.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Set, Tuple
import math
import random
import time

from rich.console import Console
from rich.table import Table

from hex_ai.core.board import Board, Position
from hex_ai.core.constants import CellState
from hex_ai.mcts.config import MCTSConfig
from hex_ai.mcts.node import SearchNode


class EmptyChildSetError(RuntimeError):
    """Raised when a move must be chosen from a node that has no children."""


class MCTS:
    """
    Monte Carlo Tree Search engine.

    All randomness is drawn from a single generator, either injected by the
    caller or seeded from the configuration, so a search is reproducible
    given the same board, color, budget and seed.
    """

    def __init__(
        self,
        config: Optional[MCTSConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: MCTS configuration parameters
            rng: Random generator to use (defaults to one seeded from config.seed)
        """
        self.config = config or MCTSConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)

        # Tree persisted between calls (root = position after our last move)
        self.root: Optional[SearchNode] = None

        # Statistics from the most recent search
        self.last_stats: Dict[str, Any] = {}

    @property
    def iterations(self) -> int:
        return self.config.iterations

    def reset(self) -> None:
        """Forget the persisted tree."""
        self.root = None
        self.last_stats = {}

    def find_best_move(self, board: Board, color: CellState) -> Position:
        """
        Search for the best move for `color` on `board`.

        The board is not modified; the caller applies the returned move.

        Args:
            board: Current board
            color: Color to move

        Returns:
            Position of the chosen move
        """
        if color is CellState.EMPTY:
            raise ValueError("The color to move must be BLUE or RED")
        if board.is_terminal():
            raise ValueError("Cannot search a finished game")

        start_time = time.perf_counter()

        root, reused = self._resolve_root(board, color)

        for _ in range(self.config.iterations):
            # 1. Selection
            node = self.select(root)

            # 2. Expansion
            if node.visits > 0 or node is root:
                child = self.expand(node)
                if child is not None:
                    node = child

            # 3. Simulation
            result = self.simulate(node, color)

            # 4. Backpropagation
            self.backpropagate(node, result)

        best = self.choose_child(root)
        self.update_root(root, best.move)

        elapsed = time.perf_counter() - start_time
        self.last_stats = {
            "iterations": self.config.iterations,
            "time_elapsed": elapsed,
            "iterations_per_second": self.config.iterations / max(0.001, elapsed),
            "node_count": count_nodes(root),
            "root_visits": root.visits,
            "tree_reused": reused,
            "move_statistics": get_move_statistics(root),
        }

        if self.config.verbose:
            self._print_candidates(root, best, elapsed)

        return best.move

    def _resolve_root(self, board: Board, color: CellState) -> Tuple[SearchNode, bool]:
        """
        Find the search root for `board`.

        Returns:
            Tuple of (root node, whether it was reused from the persisted tree)
        """
        found = find_node(self.root, board, color) if self.root is not None else None
        if found is not None:
            found.detach()
            self.root = found
            return found, True

        root = SearchNode(
            board.copy(),
            color,
            exploration_weight=self.config.exploration_weight,
        )
        return root, False

    def select(self, node: SearchNode) -> SearchNode:
        """
        Descend the tree until reaching a terminal or not fully expanded node.

        Args:
            node: Node to start from

        Returns:
            Selected node
        """
        while not node.is_terminal() and node.is_fully_expanded():
            node = self.best_child(node)
        return node

    def best_child(self, node: SearchNode) -> SearchNode:
        """
        Child with the highest UCT value (the first one wins ties).
        """
        if not node.children:
            raise EmptyChildSetError(f"Cannot select a child of {node}")
        return max(node.children, key=lambda child: child.uct())

    def expand(self, node: SearchNode) -> Optional[SearchNode]:
        """
        Add one child for a random untried move.

        Args:
            node: Node to expand

        Returns:
            The new child, or None if the node is terminal or fully expanded
        """
        if node.is_terminal() or node.is_fully_expanded():
            return None

        untried = node.untried_moves()
        if not untried:
            return None

        move = untried[self.rng.randrange(len(untried))]

        board = node.board.copy()
        board.cell_at(move).state = node.color

        child = SearchNode(
            board,
            node.color.opposite,
            move=move,
            parent=node,
            exploration_weight=self.config.exploration_weight,
        )
        node.add_child(child)
        return child

    def simulate(self, node: SearchNode, original_color: CellState) -> float:
        """
        Play a random game from `node` and score it for `original_color`.

        Returns:
            1.0 if `original_color` wins, -1.0 otherwise
        """
        if node.is_terminal():
            return 1.0 if node.board.has_won(original_color) else -1.0

        result, _ = self._rollout(node, original_color)
        return result

    def _rollout(
        self,
        node: SearchNode,
        original_color: CellState,
    ) -> Tuple[float, Set[Position]]:
        """
        Random playout on a copy of the node's board.

        Returns:
            Tuple of (result for `original_color`, moves played by `original_color`)
        """
        board = node.board.copy()
        color = node.color
        played: Set[Position] = set()

        while not board.is_terminal():
            moves = board.available_moves()
            move = moves[self.rng.randrange(len(moves))]
            board.cell_at(move).state = color

            if color is original_color:
                played.add(move)

            color = color.opposite

        result = 1.0 if board.has_won(original_color) else -1.0
        return result, played

    def backpropagate(self, node: Optional[SearchNode], result: float) -> None:
        """
        Update statistics from `node` up to the root.

        A positive result is added to the wins, otherwise its negation is
        added to the losses. Every node on the path gains one visit.
        """
        while node is not None:
            if result > 0:
                node.add_wins(result)
            else:
                node.add_losses(-result)
            node.increment_visits()
            node = node.parent

    def move_value(self, child: SearchNode) -> float:
        """Value used to rank the root's children when choosing the move."""
        return child.ratio()

    def choose_child(self, root: SearchNode) -> SearchNode:
        """
        Root child with the highest move value (the first one wins ties).

        Raises:
            EmptyChildSetError: If the root has not been expanded
        """
        if not root.children:
            raise EmptyChildSetError("The search root has no children to choose from")
        return max(root.children, key=self.move_value)

    def update_root(self, current_root: SearchNode, move: Position) -> None:
        """Re-root the persisted tree on the child reached by `move`."""
        child = current_root.get_child(move)
        if child is not None:
            child.detach()
            self.root = child

    # Diagnostics

    def _candidate_columns(self) -> List[str]:
        return ["Move", "Visits", "Wins", "Losses", "Ratio"]

    def _candidate_row(self, child: SearchNode) -> List[str]:
        return [
            str(child.move),
            str(child.visits),
            f"{child.wins:.0f}",
            f"{child.losses:.0f}",
            f"{child.ratio():.3f}",
        ]

    def _print_candidates(self, root: SearchNode, best: SearchNode, elapsed: float) -> None:
        """Print every candidate move of the root and the chosen one."""
        table = Table(title=f"{type(self).__name__} candidates ({self.config.iterations} iterations)")
        for column in self._candidate_columns():
            table.add_column(column, justify="right")
        for child in root.children:
            style = "bold green" if child is best else None
            table.add_row(*self._candidate_row(child), style=style)

        console = Console()
        console.print(table)
        console.print(f"Best move {best.move} found after {elapsed * 1000:.0f} ms")


def find_node(
    root: SearchNode,
    board: Board,
    color: Optional[CellState] = None,
) -> Optional[SearchNode]:
    """
    Find a descendant of `root` whose board equals `board`.

    The tree is walked depth-first in preorder (a child, then its subtree,
    then the next sibling) with an explicit stack.

    Args:
        root: Node whose descendants are searched (the root itself is not)
        board: Board to look for
        color: If given, the matching node must also have this color to move

    Returns:
        The first matching node, or None
    """
    stack = list(reversed(root.children))
    while stack:
        node = stack.pop()
        if node.board == board and (color is None or node.color is color):
            return node
        stack.extend(reversed(node.children))
    return None


def tree_root(node: SearchNode) -> SearchNode:
    """Follow parent links up to the top of the tree."""
    while node.parent is not None:
        node = node.parent
    return node


def count_nodes(node: SearchNode) -> int:
    """
    Count the nodes of the tree below (and including) `node`.

    Args:
        node: Root node of the tree

    Returns:
        Total number of nodes
    """
    count = 0
    stack = [node]
    while stack:
        current = stack.pop()
        count += 1
        stack.extend(current.children)
    return count


def get_principal_variation(root: SearchNode, max_depth: int = 10) -> List[Tuple[Position, float]]:
    """
    Get the principal variation (most visited path) from the root.

    Args:
        root: Root node of the tree
        max_depth: Maximum depth to explore

    Returns:
        List of (move, ratio) pairs along the most visited path
    """
    result = []
    current = root
    depth = 0

    while current.children and depth < max_depth:
        best_child = max(current.children, key=lambda c: c.visits)
        result.append((best_child.move, best_child.ratio()))
        current = best_child
        depth += 1

    return result


def get_move_statistics(root: SearchNode) -> Dict[str, Dict[str, float]]:
    """
    Get statistics for every child of the root.

    Args:
        root: Root node of the tree

    Returns:
        Dictionary mapping move strings to node statistics
    """
    return {str(child.move): child.statistics() for child in root.children}
