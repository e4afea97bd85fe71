"""
Monte Carlo Tree Search Node for Hex.

This module defines the SearchNode class which represents a node in the
MCTS/RAVE tree. Each node owns a snapshot of the board reached by one move,
the statistics gathered by the simulations that passed through it, and the
value formulas used to rank it against its siblings.

A node owns its children. The link back to the parent is a weak reference:
it is used for backpropagation and UCT only, and re-rooting the tree on a
child simply drops the rest of the old tree.
"""
from __future__ import annotations
from typing import Dict, List, Optional
import math
import weakref

from hex_ai.core.board import Board, Position
from hex_ai.core.constants import CellState, DEFAULT_EXPLORATION

INF = float('inf')


class SearchNode:
    """
    A node in the Monte Carlo Tree Search.

    Statistics are kept separately for wins and losses (the final move is
    ranked by their ratio, not by win rate) and for the RAVE counters used
    by the AMAF heuristic.
    """

    def __init__(
        self,
        board: Board,
        color: CellState,
        move: Optional[Position] = None,
        parent: Optional[SearchNode] = None,
        exploration_weight: float = DEFAULT_EXPLORATION,
    ):
        """
        Initialize a search node.

        Args:
            board: The board snapshot this node represents (owned by the node)
            color: The color to move after this node's move
            move: The position played to reach this node (None for the root)
            parent: The parent node (None for the root)
            exploration_weight: UCT exploration constant
        """
        self.board = board
        self.color = color
        self.move = move
        self.exploration_weight = exploration_weight
        self._parent_ref: Optional[weakref.ReferenceType] = None
        self.parent = parent

        self.children: List[SearchNode] = []

        # MCTS statistics
        self.visits = 0
        self.wins = 0.0
        self.losses = 0.0

        # RAVE statistics
        self.rave_visits = 0
        self.rave_wins = 0.0

    @property
    def parent(self) -> Optional[SearchNode]:
        """The parent node, or None for the root."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, node: Optional[SearchNode]) -> None:
        self._parent_ref = None if node is None else weakref.ref(node)

    def detach(self) -> None:
        """Make this node a root by dropping the link to its parent."""
        self.parent = None

    # Tree structure

    def add_child(self, child: SearchNode) -> bool:
        """
        Add a child unless one with the same move already exists.

        Returns:
            True if the child was added
        """
        if any(existing.move == child.move for existing in self.children):
            return False
        child.parent = self
        self.children.append(child)
        return True

    def get_child(self, move: Position) -> Optional[SearchNode]:
        """Return the child reached by `move`, if it has been expanded."""
        for child in self.children:
            if child.move == move:
                return child
        return None

    def untried_moves(self) -> List[Position]:
        """Available moves that have no child yet, in row-major order."""
        tried = {child.move for child in self.children}
        return [
            position for position in self.board.available_moves().values()
            if position not in tried
        ]

    def is_fully_expanded(self) -> bool:
        """True when there is one child per available move."""
        return len(self.children) == len(self.board.available_moves())

    def is_leaf(self) -> bool:
        """True if the node has no children, no moves left, or a winner."""
        return (
            not self.children
            or not self.board.available_moves()
            or self.board.has_won(self.color)
            or self.board.has_won(self.color.opposite)
        )

    def is_terminal(self) -> bool:
        """True if the game is over on this node's board."""
        return (
            self.board.is_terminal()
            or self.board.has_won(self.color)
            or self.board.has_won(self.color.opposite)
        )

    # Backpropagation mutators

    def add_wins(self, value: float) -> None:
        self.wins += value

    def add_losses(self, value: float) -> None:
        self.losses += value

    def increment_visits(self) -> None:
        self.visits += 1

    def add_rave_visit(self) -> None:
        self.rave_visits += 1

    def set_rave_wins(self, value: float) -> None:
        self.rave_wins = value

    # Value formulas

    def uct(self) -> float:
        """
        Upper Confidence bound applied to Trees.

        UCT = wins / visits + C * sqrt(ln(parent_visits) / visits)

        Returns:
            The UCT value, or infinity if the node has never been visited
        """
        if self.visits == 0:
            return INF

        parent = self.parent
        if parent is None:
            raise ValueError("UCT is undefined for a node without a parent")

        exploitation = self.wins / self.visits
        exploration = math.sqrt(math.log(parent.visits) / self.visits)
        return exploitation + self.exploration_weight * exploration

    def ratio(self) -> float:
        """
        Wins divided by losses.

        A node without losses scores 0 if it has no wins either, and
        infinity otherwise.
        """
        if self.losses == 0:
            return 0.0 if self.wins == 0 else INF
        return self.wins / self.losses

    def mcts_value(self) -> float:
        """The plain MCTS value of the node (its win/loss ratio)."""
        return self.ratio()

    def amaf(self) -> float:
        """All-Moves-As-First value: RAVE wins per RAVE visit."""
        if self.rave_visits == 0:
            return 0.0 if self.rave_wins == 0 else INF
        return self.rave_wins / self.rave_visits

    def combined_value(self) -> float:
        """
        Blend of the AMAF and MCTS values.

        With k = 3 * rave_visits the weight beta = k / (rave_visits + k)
        is 0.75 whenever the node has RAVE visits.
        """
        amaf = self.amaf()
        mcts_value = self.mcts_value()
        if amaf == INF or mcts_value == INF:
            return INF
        if self.rave_visits == 0:
            return mcts_value

        k = 3 * self.rave_visits
        beta = k / (self.rave_visits + k)
        return beta * amaf + (1 - beta) * mcts_value

    # Diagnostics

    def statistics(self) -> Dict[str, float]:
        """Raw statistics of the node as a dictionary."""
        return {
            "visits": self.visits,
            "wins": self.wins,
            "losses": self.losses,
            "ratio": self.ratio(),
            "rave_visits": self.rave_visits,
            "rave_wins": self.rave_wins,
            "combined_value": self.combined_value(),
        }

    def describe(self) -> str:
        return (f"Move {self.move} | Score = {self.ratio()} | Visits = {self.visits}"
                f" | Wins = {self.wins} | Losses = {self.losses}")

    def describe_rave(self) -> str:
        return (f"Move {self.move} | combinedValue = {self.combined_value()}"
                f" | RAVE_Visits = {self.rave_visits} | RAVE_Wins = {self.rave_wins}"
                f" | MCTS_value = {self.mcts_value()} | Visits = {self.visits}")

    def __str__(self) -> str:
        return (f"SearchNode(move={self.move}, color={self.color}, "
                f"visits={self.visits}, wins={self.wins:.1f}, "
                f"losses={self.losses:.1f}, children={len(self.children)})")
