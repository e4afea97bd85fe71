"""
Rapid Action Value Estimation (RAVE) for Hex.

RAVE extends MCTS with All-Moves-As-First statistics: every move the
searching player makes during a rollout is credited to every node of the
tree reached by that same move, wherever it sits in the tree. Selection and
the final choice then rank children by a blend of the AMAF value and the
plain win/loss ratio.
"""
from __future__ import annotations
from typing import List, Set
import math

from hex_ai.core.board import Position
from hex_ai.core.constants import CellState
from hex_ai.mcts.node import SearchNode
from hex_ai.mcts.search import MCTS, EmptyChildSetError, tree_root


class RAVE(MCTS):
    """
    MCTS engine with RAVE statistics.

    The RAVE update visits the whole tree after every rollout, so each
    iteration costs time proportional to the tree size.
    """

    def simulate(self, node: SearchNode, original_color: CellState) -> float:
        """
        Play a random game from `node` and update the RAVE statistics.

        Returns:
            1.0 if `original_color` wins, -1.0 otherwise
        """
        if node.is_terminal():
            return 1.0 if node.board.has_won(original_color) else -1.0

        result, played = self._rollout(node, original_color)
        self.update_rave_values(tree_root(node), played, result)
        return result

    def update_rave_values(
        self,
        start: SearchNode,
        played: Set[Position],
        result: float,
    ) -> None:
        """
        Credit a rollout to every node under `start` whose move was played.

        Args:
            start: Node where the traversal begins (usually the tree root)
            played: Moves placed by the searching player during the rollout
            result: Rollout result (1.0 win, -1.0 loss)
        """
        stack = [start]
        while stack:
            node = stack.pop()
            if node.move in played:
                if result > 0:
                    node.set_rave_wins(node.rave_wins + result)
                node.add_rave_visit()
            stack.extend(node.children)

    def best_child(self, node: SearchNode) -> SearchNode:
        """
        Child maximizing combined value plus an exploration bonus.

        score = combined_value + C * sqrt(ln(parent_visits) / (child_visits + 1))
        """
        if not node.children:
            raise EmptyChildSetError(f"Cannot select a child of {node}")

        log_visits = math.log(node.visits)

        def score(child: SearchNode) -> float:
            exploration = math.sqrt(log_visits / (child.visits + 1))
            return child.combined_value() + self.config.exploration_weight * exploration

        return max(node.children, key=score)

    def move_value(self, child: SearchNode) -> float:
        return child.combined_value()

    def _candidate_columns(self) -> List[str]:
        return ["Move", "Combined", "RAVE visits", "RAVE wins", "MCTS value", "Visits"]

    def _candidate_row(self, child: SearchNode) -> List[str]:
        return [
            str(child.move),
            f"{child.combined_value():.3f}",
            str(child.rave_visits),
            f"{child.rave_wins:.0f}",
            f"{child.mcts_value():.3f}",
            str(child.visits),
        ]
