#!/usr/bin/env python
"""
Console runner for Hex games between AI agents.

This script plays one or more games between two automated players (random,
MCTS or RAVE) and prints the final board and a summary of the results.

Example usage:
    # MCTS (blue) against a random player on a 5x5 board
    python play_game.py --size 5 --blue mcts --red random

    # Ten games of RAVE against MCTS with different budgets
    python play_game.py --blue rave --red mcts --blue-iterations 500 \
        --red-iterations 1000 --games 10 --seed 42
"""
import argparse
import sys
import time
from collections import Counter
from typing import Dict, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text
from tqdm import tqdm

from hex_ai.core.board import Board, Position
from hex_ai.core.constants import (
    CellState, CELL_STYLES, CELL_SYMBOLS, DEFAULT_BOARD_SIZE, DEFAULT_MCTS_ITERATIONS
)
from hex_ai.core.game import Game, GameResult
from hex_ai.core.player import STRATEGIES, create_player

console = Console()


def parse_args(argv=None):
    """Parse command-line arguments for game configuration."""
    parser = argparse.ArgumentParser(description="Play Hex between AI agents")

    # Players
    parser.add_argument("--blue", type=str, default="mcts", choices=STRATEGIES,
                        help="Strategy of the BLUE player")
    parser.add_argument("--red", type=str, default="random", choices=STRATEGIES,
                        help="Strategy of the RED player")
    parser.add_argument("--blue-iterations", type=int, default=DEFAULT_MCTS_ITERATIONS,
                        help="Iterations per move for a BLUE search player")
    parser.add_argument("--red-iterations", type=int, default=DEFAULT_MCTS_ITERATIONS,
                        help="Iterations per move for a RED search player")

    # Game configuration
    parser.add_argument("--size", type=int, default=DEFAULT_BOARD_SIZE,
                        help="Side length of the board")
    parser.add_argument("--first", type=str, default="blue", choices=["blue", "red"],
                        help="Color that moves first")
    parser.add_argument("--games", type=int, default=1,
                        help="Number of games to play")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducibility")
    parser.add_argument("--verbose", action="store_true",
                        help="Print the candidate moves of search players")

    return parser.parse_args(argv)


def render_board(board: Board, last_move: Optional[Position] = None) -> Text:
    """Render the board as colored, hex-shaped text."""
    text = Text()
    for x in range(board.size):
        text.append(" " * x)
        for y in range(x, board.size + x):
            position = Position(x, y)
            state = board.cell_at(position).state
            style = CELL_STYLES[state]
            if position == last_move:
                style += " underline"
            text.append(CELL_SYMBOLS[state], style=style)
            text.append(" ")
        text.append("\n")
    return text


def create_game(args) -> Game:
    """Create the game and its players from command-line arguments."""
    blue_seed = args.seed
    red_seed = args.seed + 1 if args.seed is not None else None

    blue = create_player("Blue", CellState.BLUE, args.blue,
                         iterations=args.blue_iterations, seed=blue_seed,
                         verbose=args.verbose)
    red = create_player("Red", CellState.RED, args.red,
                        iterations=args.red_iterations, seed=red_seed,
                        verbose=args.verbose)
    first = CellState.BLUE if args.first == "blue" else CellState.RED
    return Game(blue, red, size=args.size, first=first)


def play_single_game(game: Game) -> GameResult:
    """Play one game, printing every move."""
    turn = 0
    while not game.is_over:
        turn += 1
        player = game.current_player
        start_time = time.perf_counter()
        move = game.step()
        elapsed = time.perf_counter() - start_time
        console.print(f"Turn {turn}: {player.name} ({player.color}) plays {move} "
                      f"[dim]({elapsed:.2f}s)[/dim]")

    last_move = game.history[-1][1] if game.history else None
    console.print(render_board(game.board, last_move))
    winner = game.winner
    if winner is not None:
        console.print(f"[bold]Winner: {winner.name} ({winner.color})[/bold]")
    return game.result


def play_series(game: Game, num_games: int) -> Dict[str, int]:
    """Play several games with the same players and count the results."""
    results: Counter = Counter()
    lengths = []
    for _ in tqdm(range(num_games), desc="Playing"):
        game.reset()
        result = game.play()
        results[result.name] += 1
        lengths.append(len(game.history))

    table = Table(title=f"{num_games} games on a {game.board.size}x{game.board.size} board")
    table.add_column("Result")
    table.add_column("Games", justify="right")
    table.add_column("Share", justify="right")
    for result in (GameResult.BLUE_WINS, GameResult.RED_WINS):
        count = results[result.name]
        table.add_row(result.name, str(count), f"{count / num_games:.0%}")
    console.print(table)
    console.print(f"Average game length: {sum(lengths) / len(lengths):.1f} moves")
    return dict(results)


def main(argv=None):
    """Main function."""
    args = parse_args(argv)
    if args.games < 1:
        console.print("[red]--games must be at least 1[/red]")
        sys.exit(2)

    try:
        game = create_game(args)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(2)

    console.print(f"[bold yellow]Hex {args.size}x{args.size}[/bold yellow]: "
                  f"{game.players[CellState.BLUE].agent} vs {game.players[CellState.RED].agent}")

    try:
        if args.games == 1:
            play_single_game(game)
        else:
            play_series(game, args.games)
    except KeyboardInterrupt:
        console.print("\nGame interrupted by user.")
        sys.exit(0)


if __name__ == "__main__":
    main()
