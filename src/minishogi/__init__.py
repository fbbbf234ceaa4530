"""Rules engine and move search for 5x5 minishogi."""

from minishogi.core import GameState, Player, generate_legal_moves, make_move
from minishogi.engine import best_move_alpha_beta, best_move_mcts

__all__ = [
    "GameState",
    "Player",
    "best_move_alpha_beta",
    "best_move_mcts",
    "generate_legal_moves",
    "make_move",
]
