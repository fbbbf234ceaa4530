"""Core domain layer: pure minishogi logic with zero external dependencies.

Quick start::

    from minishogi.core import GameState, Player, generate_legal_moves, make_move

    state = GameState.initial()
    moves = generate_legal_moves(state, Player.SENTE)
    state = make_move(state, moves[0], Player.SENTE)
"""

from minishogi.core.board import Board
from minishogi.core.enums import GameResult, Player, PieceType
from minishogi.core.move import Drop, Move, Relocate
from minishogi.core.move_generator import MoveGenerator, promotion_row
from minishogi.core.piece import Piece
from minishogi.core.rules import (
    DEFAULT_RULES,
    Rules,
    RuleSet,
    generate_legal_moves,
    make_move,
)
from minishogi.core.state import HAND_TYPES, GameState, Hand
from minishogi.core.types import (
    Square,
    column_of,
    is_valid_square,
    make_square,
    row_of,
    square_name,
)

__all__ = [
    # Enums
    "GameResult",
    "PieceType",
    "Player",
    # Types / helpers
    "Square",
    "column_of",
    "is_valid_square",
    "make_square",
    "row_of",
    "square_name",
    # Domain objects
    "Board",
    "Drop",
    "GameState",
    "HAND_TYPES",
    "Hand",
    "Move",
    "MoveGenerator",
    "Piece",
    "Relocate",
    "promotion_row",
    # Rules
    "DEFAULT_RULES",
    "RuleSet",
    "Rules",
    "generate_legal_moves",
    "make_move",
]
