"""Static material evaluation and score/probability conversion."""

from __future__ import annotations

import math

from minishogi.core.enums import Player, PieceType
from minishogi.core.state import HAND_TYPES, GameState

SCORE_MIN = -100_000
SCORE_MAX = 100_000
LOGISTIC_SCALE = 400.0

# (unpromoted, promoted)
_PIECE_VALUES: dict[PieceType, tuple[int, int]] = {
    PieceType.PAWN: (100, 500),
    PieceType.SILVER: (400, 500),
    PieceType.GOLD: (500, 500),
    PieceType.BISHOP: (600, 800),
    PieceType.ROOK: (700, 900),
    PieceType.KING: (0, 0),
}


def piece_value(piece_type: PieceType, promoted: bool = False) -> int:
    return _PIECE_VALUES[piece_type][1 if promoted else 0]


def terminal_score(state: GameState) -> int | None:
    """Extreme score when a king is gone, otherwise ``None``."""
    board = state.board
    if not board.has_king(Player.SENTE):
        return SCORE_MIN
    if not board.has_king(Player.GOTE):
        return SCORE_MAX
    return None


def evaluate(state: GameState) -> int:
    """Material balance; positive favours SENTE."""
    terminal = terminal_score(state)
    if terminal is not None:
        return terminal

    score = 0
    for piece in state.board:
        if piece is None:
            continue
        value = piece_value(piece.piece_type, piece.promoted)
        score += value if piece.owner == Player.SENTE else -value

    # Held pieces count at their unpromoted value.
    for pt in HAND_TYPES:
        value = piece_value(pt)
        score += value * (state.sente_hand.get(pt) - state.gote_hand.get(pt))
    return score


def win_probability(score: float) -> float:
    """Logistic squash of a SENTE-positive score into [0, 1]."""
    exponent = -score / LOGISTIC_SCALE
    if exponent > 700.0:
        return 0.0
    return 1.0 / (1.0 + math.exp(exponent))


def score_from_probability(probability: float) -> int:
    """Inverse of :func:`win_probability`, clamped to the score range."""
    if probability <= 0.0:
        return SCORE_MIN
    if probability >= 1.0:
        return SCORE_MAX
    score = -LOGISTIC_SCALE * math.log(1.0 / probability - 1.0)
    return max(SCORE_MIN, min(SCORE_MAX, round(score)))
