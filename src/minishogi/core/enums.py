"""Core enumerations for the 5x5 shogi domain."""

from __future__ import annotations

from enum import IntEnum


class Player(IntEnum):
    """Side to move. SENTE moves first."""

    SENTE = 0
    GOTE = 1

    @property
    def opposite(self) -> Player:
        return Player(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Minishogi piece types."""

    KING = 1
    GOLD = 2
    SILVER = 3
    BISHOP = 4
    ROOK = 5
    PAWN = 6


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    SENTE_WINS = 1
    GOTE_WINS = 2
