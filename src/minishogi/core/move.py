"""Move value objects: board relocation or drop from hand."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from minishogi.core.enums import PieceType
from minishogi.core.types import Square, square_name

_DROP_LETTERS: dict[PieceType, str] = {
    PieceType.GOLD: "G",
    PieceType.SILVER: "S",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.PAWN: "P",
}


@dataclass(frozen=True, slots=True)
class Relocate:
    """Move a piece already on the board, optionally promoting it."""

    from_sq: Square
    to_sq: Square
    promote: bool = False

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        return f"{base}+" if self.promote else base


@dataclass(frozen=True, slots=True)
class Drop:
    """Place a piece held in hand onto an empty square."""

    to_sq: Square
    piece_type: PieceType

    def __str__(self) -> str:
        return f"{_DROP_LETTERS[self.piece_type]}*{square_name(self.to_sq)}"


Move: TypeAlias = Relocate | Drop
