"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from minishogi.core.enums import Player, PieceType

_LETTERS: dict[PieceType, str] = {
    PieceType.KING: "K",
    PieceType.GOLD: "G",
    PieceType.SILVER: "S",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.PAWN: "P",
}

PROMOTABLE_TYPES: frozenset[PieceType] = frozenset(
    {PieceType.PAWN, PieceType.SILVER, PieceType.BISHOP, PieceType.ROOK}
)


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a minishogi piece."""

    piece_type: PieceType
    owner: Player
    promoted: bool = False

    def __post_init__(self) -> None:
        if self.promoted and self.piece_type not in PROMOTABLE_TYPES:
            raise ValueError(f"{self.piece_type.name} cannot be promoted")

    # ── Promotion ────────────────────────────────────────────────────────

    @property
    def can_promote(self) -> bool:
        return not self.promoted and self.piece_type in PROMOTABLE_TYPES

    def promote(self) -> Piece:
        return Piece(self.piece_type, self.owner, promoted=True)

    @property
    def base(self) -> Piece:
        """Same piece with the promotion removed."""
        if not self.promoted:
            return self
        return Piece(self.piece_type, self.owner)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Letter form: uppercase = sente, lowercase = gote, '+' = promoted."""
        return self.symbol

    @property
    def symbol(self) -> str:
        letter = _LETTERS[self.piece_type]
        if self.owner == Player.GOTE:
            letter = letter.lower()
        return f"+{letter}" if self.promoted else letter
