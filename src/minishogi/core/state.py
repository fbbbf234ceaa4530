"""GameState - board plus both hands, with pure move application."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from typing import assert_never

from minishogi.core.board import Board
from minishogi.core.enums import Player, PieceType
from minishogi.core.move import Drop, Move, Relocate
from minishogi.core.piece import Piece
from minishogi.core.types import square_name

# Order in which held pieces are listed and offered as drops.
HAND_TYPES: tuple[PieceType, ...] = (
    PieceType.PAWN,
    PieceType.SILVER,
    PieceType.GOLD,
    PieceType.BISHOP,
    PieceType.ROOK,
)

_HAND_FIELDS: dict[PieceType, str] = {
    PieceType.PAWN: "pawn",
    PieceType.SILVER: "silver",
    PieceType.GOLD: "gold",
    PieceType.BISHOP: "bishop",
    PieceType.ROOK: "rook",
}


@dataclass(frozen=True, slots=True)
class Hand:
    """Captured pieces held off-board. Kings are never held."""

    pawn: int = 0
    silver: int = 0
    gold: int = 0
    bishop: int = 0
    rook: int = 0

    def __post_init__(self) -> None:
        for pt, name in _HAND_FIELDS.items():
            if getattr(self, name) < 0:
                raise ValueError(f"Negative hand count for {pt.name}")

    def get(self, piece_type: PieceType) -> int:
        name = _HAND_FIELDS.get(piece_type)
        return 0 if name is None else getattr(self, name)

    def add(self, piece_type: PieceType) -> Hand:
        """Hand with one more *piece_type*; adding a king is a no-op."""
        name = _HAND_FIELDS.get(piece_type)
        if name is None:
            return self
        return replace(self, **{name: getattr(self, name) + 1})

    def remove(self, piece_type: PieceType) -> Hand | None:
        """Hand with one fewer *piece_type*, or ``None`` if none is held."""
        name = _HAND_FIELDS.get(piece_type)
        if name is None or getattr(self, name) == 0:
            return None
        return replace(self, **{name: getattr(self, name) - 1})

    def items(self) -> Iterator[tuple[PieceType, int]]:
        """``(piece_type, count)`` pairs for held types, in drop order."""
        for pt in HAND_TYPES:
            count = self.get(pt)
            if count:
                yield pt, count

    @property
    def total(self) -> int:
        return sum(self.get(pt) for pt in HAND_TYPES)


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete position: board plus each player's hand.

    States are values: :meth:`apply_move` always returns a new instance.
    """

    board: Board = field(default_factory=Board.initial)
    sente_hand: Hand = field(default_factory=Hand)
    gote_hand: Hand = field(default_factory=Hand)

    @classmethod
    def initial(cls) -> GameState:
        return cls()

    def hand(self, player: Player) -> Hand:
        return self.sente_hand if player == Player.SENTE else self.gote_hand

    def _with_hand(self, player: Player, hand: Hand) -> GameState:
        if player == Player.SENTE:
            return replace(self, sente_hand=hand)
        return replace(self, gote_hand=hand)

    def apply_move(self, move: Move, player: Player) -> GameState:
        """Return the state reached after *player* plays *move*.

        Raises:
            ValueError: a relocation starts from an empty square.
        """
        if isinstance(move, Relocate):
            return self._apply_relocate(move, player)
        if isinstance(move, Drop):
            return self._apply_drop(move, player)
        assert_never(move)

    def _apply_relocate(self, move: Relocate, player: Player) -> GameState:
        piece = self.board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {square_name(move.from_sq)}")

        state = self
        captured = self.board[move.to_sq]
        if captured is not None and captured.owner != player:
            hand = state.hand(player).add(captured.piece_type)
            state = state._with_hand(player, hand)

        placed = piece.promote() if move.promote and piece.can_promote else piece
        board = self.board.replace({move.from_sq: None, move.to_sq: placed})
        return replace(state, board=board)

    def _apply_drop(self, move: Drop, player: Player) -> GameState:
        hand = self.hand(player).remove(move.piece_type)
        if hand is None:
            return self
        board = self.board.replace({move.to_sq: Piece(move.piece_type, player)})
        return replace(self._with_hand(player, hand), board=board)
