"""Move generation, drop restrictions and attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from minishogi.core.enums import Player, PieceType
from minishogi.core.move import Drop, Move, Relocate
from minishogi.core.piece import Piece
from minishogi.core.state import HAND_TYPES
from minishogi.core.types import (
    BOARD_SIZE,
    SQUARE_COUNT,
    Square,
    column_of,
    is_on_board,
    make_square,
    row_of,
)

if TYPE_CHECKING:
    from minishogi.core.rules import RuleSet
    from minishogi.core.state import GameState


# Offsets are (dx, dy) from SENTE's point of view; SENTE moves toward y=0.
_FORWARD = (0, -1)
_BACK = (0, 1)
_LEFT = (-1, 0)
_RIGHT = (1, 0)
_FORWARD_LEFT = (-1, -1)
_FORWARD_RIGHT = (1, -1)
_BACK_LEFT = (-1, 1)
_BACK_RIGHT = (1, 1)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    _FORWARD,
    _BACK,
    _LEFT,
    _RIGHT,
    _FORWARD_LEFT,
    _FORWARD_RIGHT,
    _BACK_LEFT,
    _BACK_RIGHT,
)
GOLD_OFFSETS: tuple[tuple[int, int], ...] = (
    _FORWARD,
    _BACK,
    _LEFT,
    _RIGHT,
    _FORWARD_LEFT,
    _FORWARD_RIGHT,
)
SILVER_OFFSETS: tuple[tuple[int, int], ...] = (
    _FORWARD,
    _FORWARD_LEFT,
    _FORWARD_RIGHT,
    _BACK_LEFT,
    _BACK_RIGHT,
)
PAWN_OFFSETS: tuple[tuple[int, int], ...] = (_FORWARD,)
DIAGONAL_STEPS: tuple[tuple[int, int], ...] = (
    _FORWARD_LEFT,
    _FORWARD_RIGHT,
    _BACK_LEFT,
    _BACK_RIGHT,
)
ORTHOGONAL_STEPS: tuple[tuple[int, int], ...] = (_FORWARD, _BACK, _LEFT, _RIGHT)

ROOK_DIRS: tuple[tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))
BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


# -- Precomputed lookup tables ---------------------------------------------


def _mirror(offsets: tuple[tuple[int, int], ...]) -> tuple[tuple[int, int], ...]:
    return tuple((-dx, -dy) for dx, dy in offsets)


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(SQUARE_COUNT):
        x = column_of(sq)
        y = row_of(sq)
        targets.append(
            tuple(
                make_square(x + dx, y + dy)
                for dx, dy in offsets
                if is_on_board(x + dx, y + dy)
            )
        )
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(SQUARE_COUNT):
        square_rays: list[tuple[Square, ...]] = []
        for dx, dy in directions:
            x = column_of(sq) + dx
            y = row_of(sq) + dy
            ray: list[Square] = []
            while is_on_board(x, y):
                ray.append(make_square(x, y))
                x += dx
                y += dy
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_step_tables(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], tuple[tuple[Square, ...], ...]]:
    """``[player][square]`` -> step targets, mirrored for GOTE."""
    return (_build_targets(offsets), _build_targets(_mirror(offsets)))


_KING_TARGETS = _build_step_tables(KING_OFFSETS)
_GOLD_TARGETS = _build_step_tables(GOLD_OFFSETS)
_SILVER_TARGETS = _build_step_tables(SILVER_OFFSETS)
_PAWN_TARGETS = _build_step_tables(PAWN_OFFSETS)
_DIAGONAL_TARGETS = _build_step_tables(DIAGONAL_STEPS)
_ORTHOGONAL_TARGETS = _build_step_tables(ORTHOGONAL_STEPS)

_ROOK_RAYS = _build_rays(ROOK_DIRS)
_BISHOP_RAYS = _build_rays(BISHOP_DIRS)

_EMPTY_RAYS: tuple[tuple[Square, ...], ...] = ()
_NO_STEPS: tuple[Square, ...] = ()


def promotion_row(player: Player) -> int:
    """The single row nearest the opponent."""
    return 0 if player == Player.SENTE else BOARD_SIZE - 1


def _movement(
    piece: Piece, sq: Square
) -> tuple[tuple[tuple[Square, ...], ...], tuple[Square, ...]]:
    """``(rays, steps)`` reachable geometry for *piece* standing on *sq*."""
    side = int(piece.owner)
    pt = piece.piece_type

    if pt == PieceType.ROOK:
        steps = _DIAGONAL_TARGETS[side][sq] if piece.promoted else _NO_STEPS
        return _ROOK_RAYS[sq], steps
    if pt == PieceType.BISHOP:
        steps = _ORTHOGONAL_TARGETS[side][sq] if piece.promoted else _NO_STEPS
        return _BISHOP_RAYS[sq], steps
    if pt == PieceType.KING:
        return _EMPTY_RAYS, _KING_TARGETS[side][sq]
    if pt == PieceType.GOLD or piece.promoted:
        return _EMPTY_RAYS, _GOLD_TARGETS[side][sq]
    if pt == PieceType.SILVER:
        return _EMPTY_RAYS, _SILVER_TARGETS[side][sq]
    return _EMPTY_RAYS, _PAWN_TARGETS[side][sq]


class MoveGenerator:
    """Generates moves for a given :class:`GameState`.

    ``generate_legal_moves`` applies every drop restriction;
    ``generate_fast_moves`` skips the drop-pawn-mate test and is meant for
    random playouts and for checkmate detection itself.
    """

    __slots__ = ("_state", "_board", "_rules")

    def __init__(self, state: GameState, rules: RuleSet | None = None) -> None:
        self._state = state
        self._board = state.board
        self._rules = rules

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self, player: Player) -> list[Move]:
        """All moves *player* may play, drop-pawn-mate excluded."""
        moves = self._generate(player, check_drop_mate=True)
        if self._rules is not None and self._rules.forbid_self_check:
            moves = [
                m
                for m in moves
                if not MoveGenerator(self._state.apply_move(m, player)).is_in_check(
                    player
                )
            ]
        return moves

    def generate_fast_moves(self, player: Player) -> list[Move]:
        """Moves without the drop-pawn-mate filter."""
        return self._generate(player, check_drop_mate=False)

    def destinations(self, sq: Square) -> list[Square]:
        """Squares the piece on *sq* can reach (empty or enemy-occupied)."""
        piece = self._board[sq]
        if piece is None:
            return []
        board = self._board
        owner = piece.owner
        rays, steps = _movement(piece, sq)
        targets: list[Square] = []

        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    targets.append(to_sq)
                    continue
                if target.owner != owner:
                    targets.append(to_sq)
                break

        for to_sq in steps:
            target = board[to_sq]
            if target is None or target.owner != owner:
                targets.append(to_sq)
        return targets

    # -- Attack detection (public) -----------------------------------------

    def is_square_attacked(self, sq: Square, by_player: Player) -> bool:
        """Is *sq* reachable by any piece of *by_player*?"""
        for from_sq, _ in self._board.pieces_of(by_player):
            if sq in self.destinations(from_sq):
                return True
        return False

    def is_in_check(self, player: Player) -> bool:
        """Is *player*'s king attacked? A captured king is never in check."""
        king_sq = self._board.king_square(player)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, player.opposite)

    def is_checkmate(self, player: Player) -> bool:
        """In check, and no fast-generated move gets *player* out of it."""
        if not self.is_in_check(player):
            return False
        for move in self.generate_fast_moves(player):
            after = self._state.apply_move(move, player)
            if not MoveGenerator(after).is_in_check(player):
                return False
        return True

    # -- Generators (private) -----------------------------------------------

    def _generate(self, player: Player, check_drop_mate: bool) -> list[Move]:
        moves: list[Move] = []
        for from_sq, piece in self._board.pieces_of(player):
            self._gen_relocations(from_sq, piece, moves)
        self._gen_drops(player, moves, check_drop_mate)
        return moves

    def _gen_relocations(
        self, from_sq: Square, piece: Piece, moves: list[Move]
    ) -> None:
        zone = promotion_row(piece.owner)
        from_in_zone = row_of(from_sq) == zone

        for to_sq in self.destinations(from_sq):
            if not piece.can_promote or not (from_in_zone or row_of(to_sq) == zone):
                moves.append(Relocate(from_sq, to_sq))
                continue
            moves.append(Relocate(from_sq, to_sq, promote=True))
            # A pawn on the last row could never move again.
            if piece.piece_type == PieceType.PAWN and row_of(to_sq) == zone:
                continue
            moves.append(Relocate(from_sq, to_sq, promote=False))

    def _gen_drops(
        self, player: Player, moves: list[Move], check_drop_mate: bool
    ) -> None:
        hand = self._state.hand(player)
        board = self._board
        empty = [sq for sq in range(SQUARE_COUNT) if board.is_empty(sq)]

        for pt in HAND_TYPES:
            if hand.get(pt) == 0:
                continue
            if pt != PieceType.PAWN:
                moves.extend(Drop(sq, pt) for sq in empty)
                continue

            blocked_columns = {
                x
                for x in range(BOARD_SIZE)
                if board.has_unpromoted_pawn_in_column(player, x)
            }
            for sq in empty:
                if column_of(sq) in blocked_columns:
                    continue
                drop = Drop(sq, pt)
                if check_drop_mate and self._is_drop_pawn_mate(drop, player):
                    continue
                moves.append(drop)

    def _is_drop_pawn_mate(self, drop: Drop, player: Player) -> bool:
        after = self._state.apply_move(drop, player)
        return MoveGenerator(after).is_checkmate(player.opposite)
