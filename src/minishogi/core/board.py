"""Board - piece placement on a 5x5 grid."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from minishogi.core.enums import Player, PieceType
from minishogi.core.piece import Piece
from minishogi.core.types import (
    BOARD_SIZE,
    SQUARE_COUNT,
    Square,
    is_valid_square,
    make_square,
)

_KING_SQUARE_CACHE_MISS = -1


class Board:
    """Immutable 25-square board.

    Every change goes through :meth:`replace`, which returns a new board.
    """

    __slots__ = ("_squares", "_king_squares")

    def __init__(self, squares: tuple[Piece | None, ...] | None = None) -> None:
        if squares is None:
            squares = (None,) * SQUARE_COUNT
        if len(squares) != SQUARE_COUNT:
            raise ValueError(f"Board needs {SQUARE_COUNT} squares, got {len(squares)}")
        self._squares: tuple[Piece | None, ...] = squares
        # [player] -> king square, filled lazily.
        self._king_squares: list[Square | None] = [_KING_SQUARE_CACHE_MISS] * 2

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __iter__(self) -> Iterator[Piece | None]:
        return iter(self._squares)

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def pieces_of(self, player: Player) -> list[tuple[Square, Piece]]:
        """Occupied squares of *player* in row-major order."""
        return [
            (sq, piece)
            for sq, piece in enumerate(self._squares)
            if piece is not None and piece.owner == player
        ]

    def king_square(self, player: Player) -> Square | None:
        """Square of *player*'s king, or ``None`` once it has been captured."""
        cached = self._king_squares[int(player)]
        if cached != _KING_SQUARE_CACHE_MISS:
            return cached
        found: Square | None = None
        for sq, piece in enumerate(self._squares):
            if (
                piece is not None
                and piece.owner == player
                and piece.piece_type == PieceType.KING
            ):
                found = sq
                break
        self._king_squares[int(player)] = found
        return found

    def has_king(self, player: Player) -> bool:
        return self.king_square(player) is not None

    def has_unpromoted_pawn_in_column(self, player: Player, x: int) -> bool:
        for y in range(BOARD_SIZE):
            piece = self._squares[make_square(x, y)]
            if (
                piece is not None
                and piece.owner == player
                and piece.piece_type == PieceType.PAWN
                and not piece.promoted
            ):
                return True
        return False

    # -- Copy-on-write ------------------------------------------------------

    def replace(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board with *changes* applied; ``self`` is left untouched.

        Raises:
            ValueError: a key is not a square index 0-24.
        """
        squares = list(self._squares)
        for sq, piece in changes.items():
            if not is_valid_square(sq):
                raise ValueError(f"Invalid square index: {sq}")
            squares[sq] = piece
        return Board(tuple(squares))

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def from_pieces(cls, pieces: Mapping[Square, Piece]) -> Board:
        """Board holding exactly *pieces*."""
        return cls().replace(pieces)

    @classmethod
    def initial(cls) -> Board:
        """Standard minishogi starting position."""
        back_row = (
            PieceType.KING,
            PieceType.GOLD,
            PieceType.SILVER,
            PieceType.BISHOP,
            PieceType.ROOK,
        )
        last = BOARD_SIZE - 1
        pieces: dict[Square, Piece] = {}
        for x, pt in enumerate(back_row):
            pieces[make_square(x, 0)] = Piece(pt, Player.GOTE)
            # SENTE's back row is GOTE's rotated by 180 degrees.
            pieces[make_square(last - x, last)] = Piece(pt, Player.SENTE)
        pieces[make_square(0, 1)] = Piece(PieceType.PAWN, Player.GOTE)
        pieces[make_square(last, last - 1)] = Piece(PieceType.PAWN, Player.SENTE)
        return cls.from_pieces(pieces)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(self._squares)

    def __repr__(self) -> str:
        rows: list[str] = []
        for y in range(BOARD_SIZE):
            row = []
            for x in range(BOARD_SIZE):
                piece = self._squares[make_square(x, y)]
                row.append(f"{piece.symbol:>2}" if piece else " .")
            rows.append(f"{chr(ord('a') + y)} {' '.join(row)}")
        rows.append("   " + "  ".join(str(BOARD_SIZE - x) for x in range(BOARD_SIZE)))
        return "\n".join(rows)
