"""High-level rules: check, checkmate, game result and state transition."""

from __future__ import annotations

from dataclasses import dataclass

from minishogi.core.enums import GameResult, Player
from minishogi.core.move import Move
from minishogi.core.move_generator import MoveGenerator
from minishogi.core.state import GameState


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Optional rule variations.

    ``forbid_self_check`` drops moves that leave the mover's own king
    attacked. Off by default: the standard generator only applies the
    drop restrictions and lets kings be captured.
    """

    forbid_self_check: bool = False


DEFAULT_RULES = RuleSet()


def generate_legal_moves(
    state: GameState, player: Player, rules: RuleSet = DEFAULT_RULES
) -> list[Move]:
    """All legal moves for *player*, in deterministic board-then-hand order."""
    return MoveGenerator(state, rules).generate_legal_moves(player)


def make_move(state: GameState, move: Move, player: Player) -> GameState:
    """Pure state transition; *state* is never modified."""
    return state.apply_move(move, player)


class Rules:
    """Static rule-checker that operates on a :class:`GameState`."""

    @staticmethod
    def is_in_check(state: GameState, player: Player) -> bool:
        return MoveGenerator(state).is_in_check(player)

    @staticmethod
    def is_checkmate(state: GameState, player: Player) -> bool:
        return MoveGenerator(state).is_checkmate(player)

    @staticmethod
    def has_legal_moves(
        state: GameState, player: Player, rules: RuleSet = DEFAULT_RULES
    ) -> bool:
        return bool(generate_legal_moves(state, player, rules))

    @staticmethod
    def game_result(
        state: GameState, side_to_move: Player, rules: RuleSet = DEFAULT_RULES
    ) -> GameResult:
        """Determine the current game result.

        A side whose king was captured has lost; so has a side to move that
        has no legal moves (there are no draws).
        """
        board = state.board
        if not board.has_king(Player.SENTE):
            return GameResult.GOTE_WINS
        if not board.has_king(Player.GOTE):
            return GameResult.SENTE_WINS
        if not Rules.has_legal_moves(state, side_to_move, rules):
            return (
                GameResult.GOTE_WINS
                if side_to_move == Player.SENTE
                else GameResult.SENTE_WINS
            )
        return GameResult.IN_PROGRESS
