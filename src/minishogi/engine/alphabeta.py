"""Fixed-depth minimax with alpha-beta pruning.

SENTE is the maximizing side. Scores come from :func:`evaluate`; a side
left without legal moves scores as a loss for that side.
"""

from __future__ import annotations

import logging
from time import perf_counter

from minishogi.core.enums import Player
from minishogi.core.move import Move
from minishogi.core.move_generator import MoveGenerator
from minishogi.core.rules import DEFAULT_RULES, RuleSet
from minishogi.core.state import GameState
from minishogi.engine.evaluation import SCORE_MAX, SCORE_MIN, evaluate, terminal_score
from minishogi.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000


def _never_cancelled() -> bool:
    return False


def _loss_score(player: Player) -> int:
    return SCORE_MIN if player == Player.SENTE else SCORE_MAX


class AlphaBetaEngine(IEngine):
    """Deterministic depth-limited alpha-beta searcher."""

    __slots__ = ("_cancel_check", "_deadline", "_nodes", "_rules")

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self._rules = rules
        self._nodes = 0
        self._deadline: float | None = None
        self._cancel_check: CancelCheck = _never_cancelled

    def search(
        self,
        state: GameState,
        player: Player,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        limits.validate()

        started = perf_counter()
        self._nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = None
        if limits.time_limit_ms is not None:
            self._deadline = started + max(limits.time_limit_ms, 1) / 1000.0

        root_moves = MoveGenerator(state, self._rules).generate_legal_moves(player)
        if not root_moves:
            return SearchResult(None, _loss_score(player), 0, self._nodes)

        score, move, completed = self._search_root(
            state, player, root_moves, limits.max_depth
        )
        _LOGGER.debug(
            "alpha-beta %s: move=%s score=%d depth=%d nodes=%d in %.3fs",
            player,
            move,
            score,
            completed,
            self._nodes,
            perf_counter() - started,
        )
        return SearchResult(move, score, completed, self._nodes)

    def _search_root(
        self,
        state: GameState,
        player: Player,
        root_moves: list[Move],
        depth: int,
    ) -> tuple[int, Move, int]:
        maximizing = player == Player.SENTE
        best_move = root_moves[0]
        best_score = -_INF_SCORE if maximizing else _INF_SCORE
        alpha = -_INF_SCORE
        beta = _INF_SCORE
        searched = 0

        for move in root_moves:
            if searched and self._should_stop():
                break
            child = state.apply_move(move, player)
            score = self._alphabeta(child, depth - 1, alpha, beta, player.opposite)
            searched += 1

            # Strict comparison: ties keep the earliest generated move.
            if maximizing:
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, score)
            else:
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, score)

        completed = depth if searched == len(root_moves) else 0
        return best_score, best_move, completed

    def _alphabeta(
        self,
        state: GameState,
        depth: int,
        alpha: int,
        beta: int,
        side: Player,
    ) -> int:
        self._nodes += 1

        terminal = terminal_score(state)
        if terminal is not None:
            return terminal
        if depth <= 0 or self._should_stop():
            return evaluate(state)

        moves = MoveGenerator(state, self._rules).generate_legal_moves(side)
        if not moves:
            return _loss_score(side)

        if side == Player.SENTE:
            value = -_INF_SCORE
            for move in moves:
                child = state.apply_move(move, side)
                score = self._alphabeta(child, depth - 1, alpha, beta, side.opposite)
                value = max(value, score)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return value

        value = _INF_SCORE
        for move in moves:
            child = state.apply_move(move, side)
            score = self._alphabeta(child, depth - 1, alpha, beta, side.opposite)
            value = min(value, score)
            beta = min(beta, value)
            if beta <= alpha:
                break
        return value

    def _should_stop(self) -> bool:
        if self._cancel_check():
            return True
        return self._deadline is not None and perf_counter() >= self._deadline


def best_move_alpha_beta(
    state: GameState,
    player: Player,
    limits: SearchLimits | None = None,
    rules: RuleSet = DEFAULT_RULES,
) -> Move | None:
    """Best move for *player* by fixed-depth alpha-beta, or ``None``."""
    engine = AlphaBetaEngine(rules)
    return engine.search(state, player, limits or SearchLimits()).best_move
