"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from minishogi.core.enums import Player
from minishogi.core.rules import DEFAULT_RULES, RuleSet
from minishogi.core.state import GameState
from minishogi.engine._default import create_engine
from minishogi.engine.search import SearchAlgorithm, SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand."""

    best_move_ready = pyqtSignal(int, object, int, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int, int, int, int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine", "_limits", "_rules", "_seed")

    def __init__(
        self,
        *,
        algorithm: SearchAlgorithm | str = SearchAlgorithm.ALPHA_BETA,
        limits: SearchLimits | None = None,
        seed: int | None = None,
        rules: RuleSet = DEFAULT_RULES,
    ) -> None:
        super().__init__()
        self._seed = seed
        self._rules = rules
        self._engine = create_engine(algorithm, rules=rules, seed=seed)
        self._limits = limits or SearchLimits()
        self._cancel_event = threading.Event()

    @pyqtSlot(object, object, int)
    def request_move(
        self, state_obj: object, player_obj: object, request_id: int
    ) -> None:
        """Search for *player_obj*'s best move in *state_obj* and emit result."""
        if not isinstance(state_obj, GameState):
            self.search_error.emit(request_id, "Engine received invalid state")
            return
        if not isinstance(player_obj, Player):
            self.search_error.emit(request_id, "Engine received invalid player")
            return

        self._cancel_event.clear()
        try:
            result = self._engine.search(
                state_obj,
                player_obj,
                self._limits,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            _LOGGER.exception("Engine search %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(
                request_id,
                result.score,
                result.depth,
                result.nodes,
            )
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(object)
    def set_limits(self, limits: object) -> None:
        """Replace search limits (takes effect on the next search)."""
        if not isinstance(limits, SearchLimits):
            _LOGGER.warning("Ignoring invalid search limits: %r", limits)
            return
        self._limits = limits

    @pyqtSlot(str)
    def set_algorithm(self, algorithm: str) -> None:
        """Switch search algorithm (takes effect on the next search)."""
        try:
            selected = SearchAlgorithm(algorithm)
        except ValueError:
            _LOGGER.warning("Ignoring unknown search algorithm: %r", algorithm)
            return
        self._engine = create_engine(selected, rules=self._rules, seed=self._seed)
