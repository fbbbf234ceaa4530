"""Tests for Qt engine bridge worker."""

from __future__ import annotations

from PyQt6.QtTest import QSignalSpy

from minishogi.core.enums import Player
from minishogi.core.rules import RuleSet, generate_legal_moves
from minishogi.core.state import GameState
from minishogi.engine.alphabeta import AlphaBetaEngine
from minishogi.engine.mcts import MCTSEngine
from minishogi.engine.qt_bridge import EngineWorker
from minishogi.engine.search import CancelCheck, SearchLimits, SearchResult


class _CancellingEngine:
    def __init__(self, worker: EngineWorker) -> None:
        self._worker = worker

    def search(
        self,
        state: GameState,
        player: Player,
        _limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        legal = generate_legal_moves(state, player)
        self._worker.cancel()
        return SearchResult(best_move=legal[0], score=0, depth=1, nodes=1)


class _NoMoveEngine:
    def search(
        self,
        _state: GameState,
        _player: Player,
        _limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        return SearchResult(best_move=None, score=-100_000, depth=0, nodes=0)


class _FailingEngine:
    def search(
        self,
        _state: GameState,
        _player: Player,
        _limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        raise RuntimeError("boom")


class TestEngineWorker:
    def test_emits_best_move(self, qapp: object) -> None:
        state = GameState.initial()
        worker = EngineWorker(limits=SearchLimits(max_depth=1))
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(state, Player.SENTE, 3)

        assert len(best_moves) == 1
        assert best_moves[0][0] == 3
        assert best_moves[0][1] in generate_legal_moves(state, Player.SENTE)

    def test_mcts_worker_emits_best_move(self, qapp: object) -> None:
        state = GameState.initial()
        worker = EngineWorker(
            algorithm="mcts", limits=SearchLimits(iterations=30), seed=4
        )
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(state, Player.GOTE, 9)

        assert len(best_moves) == 1
        assert best_moves[0][1] in generate_legal_moves(state, Player.GOTE)

    def test_emits_cancelled_when_search_is_cancelled(self, qapp: object) -> None:
        worker = EngineWorker()
        worker._engine = _CancellingEngine(worker)

        cancelled = QSignalSpy(worker.search_cancelled)
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(GameState.initial(), Player.SENTE, 7)

        assert len(cancelled) == 1
        assert cancelled[0][0] == 7
        assert len(best_moves) == 0

    def test_emits_no_move_when_search_returns_none(self, qapp: object) -> None:
        worker = EngineWorker()
        worker._engine = _NoMoveEngine()

        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(GameState.initial(), Player.SENTE, 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_emits_error_when_search_raises(self, qapp: object) -> None:
        worker = EngineWorker()
        worker._engine = _FailingEngine()
        errors = QSignalSpy(worker.search_error)

        worker.request_move(GameState.initial(), Player.SENTE, 5)

        assert len(errors) == 1
        assert errors[0][0] == 5
        assert errors[0][1] == "boom"

    def test_rejects_invalid_request(self, qapp: object) -> None:
        worker = EngineWorker()
        errors = QSignalSpy(worker.search_error)

        worker.request_move("not a state", Player.SENTE, 1)
        worker.request_move(GameState.initial(), "sente", 2)

        assert len(errors) == 2
        assert [errors[0][0], errors[1][0]] == [1, 2]

    def test_set_limits_ignores_invalid_values(self, qapp: object) -> None:
        worker = EngineWorker()
        limits = SearchLimits(max_depth=1)

        worker.set_limits(limits)
        worker.set_limits("deep")

        assert worker._limits == limits

    def test_set_algorithm_keeps_seed(self, qapp: object) -> None:
        state = GameState.initial()
        limits = SearchLimits(iterations=40)
        results = []
        for _ in range(2):
            worker = EngineWorker(algorithm="mcts", limits=limits, seed=4)
            worker.set_algorithm("alphabeta")
            worker.set_algorithm("mcts")
            best_moves = QSignalSpy(worker.best_move_ready)
            worker.request_move(state, Player.SENTE, 1)
            assert len(best_moves) == 1
            results.append(tuple(best_moves[0]))

        assert isinstance(worker._engine, MCTSEngine)
        assert results[0] == results[1]

    def test_set_algorithm_keeps_rules(self, qapp: object) -> None:
        rules = RuleSet(forbid_self_check=True)
        worker = EngineWorker(rules=rules)

        worker.set_algorithm("mcts")

        assert isinstance(worker._engine, MCTSEngine)
        assert worker._engine._rules == rules

    def test_set_algorithm_ignores_unknown_name(self, qapp: object) -> None:
        worker = EngineWorker()
        engine = worker._engine

        worker.set_algorithm("negascout")

        assert worker._engine is engine
        assert isinstance(worker._engine, AlphaBetaEngine)
