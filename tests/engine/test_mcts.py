"""Tests for the Monte-Carlo tree searcher."""

import random

import pytest

from minishogi.core.board import Board
from minishogi.core.enums import Player, PieceType
from minishogi.core.move import Relocate
from minishogi.core.piece import Piece
from minishogi.core.rules import DEFAULT_RULES, RuleSet, generate_legal_moves
from minishogi.core.state import GameState
from minishogi.core.types import A1, A2, B1, B2, C1, C2, C3, E1, E5
from minishogi.engine import MCTSEngine, SearchLimits, best_move_mcts
from minishogi.engine.mcts import _SearchTree

SENTE_KING = Piece(PieceType.KING, Player.SENTE)
GOTE_KING = Piece(PieceType.KING, Player.GOTE)


def _state(pieces) -> GameState:
    return GameState(Board.from_pieces(pieces))


def _boxed_in_sente() -> GameState:
    sente_pawn = Piece(PieceType.PAWN, Player.SENTE)
    return _state(
        {A1: SENTE_KING, B1: sente_pawn, A2: sente_pawn, B2: sente_pawn, E5: GOTE_KING}
    )


def _king_capture_state() -> GameState:
    gold = Piece(PieceType.GOLD, Player.SENTE)
    return _state({E5: SENTE_KING, C1: GOTE_KING, C2: gold})


class TestMCTSEngine:
    @pytest.mark.parametrize("player", [Player.SENTE, Player.GOTE])
    def test_returns_legal_move_from_start(self, player: Player) -> None:
        state = GameState.initial()
        result = MCTSEngine(seed=11).search(state, player, SearchLimits(iterations=150))

        assert result.best_move in generate_legal_moves(state, player)
        assert result.nodes == 150
        assert result.depth >= 1

    @pytest.mark.parametrize("iterations", [0, 1, 25])
    def test_always_answers_when_moves_exist(self, iterations: int) -> None:
        state = GameState.initial()
        limits = SearchLimits(iterations=iterations)
        move = best_move_mcts(state, Player.SENTE, limits, rng=random.Random(3))
        assert move in generate_legal_moves(state, Player.SENTE)

    def test_zero_budget_picks_first_move(self) -> None:
        state = GameState.initial()
        limits = SearchLimits(iterations=0)
        result = MCTSEngine(seed=1).search(state, Player.SENTE, limits)

        assert result.best_move == generate_legal_moves(state, Player.SENTE)[0]
        assert result.nodes == 0

    @pytest.mark.parametrize("iterations", [0, 40])
    def test_no_legal_moves_returns_none(self, iterations: int) -> None:
        state = _boxed_in_sente()
        limits = SearchLimits(iterations=iterations)
        result = MCTSEngine(seed=1).search(state, Player.SENTE, limits)

        assert result.best_move is None
        assert best_move_mcts(state, Player.SENTE, limits) is None

    def test_prefers_king_capture(self) -> None:
        state = _king_capture_state()
        limits = SearchLimits(iterations=400)
        result = MCTSEngine(seed=5).search(state, Player.SENTE, limits)

        assert result.best_move == Relocate(C2, C1)
        assert result.score > 0

    def test_same_seed_same_result(self) -> None:
        state = GameState.initial()
        limits = SearchLimits(iterations=120)

        first = MCTSEngine(seed=99).search(state, Player.SENTE, limits)
        second = MCTSEngine(seed=99).search(state, Player.SENTE, limits)

        assert first == second

    def test_honors_cancel_callback(self) -> None:
        state = GameState.initial()
        result = MCTSEngine(seed=2).search(
            state,
            Player.SENTE,
            SearchLimits(iterations=1_000),
            is_cancelled=lambda: True,
        )

        assert result.nodes == 0
        assert result.best_move == generate_legal_moves(state, Player.SENTE)[0]

    def test_rejects_negative_budget(self) -> None:
        with pytest.raises(ValueError):
            MCTSEngine(seed=1).search(
                GameState.initial(), Player.SENTE, SearchLimits(iterations=-1)
            )

    @pytest.mark.parametrize("iterations", [0, 30])
    def test_rule_set_reaches_root_moves(self, iterations: int) -> None:
        rook = Piece(PieceType.ROOK, Player.GOTE)
        state = _state({C3: SENTE_KING, E1: GOTE_KING, A2: rook})
        rules = RuleSet(forbid_self_check=True)
        limits = SearchLimits(iterations=iterations)

        move = best_move_mcts(
            state, Player.SENTE, limits, rng=random.Random(2), rules=rules
        )

        assert move in generate_legal_moves(state, Player.SENTE, rules)


class TestRollout:
    def test_captured_king_is_absolute(self) -> None:
        engine = MCTSEngine(seed=1)
        no_gote_king = GameState(Board.initial().replace({A1: None}))
        no_sente_king = GameState(Board.initial().replace({E5: None}))

        assert engine._rollout(no_gote_king, Player.GOTE, 10) == 1.0
        assert engine._rollout(no_sente_king, Player.SENTE, 10) == 0.0

    def test_stalemated_side_loses(self) -> None:
        engine = MCTSEngine(seed=1)
        assert engine._rollout(_boxed_in_sente(), Player.SENTE, 10) == 0.0

    def test_depth_zero_uses_static_evaluation(self) -> None:
        engine = MCTSEngine(seed=1)
        value = engine._rollout(GameState.initial(), Player.SENTE, 0)
        assert value == pytest.approx(0.5)

    def test_probability_in_range(self) -> None:
        engine = MCTSEngine(seed=8)
        for _ in range(20):
            value = engine._rollout(GameState.initial(), Player.SENTE, 10)
            assert 0.0 <= value <= 1.0


class TestSearchTree:
    def _tree(self) -> tuple[_SearchTree, list]:
        state = GameState.initial()
        moves = generate_legal_moves(state, Player.SENTE)
        return _SearchTree(state, Player.SENTE, moves, DEFAULT_RULES), moves

    def test_expansion_follows_generation_order(self) -> None:
        tree, moves = self._tree()

        first = tree.expand(0)
        second = tree.expand(0)

        assert tree[first].move == moves[0]
        assert tree[second].move == moves[1]
        assert tree[first].player == Player.GOTE
        assert tree[0].children == [first, second]
        assert len(tree[0].untried) == len(moves) - 2

    def test_backpropagation_uses_each_nodes_side(self) -> None:
        tree, _ = self._tree()
        child = tree.expand(0)

        tree.backpropagate([0, child], 0.8)

        assert tree[0].visits == 1
        assert tree[child].visits == 1
        assert tree[0].wins == pytest.approx(0.8)
        assert tree[child].wins == pytest.approx(0.2)

    def test_selection_prefers_unvisited_child(self) -> None:
        tree, _ = self._tree()
        visited = tree.expand(0)
        unvisited = tree.expand(0)
        tree.backpropagate([0, visited], 1.0)

        assert tree.select_child(0, 1.41) == unvisited

    def test_selection_reads_wins_from_parent_side(self) -> None:
        tree, _ = self._tree()
        bad = tree.expand(0)
        good = tree.expand(0)
        for _ in range(5):
            tree.backpropagate([0, bad], 0.2)
            tree.backpropagate([0, good], 0.8)

        assert tree.select_child(0, 1.41) == good
        assert tree.most_visited_child(0) is tree[bad]

    def test_terminal_nodes(self) -> None:
        moves = [Relocate(C2, C1)]
        tree = _SearchTree(_king_capture_state(), Player.SENTE, moves, DEFAULT_RULES)
        child = tree.expand(0)

        assert tree.is_terminal(child)
        assert tree[child].untried == []
        assert not tree.is_terminal(0)
