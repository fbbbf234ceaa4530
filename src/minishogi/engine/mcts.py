"""Monte-Carlo tree search with random rollouts.

The tree lives in a flat arena owned by a single :meth:`MCTSEngine.search`
call; nodes refer to each other by index and the arena is dropped once a
move has been chosen.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from time import perf_counter, time_ns

from minishogi.core.enums import Player
from minishogi.core.move import Move
from minishogi.core.move_generator import MoveGenerator
from minishogi.core.rules import DEFAULT_RULES, RuleSet
from minishogi.core.state import GameState
from minishogi.engine.evaluation import (
    evaluate,
    score_from_probability,
    terminal_score,
    win_probability,
)
from minishogi.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_SENTE_WIN = 1.0
_SENTE_LOSS = 0.0


def _never_cancelled() -> bool:
    return False


def _loss_for(player: Player) -> float:
    """SENTE win probability when *player* has lost."""
    return _SENTE_LOSS if player == Player.SENTE else _SENTE_WIN


def _captured_king_outcome(state: GameState) -> float | None:
    if not state.board.has_king(Player.SENTE):
        return _SENTE_LOSS
    if not state.board.has_king(Player.GOTE):
        return _SENTE_WIN
    return None


@dataclass(slots=True)
class _Node:
    move: Move | None
    player: Player  # side to move at this node
    state: GameState
    parent: int | None
    depth: int
    # Untried moves are stored reversed so pop() follows generation order.
    untried: list[Move]
    children: list[int] = field(default_factory=list)
    visits: int = 0
    wins: float = 0.0  # from ``player``'s point of view


class _SearchTree:
    """Index-addressed node arena."""

    __slots__ = ("nodes", "_rules")

    def __init__(
        self,
        state: GameState,
        player: Player,
        root_moves: list[Move],
        rules: RuleSet,
    ) -> None:
        self._rules = rules
        self.nodes: list[_Node] = [
            _Node(None, player, state, None, 0, list(reversed(root_moves)))
        ]

    def __getitem__(self, index: int) -> _Node:
        return self.nodes[index]

    def is_terminal(self, index: int) -> bool:
        node = self.nodes[index]
        if terminal_score(node.state) is not None:
            return True
        return not node.untried and not node.children

    def expand(self, index: int) -> int:
        """Attach the next untried move of *index* as a new child."""
        parent = self.nodes[index]
        move = parent.untried.pop()
        state = parent.state.apply_move(move, parent.player)
        player = parent.player.opposite
        untried: list[Move] = []
        if terminal_score(state) is None:
            untried = MoveGenerator(state, self._rules).generate_legal_moves(player)
            untried.reverse()
        self.nodes.append(_Node(move, player, state, index, parent.depth + 1, untried))
        child = len(self.nodes) - 1
        parent.children.append(child)
        return child

    def select_child(self, index: int, exploration: float) -> int:
        """UCB1 child of *index*, judged from *index*'s side to move."""
        parent = self.nodes[index]
        log_visits = math.log(parent.visits) if parent.visits > 0 else 0.0
        best_child = parent.children[0]
        best_value = -math.inf

        for child_index in parent.children:
            child = self.nodes[child_index]
            if child.visits == 0:
                return child_index
            # A child's wins are counted for the opponent.
            exploit = 1.0 - child.wins / child.visits
            value = exploit + exploration * math.sqrt(log_visits / child.visits)
            if value > best_value:
                best_value = value
                best_child = child_index
        return best_child

    def backpropagate(self, path: list[int], sente_win: float) -> None:
        for index in path:
            node = self.nodes[index]
            node.visits += 1
            node.wins += sente_win if node.player == Player.SENTE else 1.0 - sente_win

    def most_visited_child(self, index: int) -> _Node | None:
        best: _Node | None = None
        for child_index in self.nodes[index].children:
            child = self.nodes[child_index]
            if best is None or child.visits > best.visits:
                best = child
        return best


class MCTSEngine(IEngine):
    """UCB1 tree search with uniformly random, depth-capped rollouts.

    Args:
        seed: Seed for the rollout generator. Ignored when *rng* is given.
            Defaults to a time-derived value.
        rng: Random source to use for rollouts.
        rules: Rule variations used when expanding the tree.
    """

    __slots__ = ("_cancel_check", "_deadline", "_rng", "_rules")

    def __init__(
        self,
        seed: int | None = None,
        rng: random.Random | None = None,
        rules: RuleSet = DEFAULT_RULES,
    ) -> None:
        if rng is None:
            rng = random.Random(time_ns() if seed is None else seed)
        self._rng = rng
        self._rules = rules
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
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = None
        if limits.time_limit_ms is not None:
            self._deadline = started + max(limits.time_limit_ms, 1) / 1000.0

        root_moves = MoveGenerator(state, self._rules).generate_legal_moves(player)
        if not root_moves:
            return SearchResult(None, score_from_probability(_loss_for(player)), 0, 0)

        tree = _SearchTree(state, player, root_moves, self._rules)
        completed = 0
        max_depth = 0
        for _ in range(limits.iterations):
            if self._should_stop():
                break
            leaf_depth = self._iterate(tree, limits)
            max_depth = max(max_depth, leaf_depth)
            completed += 1

        chosen = tree.most_visited_child(0)
        if chosen is None:
            # Nothing explored (zero budget or stopped at once).
            best_move = root_moves[0]
            score = evaluate(state.apply_move(best_move, player))
        else:
            assert chosen.move is not None
            best_move = chosen.move
            # ``chosen.wins`` counts for the side to move after our move.
            own_rate = 1.0 - chosen.wins / chosen.visits
            sente_rate = own_rate if player == Player.SENTE else 1.0 - own_rate
            score = score_from_probability(sente_rate)

        _LOGGER.debug(
            "mcts %s: move=%s score=%d iterations=%d tree=%d in %.3fs",
            player,
            best_move,
            score,
            completed,
            len(tree.nodes),
            perf_counter() - started,
        )
        return SearchResult(best_move, score, max_depth, completed)

    def _iterate(self, tree: _SearchTree, limits: SearchLimits) -> int:
        index = 0
        path = [index]

        # Selection
        while not tree.is_terminal(index):
            node = tree[index]
            if node.untried or not node.children:
                break
            index = tree.select_child(index, limits.exploration)
            path.append(index)

        # Expansion
        if tree[index].untried and not tree.is_terminal(index):
            index = tree.expand(index)
            path.append(index)

        leaf = tree[index]
        sente_win = self._rollout(leaf.state, leaf.player, limits.rollout_depth)
        tree.backpropagate(path, sente_win)
        return leaf.depth

    def _rollout(self, state: GameState, player: Player, depth: int) -> float:
        """Random playout; returns the SENTE win probability."""
        for _ in range(depth):
            outcome = _captured_king_outcome(state)
            if outcome is not None:
                return outcome
            moves = MoveGenerator(state).generate_fast_moves(player)
            if not moves:
                return _loss_for(player)
            state = state.apply_move(moves[self._rng.randrange(len(moves))], player)
            player = player.opposite

        outcome = _captured_king_outcome(state)
        if outcome is not None:
            return outcome
        return win_probability(evaluate(state))

    def _should_stop(self) -> bool:
        if self._cancel_check():
            return True
        return self._deadline is not None and perf_counter() >= self._deadline


def best_move_mcts(
    state: GameState,
    player: Player,
    limits: SearchLimits | None = None,
    rng: random.Random | None = None,
    rules: RuleSet = DEFAULT_RULES,
) -> Move | None:
    """Best move for *player* by Monte-Carlo tree search, or ``None``."""
    engine = MCTSEngine(rng=rng, rules=rules)
    return engine.search(state, player, limits or SearchLimits()).best_move
