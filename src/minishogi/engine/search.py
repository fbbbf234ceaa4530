"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from minishogi.core.enums import Player
    from minishogi.core.move import Move
    from minishogi.core.state import GameState

CancelCheck = Callable[[], bool]


class SearchAlgorithm(StrEnum):
    """Available move-search algorithms."""

    ALPHA_BETA = "alphabeta"
    MCTS = "mcts"


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search budgets for a single move computation.

    ``max_depth`` drives alpha-beta; ``iterations``, ``exploration`` and
    ``rollout_depth`` drive MCTS. ``time_limit_ms`` is an optional deadline
    checked between nodes / iterations.
    """

    max_depth: int = 4
    iterations: int = 20_000
    exploration: float = 1.41
    rollout_depth: int = 10
    time_limit_ms: int | None = None

    def validate(self) -> None:
        if self.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")
        if self.iterations < 0:
            raise ValueError("Iteration budget must be >= 0")
        if self.rollout_depth < 0:
            raise ValueError("Rollout depth must be >= 0")


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``score`` is SENTE-positive. For MCTS, ``depth`` is the deepest tree
    level reached and ``nodes`` the number of completed iterations.
    """

    best_move: Move | None
    score: int
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for move-search engines."""

    def search(
        self,
        state: GameState,
        player: Player,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
