"""Resolves engine classes without causing circular imports.

Both ``minishogi.engine.__init__`` and ``minishogi.engine.qt_bridge`` import
from here instead of from each other, breaking the import cycle.
"""

from __future__ import annotations

from minishogi.core.rules import DEFAULT_RULES, RuleSet
from minishogi.engine.alphabeta import AlphaBetaEngine
from minishogi.engine.mcts import MCTSEngine
from minishogi.engine.search import IEngine, SearchAlgorithm

DefaultEngine: type[IEngine] = AlphaBetaEngine


def create_engine(
    algorithm: SearchAlgorithm | str = SearchAlgorithm.ALPHA_BETA,
    *,
    rules: RuleSet = DEFAULT_RULES,
    seed: int | None = None,
) -> IEngine:
    """Build a fresh engine; *seed* only applies to MCTS."""
    algorithm = SearchAlgorithm(algorithm)
    if algorithm == SearchAlgorithm.MCTS:
        return MCTSEngine(seed=seed, rules=rules)
    return AlphaBetaEngine(rules)


__all__ = ["DefaultEngine", "create_engine"]
