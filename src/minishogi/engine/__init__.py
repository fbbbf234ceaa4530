"""Engine package: evaluation, alpha-beta and MCTS search, Qt worker bridge."""

from minishogi.engine._default import DefaultEngine, create_engine
from minishogi.engine.alphabeta import AlphaBetaEngine, best_move_alpha_beta
from minishogi.engine.evaluation import (
    SCORE_MAX,
    SCORE_MIN,
    evaluate,
    piece_value,
    score_from_probability,
    win_probability,
)
from minishogi.engine.mcts import MCTSEngine, best_move_mcts
from minishogi.engine.search import (
    CancelCheck,
    IEngine,
    SearchAlgorithm,
    SearchLimits,
    SearchResult,
)

__all__ = [
    "AlphaBetaEngine",
    "CancelCheck",
    "DefaultEngine",
    "IEngine",
    "MCTSEngine",
    "SCORE_MAX",
    "SCORE_MIN",
    "SearchAlgorithm",
    "SearchLimits",
    "SearchResult",
    "best_move_alpha_beta",
    "best_move_mcts",
    "create_engine",
    "evaluate",
    "piece_value",
    "score_from_probability",
    "win_probability",
]
