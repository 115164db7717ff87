"""
ウェブAPI用 AI推論モジュール
ミニマックス探索でゲームプレイを行う
"""

import logging
import random
from typing import Optional, Tuple

from ..engine.game_state import GameState
from ..engine.move import Move
from ..ai.evaluator import Evaluator
from ..ai.minimax import MinimaxAI

logger = logging.getLogger(__name__)


class OstleAI:
    """
    オストルAI - ミニマックス探索 + αβ枝刈り

    難易度レベル:
    - easy: 深さ1
    - medium: 深さ2
    - hard: 深さ3（ブラウザ版の既定値）
    - expert: 深さ4
    """

    DIFFICULTY_SETTINGS = {
        'easy': {'depth': 1},
        'medium': {'depth': 2},
        'hard': {'depth': 3},
        'expert': {'depth': 4},
    }

    def __init__(self, seed: Optional[int] = None):
        """
        Args:
            seed: 同点の手の選び方を固定したいときのシード
        """
        self.seed = seed
        self.rng = random.Random(seed)
        self.evaluator = Evaluator()

    def _searcher(self, difficulty: str) -> MinimaxAI:
        settings = self.DIFFICULTY_SETTINGS.get(difficulty, self.DIFFICULTY_SETTINGS['medium'])
        return MinimaxAI(depth=settings['depth'], evaluator=self.evaluator, rng=self.rng)

    def get_best_move(self, state: GameState, difficulty: str = 'medium') -> Tuple[Move, float]:
        """
        最善手を取得

        Returns:
            (最善手, 評価値)
        """
        searcher = self._searcher(difficulty)
        move, value = searcher.search(state)
        if move is None:
            raise ValueError("No legal moves available")
        logger.info(
            "AI move for %s: %s (value=%.2f, difficulty=%s, nodes=%d)",
            state.current_player.name, move, value, difficulty, searcher.nodes_searched,
        )
        return move, float(value)

    def evaluate_position(self, state: GameState) -> float:
        """
        局面を評価

        Returns:
            正の値: 黒有利
            負の値: 白有利
        """
        return float(self.evaluator.evaluate(state))


# シングルトンインスタンス（サーバー起動時に1回だけ初期化）
_ai_instance: Optional[OstleAI] = None


def get_ai() -> OstleAI:
    """AIインスタンスを取得（遅延初期化）"""
    global _ai_instance
    if _ai_instance is None:
        _ai_instance = OstleAI()
    return _ai_instance


def reload_ai(seed: Optional[int] = None) -> OstleAI:
    """AIを作り直す（シードを固定したいとき用）"""
    global _ai_instance
    _ai_instance = OstleAI(seed=seed)
    return _ai_instance
