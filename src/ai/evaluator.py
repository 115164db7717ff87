"""
局面評価関数

正の値は黒（AI側・最大化側）有利、負の値は白有利を表す。
"""

from dataclasses import dataclass
from typing import Optional

from ..engine.game_state import GameState
from ..engine.piece import Player
from ..engine.rules import Rules


@dataclass(frozen=True)
class EvaluationWeights:
    """評価関数の各項の重み"""
    captures: float = 200.0
    material: float = 120.0
    mobility: float = 3.5
    hole_center: float = 0.5
    # 穴と中央のマンハッタン距離がこれ以内なら加点
    hole_center_reach: int = 8


class Evaluator:
    """捕獲数・駒数・可動性・穴の位置の線形結合で局面を評価する"""

    def __init__(self, weights: Optional[EvaluationWeights] = None):
        self.weights = weights or EvaluationWeights()

    def evaluate(self, state: GameState) -> float:
        w = self.weights
        score = w.captures * (state.captured_black - state.captured_white)
        score += w.material * (len(state.black_pieces) - len(state.white_pieces))

        black_moves = Rules.count_legal_moves(state, Player.BLACK)
        white_moves = Rules.count_legal_moves(state, Player.WHITE)
        score += w.mobility * (black_moves - white_moves)

        board = state.board
        distance = board.manhattan_distance(state.hole, board.center_index)
        score += w.hole_center * (w.hole_center_reach - distance)
        return score

    __call__ = evaluate


def evaluate(state: GameState) -> float:
    """既定の重みで局面を評価"""
    return _default_evaluator.evaluate(state)


_default_evaluator = Evaluator()
