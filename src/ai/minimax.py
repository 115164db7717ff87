"""
ミニマックス探索（αβ枝刈り）によるオストルAI

黒を最大化側、白を最小化側として評価関数の値を比較する。
探索はエンジンの Rules.legal_successors を通して盤面を進めるので、
対人戦と同じルールがそのまま適用される。

同じ評価値の手が複数ある場合は、ルートの手をシャッフルした順で最初に見つかった手を選ぶ。
乱数は random.Random を注入できるので、シードを固定すれば結果は再現できる。
"""

import logging
import math
import random
from typing import Optional, Tuple

from ..engine.game_state import GameState
from ..engine.move import Move
from ..engine.piece import Player
from ..engine.rules import Rules
from .evaluator import Evaluator

logger = logging.getLogger(__name__)

# 既定の探索深さ
DEFAULT_DEPTH = 3


class MinimaxAI:
    """αβ枝刈り付きミニマックス探索"""

    def __init__(
        self,
        depth: int = DEFAULT_DEPTH,
        evaluator: Optional[Evaluator] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        player: Player = Player.BLACK
    ):
        """
        Args:
            depth: 探索深さ（ルートの手を1手目として数える）
            evaluator: 局面評価関数（Noneなら既定の重み）
            rng: 手順のシャッフルに使う乱数源
            seed: rng を省略したときのシード
            player: play() で手を指す側
        """
        if depth < 0:
            raise ValueError(f"depth must be non-negative, got {depth}")
        self.depth = depth
        self.evaluator = evaluator or Evaluator()
        self.rng = rng if rng is not None else random.Random(seed)
        self.player = player
        # 直近の探索の統計
        self.nodes_searched = 0
        self.last_value: Optional[float] = None

    def best_move(self, state: GameState, depth: Optional[int] = None) -> Optional[Move]:
        """手番のプレイヤーにとっての最善手（合法手がなければNone）"""
        move, _ = self.search(state, depth)
        return move

    def search(self, state: GameState, depth: Optional[int] = None) -> Tuple[Optional[Move], Optional[float]]:
        """
        最善手とその評価値を返す
        黒番なら評価値の最大、白番なら最小の手を選ぶ
        """
        if depth is None:
            depth = self.depth
        self.nodes_searched = 0
        self.last_value = None

        side = state.current_player
        successors = Rules.legal_successors(state, side)
        if not successors:
            logger.debug("No legal moves for %s", side.name)
            return None, None

        self.rng.shuffle(successors)
        maximizing = side == Player.BLACK
        alpha, beta = -math.inf, math.inf
        best_move: Optional[Move] = None
        best_value = -math.inf if maximizing else math.inf

        for move, child in successors:
            value = self._minimax(child, max(0, depth - 1), alpha, beta, not maximizing)
            if maximizing:
                if value > best_value or best_move is None:
                    best_value, best_move = value, move
                alpha = max(alpha, best_value)
            else:
                if value < best_value or best_move is None:
                    best_value, best_move = value, move
                beta = min(beta, best_value)

        self.last_value = best_value
        logger.debug(
            "%s chose %s (value=%.2f, depth=%d, nodes=%d)",
            side.name, best_move, best_value, depth, self.nodes_searched,
        )
        return best_move, best_value

    def _minimax(self, state: GameState, depth: int, alpha: float, beta: float, maximizing: bool) -> float:
        self.nodes_searched += 1
        if depth == 0 or state.is_terminal():
            return self.evaluator.evaluate(state)

        side = Player.BLACK if maximizing else Player.WHITE
        successors = Rules.legal_successors(state, side)
        # 動けない局面は負けとせず、静的評価を返す
        if not successors:
            return self.evaluator.evaluate(state)

        if maximizing:
            best = -math.inf
            for _, child in successors:
                value = self._minimax(child, depth - 1, alpha, beta, False)
                if value > best:
                    best = value
                if best > alpha:
                    alpha = best
                if beta <= alpha:
                    break
            return best

        best = math.inf
        for _, child in successors:
            value = self._minimax(child, depth - 1, alpha, beta, True)
            if value < best:
                best = value
            if best < beta:
                beta = best
            if beta <= alpha:
                break
        return best

    def play(self, state: GameState) -> GameState:
        """
        AIの手番なら最善手を適用した状態を返す
        手番でない・終局・合法手なしの場合は状態をそのまま返す
        """
        if state.current_player != self.player or state.is_terminal():
            return state
        move = self.best_move(state)
        if move is None:
            return state
        return Rules.apply_move(state, move)


def best_move(
    state: GameState,
    depth: int = DEFAULT_DEPTH,
    rng: Optional[random.Random] = None
) -> Optional[Move]:
    """手番のプレイヤーの最善手を探索する"""
    return MinimaxAI(depth=depth, rng=rng).best_move(state)
