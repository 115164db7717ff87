"""
ミニマックス探索のテスト
"""

import math
import random

import pytest

from src.ai import Evaluator, MinimaxAI, best_move
from src.engine import Direction, Move, Player, Rules


# 黒がリングに接した白を押し出せる局面
BLACK_CAPTURE_ROWS = [
    ". . . . . . .",
    ". W . . . . .",
    ". B . . . . .",
    ". . . H . . .",
    ". . . . . . .",
    ". . . . . W .",
    ". . . . . . .",
]

# 黒も穴も動けない局面
STUCK_ROWS = [
    ". . . . . . .",
    ". H W . . . .",
    ". W . . . . .",
    ". . . . . . .",
    ". . . . . . .",
    ". . . . . . .",
    ". . . . . . .",
]


class TestMinimaxAI:
    """ミニマックスAIのテストクラス"""

    def test_returns_legal_move(self, initial_state):
        """初期配置で合法手を返す"""
        move = MinimaxAI(depth=1, seed=0).best_move(initial_state)

        assert move is not None
        assert Rules.is_legal(initial_state, move.index, move.direction)

    @pytest.mark.parametrize("depth", [1, 2])
    def test_black_takes_capture(self, make_state, depth):
        """黒は相手の駒を押し出す手を選ぶ"""
        state = make_state(BLACK_CAPTURE_ROWS, current_player=Player.BLACK)
        move = MinimaxAI(depth=depth, seed=1).best_move(state)

        assert move == Move(15, Direction.UP)

    def test_white_minimizes(self, make_state):
        """白番では評価値を最小化する手（相手の駒を取る手）を選ぶ"""
        state = make_state([
            ". . . . . . .",
            ". B . . . . .",
            ". W . . . . .",
            ". . . H . . .",
            ". . . . . . .",
            ". . . . . B .",
            ". . . . . . .",
        ], current_player=Player.WHITE)
        ai = MinimaxAI(depth=1, seed=3)
        move, value = ai.search(state)

        assert move == Move(15, Direction.UP)
        assert value == ai.last_value
        assert value < 0

    def test_no_legal_moves_returns_none(self, make_state):
        state = make_state(STUCK_ROWS, current_player=Player.BLACK)
        ai = MinimaxAI(depth=3, seed=0)

        assert ai.best_move(state) is None
        assert ai.search(state) == (None, None)

    def test_stuck_node_uses_static_evaluation(self, make_state):
        """動けない局面は負け扱いせず、静的評価を返す"""
        state = make_state(STUCK_ROWS, current_player=Player.BLACK)
        ai = MinimaxAI(depth=3, seed=0)
        value = ai._minimax(state, 3, -math.inf, math.inf, True)

        assert value == Evaluator().evaluate(state)

    def test_terminal_node_uses_static_evaluation(self, initial_state):
        from src.engine import GameState
        state = GameState.from_board(initial_state.board, captured_black=2)
        ai = MinimaxAI(depth=2, seed=0)

        assert ai._minimax(state, 2, -math.inf, math.inf, False) == Evaluator().evaluate(state)
        assert ai.nodes_searched == 1

    def test_seed_makes_search_reproducible(self, initial_state):
        """シードを固定すれば同じ手を選ぶ"""
        first = MinimaxAI(depth=2, seed=42).best_move(initial_state)
        second = MinimaxAI(depth=2, seed=42).best_move(initial_state)
        assert first == second

    def test_injected_rng(self, initial_state):
        a = best_move(initial_state, depth=1, rng=random.Random(5))
        b = best_move(initial_state, depth=1, rng=random.Random(5))
        assert a == b

    def test_depth_zero_still_picks_move(self, initial_state):
        """深さ0でもルートの手は1手読んで選ぶ"""
        move = MinimaxAI(depth=0, seed=0).best_move(initial_state)
        assert move is not None

    def test_negative_depth_rejected(self):
        with pytest.raises(ValueError):
            MinimaxAI(depth=-1)

    def test_search_does_not_mutate_state(self, initial_state):
        board = initial_state.board
        MinimaxAI(depth=2, seed=0).best_move(initial_state)
        assert initial_state.board == board
        assert initial_state.current_player == Player.WHITE


class TestPlay:
    """AIが手を指す処理のテストクラス"""

    def test_play_only_on_own_turn(self, initial_state):
        """黒の手番でなければ何もしない"""
        ai = MinimaxAI(depth=1, seed=0)
        assert ai.play(initial_state) is initial_state

    def test_play_applies_move(self, make_state):
        state = make_state(BLACK_CAPTURE_ROWS, current_player=Player.BLACK)
        after = MinimaxAI(depth=1, seed=0).play(state)

        assert after.current_player == Player.WHITE
        assert after.captured_black == 1

    def test_play_without_moves_returns_state(self, make_state):
        state = make_state(STUCK_ROWS, current_player=Player.BLACK)
        assert MinimaxAI(depth=1, seed=0).play(state) is state
