"""
統合テスト: ゲームフロー全体のテスト
初期配置から複数手のゲーム進行を確認
"""

import random

from src.ai import MinimaxAI
from src.engine import Cell, Direction, Move, Player, Rules, create_initial_state


class TestGameFlow:
    """ゲーム全体の流れをテストするクラス"""

    def test_initial_setup_loads_correctly(self, initial_state):
        """初期配置が正しく読み込まれることを確認"""
        assert initial_state.white_pieces == (8, 9, 10, 11, 12)
        assert initial_state.black_pieces == (36, 37, 38, 39, 40)
        assert initial_state.hole == 24
        assert initial_state.board[24] == Cell.HOLE
        assert initial_state.current_player == Player.WHITE
        assert initial_state.captured_white == 0 and initial_state.captured_black == 0
        assert initial_state.prev_board is None
        initial_state.validate()

    def test_hole_move_from_start(self, initial_state):
        """初手で穴を隣の空マスへ動かしても駒数・捕獲数は変わらない"""
        for direction in Direction:
            state = Rules.apply_move(initial_state, Move(24, direction))

            assert state is not initial_state, f"穴を{direction}へ動かせません"
            assert state.hole != 24
            assert len(state.white_pieces) == 5 and len(state.black_pieces) == 5
            assert state.captured_white == 0 and state.captured_black == 0

    def test_turn_alternation(self, initial_state):
        """手番が正しく交代することを確認"""
        state = initial_state
        rng = random.Random(0)

        for turn in range(10):
            moves = Rules.list_legal_moves(state)
            if not moves or state.is_terminal():
                break

            expected = state.current_player.opponent
            state = Rules.apply_move(state, rng.choice(moves))
            assert state.current_player == expected, f"{turn + 1}手目で手番が交代していません"

    def test_game_does_not_crash_after_many_moves(self):
        """多数の手を進めてもクラッシュしないことを確認"""
        state = create_initial_state()
        rng = random.Random(1234)
        max_moves = 200

        for turn in range(max_moves):
            is_over, winner = Rules.is_game_over(state)
            if is_over:
                print(f"{turn}手でゲーム終了。勝者: {winner.name}")
                return

            moves = Rules.list_legal_moves(state)
            if not moves:
                print(f"{turn + 1}手目で合法手がなくなりました")
                return

            state = Rules.apply_move(state, rng.choice(moves))
            state.validate()

        print(f"{max_moves}手まで正常に進行しました")

    def test_human_vs_ai_game(self):
        """白はランダム、黒はAIで対局を進められる"""
        state = create_initial_state()
        rng = random.Random(7)
        ai = MinimaxAI(depth=1, seed=7)

        for _ in range(30):
            if state.is_terminal():
                break
            if state.current_player == Player.WHITE:
                moves = Rules.list_legal_moves(state)
                if not moves:
                    break
                state = Rules.apply_move(state, rng.choice(moves))
            else:
                after = ai.play(state)
                if after is state:
                    break
                state = after

        state.validate()
        assert state.captured_white + state.captured_black + \
            len(state.white_pieces) + len(state.black_pieces) == 10
