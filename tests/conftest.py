"""
pytest共通設定とフィクスチャ
"""

import pytest
import sys
from pathlib import Path

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def _make_state(rows, current_player=None, captured_white=0, captured_black=0, prev_board=None):
    """
    7行の文字列から状態を作成する
    '.' は空マス、'W' / 'B' は駒、'H' は穴（空白は無視）
    """
    from src.engine import Board, GameState, Player
    board = Board.from_string("\n".join(rows))
    return GameState.from_board(
        board,
        current_player=current_player or Player.WHITE,
        captured_white=captured_white,
        captured_black=captured_black,
        prev_board=prev_board,
    )


@pytest.fixture
def initial_state():
    """公式初期配置の状態を提供するフィクスチャ"""
    from src.engine import create_initial_state
    return create_initial_state()


@pytest.fixture
def white_player():
    """白プレイヤーを提供するフィクスチャ"""
    from src.engine import Player
    return Player.WHITE


@pytest.fixture
def black_player():
    """黒プレイヤーを提供するフィクスチャ"""
    from src.engine import Player
    return Player.BLACK


@pytest.fixture
def make_state():
    """盤面の文字列から状態を作る関数を提供するフィクスチャ"""
    return _make_state
