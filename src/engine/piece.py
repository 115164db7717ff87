"""
オストルの駒・マス・方向を定義するモジュール
"""

from enum import Enum
from typing import Optional, Tuple


class Player(Enum):
    """プレイヤーの定義"""
    WHITE = 'W'  # 先手（白）
    BLACK = 'B'  # 後手（黒）- AI側

    @property
    def opponent(self):
        """相手プレイヤーを返す"""
        return Player.BLACK if self == Player.WHITE else Player.WHITE

    @property
    def cell(self) -> 'Cell':
        """このプレイヤーの駒を表すマスの値"""
        return Cell.WHITE if self == Player.WHITE else Cell.BLACK


class Cell(Enum):
    """盤面の1マスの状態"""
    EMPTY = ' '
    WHITE = 'W'
    BLACK = 'B'
    HOLE = 'H'   # 穴（盤上に常に1つ）

    @property
    def owner(self) -> Optional[Player]:
        """駒の所有者（空マス・穴はNone）"""
        if self == Cell.WHITE:
            return Player.WHITE
        if self == Cell.BLACK:
            return Player.BLACK
        return None

    def is_piece(self) -> bool:
        return self in (Cell.WHITE, Cell.BLACK)

    def is_movable(self) -> bool:
        """駒または穴なら動かす対象になり得る"""
        return self != Cell.EMPTY


class Direction(Enum):
    """押し出し方向"""
    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'

    @property
    def delta(self) -> Tuple[int, int]:
        """(行, 列)の移動量"""
        return DIRECTION_DELTAS[self]


# 方向ごとの移動量（行, 列）
DIRECTION_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

# 合法手を調べる方向の順序
ALL_DIRECTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)
