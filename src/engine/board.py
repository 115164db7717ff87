"""
オストルの盤面を管理するモジュール

7x7の盤面を1次元のインデックス（row * BOARD_SIZE + col）で扱う。
中央の5x5が実際に駒を置ける領域で、その外側の1周が捕獲リングになる。
"""

from typing import Iterable, List, Optional, Tuple
from .piece import Cell, Direction

# 盤面サイズ（リングを含む）
BOARD_SIZE = 7
# 駒を置ける内側の領域のサイズ
VISIBLE_SIZE = 5


class Board:
    """オストルのゲームボードを表すクラス（不変）"""

    __slots__ = ('size', 'visible_size', 'cells')

    def __init__(
        self,
        cells: Optional[Iterable[Cell]] = None,
        size: int = BOARD_SIZE,
        visible_size: int = VISIBLE_SIZE
    ):
        self.size = size
        self.visible_size = visible_size
        if cells is None:
            self.cells: Tuple[Cell, ...] = (Cell.EMPTY,) * (size * size)
        else:
            self.cells = tuple(cells)
        if len(self.cells) != size * size:
            raise ValueError(
                f"Board needs {size * size} cells, got {len(self.cells)}"
            )

    def __len__(self):
        return len(self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self.cells == other.cells

    def __hash__(self):
        return hash((self.size, self.cells))

    @property
    def ring_offset(self) -> int:
        """リングの幅"""
        return (self.size - self.visible_size) // 2

    @property
    def center_index(self) -> int:
        """盤面中央のインデックス"""
        return (self.size * self.size) // 2

    def position_of(self, index: int) -> Tuple[int, int]:
        """インデックスから(行, 列)へ変換"""
        return divmod(index, self.size)

    def is_valid_position(self, position: Tuple[int, int]) -> bool:
        """位置が盤面内か確認"""
        row, col = position
        return 0 <= row < self.size and 0 <= col < self.size

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < self.size * self.size

    def is_in_ring(self, index: int) -> bool:
        """インデックスが捕獲リング（内側5x5の外）にあるか確認"""
        row, col = self.position_of(index)
        offset = self.ring_offset
        inner_row = row - offset
        inner_col = col - offset
        in_visible = (
            0 <= inner_row < self.visible_size and
            0 <= inner_col < self.visible_size
        )
        return not in_visible

    def next_index(self, index: int, direction: Direction) -> Optional[int]:
        """
        指定方向に1マス進んだインデックスを返す
        盤外に出る場合はNone（左右の移動で行をまたがない）
        """
        row, col = self.position_of(index)
        dr, dc = direction.delta
        target = (row + dr, col + dc)
        if not self.is_valid_position(target):
            return None
        return target[0] * self.size + target[1]

    def manhattan_distance(self, a: int, b: int) -> int:
        r1, c1 = self.position_of(a)
        r2, c2 = self.position_of(b)
        return abs(r1 - r2) + abs(c1 - c2)

    def indices_of(self, cell: Cell) -> List[int]:
        """指定した値のマスのインデックスを昇順で返す"""
        return [i for i, c in enumerate(self.cells) if c == cell]

    def __str__(self):
        """盤面の文字列表現を返す（リングは'.'で表示）"""
        lines = []
        for row in range(self.size):
            chars = []
            for col in range(self.size):
                index = row * self.size + col
                cell = self.cells[index]
                if cell == Cell.EMPTY and self.is_in_ring(index):
                    chars.append('.')
                else:
                    chars.append(cell.value)
            lines.append(' '.join(chars))
        return "\n".join(lines)

    def __repr__(self):
        return f"Board(size={self.size}, cells={''.join(c.value for c in self.cells)!r})"

    def to_list(self) -> List[str]:
        """盤面を文字のリストに変換（API用）"""
        return [cell.value for cell in self.cells]

    @staticmethod
    def from_string(text: str, size: int = BOARD_SIZE, visible_size: int = VISIBLE_SIZE) -> 'Board':
        """
        文字列から盤面を作成する（テスト・デバッグ用）
        空白と改行は無視し、'.'と'_'は空マスとして扱う
        """
        chars = [ch for ch in text if not ch.isspace()]
        mapping = {'.': Cell.EMPTY, '_': Cell.EMPTY, 'W': Cell.WHITE, 'B': Cell.BLACK, 'H': Cell.HOLE}
        try:
            cells = [mapping[ch] for ch in chars]
        except KeyError as e:
            raise ValueError(f"Unknown cell character: {e}") from None
        return Board(cells, size, visible_size)
