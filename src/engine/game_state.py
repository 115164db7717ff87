"""
オストルのゲーム状態を保持するモジュール

GameState は不変の値として扱い、手を指すたびに新しいインスタンスへ置き換える。
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .board import Board
from .errors import InvariantViolationError
from .piece import Cell, Player

# 勝利に必要な捕獲数
WIN_CAPTURES = 2


@dataclass(frozen=True)
class GameState:
    """ゲームの状態を保持するクラス"""
    board: Board
    white_pieces: Tuple[int, ...]
    black_pieces: Tuple[int, ...]
    hole: int
    current_player: Player = Player.WHITE
    captured_white: int = 0   # 白が獲得した捕獲数
    captured_black: int = 0   # 黒が獲得した捕獲数
    prev_board: Optional[Board] = None  # 直前の盤面（同形反復の判定用）

    @classmethod
    def from_board(
        cls,
        board: Board,
        current_player: Player = Player.WHITE,
        captured_white: int = 0,
        captured_black: int = 0,
        prev_board: Optional[Board] = None
    ) -> 'GameState':
        """盤面から駒位置のキャッシュを組み立てて状態を作成"""
        holes = board.indices_of(Cell.HOLE)
        if len(holes) != 1:
            raise InvariantViolationError(
                "Board must contain exactly one hole",
                context={"holes": holes},
            )
        return cls(
            board=board,
            white_pieces=tuple(board.indices_of(Cell.WHITE)),
            black_pieces=tuple(board.indices_of(Cell.BLACK)),
            hole=holes[0],
            current_player=current_player,
            captured_white=captured_white,
            captured_black=captured_black,
            prev_board=prev_board,
        )

    def pieces(self, player: Player) -> Tuple[int, ...]:
        """指定プレイヤーの駒のインデックス"""
        return self.white_pieces if player == Player.WHITE else self.black_pieces

    def captures(self, player: Player) -> int:
        """指定プレイヤーが獲得した捕獲数"""
        return self.captured_white if player == Player.WHITE else self.captured_black

    def with_current_player(self, player: Player) -> 'GameState':
        """手番だけを差し替えた状態を返す"""
        if player == self.current_player:
            return self
        return replace(self, current_player=player)

    def winner(self) -> Optional[Player]:
        """先に WIN_CAPTURES に達したプレイヤー"""
        if self.captured_white >= WIN_CAPTURES:
            return Player.WHITE
        if self.captured_black >= WIN_CAPTURES:
            return Player.BLACK
        return None

    def is_terminal(self) -> bool:
        return self.winner() is not None

    def validate(self):
        """
        不変条件を検証する
        - 駒位置のキャッシュが盤面と一致する
        - 穴はちょうど1つで、駒と重ならない
        - 捕獲数は0以上
        - 直前の盤面は同じ大きさ
        """
        board = self.board
        if tuple(board.indices_of(Cell.WHITE)) != tuple(sorted(self.white_pieces)):
            raise InvariantViolationError(
                "White piece cache out of sync with board",
                context={"cache": self.white_pieces},
            )
        if tuple(board.indices_of(Cell.BLACK)) != tuple(sorted(self.black_pieces)):
            raise InvariantViolationError(
                "Black piece cache out of sync with board",
                context={"cache": self.black_pieces},
            )
        if len(set(self.white_pieces)) != len(self.white_pieces) or \
                len(set(self.black_pieces)) != len(self.black_pieces):
            raise InvariantViolationError("Duplicate index in piece cache")
        if board.indices_of(Cell.HOLE) != [self.hole]:
            raise InvariantViolationError(
                "Hole index out of sync with board",
                context={"hole": self.hole},
            )
        if self.captured_white < 0 or self.captured_black < 0:
            raise InvariantViolationError("Negative capture count")
        if self.prev_board is not None and len(self.prev_board) != len(board):
            raise InvariantViolationError("Previous board has a different size")

    def to_dict(self) -> dict:
        """ゲーム状態を辞書形式に変換（API用）"""
        winner = self.winner()
        return {
            "board": self.board.to_list(),
            "size": self.board.size,
            "visible_size": self.board.visible_size,
            "current_player": self.current_player.name,
            "captured": {
                "WHITE": self.captured_white,
                "BLACK": self.captured_black,
            },
            "white_pieces": list(self.white_pieces),
            "black_pieces": list(self.black_pieces),
            "hole": self.hole,
            "winner": winner.name if winner else None,
        }
