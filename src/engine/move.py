"""
オストルの手（Move）と、その分解ステップを表現するモジュール
"""

from enum import Enum, auto
from typing import Optional
from .piece import Direction, Player


class Move:
    """オストルの一手を表すクラス（動かす駒または穴のインデックスと方向）"""

    __slots__ = ('index', 'direction')

    def __init__(self, index: int, direction: Direction):
        self.index = index
        self.direction = direction

    def __eq__(self, other):
        if not isinstance(other, Move):
            return NotImplemented
        return self.index == other.index and self.direction == other.direction

    def __hash__(self):
        return hash((self.index, self.direction))

    def __str__(self):
        return f"{self.index} {self.direction.value}"

    def __repr__(self):
        return f"Move(index={self.index}, direction={self.direction.name})"

    def to_dict(self) -> dict:
        """手を辞書形式に変換（API用）"""
        return {
            "index": self.index,
            "direction": self.direction.value,
        }

    @staticmethod
    def from_dict(data: dict) -> 'Move':
        """辞書形式から手を復元（API用）"""
        return Move(
            index=int(data["index"]),
            direction=Direction(data["direction"]),
        )


class StepType(Enum):
    """1手を分解したときの基本操作の種類"""
    SLIDE = auto()    # src から dst へ1マス移動
    CLEAR = auto()    # 空いたマスを空にする
    CAPTURE = auto()  # 駒を取り除き、得点を与える


class MoveStep:
    """
    1手を構成する基本操作
    アニメーション表示のために1手を逐次再生する用途で使う
    """

    __slots__ = ('step_type', 'src', 'dst', 'credit_to')

    def __init__(
        self,
        step_type: StepType,
        src: int,
        dst: Optional[int] = None,
        credit_to: Optional[Player] = None
    ):
        self.step_type = step_type
        self.src = src              # 移動元（CAPTUREでは取られる駒の位置）
        self.dst = dst              # 移動先（SLIDEのみ）
        self.credit_to = credit_to  # 得点を得るプレイヤー（CAPTUREのみ）

    def __eq__(self, other):
        if not isinstance(other, MoveStep):
            return NotImplemented
        return (
            self.step_type == other.step_type and
            self.src == other.src and
            self.dst == other.dst and
            self.credit_to == other.credit_to
        )

    def __hash__(self):
        return hash((self.step_type, self.src, self.dst, self.credit_to))

    def __repr__(self):
        if self.step_type == StepType.SLIDE:
            return f"MoveStep(SLIDE, {self.src} -> {self.dst})"
        if self.step_type == StepType.CAPTURE:
            return f"MoveStep(CAPTURE, at={self.src}, credit={self.credit_to.name})"
        return f"MoveStep(CLEAR, {self.src})"

    def to_dict(self) -> dict:
        """ステップを辞書形式に変換（API用）"""
        return {
            "kind": self.step_type.name,
            "src": self.src,
            "dst": self.dst,
            "credit_to": self.credit_to.name if self.credit_to else None,
        }

    @staticmethod
    def create_slide(src: int, dst: int) -> 'MoveStep':
        return MoveStep(StepType.SLIDE, src, dst=dst)

    @staticmethod
    def create_clear(src: int) -> 'MoveStep':
        return MoveStep(StepType.CLEAR, src)

    @staticmethod
    def create_capture(at: int, credit_to: Player) -> 'MoveStep':
        return MoveStep(StepType.CAPTURE, at, credit_to=credit_to)
