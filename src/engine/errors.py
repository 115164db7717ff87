"""
オストルのエンジンで使う例外クラス
"""

from typing import Any, Dict, Optional


class OstleError(Exception):
    """オストル関連の例外の基底クラス"""
    code: str = "OSTLE_ERROR"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self):
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """例外を辞書形式に変換（API用）"""
        return {
            "code": self.code,
            "message": self.message,
            "context": {k: str(v) for k, v in self.context.items()},
        }


class IllegalMoveError(OstleError):
    """
    ルール上適用できない手
    Rules.apply_move_checked からのみ送出される（通常の apply_move は盤面を変えずに返す）
    """
    code: str = "ILLEGAL_MOVE"


class InvariantViolationError(OstleError):
    """
    ゲーム状態の不変条件が崩れている
    エンジン自身のバグを意味するので回復しない
    """
    code: str = "INVARIANT_VIOLATION"
