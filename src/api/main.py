"""
オストル FastAPI サーバ
ゲームの状態管理とAI推論のエンドポイントを提供
"""

import logging
import uuid
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from ..engine import (
    Direction, GameState, IllegalMoveError, Move, Player, Rules, create_initial_state
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="オストル API",
    description="オストルのバックエンドAPI",
    version="1.0.0"
)

# CORS設定（フロントエンドからのアクセスを許可）
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 進行中のゲームを保持する辞書
games: Dict[str, 'GameSession'] = {}


class GameSession:
    """1局分のゲームを管理するクラス（状態そのものは不変値で差し替える）"""

    def __init__(self, game_id: str):
        self.game_id = game_id
        self.state: GameState = create_initial_state()
        self.move_history: List[Move] = []

    @property
    def game_over(self) -> bool:
        return self.state.is_terminal()

    def to_dict(self) -> dict:
        """ゲーム状態を辞書形式に変換"""
        data = self.state.to_dict()
        data["game_id"] = self.game_id
        data["move_count"] = len(self.move_history)
        data["game_over"] = self.game_over
        return data


def legal_moves_to_dict(state: GameState) -> Dict[str, List[str]]:
    """合法手を {インデックス: [方向]} の形に変換（JSONのキーは文字列）"""
    legal_moves = Rules.get_legal_moves(state)
    return {
        str(index): sorted(direction.value for direction in directions)
        for index, directions in sorted(legal_moves.items())
    }


# Pydanticモデル（リクエスト/レスポンス用）

class NewGameResponse(BaseModel):
    game_id: str
    message: str
    game_state: dict


class MoveRequest(BaseModel):
    index: int
    direction: str  # up, down, left, right
    confirm_self_drop: bool = False  # 自分の駒を落とす手は確認済みのときだけ実行


class MoveResponse(BaseModel):
    success: bool
    message: str
    game_state: dict
    steps: Optional[List[dict]] = None  # アニメーション用の分解ステップ
    requires_confirmation: bool = False
    legal_moves: Optional[Dict[str, List[str]]] = None


class PredictRequest(BaseModel):
    difficulty: str = 'medium'  # easy, medium, hard, expert


class PredictResponse(BaseModel):
    move: dict
    evaluation: float
    game_state: dict
    ai_info: Optional[dict] = None


def get_session(game_id: str) -> GameSession:
    if game_id not in games:
        raise HTTPException(status_code=404, detail="ゲームが見つかりません")
    return games[game_id]


def parse_direction(value: str) -> Direction:
    try:
        return Direction(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"無効な方向: {value}")


def play_move(session: GameSession, move: Move) -> List[dict]:
    """手を適用して履歴に追加し、アニメーション用のステップを返す"""
    steps = Rules.build_steps(session.state, move.index, move.direction) or []
    try:
        session.state = Rules.apply_move_checked(session.state, move)
    except IllegalMoveError as e:
        logger.warning("Rejected move %s in game %s: %s", move, session.game_id, e)
        raise
    session.move_history.append(move)
    return [step.to_dict() for step in steps]


# エンドポイント

@app.get("/api")
async def root():
    """APIルート"""
    return {
        "message": "オストル API へようこそ",
        "version": "1.0.0",
        "endpoints": [
            "/new_game",
            "/get_game/{game_id}",
            "/get_legal_moves/{game_id}",
            "/apply_move/{game_id}",
            "/predict/{game_id}",
            "/ai_move/{game_id}",
            "/delete_game/{game_id}",
        ]
    }


@app.post("/new_game", response_model=NewGameResponse)
async def new_game():
    """
    新しいゲームを開始する
    白が先手、黒がAI側
    """
    game_id = str(uuid.uuid4())
    session = GameSession(game_id)
    games[game_id] = session

    return NewGameResponse(
        game_id=game_id,
        message="新しいゲームを開始しました",
        game_state=session.to_dict()
    )


@app.get("/get_game/{game_id}")
async def get_game(game_id: str):
    """ゲームの状態を取得"""
    return get_session(game_id).to_dict()


@app.get("/get_legal_moves/{game_id}")
async def get_legal_moves(game_id: str):
    """現在のプレイヤーの合法手を取得"""
    session = get_session(game_id)

    if session.game_over:
        return {"legal_moves": {}, "message": "ゲームは終了しています"}

    legal_moves = legal_moves_to_dict(session.state)
    return {
        "legal_moves": legal_moves,
        "count": sum(len(d) for d in legal_moves.values()),
        "current_player": session.state.current_player.name
    }


@app.post("/apply_move/{game_id}", response_model=MoveResponse)
async def apply_move(game_id: str, move_request: MoveRequest):
    """
    手を適用する
    自分の駒を落とす手は confirm_self_drop が true のときだけ実行する
    """
    session = get_session(game_id)

    if session.game_over:
        raise HTTPException(status_code=400, detail="ゲームは既に終了しています")

    move = Move(move_request.index, parse_direction(move_request.direction))

    if (not move_request.confirm_self_drop and
            Rules.is_legal(session.state, move.index, move.direction) and
            Rules.would_self_drop(session.state, move.index, move.direction)):
        return MoveResponse(
            success=False,
            message="自分の駒が落ちます。もう一度同じ手を確認付きで送ると実行します",
            game_state=session.to_dict(),
            requires_confirmation=True
        )

    try:
        steps = play_move(session, move)
    except IllegalMoveError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())

    legal_moves = None
    winner = session.state.winner()
    if winner:
        message = f"{winner.name}の勝利です！"
    else:
        message = "手を適用しました"
        legal_moves = legal_moves_to_dict(session.state)

    return MoveResponse(
        success=True,
        message=message,
        game_state=session.to_dict(),
        steps=steps,
        legal_moves=legal_moves
    )


@app.post("/predict/{game_id}", response_model=PredictResponse)
def predict(game_id: str, request: PredictRequest):
    """
    AIが次の手を予測する（盤面は変えない）

    difficulty: 'easy', 'medium', 'hard', 'expert'
    """
    session = get_session(game_id)

    if session.game_over:
        raise HTTPException(status_code=400, detail="ゲームは終了しています")

    from .ai_player import get_ai
    ai = get_ai()

    try:
        best_move, evaluation = ai.get_best_move(session.state, request.difficulty)
    except ValueError:
        raise HTTPException(status_code=400, detail="合法手がありません")

    return PredictResponse(
        move=best_move.to_dict(),
        evaluation=evaluation,
        game_state=session.to_dict(),
        ai_info={"difficulty": request.difficulty, "seed": ai.seed}
    )


@app.post("/ai_move/{game_id}", response_model=MoveResponse)
def ai_move(game_id: str, request: PredictRequest):
    """AI（黒）の手番なら、AIの手を適用する"""
    session = get_session(game_id)

    if session.game_over:
        raise HTTPException(status_code=400, detail="ゲームは終了しています")
    if session.state.current_player != Player.BLACK:
        raise HTTPException(status_code=400, detail="AIの手番ではありません")

    from .ai_player import get_ai
    ai = get_ai()

    try:
        best_move, _ = ai.get_best_move(session.state, request.difficulty)
    except ValueError:
        return MoveResponse(
            success=False,
            message="AIに合法手がありません",
            game_state=session.to_dict()
        )

    steps = play_move(session, best_move)
    winner = session.state.winner()
    return MoveResponse(
        success=True,
        message=f"{winner.name}の勝利です！" if winner else f"AI: {best_move}",
        game_state=session.to_dict(),
        steps=steps,
        legal_moves=None if winner else legal_moves_to_dict(session.state)
    )


@app.delete("/delete_game/{game_id}")
async def delete_game(game_id: str):
    """ゲームを削除"""
    get_session(game_id)
    del games[game_id]
    return {"message": "ゲームを削除しました"}


@app.get("/ai/evaluate/{game_id}")
async def evaluate_position(game_id: str):
    """現在の局面を評価"""
    session = get_session(game_id)

    from .ai_player import get_ai
    evaluation = get_ai().evaluate_position(session.state)

    return {
        "evaluation": evaluation,
        "current_player": session.state.current_player.name,
        "interpretation": "黒有利" if evaluation > 0 else "白有利" if evaluation < 0 else "互角"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
