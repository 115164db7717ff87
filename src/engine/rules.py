"""
オストルのルール判定を行うモジュール

連なった駒の列（チェーン）の走査、合法手判定、手の適用、捕獲の得点計算、
直前盤面への回帰禁止を扱う。対人戦とAIの探索は同じ関数を通して盤面を進める。
"""

from dataclasses import replace
from enum import Enum, auto
from typing import Dict, List, NamedTuple, Optional, Set, Tuple

from .board import Board
from .errors import IllegalMoveError, InvariantViolationError
from .game_state import GameState
from .move import Move, MoveStep, StepType
from .piece import ALL_DIRECTIONS, Cell, Direction, Player


class StopKind(Enum):
    """チェーン走査が止まった理由"""
    OFFBOARD = auto()  # 盤外に出た
    RING = auto()      # 捕獲リングに達した
    EMPTY = auto()     # 空マスに達した
    HOLE = auto()      # 穴に達した


class ScanResult(NamedTuple):
    """チェーン走査の結果"""
    chain: Tuple[int, ...]       # 動かす駒から始まる連続した駒のインデックス
    stop_kind: StopKind
    stop_index: Optional[int]    # 止まったマス（盤外ならNone）

    @property
    def tail(self) -> int:
        return self.chain[-1]


class Rules:
    """オストルのルールを管理するクラス"""

    # ------------------------------------------------------------------
    # チェーン走査
    # ------------------------------------------------------------------

    @staticmethod
    def scan_chain(state: GameState, start_index: int, direction: Direction) -> ScanResult:
        """
        start_index から direction へ連続する駒を走査する
        リングのマス・空マス・穴はチェーンに含めない
        """
        board = state.board
        chain = [start_index]
        current = board.next_index(start_index, direction)
        while True:
            if current is None:
                return ScanResult(tuple(chain), StopKind.OFFBOARD, None)
            if board.is_in_ring(current):
                return ScanResult(tuple(chain), StopKind.RING, current)
            cell = board[current]
            if cell == Cell.EMPTY:
                return ScanResult(tuple(chain), StopKind.EMPTY, current)
            if cell == Cell.HOLE:
                return ScanResult(tuple(chain), StopKind.HOLE, current)
            chain.append(current)
            current = board.next_index(current, direction)

    # ------------------------------------------------------------------
    # 手の分解
    # ------------------------------------------------------------------

    @staticmethod
    def build_steps(state: GameState, index: int, direction: Direction) -> Optional[List[MoveStep]]:
        """
        1手を基本操作（SLIDE / CLEAR / CAPTURE）の列に分解する
        手の適用はこの列を再生して行うので、逐次表示と一括適用の結果は一致する

        穴が駒を押す・穴で捕獲するなど、形の上で成立しない手はNoneを返す
        （手番や同形反復はここでは見ない）
        """
        board = state.board
        if not board.is_valid_index(index):
            return None
        mover = board[index]
        if not mover.is_movable():
            return None

        scan = Rules.scan_chain(state, index, direction)
        chain = scan.chain
        steps: List[MoveStep] = []

        if scan.stop_kind == StopKind.EMPTY:
            # 穴は隣の空マスへ動くだけで、駒を押せない
            if mover == Cell.HOLE and len(chain) > 1:
                return None
            # 先頭の駒から順に空きへ詰める
            destination = scan.stop_index
            for src in reversed(chain):
                steps.append(MoveStep.create_slide(src, destination))
                destination = src
            return steps

        # ここから先は捕獲が起きる手
        if mover == Cell.HOLE:
            return None
        tail_cell = board[scan.tail]
        if not tail_cell.is_piece():
            return None

        credit_to = Rules._credit_for(state, mover, tail_cell)
        steps.append(MoveStep.create_capture(scan.tail, credit_to))

        if scan.stop_kind in (StopKind.RING, StopKind.OFFBOARD):
            for i in range(len(chain) - 1, 0, -1):
                steps.append(MoveStep.create_slide(chain[i - 1], chain[i]))
        else:
            # 穴に落ちた駒の後ろは、進行方向の次のマスへ詰める
            for i in range(len(chain) - 2, -1, -1):
                src = chain[i]
                dst = board.next_index(src, direction)
                if dst is None:
                    return None
                steps.append(MoveStep.create_slide(src, dst))
        steps.append(MoveStep.create_clear(chain[0]))
        return steps

    @staticmethod
    def _credit_for(state: GameState, mover: Cell, captured: Cell) -> Player:
        """
        捕獲の得点を受けるプレイヤー
        自分の駒を落とした場合（自己落ち）は相手の得点になる
        """
        if captured == mover:
            return state.current_player.opponent
        return state.current_player

    @staticmethod
    def _play_steps(cells: List[Cell], steps: List[MoveStep]) -> Dict[Player, int]:
        """基本操作の列をマスのリストへ直接適用し、獲得した捕獲数を返す"""
        gains = {Player.WHITE: 0, Player.BLACK: 0}
        for step in steps:
            if step.step_type == StepType.SLIDE:
                if cells[step.src] == Cell.EMPTY or cells[step.dst] != Cell.EMPTY:
                    raise InvariantViolationError(
                        "Slide must move a piece into an empty cell",
                        context={"src": step.src, "dst": step.dst},
                    )
                cells[step.dst] = cells[step.src]
                cells[step.src] = Cell.EMPTY
            elif step.step_type == StepType.CLEAR:
                if cells[step.src] == Cell.HOLE:
                    raise InvariantViolationError(
                        "The hole cannot be cleared",
                        context={"index": step.src},
                    )
                cells[step.src] = Cell.EMPTY
            elif step.step_type == StepType.CAPTURE:
                captured = cells[step.src]
                if not captured.is_piece():
                    raise InvariantViolationError(
                        "Only pieces can be captured",
                        context={"index": step.src, "cell": captured.value},
                    )
                cells[step.src] = Cell.EMPTY
                # 自分の駒で得点することはない
                if captured.owner != step.credit_to:
                    gains[step.credit_to] += 1
        return gains

    @staticmethod
    def apply_step(state: GameState, step: MoveStep) -> GameState:
        """
        基本操作を1つだけ適用した状態を返す（表示用の途中経過）
        手番と直前の盤面は変えない。成立しない操作なら状態をそのまま返す
        """
        board = state.board
        if not board.is_valid_index(step.src):
            return state
        if step.dst is None:
            if step.step_type == StepType.SLIDE:
                return state
        elif not board.is_valid_index(step.dst):
            return state
        cells = list(board.cells)
        try:
            gains = Rules._play_steps(cells, [step])
        except InvariantViolationError:
            return state
        return GameState.from_board(
            Board(cells, board.size, board.visible_size),
            current_player=state.current_player,
            captured_white=state.captured_white + gains[Player.WHITE],
            captured_black=state.captured_black + gains[Player.BLACK],
            prev_board=state.prev_board,
        )

    @staticmethod
    def finalize_steps(original: GameState, replayed: GameState) -> GameState:
        """
        apply_step で再生し終えた状態を確定させる
        直前の盤面を記録し、手番を交代する
        """
        return replace(
            replayed,
            prev_board=original.board,
            current_player=original.current_player.opponent,
        )

    # ------------------------------------------------------------------
    # 合法手判定と適用
    # ------------------------------------------------------------------

    @staticmethod
    def _try_move(state: GameState, index: int, direction: Direction) -> Tuple[Optional[GameState], str]:
        """
        手を試しに適用する
        返り値: (適用後の状態, 理由)。非合法なら状態はNoneで、理由に説明が入る
        """
        board = state.board
        if not board.is_valid_index(index):
            return None, "index is outside the board"
        mover = board[index]
        if not mover.is_movable():
            return None, "no piece or hole at index"
        if mover.is_piece() and mover.owner != state.current_player:
            return None, "piece belongs to the opponent"

        steps = Rules.build_steps(state, index, direction)
        if steps is None:
            if mover == Cell.HOLE:
                return None, "hole can only move into an adjacent empty cell"
            return None, "move cannot be resolved"

        cells = list(board.cells)
        gains = Rules._play_steps(cells, steps)
        new_board = Board(cells, board.size, board.visible_size)

        # 直前の盤面への完全な回帰は禁止
        if state.prev_board is not None and new_board == state.prev_board:
            return None, "move repeats the previous board"

        next_state = GameState.from_board(
            new_board,
            current_player=state.current_player.opponent,
            captured_white=state.captured_white + gains[Player.WHITE],
            captured_black=state.captured_black + gains[Player.BLACK],
            prev_board=board,
        )
        if __debug__:
            next_state.validate()
        return next_state, ""

    @staticmethod
    def is_legal(state: GameState, index: int, direction: Direction) -> bool:
        """手番のプレイヤーが index の駒（または穴）を direction へ動かせるか"""
        next_state, _ = Rules._try_move(state, index, direction)
        return next_state is not None

    @staticmethod
    def apply_move(state: GameState, move: Move) -> GameState:
        """
        手を適用した新しい状態を返す
        非合法な手なら同じ状態をそのまま返す（呼び出し側は `is` で判定できる）
        """
        next_state, _ = Rules._try_move(state, move.index, move.direction)
        if next_state is None:
            return state
        return next_state

    @staticmethod
    def apply_move_checked(state: GameState, move: Move) -> GameState:
        """apply_move と同じだが、非合法な手では IllegalMoveError を送出する"""
        next_state, reason = Rules._try_move(state, move.index, move.direction)
        if next_state is None:
            raise IllegalMoveError(
                reason,
                context={
                    "index": move.index,
                    "direction": move.direction.value,
                    "player": state.current_player.name,
                },
            )
        return next_state

    @staticmethod
    def would_self_drop(state: GameState, index: int, direction: Direction) -> bool:
        """
        この手で自分の駒がリング外か穴に落ちるか
        UI側で確認を求めるために使う
        """
        board = state.board
        if not board.is_valid_index(index):
            return False
        mover = board[index]
        if not mover.is_piece():
            return False
        scan = Rules.scan_chain(state, index, direction)
        if scan.stop_kind == StopKind.EMPTY:
            return False
        return board[scan.tail] == mover

    # ------------------------------------------------------------------
    # 合法手の列挙
    # ------------------------------------------------------------------

    @staticmethod
    def _candidate_indices(state: GameState, player: Player) -> List[int]:
        """指定プレイヤーが動かせる候補（自分の駒と穴）を重複なしで返す"""
        candidates = []
        seen = set()
        for index in state.pieces(player) + (state.hole,):
            if index in seen:
                continue
            seen.add(index)
            if state.board[index].is_movable():
                candidates.append(index)
        return candidates

    @staticmethod
    def legal_successors(state: GameState, player: Optional[Player] = None) -> List[Tuple[Move, GameState]]:
        """
        指定プレイヤーの合法手と、それぞれを適用した後の状態を列挙する
        player が手番でない場合は、そのプレイヤーの手番とみなして判定する
        """
        if player is None:
            player = state.current_player
        as_player = state.with_current_player(player)
        successors = []
        for index in Rules._candidate_indices(as_player, player):
            for direction in ALL_DIRECTIONS:
                next_state, _ = Rules._try_move(as_player, index, direction)
                if next_state is not None:
                    successors.append((Move(index, direction), next_state))
        return successors

    @staticmethod
    def list_legal_moves(state: GameState, player: Optional[Player] = None) -> List[Move]:
        """指定プレイヤーの合法手をリストで取得"""
        return [move for move, _ in Rules.legal_successors(state, player)]

    @staticmethod
    def count_legal_moves(state: GameState, player: Optional[Player] = None) -> int:
        """
        指定プレイヤーの合法手の数
        評価関数の可動性の項で葉ごとに呼ばれるので、適用後の状態は作らずに
        マスのリスト上で手を再生して直前の盤面と比べるだけにする
        """
        if player is None:
            player = state.current_player
        board = state.board
        prev_cells = state.prev_board.cells if state.prev_board is not None else None
        count = 0
        for index in Rules._candidate_indices(state, player):
            for direction in ALL_DIRECTIONS:
                steps = Rules.build_steps(state, index, direction)
                if steps is None:
                    continue
                if prev_cells is not None:
                    cells = list(board.cells)
                    Rules._play_steps(cells, steps)
                    if tuple(cells) == prev_cells:
                        continue
                count += 1
        return count

    @staticmethod
    def get_legal_moves(state: GameState, player: Optional[Player] = None) -> Dict[int, Set[Direction]]:
        """
        指定プレイヤーの合法手を {インデックス: 方向の集合} で取得
        動かせる方向が1つもないインデックスは含めない
        """
        legal_moves: Dict[int, Set[Direction]] = {}
        for move in Rules.list_legal_moves(state, player):
            legal_moves.setdefault(move.index, set()).add(move.direction)
        return legal_moves

    # ------------------------------------------------------------------
    # 終局判定
    # ------------------------------------------------------------------

    @staticmethod
    def get_winner(state: GameState) -> Optional[Player]:
        """先に規定数を捕獲したプレイヤー（いなければNone）"""
        return state.winner()

    @staticmethod
    def is_game_over(state: GameState) -> Tuple[bool, Optional[Player]]:
        """
        ゲームが終了したか確認
        返り値: (終了フラグ, 勝者)
        """
        winner = state.winner()
        return winner is not None, winner
