"""
初期盤面の設定とユーティリティ
"""

from typing import List, Tuple

from .board import Board, BOARD_SIZE, VISIBLE_SIZE
from .game_state import GameState
from .piece import Cell, Player


def initial_positions() -> Tuple[List[int], List[int], int]:
    """
    初期配置のインデックスを返す
    白: 内側領域の最上段（2段目）、黒: 内側領域の最下段（6段目）、穴: 盤面中央
    返り値: (白の駒, 黒の駒, 穴)
    """
    offset = (BOARD_SIZE - VISIBLE_SIZE) // 2
    top_row = offset
    bottom_row = offset + VISIBLE_SIZE - 1
    cols = range(offset, offset + VISIBLE_SIZE)

    white = [top_row * BOARD_SIZE + col for col in cols]
    black = [bottom_row * BOARD_SIZE + col for col in cols]
    hole = (BOARD_SIZE * BOARD_SIZE) // 2
    return white, black, hole


def load_initial_board() -> Board:
    """公式の初期盤面を作成する"""
    white, black, hole = initial_positions()
    cells = [Cell.EMPTY] * (BOARD_SIZE * BOARD_SIZE)
    for index in white:
        cells[index] = Cell.WHITE
    for index in black:
        cells[index] = Cell.BLACK
    cells[hole] = Cell.HOLE
    return Board(cells)


def create_initial_state() -> GameState:
    """新しいゲームの状態を作成する（白が先手）"""
    white, black, hole = initial_positions()
    return GameState(
        board=load_initial_board(),
        white_pieces=tuple(white),
        black_pieces=tuple(black),
        hole=hole,
        current_player=Player.WHITE,
    )
