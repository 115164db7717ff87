"""
オストルのゲームエンジン - パッケージ初期化
"""

from .piece import Player, Cell, Direction, ALL_DIRECTIONS
from .board import Board, BOARD_SIZE, VISIBLE_SIZE
from .game_state import GameState, WIN_CAPTURES
from .move import Move, MoveStep, StepType
from .rules import Rules, ScanResult, StopKind
from .errors import OstleError, IllegalMoveError, InvariantViolationError
from .initial_setup import create_initial_state

__all__ = [
    'Player',
    'Cell',
    'Direction',
    'ALL_DIRECTIONS',
    'Board',
    'BOARD_SIZE',
    'VISIBLE_SIZE',
    'GameState',
    'WIN_CAPTURES',
    'Move',
    'MoveStep',
    'StepType',
    'Rules',
    'ScanResult',
    'StopKind',
    'OstleError',
    'IllegalMoveError',
    'InvariantViolationError',
    'create_initial_state',
]
