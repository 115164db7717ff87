"""
オストルAI パッケージ
"""

from .evaluator import Evaluator, EvaluationWeights, evaluate
from .minimax import MinimaxAI, DEFAULT_DEPTH, best_move

__all__ = [
    'Evaluator',
    'EvaluationWeights',
    'evaluate',
    'MinimaxAI',
    'DEFAULT_DEPTH',
    'best_move',
]
