"""
オストル - ルールエンジンとAI
"""
