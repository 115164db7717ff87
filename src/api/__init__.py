"""
オストル FastAPI サーバ パッケージ
"""
