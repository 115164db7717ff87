#!/usr/bin/env python
"""
オストル 開発サーバ起動スクリプト

環境変数:
    OSTLE_HOST       待ち受けアドレス（既定: 0.0.0.0）
    OSTLE_PORT       ポート番号（既定: 8001）
    OSTLE_LOG_LEVEL  ログレベル（既定: info）
"""

import logging
import os
import sys

# プロジェクトルートをパスに追加
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

from src.api.main import app
import uvicorn

HOST = os.getenv("OSTLE_HOST", "0.0.0.0")
PORT = int(os.getenv("OSTLE_PORT", "8001"))
LOG_LEVEL = os.getenv("OSTLE_LOG_LEVEL", "info").lower()

if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 60)
    print("オストル (Ostle) 開発サーバを起動します")
    print("=" * 60)
    print(f"APIサーバ: http://localhost:{PORT}")
    print(f"API ドキュメント: http://localhost:{PORT}/docs")
    print("=" * 60)
    print()

    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        reload=False,
        log_level=LOG_LEVEL
    )
