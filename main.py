"""
どこで: リポジトリ直下 `main.py`。
何を: 同梱設定で投射体スケッチを実行し、軌跡を `./output.ppm` に書き出す。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import sys

sys.path.append("src")

import logging

from raytracer.api import run

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run()
