"""
どこで: `src/raytracer/__main__.py`。
何を: `python -m raytracer` で投射体スケッチを実行する。
なぜ: インストール後にリポジトリ外からも同じ出力を再現できるようにするため。
"""

import logging

from raytracer.api import run

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run()
