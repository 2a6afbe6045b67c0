# どこで: `src/raytracer/api/__init__.py`。
# 何を: 公開 API パッケージのエントリポイントとして run と、その結果型・ppm 出力を再エクスポートする。
# なぜ: ユーザーコードからシンプルに API を import できるようにするため。

from __future__ import annotations

from .run import RunResult, initial_state, run
from raytracer.export.ppm import export_ppm

__all__ = ["RunResult", "export_ppm", "initial_state", "run"]
