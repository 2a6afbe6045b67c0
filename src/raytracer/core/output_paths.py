# どこで: `src/raytracer/core/output_paths.py`。
# 何を: 実行時設定に基づき、出力ファイルの保存先パスを決める。
# なぜ: 既定の `./output.ppm` を保ちつつ、run_id 付きで出力を並べて残せるようにするため。

from __future__ import annotations

import re
from pathlib import Path

from raytracer.core.runtime_config import output_root_dir, runtime_config


def _sanitize_run_id(run_id: str) -> str:
    """run_id をファイル名の一部として使える形に正規化して返す。"""

    return re.sub(r"[^A-Za-z0-9._-]+", "_", str(run_id))


def _run_id_suffix(run_id: str | None) -> str:
    """run_id の接尾辞（例: `_v1`）を返す。未指定なら空文字を返す。"""

    if run_id is None:
        return ""
    s = str(run_id).strip()
    if not s:
        return ""
    sanitized = _sanitize_run_id(s)
    if not sanitized:
        return ""
    return f"_{sanitized}"


def output_path(*, ext: str = "ppm", run_id: str | None = None) -> Path:
    """出力ファイルの保存先パスを返す。

    Notes
    -----
    パスは `{output_dir}/{output_stem}[_run_id].{ext}`。
    既定設定では `./output.ppm`。
    """

    ext_norm = str(ext).lstrip(".").strip()
    if not ext_norm:
        raise ValueError("ext は空でない必要がある")

    stem = runtime_config().output_stem
    return output_root_dir() / f"{stem}{_run_id_suffix(run_id)}.{ext_norm}"


__all__ = ["output_path"]
