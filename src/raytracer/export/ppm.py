"""
どこで: `src/raytracer/export/ppm.py`。
何を: Canvas を PPM（P3 テキスト）ファイルとして保存する関数を提供する。
なぜ: テキスト化（Canvas.to_ppm）とファイル書き込みを分け、書き込み失敗を明示的に報告するため。
"""

from __future__ import annotations

import logging
from pathlib import Path

from raytracer.core.canvas import Canvas

_logger = logging.getLogger(__name__)


def export_ppm(canvas: Canvas, path: str | Path) -> Path:
    """Canvas を PPM として保存する。

    Parameters
    ----------
    canvas : Canvas
        保存対象の Canvas。
    path : str or Path
        出力先パス。親ディレクトリは作成する。

    Returns
    -------
    Path
        保存先パス。

    Raises
    ------
    RuntimeError
        ディレクトリ作成または書き込みに失敗した場合（リトライしない）。
    """
    _path = Path(path)
    text = canvas.to_ppm()

    try:
        _path.parent.mkdir(parents=True, exist_ok=True)
        with _path.open("w", encoding="ascii", newline="\n") as f:
            f.write(text)
    except OSError as exc:
        raise RuntimeError(f"PPM の書き込みに失敗しました: path={_path} ({exc})") from exc

    _logger.info("PPM を書き出しました: %s (%dx%d)", _path, canvas.width, canvas.height)
    return _path


__all__ = ["export_ppm"]
