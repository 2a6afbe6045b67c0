"""
どこで: `src/raytracer/core/canvas.py`。
何を: 固定サイズの色グリッド Canvas と、その PPM（P3）テキスト化を提供する。
なぜ: シミュレーション結果をピクセルへ焼き付け、可搬なテキスト画像として保存するため。
"""

from __future__ import annotations

import numpy as np

from raytracer.core.color import BLACK, Color

PPM_MAGIC = "P3"
PPM_MAX_VALUE = 255


class Canvas:
    """width x height の色グリッド（行優先・原点は左上）。

    Parameters
    ----------
    width : int
        横ピクセル数（正の整数）。
    height : int
        縦ピクセル数（正の整数）。

    Notes
    -----
    画素は float64 shape (height, width, 3) の配列に格納し、Canvas が専有する。
    範囲外アクセスはプログラミングエラーとして IndexError を送出する。
    負のインデックスを numpy 流に末尾から解釈することはしない。
    """

    __slots__ = ("_width", "_height", "_pixels")

    def __init__(self, width: int, height: int) -> None:
        w = int(width)
        h = int(height)
        if w != width or h != height:
            raise ValueError(f"canvas の寸法は整数である必要がある: got=({width!r}, {height!r})")
        if w <= 0 or h <= 0:
            raise ValueError(f"canvas の寸法は正の値である必要がある: got=({w}, {h})")
        self._width = w
        self._height = h
        self._pixels = np.zeros((h, w, 3), dtype=np.float64)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def pixels(self) -> np.ndarray:
        """画素配列の読み取り専用ビューを返す。"""
        view = self._pixels.view()
        view.setflags(write=False)
        return view

    def contains(self, x: int, y: int) -> bool:
        """(x, y) が `0 <= x < width` かつ `0 <= y < height` なら True を返す。"""
        return 0 <= x < self._width and 0 <= y < self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.contains(x, y):
            raise IndexError(
                f"pixel ({x}, {y}) は canvas ({self._width}x{self._height}) の範囲外"
            )

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        """(x, y) の画素を color で上書きする。"""
        self._check_bounds(x, y)
        self._pixels[y, x] = (color.red, color.green, color.blue)

    def pixel_at(self, x: int, y: int) -> Color:
        """(x, y) の画素色を返す。"""
        self._check_bounds(x, y)
        r, g, b = self._pixels[y, x]
        return Color(float(r), float(g), float(b))

    def fill(self, color: Color) -> None:
        """全画素を color で塗りつぶす。"""
        self._pixels[:, :] = (color.red, color.green, color.blue)

    def to_rgb255(self) -> np.ndarray:
        """画素を clamp + 0..255 量子化した int64 shape (height, width, 3) 配列を返す。

        Raises
        ------
        ValueError
            nan を含む画素がある場合。
        """
        if np.isnan(self._pixels).any():
            raise ValueError("canvas に nan の画素が含まれるため量子化できない")
        clamped = np.clip(self._pixels, 0.0, 1.0)
        # clamp 後は非負なので floor(v + 0.5) が 0 から遠い側への丸めになる。
        return np.floor(clamped * float(PPM_MAX_VALUE) + 0.5).astype(np.int64)

    def to_ppm(self) -> str:
        """canvas を P3 形式のテキストへ変換して返す。

        Notes
        -----
        ヘッダは `P3 <width> <height> 255` を 1 行に空白区切りで書く。
        各行は画素ごとの `r g b` を空白で連結し、末尾に改行を 1 つ付ける。
        """
        rgb = self.to_rgb255()
        lines = [f"{PPM_MAGIC} {self._width} {self._height} {PPM_MAX_VALUE}"]
        for row in rgb:
            lines.append(" ".join(str(int(v)) for v in row.reshape(-1)))
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return f"Canvas(width={self._width}, height={self._height})"


def canvas_from_background(width: int, height: int, background: Color = BLACK) -> Canvas:
    """背景色で塗りつぶした Canvas を返す。"""
    canvas = Canvas(width, height)
    if background != BLACK:
        canvas.fill(background)
    return canvas


__all__ = ["Canvas", "PPM_MAGIC", "PPM_MAX_VALUE", "canvas_from_background"]
