"""
どこで: `src/raytracer/core/pixel_mapping.py`。
何を: ワールド座標の点を Canvas のピクセル座標へ写像する（y 軸反転 + 範囲判定）。
なぜ: 範囲外を黙って clamp せず、呼び出し側が明示的に分岐できる結果型で返すため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, TypeAlias

from raytracer.core.canvas import Canvas
from raytracer.core.color import Color, round_half_away
from raytracer.core.tuples import Tuple

OutOfBoundsReason: TypeAlias = Literal["x", "y", "xy", "non-finite"]


@dataclass(frozen=True, slots=True)
class ScreenCoord:
    """Canvas に書き込み可能なピクセル座標。"""

    x: int
    y: int

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class OutOfBounds:
    """写像先が Canvas の範囲外であることを表す。

    Parameters
    ----------
    world_x, world_y : int or None
        丸め済みのワールド座標。非有限（nan/inf）の軸は None。
    reason : {"x", "y", "xy", "non-finite"}
        範囲外となった軸。座標が非有限なら "non-finite"。
    """

    world_x: int | None
    world_y: int | None
    reason: OutOfBoundsReason

    def __bool__(self) -> bool:
        return False


ScreenMapping: TypeAlias = ScreenCoord | OutOfBounds


def world_to_screen(position: Tuple, canvas: Canvas) -> ScreenMapping:
    """ワールド座標の点を Canvas のピクセル座標へ写像して返す。

    Parameters
    ----------
    position : Tuple
        ワールド座標の点。x, y のみ使用する。
    canvas : Canvas
        写像先の Canvas。

    Returns
    -------
    ScreenCoord or OutOfBounds
        書き込み可能なら ScreenCoord、そうでなければ OutOfBounds。

    Notes
    -----
    x, y は 0 から遠い側へ丸める。screen_y は `canvas.height - round(y)`。
    受理判定は `canvas.contains` と同一なので、受理した座標が
    `write_pixel` で拒否されることはない（round(y) == 0 は範囲外、
    round(y) == height は最上段 0 行目になる）。
    x, y が nan/inf の場合は丸めずに reason="non-finite" の OutOfBounds を返す。
    """

    if not (math.isfinite(position.x) and math.isfinite(position.y)):
        return OutOfBounds(
            world_x=round_half_away(position.x) if math.isfinite(position.x) else None,
            world_y=round_half_away(position.y) if math.isfinite(position.y) else None,
            reason="non-finite",
        )

    world_x = round_half_away(position.x)
    world_y = round_half_away(position.y)
    screen_x = world_x
    screen_y = canvas.height - world_y

    x_ok = 0 <= screen_x < canvas.width
    y_ok = 0 <= screen_y < canvas.height
    if x_ok and y_ok:
        return ScreenCoord(x=screen_x, y=screen_y)

    reason: OutOfBoundsReason = "xy" if not (x_ok or y_ok) else "x" if not x_ok else "y"
    return OutOfBounds(world_x=world_x, world_y=world_y, reason=reason)


def plot(canvas: Canvas, position: Tuple, color: Color) -> bool:
    """position を写像して書き込み、書き込めたら True を返す。"""

    mapped = world_to_screen(position, canvas)
    if isinstance(mapped, OutOfBounds):
        return False
    canvas.write_pixel(mapped.x, mapped.y, color)
    return True


__all__ = ["OutOfBounds", "ScreenCoord", "ScreenMapping", "plot", "world_to_screen"]
