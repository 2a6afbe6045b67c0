# どこで: `src/raytracer/__init__.py`。
# 何を: ルート `raytracer` パッケージを定義する。
# なぜ: import 起点を `raytracer` に統一するため。

from __future__ import annotations

from raytracer.api import export_ppm, run
from raytracer.core.canvas import Canvas
from raytracer.core.color import Color, color
from raytracer.core.projectile import Environment, Projectile, tick
from raytracer.core.tuples import Tuple, point, vector

__all__ = [
    "Canvas",
    "Color",
    "Environment",
    "Projectile",
    "Tuple",
    "color",
    "export_ppm",
    "point",
    "run",
    "tick",
    "vector",
]
