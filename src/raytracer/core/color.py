"""
どこで: `src/raytracer/core/color.py`。
何を: RGB 色の値型 Color と、0..255 整数 RGB への変換ユーティリティを定義する。
なぜ: Canvas の格納値と PPM 出力の量子化規則を 1 箇所にまとめるため。
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from raytracer.core.tuples import EPSILON


@dataclass(frozen=True, slots=True, eq=False)
class Color:
    """red/green/blue の 3 成分を持つ色。

    Notes
    -----
    値域 [0, 1] は概念上のもので、構築時には clamp しない。
    範囲外の値は PPM 出力時にはじめて clamp される。
    """

    red: float
    green: float
    blue: float

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "red", float(self.red))
        object.__setattr__(self, "green", float(self.green))
        object.__setattr__(self, "blue", float(self.blue))

    @classmethod
    def from_sequence(cls, value: Any) -> Color:
        """長さ 3 のシーケンスから Color を構築して返す。

        Raises
        ------
        ValueError
            長さ 3 の数値シーケンスでない場合。
        """
        try:
            r, g, b = value
            return cls(float(r), float(g), float(b))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"color は長さ 3 の数値シーケンスである必要がある: {value!r}") from exc

    def as_tuple(self) -> tuple[float, float, float]:
        return self.red, self.green, self.blue

    def to_rgb255(self) -> tuple[int, int, int]:
        return to_rgb255(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (
            abs(self.red - other.red) < EPSILON
            and abs(self.green - other.green) < EPSILON
            and abs(self.blue - other.blue) < EPSILON
        )

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __sub__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def __mul__(self, other: Color | float) -> Color:
        if isinstance(other, Color):
            return hadamard(self, other)
        s = float(other)
        return Color(self.red * s, self.green * s, self.blue * s)

    def __rmul__(self, other: float) -> Color:
        return self * other


def color(red: float, green: float, blue: float) -> Color:
    return Color(red, green, blue)


def hadamard(a: Color, b: Color) -> Color:
    """成分ごとの積（色のブレンド）を返す。"""
    return Color(a.red * b.red, a.green * b.green, a.blue * b.blue)


def round_half_away(value: float) -> int:
    """0.5 を 0 から遠い側へ丸めて int を返す（Python の `round` は偶数丸め）。"""
    v = float(value)
    return int(math.copysign(math.floor(abs(v) + 0.5), v))


def channel_to_255(value: float) -> int:
    """0..1 float のチャンネル値を clamp し、0..255 int に量子化して返す。

    Raises
    ------
    ValueError
        値が nan の場合（clamp で救済しない）。
    """
    fv = float(value)
    if math.isnan(fv):
        raise ValueError("色チャンネルが nan のため量子化できない")
    fv = 0.0 if fv < 0.0 else 1.0 if fv > 1.0 else fv
    return round_half_away(fv * 255.0)


def to_rgb255(c: Color | Sequence[float]) -> tuple[int, int, int]:
    """Color（または 3 要素シーケンス）を 0..255 int の RGB に変換して返す。"""
    r, g, b = c.as_tuple() if isinstance(c, Color) else c
    return channel_to_255(r), channel_to_255(g), channel_to_255(b)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)


__all__ = [
    "BLACK",
    "BLUE",
    "Color",
    "GREEN",
    "RED",
    "WHITE",
    "channel_to_255",
    "color",
    "hadamard",
    "round_half_away",
    "to_rgb255",
]
