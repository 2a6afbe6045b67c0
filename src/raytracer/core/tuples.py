"""
どこで: `src/raytracer/core/tuples.py`。
何を: 点（w=1）とベクトル（w=0）を表す 4 成分 Tuple と、その代数演算を定義する。
なぜ: シミュレーションとピクセル写像の全経路で、同じ不変な値型を共有するため。
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass

import numpy as np

EPSILON = sys.float_info.epsilon


@dataclass(frozen=True, slots=True, eq=False)
class Tuple:
    """x, y, z, w の 4 成分を持つ不変な値型。

    Notes
    -----
    w=1.0 を点、w=0.0 をベクトルとみなす（規約であり強制はしない）。
    等価比較は xyz を EPSILON 以内、w を厳密一致で判定する。
    近似等価は推移的でないため hash 不可とする。
    """

    x: float
    y: float
    z: float
    w: float

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))
        object.__setattr__(self, "w", float(self.w))

    def is_point(self) -> bool:
        return self.w == 1.0

    def is_vector(self) -> bool:
        return self.w == 0.0

    def as_array(self) -> np.ndarray:
        """float64 shape (4,) の読み取り専用配列を返す。"""
        arr = np.array([self.x, self.y, self.z, self.w], dtype=np.float64)
        arr.setflags(write=False)
        return arr

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Tuple:
        x, y, z, w = (float(v) for v in np.asarray(arr, dtype=np.float64))
        return cls(x, y, z, w)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return equals(self, other)

    def __add__(self, other: Tuple) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: Tuple) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        return sub(self, other)

    def __neg__(self) -> Tuple:
        return negate(self)

    def __mul__(self, scalar: float) -> Tuple:
        if isinstance(scalar, Tuple):
            return NotImplemented
        return multiply(self, scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Tuple:
        if isinstance(scalar, Tuple):
            return NotImplemented
        return divide(self, scalar)

    def __repr__(self) -> str:
        return f"Tuple(x={self.x!r}, y={self.y!r}, z={self.z!r}, w={self.w!r})"


def point(x: float, y: float, z: float) -> Tuple:
    """w=1.0 の点を返す。"""
    return Tuple(x, y, z, 1.0)


def vector(x: float, y: float, z: float) -> Tuple:
    """w=0.0 のベクトルを返す。"""
    return Tuple(x, y, z, 0.0)


def equals(a: Tuple, b: Tuple, *, eps: float = EPSILON) -> bool:
    """xyz を eps 以内、w を厳密一致で比較する。"""
    return (
        abs(a.x - b.x) < eps
        and abs(a.y - b.y) < eps
        and abs(a.z - b.z) < eps
        and a.w == b.w
    )


def add(a: Tuple, b: Tuple) -> Tuple:
    """成分ごとの和を返す。w も加算する（点 + ベクトル = 点）。"""
    return Tuple(a.x + b.x, a.y + b.y, a.z + b.z, a.w + b.w)


def sub(a: Tuple, b: Tuple) -> Tuple:
    """成分ごとの差を返す。w も減算する（点 - 点 = ベクトル）。"""
    return Tuple(a.x - b.x, a.y - b.y, a.z - b.z, a.w - b.w)


def negate(a: Tuple) -> Tuple:
    return Tuple(-a.x, -a.y, -a.z, -a.w)


def multiply(a: Tuple, scalar: float) -> Tuple:
    """xyz を scalar 倍した Tuple を返す。

    Notes
    -----
    w はそのまま残す（点は点、ベクトルはベクトルのまま）。
    """
    s = float(scalar)
    return Tuple(a.x * s, a.y * s, a.z * s, a.w)


def divide(a: Tuple, scalar: float) -> Tuple:
    """xyz を scalar で割った Tuple を返す。w はそのまま残す。

    Notes
    -----
    0 除算は例外にせず IEEE 754 に従い inf/nan を返す。
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        xyz = a.as_array()[:3] / np.float64(scalar)
    return Tuple(float(xyz[0]), float(xyz[1]), float(xyz[2]), a.w)


def magnitude(a: Tuple) -> float:
    """w を含む 4 成分のユークリッドノルムを返す。"""
    return math.sqrt(a.x * a.x + a.y * a.y + a.z * a.z + a.w * a.w)


def normalize(a: Tuple) -> Tuple:
    """全成分を magnitude で割った Tuple を返す。

    Notes
    -----
    divide と異なり w も割る。
    magnitude が 0 の場合は検出せず、非有限値（nan）の Tuple を返す。
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        out = a.as_array() / np.float64(magnitude(a))
    return Tuple.from_array(out)


def dot(a: Tuple, b: Tuple) -> float:
    """4 成分の内積を返す。"""
    return a.x * b.x + a.y * b.y + a.z * b.z + a.w * b.w


def cross(a: Tuple, b: Tuple) -> Tuple:
    """xyz の外積を返す。入力の w は無視し、常にベクトルを返す。"""
    return vector(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


__all__ = [
    "EPSILON",
    "Tuple",
    "add",
    "cross",
    "divide",
    "dot",
    "equals",
    "magnitude",
    "multiply",
    "negate",
    "normalize",
    "point",
    "sub",
    "vector",
]
