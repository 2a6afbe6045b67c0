"""
どこで: `src/raytracer/core/projectile.py`。
何を: 重力と風の下で投射体を 1 tick ずつ進める純関数と、着地までの列挙を提供する。
なぜ: プロセス入口から切り離し、シミュレーションを単体でテストできるようにするため。
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from raytracer.core.tuples import Tuple, normalize


@dataclass(frozen=True, slots=True)
class Environment:
    """重力と風のベクトルを束ねる環境。"""

    gravity: Tuple
    wind: Tuple


World = Environment


@dataclass(frozen=True, slots=True)
class Projectile:
    """位置（点）と速度（ベクトル）を持つ投射体。"""

    position: Tuple
    velocity: Tuple

    def tick(self, environment: Environment) -> Projectile:
        return tick(environment, self)

    def has_landed(self) -> bool:
        return self.position.y <= 0.0


def tick(environment: Environment, projectile: Projectile) -> Projectile:
    """1 tick 後の Projectile を返す。

    position += velocity、velocity += gravity + wind。
    """
    return Projectile(
        position=projectile.position + projectile.velocity,
        velocity=projectile.velocity + environment.gravity + environment.wind,
    )


def launch_velocity(direction: Tuple, speed: float) -> Tuple:
    """direction を正規化して speed 倍した初速を返す。"""
    return normalize(direction) * float(speed)


def simulate(
    environment: Environment,
    projectile: Projectile,
    *,
    max_ticks: int | None = None,
) -> Iterator[Projectile]:
    """着地（position.y <= 0）するまで各 tick 後の状態を列挙する。

    Parameters
    ----------
    environment : Environment
        重力と風。
    projectile : Projectile
        初期状態。列挙には含めない。
    max_ticks : int or None, optional
        tick 数の上限。None なら上限なし。

    Yields
    ------
    Projectile
        各 tick 後の状態。最後の要素は着地した状態。

    Raises
    ------
    RuntimeError
        max_ticks 回進めても着地しなかった場合。
    """

    if max_ticks is not None and int(max_ticks) <= 0:
        raise ValueError(f"max_ticks は正の値である必要がある: got={max_ticks!r}")

    current = projectile
    ticks = 0
    while current.position.y > 0.0:
        if max_ticks is not None and ticks >= int(max_ticks):
            raise RuntimeError(f"{max_ticks} tick 以内に着地しませんでした: last={current!r}")
        current = tick(environment, current)
        ticks += 1
        yield current


__all__ = ["Environment", "Projectile", "World", "launch_velocity", "simulate", "tick"]
