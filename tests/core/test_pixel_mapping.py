"""ワールド座標→ピクセル座標の写像（y 軸反転・範囲判定）のテスト。"""

from __future__ import annotations

import pytest

from raytracer.core.canvas import Canvas
from raytracer.core.color import Color
from raytracer.core.pixel_mapping import OutOfBounds, ScreenCoord, plot, world_to_screen
from raytracer.core.tuples import point


def _canvas() -> Canvas:
    return Canvas(10, 5)


@pytest.mark.parametrize(
    ("xy", "expected"),
    [
        ((3.4, 2.6), ScreenCoord(x=3, y=2)),
        ((2.5, 1.5), ScreenCoord(x=3, y=3)),
        ((0.0, 5.0), ScreenCoord(x=0, y=0)),
        ((9.0, 1.0), ScreenCoord(x=9, y=4)),
        ((-0.4, 4.0), ScreenCoord(x=0, y=1)),
    ],
)
def test_in_bounds_points_map_with_flipped_y(
    xy: tuple[float, float], expected: ScreenCoord
) -> None:
    mapped = world_to_screen(point(xy[0], xy[1], 0.0), _canvas())
    assert mapped == expected
    assert mapped


@pytest.mark.parametrize(
    ("xy", "reason"),
    [
        ((10.0, 2.0), "x"),
        ((-1.0, 2.0), "x"),
        ((0.0, 0.4), "y"),
        ((3.0, 6.0), "y"),
        ((3.0, -2.0), "y"),
        ((-1.0, -1.0), "xy"),
    ],
)
def test_out_of_bounds_points_are_reported_not_clamped(
    xy: tuple[float, float], reason: str
) -> None:
    mapped = world_to_screen(point(xy[0], xy[1], 0.0), _canvas())
    assert isinstance(mapped, OutOfBounds)
    assert mapped.reason == reason
    assert not mapped


def test_out_of_bounds_carries_rounded_world_coordinates() -> None:
    mapped = world_to_screen(point(12.5, -0.5, 0.0), _canvas())
    assert mapped == OutOfBounds(world_x=13, world_y=-1, reason="xy")


def test_accepted_coordinates_are_always_writable() -> None:
    """受理した座標は write_pixel で必ず書き込める。"""
    canvas = _canvas()
    white = Color(1.0, 1.0, 1.0)
    for i in range(-4, 28):
        for j in range(-4, 16):
            mapped = world_to_screen(point(i * 0.5, j * 0.5, 0.0), canvas)
            if isinstance(mapped, ScreenCoord):
                canvas.write_pixel(mapped.x, mapped.y, white)
            else:
                assert not canvas.contains(
                    mapped.world_x, canvas.height - mapped.world_y
                )


def test_plot_writes_in_bounds_and_skips_out_of_bounds() -> None:
    canvas = _canvas()
    red = Color(1.0, 0.0, 0.0)

    assert plot(canvas, point(3.0, 2.0, 0.0), red) is True
    assert canvas.pixel_at(3, 3) == red

    before = canvas.pixels.copy()
    assert plot(canvas, point(30.0, 2.0, 0.0), red) is False
    assert (canvas.pixels == before).all()


@pytest.mark.parametrize(
    ("xy", "world"),
    [
        ((float("nan"), 1.0), (None, 1)),
        ((2.0, float("nan")), (2, None)),
        ((float("inf"), float("-inf")), (None, None)),
    ],
)
def test_non_finite_points_are_out_of_bounds(
    xy: tuple[float, float], world: tuple[int | None, int | None]
) -> None:
    """nan/inf 座標は例外にせず reason="non-finite" の OutOfBounds になる。"""
    canvas = _canvas()
    mapped = world_to_screen(point(xy[0], xy[1], 0.0), canvas)
    assert mapped == OutOfBounds(world_x=world[0], world_y=world[1], reason="non-finite")
    assert plot(canvas, point(xy[0], xy[1], 0.0), Color(1.0, 0.0, 0.0)) is False
    assert not canvas.pixels.any()
