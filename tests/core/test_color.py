"""Color の演算と 0..255 量子化のテスト。"""

from __future__ import annotations

import pytest

from raytracer.core.color import (
    BLACK,
    Color,
    channel_to_255,
    color,
    hadamard,
    round_half_away,
    to_rgb255,
)


def test_color_is_not_clamped_at_construction() -> None:
    c = color(-0.5, 0.4, 1.7)
    assert c.as_tuple() == (-0.5, 0.4, 1.7)


def test_color_arithmetic() -> None:
    a = Color(0.5, 0.25, 0.75)
    b = Color(0.25, 0.5, 0.125)
    assert a + b == Color(0.75, 0.75, 0.875)
    assert a - b == Color(0.25, -0.25, 0.625)
    assert Color(0.25, 0.5, 0.75) * 2 == Color(0.5, 1.0, 1.5)
    assert 2 * Color(0.25, 0.5, 0.75) == Color(0.5, 1.0, 1.5)


def test_hadamard_product_blends_colors() -> None:
    a = Color(1.0, 0.5, 0.25)
    b = Color(0.5, 0.5, 4.0)
    assert hadamard(a, b) == Color(0.5, 0.25, 1.0)
    assert a * b == hadamard(a, b)


def test_color_is_unhashable() -> None:
    with pytest.raises(TypeError):
        hash(BLACK)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.5, 1), (1.4, 1), (1.5, 2), (2.5, 3), (-0.4, 0), (-2.5, -3)],
)
def test_round_half_away_from_zero(value: float, expected: int) -> None:
    assert round_half_away(value) == expected


def test_to_rgb255_clamps_and_scales() -> None:
    assert to_rgb255(Color(1.5, 0.0, -0.5)) == (255, 0, 0)
    assert to_rgb255(Color(0.0, 0.5, 1.0)) == (0, 128, 255)
    assert Color(0.0, 0.5, 1.0).to_rgb255() == (0, 128, 255)
    assert to_rgb255((0.2, 0.4, 0.6)) == (51, 102, 153)


def test_channel_to_255_rejects_nan() -> None:
    with pytest.raises(ValueError):
        channel_to_255(float("nan"))


def test_from_sequence_builds_color_and_rejects_bad_input() -> None:
    assert Color.from_sequence([1, 0, 0.5]) == Color(1.0, 0.0, 0.5)
    with pytest.raises(ValueError):
        Color.from_sequence([1.0, 2.0])
    with pytest.raises(ValueError):
        Color.from_sequence(3.0)
