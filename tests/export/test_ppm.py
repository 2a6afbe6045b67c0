"""PPM export（`raytracer.export.ppm.export_ppm`）のテスト。"""

from __future__ import annotations

import pytest

from raytracer.core.canvas import Canvas
from raytracer.core.color import Color
from raytracer.export.ppm import export_ppm


def _canvas() -> Canvas:
    canvas = Canvas(5, 3)
    canvas.write_pixel(0, 0, Color(1.5, 0.0, 0.0))
    canvas.write_pixel(2, 1, Color(0.0, 0.5, 0.0))
    canvas.write_pixel(4, 2, Color(-0.5, 0.0, 1.0))
    return canvas


def test_export_ppm_writes_canvas_text(tmp_path) -> None:
    canvas = _canvas()
    out_path = tmp_path / "nested" / "out.ppm"

    returned = export_ppm(canvas, out_path)
    assert returned == out_path
    assert out_path.exists()

    text = out_path.read_text(encoding="ascii")
    assert text == canvas.to_ppm()
    assert text.splitlines()[0] == "P3 5 3 255"
    assert b"\r\n" not in out_path.read_bytes()


def test_export_ppm_accepts_str_path(tmp_path) -> None:
    out_path = export_ppm(_canvas(), str(tmp_path / "out.ppm"))
    assert out_path == tmp_path / "out.ppm"


def test_export_ppm_is_deterministic(tmp_path) -> None:
    a = tmp_path / "a.ppm"
    b = tmp_path / "b.ppm"
    export_ppm(_canvas(), a)
    export_ppm(_canvas(), b)

    assert a.read_bytes() == b.read_bytes()


def test_export_ppm_reports_write_failure(tmp_path) -> None:
    target = tmp_path / "is_a_directory"
    target.mkdir()
    with pytest.raises(RuntimeError, match="is_a_directory"):
        export_ppm(_canvas(), target)


def test_export_ppm_reports_unusable_parent(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(RuntimeError):
        export_ppm(_canvas(), blocker / "out.ppm")
