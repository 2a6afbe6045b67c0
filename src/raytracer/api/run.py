"""
どこで: `src/raytracer/api/run.py`。公開 API のランナー実装。
何を: 設定から canvas・環境・投射体を組み立て、軌跡を描いて PPM へ書き出す。
なぜ: `main.py` / `python -m raytracer` の入口を薄く保ち、合成手順をテスト可能にするため。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from raytracer.core.canvas import Canvas, canvas_from_background
from raytracer.core.output_paths import output_path
from raytracer.core.pixel_mapping import plot
from raytracer.core.projectile import Environment, Projectile, launch_velocity, simulate
from raytracer.core.runtime_config import RuntimeConfig, runtime_config
from raytracer.export.ppm import export_ppm

_logger = logging.getLogger(__name__)

Echo = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class RunResult:
    """run の結果。"""

    canvas: Canvas
    path: Path
    ticks: int
    plotted: int
    skipped: int


def initial_state(config: RuntimeConfig) -> tuple[Environment, Projectile]:
    """設定から環境と初期投射体を組み立てて返す。"""

    sim = config.simulation
    environment = Environment(gravity=sim.gravity, wind=sim.wind)
    projectile = Projectile(
        position=sim.start,
        velocity=launch_velocity(sim.direction, sim.speed),
    )
    return environment, projectile


def run(
    config: RuntimeConfig | None = None,
    *,
    output: str | Path | None = None,
    echo: Echo | None = print,
) -> RunResult:
    """投射体の軌跡を canvas に描き、PPM として保存する。

    Parameters
    ----------
    config : RuntimeConfig or None
        実行時設定。None なら `runtime_config()` をロードする。
    output : str or Path or None
        出力先パス。None なら `output_path()`（既定 `./output.ppm`）。
    echo : Callable[[str], None] or None
        環境・各 tick の状態・完了メッセージの出力先。既定は stdout。
        None なら何も出力しない。

    Returns
    -------
    RunResult
        描画済み canvas、保存先、tick 数、書き込み数、範囲外でスキップした数。

    Raises
    ------
    RuntimeError
        max_ticks 以内に着地しない場合、または書き込みに失敗した場合。
    """

    cfg = config if config is not None else runtime_config()
    _echo: Echo = echo if echo is not None else (lambda _line: None)

    width, height = cfg.canvas_size
    canvas = canvas_from_background(width, height, cfg.background_color)
    environment, projectile = initial_state(cfg)

    _echo(f"environment: {environment!r}")
    _echo(f"projectile: {projectile!r}")

    ticks = 0
    plotted = 0
    skipped = 0
    for state in simulate(environment, projectile, max_ticks=cfg.simulation.max_ticks):
        _echo(f"{ticks}: {state!r}")
        ticks += 1

        if plot(canvas, state.position, cfg.paint_color):
            plotted += 1
        else:
            _logger.debug("範囲外のためスキップ: %r", state.position)
            skipped += 1

    path = Path(output) if output is not None else output_path()
    _echo(f"simulation finished after {ticks} ticks ({plotted} plotted, {skipped} out of bounds)")
    export_ppm(canvas, path)
    _echo(f"wrote {path}")

    _logger.info("run 完了: ticks=%d plotted=%d skipped=%d path=%s", ticks, plotted, skipped, path)
    return RunResult(canvas=canvas, path=path, ticks=ticks, plotted=plotted, skipped=skipped)


__all__ = ["RunResult", "initial_state", "run"]
