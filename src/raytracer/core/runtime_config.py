# どこで: `src/raytracer/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: canvas 寸法・物理定数・出力先をコード定数から外し、ユーザーが差し替えられるようにするため。

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from raytracer.core.color import Color
from raytracer.core.tuples import Tuple, point, vector

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """投射体シミュレーションの入力。"""

    start: Tuple
    direction: Tuple
    speed: float
    gravity: Tuple
    wind: Tuple
    max_ticks: int | None


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """raytracer の実行時設定。"""

    config_path: Path | None
    canvas_size: tuple[int, int]
    simulation: SimulationConfig
    paint_color: Color
    background_color: Color
    output_dir: Path
    output_stem: str


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    p = Path(str(path)).expanduser()
    _EXPLICIT_CONFIG_PATH = p
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".raytracer" / "config.yaml",
        home / ".config" / "raytracer" / "config.yaml",
    )


def _expand_path_text(text: str) -> str:
    return os.path.expandvars(os.path.expanduser(str(text)))


def _as_optional_path(value: Any) -> Path | None:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    return Path(_expand_path_text(s))


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_float(value: Any, *, key: str) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_int(value: Any, *, key: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    try:
        return int(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def _as_float_triple(value: Any, *, key: str) -> tuple[float, float, float] | None:
    if value is None:
        return None
    try:
        seq = list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y, z] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 3:
        raise RuntimeError(f"{key} は [x, y, z] の配列である必要があります: got={value!r}")
    try:
        return float(seq[0]), float(seq[1]), float(seq[2])
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y, z] の数値配列である必要があります: got={value!r}") from exc


def _require(value: Any, *, key: str) -> Any:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    return value


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    try:
        import yaml  # type: ignore[import-untyped]
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(f"PyYAML を import できません: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    _logger.debug("config を読み込みます: %s", path)
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _merge_payload(base: dict[str, Any], override: dict[str, Any]) -> None:
    """override を base へ後勝ちで統合する。

    Notes
    -----
    両方が mapping のセクションはキー単位で統合し、それ以外は丸ごと置き換える。
    例: `simulation: {speed: 5}` は speed だけを上書きし、start などは残る。
    """

    for key, value in override.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged = dict(current)
            merged.update(value)
            base[key] = merged
        else:
            base[key] = value


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("raytracer")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="raytracer/resource/default_config.yaml")


def _parse_simulation(payload: dict[str, Any]) -> SimulationConfig:
    sim = _as_mapping(payload.get("simulation"), key="simulation")

    start = _require(_as_float_triple(sim.get("start"), key="simulation.start"), key="simulation.start")
    direction = _require(
        _as_float_triple(sim.get("direction"), key="simulation.direction"),
        key="simulation.direction",
    )
    gravity = _require(
        _as_float_triple(sim.get("gravity"), key="simulation.gravity"),
        key="simulation.gravity",
    )
    wind = _require(_as_float_triple(sim.get("wind"), key="simulation.wind"), key="simulation.wind")

    speed = _require(_as_float(sim.get("speed"), key="simulation.speed"), key="simulation.speed")
    if speed <= 0:
        raise ValueError(f"simulation.speed は正の値である必要がある: got={speed}")
    if direction == (0.0, 0.0, 0.0):
        raise ValueError("simulation.direction はゼロベクトルであってはならない")

    max_ticks = _as_int(sim.get("max_ticks"), key="simulation.max_ticks")
    if max_ticks is not None and max_ticks <= 0:
        raise ValueError(f"simulation.max_ticks は正の値である必要がある: got={max_ticks}")

    return SimulationConfig(
        start=point(*start),
        direction=vector(*direction),
        speed=float(speed),
        gravity=vector(*gravity),
        wind=vector(*wind),
        max_ticks=max_ticks,
    )


def _parse_color(value: Any, *, key: str) -> Color:
    _require(value, key=key)
    try:
        return Color.from_sequence(value)
    except ValueError as exc:
        raise RuntimeError(f"{key} は [r, g, b] の数値配列である必要があります: got={value!r}") from exc


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。"""

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        _merge_payload(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        _merge_payload(payload, _load_yaml_config(explicit_path))

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    try:
        version_i = int(version)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    canvas = _as_mapping(payload.get("canvas"), key="canvas")
    width = _require(_as_int(canvas.get("width"), key="canvas.width"), key="canvas.width")
    height = _require(_as_int(canvas.get("height"), key="canvas.height"), key="canvas.height")
    if width <= 0 or height <= 0:
        raise ValueError(f"canvas の寸法は正の値である必要がある: got=({width}, {height})")

    paint = _as_mapping(payload.get("paint"), key="paint")
    paint_color = _parse_color(paint.get("color"), key="paint.color")
    background_color = _parse_color(paint.get("background"), key="paint.background")

    paths = _as_mapping(payload.get("paths"), key="paths")
    output_dir = _as_optional_path(paths.get("output_dir"))
    if output_dir is None:
        raise RuntimeError(
            "paths.output_dir が未設定です（同梱 default_config.yaml を確認してください）"
        )
    output_stem = str(_require(paths.get("output_stem"), key="paths.output_stem")).strip()
    if not output_stem:
        raise RuntimeError("paths.output_stem は空でない必要があります")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        canvas_size=(width, height),
        simulation=_parse_simulation(payload),
        paint_color=paint_color,
        background_color=background_color,
        output_dir=output_dir,
        output_stem=output_stem,
    )
    _CONFIG_CACHE = cfg
    return cfg


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ディレクトリを返す。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.raytracer/config.yaml` / `~/.config/raytracer/config.yaml`
    3) `set_config_path(...)` で指定した config
    """

    cfg = runtime_config()
    return Path(cfg.output_dir)


__all__ = [
    "RuntimeConfig",
    "SimulationConfig",
    "output_root_dir",
    "runtime_config",
    "set_config_path",
]
