# どこで: `src/polygallery/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: キャンバス寸法やテクスチャパスをコード変更なしにユーザーが指定できるようにするため。

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from polygallery.core.primitives.sierpinski import MAX_SIERPINSKI_DEPTH

CONFIG_VERSION = 1
TEXTURE_SLOTS: tuple[str, ...] = ("albedo", "roughness", "normal")

_PACKAGED_SOURCE = "polygallery/resource/default_config.yaml"


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """polygallery の実行時設定。"""

    config_path: Path | None
    canvas_size: tuple[int, int]
    fps: float
    start_index: int
    background_color: tuple[float, float, float]
    sierpinski_depth: int
    texture_paths: tuple[Path | None, Path | None, Path | None]
    window_pos_gallery: tuple[int, int]
    window_pos_speed_gui: tuple[int, int]
    speed_gui_window_size: tuple[int, int]


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """明示 config パスを設定し、キャッシュを捨てる。None で既定の探索に戻す。"""

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _EXPLICIT_CONFIG_PATH = None if path is None else Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _discovery_candidates() -> tuple[Path, ...]:
    return (
        Path.cwd() / ".polygallery" / "config.yaml",
        Path.home() / ".config" / "polygallery" / "config.yaml",
    )


# ---------- YAML の読み込みとマージ ----------


def _parse_yaml(text: str, *, source: str) -> dict[str, Any]:
    import yaml  # type: ignore[import-untyped]

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml を解釈できません: source={source}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml のトップレベルは mapping である必要があります: source={source}")
    return data


def _read_packaged_defaults() -> dict[str, Any]:
    try:
        text = resources.files("polygallery").joinpath("resource", "default_config.yaml").read_text(encoding="utf-8")
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(f"同梱設定を読み込めません（package-data を確認してください）: {_PACKAGED_SOURCE}") from exc
    return _parse_yaml(text, source=_PACKAGED_SOURCE)


def _read_file(path: Path) -> dict[str, Any]:
    return _parse_yaml(path.read_text(encoding="utf-8"), source=str(path))


def _merge_config(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """mapping 同士は再帰的にマージし、それ以外は override 側で置き換える。"""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _merge_config(current, value)
        else:
            merged[key] = value
    return merged


# ---------- 値の取り出しと検証 ----------


def _lookup(payload: dict[str, Any], key: str) -> Any:
    """`gallery.canvas_size` のようなドット区切りキーで値を引く（無ければ None）。"""
    node: Any = payload
    for part in key.split("."):
        if node is None:
            return None
        if not isinstance(node, dict):
            raise RuntimeError(f"{key} の途中が mapping ではありません: got={node!r}")
        node = node.get(part)
    return node


def _required(payload: dict[str, Any], key: str) -> Any:
    value = _lookup(payload, key)
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    return value


def _integer(payload: dict[str, Any], key: str) -> int:
    value = _required(payload, key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    return value


def _number(payload: dict[str, Any], key: str) -> float:
    value = _required(payload, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}")
    return float(value)


def _int_pair(payload: dict[str, Any], key: str) -> tuple[int, int]:
    value = _required(payload, key)
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in value):
        raise RuntimeError(f"{key} は [x, y] の整数配列である必要があります: got={value!r}")
    return (value[0], value[1])


def _rgb(payload: dict[str, Any], key: str) -> tuple[float, float, float]:
    value = _required(payload, key)
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise RuntimeError(f"{key} は [r, g, b] の配列である必要があります: got={value!r}")
    if not all(isinstance(c, (int, float)) and not isinstance(c, bool) for c in value):
        raise RuntimeError(f"{key} は [r, g, b] の数値配列である必要があります: got={value!r}")
    r, g, b = (float(c) for c in value)
    if not all(0.0 <= c <= 1.0 for c in (r, g, b)):
        raise ValueError(f"{key} の各成分は 0..1 である必要があります: got={value!r}")
    return (r, g, b)


def _optional_path(value: Any) -> Path | None:
    # null / 空文字は「未指定」。~ と環境変数は展開する。
    if value is None or not str(value).strip():
        return None
    return Path(os.path.expandvars(os.path.expanduser(str(value).strip())))


def _texture_paths(payload: dict[str, Any]) -> tuple[Path | None, Path | None, Path | None]:
    textures = _lookup(payload, "shapes.textures") or {}
    if not isinstance(textures, dict):
        raise RuntimeError(f"shapes.textures は mapping である必要があります: got={textures!r}")
    unknown = sorted(set(textures) - set(TEXTURE_SLOTS))
    if unknown:
        raise RuntimeError(f"shapes.textures に未知のキーがあります: {unknown}")
    albedo, roughness, normal = (_optional_path(textures.get(slot)) for slot in TEXTURE_SLOTS)
    return (albedo, roughness, normal)


def _build_config(payload: dict[str, Any], *, source: Path | None) -> RuntimeConfig:
    version = _integer(payload, "version")
    if version != CONFIG_VERSION:
        raise RuntimeError(f"未対応の config.yaml version です: got={version}")

    canvas_size = _int_pair(payload, "gallery.canvas_size")
    if min(canvas_size) <= 0:
        raise ValueError(f"gallery.canvas_size は正の値である必要があります: got={canvas_size}")
    depth = _integer(payload, "shapes.sierpinski_depth")
    if not 0 <= depth <= MAX_SIERPINSKI_DEPTH:
        raise ValueError(f"shapes.sierpinski_depth は 0..{MAX_SIERPINSKI_DEPTH} である必要があります: got={depth}")

    return RuntimeConfig(
        config_path=source,
        canvas_size=canvas_size,
        fps=_number(payload, "gallery.fps"),
        start_index=_integer(payload, "gallery.start_index"),
        background_color=_rgb(payload, "gallery.background_color"),
        sierpinski_depth=depth,
        texture_paths=_texture_paths(payload),
        window_pos_gallery=_int_pair(payload, "ui.window_positions.gallery"),
        window_pos_speed_gui=_int_pair(payload, "ui.window_positions.speed_gui"),
        speed_gui_window_size=_int_pair(payload, "ui.speed_gui.window_size"),
    )


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち、mapping はキー単位で再帰マージ）:
    1) 同梱 default_config.yaml
    2) `./.polygallery/config.yaml` / `~/.config/polygallery/config.yaml`（先に見つかった方）
    3) `set_config_path()`（`run(config_path=...)`）で指定したファイル

    Raises
    ------
    FileNotFoundError
        明示指定したファイルが存在しない場合。
    RuntimeError
        YAML の形式・型・version が不正な場合。
    ValueError
        値が許容範囲外の場合。
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit = _EXPLICIT_CONFIG_PATH
    if explicit is not None and not explicit.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit}")
    discovered = next((p for p in _discovery_candidates() if p.is_file()), None)

    payload = _read_packaged_defaults()
    for path in (discovered, explicit):
        if path is not None:
            payload = _merge_config(payload, _read_file(path))

    _CONFIG_CACHE = _build_config(payload, source=explicit or discovered)
    return _CONFIG_CACHE


__all__ = ["CONFIG_VERSION", "TEXTURE_SLOTS", "RuntimeConfig", "runtime_config", "set_config_path"]
