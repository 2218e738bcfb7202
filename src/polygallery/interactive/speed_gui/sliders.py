# どこで: `src/polygallery/interactive/speed_gui/sliders.py`。
# 何を: XY / XZ / XW の速度スライダー 3 本を描画し、編集を AnimationPhaseController へ反映する。
# なぜ: ImGui 呼び出しと位相更新の規則を GUI のライフサイクル管理から切り離し、単体で検証できるようにするため。

from __future__ import annotations

from typing import Any

from polygallery.core.phase import AXES, SPEED_MAX, SPEED_MIN, AnimationPhaseController, snap_speed

SLIDER_LABELS: dict[str, str] = {
    "xy": "XY speed",
    "xz": "XZ speed",
    "xw": "XW speed",
}

INACTIVE_MESSAGE = "Rotation speed applies to the Tesseract only."


def render_speed_sliders(
    imgui: Any,
    phases: AnimationPhaseController | None,
    *,
    t: float,
) -> list[str]:
    """スライダーを描画し、速度を変更した軸名のリストを返す。

    Parameters
    ----------
    imgui : module
        pyimgui モジュール（`slider_float` / `text` を使う）。
    phases : AnimationPhaseController | None
        編集対象。None の場合はスライダーを出さず案内文だけを表示する。
    t : float
        描画と共有しているフレーム時刻。offset の再計算に使う。
    """
    if phases is None:
        imgui.text(INACTIVE_MESSAGE)
        return []

    changed_axes: list[str] = []
    for axis in AXES:
        current = phases.speed(axis)
        changed, raw = imgui.slider_float(
            SLIDER_LABELS[axis],
            float(current),
            SPEED_MIN,
            SPEED_MAX,
            "%.1f",
        )
        if not changed:
            continue
        # ImGui のスライダーは連続値なので 0.1 刻みに丸め、値が変わったときだけ位相を更新する。
        new_speed = snap_speed(raw)
        if new_speed == current:
            continue
        phases.set_speed(axis, new_speed, t=t)
        changed_axes.append(axis)
    return changed_axes


__all__ = ["INACTIVE_MESSAGE", "SLIDER_LABELS", "render_speed_sliders"]
