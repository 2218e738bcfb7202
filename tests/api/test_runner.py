from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("pyglet.window")

from polygallery.api import runner  # noqa: E402
from polygallery.core.runtime_config import set_config_path  # noqa: E402


class DummyWindow:
    def __init__(self) -> None:
        self.location: tuple[int, int] | None = None

    def set_location(self, x: int, y: int) -> None:
        self.location = (x, y)


class DummyGallery:
    instances: list["DummyGallery"] = []

    def __init__(self, catalogue, *, canvas_size, clock, start_index=0) -> None:
        self.catalogue = catalogue
        self.canvas_size = canvas_size
        self.clock = clock
        self.start_index = start_index
        self.window = DummyWindow()
        self.phases = None
        self.closed = False
        DummyGallery.instances.append(self)

    def draw_frame(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True


class DummyLoop:
    runs: list[tuple[int, float]] = []
    error: Exception | None = None

    def __init__(self, tasks, *, fps) -> None:
        self.tasks = tasks
        self.fps = fps

    def run(self) -> None:
        DummyLoop.runs.append((len(self.tasks), self.fps))
        if DummyLoop.error is not None:
            raise DummyLoop.error


@pytest.fixture(autouse=True)
def _patch_subsystems(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(runner, "GalleryWindowSystem", DummyGallery)
    monkeypatch.setattr(runner, "MultiWindowLoop", DummyLoop)
    DummyGallery.instances = []
    DummyLoop.runs = []
    DummyLoop.error = None
    yield
    set_config_path(None)


def test_run_wires_gallery_from_config(tmp_path: Path):
    config = tmp_path / "config.yaml"
    config.write_text("gallery:\n  start_index: 3\n  fps: 30\n", encoding="utf-8")

    runner.run(config_path=config, speed_gui=False)

    gallery = DummyGallery.instances[0]
    assert gallery.start_index == 3
    assert gallery.canvas_size == (640, 480)
    assert [s.name for s in gallery.catalogue][3] == "Tesseract"
    assert gallery.window.location == (25, 25)
    assert DummyLoop.runs == [(1, 30.0)]
    assert gallery.closed


def test_run_arguments_override_config():
    runner.run(start_index=1, fps=0, speed_gui=False)

    assert DummyGallery.instances[0].start_index == 1
    assert DummyLoop.runs == [(1, 0.0)]


def test_gallery_is_closed_when_loop_fails():
    DummyLoop.error = RuntimeError("boom")
    with pytest.raises(RuntimeError, match="boom"):
        runner.run(speed_gui=False)
    assert DummyGallery.instances[0].closed


def test_importing_the_runner_does_not_open_a_display():
    import pyglet

    # tests/conftest.py で無効化済み。有効だと pyglet.window の import でディスプレイ接続が走る。
    assert pyglet.options["shadow_window"] is False
