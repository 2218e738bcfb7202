"""レイヤ間の依存方向（core → interactive → api）が守られているかを静的に検査する。"""

from __future__ import annotations

import ast
from importlib.util import resolve_name
from pathlib import Path

import pytest

_SRC = Path(__file__).resolve().parents[2] / "src"


def _package_of(path: Path) -> str:
    """ファイルが属するパッケージ名（相対 import の基準）を返す。"""
    # `pkg/__init__.py` も `pkg/mod.py` も基準は pkg。
    return ".".join(path.relative_to(_SRC).parts[:-1])


def _imported_names(node: ast.AST, *, package: str) -> set[str]:
    """1 つの import 文が参照するモジュール名（`from x import y` は x と x.y）を返す。"""
    if isinstance(node, ast.Import):
        return {alias.name for alias in node.names}
    if not isinstance(node, ast.ImportFrom):
        return set()

    if node.level:
        try:
            base = resolve_name("." * node.level + (node.module or ""), package)
        except ImportError as exc:
            raise ValueError(f"相対 import を解決できません: package={package!r} level={node.level}") from exc
    elif node.module is None:
        return set()
    else:
        base = node.module
    return {base} | {f"{base}.{alias.name}" for alias in node.names if alias.name != "*"}


def _violations(layer: Path, forbidden: tuple[str, ...]) -> list[str]:
    found: list[str] = []
    for path in sorted(layer.rglob("*.py")):
        package = _package_of(path)
        tree = ast.parse(path.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            for name in _imported_names(node, package=package):
                if name.startswith(forbidden):
                    found.append(f"{path.relative_to(_SRC)}: {name}")
    return found


def test_core_stays_free_of_windowing_and_gl() -> None:
    bad = _violations(
        _SRC / "polygallery" / "core",
        ("polygallery.interactive", "polygallery.api", "pyglet", "moderngl", "imgui"),
    )
    assert bad == [], "\n".join(bad)


def test_gl_layer_does_not_reach_into_windowing() -> None:
    bad = _violations(
        _SRC / "polygallery" / "interactive" / "gl",
        ("polygallery.api", "polygallery.interactive.runtime", "pyglet", "imgui"),
    )
    assert bad == [], "\n".join(bad)


def _stmt(source: str) -> ast.stmt:
    (node,) = ast.parse(source).body
    return node


@pytest.mark.parametrize(
    ("source", "package", "expected"),
    [
        ("from ..interactive import shapes", "polygallery.core", {"polygallery.interactive", "polygallery.interactive.shapes"}),
        ("from .. import api", "polygallery.core", {"polygallery", "polygallery.api"}),
        ("from . import cube", "polygallery.core.primitives", {"polygallery.core.primitives", "polygallery.core.primitives.cube"}),
        ("from ..interactive import *", "polygallery.core", {"polygallery.interactive"}),
        ("import pyglet.window", "polygallery.core", {"pyglet.window"}),
    ],
)
def test_imported_names_resolves_relative_and_absolute_imports(
    source: str, package: str, expected: set[str]
) -> None:
    assert _imported_names(_stmt(source), package=package) == expected


def test_imported_names_rejects_imports_beyond_top_level() -> None:
    with pytest.raises(ValueError):
        _imported_names(_stmt("from ...interactive import shapes"), package="polygallery")


def test_package_of_treats_init_as_its_own_package() -> None:
    assert _package_of(_SRC / "polygallery" / "core" / "__init__.py") == "polygallery.core"
    assert _package_of(_SRC / "polygallery" / "core" / "phase.py") == "polygallery.core"
