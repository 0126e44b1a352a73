import pytest
from pathlib import Path

from dubstudio.common.path.safe import resolve_root, safe_join


def test_resolve_root(tmp_path):
    p = resolve_root(tmp_path)
    assert isinstance(p, Path)
    assert p.exists()


def test_safe_join_inside(tmp_path):
    out = safe_join(tmp_path, Path("project_covers/hollow-knight.png"))
    assert out.parent == tmp_path.resolve() / "project_covers"


def test_safe_join_escapes_rejected(tmp_path):
    with pytest.raises(ValueError):
        safe_join(tmp_path, "../outside.png")
