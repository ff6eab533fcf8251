from __future__ import annotations

import sys

import pytest


@pytest.mark.io
# - run_letterbox(init_only=True) returns before importing heavy deps (window creation).
def test_run_letterbox_init_only_headless():
    """`init_only=True` なら pyglet/Window 作成前に早期 return する。"""
    from api import run

    before = "pyglet" in sys.modules
    # Should not raise, even without a display
    assert run(window_size=(320, 240), force_aspect_ratio="4:3", fps=1, init_only=True) is None
    if not before:
        assert "pyglet" not in sys.modules


@pytest.mark.io
def test_run_letterbox_validates_before_window():
    from api import InvalidInputError, run_letterbox

    with pytest.raises(InvalidInputError):
        run_letterbox(force_aspect_ratio=(0, 9), init_only=True)
    with pytest.raises(ValueError):
        run_letterbox(window_size=(0, 240), init_only=True)
    with pytest.raises(ValueError):
        run_letterbox(bar_color="nope", init_only=True)
