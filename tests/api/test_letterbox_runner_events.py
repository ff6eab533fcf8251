from __future__ import annotations

import sys
import types

import pytest

from api.letterbox import run_letterbox
from api.letterbox_runner.utils import preset_for_index

_EVENT_HANDLED = True
_KEYS = types.SimpleNamespace(ESCAPE=1, SPACE=2, UP=3, DOWN=4, _1=11, _2=12, _3=13, _4=14)


class _DummyWindow:
    """pyglet の EventDispatcher と同じく、登録ハンドラが処理しなければ既定ハンドラを呼ぶ。"""

    def __init__(self) -> None:
        self.handlers: dict[str, object] = {}
        self.draw_callbacks: list[object] = []
        self.close_calls = 0
        self.caption = ""

    def event(self, func):  # noqa: ANN001
        self.handlers[func.__name__] = func
        return func

    def add_draw_callback(self, func) -> None:  # noqa: ANN001
        self.draw_callbacks.append(func)

    def set_caption(self, caption: str) -> None:
        self.caption = caption

    def dispatch_event(self, name: str, *args):  # noqa: ANN002
        handler = self.handlers.get(name)
        if handler is not None and handler(*args) is _EVENT_HANDLED:  # type: ignore[operator]
            return _EVENT_HANDLED
        default = getattr(self, name, None)
        if default is not None:
            default(*args)
        return None

    def on_close(self) -> None:
        self.close_calls += 1


class _DummyHost:
    def __init__(self) -> None:
        self.window = _DummyWindow()
        self.paused = False
        self.release_calls = 0

    def release(self) -> None:
        self.release_calls += 1


class _DummyController:
    def __init__(self) -> None:
        self.blend = 1.0
        self.force_aspect_ratio = None
        self.close_calls = 0

    def tick(self, dt: float) -> None:
        pass

    def close(self) -> None:
        self.close_calls += 1


@pytest.fixture
def runner_env(monkeypatch: pytest.MonkeyPatch):
    """pyglet と描画初期化を差し替え、`pyglet.app.run` で任意の操作を再生できるようにする。"""
    env = types.SimpleNamespace(
        host=_DummyHost(),
        controller=_DummyController(),
        scheduled=[],
        unscheduled=[],
        exit_calls=0,
        script=lambda env: None,
    )

    def _exit() -> None:
        env.exit_calls += 1

    fake_pyglet = types.ModuleType("pyglet")
    fake_window = types.ModuleType("pyglet.window")
    fake_window.key = _KEYS  # type: ignore[attr-defined]
    fake_pyglet.window = fake_window  # type: ignore[attr-defined]
    fake_pyglet.event = types.SimpleNamespace(EVENT_HANDLED=_EVENT_HANDLED)  # type: ignore[attr-defined]
    fake_pyglet.clock = types.SimpleNamespace(  # type: ignore[attr-defined]
        schedule_interval=lambda func, interval: env.scheduled.append((func, interval)),
        unschedule=lambda func: env.unscheduled.append(func),
    )
    fake_pyglet.app = types.SimpleNamespace(  # type: ignore[attr-defined]
        run=lambda: env.script(env), exit=_exit
    )
    monkeypatch.setitem(sys.modules, "pyglet", fake_pyglet)
    monkeypatch.setitem(sys.modules, "pyglet.window", fake_window)

    fake_render = types.ModuleType("api.letterbox_runner.render")
    fake_render.create_host_and_controller = (  # type: ignore[attr-defined]
        lambda w, h, *, options: (env.host, env.controller)
    )
    fake_render.make_content_drawer = lambda host, color: (lambda cam: None)  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "api.letterbox_runner.render", fake_render)
    return env


def _press(env, symbol: int):  # noqa: ANN001
    return env.host.window.handlers["on_key_press"](symbol, 0)


def test_escape_closes_window_once_and_cleans_up(runner_env) -> None:  # noqa: ANN001
    runner_env.script = lambda env: _press(env, _KEYS.ESCAPE)
    assert run_letterbox(window_size=(320, 240), fps=30) is None

    env = runner_env
    assert len(env.scheduled) == 1
    tick, interval = env.scheduled[0]
    assert interval == pytest.approx(1 / 30)
    assert env.unscheduled == [tick]
    assert env.controller.close_calls == 1
    assert env.host.release_calls == 1
    assert env.exit_calls == 1
    # 後始末はハンドラ、ウィンドウを閉じるのは既定の on_close（1 回だけ）
    assert env.host.window.close_calls == 1


def test_repeated_close_only_cleans_up_once(runner_env) -> None:  # noqa: ANN001
    def _script(env) -> None:  # noqa: ANN001
        env.host.window.dispatch_event("on_close")
        env.host.window.dispatch_event("on_close")

    runner_env.script = _script
    run_letterbox(window_size=(320, 240), fps=30)
    assert runner_env.controller.close_calls == 1
    assert runner_env.host.release_calls == 1
    assert runner_env.exit_calls == 1


def test_keys_toggle_pause_step_blend_and_select_preset(runner_env) -> None:  # noqa: ANN001
    results: list[object] = []

    def _script(env) -> None:  # noqa: ANN001
        results.append(_press(env, _KEYS.SPACE))
        results.append(_press(env, _KEYS.DOWN))
        results.append(_press(env, _KEYS._2))

    runner_env.script = _script
    run_letterbox(window_size=(320, 240), blend=1.0, fps=30)

    env = runner_env
    assert results == [None, None, None]
    assert env.host.paused is True
    assert env.controller.blend == pytest.approx(0.9)
    assert env.controller.force_aspect_ratio == preset_for_index(1)
    assert env.host.window.caption == f"Letterbox {preset_for_index(1)}"
