"""共通フィクスチャ。

- 記録型のフェイクホスト（`CameraHost` 実装）
- 設定（環境変数）の再読込
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

import pytest

from common import settings as settings_mod
from engine.core.frame_events import FrameBeginEvent, Subscription
from engine.core.viewport import ViewportRect


@dataclass(eq=False)
class FakeCamera:
    name: str = "main"


@dataclass
class FakeHost:
    """呼び出しを記録するだけのホスト。`begin_frame()` でフレーム開始を模擬する。"""

    camera: FakeCamera | None = field(default_factory=FakeCamera)
    screen_size: tuple[int, int] = (1920, 1080)
    simulating: bool = True
    event: FrameBeginEvent = field(default_factory=FrameBeginEvent)
    applied: list[tuple[Any, ViewportRect]] = field(default_factory=list)
    clears: list[tuple[tuple[float, float, float, float], float]] = field(default_factory=list)

    def get_camera(self) -> FakeCamera | None:
        return self.camera

    def apply_viewport(self, camera: Any, rect: ViewportRect) -> None:
        self.applied.append((camera, rect))

    def clear_buffer(self, color, depth: float) -> None:  # noqa: ANN001
        self.clears.append((tuple(color), depth))

    def subscribe_frame_begin(self, callback) -> Subscription:  # noqa: ANN001
        return self.event.subscribe(callback)

    def unsubscribe_frame_begin(self, callback) -> None:  # noqa: ANN001
        self.event.unsubscribe(callback)

    def get_screen_size(self) -> tuple[int, int]:
        return self.screen_size

    def is_actively_simulating(self) -> bool:
        return self.simulating

    def begin_frame(self, cameras: Sequence[Any] | None = None) -> None:
        if cameras is None:
            cameras = [self.camera] if self.camera is not None else []
        self.event.emit(cameras)


@pytest.fixture()
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture()
def camera_less_host() -> FakeHost:
    return FakeHost(camera=None)


@pytest.fixture()
def reload_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """環境変数を設定したうえで `reload_from_env()` を呼ぶためのフィクスチャ。

    テスト終了後は環境変数を戻して再読込する。
    """
    yield monkeypatch
    monkeypatch.undo()
    settings_mod.reload_from_env()
