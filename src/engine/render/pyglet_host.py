"""
どこで: `engine.render.pyglet_host`
何を: pyglet ウィンドウ + ModernGL による `CameraHost` 実装。
      `LetterboxWindow` は描画イベントの先頭でフレーム開始イベントを発火し、
      その後カメラごとに描画コールバックを呼ぶ。
なぜ: コントローラ（engine.render.controller）を実ウィンドウで駆動するための最小ホストを提供するため。

使用例:
    host = PygletHost.create(1280, 720)
    controller = LetterboxController(host)
    controller.start()
    host.window.add_draw_callback(lambda cam: host.use_camera_viewport(cam))
    pyglet.app.run()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

import moderngl
import pyglet
from pyglet.gl import Config

from engine.core.frame_events import FrameBeginCallback, FrameBeginEvent, Subscription
from engine.core.viewport import FULL_SCREEN, ViewportRect

from .types import RGBA, ScreenSize

logger = logging.getLogger(__name__)


@dataclass
class ViewportCamera:
    """正規化矩形と、適用時のフレームバッファサイズから求めたピクセルビューポート。"""

    name: str = "main"
    rect: ViewportRect = FULL_SCREEN
    pixel_viewport: tuple[int, int, int, int] = (0, 0, 0, 0)


class LetterboxWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        caption: str = "Letterbox",
        resizable: bool = True,
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            caption: タイトル。
            resizable: リサイズ可否（リサイズ時は次の tick でビューポートが再計算される）。
        """
        config = Config(double_buffer=True, sample_buffers=1, samples=4, vsync=True)
        super().__init__(
            width=width, height=height, caption=caption, config=config, resizable=resizable
        )
        self.frame_begin = FrameBeginEvent()
        self._cameras: list[ViewportCamera] = []
        self._draw_callbacks: list[Callable[[ViewportCamera], None]] = []

    @property
    def cameras(self) -> tuple[ViewportCamera, ...]:
        return tuple(self._cameras)

    def add_camera(self, camera: ViewportCamera) -> None:
        if camera not in self._cameras:
            self._cameras.append(camera)

    def add_draw_callback(self, func: Callable[[ViewportCamera], None]) -> None:
        """
        `on_draw` 中にカメラごとに呼び出す描画関数を登録する。

        - 関数は対象カメラを受け取り、副作用で描画を行うこと。
        - 登録順に呼び出される。
        """
        self._draw_callbacks.append(func)

    def on_draw(self):  # Pyglet 既定のイベント名
        """フレーム開始イベント（帯クリア）→ カメラごとの描画コールバック の順に呼ぶ。"""
        cameras = tuple(self._cameras)
        self.frame_begin.emit(cameras)
        for cam in cameras:
            for cb in self._draw_callbacks:
                cb(cam)


class PygletHost:
    """`LetterboxWindow` と ModernGL コンテキストを束ねた `CameraHost`。"""

    def __init__(
        self,
        window: LetterboxWindow,
        ctx: Any,
        *,
        camera: ViewportCamera | None = None,
    ) -> None:
        self.window = window
        self.ctx = ctx
        self._camera = camera
        self._paused = False
        if camera is not None:
            window.add_camera(camera)

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        *,
        caption: str = "Letterbox",
        with_camera: bool = True,
    ) -> "PygletHost":
        """ウィンドウ/ModernGL コンテキスト（とカメラ 1 台）を生成する。"""
        window = LetterboxWindow(width, height, caption=caption)
        ctx = moderngl.create_context()
        ctx.enable(moderngl.BLEND)
        ctx.blend_func = (moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA)
        return cls(window, ctx, camera=ViewportCamera() if with_camera else None)

    # ---- CameraHost ----
    def get_camera(self) -> ViewportCamera | None:
        return self._camera

    def attach_camera(self, camera: ViewportCamera) -> None:
        self._camera = camera
        self.window.add_camera(camera)

    def apply_viewport(self, camera: ViewportCamera, rect: ViewportRect) -> None:
        fw, fh = self.get_screen_size()
        camera.rect = rect
        camera.pixel_viewport = rect.to_pixels(fw, fh)

    def clear_buffer(self, color: RGBA, depth: float) -> None:
        r, g, b, a = color
        self.ctx.clear(r, g, b, a, depth=depth)

    def subscribe_frame_begin(self, callback: FrameBeginCallback) -> Subscription:
        return self.window.frame_begin.subscribe(callback)

    def unsubscribe_frame_begin(self, callback: FrameBeginCallback) -> None:
        self.window.frame_begin.unsubscribe(callback)

    def get_screen_size(self) -> ScreenSize:
        fw, fh = self.window.get_framebuffer_size()
        return int(fw), int(fh)

    def is_actively_simulating(self) -> bool:
        return not self._paused

    # ---- helpers ----
    @property
    def paused(self) -> bool:
        """一時停止（プレビュー）中は毎フレーム帯をクリアする。"""
        return self._paused

    @paused.setter
    def paused(self, value: bool) -> None:
        self._paused = bool(value)

    def use_camera_viewport(self, camera: ViewportCamera) -> tuple[int, int, int, int]:
        """GL ビューポートをカメラの描画領域に設定して返す。"""
        vp = camera.pixel_viewport
        if vp[2] <= 0 or vp[3] <= 0:
            vp = camera.rect.to_pixels(*self.get_screen_size())
        self.ctx.viewport = vp
        return vp

    def release(self) -> None:
        """購読を全解除する（コンテキストはウィンドウ側が所有）。"""
        self.window.frame_begin.clear()


__all__ = ["ViewportCamera", "LetterboxWindow", "PygletHost"]
