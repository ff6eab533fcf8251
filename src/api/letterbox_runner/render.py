"""
どこで: `api.letterbox_runner.render`
何を: PygletHost（ウィンドウ/ModernGL）と LetterboxController の初期化、コンテンツ描画コールバック。
なぜ: `api.letterbox` を薄くし、描画初期化の責務を分離するため。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from .utils import LetterboxOptions

if TYPE_CHECKING:
    from engine.render.controller import LetterboxController
    from engine.render.pyglet_host import PygletHost, ViewportCamera

logger = logging.getLogger(__name__)


def create_host_and_controller(
    window_width: int,
    window_height: int,
    *,
    options: LetterboxOptions,
) -> tuple["PygletHost", "LetterboxController"]:
    """ウィンドウ/ModernGL/カメラを持つホストと、開始済みコントローラを返す。"""
    from engine.render.controller import LetterboxController
    from engine.render.pyglet_host import PygletHost

    host = PygletHost.create(
        window_width,
        window_height,
        caption=f"Letterbox {options.force_aspect_ratio}",
    )
    controller = LetterboxController(
        host,
        force_aspect_ratio=options.force_aspect_ratio,
        blend=options.blend,
        bar_color=options.bar_color,
    )
    controller.start()
    return host, controller


def make_content_drawer(
    host: "PygletHost", content_color: tuple[float, float, float, float]
) -> Callable[["ViewportCamera"], None]:
    """カメラのビューポート内をコンテンツ色で塗る描画コールバックを返す。"""
    r, g, b, a = content_color

    def _draw(camera: "ViewportCamera") -> None:
        vp = host.use_camera_viewport(camera)
        host.ctx.clear(r, g, b, a, viewport=vp)

    return _draw


__all__ = ["create_host_and_controller", "make_content_drawer"]
