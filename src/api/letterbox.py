"""
どこで: `api.letterbox`（実行ランナー）。
何を: pyglet ウィンドウ上で `LetterboxController` を駆動し、強制アスペクト比の描画領域と
      帯（レターボックス/ピラーボックス）を対話的に確認する。
なぜ: 少ない記述でコントローラの挙動（リサイズ・ブレンド・帯色・一時停止時の再クリア）を試せるようにするため。

実行フロー（概要）:
1) FPS/ウィンドウ/レターボックス設定の解決（引数 > `configs/default.yaml` > 既定値）。
2) `init_only=True` ならここで return（pyglet/ModernGL を import しない）。
3) `PygletHost` と `LetterboxController` を生成し、コントローラを開始（フレーム開始フック購読）。
4) コンテンツ描画コールバック（ビューポート内を塗る）を登録。
5) `FrameClock([controller])` を `pyglet.clock.schedule_interval` で駆動（入力チェック tick）。
6) キー操作:
   - ESC: 終了
   - SPACE: 一時停止/再開（一時停止中は毎フレーム帯をクリア）
   - UP/DOWN: ブレンド ±0.1
   - 1/2/3/4: 21:9 / 16:9 / 4:3 / 1:1

例:
    from api import run_letterbox
    run_letterbox(force_aspect_ratio="21:9", blend=1.0, bar_color="#000000")

ロギング:
- `common.logging.setup_default_logging()` を 1 度だけ適用（既存ハンドラがあれば no-op）。
"""

from __future__ import annotations

import logging

from common.logging import setup_default_logging
from engine.core.viewport import AspectRatioLike

from .letterbox_runner.utils import (
    preset_for_index,
    resolve_fps,
    resolve_letterbox_options,
    resolve_window_size,
    step_blend,
)

logger = logging.getLogger(__name__)


def run_letterbox(
    *,
    window_size: tuple[int, int] | None = None,
    force_aspect_ratio: AspectRatioLike | None = None,
    blend: float | None = None,
    bar_color: str | tuple[float, ...] | None = None,
    content_color: str | tuple[float, ...] | None = None,
    fps: int | None = None,
    init_only: bool = False,
) -> None:
    """レターボックス制御付きのウィンドウを開いて実行する。

    Parameters
    ----------
    window_size : tuple[int, int] | None
        初期ウィンドウサイズ [px]。None で設定ファイル/1280x720。
    force_aspect_ratio : AspectRatioLike | None
        強制アスペクト比（`(21, 9)`/`"21:9"`/`2.333` 等）。None で設定/21:9。
    blend : float | None
        0 で全画面、1 で強制比率を完全適用。範囲外は丸める。
    bar_color, content_color : str | tuple | None
        帯色/コンテンツ色（RGBA 0–1 または #RRGGBB/#RRGGBBAA）。
    fps : int | None
        入力チェックのレート。None で設定ファイルから解決。
    init_only : bool, default False
        True で設定解決と検証だけを行い、ウィンドウを作らずに戻る。
    """
    setup_default_logging()

    fps = resolve_fps(fps)
    window_width, window_height = resolve_window_size(window_size)
    options = resolve_letterbox_options(
        force_aspect_ratio=force_aspect_ratio,
        blend=blend,
        bar_color=bar_color,
        content_color=content_color,
    )
    logger.info(
        "letterbox runner: window=%dx%d ratio=%s blend=%.2f fps=%d",
        window_width,
        window_height,
        options.force_aspect_ratio,
        options.blend,
        fps,
    )

    if init_only:
        return None

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet
    from pyglet.window import key

    from engine.core.frame_clock import FrameClock

    from .letterbox_runner.render import create_host_and_controller, make_content_drawer

    host, controller = create_host_and_controller(window_width, window_height, options=options)
    host.window.add_draw_callback(make_content_drawer(host, options.content_color))

    frame_clock = FrameClock([controller])
    pyglet.clock.schedule_interval(frame_clock.tick, 1 / fps)

    number_keys = (key._1, key._2, key._3, key._4)

    @host.window.event
    def on_key_press(symbol, modifiers):  # noqa: ANN001
        if symbol == key.ESCAPE:
            host.window.dispatch_event("on_close")
            return pyglet.event.EVENT_HANDLED
        if symbol == key.SPACE:
            host.paused = not host.paused
            logger.info("paused=%s", host.paused)
        elif symbol in (key.UP, key.DOWN):
            controller.blend = step_blend(controller.blend, 1 if symbol == key.UP else -1)
            logger.info("blend=%.2f", controller.blend)
        elif symbol in number_keys:
            preset = preset_for_index(number_keys.index(symbol))
            if preset is not None:
                controller.force_aspect_ratio = preset
                host.window.set_caption(f"Letterbox {preset}")
                logger.info("force aspect ratio=%s", preset)
        return None

    @host.window.event
    def on_close():  # noqa: ANN001
        # 冪等なクリーンアップ
        if getattr(on_close, "_closed", False):
            return
        pyglet.clock.unschedule(frame_clock.tick)
        controller.close()
        host.release()
        setattr(on_close, "_closed", True)
        pyglet.app.exit()

    pyglet.app.run()


__all__ = ["run_letterbox"]
