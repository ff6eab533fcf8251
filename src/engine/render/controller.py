"""
どこで: `engine.render.controller`
何を: 強制アスペクト比・ブレンド・帯色を保持し、入力変化を検知してビューポートを再計算/適用、
      フレーム開始フックで帯領域を 1 回だけクリアする `LetterboxController`。
なぜ: 純粋計算（`engine.core.viewport`）とホスト（ウィンドウ/GL）の間に立ち、
      変化検知・クリア予約・購読の寿命管理を一箇所に集約するため。

流れ:
1) `start()` でフレーム開始フックを購読し、カメラを取得して初回計算。
   カメラが無ければエラーを 1 度だけ報告し、以降はカメラが得られるまで何もしない。
2) `tick(dt)`（論理フレームごと）で画面サイズを取得し、`CachedState` と値比較。
   差があれば矩形を再計算→適用→スナップショット差し替え→クリア予約。
3) フレーム開始（描画前）に `FrameClearCoordinator` が予約を消費してクリア。
4) `close()` で購読解除。GC 経由の破棄でも `weakref.finalize` で解除される。

使用例:
    controller = LetterboxController(host, force_aspect_ratio=(21, 9))
    with controller:
        clock = FrameClock([controller])
        ...
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, Sequence

from common.settings import get as get_settings
from engine.core.errors import InvalidInputError, LetterboxError, MissingCameraError
from engine.core.frame_events import Subscription
from engine.core.tickable import Tickable
from engine.core.viewport import (
    AspectRatio,
    AspectRatioLike,
    ViewportRect,
    bar_regions,
    clamp01,
    compute_viewport,
)
from util.color import OPAQUE_BLACK, normalize_color

from .clear import FrameClearCoordinator
from .host import CameraHost
from .types import RGBA, CachedState, ScreenSize

logger = logging.getLogger(__name__)

DEFAULT_FORCE_ASPECT_RATIO = AspectRatio(21.0, 9.0)
DEFAULT_BLEND = 1.0


class _FrameBeginHook:
    """コントローラを弱参照で保持するフレーム開始フック。

    所有者が既に破棄されていれば自身の購読を解除して戻る。
    """

    __slots__ = ("_owner", "_host", "__weakref__")

    def __init__(self, owner: "LetterboxController", host: CameraHost) -> None:
        self._owner = weakref.ref(owner)
        self._host = host

    def __call__(self, cameras: Sequence[Any]) -> None:
        owner = self._owner()
        if owner is None:
            logger.debug("controller is gone; unsubscribing stale frame-begin hook")
            self._host.unsubscribe_frame_begin(self)
            return
        owner._on_frame_begin(cameras)


class LetterboxController(Tickable):
    """レターボックス/ピラーボックスのビューポート制御。"""

    def __init__(
        self,
        host: CameraHost,
        *,
        force_aspect_ratio: AspectRatioLike = DEFAULT_FORCE_ASPECT_RATIO,
        blend: float = DEFAULT_BLEND,
        bar_color: object = OPAQUE_BLACK,
        tolerance: float | None = None,
        clear_depth: float | None = None,
    ) -> None:
        """
        host: カメラ取得/ビューポート適用/クリア/フレーム開始購読を提供するホスト
        tolerance: 画面比と強制比の近似一致判定（None で設定 `RATIO_TOLERANCE`）
        clear_depth: 帯クリア時の深度値（None で設定 `CLEAR_DEPTH`）
        """
        settings = get_settings()
        self._host = host
        self._force_aspect_ratio = AspectRatio.coerce(force_aspect_ratio)
        self._blend = clamp01(blend)
        self._bar_color: RGBA = normalize_color(bar_color)
        self._tolerance = float(settings.RATIO_TOLERANCE if tolerance is None else tolerance)
        self._debug_viewport = bool(settings.DEBUG_VIEWPORT)
        self._coordinator = FrameClearCoordinator(
            host.clear_buffer,
            host.is_actively_simulating,
            depth=settings.CLEAR_DEPTH if clear_depth is None else clear_depth,
        )

        self._camera: Any | None = None
        self._viewport: ViewportRect | None = None
        self._cached: CachedState | None = None
        # 不正入力の警告を同一スナップショットで繰り返さないための記録
        self._last_invalid: CachedState | None = None
        self._subscription: Subscription | None = None
        self._finalizer: weakref.finalize | None = None
        self._missing_camera_reported = False
        self._started = False
        self._closed = False

    @classmethod
    def from_config(cls, host: CameraHost, **overrides: Any) -> "LetterboxController":
        """`configs/default.yaml` の `letterbox:` セクションを既定値として生成する。

        `overrides` の None 以外の値が設定値より優先される。
        """
        from util.utils import load_config_section

        cfg = load_config_section("letterbox")
        kwargs: dict[str, Any] = {}
        for key in ("force_aspect_ratio", "blend", "bar_color"):
            if cfg.get(key) is not None:
                kwargs[key] = cfg[key]
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(host, **kwargs)

    # ------------------------------------------------------------------ #
    # 設定                                                               #
    # ------------------------------------------------------------------ #
    @property
    def force_aspect_ratio(self) -> AspectRatio:
        return self._force_aspect_ratio

    @force_aspect_ratio.setter
    def force_aspect_ratio(self, value: AspectRatioLike) -> None:
        self._force_aspect_ratio = AspectRatio.coerce(value)

    @property
    def blend(self) -> float:
        return self._blend

    @blend.setter
    def blend(self, value: float) -> None:
        self._blend = clamp01(value)

    @property
    def bar_color(self) -> RGBA:
        """帯（レターボックス/ピラーボックス）の色 RGBA(0–1)。"""
        return self._bar_color

    @bar_color.setter
    def bar_color(self, value: object) -> None:
        self._bar_color = normalize_color(value)

    # ------------------------------------------------------------------ #
    # 状態                                                               #
    # ------------------------------------------------------------------ #
    @property
    def camera(self) -> Any | None:
        return self._camera

    @property
    def viewport(self) -> ViewportRect | None:
        """直近に適用した矩形（未適用なら None）。"""
        return self._viewport

    @property
    def cached_state(self) -> CachedState | None:
        return self._cached

    @property
    def coordinator(self) -> FrameClearCoordinator:
        return self._coordinator

    @property
    def started(self) -> bool:
        return self._started and not self._closed

    # ------------------------------------------------------------------ #
    # ライフサイクル                                                     #
    # ------------------------------------------------------------------ #
    def start(self) -> None:
        """フレーム開始フックを購読し、カメラを取得して初回のビューポートを適用する。"""
        if self._closed:
            raise LetterboxError("controller is closed")
        if self._started:
            return
        self._started = True

        subscription = self._host.subscribe_frame_begin(_FrameBeginHook(self, self._host))
        self._subscription = subscription
        self._finalizer = weakref.finalize(self, subscription.close)

        self._camera = self._host.get_camera()
        if self._camera is None:
            self._report_missing_camera()
            return
        self._apply(self._snapshot(self._host.get_screen_size()))

    def tick(self, dt: float) -> None:
        """入力チェック。論理フレームごとに 1 回、描画より先に呼ぶこと。"""
        if not self.started:
            return
        if self._camera is None:
            camera = self._host.get_camera()
            if camera is None:
                return
            self._camera = camera
            logger.info("camera attached: %r", camera)
        snapshot = self._snapshot(self._host.get_screen_size())
        if snapshot != self._cached:
            self._apply(snapshot)

    def refresh(self) -> None:
        """次の `tick` で入力に差が無くても再計算させる。"""
        self._cached = None
        self._last_invalid = None

    def close(self) -> None:
        """購読を解除し、カメラ/矩形/スナップショットを破棄する（冪等）。"""
        if self._closed:
            return
        self._closed = True
        if self._finalizer is not None:
            self._finalizer()
        self._subscription = None
        self._finalizer = None
        self._camera = None
        self._viewport = None
        self._cached = None
        self._last_invalid = None
        self._coordinator.reset()

    def __enter__(self) -> "LetterboxController":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    # ------------------------------------------------------------------ #
    # Internal helpers                                                   #
    # ------------------------------------------------------------------ #
    def _snapshot(self, screen_size: ScreenSize) -> CachedState:
        w, h = screen_size
        return CachedState(
            force_aspect_ratio=self._force_aspect_ratio,
            blend=self._blend,
            bar_color=self._bar_color,
            screen_size=(int(w), int(h)),
        )

    def _apply(self, snapshot: CachedState) -> bool:
        """矩形を再計算して適用し、スナップショット差し替えとクリア予約を行う。"""
        w, h = snapshot.screen_size
        try:
            rect = compute_viewport(
                w,
                h,
                snapshot.force_aspect_ratio,
                snapshot.blend,
                tolerance=self._tolerance,
            )
        except InvalidInputError as e:
            if snapshot != self._last_invalid:
                logger.warning("viewport update skipped: %s", e)
                self._last_invalid = snapshot
            return False

        self._host.apply_viewport(self._camera, rect)
        # 矩形とスナップショットは同時に差し替える
        self._viewport, self._cached = rect, snapshot
        self._last_invalid = None
        self._coordinator.arm()
        logger.debug(
            "viewport applied: screen=%dx%d ratio=%s blend=%.3f rect=%s",
            w,
            h,
            snapshot.force_aspect_ratio,
            snapshot.blend,
            rect.as_tuple(),
        )
        if self._debug_viewport:
            logger.info(
                "viewport=%s bars=%s",
                rect.as_tuple(),
                [r.as_tuple() for r in bar_regions(rect)],
            )
        return True

    def _on_frame_begin(self, cameras: Sequence[Any]) -> None:
        if self._closed or self._camera is None:
            return
        self._coordinator.on_frame_begin(self._bar_color)

    def _report_missing_camera(self) -> None:
        if self._missing_camera_reported:
            return
        self._missing_camera_reported = True
        logger.error("%s", MissingCameraError())


__all__ = ["LetterboxController", "DEFAULT_FORCE_ASPECT_RATIO", "DEFAULT_BLEND"]
