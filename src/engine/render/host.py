"""
どこで: `engine.render.host`
何を: コントローラが依存するホスト（エンジン/ウィンドウ）側の最小インターフェース `CameraHost`。
なぜ: カメラ取得・ビューポート適用・バッファクリア・フレーム開始購読を抽象化し、
      pyglet 実装とテスト用フェイクを差し替え可能にするため。
"""

from __future__ import annotations

from typing import Any, Protocol

from engine.core.frame_events import FrameBeginCallback, Subscription
from engine.core.viewport import ViewportRect

from .types import RGBA, ScreenSize


class CameraHost(Protocol):
    """レターボックス制御が利用するホスト機能。"""

    def get_camera(self) -> Any | None:
        """制御対象のカメラを返す。未接続なら None。"""

    def apply_viewport(self, camera: Any, rect: ViewportRect) -> None:
        """カメラの描画先サブ矩形を設定する。"""

    def clear_buffer(self, color: RGBA, depth: float) -> None:
        """現在のレンダターゲット全体の色/深度をクリアする。"""

    def subscribe_frame_begin(self, callback: FrameBeginCallback) -> Subscription:
        """フレーム開始コールバックを登録する。"""

    def unsubscribe_frame_begin(self, callback: FrameBeginCallback) -> None:
        """フレーム開始コールバックを解除する。"""

    def get_screen_size(self) -> ScreenSize:
        """現在の描画面サイズ（px）。"""

    def is_actively_simulating(self) -> bool:
        """ループが進行中なら True（プレビュー/一時停止中は False）。"""


__all__ = ["CameraHost"]
