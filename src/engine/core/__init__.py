"""
どこで: `engine.core` サブパッケージ。
何を: ビューポート計算（純関数）・例外・フレーム開始イベント・フレーム駆動（Tickable/FrameClock）を提供。
なぜ: GUI/GL に依存しない基盤を構成し、上位層（Render/API）から再利用可能にするため。
"""

from .errors import InvalidInputError, LetterboxError, MissingCameraError
from .frame_events import FrameBeginEvent, Subscription
from .viewport import FULL_SCREEN, AspectRatio, ViewportRect, bar_regions, compute_viewport

__all__ = [
    "AspectRatio",
    "ViewportRect",
    "FULL_SCREEN",
    "compute_viewport",
    "bar_regions",
    "FrameBeginEvent",
    "Subscription",
    "LetterboxError",
    "InvalidInputError",
    "MissingCameraError",
]
