"""
どこで: `api` 入口（高レベル公開 API）。
何を: ビューポート計算・コントローラ・ランナーを単一名前空間から再輸出。
なぜ: 利用者が `from api import ...` だけで計算→制御→実行まで完結できるようにするため。

Usage:
    from api import compute_viewport, AspectRatio, run_letterbox

    rect = compute_viewport(1920, 1080, AspectRatio(21, 9), blend=1.0)
    run_letterbox(force_aspect_ratio=(21, 9))
"""

from engine.core.errors import InvalidInputError, LetterboxError, MissingCameraError
from engine.core.viewport import FULL_SCREEN, AspectRatio, ViewportRect, bar_regions, compute_viewport
from engine.render.clear import ClearState, FrameClearCoordinator
from engine.render.controller import LetterboxController

from .letterbox import run_letterbox as run
from .letterbox import run_letterbox as run_letterbox

__all__ = [
    # 計算
    "AspectRatio",
    "ViewportRect",
    "FULL_SCREEN",
    "compute_viewport",
    "bar_regions",
    # 制御
    "LetterboxController",
    "FrameClearCoordinator",
    "ClearState",
    # 例外
    "LetterboxError",
    "InvalidInputError",
    "MissingCameraError",
    # 実行
    "run_letterbox",
    "run",
]

__version__ = "2026.10"
