"""
どこで: `engine.render` サブパッケージ。
何を: ホスト抽象（CameraHost）・帯クリアの状態機械・レターボックス制御・pyglet ホスト実装。
なぜ: 純粋計算（core）と描画/ウィンドウの責務を分離し、GL 依存を `pyglet_host` に局所化するため。

注: `pyglet_host` は pyglet/ModernGL を import するため、ここでは再輸出しない。
"""

from .clear import ClearState, FrameClearCoordinator
from .controller import LetterboxController
from .host import CameraHost
from .types import CachedState

__all__ = [
    "CameraHost",
    "CachedState",
    "ClearState",
    "FrameClearCoordinator",
    "LetterboxController",
]
