"""
どこで: `engine.render.clear`
何を: 帯領域のクリア要否を管理する状態機械 `FrameClearCoordinator`（IDLE ⇄ PENDING_CLEAR）。
なぜ: ビューポート/帯色の変化後、次フレームの描画前にちょうど 1 回だけクリアするため。
      カメラ/パス数に依存せず、フレーム開始イベント 1 回につき高々 1 回クリアする。

規則:
- `arm()` で PENDING_CLEAR へ（どの状態からでも）。
- `on_frame_begin()` は PENDING_CLEAR か「ホストが進行中でない」ときにクリアして IDLE へ。
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable

from .types import RGBA

logger = logging.getLogger(__name__)


class ClearState(Enum):
    IDLE = auto()
    PENDING_CLEAR = auto()


class FrameClearCoordinator:
    def __init__(
        self,
        clear_buffer: Callable[[RGBA, float], None],
        is_actively_simulating: Callable[[], bool],
        *,
        depth: float = 1.0,
    ) -> None:
        self._clear_buffer = clear_buffer
        self._is_actively_simulating = is_actively_simulating
        self._depth = float(depth)
        self._state = ClearState.IDLE
        self._clear_count = 0

    @property
    def state(self) -> ClearState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state is ClearState.PENDING_CLEAR

    @property
    def clear_count(self) -> int:
        """これまでに実行したクリア回数。"""
        return self._clear_count

    @property
    def depth(self) -> float:
        return self._depth

    def arm(self) -> None:
        """次のフレーム開始でクリアするよう予約する。"""
        self._state = ClearState.PENDING_CLEAR

    def reset(self) -> None:
        self._state = ClearState.IDLE

    def on_frame_begin(self, color: RGBA) -> bool:
        """フレーム開始時に呼ぶ。クリアした場合 True を返す。"""
        if not (self.pending or not self._is_actively_simulating()):
            return False
        self._clear_buffer(color, self._depth)
        self._state = ClearState.IDLE
        self._clear_count += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("cleared bars: color=%s depth=%.3f", color, self._depth)
        return True


__all__ = ["ClearState", "FrameClearCoordinator"]
