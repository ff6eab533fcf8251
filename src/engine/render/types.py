"""
どこで: `engine.render` 型定義。
何を: 変化検知用のスナップショット `CachedState` と関連エイリアス（RGBA/ScreenSize）。
なぜ: 直近に適用した入力一式を 1 つの不変値として保持し、値比較と原子的な差し替えを単純化するため。
"""

from __future__ import annotations

from dataclasses import dataclass

from engine.core.viewport import AspectRatio

RGBA = tuple[float, float, float, float]
ScreenSize = tuple[int, int]


@dataclass(frozen=True)
class CachedState:
    """直近に適用した入力のスナップショット（値等価で比較）。"""

    force_aspect_ratio: AspectRatio
    blend: float
    bar_color: RGBA
    screen_size: ScreenSize


__all__ = ["CachedState", "RGBA", "ScreenSize"]
