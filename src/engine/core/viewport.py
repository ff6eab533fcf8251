"""
どこで: `engine.core.viewport`（純粋計算）。
何を: 強制アスペクト比・画面サイズ・ブレンド係数から、正規化ビューポート矩形
      （x, y, w, h ∈ [0, 1]）を求める。残り領域がレターボックス/ピラーボックスの帯。
なぜ: GUI/GL から切り離した純関数としてテスト可能にし、制御層は適用と変化検知だけに集中させるため。

使用例:
    rect = compute_viewport(1920, 1080, AspectRatio(21, 9), blend=1.0)
    # -> ViewportRect(x=0.0, y=0.119..., width=1.0, height=0.761...)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

import numpy as np

from .errors import InvalidInputError

DEFAULT_RATIO_TOLERANCE = 1e-5


def clamp01(x: float) -> float:
    """値を [0, 1] に丸める（NaN は 0 とみなす）。"""
    x = float(x)
    if not x > 0.0:
        return 0.0
    return 1.0 if x > 1.0 else x


def is_close(a: float, b: float, tolerance: float | None = None) -> bool:
    """相対許容誤差での近似一致（`None` で既定 1e-5）。"""
    tol = DEFAULT_RATIO_TOLERANCE if tolerance is None else float(tolerance)
    return math.isclose(float(a), float(b), rel_tol=tol, abs_tol=0.0)


@dataclass(frozen=True)
class AspectRatio:
    """強制アスペクト比（幅:高さ）。両成分とも正であること。"""

    width: float
    height: float

    def __post_init__(self) -> None:
        w, h = float(self.width), float(self.height)
        if not (math.isfinite(w) and math.isfinite(h)) or w <= 0.0 or h <= 0.0:
            raise InvalidInputError(
                f"aspect ratio components must be positive, got {self.width}:{self.height}"
            )
        object.__setattr__(self, "width", w)
        object.__setattr__(self, "height", h)

    @property
    def ratio(self) -> float:
        return self.width / self.height

    @classmethod
    def coerce(cls, value: "AspectRatioLike") -> "AspectRatio":
        """`AspectRatio` / `(w, h)` / `"21:9"` / 正の比率値 を `AspectRatio` に変換する。"""
        if isinstance(value, AspectRatio):
            return value
        if isinstance(value, str):
            parts = value.replace("/", ":").split(":")
            if len(parts) != 2:
                raise InvalidInputError(f"invalid aspect ratio string: {value!r}")
            try:
                return cls(float(parts[0]), float(parts[1]))
            except ValueError as e:
                raise InvalidInputError(f"invalid aspect ratio string: {value!r}") from e
        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                raise InvalidInputError(f"aspect ratio pair must have 2 items, got {value!r}")
            return cls(float(value[0]), float(value[1]))
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return cls(float(value), 1.0)
        raise InvalidInputError(f"unsupported aspect ratio: {value!r}")

    def __str__(self) -> str:
        return f"{self.width:g}:{self.height:g}"


AspectRatioLike = Union[AspectRatio, tuple, list, str, float, int]


@dataclass(frozen=True)
class ViewportRect:
    """レンダターゲット上の正規化矩形（原点は左下）。"""

    x: float
    y: float
    width: float
    height: float

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    @property
    def is_full_screen(self) -> bool:
        return self.as_tuple() == (0.0, 0.0, 1.0, 1.0)

    def lerp(self, other: "ViewportRect", t: float) -> "ViewportRect":
        """成分ごとの線形補間（`t` は [0, 1] に丸め、結果も [0, 1] に丸める）。"""
        t = clamp01(t)
        a = np.asarray(self.as_tuple(), dtype=np.float64)
        b = np.asarray(other.as_tuple(), dtype=np.float64)
        out = np.clip(a + (b - a) * t, 0.0, 1.0)
        return ViewportRect(*(float(v) for v in out))

    def to_pixels(self, width: int, height: int) -> tuple[int, int, int, int]:
        """ピクセル単位の GL ビューポート `(x, y, w, h)` を返す。

        幅/高さは対象が空でない限り 1px 以上、かつ対象からはみ出さない。
        """
        width, height = int(width), int(height)
        if width <= 0 or height <= 0:
            return (0, 0, 0, 0)
        px = min(width - 1, int(round(self.x * width)))
        py = min(height - 1, int(round(self.y * height)))
        pw = max(1, min(width - px, int(round(self.width * width))))
        ph = max(1, min(height - py, int(round(self.height * height))))
        return (px, py, pw, ph)


FULL_SCREEN = ViewportRect(0.0, 0.0, 1.0, 1.0)


def compute_viewport(
    screen_width: float,
    screen_height: float,
    force_ratio: AspectRatioLike,
    blend: float = 1.0,
    *,
    tolerance: float | None = None,
) -> ViewportRect:
    """画面と強制アスペクト比からビューポート矩形を計算する。

    Parameters
    ----------
    screen_width, screen_height : float
        描画面のサイズ（正値）。0 以下は `InvalidInputError`。
    force_ratio : AspectRatioLike
        強制アスペクト比。成分が正でなければ `InvalidInputError`。
    blend : float, default 1.0
        0 で全画面、1 で強制比率を完全適用。範囲外は [0, 1] に丸める。
    tolerance : float | None
        画面比と強制比の近似一致判定に使う相対許容誤差。

    Returns
    -------
    ViewportRect
        全成分が [0, 1] に収まる矩形。比率が一致する場合はブレンドに関わらず全画面。
    """
    sw, sh = float(screen_width), float(screen_height)
    if not (sw > 0.0 and sh > 0.0):
        raise InvalidInputError(f"screen size must be positive, got {screen_width}x{screen_height}")
    forced = AspectRatio.coerce(force_ratio).ratio
    t = clamp01(blend)

    screen_ratio = sw / sh
    if is_close(screen_ratio, forced, tolerance):
        return FULL_SCREEN

    if screen_ratio > forced:
        # 画面が横長 → 左右に帯（ピラーボックス）
        normalized_width = clamp01(forced / screen_ratio)
        target = ViewportRect((1.0 - normalized_width) * 0.5, 0.0, normalized_width, 1.0)
    else:
        # 画面が縦長 → 上下に帯（レターボックス）
        normalized_height = clamp01(screen_ratio / forced)
        target = ViewportRect(0.0, (1.0 - normalized_height) * 0.5, 1.0, normalized_height)

    if t == 0.0:
        return FULL_SCREEN
    return FULL_SCREEN.lerp(target, t)


def bar_regions(rect: ViewportRect) -> list[ViewportRect]:
    """ビューポート外側の帯領域（正規化矩形）を返す。面積 0 の帯は含めない。

    順序: 左, 右, 下, 上。
    """
    x, y, w, h = rect.as_tuple()
    right = x + w
    top = y + h
    candidates = [
        ViewportRect(0.0, 0.0, x, 1.0),
        ViewportRect(right, 0.0, 1.0 - right, 1.0),
        ViewportRect(x, 0.0, w, y),
        ViewportRect(x, top, w, 1.0 - top),
    ]
    return [r for r in candidates if r.width > 0.0 and r.height > 0.0]


__all__ = [
    "DEFAULT_RATIO_TOLERANCE",
    "AspectRatio",
    "AspectRatioLike",
    "ViewportRect",
    "FULL_SCREEN",
    "clamp01",
    "is_close",
    "compute_viewport",
    "bar_regions",
]
