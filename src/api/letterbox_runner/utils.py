"""
どこで: `api.letterbox_runner.utils`（純粋関数/小ヘルパ）。
何を: FPS/ウィンドウサイズ/レターボックス設定の解決と、キー操作による設定変更を提供。
なぜ: `api.letterbox` を薄く保ち、テスト容易性と再利用性を上げるため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from engine.core.viewport import AspectRatio, AspectRatioLike, clamp01
from util.color import RGBA, normalize_color

# キー 1..4 に割り当てるアスペクト比プリセット
ASPECT_PRESETS: tuple[AspectRatio, ...] = (
    AspectRatio(21, 9),
    AspectRatio(16, 9),
    AspectRatio(4, 3),
    AspectRatio(1, 1),
)
BLEND_STEP = 0.1
DEFAULT_CONTENT_COLOR: RGBA = (0.227, 0.431, 0.647, 1.0)


@dataclass(frozen=True)
class LetterboxOptions:
    """ランナー起動時に確定したレターボックス設定。"""

    force_aspect_ratio: AspectRatio
    blend: float
    bar_color: RGBA
    content_color: RGBA


def _load_cfg() -> dict[str, Any]:
    try:
        from util.utils import load_config
    except ImportError:  # pragma: no cover - yaml 未導入
        return {}
    cfg = load_config()
    return cfg if isinstance(cfg, dict) else {}


def _section(cfg: dict[str, Any], name: str) -> dict[str, Any]:
    sec = cfg.get(name, {})
    return sec if isinstance(sec, dict) else {}


def resolve_fps(requested_fps: int | None, *, default: int | None = None) -> int:
    """FPS を解決して 1 以上の int を返す。

    - 明示指定があればそれを優先（数値化できない/<=0 は既定へ）。
    - それ以外は設定ファイル（`canvas_controller.fps`）から読み取り、失敗時は既定値。
    - 既定値は `common.settings` の `DEFAULT_FPS`（`LBX_FPS`）。
    """
    if default is None:
        from common.settings import get as _get_settings

        default = _get_settings().DEFAULT_FPS
    if requested_fps is not None:
        try:
            return max(1, int(requested_fps))
        except (TypeError, ValueError):
            return max(1, int(default))
    ccfg = _section(_load_cfg(), "canvas_controller")
    try:
        return max(1, int(ccfg.get("fps", default)))
    except (TypeError, ValueError):
        return max(1, int(default))


def resolve_window_size(window_size: tuple[int, int] | None) -> tuple[int, int]:
    """ウィンドウサイズ [px] を解決する。

    - 明示指定 `(width, height)` は正であることを検証（不正は `ValueError`）
    - 未指定は設定ファイル `window.width/height`、無ければ 1280x720
    """
    if window_size is None:
        wcfg = _section(_load_cfg(), "window")
        window_size = (wcfg.get("width", 1280), wcfg.get("height", 720))
    try:
        w, h = int(window_size[0]), int(window_size[1])
    except (TypeError, ValueError, IndexError) as e:
        raise ValueError(f"invalid window_size: {window_size!r}") from e
    if w <= 0 or h <= 0:
        raise ValueError(f"window_size must be positive, got: {(w, h)}")
    return w, h


def resolve_letterbox_options(
    *,
    force_aspect_ratio: AspectRatioLike | None = None,
    blend: float | None = None,
    bar_color: object | None = None,
    content_color: object | None = None,
) -> LetterboxOptions:
    """引数 > 設定ファイル > 既定値 の順でレターボックス設定を確定する。

    不正なアスペクト比は `InvalidInputError`、不正な色は `ValueError`。
    """
    cfg = _load_cfg()
    lcfg = _section(cfg, "letterbox")
    wcfg = _section(cfg, "window")

    ratio_src = force_aspect_ratio if force_aspect_ratio is not None else lcfg.get(
        "force_aspect_ratio", ASPECT_PRESETS[0]
    )
    blend_src = blend if blend is not None else lcfg.get("blend", 1.0)
    bar_src = bar_color if bar_color is not None else lcfg.get("bar_color", (0.0, 0.0, 0.0, 1.0))
    content_src = (
        content_color if content_color is not None else wcfg.get("content_color", DEFAULT_CONTENT_COLOR)
    )
    try:
        blend_val = clamp01(float(blend_src))
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid blend: {blend_src!r}") from e
    return LetterboxOptions(
        force_aspect_ratio=AspectRatio.coerce(ratio_src),
        blend=blend_val,
        bar_color=normalize_color(bar_src),
        content_color=normalize_color(content_src),
    )


def step_blend(current: float, direction: int, *, step: float = BLEND_STEP) -> float:
    """ブレンドを `direction`（+1/-1）方向に 1 段階動かす（[0, 1] に丸め、小数誤差を丸める）。"""
    return round(clamp01(float(current) + step * (1 if direction > 0 else -1)), 6)


def preset_for_index(index: int) -> AspectRatio | None:
    """0 始まりの番号に対応するプリセット（範囲外は None）。"""
    if 0 <= index < len(ASPECT_PRESETS):
        return ASPECT_PRESETS[index]
    return None


__all__ = [
    "ASPECT_PRESETS",
    "BLEND_STEP",
    "DEFAULT_CONTENT_COLOR",
    "LetterboxOptions",
    "resolve_fps",
    "resolve_window_size",
    "resolve_letterbox_options",
    "step_blend",
    "preset_for_index",
]
