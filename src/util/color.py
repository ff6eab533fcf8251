"""
どこで: `util.color`。
何を: バー色などの色指定を RGBA(0–1) に正規化（Hex, RGBA 0–1, RGBA 0–255）。
なぜ: 設定ファイル/API/キー操作で同一の受理仕様とエラーメッセージを提供するため。
"""

from __future__ import annotations

from typing import Sequence

RGBA = tuple[float, float, float, float]

OPAQUE_BLACK: RGBA = (0.0, 0.0, 0.0, 1.0)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def parse_hex_color_str(s: str) -> RGBA:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        channels = [int(t[i : i + 2], 16) for i in range(0, len(t), 2)]
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = (c / 255.0 for c in channels)
    return (r, g, b, a)


def normalize_color(value: object) -> RGBA:
    """色を RGBA(0–1) へ正規化する。

    - 受理: Hex 文字列, (r,g,b[,a]) （全要素が 0–1 ならそのまま、それ以外は 0–255 とみなす）
    - 返値: (r,g,b,a) （0–1）
    """
    if isinstance(value, str):
        return parse_hex_color_str(value)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"unsupported color type: {type(value)!r}")
    seq: Sequence[object] = value
    if len(seq) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        comps = [float(c) for c in seq]  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    if len(comps) == 3:
        comps.append(1.0 if all(0.0 <= c <= 1.0 for c in comps) else 255.0)
    if all(0.0 <= c <= 1.0 for c in comps):
        r, g, b, a = (_clamp01(c) for c in comps)
        return (r, g, b, a)
    # 0–255 とみなし、整数丸め → 0–1 へスケール
    r8, g8, b8, a8 = (max(0, min(255, int(round(c)))) for c in comps)
    return (r8 / 255.0, g8 / 255.0, b8 / 255.0, a8 / 255.0)


def to_u8_rgba(value: object) -> tuple[int, int, int, int]:
    """色を RGBA(0–255) へ変換する（ログ表示用）。"""
    r, g, b, a = normalize_color(value)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), int(round(a * 255)))


def to_hex(value: object) -> str:
    """色を `#RRGGBBAA` 文字列へ変換する。"""
    return "#{:02X}{:02X}{:02X}{:02X}".format(*to_u8_rgba(value))


__all__ = [
    "RGBA",
    "OPAQUE_BLACK",
    "parse_hex_color_str",
    "normalize_color",
    "to_u8_rgba",
    "to_hex",
]
