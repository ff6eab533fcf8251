"""
どこで: `engine.core.errors`
何を: レターボックス制御で使う例外階層（入力不正/カメラ欠落）。
なぜ: 呼び出し側が `LetterboxError` 一つで捕捉でき、かつ `ValueError` 互換も保つため。
"""

from __future__ import annotations


class LetterboxError(Exception):
    """レターボックス/ピラーボックス制御の基底例外。"""


class InvalidInputError(LetterboxError, ValueError):
    """画面サイズやアスペクト比の成分が正でない場合に送出される。"""


class MissingCameraError(LetterboxError):
    """制御対象のカメラがホストから得られない場合の例外。

    実行時は送出せず、ログ報告（1 回のみ）に使う。
    """

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "no camera attached; attach a camera to enable the letterbox/pillarbox controller"
        )


__all__ = ["LetterboxError", "InvalidInputError", "MissingCameraError"]
