"""
どこで: `engine.core` の更新インターフェース。
何を: 1フレーム更新 `tick(dt)` を持つ `Tickable` Protocol（実行時チェック可能）。
なぜ: 入力チェックを行うコントローラ等を FrameClock から一様に扱い、登録時に取り違えを検出するため。
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Tickable(Protocol):
    """論理フレームごとに呼ばれる入力チェック/更新のインターフェース。"""

    def tick(self, dt: float) -> None:
        """前回呼び出しから `dt` 秒経過した時点の状態へ進める。"""
