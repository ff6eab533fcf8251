"""
どこで: `engine.core.frame_events`
何を: 「フレーム描画開始」イベントの購読/解除/発火と、解除を保証する `Subscription` ハンドル。
なぜ: レンダループ側（ホスト）とフレーム開始フックを疎結合にし、破棄経路を問わず購読を解除できるようにするため。

使用例:
    event = FrameBeginEvent()
    with event.subscribe(on_begin):
        event.emit([camera])   # on_begin([camera]) が呼ばれる
    # with を抜けると解除済み
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

FrameBeginCallback = Callable[[Sequence[Any]], None]

logger = logging.getLogger(__name__)


class Subscription:
    """購読ハンドル。`close()` は冪等で、コンテキストマネージャとしても使える。

    同一コールバックのハンドルはイベントごとに 1 つだけ存在する。
    """

    __slots__ = ("_event", "_callback", "__weakref__")

    def __init__(self, event: "FrameBeginEvent", callback: FrameBeginCallback) -> None:
        self._event: FrameBeginEvent | None = event
        self._callback = callback

    @property
    def active(self) -> bool:
        return self._event is not None

    @property
    def callback(self) -> FrameBeginCallback:
        return self._callback

    def close(self) -> None:
        event = self._event
        if event is not None:
            event.unsubscribe(self._callback)

    def _detach(self) -> None:
        self._event = None

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def __repr__(self) -> str:
        return f"Subscription(callback={self._callback!r}, active={self.active})"


class FrameBeginEvent:
    """フレーム開始時に呼ぶコールバック列（登録順に呼び出す）。"""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def _find(self, callback: FrameBeginCallback) -> Subscription | None:
        for sub in self._subscriptions:
            if sub.callback == callback:
                return sub
        return None

    def subscribe(self, callback: FrameBeginCallback) -> Subscription:
        """コールバックを登録し、解除用のハンドルを返す。

        登録済みの関数なら新たに登録せず、既存のハンドルをそのまま返す。
        """
        existing = self._find(callback)
        if existing is not None:
            return existing
        sub = Subscription(self, callback)
        self._subscriptions.append(sub)
        return sub

    def unsubscribe(self, callback: FrameBeginCallback) -> None:
        """登録を解除する。未登録なら何もしない。"""
        sub = self._find(callback)
        if sub is None:
            return
        self._subscriptions.remove(sub)
        sub._detach()

    def is_subscribed(self, callback: FrameBeginCallback) -> bool:
        return self._find(callback) is not None

    def emit(self, cameras: Sequence[Any] = ()) -> None:
        """登録済みコールバックを順に呼ぶ。

        呼び出し中の解除に備えてスナップショットを走査する（解除済みのものは飛ばす）。
        """
        for sub in tuple(self._subscriptions):
            if not sub.active:
                continue
            sub.callback(cameras)

    def clear(self) -> None:
        if self._subscriptions:
            logger.debug("dropping %d frame-begin callback(s)", len(self._subscriptions))
        subs, self._subscriptions = self._subscriptions, []
        for sub in subs:
            sub._detach()

    def __len__(self) -> int:
        return len(self._subscriptions)


__all__ = ["FrameBeginCallback", "FrameBeginEvent", "Subscription"]
