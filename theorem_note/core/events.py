"""
Event bus: 표시 계층으로의 fire-and-forget 알림.

emit은 응답을 기다리지 않고, 리스너 예외는 로그만 남기고 삼킴.
subscription()은 연결별 큐로 이벤트를 받음 (SSE 스트림용).
"""

import logging
import queue
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventBus:
    """이벤트 이름 → 리스너 목록."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._mutex = threading.Lock()

    def subscribe(self, event: str, listener: Listener) -> None:
        with self._mutex:
            self._listeners.setdefault(event, []).append(listener)

    def unsubscribe(self, event: str, listener: Listener) -> None:
        with self._mutex:
            listeners = self._listeners.get(event, [])
            if listener in listeners:
                listeners.remove(listener)

    @contextmanager
    def subscription(self, *events: str) -> Iterator["queue.Queue[tuple[str, Any]]"]:
        """
        with 블록 동안 이벤트를 (이름, payload)로 큐에 적재.

        큐는 스레드 안전하며, 블록을 벗어나면 구독 해제.
        """
        received: "queue.Queue[tuple[str, Any]]" = queue.Queue()
        listeners = {
            event: (lambda payload, event=event: received.put((event, payload)))
            for event in events
        }
        for event, listener in listeners.items():
            self.subscribe(event, listener)
        try:
            yield received
        finally:
            for event, listener in listeners.items():
                self.unsubscribe(event, listener)

    def emit(self, event: str, payload: Any = None) -> int:
        """
        이벤트 발행.

        Returns:
            호출된 리스너 수
        """
        with self._mutex:
            listeners = list(self._listeners.get(event, []))

        for listener in listeners:
            try:
                listener(payload)
            except Exception:
                logger.exception(f"Listener for '{event}' failed")
        return len(listeners)
