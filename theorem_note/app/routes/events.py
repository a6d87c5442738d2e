"""
Events Routes: 백엔드 알림을 표시 계층으로 전달 (SSE).

- GET /api/events → text/event-stream

프레임:
- event: ready              (구독 시작 직후 한 번)
- event: font-settings-updated  (data: 저장된 폰트 설정)
- event: heartbeat          (이벤트 없이 heartbeat 간격이 지나면)
"""

import asyncio
import json
import queue
from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from theorem_note.core.events import EventBus
from theorem_note.domain.constants import EVENT_FONT_SETTINGS_UPDATED

api_router = APIRouter()

STREAMED_EVENTS = (EVENT_FONT_SETTINGS_UPDATED,)
HEARTBEAT_INTERVAL = 30.0


def format_sse(event: str, data: Any) -> str:
    """SSE 프레임 한 개."""
    return f"event: {event}\ndata: {json.dumps(data, ensure_ascii=False)}\n\n"


async def event_frames(
    events: EventBus,
    is_disconnected: Callable[[], Awaitable[bool]],
    heartbeat_interval: float = HEARTBEAT_INTERVAL,
) -> AsyncGenerator[str, None]:
    """
    구독한 이벤트를 SSE 프레임으로 변환.

    Args:
        events: 이벤트 버스
        is_disconnected: 클라이언트 연결 종료 확인
        heartbeat_interval: 이벤트가 없을 때 heartbeat 간격 (초)
    """
    with events.subscription(*STREAMED_EVENTS) as received:
        yield format_sse("ready", {"events": list(STREAMED_EVENTS)})

        while not await is_disconnected():
            try:
                event, payload = await asyncio.to_thread(
                    received.get, True, heartbeat_interval
                )
            except queue.Empty:
                yield format_sse("heartbeat", {})
                continue
            yield format_sse(event, payload)


@api_router.get("")
async def stream_events(request: Request) -> StreamingResponse:
    """이벤트 스트림 (연결마다 별도 구독)."""
    events = request.app.state.workspace.events

    return StreamingResponse(
        event_frames(events, request.is_disconnected),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )
