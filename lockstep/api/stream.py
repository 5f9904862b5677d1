"""Server-sent events endpoint."""
from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import APIRouter, Request
from sse_starlette.sse import EventSourceResponse

from ..core.events import EventHub

router = APIRouter(tags=["stream"])


async def event_stream(hub: EventHub) -> AsyncIterator[dict[str, str]]:
    """Yield one SSE record per label delivered to this connection.

    Disconnects and shutdown cancel the pending ``get``; leaving ``listen``
    unregisters the subscriber on every exit path.
    """

    async with hub.listen() as subscriber:
        while True:
            label = await subscriber.get()
            yield {"event": label, "data": label}


@router.get("/events-stream")
async def stream_events(request: Request) -> EventSourceResponse:
    """Subscribe to playhead change notifications."""

    hub: EventHub = request.app.state.hub
    return EventSourceResponse(
        event_stream(hub),
        headers={"Cache-Control": "no-cache"},
        ping=request.app.state.settings.ping_seconds,
    )
